"""
Storage Package

Modules:
    model_file: The fixed binary model format
"""

from evopredict.storage.model_file import decode_model, encode_model, read_model, write_model

__all__ = ['decode_model',
           'encode_model',
           'read_model',
           'write_model']

"""
Run Package

Modules:
    config: Config class (INI configuration for building networks)
"""

from evopredict.run.config import Config

__all__ = ['Config']

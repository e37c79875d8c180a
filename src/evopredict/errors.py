"""
Error Types

Exceptions raised by the model file codec and by network construction.
All of them mean the model cannot be used; none of them is worth retrying.

Classes:
    EvopredictError:      Base class for all package errors
    ModelIOError:         The model file could not be opened, read or written
    MalformedHeaderError: The model header is missing its sentinel or is corrupt
    SizeMismatchError:    The model body does not match the size declared by the header
    ConstructionError:    A parallel map generation task failed
"""

class EvopredictError(Exception):
    """
    Base class for all errors raised by this package.
    """

class ModelIOError(EvopredictError):
    """
    The model file could not be opened, read or written.
    The original OSError is available as '__cause__'.
    """

class MalformedHeaderError(EvopredictError):
    """
    The model header is truncated, has no sentinel, or declares a zero-sized layer.
    """

class SizeMismatchError(EvopredictError):
    """
    The model body is not exactly as long as the header says it must be.

    Public Attributes:
        expected: Body length (in bytes) implied by the header
        actual:   Body length (in bytes) actually present
    """

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Model body should be {expected} bytes long, found {actual} bytes")
        self.expected: int = expected
        self.actual  : int = actual

class ConstructionError(EvopredictError):
    """
    Generating one of the network's maps failed; no network is returned.
    """

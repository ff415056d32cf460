"""Exceptions raised on programmer misuse.

Malformed subtitle input is never raised; it is reported as ``Problem`` data.
"""


class SrtConformError(Exception):
    """Base class for exceptions in this package."""
    pass


class SerializationError(SrtConformError, ValueError):
    """Raised when records cannot be written out as SRT."""
    pass

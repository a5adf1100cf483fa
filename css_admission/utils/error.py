"""Error utility for CSS Admission."""

class CSSAdmissionError(Exception):
    """Base exception for CSS Admission."""
    pass

class ValidationError(CSSAdmissionError):
    """Raised when validation cannot be completed."""
    pass

class BufferBuildError(ValidationError):
    """Raised when a scan buffer could not be built.

    Never escapes a validator; it is turned into a rejection.
    """
    pass

class FileOperationError(CSSAdmissionError):
    """Raised when file operations fail."""
    pass

class ConfigurationError(CSSAdmissionError):
    """Raised when configuration is invalid."""
    pass

# Exported exceptions
__all__ = [
    'CSSAdmissionError',
    'ValidationError',
    'BufferBuildError',
    'FileOperationError',
    'ConfigurationError',
]

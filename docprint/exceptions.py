"""
Exceptions for consistent error handling across docprint.

Every error raised by the facade derives from DocPrintError. The concrete
classes also derive from the matching builtin so callers that only know
about TypeError, AttributeError or OSError keep working.
"""


class DocPrintError(Exception):
    """Base exception for all docprint errors."""
    pass


class ConfigurationError(DocPrintError):
    """
    Raised when a configuration value is invalid.

    Example:
        Setting page_orientation to anything other than 'P' or 'L'.
    """
    pass


class ConfigurationTypeError(ConfigurationError, TypeError):
    """
    Raised when the reserved 'renderer' key is assigned an object that is
    not an instance of the concrete renderer class.
    """
    pass


class UnknownOperationError(DocPrintError, AttributeError):
    """Raised when a forwarded call names an operation the renderer does not expose."""
    pass


class RenderIOError(DocPrintError, OSError):
    """Raised when the renderer cannot write its output (disk full, bad path, ...)."""
    pass

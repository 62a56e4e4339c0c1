"""Exceptions raised by docfeed."""


class DocfeedError(Exception):
    """Base exception for docfeed errors."""


class ConfigurationError(DocfeedError):
    """Raised when a component cannot be set up, e.g. an unusable proxy binding."""


class InvalidArgument(DocfeedError, ValueError):
    """Raised when a domain or proxy value fails a validity check."""


class NullArgument(DocfeedError, TypeError):
    """Raised when a required argument is None."""


class ResponseStateError(DocfeedError, RuntimeError):
    """Raised when a response is modified after it has already responded."""

"""
Exceptions raised when building or querying a radial earth model.

The option errors subclass the matching builtin (ValueError or TypeError) so
callers that only care about the broad category can catch those instead.
"""


class ModelError(Exception):
    """Base class for all radial earth model errors."""


class InvalidOptionError(ModelError, ValueError):
    """An option name is not recognised."""


class OptionTypeError(ModelError, TypeError):
    """An option value has the wrong type or shape."""


class DomainError(ModelError, ValueError):
    """A depth or range value lies outside the model depth domain."""

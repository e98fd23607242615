"""Domain errors shared by the response helpers and the CLI."""

from .errors import ConversionError, FunctionResponseError, ValidationError

__all__ = [
    "FunctionResponseError",
    "ValidationError",
    "ConversionError",
]

"""Error taxonomy for response building."""

from dataclasses import dataclass


@dataclass(slots=True)
class FunctionResponseError(Exception):
    """Base class for failures while building a response."""

    message: str
    code: str

    def __str__(self) -> str:
        return self.message


class ValidationError(FunctionResponseError):
    """Raised when a required identifier or GVK is missing."""


@dataclass(slots=True)
class ConversionError(FunctionResponseError):
    """Raised when a resource body cannot be converted to a structured value."""

    source_type: str = ""  # name of the type that failed to convert

"""
Resource helpers: structured-value conversion and the inputs accepted by the
desired-state setters.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .domain.errors import ConversionError


class DesiredReady(Enum):
    """Whether a function considers a desired composed resource ready"""

    UNSPECIFIED = "unspecified"
    FALSE = "false"
    TRUE = "true"


@dataclass(frozen=True)
class GroupVersionKind:
    """Group, version and kind of a resource type"""

    group: str = ""
    version: str = ""
    kind: str = ""

    def empty(self) -> bool:
        return not (self.group or self.version or self.kind)

    def group_version(self) -> str:
        """Return the apiVersion string, e.g. ``apps/v1`` or ``v1`` for the core group."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> "GroupVersionKind":
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind)


@dataclass
class Composite:
    """A composite resource and its connection details"""

    resource: Any = field(default_factory=dict)
    connection_details: Dict[str, bytes] = field(default_factory=dict)


@dataclass
class DesiredComposed:
    """A desired composed resource and its readiness"""

    resource: Any = field(default_factory=dict)
    ready: DesiredReady = DesiredReady.UNSPECIFIED


def as_struct(obj: Any) -> Dict[str, Any]:
    """
    Convert a resource body to a JSON-compatible structured value.

    Accepts any mapping with string keys or a pydantic model. Nested values
    are converted the way pydantic serializes them to JSON (datetimes become
    ISO strings, enums their values, and so on).

    Raises:
        ConversionError: the object is not a mapping or model, or holds a value
            that has no JSON representation.
    """
    source_type = type(obj).__name__
    try:
        if isinstance(obj, BaseModel):
            struct = obj.model_dump(by_alias=True, exclude_none=True, mode="json")
        elif isinstance(obj, Mapping):
            struct = to_jsonable_python(dict(obj))
        else:
            raise TypeError(f"{source_type} is not a mapping")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise ConversionError(
            f"cannot convert {source_type} to struct: {e}",
            "conversion_failed",
            source_type,
        ) from e

    return struct


def from_struct(struct: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a plain, independent copy of a structured value."""
    if struct is None:
        return {}
    return copy.deepcopy(dict(struct))

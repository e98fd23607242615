"""
Pydantic models for the RunFunction request/response messages.

Field names follow Python conventions; aliases carry the camelCase names used
on the wire, so ``model_dump(by_alias=True, mode="json")`` produces the same
JSON document the orchestrator exchanges with a function.

Optional sections default to ``None``. The ``ensure_*`` accessors allocate a
section on first use and otherwise return the existing one unchanged; callers
that write into a nested container go through them instead of assigning.
"""

from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


class Ready(str, Enum):
    """Readiness of a desired composed resource"""

    READY_UNSPECIFIED = "READY_UNSPECIFIED"
    READY_TRUE = "READY_TRUE"
    READY_FALSE = "READY_FALSE"


class Severity(str, Enum):
    """Severity of a result"""

    SEVERITY_UNSPECIFIED = "SEVERITY_UNSPECIFIED"
    SEVERITY_FATAL = "SEVERITY_FATAL"
    SEVERITY_WARNING = "SEVERITY_WARNING"
    SEVERITY_NORMAL = "SEVERITY_NORMAL"


class RequestMeta(BaseModel):
    """Metadata sent with a request"""

    tag: str = ""


class ResponseMeta(BaseModel):
    """Metadata returned with a response"""

    model_config = ConfigDict(populate_by_name=True)

    tag: str = ""
    ttl: Optional[timedelta] = None  # how long the response may be cached

    @field_validator("ttl", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        # Durations travel as "<seconds>s", e.g. "60s" or "0.5s"
        if isinstance(value, str) and value.endswith("s"):
            return timedelta(seconds=float(value[:-1]))
        return value

    @field_serializer("ttl", when_used="json")
    def _format_duration(self, ttl: Optional[timedelta]) -> Optional[str]:
        if ttl is None:
            return None
        seconds = ttl.total_seconds()
        if seconds.is_integer():
            return f"{int(seconds)}s"
        return f"{seconds:.9f}".rstrip("0") + "s"


class Resource(BaseModel):
    """A resource body plus the data carried alongside it"""

    model_config = ConfigDict(
        populate_by_name=True, ser_json_bytes="base64", val_json_bytes="base64"
    )

    resource: Dict[str, Any] = Field(default_factory=dict)
    connection_details: Optional[Dict[str, bytes]] = Field(None, alias="connectionDetails")
    ready: Ready = Ready.READY_UNSPECIFIED


class State(BaseModel):
    """Observed or desired state of a composite and its composed resources"""

    composite: Optional[Resource] = None
    resources: Optional[Dict[str, Resource]] = None  # keyed by composed resource name

    def ensure_resources(self) -> Dict[str, Resource]:
        if self.resources is None:
            self.resources = {}
        return self.resources


class MatchLabels(BaseModel):
    """Label set a selected resource must carry"""

    labels: Dict[str, str] = Field(default_factory=dict)


class ResourceSelector(BaseModel):
    """Selects extra resources by API version and kind, plus name or labels"""

    model_config = ConfigDict(populate_by_name=True)

    api_version: str = Field(..., alias="apiVersion")
    kind: str
    match_name: Optional[str] = Field(None, alias="matchName")
    match_labels: Optional[MatchLabels] = Field(None, alias="matchLabels")

    @model_validator(mode="after")
    def _single_match(self) -> "ResourceSelector":
        if self.match_name is not None and self.match_labels is not None:
            raise ValueError("a resource selector matches by name or by labels, not both")
        return self


class Requirements(BaseModel):
    """Resources a function needs the orchestrator to fetch for it"""

    model_config = ConfigDict(populate_by_name=True)

    extra_resources: Optional[Dict[str, ResourceSelector]] = Field(None, alias="extraResources")

    def ensure_extra_resources(self) -> Dict[str, ResourceSelector]:
        if self.extra_resources is None:
            self.extra_resources = {}
        return self.extra_resources


class Result(BaseModel):
    """Diagnostic reported by a function"""

    severity: Severity
    message: str


class RunFunctionRequest(BaseModel):
    """Request sent by the orchestrator to a function"""

    model_config = ConfigDict(populate_by_name=True)

    meta: Optional[RequestMeta] = None
    observed: Optional[State] = None
    desired: Optional[State] = None
    input: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None

    @property
    def tag(self) -> str:
        return self.meta.tag if self.meta is not None else ""


class RunFunctionResponse(BaseModel):
    """Response returned by a function to the orchestrator"""

    model_config = ConfigDict(populate_by_name=True)

    meta: Optional[ResponseMeta] = None
    desired: Optional[State] = None
    results: Optional[List[Result]] = None
    context: Optional[Dict[str, Any]] = None
    requirements: Optional[Requirements] = None

    def ensure_desired(self) -> State:
        if self.desired is None:
            self.desired = State()
        return self.desired

    def ensure_context(self) -> Dict[str, Any]:
        if self.context is None:
            self.context = {}
        return self.context

    def ensure_requirements(self) -> Requirements:
        if self.requirements is None:
            self.requirements = Requirements()
        return self.requirements

    def ensure_results(self) -> List[Result]:
        if self.results is None:
            self.results = []
        return self.results

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON document sent back to the orchestrator."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

"""
fnresponse

Helpers for building the responses a composition function returns to its
orchestrator, plus a small CLI for preparing and inspecting them.
"""

__version__ = "0.1.0"

from .domain.errors import ConversionError, FunctionResponseError, ValidationError
from .models import (
    MatchLabels,
    Ready,
    RequestMeta,
    Requirements,
    Resource,
    ResourceSelector,
    ResponseMeta,
    Result,
    RunFunctionRequest,
    RunFunctionResponse,
    Severity,
    State,
)
from .resource import (
    Composite,
    DesiredComposed,
    DesiredReady,
    GroupVersionKind,
    as_struct,
    from_struct,
)
from .response import (
    DEFAULT_TTL,
    fatal,
    normal,
    normalf,
    ready_to_proto,
    request_extra_resource_by_labels,
    request_extra_resource_by_name,
    set_context_key,
    set_desired_composed_resources,
    set_desired_composite_resource,
    to,
    warning,
)

__all__ = [
    "__version__",
    "FunctionResponseError",
    "ValidationError",
    "ConversionError",
    "RunFunctionRequest",
    "RunFunctionResponse",
    "RequestMeta",
    "ResponseMeta",
    "State",
    "Resource",
    "Requirements",
    "ResourceSelector",
    "MatchLabels",
    "Result",
    "Ready",
    "Severity",
    "Composite",
    "DesiredComposed",
    "DesiredReady",
    "GroupVersionKind",
    "as_struct",
    "from_struct",
    "DEFAULT_TTL",
    "to",
    "set_context_key",
    "set_desired_composite_resource",
    "set_desired_composed_resources",
    "ready_to_proto",
    "request_extra_resource_by_name",
    "request_extra_resource_by_labels",
    "fatal",
    "warning",
    "normal",
    "normalf",
]

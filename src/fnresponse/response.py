"""
Helpers for building RunFunctionResponses.

A function bootstraps its response from the request with :func:`to`, then
mutates it with the setters below before handing it back to the transport.
Setters never discard data already in the response: missing sections are
allocated on first write and existing entries are kept unless the caller
writes the same key again.

A response belongs to a single request and is not safe to share between
threads.
"""

from datetime import timedelta
from typing import Any, Dict, Mapping, Optional, Union

from .domain.errors import ConversionError, ValidationError
from .models import (
    MatchLabels,
    Ready,
    Resource,
    ResourceSelector,
    ResponseMeta,
    Result,
    RunFunctionRequest,
    RunFunctionResponse,
    Severity,
)
from .resource import (
    Composite,
    DesiredComposed,
    DesiredReady,
    GroupVersionKind,
    as_struct,
    from_struct,
)

# Default time for which a response can be cached
DEFAULT_TTL = timedelta(minutes=1)

_READY = {
    DesiredReady.UNSPECIFIED: Ready.READY_UNSPECIFIED,
    DesiredReady.FALSE: Ready.READY_FALSE,
    DesiredReady.TRUE: Ready.READY_TRUE,
}


def to(req: RunFunctionRequest, ttl: timedelta = DEFAULT_TTL) -> RunFunctionResponse:
    """
    Bootstrap a response to the supplied request.

    The request's tag is echoed back and its desired state and context are
    copied forward by value, so later changes to the response never touch the
    request.
    """
    return RunFunctionResponse(
        meta=ResponseMeta(tag=req.tag, ttl=ttl),
        desired=req.desired.model_copy(deep=True) if req.desired is not None else None,
        context=from_struct(req.context) if req.context is not None else None,
    )


def set_context_key(rsp: RunFunctionResponse, key: str, value: Any) -> None:
    """Set ``key`` in the response context, replacing any existing value."""
    rsp.ensure_context()[key] = value


def set_desired_composite_resource(rsp: RunFunctionResponse, xr: Composite) -> None:
    """
    Set the desired composite resource in the supplied response.

    The caller must be sure to avoid overwriting desired state accumulated by
    previous functions in the pipeline, unless they intend to.

    Raises:
        ConversionError: ``xr.resource`` cannot be converted to a struct.
    """
    try:
        struct = as_struct(xr.resource)
    except ConversionError as e:
        raise ConversionError(
            f"cannot convert {e.source_type} to desired composite resource",
            e.code,
            e.source_type,
        ) from e

    rsp.ensure_desired().composite = Resource(
        resource=struct, connection_details=dict(xr.connection_details or {})
    )


def set_desired_composed_resources(
    rsp: RunFunctionResponse, dcds: Mapping[str, DesiredComposed]
) -> None:
    """
    Set the desired composed resources in the supplied response.

    Resources already in the response whose names are not in ``dcds`` are
    kept. The update is all-or-nothing: every resource is converted before
    any is written, so a conversion failure leaves the response unchanged.

    Raises:
        ConversionError: the first resource that cannot be converted.
    """
    converted: Dict[str, Resource] = {}
    for name, dcd in dcds.items():
        try:
            struct = as_struct(dcd.resource)
        except ConversionError as e:
            raise ConversionError(
                f"cannot convert {e.source_type} to desired composed resource {name!r}",
                e.code,
                e.source_type,
            ) from e
        converted[str(name)] = Resource(resource=struct, ready=ready_to_proto(dcd.ready))

    rsp.ensure_desired().ensure_resources().update(converted)


def ready_to_proto(ready: Optional[DesiredReady]) -> Ready:
    """Map a desired readiness to the response enum; anything unknown is unspecified."""
    if not isinstance(ready, DesiredReady):
        return Ready.READY_UNSPECIFIED
    return _READY[ready]


def _check_selector(what: str, request_id: str, gvk: GroupVersionKind) -> None:
    if gvk.empty():
        raise ValidationError(
            f"cannot request extra resource by {what} with empty GVK", "invalid_argument"
        )
    if not gvk.version or not gvk.kind:
        raise ValidationError(
            f"cannot request extra resource by {what} with incomplete GVK {gvk}",
            "invalid_argument",
        )
    if not request_id:
        raise ValidationError(
            f"cannot request extra resource by {what} with empty ID", "invalid_argument"
        )


def request_extra_resource_by_name(
    rsp: RunFunctionResponse, request_id: str, name: str, gvk: GroupVersionKind
) -> None:
    """
    Ask the orchestrator to supply the named resource under ``request_id``.

    Replaces any requirement previously registered under the same ID.

    Raises:
        ValidationError: ``gvk``, ``request_id`` or ``name`` is empty. The
            response is not modified.
    """
    _check_selector("name", request_id, gvk)
    if not name:
        raise ValidationError(
            "cannot request extra resource by name with empty name", "invalid_argument"
        )

    rsp.ensure_requirements().ensure_extra_resources()[request_id] = ResourceSelector(
        api_version=gvk.group_version(), kind=gvk.kind, match_name=name
    )


def request_extra_resource_by_labels(
    rsp: RunFunctionResponse,
    request_id: str,
    labels: Optional[Mapping[str, str]],
    gvk: GroupVersionKind,
) -> None:
    """
    Ask the orchestrator to supply resources matching ``labels`` under ``request_id``.

    An empty label set matches every resource of the given kind.

    Raises:
        ValidationError: ``gvk`` or ``request_id`` is empty. The response is not
            modified.
    """
    _check_selector("labels", request_id, gvk)

    rsp.ensure_requirements().ensure_extra_resources()[request_id] = ResourceSelector(
        api_version=gvk.group_version(),
        kind=gvk.kind,
        match_labels=MatchLabels(labels=dict(labels or {})),
    )


def _append_result(rsp: RunFunctionResponse, severity: Severity, message: Any) -> None:
    rsp.ensure_results().append(Result(severity=severity, message=str(message)))


def fatal(rsp: RunFunctionResponse, message: Union[str, BaseException]) -> None:
    """Add a fatal result. The orchestrator stops the pipeline on fatal results."""
    _append_result(rsp, Severity.SEVERITY_FATAL, message)


def warning(rsp: RunFunctionResponse, message: Union[str, BaseException]) -> None:
    """Add a warning result."""
    _append_result(rsp, Severity.SEVERITY_WARNING, message)


def normal(rsp: RunFunctionResponse, message: str) -> None:
    """Add a normal result."""
    _append_result(rsp, Severity.SEVERITY_NORMAL, message)


def normalf(rsp: RunFunctionResponse, template: str, *args: Any, **kwargs: Any) -> None:
    """Add a normal result built with ``template.format(*args, **kwargs)``."""
    try:
        message = template.format(*args, **kwargs)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
        # A bad template still produces a result
        message = f"{template} (bad format: {e!r}, args={args!r}, kwargs={kwargs!r})"
    normal(rsp, message)

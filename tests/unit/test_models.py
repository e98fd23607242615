"""Unit tests for the request/response models."""

import json
from datetime import timedelta

import pytest
from pydantic import ValidationError as SchemaValidationError

from fnresponse.models import (
    Ready,
    Resource,
    ResourceSelector,
    ResponseMeta,
    RunFunctionRequest,
    RunFunctionResponse,
)


def test_request_parses_wire_names(sample_request_data) -> None:
    req = RunFunctionRequest.model_validate(sample_request_data)

    assert req.tag == "abc"
    assert req.desired.resources["bucket"].ready == Ready.READY_TRUE
    assert req.observed.composite.resource["kind"] == "XWidget"
    assert req.context == {"previous": {"step": 1}}


def test_request_without_meta_has_empty_tag() -> None:
    assert RunFunctionRequest().tag == ""


@pytest.mark.parametrize(
    ("ttl", "wire"),
    [
        (timedelta(seconds=60), "60s"),
        (timedelta(minutes=5), "300s"),
        (timedelta(milliseconds=1500), "1.5s"),
        (timedelta(0), "0s"),
    ],
)
def test_ttl_wire_format(ttl, wire) -> None:
    meta = ResponseMeta(tag="t", ttl=ttl)

    assert meta.model_dump(mode="json")["ttl"] == wire
    assert ResponseMeta.model_validate_json(json.dumps({"ttl": wire})).ttl == ttl


def test_ttl_python_dump_keeps_timedelta() -> None:
    meta = ResponseMeta(ttl=timedelta(seconds=1))

    assert meta.model_dump()["ttl"] == timedelta(seconds=1)


def test_connection_details_are_base64_on_the_wire() -> None:
    resource = Resource(resource={"kind": "X"}, connection_details={"password": b"s3cret"})

    wire = resource.model_dump_json(by_alias=True)

    assert json.loads(wire)["connectionDetails"] == {"password": "czNjcmV0"}
    assert Resource.model_validate_json(wire).connection_details == {"password": b"s3cret"}


def test_selector_rejects_name_and_labels() -> None:
    with pytest.raises(SchemaValidationError):
        ResourceSelector.model_validate(
            {
                "apiVersion": "v1",
                "kind": "ConfigMap",
                "matchName": "a",
                "matchLabels": {"labels": {"x": "y"}},
            }
        )


def test_response_json_omits_unset_sections() -> None:
    rsp = RunFunctionResponse(meta=ResponseMeta(tag="abc", ttl=timedelta(seconds=60)))

    assert rsp.to_json_dict() == {"meta": {"tag": "abc", "ttl": "60s"}}


def test_response_round_trips_through_json() -> None:
    rsp = RunFunctionResponse.model_validate(
        {
            "meta": {"tag": "abc", "ttl": "30s"},
            "desired": {"resources": {"a": {"resource": {"kind": "A"}, "ready": "READY_FALSE"}}},
            "requirements": {
                "extraResources": {"cfg": {"apiVersion": "v1", "kind": "ConfigMap", "matchName": "c"}}
            },
            "results": [{"severity": "SEVERITY_WARNING", "message": "careful"}],
            "context": {"k": [1, 2]},
        }
    )

    again = RunFunctionResponse.model_validate_json(json.dumps(rsp.to_json_dict()))

    assert again == rsp
    assert again.meta.ttl == timedelta(seconds=30)

import json
from pathlib import Path

import pytest

from fnresponse.models import RunFunctionRequest


@pytest.fixture
def temp_workspace(tmp_path):
    """Create a temporary workspace directory"""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def sample_request_data():
    """Sample RunFunctionRequest as it arrives on the wire"""
    return {
        "meta": {"tag": "abc"},
        "observed": {
            "composite": {
                "resource": {
                    "apiVersion": "example.org/v1",
                    "kind": "XWidget",
                    "metadata": {"name": "widget"},
                }
            }
        },
        "desired": {
            "composite": {
                "resource": {
                    "apiVersion": "example.org/v1",
                    "kind": "XWidget",
                    "metadata": {"name": "widget"},
                }
            },
            "resources": {
                "bucket": {
                    "resource": {"apiVersion": "s3.example.org/v1", "kind": "Bucket"},
                    "ready": "READY_TRUE",
                }
            },
        },
        "context": {"previous": {"step": 1}},
    }


@pytest.fixture
def sample_request(sample_request_data) -> RunFunctionRequest:
    return RunFunctionRequest.model_validate(sample_request_data)


@pytest.fixture
def request_file(temp_workspace: Path, sample_request_data) -> Path:
    """Write the sample request to disk"""
    path = temp_workspace / "request.json"
    path.write_text(json.dumps(sample_request_data), encoding="utf-8")
    return path

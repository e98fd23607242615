"""
Reading and writing request/response documents as JSON files.
"""

import json
from pathlib import Path

from .models import RunFunctionRequest, RunFunctionResponse


def read_request(path: Path) -> RunFunctionRequest:
    """Read a RunFunctionRequest JSON file"""
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")

    # Connection details are base64 on the wire
    return RunFunctionRequest.model_validate_json(path.read_text(encoding="utf-8"))


def read_response(path: Path) -> RunFunctionResponse:
    """Read a RunFunctionResponse JSON file"""
    if not path.exists():
        raise FileNotFoundError(f"Response file not found: {path}")

    # Connection details are base64 on the wire
    return RunFunctionResponse.model_validate_json(path.read_text(encoding="utf-8"))


def write_response(path: Path, rsp: RunFunctionResponse) -> None:
    """Write a RunFunctionResponse JSON file, creating parent directories"""
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(rsp.to_json_dict(), f, indent=2)
        f.write("\n")

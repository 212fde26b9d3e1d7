"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from starlette.requests import Request

URLENCODED = "application/x-www-form-urlencoded"


def _build_request(body: bytes, content_type: str = URLENCODED) -> Request:
    """Build a POST request whose body is delivered in a single ASGI message."""
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/",
        "query_string": b"",
        "headers": [(b"content-type", content_type.encode("latin-1"))],
    }
    sent = False

    async def receive() -> dict[str, Any]:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Return a factory for form-encoded starlette requests."""
    return _build_request


@pytest.fixture
def make_upload_request() -> Callable[..., Request]:
    """Return a factory for multipart requests carrying one file part."""

    def factory(field: str, content: bytes, filename: str = "data.json") -> Request:
        boundary = "formlinkboundary"
        body = (
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
            "Content-Type: application/json\r\n"
            "\r\n"
        ).encode() + content + f"\r\n--{boundary}--\r\n".encode()
        return _build_request(body, f"multipart/form-data; boundary={boundary}")

    return factory


@pytest.fixture
def user_schema() -> dict[str, Any]:
    """A JSON Schema for a small nested signup form."""
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 3},
            "email": {"type": "string", "pattern": "^[^@]+@[^@]+$"},
            "age": {"type": "integer", "minimum": 18},
            "address": {
                "type": "object",
                "properties": {
                    "city": {"type": "string", "minLength": 1},
                    "zip": {"type": "string", "pattern": "^[0-9]{5}$"},
                },
                "required": ["city", "zip"],
            },
            "tags": {
                "type": "array",
                "items": {"type": "string", "maxLength": 5},
            },
        },
        "required": ["name", "email"],
    }


@pytest.fixture
def user_schema_path(tmp_path: Path, user_schema: dict[str, Any]) -> Path:
    """Write the signup schema to a temporary file."""
    path = tmp_path / "user.schema.json"
    path.write_text(json.dumps(user_schema))
    return path

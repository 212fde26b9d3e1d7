"""Reading and writing the form payload container.

A form payload carries a single JSON-serialized record under one key
(``"formData"`` by default). ``create_form_data`` builds the container on the
sending side; ``parse_form_data`` reads it back out of an incoming request.
"""

import json
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlencode

from starlette.datastructures import FormData

from formlink.config import DEFAULT_FORM_DATA_KEY
from formlink.errors import (
    FormDataParseError,
    FormDataSerializationError,
    FormDataTypeError,
    MissingFormDataError,
)


@runtime_checkable
class FormRequest(Protocol):
    """Anything that can hand over its form-encoded body.

    ``starlette.requests.Request`` (and so FastAPI's request) conforms.
    """

    async def form(self) -> Mapping[str, Any]:
        """Read and parse the request body as form data."""
        ...


async def parse_form_data(
    request: FormRequest,
    key: str = DEFAULT_FORM_DATA_KEY,
) -> Any:
    """Read the request's form body and decode the JSON record under ``key``.

    The request body is consumed by this call. Do not rely on a second call
    against the same request succeeding.

    Args:
        request: The incoming request.
        key: Form field holding the serialized record.

    Returns:
        The decoded JSON value.

    Raises:
        MissingFormDataError: If there is no (or an empty) value under ``key``.
        FormDataTypeError: If the value is not a string, e.g. an uploaded file.
        FormDataParseError: If the value is not valid JSON.
    """
    form = await request.form()
    value = form.get(key)

    if not value:
        raise MissingFormDataError(f"No form data found under key {key!r}")

    if not isinstance(value, str):
        raise FormDataTypeError(
            f"Form data under key {key!r} is not a string "
            f"(got {type(value).__name__})"
        )

    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise FormDataParseError(
            f"Invalid JSON in form data under key {key!r}: {e}"
        ) from e


def create_form_data(
    data: Any,
    key: str = DEFAULT_FORM_DATA_KEY,
) -> FormData:
    """Serialize ``data`` to JSON and wrap it in a form payload under ``key``.

    Raises:
        FormDataSerializationError: If ``data`` is not JSON-serializable
            (including circular references).
    """
    try:
        serialized = json.dumps(data)
    except (TypeError, ValueError) as e:
        raise FormDataSerializationError(
            f"Cannot serialize form data for key {key!r}: {e}"
        ) from e

    return FormData([(key, serialized)])


def encode_form_data(form: FormData) -> bytes:
    """Encode a form payload as an application/x-www-form-urlencoded body.

    Raises:
        FormDataTypeError: If the payload holds a file part, which cannot be
            url-encoded.
    """
    pairs = []
    for field, value in form.multi_items():
        if not isinstance(value, str):
            raise FormDataTypeError(
                f"Cannot url-encode non-string field {field!r} "
                f"(got {type(value).__name__})"
            )
        pairs.append((field, value))
    return urlencode(pairs).encode("utf-8")

"""Tests for form payload creation, encoding and parsing."""

import io
import json
from typing import Any

import pytest
from starlette.datastructures import FormData, UploadFile

from formlink.errors import (
    FormDataError,
    FormDataParseError,
    FormDataSerializationError,
    FormDataTypeError,
    MissingFormDataError,
)
from formlink.payload import (
    FormRequest,
    create_form_data,
    encode_form_data,
    parse_form_data,
)


class DictFormRequest:
    """Minimal request stand-in whose form body is a plain dict."""

    def __init__(self, form: dict[str, Any]) -> None:
        self._form = form
        self.reads = 0

    async def form(self) -> dict[str, Any]:
        self.reads += 1
        return self._form


class TestCreateFormData:
    """Tests for create_form_data."""

    def test_default_key(self) -> None:
        """Test that the record lands under 'formData' as JSON text."""
        form = create_form_data({"name": "Ada", "age": 36})

        assert isinstance(form, FormData)
        assert list(form.keys()) == ["formData"]
        assert json.loads(form["formData"]) == {"name": "Ada", "age": 36}

    def test_custom_key(self) -> None:
        """Test storing the record under a custom key."""
        form = create_form_data({"a": 1}, key="payload")

        assert "formData" not in form
        assert json.loads(form["payload"]) == {"a": 1}

    def test_single_value(self) -> None:
        """Test that exactly one value is written."""
        form = create_form_data({"items": [1, 2, 3]})
        assert len(form.multi_items()) == 1

    def test_circular_reference_raises(self) -> None:
        """Test that circular structures raise FormDataSerializationError."""
        data: dict[str, Any] = {"name": "loop"}
        data["self"] = data

        with pytest.raises(FormDataSerializationError) as exc_info:
            create_form_data(data)

        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.__cause__ is not None

    def test_unserializable_value_raises(self) -> None:
        """Test that non-JSON values raise FormDataSerializationError."""
        with pytest.raises(FormDataSerializationError, match="formData"):
            create_form_data({"tags": {"a", "b"}})


class TestEncodeFormData:
    """Tests for encode_form_data."""

    def test_urlencodes_json(self) -> None:
        """Test that the JSON value is percent-encoded."""
        body = encode_form_data(create_form_data({"q": "a b&c"}))

        assert body.startswith(b"formData=")
        assert b"&c" not in body
        assert b" " not in body

    def test_file_part_raises(self) -> None:
        """Test that file parts cannot be url-encoded."""
        upload = UploadFile(file=io.BytesIO(b"{}"), filename="data.json")
        form = FormData([("formData", upload)])

        with pytest.raises(FormDataTypeError, match="formData"):
            encode_form_data(form)


class TestParseFormData:
    """Tests for parse_form_data."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "record",
        [
            {"name": "Ada", "age": 36},
            {"address": {"city": "Paris", "zip": "75001"}, "tags": ["a", "b"]},
            {"unicode": "héllo ✓", "amp": "a&b=c", "nested": [{"x": None}]},
            [1, 2, 3],
        ],
    )
    async def test_round_trip(self, make_request, record: Any) -> None:
        """Test that parse(request(create(d))) == d."""
        request = make_request(encode_form_data(create_form_data(record)))
        assert await parse_form_data(request) == record

    @pytest.mark.asyncio
    async def test_custom_key(self, make_request) -> None:
        """Test reading from a custom key."""
        request = make_request(encode_form_data(create_form_data({"a": 1}, key="payload")))
        assert await parse_form_data(request, key="payload") == {"a": 1}

    @pytest.mark.asyncio
    async def test_missing_key_raises(self, make_request) -> None:
        """Test that an absent key raises MissingFormDataError."""
        request = make_request(b"other=1")

        with pytest.raises(MissingFormDataError) as exc_info:
            await parse_form_data(request)

        assert isinstance(exc_info.value, KeyError)
        assert "formData" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_empty_value_raises(self, make_request) -> None:
        """Test that an empty string is treated as missing."""
        request = make_request(b"formData=")

        with pytest.raises(MissingFormDataError):
            await parse_form_data(request)

    @pytest.mark.asyncio
    async def test_file_upload_raises(self, make_upload_request) -> None:
        """Test that a file part under the key raises FormDataTypeError."""
        request = make_upload_request("formData", b'{"name": "Ada"}')

        with pytest.raises(FormDataTypeError) as exc_info:
            await parse_form_data(request)

        assert isinstance(exc_info.value, TypeError)
        assert "UploadFile" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self, make_request) -> None:
        """Test that invalid JSON raises FormDataParseError chained to the decode error."""
        request = make_request(b"formData=%7Bnot-json")

        with pytest.raises(FormDataParseError) as exc_info:
            await parse_form_data(request)

        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    @pytest.mark.asyncio
    async def test_errors_share_base_class(self, make_request) -> None:
        """Test that all payload errors derive from FormDataError."""
        with pytest.raises(FormDataError):
            await parse_form_data(make_request(b""))

    @pytest.mark.asyncio
    async def test_duck_typed_request(self) -> None:
        """Test that any object with an async form() method is accepted."""
        request = DictFormRequest({"formData": '{"ok": true}'})

        assert isinstance(request, FormRequest)
        assert await parse_form_data(request) == {"ok": True}
        assert request.reads == 1

    @pytest.mark.asyncio
    async def test_non_string_value_from_duck_typed_request(self) -> None:
        """Test that non-string values raise FormDataTypeError."""
        request = DictFormRequest({"formData": b'{"ok": true}'})

        with pytest.raises(FormDataTypeError, match="bytes"):
            await parse_form_data(request)

"""Exceptions raised while reading and writing form payloads.

Resolver failures are not represented here: they propagate to the caller
exactly as the resolver raised them.
"""


class FormDataError(Exception):
    """Base class for form payload errors."""

    pass


class MissingFormDataError(FormDataError, KeyError):
    """Raised when the form body has no value under the requested key."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class FormDataTypeError(FormDataError, TypeError):
    """Raised when the value under the key is not text (e.g. a file upload)."""

    pass


class FormDataParseError(FormDataError, ValueError):
    """Raised when the value under the key is not valid JSON."""

    pass


class FormDataSerializationError(FormDataError, ValueError):
    """Raised when a record cannot be serialized into a form payload."""

    pass

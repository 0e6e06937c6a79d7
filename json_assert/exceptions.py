"""Errors raised when an assertion cannot be evaluated at all.

A failed assertion raises ``AssertionError`` and means the JSON did not match.
A ``JsonAssertError`` means the test itself is misconfigured: bad schema path,
broken ``$ref`` or malformed text.
"""
from typing import Optional


class JsonAssertError(Exception):
    """Base class for json_assert resource errors."""
    pass


class SchemaError(JsonAssertError):
    """A schema could not be turned into something the validator can use."""

    def __init__(self, message: str, uri: Optional[str] = None):
        super().__init__(message)
        self.uri = uri


class SchemaRetrievalError(SchemaError):
    """The schema document could not be read (missing file, HTTP failure)."""
    pass


class SchemaParseError(SchemaError):
    """The schema document is not valid JSON or not a schema."""
    pass


class SchemaResolutionError(SchemaError):
    """A ``$ref`` inside the schema does not resolve."""

    def __init__(self, message: str, ref: str, uri: Optional[str] = None):
        super().__init__(message, uri=uri)
        self.ref = ref


class JsonParseError(JsonAssertError, ValueError):
    """Text handed to :func:`json_assert.coercion.get_json_object` is not JSON."""

    def __init__(self, message: str, pos: Optional[int] = None):
        super().__init__(message)
        self.pos = pos

"""Assertions over ``requests.Response`` objects.

The JSON body is decoded with :func:`get_json_object` before delegating to the
plain assertions, so a non-JSON body raises JsonParseError.
"""
from typing import Any, Optional

import requests

from json_assert.assertions import JsonAssert, default_json_assert
from json_assert.coercion import get_json_object


def _body(response: requests.Response) -> Any:
    return get_json_object(response.text)


def assert_json_response(response: requests.Response, status_code: int = 200) -> None:
    """Assert the response has `status_code` and an application/json content type."""
    if response.status_code != status_code:
        raise AssertionError(
            f"Expected HTTP {status_code}, got {response.status_code} for {response.url}: {response.text[:500]}"
        )
    content_type = response.headers.get("Content-Type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type != "application/json":
        raise AssertionError(f"Expected Content-Type application/json, got {content_type or '<none>'!r}")


def assert_response_matches_schema(schema, response: requests.Response, json_assert: Optional[JsonAssert] = None) -> None:
    """Assert the JSON body of `response` is valid according to `schema`."""
    (json_assert or default_json_assert()).assert_json_matches_schema(schema, _body(response))


def assert_response_value_equals(expected: Any, expression: str, response: requests.Response,
                                 json_assert: Optional[JsonAssert] = None) -> None:
    """Assert the value found with `expression` in the JSON body equals `expected`."""
    (json_assert or default_json_assert()).assert_json_value_equals(expected, expression, _body(response))

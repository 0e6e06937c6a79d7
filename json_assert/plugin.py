"""pytest plugin exposing json_assert fixtures.

Registered through the ``pytest11`` entry point, so installing the package is
enough::

    def test_user(json_assert, api_response):
        json_assert.assert_json_matches_schema("schemas/user.json", api_response)
"""
import pytest

from json_assert.assertions import JsonAssert
from json_assert.config import load_settings


@pytest.fixture(scope="session")
def json_assert_settings():
    """Settings from json-assert.yaml / $JSON_ASSERT_CONFIG overlaid with env vars."""
    return load_settings()


@pytest.fixture
def json_assert(json_assert_settings):
    return JsonAssert(json_assert_settings)

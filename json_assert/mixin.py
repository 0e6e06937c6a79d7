import unittest
from typing import Any, Optional

from json_assert.assertions import JsonAssert
from json_assert.coercion import get_json_object
from json_assert.config import Settings, load_settings


class UnitTestJsonAssert(JsonAssert):
    """JsonAssert reporting failures through a unittest.TestCase."""

    def __init__(self, test_case: unittest.TestCase, **kwargs):
        super().__init__(**kwargs)
        self.test_case = test_case

    def _assert_true(self, condition, message):
        self.test_case.assertTrue(condition, message)

    def _assert_equal(self, expected, actual):
        self.test_case.assertEqual(expected, actual)


class JsonAssertMixin:
    """Mix into unittest.TestCase to get JSON assertions.

    Example:

        class UserApiTest(JsonAssertMixin, unittest.TestCase):
            def test_user(self):
                body = self.getJsonObject('{"foo": {"bar": [33]}}')
                self.assertJsonMatchesSchema("./schema.json", body)
                self.assertJsonValueEquals(33, "foo.bar[0]", body)

    Set ``json_assert_settings`` on the class to skip load_settings().
    """

    json_assert_settings: Optional[Settings] = None

    @property
    def json_assert(self) -> JsonAssert:
        ja = self.__dict__.get("_json_assert")
        if ja is None:
            settings = self.json_assert_settings or load_settings()
            ja = self.__dict__["_json_assert"] = UnitTestJsonAssert(self, settings=settings)
        return ja

    def assertJsonMatchesSchema(self, schema, content):
        self.json_assert.assert_json_matches_schema(schema, content)

    def assertJsonMatchesSchemaString(self, schema, content):
        self.json_assert.assert_json_matches_schema_string(schema, content)

    def assertJsonValueEquals(self, expected, expression, json_data):
        self.json_assert.assert_json_value_equals(expected, expression, json_data)

    def search(self, expression: str, data: Any) -> Any:
        return self.json_assert.search(expression, data)

    getJsonObject = staticmethod(get_json_object)

"""Assertions over deserialised JSON data.

All assert helpers expect deserialised JSON (dicts and lists), since the
deserialisation method should be up to the caller; :func:`get_json_object`
turns JSON text into such a structure.

Example::

    from json_assert import assert_json_matches_schema, assert_json_value_equals

    assert_json_matches_schema("tests/schemas/user.json", body)
    assert_json_value_equals(33, "foo.bar[0]", {"foo": {"bar": [33]}})
"""
import difflib
import json
import logging
import os
import pprint
import tempfile
from typing import Any, Iterable, Optional, Union

from json_assert.coercion import get_json_object
from json_assert.config import Settings, load_settings
from json_assert.kinds import kind_of
from json_assert.query import ExpressionEvaluator, JmesPathEvaluator
from json_assert.resolver import RefResolver, ResolvedSchema
from json_assert.schema_loader import UriRetriever, to_uri
from json_assert.validator import JsonSchemaValidator, SchemaValidator, ValidationError

logger = logging.getLogger(__name__)

# "Contraint" spelling is part of the message format, do not correct it.
FAILURE_LINE = "- Property: {property}, Contraint: {constraint}, Message: {message}"


def format_failure_message(errors: Iterable[ValidationError], content: Any) -> str:
    """One line per violation followed by the offending content as JSON."""
    lines = [FAILURE_LINE.format(property=e.property, constraint=e.constraint, message=e.message) for e in errors]
    lines.append("- Response: " + json.dumps(content, separators=(",", ":"), default=str))
    return "\n".join(lines)


def _diff(expected: Any, actual: Any) -> str:
    return "\n".join(difflib.ndiff(
        pprint.pformat(expected).splitlines(),
        pprint.pformat(actual).splitlines(),
    ))


class JsonAssert:
    """Schema and query assertions with injectable engines.

    Example:
        ja = JsonAssert()
        ja.assert_json_matches_schema("./schema.json", {"foo": 1})
        ja.assert_json_value_equals(33, "foo.bar[0]", {"foo": {"bar": [33]}})
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        validator: Optional[SchemaValidator] = None,
        evaluator: Optional[ExpressionEvaluator] = None,
        retriever: Optional[UriRetriever] = None,
    ):
        self.settings = settings or Settings()
        self.retriever = retriever or UriRetriever(self.settings)
        self.resolver = RefResolver(self.retriever, self.settings)
        self.validator = validator or JsonSchemaValidator(self.settings)
        self.evaluator = evaluator or JmesPathEvaluator()

    # failure channel; JsonAssertMixin routes these through unittest.TestCase

    def _assert_true(self, condition: bool, message: str) -> None:
        if not condition:
            raise AssertionError(message)

    def _assert_equal(self, expected: Any, actual: Any) -> None:
        if expected != actual:
            raise AssertionError(f"{actual!r} != {expected!r}\n{_diff(expected, actual)}")

    def _assert_same_kind(self, expected: Any, actual: Any) -> None:
        try:
            expected_kind, actual_kind = kind_of(expected), kind_of(actual)
        except TypeError as e:
            self._assert_true(False, f"Cannot compare JSON kinds of {expected!r} and {actual!r}: {e}")
            return
        self._assert_true(
            expected_kind is actual_kind,
            f"{actual!r} is of kind {actual_kind.value}, expected {expected_kind.value}",
        )

    def resolve_schema(self, schema: Union[str, os.PathLike]) -> ResolvedSchema:
        """Retrieve `schema` (path or URI) and check every $ref in it resolves."""
        uri = to_uri(schema)
        logger.debug(f"Resolving schema {uri}")
        return self.resolver.resolve(self.retriever.retrieve(uri), uri)

    def assert_json_matches_schema(self, schema: Union[str, os.PathLike], content: Any) -> None:
        """Assert that `content` is valid according to the schema file at `schema`.

        Raises SchemaRetrievalError, SchemaParseError or SchemaResolutionError
        when the schema itself is unusable.
        """
        resolved = self.resolve_schema(schema)
        outcome = self.validator.check(content, resolved)
        self._assert_true(outcome.valid, format_failure_message(outcome.errors, content))

    def assert_json_matches_schema_string(self, schema: str, content: Any) -> None:
        """Assert that `content` is valid according to the schema text `schema`."""
        with tempfile.NamedTemporaryFile(
            "w", prefix="json-schema-", suffix=".json", delete=False, encoding="utf-8"
        ) as f:
            f.write(schema)
        logger.debug(f"Wrote schema string to {f.name}")
        try:
            self.assert_json_matches_schema(f.name, content)
        finally:
            if self.settings.cleanup_temp_files:
                try:
                    os.remove(f.name)
                except OSError as e:
                    logger.warning(f"Could not remove temporary schema {f.name}: {e}")

    def assert_json_value_equals(self, expected: Any, expression: str, json_data: Any) -> None:
        """Assert that the value retrieved with `expression` equals `expected`.

        The values must also be of the same JSON kind, so ``"1"`` never
        equals ``1`` and ``True`` never equals ``1``.
        """
        result = self.search(expression, json_data)
        self._assert_equal(expected, result)
        self._assert_same_kind(expected, result)

    def search(self, expression: str, data: Any) -> Any:
        return self.evaluator.search(expression, data)

    get_json_object = staticmethod(get_json_object)


_default: Optional[JsonAssert] = None


def default_json_assert() -> JsonAssert:
    """Shared JsonAssert configured from load_settings()."""
    global _default
    if _default is None:
        _default = JsonAssert(load_settings())
    return _default


# Convenience functions for quick assertions
def assert_json_matches_schema(schema: Union[str, os.PathLike], content: Any) -> None:
    """Assert `content` matches the schema file at `schema`."""
    default_json_assert().assert_json_matches_schema(schema, content)


def assert_json_matches_schema_string(schema: str, content: Any) -> None:
    """Assert `content` matches the schema given as text."""
    default_json_assert().assert_json_matches_schema_string(schema, content)


def assert_json_value_equals(expected: Any, expression: str, json_data: Any) -> None:
    """Assert the value found with `expression` equals `expected` and has its kind."""
    default_json_assert().assert_json_value_equals(expected, expression, json_data)


def search(expression: str, data: Any) -> Any:
    return default_json_assert().search(expression, data)

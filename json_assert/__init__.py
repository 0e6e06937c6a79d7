"""
JSON assertions for test suites.

Validate deserialised JSON against JSON Schema documents and compare values
picked out with JMESPath (or JSONPath) expressions.

Usage:
    from json_assert import assert_json_matches_schema, assert_json_value_equals

    assert_json_matches_schema("schemas/user.json", body)
    assert_json_value_equals(33, "foo.bar[0]", body)

or, with unittest:

    class ApiTest(JsonAssertMixin, unittest.TestCase):
        ...
"""

__version__ = "0.1.0"

from .assertions import (
    JsonAssert,
    assert_json_matches_schema,
    assert_json_matches_schema_string,
    assert_json_value_equals,
    default_json_assert,
    format_failure_message,
    search,
)
from .coercion import get_json_object, to_json_object
from .config import Settings, load_settings
from .exceptions import (
    JsonAssertError,
    JsonParseError,
    SchemaError,
    SchemaParseError,
    SchemaResolutionError,
    SchemaRetrievalError,
)
from .kinds import JsonKind, kind_of
from .mixin import JsonAssertMixin
from .query import ExpressionEvaluator, JmesPathEvaluator, JsonPathEvaluator
from .resolver import RefResolver, ResolvedSchema
from .responses import assert_json_response, assert_response_matches_schema, assert_response_value_equals
from .schema_loader import BUNDLED_SCHEMA_DIR, UriRetriever
from .validator import JsonSchemaValidator, SchemaValidator, ValidationError, ValidationOutcome

__all__ = [
    "__version__",
    # Assertions
    "JsonAssert",
    "JsonAssertMixin",
    "assert_json_matches_schema",
    "assert_json_matches_schema_string",
    "assert_json_value_equals",
    "search",
    "default_json_assert",
    "format_failure_message",
    # HTTP responses
    "assert_json_response",
    "assert_response_matches_schema",
    "assert_response_value_equals",
    # Coercion
    "get_json_object",
    "to_json_object",
    # Kinds
    "JsonKind",
    "kind_of",
    # Engines
    "SchemaValidator",
    "JsonSchemaValidator",
    "ValidationError",
    "ValidationOutcome",
    "ExpressionEvaluator",
    "JmesPathEvaluator",
    "JsonPathEvaluator",
    "RefResolver",
    "ResolvedSchema",
    "UriRetriever",
    "BUNDLED_SCHEMA_DIR",
    # Configuration
    "Settings",
    "load_settings",
    # Errors
    "JsonAssertError",
    "JsonParseError",
    "SchemaError",
    "SchemaParseError",
    "SchemaResolutionError",
    "SchemaRetrievalError",
]

"""Query expression evaluators.

The default evaluator speaks JMESPath::

    locations[?state == 'WA'].name | sort(@) | {WashingtonCities: join(', ', @)}

:class:`JsonPathEvaluator` accepts JSONPath (``$.locations[0].name``) instead.
Malformed expressions raise the engine's own parse error.
"""
import logging
from typing import Any

import jmespath
from jsonpath_ng.ext import parse as parse_jsonpath

logger = logging.getLogger(__name__)


class ExpressionEvaluator:
    """Interface for query engines used by :class:`json_assert.JsonAssert`."""

    def search(self, expression: str, data: Any) -> Any:
        raise NotImplementedError


class JmesPathEvaluator(ExpressionEvaluator):

    def search(self, expression: str, data: Any) -> Any:
        logger.debug(f"JMESPath search: {expression}")
        return jmespath.search(expression, data)


class JsonPathEvaluator(ExpressionEvaluator):
    """JSONPath evaluator.

    Returns None when nothing matches, the value for a single match and a list
    of values for several matches.
    """

    def search(self, expression: str, data: Any) -> Any:
        logger.debug(f"JSONPath search: {expression}")
        matches = parse_jsonpath(expression).find(data)
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0].value
        return [m.value for m in matches]

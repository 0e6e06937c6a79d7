"""Validation of JSON instances against resolved schemas.

Uses the `jsonschema` library. Validators are looked up from the schema's
``$schema`` keyword, falling back to the configured default draft.
"""
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

import jsonschema
from jsonschema.exceptions import ValidationError as JsonSchemaError
from jsonschema.validators import validator_for

from json_assert.config import DRAFTS, Settings
from json_assert.resolver import ResolvedSchema


@dataclass(frozen=True)
class ValidationError:
    """A single schema violation."""
    property: str  # e.g. "items[0].sku", "" for the document root
    constraint: str  # violated keyword, e.g. "type", "required"
    message: str


@dataclass(frozen=True)
class ValidationOutcome:
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0


class SchemaValidator:
    """Interface for validation engines used by :class:`json_assert.JsonAssert`."""

    def check(self, content: Any, schema: ResolvedSchema) -> ValidationOutcome:
        raise NotImplementedError


def format_path(path: Iterable) -> str:
    """Render a jsonschema error path as ``foo.bar[0]``."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out


def _property_of(error: JsonSchemaError) -> str:
    prop = format_path(error.absolute_path)
    # required errors are reported on the parent object; name the missing key
    if error.validator == "required" and isinstance(error.instance, dict):
        for name in error.validator_value:
            if name not in error.instance and repr(name) in error.message:
                return f"{prop}.{name}" if prop else name
    return prop


class JsonSchemaValidator(SchemaValidator):

    def __init__(self, settings: Optional[Settings] = None, check_formats: bool = True):
        self.settings = settings or Settings()
        self.check_formats = check_formats
        self.default_validator = getattr(jsonschema, DRAFTS[self.settings.default_draft])

    def check(self, content: Any, schema: ResolvedSchema) -> ValidationOutcome:
        cls = validator_for(schema.contents, default=self.default_validator)
        kwargs = {"registry": schema.registry}
        if self.check_formats:
            kwargs["format_checker"] = cls.FORMAT_CHECKER
        validator = cls(schema.entrypoint, **kwargs)
        errors = sorted(validator.iter_errors(content), key=lambda e: [str(p) for p in e.absolute_path])
        return ValidationOutcome(
            errors=[ValidationError(_property_of(e), str(e.validator), e.message) for e in errors]
        )

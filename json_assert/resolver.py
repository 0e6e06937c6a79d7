"""$ref resolution for retrieved schemas.

A retrieved schema is registered in a ``referencing.Registry`` under the URI it
was loaded from. The registry's retrieve hook loads any other document the
schema points at through the same :class:`UriRetriever`; ``file://`` targets
that do not exist are looked up again in the configured schema directories and
in the bundled ``schemas/`` directory shipped with this package.

Every ``$ref`` reachable from the root is looked up once up front, so a broken
reference surfaces as :class:`SchemaResolutionError` before validation starts.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Set
from urllib.parse import urlsplit

from jsonschema_specifications import REGISTRY as METASCHEMAS
from referencing import Registry, Resource, Specification
from referencing.exceptions import Unresolvable
from referencing.jsonschema import (
    DRAFT4,
    DRAFT6,
    DRAFT7,
    DRAFT201909,
    DRAFT202012,
    specification_with,
)

from json_assert.config import Settings
from json_assert.exceptions import SchemaResolutionError, SchemaRetrievalError
from json_assert.schema_loader import UriRetriever, find_schema, search_dirs, uri_to_path

logger = logging.getLogger(__name__)

SPECIFICATIONS = {
    "draft4": DRAFT4,
    "draft6": DRAFT6,
    "draft7": DRAFT7,
    "draft201909": DRAFT201909,
    "draft202012": DRAFT202012,
}


@dataclass(frozen=True)
class ResolvedSchema:
    """A schema plus the registry that resolves every reference it contains."""
    contents: Any
    base_uri: str
    registry: Registry

    @property
    def entrypoint(self) -> dict:
        """Schema to hand to a validator: a reference to the registered root."""
        entry = {"$ref": self.base_uri}
        if isinstance(self.contents, dict) and "$schema" in self.contents:
            entry = {"$schema": self.contents["$schema"], **entry}
        return entry


class RefResolver:

    def __init__(self, retriever: Optional[UriRetriever] = None, settings: Optional[Settings] = None):
        self.settings = settings or (retriever.settings if retriever else Settings())
        self.retriever = retriever or UriRetriever(self.settings)
        self.default_specification = SPECIFICATIONS[self.settings.default_draft]

    def resolve(self, schema: Any, base_uri: str) -> ResolvedSchema:
        """Register `schema` under `base_uri` and check all of its references resolve."""
        root_dir = None
        if urlsplit(base_uri).scheme == "file":
            root_dir = uri_to_path(base_uri).parent
        cache: Dict[str, Resource] = {}

        def retrieve(uri: str) -> Resource:
            if uri not in cache:
                cache[uri] = self._retrieve(uri, root_dir)
            return cache[uri]

        specification = self._specification(schema, base_uri, self.default_specification)
        root = specification.create_resource(schema)
        # metaschemas come from jsonschema-specifications
        registry = Registry(retrieve=retrieve).combine(METASCHEMAS).with_resource(base_uri, root)

        self._check_reference(registry.resolver(), base_uri, base_uri, specification, set())
        return ResolvedSchema(contents=schema, base_uri=base_uri, registry=registry)

    @staticmethod
    def _specification(contents: Any, uri: str, default: Specification) -> Specification:
        dialect = contents.get("$schema") if isinstance(contents, dict) else None
        if not isinstance(dialect, str):
            return default
        specification = specification_with(dialect, default=default)
        if specification is not default:
            logger.debug(f"Schema {uri} uses dialect {dialect}")
        return specification

    def _retrieve(self, uri: str, root_dir: Optional[Path]) -> Resource:
        try:
            contents = self.retriever.retrieve(uri)
        except SchemaRetrievalError:
            fallback = self._fallback_path(uri, root_dir)
            if fallback is None:
                raise
            logger.debug(f"Resolved {uri} to bundled schema {fallback}")
            uri = fallback.as_uri()
            contents = self.retriever.retrieve(uri)
        specification = self._specification(contents, uri, self.default_specification)
        return specification.create_resource(contents)

    def _fallback_path(self, uri: str, root_dir: Optional[Path]) -> Optional[Path]:
        path = uri_to_path(uri)
        dirs = search_dirs(self.settings)
        if root_dir is not None:
            try:
                relative = path.relative_to(root_dir).as_posix()
            except ValueError:
                relative = path.name
            found = find_schema(relative, dirs)
            if found is not None:
                return found
        return find_schema(path.name, dirs)

    def _check_reference(self, resolver, ref: str, origin: str, specification: Specification, seen: Set[int]) -> None:
        try:
            resolved = resolver.lookup(ref)
        except Unresolvable as e:
            raise SchemaResolutionError(f"Unresolvable $ref {ref!r} in {origin}: {e}", ref=ref, uri=origin) from e
        logger.debug(f"Resolved $ref {ref}")
        specification = self._specification(resolved.contents, origin, specification)
        resource = specification.create_resource(resolved.contents)
        self._walk(resource, resolved.resolver, origin, specification, seen, entered=True)

    def _walk(self, resource: Resource, resolver, origin: str, specification: Specification, seen: Set[int],
              entered: bool = False) -> None:
        contents = resource.contents
        if not isinstance(contents, dict) or id(contents) in seen:
            return
        seen.add(id(contents))
        if not entered:
            resolver = resolver.in_subresource(resource)

        ref = contents.get("$ref")
        if isinstance(ref, str):
            self._check_reference(resolver, ref, origin, specification, seen)

        for subresource in resource.subresources():
            self._walk(subresource, resolver, origin, specification, seen)

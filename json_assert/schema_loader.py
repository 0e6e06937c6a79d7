"""Locating and retrieving JSON Schema documents.

Schemas are addressed by URI. Filesystem paths are canonicalised (symlinks and
``..`` resolved) and turned into ``file://`` URIs so relative ``$ref`` values
always resolve against the same base. ``http://`` and ``https://`` URIs are
fetched through a retrying ``requests`` session.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union
from urllib.parse import urlsplit
from urllib.request import url2pathname

import requests

from json_assert.config import Settings
from json_assert.exceptions import SchemaParseError, SchemaRetrievalError
from json_assert.http import session_from_settings

logger = logging.getLogger(__name__)

BUNDLED_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"

REMOTE_SCHEMES = ("http", "https")


def to_uri(source: Union[str, os.PathLike]) -> str:
    """Return the canonical URI for a schema path or URI."""
    if isinstance(source, str):
        scheme = urlsplit(source).scheme
        if scheme == "file" or scheme in REMOTE_SCHEMES:
            return source
    return Path(os.path.realpath(source)).as_uri()


def uri_to_path(uri: str) -> Path:
    parts = urlsplit(uri)
    return Path(url2pathname(parts.path))


def search_dirs(settings: Settings) -> List[Path]:
    """Directories tried for references that do not resolve next to the schema."""
    dirs = [Path(p).resolve() for p in settings.schema_paths]
    dirs.append(BUNDLED_SCHEMA_DIR)
    return dirs


def find_schema(name: str, dirs: Iterable[Path]) -> Optional[Path]:
    """Find a schema file by name in `dirs`.

    Tries several candidate filenames in each directory:
    - name (as-is)
    - name + .json
    - lowercase and _-separated variants
    Returns the first existing path or None if not found.
    """
    name_snake = name.replace("-", "_")
    candidates = [name, f"{name}.json", name_snake.lower(), f"{name_snake.lower()}.json"]

    tried = set()
    for directory in dirs:
        for cand in candidates:
            path = directory / cand
            if path in tried:
                continue
            tried.add(path)
            if path.is_file():
                return path
    return None


class UriRetriever:
    """Fetch and decode schema documents from ``file://`` and ``http(s)://`` URIs."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or Settings()
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = session_from_settings(self.settings)
        return self._session

    def retrieve(self, uri: str) -> Any:
        """Return the decoded JSON document at `uri` (fragment ignored)."""
        parts = urlsplit(uri)
        if parts.scheme == "file":
            text = self._read_file(uri)
        elif parts.scheme in REMOTE_SCHEMES:
            text = self._fetch(uri)
        else:
            raise SchemaRetrievalError(f"Unsupported schema URI scheme {parts.scheme!r}: {uri}", uri=uri)
        return self.parse(text, uri)

    @staticmethod
    def parse(text: str, uri: Optional[str] = None) -> Any:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaParseError(f"Schema {uri} is not valid JSON: {e}", uri=uri) from e
        if not isinstance(document, (dict, bool)):
            raise SchemaParseError(
                f"Schema {uri} must be a JSON object or boolean, got {type(document).__name__}", uri=uri
            )
        return document

    def _read_file(self, uri: str) -> str:
        path = uri_to_path(uri)
        logger.debug(f"Reading schema file {path}")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise SchemaRetrievalError(f"Cannot read schema file {path}: {e.strerror or e}", uri=uri) from e
        except UnicodeDecodeError as e:
            raise SchemaRetrievalError(f"Schema file {path} is not UTF-8 text", uri=uri) from e

    def _fetch(self, uri: str) -> str:
        url = urlsplit(uri)._replace(fragment="").geturl()
        logger.debug(f"Fetching schema {url}")
        try:
            resp = self.session.get(url, timeout=self.settings.http_timeout)
        except requests.RequestException as e:
            raise SchemaRetrievalError(f"Cannot fetch schema {url}: {e}", uri=uri) from e
        if not 200 <= resp.status_code < 300:
            raise SchemaRetrievalError(f"Cannot fetch schema {url}: HTTP {resp.status_code}", uri=uri)
        return resp.text

import os
from dataclasses import dataclass, field, replace
from typing import List, Optional

import yaml

DEFAULT_CONFIG_FILE = "json-assert.yaml"

# Draft names accepted in config files, mapped to jsonschema validator class names.
DRAFTS = {
    "draft4": "Draft4Validator",
    "draft6": "Draft6Validator",
    "draft7": "Draft7Validator",
    "draft201909": "Draft201909Validator",
    "draft202012": "Draft202012Validator",
}


@dataclass(frozen=True)
class Settings:
    schema_paths: List[str] = field(default_factory=list)
    default_draft: str = "draft7"
    cleanup_temp_files: bool = True
    http_timeout: float = 10
    http_retries: int = 3
    verify_ssl: bool = True

    def __post_init__(self):
        if self.default_draft not in DRAFTS:
            raise ValueError(
                f"Unknown default_draft {self.default_draft!r}; valid drafts: {', '.join(sorted(DRAFTS))}"
            )


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in ("0", "false", "no", "off", "")


def _read_config_file(path: Optional[str]) -> dict:
    if path is None:
        path = os.environ.get("JSON_ASSERT_CONFIG")
        if not path:
            if not os.path.exists(DEFAULT_CONFIG_FILE):
                return {}
            path = DEFAULT_CONFIG_FILE
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: configuration must be a YAML mapping, got {type(data).__name__}")
    return data


def load_settings(path: Optional[str] = None) -> Settings:
    """Return Settings built from defaults, a YAML file and environment variables.

    The YAML file is `path`, else $JSON_ASSERT_CONFIG, else ``json-assert.yaml``
    in the working directory when it exists. Example file::

        schema_paths:
          - tests/schemas
        default_draft: draft7
        cleanup_temp_files: true
        http:
          timeout: 10
          retries: 3
          verify_ssl: true

    Environment variables supported (they win over the file):
      - JSON_ASSERT_SCHEMA_PATHS (os.pathsep separated)
      - JSON_ASSERT_DEFAULT_DRAFT
      - JSON_ASSERT_CLEANUP_TEMP (true/false)
      - JSON_ASSERT_HTTP_TIMEOUT
      - JSON_ASSERT_HTTP_RETRIES
      - JSON_ASSERT_VERIFY_SSL (true/false)
    """
    cfg = _read_config_file(path)
    http = cfg.get("http") or {}
    settings = Settings()

    overrides = {}
    if "schema_paths" in cfg:
        overrides["schema_paths"] = [str(p) for p in cfg["schema_paths"] or []]
    if "default_draft" in cfg:
        overrides["default_draft"] = str(cfg["default_draft"]).lower()
    if "cleanup_temp_files" in cfg:
        overrides["cleanup_temp_files"] = _as_bool(cfg["cleanup_temp_files"])
    if "timeout" in http:
        overrides["http_timeout"] = float(http["timeout"])
    if "retries" in http:
        overrides["http_retries"] = int(http["retries"])
    if "verify_ssl" in http:
        overrides["verify_ssl"] = _as_bool(http["verify_ssl"])

    # override with env vars when provided
    schema_paths = os.environ.get("JSON_ASSERT_SCHEMA_PATHS")
    if schema_paths:
        overrides["schema_paths"] = [p for p in schema_paths.split(os.pathsep) if p]

    draft = os.environ.get("JSON_ASSERT_DEFAULT_DRAFT")
    if draft:
        overrides["default_draft"] = draft.lower()

    cleanup = os.environ.get("JSON_ASSERT_CLEANUP_TEMP")
    if cleanup is not None:
        overrides["cleanup_temp_files"] = _as_bool(cleanup)

    timeout = os.environ.get("JSON_ASSERT_HTTP_TIMEOUT")
    if timeout:
        overrides["http_timeout"] = float(timeout)

    retries = os.environ.get("JSON_ASSERT_HTTP_RETRIES")
    if retries:
        overrides["http_retries"] = int(retries)

    verify = os.environ.get("JSON_ASSERT_VERIFY_SSL")
    if verify is not None:
        overrides["verify_ssl"] = _as_bool(verify)

    return replace(settings, **overrides)

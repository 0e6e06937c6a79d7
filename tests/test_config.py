import os

import pytest

from json_assert.config import Settings, load_settings


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings == Settings()
    assert settings.default_draft == "draft7"
    assert settings.cleanup_temp_files is True


def test_yaml_file(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text(
        "schema_paths:\n"
        "  - shared/schemas\n"
        "default_draft: Draft202012\n"
        "cleanup_temp_files: false\n"
        "http:\n"
        "  timeout: 2.5\n"
        "  retries: 1\n"
        "  verify_ssl: no\n"
    )
    settings = load_settings(str(path))
    assert settings.schema_paths == ["shared/schemas"]
    assert settings.default_draft == "draft202012"
    assert settings.cleanup_temp_files is False
    assert settings.http_timeout == 2.5
    assert settings.http_retries == 1
    assert settings.verify_ssl is False


def test_config_file_from_env(tmp_path, monkeypatch):
    path = tmp_path / "conf.yaml"
    path.write_text("default_draft: draft4\n")
    monkeypatch.setenv("JSON_ASSERT_CONFIG", str(path))
    assert load_settings().default_draft == "draft4"


def test_config_file_in_working_directory(tmp_path, monkeypatch):
    (tmp_path / "json-assert.yaml").write_text("http:\n  retries: 7\n")
    monkeypatch.chdir(tmp_path)
    assert load_settings().http_retries == 7


def test_empty_file(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("")
    assert load_settings(str(path)) == Settings()


def test_env_overrides_file(config_path, monkeypatch, tmp_path):
    monkeypatch.setenv("JSON_ASSERT_SCHEMA_PATHS", os.pathsep.join(["a", "b"]))
    monkeypatch.setenv("JSON_ASSERT_DEFAULT_DRAFT", "DRAFT6")
    monkeypatch.setenv("JSON_ASSERT_CLEANUP_TEMP", "false")
    monkeypatch.setenv("JSON_ASSERT_HTTP_TIMEOUT", "1")
    monkeypatch.setenv("JSON_ASSERT_HTTP_RETRIES", "5")
    monkeypatch.setenv("JSON_ASSERT_VERIFY_SSL", "0")
    settings = load_settings(config_path)
    assert settings.schema_paths == ["a", "b"]
    assert settings.default_draft == "draft6"
    assert settings.cleanup_temp_files is False
    assert settings.http_timeout == 1.0
    assert settings.http_retries == 5
    assert settings.verify_ssl is False


def test_unknown_draft_is_rejected(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("default_draft: draft3\n")
    with pytest.raises(ValueError, match="draft3"):
        load_settings(str(path))


def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_settings(str(path))


def test_default_draft_applies_to_schemas_without_dialect(tmp_path):
    from json_assert import JsonAssert

    schema = tmp_path / "price.json"
    # boolean exclusiveMinimum is only meaningful in draft-04
    schema.write_text('{"type": "number", "minimum": 0, "exclusiveMinimum": true}')
    JsonAssert(Settings(default_draft="draft4")).assert_json_matches_schema(str(schema), 1)
    with pytest.raises(AssertionError):
        JsonAssert(Settings(default_draft="draft4")).assert_json_matches_schema(str(schema), 0)

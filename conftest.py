import importlib.util
import os
import threading

import pytest
from werkzeug.serving import make_server

import json_assert.plugin
from json_assert import assertions
from json_assert.assertions import JsonAssert
from json_assert.config import load_settings

TESTS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "tests")
SCHEMA_DIR = os.path.join(TESTS_DIR, "schemas")

ENV_VARS = (
    "JSON_ASSERT_CONFIG",
    "JSON_ASSERT_SCHEMA_PATHS",
    "JSON_ASSERT_DEFAULT_DRAFT",
    "JSON_ASSERT_CLEANUP_TEMP",
    "JSON_ASSERT_HTTP_TIMEOUT",
    "JSON_ASSERT_HTTP_RETRIES",
    "JSON_ASSERT_VERIFY_SSL",
)


def pytest_configure(config):
    # installed packages register through the pytest11 entry point
    if not config.pluginmanager.has_plugin("json_assert"):
        config.pluginmanager.register(json_assert.plugin, "json_assert")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's JSON_ASSERT_* variables out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # module level helpers cache a JsonAssert built from load_settings()
    monkeypatch.setattr(assertions, "_default", None)


@pytest.fixture(scope="session")
def config_path():
    return os.path.join(TESTS_DIR, "json-assert.yaml")


@pytest.fixture
def settings(config_path):
    return load_settings(config_path)


@pytest.fixture
def ja(settings):
    return JsonAssert(settings)


@pytest.fixture
def schema_path():
    """Return the absolute path of a schema under tests/schemas."""
    def _path(name):
        return os.path.join(SCHEMA_DIR, name)
    return _path


@pytest.fixture(scope="session")
def schema_server():
    """Serve tests/mock_schema_server.py on a free local port; yields the base URL."""
    spec = importlib.util.spec_from_file_location("mock_schema_server", os.path.join(TESTS_DIR, "mock_schema_server.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    server = make_server("127.0.0.1", 0, module.app)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_port}"
    finally:
        server.shutdown()
        thread.join(timeout=5)

import os

import pytest

from wikipedia_mcp.infrastructure.config.settings import get_settings, reload_settings


@pytest.fixture(autouse=True)
def _restore_settings():
    yield
    reload_settings()


def test_defaults(monkeypatch):
    for name in ("WIKIPEDIA_REST_BASE_URL", "WIKIPEDIA_TIMEOUT_S", "LOG_LEVEL", "MCP_SERVER_NAME"):
        monkeypatch.delenv(name, raising=False)

    settings = reload_settings()

    assert settings.wikipedia.rest_base_url == "https://en.wikipedia.org/api/rest_v1"
    assert settings.wikipedia.default_chunk_length == 5000
    assert settings.wikipedia.follow_redirects is True
    assert settings.mcp_server.name == "Wikipedia MCP"
    assert settings.log_level == "INFO"
    assert get_settings() is settings


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WIKIPEDIA_REST_BASE_URL", "https://de.wikipedia.org/api/rest_v1/")
    monkeypatch.setenv("WIKIPEDIA_SEARCH_LIMIT", "500")
    monkeypatch.setenv("WIKIPEDIA_FOLLOW_REDIRECTS", "false")
    monkeypatch.setenv("MCP_SERVER_NAME", "Wiki DE")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = reload_settings()

    assert settings.wikipedia.rest_base_url == "https://de.wikipedia.org/api/rest_v1"
    assert settings.wikipedia.search_limit == 50
    assert settings.wikipedia.follow_redirects is False
    assert settings.mcp_server.name == "Wiki DE"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw,expected", [("", None), ("0", None), ("-3", None), ("2.5", 2.5)])
def test_timeout_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("WIKIPEDIA_TIMEOUT_S", raw)

    assert reload_settings().wikipedia.timeout_s == expected


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert reload_settings().log_level == "INFO"


def test_tools_dir_accepts_multiple_directories(monkeypatch):
    monkeypatch.setenv("WIKIPEDIA_MCP_TOOLS_DIR", f"/opt/a,/opt/b{os.pathsep}/opt/c")

    assert reload_settings().mcp_server.plugin_paths == ["/opt/a", "/opt/b", "/opt/c"]


def test_to_dict_is_serializable():
    data = reload_settings().to_dict()

    assert set(data) == {"wikipedia", "mcp_server", "log_level"}
    assert data["wikipedia"]["default_chunk_length"] == 5000

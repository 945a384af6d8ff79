"""Configuration and helper tests."""

import json

import pytest
from routetree_core.dispatch.router import Router
from routetree_core.utils.config import RouterConfig, load_config
from routetree_core.utils.helpers import (
    is_param_token,
    join_pattern,
    param_token_name,
    parse_pattern,
    split_path,
)


class TestRouterConfig:
    """Test RouterConfig class."""

    def test_defaults(self):
        """Test default values."""
        config = RouterConfig()
        assert config.case_sensitive is False
        assert config.default_methods == ["GET"]
        assert config.log_level == "INFO"

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped."""
        config = RouterConfig.from_dict({"case_sensitive": True, "port": 8080})
        assert config.case_sensitive is True
        assert not hasattr(config, "port")

    def test_from_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "router.json"
        path.write_text(json.dumps({"default_methods": ["GET", "POST"]}))

        config = RouterConfig.from_json(str(path))

        assert config.default_methods == ["GET", "POST"]

    def test_from_yaml(self, tmp_path):
        """Test loading a YAML file."""
        pytest.importorskip("yaml")
        path = tmp_path / "router.yaml"
        path.write_text("case_sensitive: true\nlog_level: DEBUG\n")

        config = RouterConfig.from_yaml(str(path))

        assert config.case_sensitive is True
        assert config.log_level == "DEBUG"

    def test_from_env(self, monkeypatch):
        """Test environment conversion."""
        monkeypatch.setenv("TESTROUTER_CASE_SENSITIVE", "True")
        monkeypatch.setenv("TESTROUTER_DEFAULT_METHODS", "GET, HEAD")
        monkeypatch.setenv("TESTROUTER_PAGE_ERROR_BODY", "broken")

        config = RouterConfig.from_env("TESTROUTER_")

        assert config.case_sensitive is True
        assert config.default_methods == ["GET", "HEAD"]
        assert config.page_error_body == "broken"

    def test_from_env_keeps_numeric_strings(self, monkeypatch):
        """Test string fields are not coerced to numbers."""
        monkeypatch.setenv("TESTROUTER_METHOD_NOT_ALLOWED_BODY", "405")
        monkeypatch.setenv("TESTROUTER_EMPTY_PATH_BODY", "1.5")
        monkeypatch.setenv("TESTROUTER_LOG_LEVEL", "10")

        config = RouterConfig.from_env("TESTROUTER_")

        assert config.method_not_allowed_body == "405"
        assert config.empty_path_body == "1.5"
        assert config.log_level == "10"

    def test_numeric_body_reaches_response(self, monkeypatch):
        """Test a numeric 405 body from the environment is served as text."""
        monkeypatch.setenv("TESTROUTER_METHOD_NOT_ALLOWED_BODY", "405")
        router = Router(load_config(env_prefix="TESTROUTER_"))
        router.post("/x", lambda params: None)

        result = router.handle_request("/x", "GET")

        assert result.status == 405
        assert result.response.body == b"405"

    def test_from_env_false_boolean(self, monkeypatch):
        """Test boolean fields parse false values."""
        monkeypatch.setenv("TESTROUTER_CASE_SENSITIVE", "false")
        assert RouterConfig.from_env("TESTROUTER_").case_sensitive is False

    def test_merge(self):
        """Test merge replaces only given fields."""
        config = RouterConfig().merge({"log_level": "ERROR"})
        assert config.log_level == "ERROR"
        assert config.case_sensitive is False


class TestLoadConfig:
    """Test load_config precedence."""

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test environment beats file values."""
        path = tmp_path / "router.json"
        path.write_text(json.dumps({"case_sensitive": True, "log_level": "DEBUG"}))
        monkeypatch.setenv("TESTROUTER_LOG_LEVEL", "ERROR")

        config = load_config(str(path), env_prefix="TESTROUTER_")

        assert config.case_sensitive is True
        assert config.log_level == "ERROR"

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test a missing file falls back to defaults."""
        config = load_config(str(tmp_path / "missing.json"), env_prefix="TESTROUTER_")
        assert config == RouterConfig()


class TestHelpers:
    """Test path helpers."""

    def test_split_path_lowercases(self):
        """Test case-insensitive splitting."""
        assert split_path("/Users/42/Show") == ["users", "42", "show"]

    def test_split_path_case_sensitive(self):
        """Test case-sensitive splitting."""
        assert split_path("/Users/42", case_sensitive=True) == ["Users", "42"]

    def test_split_path_collapses_slashes(self):
        """Test empty segments are dropped."""
        assert split_path("//a///b/") == ["a", "b"]
        assert split_path("/") == []
        assert split_path("") == []

    def test_param_tokens(self):
        """Test parameter token detection."""
        assert is_param_token("{id}")
        assert not is_param_token("id")
        assert not is_param_token("{id")
        assert param_token_name("{id}") == "id"
        assert param_token_name("users") is None
        assert param_token_name("{}") == ""

    def test_parse_pattern(self):
        """Test pattern tokenizing."""
        assert parse_pattern("/users/{id}/show/") == ["users", "{id}", "show"]
        assert parse_pattern(["users", "", "{id}"]) == ["users", "{id}"]
        assert parse_pattern("/ users/") == [" users"]
        assert join_pattern(["users", "{id}"]) == "/users/{id}"

    def test_parse_pattern_rejects_non_strings(self):
        """Test tokens must be strings."""
        with pytest.raises(TypeError):
            parse_pattern(["users", 5])

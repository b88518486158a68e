"""
Tests for configuration loading and validation.
"""

import pytest

from utils_api.config import apply_env_overrides, load_config
from utils_api.core.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "app:\n"
        "  version: '2.0.0'\n"
        "  environment: staging\n"
        "security:\n"
        "  request_limit: 50\n",
        encoding="utf-8",
    )
    return path


class TestLoadConfig:
    def test_loads_yaml(self, config_file):
        config = load_config(config_file, environ={})

        assert config.app.version == "2.0.0"
        assert config.app.environment == "staging"
        assert config.security.request_limit == 50
        assert config.database.url.startswith("sqlite+aiosqlite://")

    def test_environment_overrides_yaml(self, config_file):
        config = load_config(
            config_file,
            environ={
                "APP_VERSION": "3.1.4",
                "ALLOWED_CORS": "http://a.example, http://b.example",
                "REQUEST_LIMIT": "7",
            },
        )

        assert config.app.version == "3.1.4"
        assert config.security.allowed_cors == ["http://a.example", "http://b.example"]
        assert config.security.request_limit == 7

    def test_environment_only(self):
        config = load_config(None, environ={"APP_VERSION": "1.0.0"})
        assert config.app.version == "1.0.0"

    def test_missing_version_aborts(self):
        with pytest.raises(ConfigError):
            load_config(None, environ={})

    @pytest.mark.parametrize("version", ["", "   "])
    def test_empty_version_aborts(self, version):
        with pytest.raises(ConfigError, match="APP_VERSION"):
            load_config(None, environ={"APP_VERSION": version})

    def test_non_string_version_aborts(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("app:\n  version: 1\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.yaml", environ={})

    def test_invalid_request_limit(self):
        with pytest.raises(ConfigError):
            load_config(None, environ={"APP_VERSION": "1", "REQUEST_LIMIT": "0"})

    def test_protected_swagger_requires_credentials(self):
        with pytest.raises(ConfigError, match="swagger"):
            load_config(None, environ={"APP_VERSION": "1", "SWAGGER_ENVS": "production"})

    def test_log_level_normalized(self):
        config = load_config(None, environ={"APP_VERSION": "1", "LOG_LEVEL": "debug"})
        assert config.server.log_level == "DEBUG"


def test_apply_env_overrides_keeps_unrelated_sections():
    merged = apply_env_overrides({"database": {"echo": True}, "app": None}, {"APP_ENV": "production"})

    assert merged["database"] == {"echo": True}
    assert merged["app"] == {"environment": "production"}

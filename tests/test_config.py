"""
Tests for tenant configuration.

Covers environment loading, tenant resolution and the process-wide config.
"""

import pytest

from ansiversa_db.config import (
    DbConfig,
    get_db_config,
    has_db_config,
    init_db_config,
    load_env_config,
    reset_db_config,
    resolve_tenant_config,
)
from ansiversa_db.db.context import get_default_context
from ansiversa_db.errors import ConfigurationError


@pytest.fixture
def core_env(monkeypatch):
    monkeypatch.setenv("ANSIVERSA_CORE_DB_URL", "libsql://core.example.turso.io")
    monkeypatch.setenv("TURSO_AUTH_TOKEN", "core-token")


class TestLoadEnvConfig:
    """Test building a DbConfig from environment variables."""

    def test_core_only(self, core_env):
        config = load_env_config()

        assert config.core.url == "libsql://core.example.turso.io"
        assert config.core.auth_token == "core-token"
        assert config.apps == {}

    def test_app_uses_default_url_var_and_shared_token(self, core_env, monkeypatch):
        monkeypatch.setenv("ANSIVERSA_QUIZ_DB_URL", "libsql://quiz.example.turso.io")

        config = load_env_config(apps=["quiz"])

        assert config.apps["quiz"].url == "libsql://quiz.example.turso.io"
        assert config.apps["quiz"].auth_token == "core-token"

    def test_app_token_override(self, core_env, monkeypatch):
        monkeypatch.setenv("ANSIVERSA_QUIZ_DB_URL", "libsql://quiz.example.turso.io")
        monkeypatch.setenv("QUIZ_TOKEN", "quiz-token")

        config = load_env_config(apps=["quiz"], app_auth_token_vars={"quiz": "QUIZ_TOKEN"})

        assert config.apps["quiz"].auth_token == "quiz-token"

    def test_custom_url_var_mapping(self, core_env, monkeypatch):
        monkeypatch.setenv("QUIZ_URL", "file:quiz.db")

        config = load_env_config(apps=["quiz"], app_url_var=lambda app: f"{app.upper()}_URL")

        assert config.apps["quiz"].url == "file:quiz.db"

    def test_missing_core_url(self, monkeypatch):
        """Test a missing variable is named in the error."""
        monkeypatch.delenv("ANSIVERSA_CORE_DB_URL", raising=False)
        monkeypatch.setenv("TURSO_AUTH_TOKEN", "core-token")

        with pytest.raises(ConfigurationError) as exc_info:
            load_env_config()

        assert "ANSIVERSA_CORE_DB_URL" in str(exc_info.value)

    def test_empty_token_counts_as_missing(self, monkeypatch):
        monkeypatch.setenv("ANSIVERSA_CORE_DB_URL", "libsql://core.example.turso.io")
        monkeypatch.setenv("TURSO_AUTH_TOKEN", "")

        with pytest.raises(ConfigurationError) as exc_info:
            load_env_config()

        assert "TURSO_AUTH_TOKEN" in str(exc_info.value)

    def test_missing_app_url(self, core_env, monkeypatch):
        monkeypatch.delenv("ANSIVERSA_QUIZ_DB_URL", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            load_env_config(apps=["quiz"])

        assert "ANSIVERSA_QUIZ_DB_URL" in str(exc_info.value)


class TestResolveTenantConfig:
    """Test mapping a tenant name to its connection settings."""

    def test_core_and_app(self, db_config):
        config = DbConfig.model_validate(db_config)

        assert resolve_tenant_config(config, "core").url.endswith("core.db")
        assert resolve_tenant_config(config, "quiz").url.endswith("quiz.db")

    def test_missing_app(self, db_config):
        config = DbConfig.model_validate({"core": db_config["core"]})

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_tenant_config(config, "quiz")

        message = str(exc_info.value)
        assert "Quiz database configuration is missing" in message
        assert "apps.quiz" in message

    def test_empty_url(self):
        config = DbConfig.model_validate({"core": {"url": "", "auth_token": "t"}})

        with pytest.raises(ConfigurationError):
            resolve_tenant_config(config, "core")


class TestProcessConfig:
    """Test the init/get/reset lifecycle."""

    def test_get_before_init(self):
        assert has_db_config() is False

        with pytest.raises(ConfigurationError) as exc_info:
            get_db_config()

        assert "init_db_config()" in str(exc_info.value)

    def test_init_accepts_mapping(self, db_config):
        installed = init_db_config(db_config)

        assert has_db_config() is True
        assert get_db_config() is installed
        assert installed.apps["quiz"].auth_token == "test-token"

    def test_reinit_replaces_default_context(self, db_config):
        init_db_config(db_config)
        first = get_default_context()

        init_db_config(db_config)

        assert get_default_context() is not first

    def test_reset(self, db_config):
        init_db_config(db_config)
        reset_db_config()

        assert has_db_config() is False
        with pytest.raises(ConfigurationError):
            get_default_context()

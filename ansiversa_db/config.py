"""Tenant connection configuration.

Configuration is either injected once with ``init_db_config()`` or derived
from environment variables with ``load_env_config()``. Variables may live in
a ``.env`` file next to the process, which is loaded on import.
"""

import os
from typing import Callable, Dict, Iterable, Mapping, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ansiversa_db.errors import ConfigurationError

load_dotenv()

CORE_TENANT = "core"

DEFAULT_CORE_URL_VAR = "ANSIVERSA_CORE_DB_URL"
DEFAULT_CORE_AUTH_VAR = "TURSO_AUTH_TOKEN"


class DatabaseConnectionConfig(BaseModel):
    """URL + auth token for one tenant database."""
    url: str
    auth_token: Optional[str] = None


class DbConfig(BaseModel):
    """Credentials for the core database and every app tenant."""
    core: DatabaseConnectionConfig
    apps: Dict[str, DatabaseConnectionConfig] = Field(default_factory=dict)


ConfigInput = Union[DbConfig, Mapping]

_active_config: Optional[DbConfig] = None


def default_app_url_var(app_name: str) -> str:
    return f"ANSIVERSA_{app_name.upper()}_DB_URL"


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


def _connection_from_env(url_var: str, auth_var: str) -> DatabaseConnectionConfig:
    return DatabaseConnectionConfig(url=_require_env(url_var), auth_token=_require_env(auth_var))


def load_env_config(
    apps: Iterable[str] = (),
    core_url_var: str = DEFAULT_CORE_URL_VAR,
    core_auth_token_var: str = DEFAULT_CORE_AUTH_VAR,
    default_auth_token_var: Optional[str] = None,
    app_url_var: Optional[Callable[[str], str]] = None,
    app_auth_token_vars: Optional[Mapping[str, str]] = None,
) -> DbConfig:
    """Build a DbConfig from environment variables.

    Args:
        apps: App tenant names to resolve, e.g. ``["quiz"]``.
        core_url_var: Variable holding the core database URL.
        core_auth_token_var: Variable holding the core auth token.
        default_auth_token_var: Shared token variable for apps without an
            explicit entry in ``app_auth_token_vars``. Defaults to the core one.
        app_url_var: Maps an app name to its URL variable. Defaults to
            ``ANSIVERSA_<APP>_DB_URL``.
        app_auth_token_vars: Per-app overrides of the token variable.

    Raises:
        ConfigurationError: If any required variable is unset or empty.
    """
    url_var_for = app_url_var or default_app_url_var
    fallback_auth_var = default_auth_token_var or core_auth_token_var
    auth_overrides = app_auth_token_vars or {}

    app_configs = {
        app: _connection_from_env(url_var_for(app), auth_overrides.get(app, fallback_auth_var))
        for app in apps
    }
    return DbConfig(
        core=_connection_from_env(core_url_var, core_auth_token_var),
        apps=app_configs,
    )


def coerce_config(config: ConfigInput) -> DbConfig:
    if isinstance(config, DbConfig):
        return config
    return DbConfig.model_validate(config)


def resolve_tenant_config(config: DbConfig, tenant: str) -> DatabaseConnectionConfig:
    """Return the connection settings for ``tenant``.

    ``"core"`` maps to ``config.core``; every other name is looked up under
    ``config.apps``.
    """
    if tenant == CORE_TENANT:
        resolved = config.core
    else:
        resolved = config.apps.get(tenant)
        if resolved is None:
            raise ConfigurationError(
                f"{tenant.capitalize()} database configuration is missing. "
                f"Add it under apps.{tenant} when initializing."
            )
    if not resolved.url:
        raise ConfigurationError(f"Database URL for tenant '{tenant}' is empty.")
    return resolved


def init_db_config(config: ConfigInput) -> DbConfig:
    """Install the process-wide configuration. Call once at startup."""
    global _active_config
    # Imported here to avoid a cycle: the context module reads this config.
    from ansiversa_db.db.context import clear_default_context

    _active_config = coerce_config(config)
    clear_default_context()
    return _active_config


def get_db_config() -> DbConfig:
    if _active_config is None:
        raise ConfigurationError(
            "Ansiversa DB has not been initialized. Call init_db_config() first."
        )
    return _active_config


def has_db_config() -> bool:
    return _active_config is not None


def reset_db_config() -> None:
    """Forget the active configuration and the default context (tests only)."""
    global _active_config
    from ansiversa_db.db.context import clear_default_context

    _active_config = None
    clear_default_context()

"""Async data access for the Ansiversa core and app tenant databases."""

from ansiversa_db import core, quiz
from ansiversa_db.config import (
    DatabaseConnectionConfig,
    DbConfig,
    get_db_config,
    has_db_config,
    init_db_config,
    load_env_config,
    reset_db_config,
)
from ansiversa_db.db.context import DbContext, get_default_context
from ansiversa_db.db.query import ListOptions, Page, SortSpec
from ansiversa_db.errors import (
    AnsiversaDbError,
    ConfigurationError,
    MutationIntegrityError,
    UnknownOperationError,
)

__version__ = "0.1.0"

__all__ = [
    "core",
    "quiz",
    "DatabaseConnectionConfig",
    "DbConfig",
    "get_db_config",
    "has_db_config",
    "init_db_config",
    "load_env_config",
    "reset_db_config",
    "DbContext",
    "get_default_context",
    "ListOptions",
    "Page",
    "SortSpec",
    "AnsiversaDbError",
    "ConfigurationError",
    "MutationIntegrityError",
    "UnknownOperationError",
]

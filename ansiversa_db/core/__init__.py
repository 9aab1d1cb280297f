"""Core tenant: users and subscriptions."""

from ansiversa_db.core import subscriptions, users
from ansiversa_db.core.client import (
    ensure_core_schema,
    get_core_db,
    reset_core_client,
    reset_core_schema_cache,
)
from ansiversa_db.core.models import SubscriptionStatus
from ansiversa_db.core.tables import CORE_OPERATIONS, CORE_TABLES

__all__ = [
    "subscriptions",
    "users",
    "ensure_core_schema",
    "get_core_db",
    "reset_core_client",
    "reset_core_schema_cache",
    "SubscriptionStatus",
    "CORE_OPERATIONS",
    "CORE_TABLES",
]

"""Core tenant handle and schema bootstrap."""

from typing import Optional

from ansiversa_db.config import CORE_TENANT
from ansiversa_db.core.tables import CORE_TABLES
from ansiversa_db.db.connection import Database
from ansiversa_db.db.context import DbContext, resolve_context


def get_core_db(ctx: Optional[DbContext] = None) -> Database:
    return resolve_context(ctx).get_client(CORE_TENANT)


def reset_core_client(ctx: Optional[DbContext] = None) -> None:
    resolve_context(ctx).reset_client(CORE_TENANT)


async def ensure_core_schema(ctx: Optional[DbContext] = None) -> Database:
    """Create the core tables once per context and return the core handle."""
    return await resolve_context(ctx).ensure_schema(CORE_TENANT, CORE_TABLES)


def reset_core_schema_cache(ctx: Optional[DbContext] = None) -> None:
    resolve_context(ctx).reset_schema_cache(CORE_TENANT)

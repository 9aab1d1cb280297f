"""Per-tenant client cache and schema state.

A ``DbContext`` owns one database handle and one schema bootstrapper per
tenant. Callers may build their own context and pass it as ``ctx=`` to any
operation; otherwise a process default built from ``get_db_config()`` is used.
Resetting is done by building a fresh context.
"""

import logging
from typing import Callable, Dict, Optional, Sequence

from ansiversa_db.config import (
    ConfigInput,
    DatabaseConnectionConfig,
    coerce_config,
    get_db_config,
    resolve_tenant_config,
)
from ansiversa_db.db.connection import Database, connect
from ansiversa_db.db.schema import SchemaBootstrapper, TableDefinition

logger = logging.getLogger(__name__)

Connector = Callable[[DatabaseConnectionConfig], Database]


class DbContext:
    def __init__(self, config: ConfigInput, connector: Connector = connect):
        self.config = coerce_config(config)
        self._connector = connector
        self._clients: Dict[str, Database] = {}
        self._schemas: Dict[str, SchemaBootstrapper] = {}

    def get_client(self, tenant: str) -> Database:
        """Return the cached handle for ``tenant``, building it on first use."""
        client = self._clients.get(tenant)
        if client is None:
            client = self._connector(resolve_tenant_config(self.config, tenant))
            self._clients[tenant] = client
            logger.info("Database client ready for tenant %s", tenant)
        return client

    def reset_client(self, tenant: Optional[str] = None) -> None:
        """Drop cached handles (all, or one tenant). Does not close them."""
        if tenant is None:
            self._clients.clear()
        else:
            self._clients.pop(tenant, None)

    def schema(self, tenant: str, tables: Sequence[TableDefinition]) -> SchemaBootstrapper:
        bootstrapper = self._schemas.get(tenant)
        if bootstrapper is None:
            bootstrapper = SchemaBootstrapper(tenant, tables)
            self._schemas[tenant] = bootstrapper
        return bootstrapper

    async def ensure_schema(self, tenant: str, tables: Sequence[TableDefinition]) -> Database:
        """Bootstrap ``tenant`` if needed and return its handle."""
        client = self.get_client(tenant)
        await self.schema(tenant, tables).ensure(client)
        return client

    def reset_schema_cache(self, tenant: Optional[str] = None) -> None:
        if tenant is None:
            for bootstrapper in self._schemas.values():
                bootstrapper.reset()
        elif tenant in self._schemas:
            self._schemas[tenant].reset()

    async def close(self) -> None:
        """Close every cached handle and forget them."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.close()


_default_context: Optional[DbContext] = None


def get_default_context() -> DbContext:
    """Return the process default context, built from the active config."""
    global _default_context
    if _default_context is None:
        _default_context = DbContext(get_db_config())
    return _default_context


def clear_default_context() -> None:
    global _default_context
    _default_context = None


def resolve_context(ctx: Optional[DbContext]) -> DbContext:
    return ctx if ctx is not None else get_default_context()

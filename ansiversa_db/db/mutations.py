"""Mutation registry lookups and the typed insert/update/delete helpers."""

import logging
from typing import Any, Callable, Mapping, Sequence, TypeVar

from ansiversa_db.db.connection import Database
from ansiversa_db.db.schema import TableOperations
from ansiversa_db.errors import MutationIntegrityError, UnknownOperationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

OPERATION_KEYS = ("insert", "update", "delete")

OperationRegistry = Mapping[str, TableOperations]


def get_operation(registry: OperationRegistry, table: str, operation: str) -> str:
    """Return the SQL template for ``table``/``operation`` or raise."""
    operations = registry.get(table)
    if operations is None or operation not in OPERATION_KEYS:
        raise UnknownOperationError(table, operation)
    return getattr(operations, operation)


async def insert_returning(
    db: Database,
    registry: OperationRegistry,
    table: str,
    args: Sequence[Any],
    mapper: Callable[[Mapping[str, Any]], T],
    entity: str,
) -> T:
    """Run the table's insert template and map the row it returns."""
    sql = get_operation(registry, table, "insert")
    row = await db.fetch_one(sql, args)
    if row is None:
        raise MutationIntegrityError(entity, "insert")
    logger.debug("Inserted %s into %s", entity, table)
    return mapper(row)


async def update_returning(
    db: Database,
    registry: OperationRegistry,
    table: str,
    args: Sequence[Any],
    mapper: Callable[[Mapping[str, Any]], T],
    entity: str,
) -> T:
    """Run the table's partial-update template; ``args`` ends with the id."""
    sql = get_operation(registry, table, "update")
    row = await db.fetch_one(sql, args)
    if row is None:
        raise MutationIntegrityError(entity, "update")
    logger.debug("Updated %s in %s", entity, table)
    return mapper(row)


async def delete_by_id(db: Database, registry: OperationRegistry, table: str, row_id: Any) -> bool:
    """Hard delete; dependents go with it through FK cascade."""
    sql = get_operation(registry, table, "delete")
    result = await db.execute(sql, (row_id,))
    deleted = result.rowcount > 0
    logger.debug("Delete %s id=%s: %s", table, row_id, "done" if deleted else "no match")
    return deleted

"""Table definitions and the once-per-process schema bootstrap."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ansiversa_db.db.connection import Database

logger = logging.getLogger(__name__)


def normalize(statement: str) -> str:
    """Strip surrounding whitespace and trailing spaces before newlines."""
    return re.sub(r"\s+\n", "\n", statement.strip())


@dataclass(frozen=True)
class TableOperations:
    insert: str
    update: str
    delete: str


@dataclass(frozen=True)
class TableDefinition:
    name: str
    description: str
    create_statement: str
    indexes: Tuple[str, ...] = ()
    operations: Optional[TableOperations] = None


def table_statements(tables: Sequence[TableDefinition]) -> List[str]:
    return [table.create_statement for table in tables]


def index_statements(tables: Sequence[TableDefinition]) -> List[str]:
    return [index for table in tables for index in table.indexes]


def operation_map(tables: Sequence[TableDefinition]) -> Dict[str, TableOperations]:
    return {table.name: table.operations for table in tables if table.operations}


class SchemaBootstrapper:
    """Creates a tenant's tables and indexes the first time it is asked to.

    Every statement is ``IF NOT EXISTS``, so running against an already
    provisioned database is harmless. A failure leaves the bootstrapper
    uninitialized and the next ``ensure()`` starts over.
    """

    def __init__(self, name: str, tables: Sequence[TableDefinition]):
        self.name = name
        self.tables = tuple(tables)
        self.initialized = False

    async def ensure(self, db: Database) -> None:
        if self.initialized:
            return

        for statement in table_statements(self.tables):
            await db.execute(statement)
        for statement in index_statements(self.tables):
            await db.execute(statement)

        self.initialized = True
        logger.info("Schema ready for %s (%d tables)", self.name, len(self.tables))

    def reset(self) -> None:
        self.initialized = False

"""Shared data-access machinery: handles, context, schema, queries, mutations."""

from ansiversa_db.db.connection import Database, Result, SQLiteDatabase, LibsqlDatabase, connect
from ansiversa_db.db.context import DbContext, get_default_context, resolve_context
from ansiversa_db.db.schema import SchemaBootstrapper, TableDefinition, TableOperations
from ansiversa_db.db.query import ListOptions, Page, SortSpec, build_list_query, paginate
from ansiversa_db.db.mutations import get_operation

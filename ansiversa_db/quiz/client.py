"""Quiz tenant handle and schema bootstrap."""

from typing import Optional

from ansiversa_db.db.connection import Database
from ansiversa_db.db.context import DbContext, resolve_context
from ansiversa_db.quiz.tables import QUIZ_TABLES

QUIZ_TENANT = "quiz"


def get_quiz_db(ctx: Optional[DbContext] = None) -> Database:
    return resolve_context(ctx).get_client(QUIZ_TENANT)


def reset_quiz_client(ctx: Optional[DbContext] = None) -> None:
    resolve_context(ctx).reset_client(QUIZ_TENANT)


async def ensure_quiz_schema(ctx: Optional[DbContext] = None) -> Database:
    """Create the quiz tables once per context and return the quiz handle."""
    return await resolve_context(ctx).ensure_schema(QUIZ_TENANT, QUIZ_TABLES)


def reset_quiz_schema_cache(ctx: Optional[DbContext] = None) -> None:
    resolve_context(ctx).reset_schema_cache(QUIZ_TENANT)

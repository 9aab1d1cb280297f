"""Quiz tenant: catalog, questions and attempt results."""

from ansiversa_db.quiz import catalog, questions, results
from ansiversa_db.quiz.client import (
    QUIZ_TENANT,
    ensure_quiz_schema,
    get_quiz_db,
    reset_quiz_client,
    reset_quiz_schema_cache,
)
from ansiversa_db.quiz.models import Difficulty
from ansiversa_db.quiz.tables import QUIZ_OPERATIONS, QUIZ_TABLES

__all__ = [
    "catalog",
    "questions",
    "results",
    "QUIZ_TENANT",
    "ensure_quiz_schema",
    "get_quiz_db",
    "reset_quiz_client",
    "reset_quiz_schema_cache",
    "Difficulty",
    "QUIZ_OPERATIONS",
    "QUIZ_TABLES",
]

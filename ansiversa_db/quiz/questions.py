"""CRUD operations and random selection for quiz questions."""

import json
from typing import Any, List, Mapping, Optional, Union

from ansiversa_db.db.coerce import as_model, to_flag
from ansiversa_db.db.context import DbContext
from ansiversa_db.db.mutations import delete_by_id, insert_returning, update_returning
from ansiversa_db.db.query import (
    OptionsInput,
    Page,
    build_list_query,
    coerce_options,
    is_pattern,
    normalize_page_size,
    paginate,
    with_camel_aliases,
)
from ansiversa_db.quiz.client import ensure_quiz_schema
from ansiversa_db.quiz.mappers import to_question
from ansiversa_db.quiz.models import Question, QuestionCreate, QuestionUpdate, to_difficulty
from ansiversa_db.quiz.tables import QUESTION_COLUMNS, QUIZ_OPERATIONS

QUESTION_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "platform_id": "platform_id",
    "subject_id": "subject_id",
    "topic_id": "topic_id",
    "roadmap_id": "roadmap_id",
    "prompt": "q",
    "answer": "a",
    "level": "l",
    "is_active": "is_active",
})

DEFAULT_RANDOM_QUESTIONS = 10

Input = Union[Mapping[str, Any], Any]


async def list_questions(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Question]:
    """Paginated questions, ordered by id unless a sort is requested.

    A ``level`` filter is normalised the same way stored levels are, so
    ``"m"`` finds Medium questions.
    """
    db = await ensure_quiz_schema(ctx)
    opts = coerce_options(options)
    level = opts.filters.get("level")
    if level is not None and not is_pattern(level):
        opts = opts.model_copy(update={"filters": {**opts.filters, "level": to_difficulty(level).value}})
    query = build_list_query("questions", QUESTION_COLUMNS, QUESTION_COLUMN_MAP, opts, "id")
    return await paginate(db, query, to_question)


async def get_question_by_id(question_id: int, *, ctx: Optional[DbContext] = None) -> Optional[Question]:
    db = await ensure_quiz_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(QUESTION_COLUMNS)} FROM questions WHERE id = ? LIMIT 1",
        (question_id,),
    )
    return to_question(row) if row else None


async def create_question(data: Input, *, ctx: Optional[DbContext] = None) -> Question:
    payload = as_model(QuestionCreate, data)
    db = await ensure_quiz_schema(ctx)
    return await insert_returning(
        db, QUIZ_OPERATIONS, "questions",
        (
            payload.platform_id, payload.subject_id, payload.topic_id, payload.roadmap_id,
            payload.prompt, json.dumps(payload.options), payload.answer, payload.explanation,
            to_difficulty(payload.level).value, to_flag(payload.is_active),
        ),
        to_question, "question",
    )


async def update_question(data: Input, *, ctx: Optional[DbContext] = None) -> Question:
    payload = as_model(QuestionUpdate, data)
    options = json.dumps(payload.options) if payload.options is not None else None
    level = to_difficulty(payload.level).value if payload.level is not None else None
    db = await ensure_quiz_schema(ctx)
    return await update_returning(
        db, QUIZ_OPERATIONS, "questions",
        (
            payload.platform_id, payload.subject_id, payload.topic_id, payload.roadmap_id,
            payload.prompt, options, payload.answer, payload.explanation,
            level, to_flag(payload.is_active), payload.id,
        ),
        to_question, f"question {payload.id}",
    )


async def delete_question(question_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    db = await ensure_quiz_schema(ctx)
    return await delete_by_id(db, QUIZ_OPERATIONS, "questions", question_id)


async def get_random_questions(
    roadmap_id: int,
    limit: Any = DEFAULT_RANDOM_QUESTIONS,
    level: Any = None,
    *,
    ctx: Optional[DbContext] = None,
) -> List[Question]:
    """Pick up to ``limit`` (1..100) active questions of a roadmap at random.

    Args:
        roadmap_id: Roadmap to draw from.
        limit: Number of questions wanted; clamped to 1..100, and missing or
            non-numeric values mean 10.
        level: Optional difficulty; normalised like stored levels.
    """
    db = await ensure_quiz_schema(ctx)
    normalized_limit = normalize_page_size(limit, default=DEFAULT_RANDOM_QUESTIONS)

    clauses = ["roadmap_id = ?", "is_active = 1"]
    args: List[Any] = [roadmap_id]
    if level is not None:
        clauses.append("l = ?")
        args.append(to_difficulty(level).value)
    args.append(normalized_limit)

    rows = await db.fetch_all(
        f"SELECT {', '.join(QUESTION_COLUMNS)} FROM questions "
        f"WHERE {' AND '.join(clauses)} ORDER BY RANDOM() LIMIT ?",
        args,
    )
    return [to_question(row) for row in rows]

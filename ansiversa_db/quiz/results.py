"""Quiz attempt results. Results are written once and never updated."""

import json
from typing import Any, List, Mapping, Optional, Union

from ansiversa_db.db.coerce import as_model
from ansiversa_db.db.context import DbContext
from ansiversa_db.db.mutations import delete_by_id, insert_returning
from ansiversa_db.db.query import OptionsInput, Page, build_list_query, paginate, with_camel_aliases
from ansiversa_db.quiz.client import ensure_quiz_schema
from ansiversa_db.quiz.mappers import to_result
from ansiversa_db.quiz.models import Result, ResultCreate, to_difficulty
from ansiversa_db.quiz.tables import QUIZ_OPERATIONS, RESULT_COLUMNS

RESULT_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "user_id": "user_id",
    "platform_id": "platform_id",
    "subject_id": "subject_id",
    "topic_id": "topic_id",
    "roadmap_id": "roadmap_id",
    "level": "level",
    "mark": "mark",
    "created_at": "created_at",
})

Input = Union[Mapping[str, Any], Any]


async def create_result(data: Input, *, ctx: Optional[DbContext] = None) -> Result:
    """Record one attempt; the returned row carries the server timestamp."""
    payload = as_model(ResultCreate, data)
    responses = json.dumps([response.model_dump() for response in payload.responses])
    db = await ensure_quiz_schema(ctx)
    return await insert_returning(
        db, QUIZ_OPERATIONS, "results",
        (
            payload.user_id, payload.platform_id, payload.subject_id, payload.topic_id,
            payload.roadmap_id, to_difficulty(payload.level).value, responses, payload.mark,
        ),
        to_result, "result",
    )


async def get_result_by_id(result_id: int, *, ctx: Optional[DbContext] = None) -> Optional[Result]:
    db = await ensure_quiz_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(RESULT_COLUMNS)} FROM results WHERE id = ? LIMIT 1",
        (result_id,),
    )
    return to_result(row) if row else None


async def list_results(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Result]:
    """Paginated results, newest first unless a sort is requested."""
    db = await ensure_quiz_schema(ctx)
    query = build_list_query(
        "results", RESULT_COLUMNS, RESULT_COLUMN_MAP, options, "id", default_direction="DESC"
    )
    return await paginate(db, query, to_result)


async def list_results_for_user(
    user_id: str,
    roadmap_id: Optional[int] = None,
    *,
    ctx: Optional[DbContext] = None,
) -> List[Result]:
    """Every result of a user, newest first, optionally for one roadmap."""
    db = await ensure_quiz_schema(ctx)
    sql = f"SELECT {', '.join(RESULT_COLUMNS)} FROM results WHERE user_id = ?"
    args: List[Any] = [user_id]
    if roadmap_id is not None:
        sql += " AND roadmap_id = ?"
        args.append(roadmap_id)
    sql += " ORDER BY id DESC"

    rows = await db.fetch_all(sql, args)
    return [to_result(row) for row in rows]


async def delete_result(result_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    db = await ensure_quiz_schema(ctx)
    return await delete_by_id(db, QUIZ_OPERATIONS, "results", result_id)

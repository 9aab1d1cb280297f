"""CRUD operations for the quiz catalog: platforms, subjects, topics, roadmaps."""

from typing import Any, Mapping, Optional, Union

from ansiversa_db.db.coerce import as_model, to_flag
from ansiversa_db.db.context import DbContext
from ansiversa_db.db.mutations import delete_by_id, insert_returning, update_returning
from ansiversa_db.db.query import OptionsInput, Page, build_list_query, paginate, with_camel_aliases
from ansiversa_db.quiz.client import ensure_quiz_schema
from ansiversa_db.quiz.mappers import to_platform, to_roadmap, to_subject, to_topic
from ansiversa_db.quiz.models import (
    Platform,
    PlatformCreate,
    PlatformUpdate,
    Roadmap,
    RoadmapCreate,
    RoadmapUpdate,
    Subject,
    SubjectCreate,
    SubjectUpdate,
    Topic,
    TopicCreate,
    TopicUpdate,
)
from ansiversa_db.quiz.tables import (
    PLATFORM_COLUMNS,
    QUIZ_OPERATIONS,
    ROADMAP_COLUMNS,
    SUBJECT_COLUMNS,
    TOPIC_COLUMNS,
)

PLATFORM_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "name": "name",
    "description": "description",
    "is_active": "is_active",
    "icon": "icon",
    "type": "type",
    "q_count": "q_count",
})

SUBJECT_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "platform_id": "platform_id",
    "name": "name",
    "is_active": "is_active",
    "q_count": "q_count",
})

TOPIC_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "platform_id": "platform_id",
    "subject_id": "subject_id",
    "name": "name",
    "is_active": "is_active",
    "q_count": "q_count",
})

ROADMAP_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "platform_id": "platform_id",
    "subject_id": "subject_id",
    "topic_id": "topic_id",
    "name": "name",
    "is_active": "is_active",
    "q_count": "q_count",
})

Input = Union[Mapping[str, Any], Any]


# ── Platforms ─────────────────────────────────────────────

async def list_platforms(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Platform]:
    db = await ensure_quiz_schema(ctx)
    query = build_list_query("platforms", PLATFORM_COLUMNS, PLATFORM_COLUMN_MAP, options, "name")
    return await paginate(db, query, to_platform)


async def get_platform_by_id(platform_id: int, *, ctx: Optional[DbContext] = None) -> Optional[Platform]:
    db = await ensure_quiz_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(PLATFORM_COLUMNS)} FROM platforms WHERE id = ? LIMIT 1",
        (platform_id,),
    )
    return to_platform(row) if row else None


async def create_platform(data: Input, *, ctx: Optional[DbContext] = None) -> Platform:
    payload = as_model(PlatformCreate, data)
    db = await ensure_quiz_schema(ctx)
    return await insert_returning(
        db, QUIZ_OPERATIONS, "platforms",
        (
            payload.name, payload.description, to_flag(payload.is_active),
            payload.icon, payload.type, payload.q_count,
        ),
        to_platform, "platform",
    )


async def update_platform(data: Input, *, ctx: Optional[DbContext] = None) -> Platform:
    """Partial update: only fields that are set change."""
    payload = as_model(PlatformUpdate, data)
    db = await ensure_quiz_schema(ctx)
    return await update_returning(
        db, QUIZ_OPERATIONS, "platforms",
        (
            payload.name, payload.description, to_flag(payload.is_active),
            payload.icon, payload.type, payload.q_count, payload.id,
        ),
        to_platform, f"platform {payload.id}",
    )


async def delete_platform(platform_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    """Delete a platform and, by cascade, everything beneath it."""
    db = await ensure_quiz_schema(ctx)
    return await delete_by_id(db, QUIZ_OPERATIONS, "platforms", platform_id)


# ── Subjects ──────────────────────────────────────────────

async def list_subjects(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Subject]:
    db = await ensure_quiz_schema(ctx)
    query = build_list_query("subjects", SUBJECT_COLUMNS, SUBJECT_COLUMN_MAP, options, "name")
    return await paginate(db, query, to_subject)


async def get_subject_by_id(subject_id: int, *, ctx: Optional[DbContext] = None) -> Optional[Subject]:
    db = await ensure_quiz_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(SUBJECT_COLUMNS)} FROM subjects WHERE id = ? LIMIT 1",
        (subject_id,),
    )
    return to_subject(row) if row else None


async def create_subject(data: Input, *, ctx: Optional[DbContext] = None) -> Subject:
    payload = as_model(SubjectCreate, data)
    db = await ensure_quiz_schema(ctx)
    return await insert_returning(
        db, QUIZ_OPERATIONS, "subjects",
        (payload.id, payload.platform_id, payload.name, to_flag(payload.is_active), payload.q_count),
        to_subject, "subject",
    )


async def update_subject(data: Input, *, ctx: Optional[DbContext] = None) -> Subject:
    payload = as_model(SubjectUpdate, data)
    db = await ensure_quiz_schema(ctx)
    return await update_returning(
        db, QUIZ_OPERATIONS, "subjects",
        (payload.platform_id, payload.name, to_flag(payload.is_active), payload.q_count, payload.id),
        to_subject, f"subject {payload.id}",
    )


async def delete_subject(subject_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    db = await ensure_quiz_schema(ctx)
    return await delete_by_id(db, QUIZ_OPERATIONS, "subjects", subject_id)


# ── Topics ────────────────────────────────────────────────

async def list_topics(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Topic]:
    db = await ensure_quiz_schema(ctx)
    query = build_list_query("topics", TOPIC_COLUMNS, TOPIC_COLUMN_MAP, options, "name")
    return await paginate(db, query, to_topic)


async def get_topic_by_id(topic_id: int, *, ctx: Optional[DbContext] = None) -> Optional[Topic]:
    db = await ensure_quiz_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(TOPIC_COLUMNS)} FROM topics WHERE id = ? LIMIT 1",
        (topic_id,),
    )
    return to_topic(row) if row else None


async def create_topic(data: Input, *, ctx: Optional[DbContext] = None) -> Topic:
    payload = as_model(TopicCreate, data)
    db = await ensure_quiz_schema(ctx)
    return await insert_returning(
        db, QUIZ_OPERATIONS, "topics",
        (
            payload.id, payload.platform_id, payload.subject_id, payload.name,
            to_flag(payload.is_active), payload.q_count,
        ),
        to_topic, "topic",
    )


async def update_topic(data: Input, *, ctx: Optional[DbContext] = None) -> Topic:
    payload = as_model(TopicUpdate, data)
    db = await ensure_quiz_schema(ctx)
    return await update_returning(
        db, QUIZ_OPERATIONS, "topics",
        (
            payload.platform_id, payload.subject_id, payload.name,
            to_flag(payload.is_active), payload.q_count, payload.id,
        ),
        to_topic, f"topic {payload.id}",
    )


async def delete_topic(topic_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    db = await ensure_quiz_schema(ctx)
    return await delete_by_id(db, QUIZ_OPERATIONS, "topics", topic_id)


# ── Roadmaps ──────────────────────────────────────────────

async def list_roadmaps(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Roadmap]:
    db = await ensure_quiz_schema(ctx)
    query = build_list_query("roadmaps", ROADMAP_COLUMNS, ROADMAP_COLUMN_MAP, options, "name")
    return await paginate(db, query, to_roadmap)


async def get_roadmap_by_id(roadmap_id: int, *, ctx: Optional[DbContext] = None) -> Optional[Roadmap]:
    db = await ensure_quiz_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(ROADMAP_COLUMNS)} FROM roadmaps WHERE id = ? LIMIT 1",
        (roadmap_id,),
    )
    return to_roadmap(row) if row else None


async def create_roadmap(data: Input, *, ctx: Optional[DbContext] = None) -> Roadmap:
    payload = as_model(RoadmapCreate, data)
    db = await ensure_quiz_schema(ctx)
    return await insert_returning(
        db, QUIZ_OPERATIONS, "roadmaps",
        (
            payload.id, payload.platform_id, payload.subject_id, payload.topic_id,
            payload.name, to_flag(payload.is_active), payload.q_count,
        ),
        to_roadmap, "roadmap",
    )


async def update_roadmap(data: Input, *, ctx: Optional[DbContext] = None) -> Roadmap:
    payload = as_model(RoadmapUpdate, data)
    db = await ensure_quiz_schema(ctx)
    return await update_returning(
        db, QUIZ_OPERATIONS, "roadmaps",
        (
            payload.platform_id, payload.subject_id, payload.topic_id, payload.name,
            to_flag(payload.is_active), payload.q_count, payload.id,
        ),
        to_roadmap, f"roadmap {payload.id}",
    )


async def delete_roadmap(roadmap_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    db = await ensure_quiz_schema(ctx)
    return await delete_by_id(db, QUIZ_OPERATIONS, "roadmaps", roadmap_id)

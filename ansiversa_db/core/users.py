"""CRUD operations for the core users table."""

import uuid
from typing import Any, Mapping, Optional, Union

from ansiversa_db.core.client import ensure_core_schema
from ansiversa_db.core.mappers import to_user
from ansiversa_db.core.models import User, UserCreate, UserUpdate
from ansiversa_db.core.tables import CORE_OPERATIONS, USER_COLUMNS
from ansiversa_db.db.coerce import as_model
from ansiversa_db.db.context import DbContext
from ansiversa_db.db.mutations import delete_by_id, insert_returning, update_returning
from ansiversa_db.db.query import OptionsInput, Page, build_list_query, paginate, with_camel_aliases

USER_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "email": "email",
    "name": "name",
    "created_at": "created_at",
    "updated_at": "updated_at",
})

Input = Union[Mapping[str, Any], Any]


async def get_user_by_id(user_id: str, *, ctx: Optional[DbContext] = None) -> Optional[User]:
    db = await ensure_core_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(USER_COLUMNS)} FROM users WHERE id = ? LIMIT 1",
        (user_id,),
    )
    return to_user(row) if row else None


async def get_user_by_email(email: str, *, ctx: Optional[DbContext] = None) -> Optional[User]:
    db = await ensure_core_schema(ctx)
    row = await db.fetch_one(
        f"SELECT {', '.join(USER_COLUMNS)} FROM users WHERE email = ? LIMIT 1",
        (email,),
    )
    return to_user(row) if row else None


async def list_users(options: OptionsInput = None, *, ctx: Optional[DbContext] = None) -> Page[User]:
    db = await ensure_core_schema(ctx)
    query = build_list_query("users", USER_COLUMNS, USER_COLUMN_MAP, options, "email")
    return await paginate(db, query, to_user)


async def create_user(data: Input, *, ctx: Optional[DbContext] = None) -> User:
    payload = as_model(UserCreate, data)
    user_id = payload.id or str(uuid.uuid4())
    db = await ensure_core_schema(ctx)
    return await insert_returning(
        db, CORE_OPERATIONS, "users", (user_id, payload.email, payload.name), to_user, "user",
    )


async def update_user(data: Input, *, ctx: Optional[DbContext] = None) -> User:
    payload = as_model(UserUpdate, data)
    db = await ensure_core_schema(ctx)
    return await update_returning(
        db, CORE_OPERATIONS, "users", (payload.email, payload.name, payload.id),
        to_user, f"user {payload.id}",
    )


async def delete_user(user_id: str, *, ctx: Optional[DbContext] = None) -> bool:
    """Delete a user; their subscriptions go with them."""
    db = await ensure_core_schema(ctx)
    return await delete_by_id(db, CORE_OPERATIONS, "users", user_id)

"""CRUD operations for user subscriptions."""

from typing import Any, List, Mapping, Optional, Union

from ansiversa_db.core.client import ensure_core_schema
from ansiversa_db.core.mappers import to_subscription
from ansiversa_db.core.models import (
    Subscription,
    SubscriptionCreate,
    SubscriptionStatus,
    SubscriptionUpdate,
    normalize_status_input,
)
from ansiversa_db.core.tables import CORE_OPERATIONS, SUBSCRIPTION_COLUMNS
from ansiversa_db.db.coerce import as_model
from ansiversa_db.db.context import DbContext
from ansiversa_db.db.mutations import delete_by_id, insert_returning, update_returning
from ansiversa_db.db.query import (
    OptionsInput,
    Page,
    build_list_query,
    coerce_options,
    is_pattern,
    paginate,
    with_camel_aliases,
)

SUBSCRIPTION_COLUMN_MAP = with_camel_aliases({
    "id": "id",
    "user_id": "user_id",
    "plan": "plan",
    "status": "status",
    "period_start": "period_start",
    "period_end": "period_end",
    "created_at": "created_at",
})

SELECT_SUBSCRIPTIONS = f"SELECT {', '.join(SUBSCRIPTION_COLUMNS)} FROM subscriptions"

Input = Union[Mapping[str, Any], Any]


def _status_value(status: Optional[SubscriptionStatus]) -> Optional[str]:
    return status.value if status is not None else None


async def list_subscriptions(
    options: OptionsInput = None, *, ctx: Optional[DbContext] = None
) -> Page[Subscription]:
    db = await ensure_core_schema(ctx)
    opts = coerce_options(options)
    status = opts.filters.get("status")
    if status is not None and not is_pattern(status):
        opts = opts.model_copy(
            update={"filters": {**opts.filters, "status": normalize_status_input(status)}}
        )
    query = build_list_query(
        "subscriptions", SUBSCRIPTION_COLUMNS, SUBSCRIPTION_COLUMN_MAP, opts,
        "id", default_direction="DESC",
    )
    return await paginate(db, query, to_subscription)


async def get_subscription_by_id(
    subscription_id: int, *, ctx: Optional[DbContext] = None
) -> Optional[Subscription]:
    db = await ensure_core_schema(ctx)
    row = await db.fetch_one(f"{SELECT_SUBSCRIPTIONS} WHERE id = ? LIMIT 1", (subscription_id,))
    return to_subscription(row) if row else None


async def get_subscriptions_for_user(
    user_id: str, *, ctx: Optional[DbContext] = None
) -> List[Subscription]:
    """All subscriptions of a user, newest first."""
    db = await ensure_core_schema(ctx)
    rows = await db.fetch_all(
        f"{SELECT_SUBSCRIPTIONS} WHERE user_id = ? ORDER BY created_at DESC, id DESC",
        (user_id,),
    )
    return [to_subscription(row) for row in rows]


async def get_active_subscription_for_user(
    user_id: str, *, ctx: Optional[DbContext] = None
) -> Optional[Subscription]:
    db = await ensure_core_schema(ctx)
    row = await db.fetch_one(
        f"{SELECT_SUBSCRIPTIONS} WHERE user_id = ? AND status = ? "
        "ORDER BY created_at DESC, id DESC LIMIT 1",
        (user_id, SubscriptionStatus.ACTIVE.value),
    )
    return to_subscription(row) if row else None


async def create_subscription(data: Input, *, ctx: Optional[DbContext] = None) -> Subscription:
    """Insert a subscription; status defaults to ``active``."""
    payload = as_model(SubscriptionCreate, data)
    db = await ensure_core_schema(ctx)
    return await insert_returning(
        db, CORE_OPERATIONS, "subscriptions",
        (
            payload.user_id, payload.plan, _status_value(payload.status),
            payload.period_start, payload.period_end,
        ),
        to_subscription, "subscription",
    )


async def update_subscription(data: Input, *, ctx: Optional[DbContext] = None) -> Subscription:
    payload = as_model(SubscriptionUpdate, data)
    db = await ensure_core_schema(ctx)
    return await update_returning(
        db, CORE_OPERATIONS, "subscriptions",
        (
            payload.plan, _status_value(payload.status),
            payload.period_start, payload.period_end, payload.id,
        ),
        to_subscription, f"subscription {payload.id}",
    )


async def update_subscription_status(
    subscription_id: int,
    status: Any,
    period_end: Optional[str] = None,
    *,
    ctx: Optional[DbContext] = None,
) -> Subscription:
    """Change status (and optionally extend/close the validity window).

    Raises:
        pydantic.ValidationError: If ``status`` is not a known subscription status.
    """
    return await update_subscription(
        SubscriptionUpdate(id=subscription_id, status=status, period_end=period_end), ctx=ctx
    )


async def delete_subscription(subscription_id: int, *, ctx: Optional[DbContext] = None) -> bool:
    db = await ensure_core_schema(ctx)
    return await delete_by_id(db, CORE_OPERATIONS, "subscriptions", subscription_id)

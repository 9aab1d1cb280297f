"""Raw core rows -> typed records."""

from typing import Any, Mapping

from ansiversa_db.core.models import Subscription, User, to_subscription_status
from ansiversa_db.db.coerce import first_present, to_int, to_optional_str, to_str, to_timestamp

Row = Mapping[str, Any]


def to_user(row: Row) -> User:
    return User(
        id=to_str(row.get("id")),
        email=to_str(row.get("email")),
        name=to_optional_str(row.get("name")),
        created_at=to_timestamp(first_present(row, "created_at", "createdAt")),
        updated_at=to_timestamp(first_present(row, "updated_at", "updatedAt")),
    )


def to_subscription(row: Row) -> Subscription:
    return Subscription(
        id=to_int(row.get("id")),
        user_id=to_str(row.get("user_id")),
        plan=to_str(row.get("plan")),
        status=to_subscription_status(row.get("status")),
        period_start=to_optional_str(row.get("period_start")),
        period_end=to_optional_str(row.get("period_end")),
        created_at=to_timestamp(first_present(row, "created_at", "createdAt")),
        updated_at=to_timestamp(first_present(row, "updated_at", "updatedAt")),
    )

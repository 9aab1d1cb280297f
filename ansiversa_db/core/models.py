"""Typed core records and mutation inputs."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


def normalize_status_input(value: Any) -> Any:
    """Lower-case caller input and accept the ``canceled`` spelling; no defaulting."""
    if isinstance(value, SubscriptionStatus) or not isinstance(value, str):
        return value
    status = value.strip().lower()
    return SubscriptionStatus.CANCELLED.value if status == "canceled" else status


def to_subscription_status(value: Any) -> SubscriptionStatus:
    """Lower-case the input; ``canceled`` is accepted, unknown means expired."""
    if isinstance(value, SubscriptionStatus):
        return value
    status = str(value).strip().lower() if value is not None else ""
    if status == "canceled":
        return SubscriptionStatus.CANCELLED
    try:
        return SubscriptionStatus(status)
    except ValueError:
        return SubscriptionStatus.EXPIRED


class User(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    created_at: str
    updated_at: str


class Subscription(BaseModel):
    id: int
    user_id: str
    plan: str
    status: SubscriptionStatus
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    created_at: str
    updated_at: str


class UserCreate(BaseModel):
    """Omit ``id`` to have one generated."""
    email: str = Field(..., min_length=3)
    name: Optional[str] = None
    id: Optional[str] = None


class UserUpdate(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None


class SubscriptionCreate(BaseModel):
    user_id: str
    plan: str = Field(..., min_length=1)
    status: Optional[SubscriptionStatus] = None
    period_start: Optional[str] = None
    period_end: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return normalize_status_input(value)


class SubscriptionUpdate(BaseModel):
    id: int
    plan: Optional[str] = None
    status: Optional[SubscriptionStatus] = None
    period_start: Optional[str] = None
    period_end: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return normalize_status_input(value)

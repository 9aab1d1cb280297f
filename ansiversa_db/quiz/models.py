"""Typed quiz records and mutation inputs."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    EASY = "E"
    MEDIUM = "M"
    HARD = "D"


def to_difficulty(value: Any) -> Difficulty:
    """Upper-case the input; anything but ``M`` or ``D`` is Easy."""
    if isinstance(value, Difficulty):
        return value
    symbol = str(value).strip().upper() if value is not None else ""
    if symbol == Difficulty.MEDIUM.value:
        return Difficulty.MEDIUM
    if symbol == Difficulty.HARD.value:
        return Difficulty.HARD
    return Difficulty.EASY


# ── Records ───────────────────────────────────────────────

class Platform(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool = True
    icon: str = ""
    type: Optional[str] = None
    q_count: int = 0


class Subject(BaseModel):
    id: int
    platform_id: int
    name: str
    is_active: bool = True
    q_count: int = 0


class Topic(BaseModel):
    id: int
    platform_id: int
    subject_id: int
    name: str
    is_active: bool = True
    q_count: int = 0


class Roadmap(BaseModel):
    id: int
    platform_id: int
    subject_id: int
    topic_id: int
    name: str
    is_active: bool = True
    q_count: int = 0


class Question(BaseModel):
    id: int
    platform_id: int
    subject_id: int
    topic_id: int
    roadmap_id: int
    prompt: str
    options: Dict[str, Any] = Field(default_factory=dict)
    answer: str
    explanation: Optional[str] = None
    level: Difficulty = Difficulty.EASY
    is_active: bool = True


class ResultResponse(BaseModel):
    """One answered question inside a result."""
    question_id: int
    selected_key: Optional[str] = None
    correct_key: str = ""
    is_correct: bool = False


class Result(BaseModel):
    id: int
    user_id: str
    platform_id: int
    subject_id: int
    topic_id: int
    roadmap_id: int
    level: Difficulty = Difficulty.EASY
    responses: List[ResultResponse] = Field(default_factory=list)
    mark: int = 0
    created_at: str


# ── Inputs ────────────────────────────────────────────────
# Optional fields left as None keep the column default on insert and the
# stored value on update.

class PlatformCreate(BaseModel):
    name: str = Field(..., min_length=1)
    icon: str
    description: Optional[str] = None
    is_active: Optional[bool] = None
    type: Optional[str] = None
    q_count: Optional[int] = None


class PlatformUpdate(BaseModel):
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    icon: Optional[str] = None
    type: Optional[str] = None
    q_count: Optional[int] = None


class SubjectCreate(BaseModel):
    platform_id: int
    name: str = Field(..., min_length=1)
    id: Optional[int] = None
    is_active: Optional[bool] = None
    q_count: Optional[int] = None


class SubjectUpdate(BaseModel):
    id: int
    platform_id: Optional[int] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None
    q_count: Optional[int] = None


class TopicCreate(BaseModel):
    platform_id: int
    subject_id: int
    name: str = Field(..., min_length=1)
    id: Optional[int] = None
    is_active: Optional[bool] = None
    q_count: Optional[int] = None


class TopicUpdate(BaseModel):
    id: int
    platform_id: Optional[int] = None
    subject_id: Optional[int] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None
    q_count: Optional[int] = None


class RoadmapCreate(BaseModel):
    platform_id: int
    subject_id: int
    topic_id: int
    name: str = Field(..., min_length=1)
    id: Optional[int] = None
    is_active: Optional[bool] = None
    q_count: Optional[int] = None


class RoadmapUpdate(BaseModel):
    id: int
    platform_id: Optional[int] = None
    subject_id: Optional[int] = None
    topic_id: Optional[int] = None
    name: Optional[str] = None
    is_active: Optional[bool] = None
    q_count: Optional[int] = None


class QuestionCreate(BaseModel):
    platform_id: int
    subject_id: int
    topic_id: int
    roadmap_id: int
    prompt: str = Field(..., min_length=1)
    options: Dict[str, Any]
    answer: str
    explanation: Optional[str] = None
    level: Any = Difficulty.EASY
    is_active: Optional[bool] = None


class QuestionUpdate(BaseModel):
    id: int
    platform_id: Optional[int] = None
    subject_id: Optional[int] = None
    topic_id: Optional[int] = None
    roadmap_id: Optional[int] = None
    prompt: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    answer: Optional[str] = None
    explanation: Optional[str] = None
    level: Any = None
    is_active: Optional[bool] = None


class ResultCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    platform_id: int
    subject_id: int
    topic_id: int
    roadmap_id: int
    level: Any = Difficulty.EASY
    responses: List[ResultResponse] = Field(default_factory=list)
    mark: Optional[int] = None

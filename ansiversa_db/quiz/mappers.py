"""Raw quiz rows -> typed records."""

from typing import Any, Mapping

from ansiversa_db.db.coerce import (
    first_present,
    parse_json_list,
    parse_json_object,
    to_bool,
    to_int,
    to_optional_str,
    to_str,
    to_timestamp,
)
from ansiversa_db.quiz.models import (
    Platform,
    Question,
    Result,
    ResultResponse,
    Roadmap,
    Subject,
    Topic,
    to_difficulty,
)

Row = Mapping[str, Any]


def to_platform(row: Row) -> Platform:
    return Platform(
        id=to_int(row.get("id")),
        name=to_str(row.get("name")),
        description=to_optional_str(row.get("description")),
        is_active=to_bool(row.get("is_active")),
        icon=to_str(row.get("icon")),
        type=to_optional_str(row.get("type")),
        q_count=to_int(row.get("q_count")),
    )


def to_subject(row: Row) -> Subject:
    return Subject(
        id=to_int(row.get("id")),
        platform_id=to_int(row.get("platform_id")),
        name=to_str(row.get("name")),
        is_active=to_bool(row.get("is_active")),
        q_count=to_int(row.get("q_count")),
    )


def to_topic(row: Row) -> Topic:
    return Topic(
        id=to_int(row.get("id")),
        platform_id=to_int(row.get("platform_id")),
        subject_id=to_int(row.get("subject_id")),
        name=to_str(row.get("name")),
        is_active=to_bool(row.get("is_active")),
        q_count=to_int(row.get("q_count")),
    )


def to_roadmap(row: Row) -> Roadmap:
    return Roadmap(
        id=to_int(row.get("id")),
        platform_id=to_int(row.get("platform_id")),
        subject_id=to_int(row.get("subject_id")),
        topic_id=to_int(row.get("topic_id")),
        name=to_str(row.get("name")),
        is_active=to_bool(row.get("is_active")),
        q_count=to_int(row.get("q_count")),
    )


def to_question(row: Row) -> Question:
    return Question(
        id=to_int(row.get("id")),
        platform_id=to_int(row.get("platform_id")),
        subject_id=to_int(row.get("subject_id")),
        topic_id=to_int(row.get("topic_id")),
        roadmap_id=to_int(row.get("roadmap_id")),
        prompt=to_str(row.get("q")),
        options=parse_json_object(row.get("o"), "questions.o"),
        answer=to_str(row.get("a")),
        explanation=to_optional_str(row.get("e")),
        level=to_difficulty(row.get("l")),
        is_active=to_bool(row.get("is_active")),
    )


def to_result_response(entry: Any) -> ResultResponse:
    if not isinstance(entry, Mapping):
        entry = {}
    return ResultResponse(
        question_id=to_int(first_present(entry, "question_id", "questionId")),
        selected_key=to_optional_str(first_present(entry, "selected_key", "selectedKey")),
        correct_key=to_str(first_present(entry, "correct_key", "correctKey")),
        is_correct=to_bool(first_present(entry, "is_correct", "isCorrect")),
    )


def to_result(row: Row) -> Result:
    responses = parse_json_list(row.get("responses"), "results.responses")
    return Result(
        id=to_int(row.get("id")),
        user_id=to_str(row.get("user_id")),
        platform_id=to_int(row.get("platform_id")),
        subject_id=to_int(row.get("subject_id")),
        topic_id=to_int(row.get("topic_id")),
        roadmap_id=to_int(row.get("roadmap_id")),
        level=to_difficulty(row.get("level")),
        responses=[to_result_response(entry) for entry in responses],
        mark=to_int(row.get("mark")),
        created_at=to_timestamp(first_present(row, "created_at", "createdAt")),
    )

"""
Tests for lenient row coercion and the entity mappers.
"""

import json

import pytest

from ansiversa_db.core.mappers import to_subscription, to_user
from ansiversa_db.core.models import SubscriptionStatus, to_subscription_status
from ansiversa_db.db.coerce import (
    as_model,
    parse_json_list,
    parse_json_object,
    to_bool,
    to_flag,
    to_int,
    to_timestamp,
)
from ansiversa_db.quiz.mappers import to_platform, to_question, to_result
from ansiversa_db.quiz.models import Difficulty, PlatformCreate, to_difficulty


class TestScalars:
    """Test scalar coercion."""

    @pytest.mark.parametrize("raw,expected", [
        (None, 0), (5, 5), ("12", 12), ("3.7", 3), ("abc", 0), (float("inf"), 0),
    ])
    def test_to_int(self, raw, expected):
        assert to_int(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        (None, False), (True, True), (1, True), (0, False), (2, True),
        ("true", True), ("TRUE", True), ("1", True), ("0", False), ("yes", False),
    ])
    def test_to_bool(self, raw, expected):
        assert to_bool(raw) is expected

    def test_to_flag(self):
        assert to_flag(None) is None
        assert to_flag(True) == 1
        assert to_flag(False) == 0

    def test_to_timestamp(self):
        assert to_timestamp("2024-01-01 00:00:00") == "2024-01-01 00:00:00"
        assert to_timestamp(None).endswith("+00:00")


class TestJson:
    """Test JSON column parsing."""

    def test_object(self):
        assert parse_json_object('{"A": "1"}') == {"A": "1"}

    def test_malformed_object(self, caplog):
        assert parse_json_object("{not json", "questions.o") == {}
        assert "questions.o" in caplog.text

    def test_wrong_shape(self):
        assert parse_json_object("[1, 2]") == {}
        assert parse_json_list('{"a": 1}') == []

    def test_already_decoded(self):
        assert parse_json_list([1, 2]) == [1, 2]
        assert parse_json_object(None) == {}


class TestDifficulty:
    """Test difficulty symbol normalisation."""

    @pytest.mark.parametrize("raw,expected", [
        ("e", Difficulty.EASY),
        ("M", Difficulty.MEDIUM),
        ("m", Difficulty.MEDIUM),
        ("d", Difficulty.HARD),
        ("X", Difficulty.EASY),
        (None, Difficulty.EASY),
        (Difficulty.HARD, Difficulty.HARD),
    ])
    def test_to_difficulty(self, raw, expected):
        assert to_difficulty(raw) is expected


class TestSubscriptionStatus:
    """Test subscription status normalisation."""

    @pytest.mark.parametrize("raw,expected", [
        ("active", SubscriptionStatus.ACTIVE),
        ("ACTIVE", SubscriptionStatus.ACTIVE),
        ("canceled", SubscriptionStatus.CANCELLED),
        ("cancelled", SubscriptionStatus.CANCELLED),
        ("paused", SubscriptionStatus.EXPIRED),
        (None, SubscriptionStatus.EXPIRED),
    ])
    def test_to_subscription_status(self, raw, expected):
        assert to_subscription_status(raw) is expected


class TestQuizMappers:
    """Test raw quiz rows -> records."""

    def test_question_row(self):
        row = {
            "id": "4", "platform_id": 1, "subject_id": 2, "topic_id": 3, "roadmap_id": 4,
            "q": "2 + 2?", "o": json.dumps({"A": "3", "B": "4"}), "a": "B", "e": None,
            "l": "m", "is_active": 1,
        }

        question = to_question(row)

        assert question.id == 4
        assert question.prompt == "2 + 2?"
        assert question.options == {"A": "3", "B": "4"}
        assert question.answer == "B"
        assert question.explanation is None
        assert question.level is Difficulty.MEDIUM
        assert question.is_active is True

    def test_question_with_broken_options(self):
        question = to_question({"id": 1, "o": "oops", "l": None})

        assert question.options == {}
        assert question.level is Difficulty.EASY
        assert question.is_active is False

    def test_platform_defaults(self):
        platform = to_platform({"id": 1, "name": "School"})

        assert platform.icon == ""
        assert platform.description is None
        assert platform.q_count == 0

    def test_result_accepts_camel_case_responses(self):
        row = {
            "id": 9, "user_id": "u1", "platform_id": 1, "subject_id": 1, "topic_id": 1,
            "roadmap_id": 1, "level": "D", "mark": "3",
            "responses": json.dumps([
                {"questionId": 5, "selectedKey": "A", "correctKey": "B", "isCorrect": False},
                {"question_id": 6, "selected_key": "C", "correct_key": "C", "is_correct": True},
            ]),
            "createdAt": "2024-05-01 10:00:00",
        }

        result = to_result(row)

        assert result.level is Difficulty.HARD
        assert result.mark == 3
        assert result.created_at == "2024-05-01 10:00:00"
        assert [r.question_id for r in result.responses] == [5, 6]
        assert result.responses[0].selected_key == "A"
        assert result.responses[1].is_correct is True

    def test_result_with_non_list_responses(self):
        result = to_result({"id": 1, "responses": '{"a": 1}'})

        assert result.responses == []


class TestCoreMappers:
    """Test raw core rows -> records."""

    def test_user(self):
        user = to_user({"id": "u1", "email": "a@b.c", "name": None, "created_at": "t1", "updated_at": "t2"})

        assert (user.id, user.email, user.name) == ("u1", "a@b.c", None)
        assert (user.created_at, user.updated_at) == ("t1", "t2")

    def test_subscription_unknown_status(self):
        subscription = to_subscription({"id": 1, "user_id": "u1", "plan": "pro", "status": "weird"})

        assert subscription.status is SubscriptionStatus.EXPIRED


class TestAsModel:
    """Test accepting models or mappings as input."""

    def test_mapping(self):
        assert as_model(PlatformCreate, {"name": "School", "icon": "i"}).name == "School"

    def test_instance_passthrough(self):
        payload = PlatformCreate(name="School", icon="i")

        assert as_model(PlatformCreate, payload) is payload

"""
Tests for the mutation registry and the RETURNING helpers.
"""

import pytest

from ansiversa_db.db.mutations import delete_by_id, get_operation, insert_returning, update_returning
from ansiversa_db.errors import AnsiversaDbError, MutationIntegrityError, UnknownOperationError
from ansiversa_db.quiz.tables import QUIZ_OPERATIONS


class TestGetOperation:
    """Test registry lookups."""

    def test_known_operation(self):
        sql = get_operation(QUIZ_OPERATIONS, "platforms", "insert")

        assert sql.startswith("INSERT INTO platforms")

    def test_unknown_table(self):
        with pytest.raises(UnknownOperationError) as exc_info:
            get_operation(QUIZ_OPERATIONS, "quizzes", "insert")

        assert exc_info.value.table == "quizzes"
        assert "quizzes" in str(exc_info.value)

    def test_unknown_operation(self):
        with pytest.raises(UnknownOperationError) as exc_info:
            get_operation(QUIZ_OPERATIONS, "platforms", "upsert")

        assert exc_info.value.operation == "upsert"

    def test_error_hierarchy(self):
        """Test lookups fail like a missing key and like a package error."""
        with pytest.raises(KeyError):
            get_operation(QUIZ_OPERATIONS, "nope", "delete")
        with pytest.raises(AnsiversaDbError):
            get_operation(QUIZ_OPERATIONS, "nope", "delete")


class TestReturningHelpers:
    """Test insert/update/delete against a recording database."""

    async def test_insert_maps_returned_row(self, make_recording_db):
        db = make_recording_db(rows=[{"id": 3}])

        created = await insert_returning(
            db, QUIZ_OPERATIONS, "platforms", ("n", None, None, "i", None, None),
            lambda row: row["id"], "platform",
        )

        assert created == 3
        assert db.statements[0][0] == QUIZ_OPERATIONS["platforms"].insert

    async def test_insert_without_row(self, make_recording_db):
        db = make_recording_db()

        with pytest.raises(MutationIntegrityError) as exc_info:
            await insert_returning(db, QUIZ_OPERATIONS, "platforms", (), dict, "platform")

        assert str(exc_info.value) == "Failed to insert platform: statement returned no row"

    async def test_update_without_row(self, make_recording_db):
        db = make_recording_db()

        with pytest.raises(MutationIntegrityError) as exc_info:
            await update_returning(db, QUIZ_OPERATIONS, "subjects", (), dict, "subject 9")

        assert exc_info.value.action == "update"
        assert exc_info.value.entity == "subject 9"

    async def test_delete_reports_match(self, make_recording_db):
        assert await delete_by_id(make_recording_db(rows=[{}]), QUIZ_OPERATIONS, "topics", 1) is True
        assert await delete_by_id(make_recording_db(), QUIZ_OPERATIONS, "topics", 1) is False

    async def test_unknown_table_never_reaches_database(self, make_recording_db):
        db = make_recording_db(rows=[{"id": 1}])

        with pytest.raises(UnknownOperationError):
            await insert_returning(db, QUIZ_OPERATIONS, "quizzes", (), dict, "quiz")

        assert db.statements == []

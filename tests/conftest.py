"""
Pytest configuration and shared fixtures.

This module provides:
- A clean process configuration for every test
- A DbContext over throwaway SQLite files for the core and quiz tenants
- Seed helpers for the quiz catalog hierarchy
"""

import pytest

from ansiversa_db.config import reset_db_config
from ansiversa_db.db.connection import Database, Result
from ansiversa_db.db.context import DbContext
from ansiversa_db.quiz import catalog


@pytest.fixture(autouse=True)
def clean_config():
    """Start and finish every test without an installed configuration."""
    reset_db_config()
    yield
    reset_db_config()


@pytest.fixture
def db_config(tmp_path):
    """Config dict pointing both tenants at files under ``tmp_path``."""
    return {
        "core": {"url": f"file:{tmp_path / 'core.db'}", "auth_token": "test-token"},
        "apps": {
            "quiz": {"url": f"file:{tmp_path / 'quiz.db'}", "auth_token": "test-token"},
        },
    }


@pytest.fixture
async def ctx(db_config):
    """
    Provide a DbContext for tests.

    Handles are opened lazily and closed after the test.
    """
    context = DbContext(db_config)
    yield context
    await context.close()


@pytest.fixture
async def hierarchy(ctx):
    """One platform -> subject -> topic -> roadmap chain."""
    platform = await catalog.create_platform({"name": "School", "icon": "school"}, ctx=ctx)
    subject = await catalog.create_subject(
        {"platform_id": platform.id, "name": "Maths"}, ctx=ctx
    )
    topic = await catalog.create_topic(
        {"platform_id": platform.id, "subject_id": subject.id, "name": "Algebra"}, ctx=ctx
    )
    roadmap = await catalog.create_roadmap(
        {
            "platform_id": platform.id,
            "subject_id": subject.id,
            "topic_id": topic.id,
            "name": "Linear equations",
        },
        ctx=ctx,
    )
    return {"platform": platform, "subject": subject, "topic": topic, "roadmap": roadmap}


class RecordingDatabase(Database):
    """In-memory Database double that records statements and replays rows."""

    def __init__(self, rows=None, fail_on=None):
        self.statements = []
        self.rows = list(rows or [])
        self.fail_on = fail_on
        self.closed = False

    async def execute(self, query, args=()):
        self.statements.append((query, tuple(args)))
        if self.fail_on is not None and self.fail_on in query:
            raise RuntimeError(f"boom: {self.fail_on}")
        return Result(rows=list(self.rows), rowcount=len(self.rows), lastrowid=None)

    async def close(self):
        self.closed = True


@pytest.fixture
def recording_db():
    return RecordingDatabase()


@pytest.fixture
def make_recording_db():
    """Factory for RecordingDatabase doubles with canned rows or failures."""
    return RecordingDatabase

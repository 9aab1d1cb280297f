"""
Tests for the quiz catalog: platforms, subjects, topics and roadmaps.
"""

import pytest

from ansiversa_db.errors import MutationIntegrityError
from ansiversa_db.quiz import catalog, questions
from ansiversa_db.quiz.models import PlatformUpdate


class TestPlatforms:
    """Test platform CRUD."""

    async def test_create_applies_defaults(self, ctx):
        platform = await catalog.create_platform({"name": "Medical", "icon": "stethoscope"}, ctx=ctx)

        assert platform.id > 0
        assert platform.is_active is True
        assert platform.q_count == 0
        assert platform.description is None

    async def test_partial_update_keeps_other_fields(self, ctx):
        """Test only the supplied fields change."""
        # Arrange
        created = await catalog.create_platform(
            {"name": "School", "icon": "school", "description": "K-12", "type": "edu", "q_count": 40},
            ctx=ctx,
        )

        # Act
        updated = await catalog.update_platform(
            PlatformUpdate(id=created.id, description="Primary and secondary"), ctx=ctx
        )

        # Assert
        assert updated.description == "Primary and secondary"
        assert updated.name == "School"
        assert updated.icon == "school"
        assert updated.type == "edu"
        assert updated.q_count == created.q_count == 40
        assert updated.is_active is created.is_active

    async def test_deactivate(self, ctx):
        created = await catalog.create_platform({"name": "Old", "icon": "x"}, ctx=ctx)

        updated = await catalog.update_platform({"id": created.id, "is_active": False}, ctx=ctx)

        assert updated.is_active is False

    async def test_update_missing_platform(self, ctx):
        with pytest.raises(MutationIntegrityError):
            await catalog.update_platform({"id": 404, "name": "Ghost"}, ctx=ctx)

    async def test_get_missing(self, ctx):
        assert await catalog.get_platform_by_id(404, ctx=ctx) is None

    async def test_list_sorted_by_name_with_like(self, ctx):
        for name in ("School", "Medical", "Sports"):
            await catalog.create_platform({"name": name, "icon": "i"}, ctx=ctx)

        everything = await catalog.list_platforms(ctx=ctx)
        starting_with_s = await catalog.list_platforms({"filters": {"name": "S%"}}, ctx=ctx)

        assert [p.name for p in everything.items] == ["Medical", "School", "Sports"]
        assert everything.total == 3
        assert [p.name for p in starting_with_s.items] == ["School", "Sports"]
        assert starting_with_s.total == 2

    async def test_filter_by_active_flag(self, ctx):
        await catalog.create_platform({"name": "On", "icon": "i"}, ctx=ctx)
        await catalog.create_platform({"name": "Off", "icon": "i", "is_active": False}, ctx=ctx)

        page = await catalog.list_platforms({"filters": {"isActive": True}}, ctx=ctx)

        assert [p.name for p in page.items] == ["On"]


class TestHierarchy:
    """Test subjects, topics and roadmaps beneath a platform."""

    async def test_create_chain(self, ctx, hierarchy):
        roadmap = hierarchy["roadmap"]

        fetched = await catalog.get_roadmap_by_id(roadmap.id, ctx=ctx)

        assert fetched == roadmap
        assert fetched.topic_id == hierarchy["topic"].id
        assert fetched.subject_id == hierarchy["subject"].id

    async def test_explicit_subject_id(self, ctx, hierarchy):
        subject = await catalog.create_subject(
            {"id": 500, "platform_id": hierarchy["platform"].id, "name": "Physics"}, ctx=ctx
        )

        assert subject.id == 500
        assert (await catalog.get_subject_by_id(500, ctx=ctx)).name == "Physics"

    async def test_list_subjects_by_platform(self, ctx, hierarchy):
        other = await catalog.create_platform({"name": "Medical", "icon": "m"}, ctx=ctx)
        await catalog.create_subject({"platform_id": other.id, "name": "Anatomy"}, ctx=ctx)

        page = await catalog.list_subjects({"filters": {"platformId": other.id}}, ctx=ctx)

        assert [s.name for s in page.items] == ["Anatomy"]

    async def test_update_topic(self, ctx, hierarchy):
        topic = await catalog.update_topic(
            {"id": hierarchy["topic"].id, "name": "Linear algebra", "q_count": 12}, ctx=ctx
        )

        assert topic.name == "Linear algebra"
        assert topic.q_count == 12
        assert topic.subject_id == hierarchy["subject"].id

    async def test_delete_platform_cascades(self, ctx, hierarchy):
        """Test removing a platform removes everything beneath it."""
        platform_id = hierarchy["platform"].id
        await questions.create_question(
            {
                "platform_id": platform_id,
                "subject_id": hierarchy["subject"].id,
                "topic_id": hierarchy["topic"].id,
                "roadmap_id": hierarchy["roadmap"].id,
                "prompt": "x + 1 = 2, x = ?",
                "options": {"A": "1", "B": "2"},
                "answer": "A",
            },
            ctx=ctx,
        )

        deleted = await catalog.delete_platform(platform_id, ctx=ctx)

        assert deleted is True
        assert (await catalog.list_subjects({"filters": {"platform_id": platform_id}}, ctx=ctx)).items == []
        assert (await catalog.list_topics(ctx=ctx)).total == 0
        assert (await catalog.list_roadmaps(ctx=ctx)).total == 0
        assert (await questions.list_questions(ctx=ctx)).total == 0

    async def test_delete_missing(self, ctx):
        assert await catalog.delete_roadmap(404, ctx=ctx) is False

"""Tests for the Redis-backed record and view-state cache."""
import json
from datetime import datetime

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.exceptions import NotFound
from app.schemas.note import NoteCreate
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services import note_actions, project_actions, view_cache
from app.services.view_pipeline import NoteSortField, NoteViewState


def note_data(title, project_id=None):
    return NoteCreate(title=title, content="body", date=datetime(2024, 1, 1), project_id=project_id)


class TestRowCache:

    async def test_rows_are_cached(self, db_session, users, fake_redis):
        await note_actions.create_note(db_session, "alice", note_data("First"))

        rows = await view_cache.load_rows(db_session, "alice", view_cache.NOTES)

        assert [row.title for row in rows] == ["First"]
        cached = json.loads(await fake_redis.get(view_cache.rows_key("alice", "notes")))
        assert cached[0]["title"] == "First"
        assert await fake_redis.ttl(view_cache.rows_key("alice", "notes")) > 0

    async def test_cached_rows_are_served(self, db_session, users, fake_redis):
        await fake_redis.set(view_cache.rows_key("alice", "tags"), "[]")
        assert await view_cache.load_rows(db_session, "alice", view_cache.TAGS) == []

    async def test_note_mutation_invalidates_lists(self, db_session, users, fake_redis):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="Work"))
        for view in (view_cache.NOTES, view_cache.PROJECTS, view_cache.TAGS):
            await view_cache.load_rows(db_session, "alice", view)

        await note_actions.create_note(db_session, "alice", note_data("Fresh", project.id))

        for view in ("notes", "projects", "tags"):
            assert await fake_redis.get(view_cache.rows_key("alice", view)) is None
        notes = await view_cache.load_rows(db_session, "alice", view_cache.NOTES)
        projects = await view_cache.load_rows(db_session, "alice", view_cache.PROJECTS)
        assert [note.title for note in notes] == ["Fresh"]
        assert projects[0].note_count == 1

    async def test_project_rename_reaches_note_rows(self, db_session, users):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="Work"))
        await note_actions.create_note(db_session, "alice", note_data("Standup", project.id))
        await view_cache.load_rows(db_session, "alice", view_cache.NOTES)

        await project_actions.update_project(db_session, "alice", project.id, ProjectUpdate(name="Office"))

        notes = await view_cache.load_rows(db_session, "alice", view_cache.NOTES)
        assert notes[0].project.name == "Office"

    async def test_invalidation_is_per_user(self, db_session, users, fake_redis):
        await view_cache.load_rows(db_session, "bob", view_cache.NOTES)
        await note_actions.create_note(db_session, "alice", note_data("Mine"))
        assert await fake_redis.get(view_cache.rows_key("bob", "notes")) is not None

    async def test_mutation_survives_failed_invalidation(self, db_session, users, fake_redis, monkeypatch):
        async def unavailable(*keys):
            raise RedisConnectionError("redis is down")

        monkeypatch.setattr(fake_redis, "delete", unavailable)

        note = await note_actions.create_note(db_session, "alice", note_data("Saved"))

        assert note.title == "Saved"
        fetched = await note_actions.get_note(db_session, "alice", note.id)
        assert fetched.title == "Saved"

    async def test_unknown_view(self, db_session):
        with pytest.raises(NotFound):
            await view_cache.load_rows(db_session, "alice", "calendar")


class TestStateStore:

    async def test_default_state(self, fake_redis):
        state = await view_cache.load_state("alice", "notes")
        assert state == NoteViewState()

    async def test_save_and_load(self, fake_redis):
        state = NoteViewState()
        state.toggle_sort(NoteSortField.TITLE)
        state.set_search("alp")
        await view_cache.save_state("alice", "notes", state)

        loaded = await view_cache.load_state("alice", "notes")
        assert loaded.search == "alp"
        assert loaded.sort_field == NoteSortField.TITLE
        assert await view_cache.load_state("bob", "notes") == NoteViewState()

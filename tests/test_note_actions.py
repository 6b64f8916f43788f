"""Tests for the note mutation actions."""
from datetime import datetime

import pytest
from sqlalchemy import func, select

from app.core.exceptions import NotFound, Unauthorized, ValidationError
from app.models.note import Note
from app.models.note_tag import note_tags
from app.schemas.note import NoteCreate, NoteUpdate
from app.schemas.project import ProjectCreate
from app.schemas.tag import TagCreate
from app.services import note_actions, project_actions, tag_actions


def new_note(**overrides):
    data = {
        "title": "Standup",
        "content": "Talk about the release",
        "date": datetime(2024, 3, 1, 10, 0),
        "project_id": None,
        "tag_ids": [],
    }
    data.update(overrides)
    return NoteCreate(**data)


@pytest.fixture
async def work(db_session, users):
    return await project_actions.create_project(db_session, "alice", ProjectCreate(name="Work"))


@pytest.fixture
async def urgent(db_session, users):
    return await tag_actions.create_tag(db_session, "alice", TagCreate(name="urgent"))


@pytest.fixture
async def later(db_session, users):
    return await tag_actions.create_tag(db_session, "alice", TagCreate(name="later"))


class TestCreateNote:

    async def test_create_assigns_owner(self, db_session, users, work, urgent):
        note = await note_actions.create_note(
            db_session, "alice", new_note(project_id=work.id, tag_ids=[urgent.id])
        )

        assert note.id is not None
        assert note.user_id == "alice"
        assert note.title == "Standup"
        assert note.project.name == "Work"
        assert [tag.name for tag in note.tags] == ["urgent"]
        assert note.created_at is not None

    async def test_requires_user(self, db_session):
        with pytest.raises(Unauthorized):
            await note_actions.create_note(db_session, "", new_note())

    async def test_rejects_project_of_another_user(self, db_session, users, work):
        with pytest.raises(ValidationError):
            await note_actions.create_note(db_session, "bob", new_note(project_id=work.id))

    async def test_rejects_unknown_tags(self, db_session, users, urgent):
        with pytest.raises(ValidationError) as exc_info:
            await note_actions.create_note(db_session, "alice", new_note(tag_ids=[urgent.id, 999]))
        assert "999" in exc_info.value.message

    def test_blank_fields_fail_validation(self):
        with pytest.raises(ValueError):
            new_note(title="   ")
        with pytest.raises(ValueError):
            new_note(content="")

    def test_duplicate_tag_ids_collapse(self):
        assert new_note(tag_ids=[3, 1, 3]).tag_ids == [3, 1]


class TestUpdateNote:

    async def test_update_replaces_fields_and_tags(self, db_session, users, work, urgent, later):
        note = await note_actions.create_note(db_session, "alice", new_note(tag_ids=[urgent.id]))

        updated = await note_actions.update_note(
            db_session,
            "alice",
            note.id,
            NoteUpdate(
                title="Retro",
                content="What went well",
                date=datetime(2024, 3, 8),
                project_id=work.id,
                tag_ids=[later.id],
            ),
        )

        assert updated.title == "Retro"
        assert updated.project_id == work.id
        assert [tag.id for tag in updated.tags] == [later.id]
        assert updated.user_id == "alice"

    async def test_update_clears_project_and_tags(self, db_session, users, work, urgent):
        note = await note_actions.create_note(
            db_session, "alice", new_note(project_id=work.id, tag_ids=[urgent.id])
        )
        updated = await note_actions.update_note(
            db_session, "alice", note.id, NoteUpdate(**new_note().model_dump())
        )
        assert updated.project is None
        assert updated.tags == []

    async def test_other_user_cannot_update(self, db_session, users):
        note = await note_actions.create_note(db_session, "alice", new_note())
        with pytest.raises(NotFound):
            await note_actions.update_note(
                db_session, "bob", note.id, NoteUpdate(**new_note(title="Mine").model_dump())
            )
        assert (await note_actions.get_note(db_session, "alice", note.id)).title == "Standup"

    async def test_missing_note(self, db_session, users):
        with pytest.raises(NotFound):
            await note_actions.update_note(db_session, "alice", 404, NoteUpdate(**new_note().model_dump()))


class TestDeleteNote:

    async def test_delete_removes_tag_links(self, db_session, users, urgent):
        note = await note_actions.create_note(db_session, "alice", new_note(tag_ids=[urgent.id]))

        await note_actions.delete_note(db_session, "alice", note.id)

        assert await db_session.scalar(select(func.count()).select_from(Note)) == 0
        assert await db_session.scalar(select(func.count()).select_from(note_tags)) == 0
        # The tag is no longer referenced and can go
        await tag_actions.delete_tag(db_session, "alice", urgent.id)

    async def test_other_user_cannot_delete(self, db_session, users):
        note = await note_actions.create_note(db_session, "alice", new_note())
        with pytest.raises(NotFound):
            await note_actions.delete_note(db_session, "bob", note.id)
        assert await note_actions.get_note(db_session, "alice", note.id)

    async def test_get_note_is_owner_scoped(self, db_session, users):
        note = await note_actions.create_note(db_session, "alice", new_note())
        with pytest.raises(NotFound):
            await note_actions.get_note(db_session, "bob", note.id)

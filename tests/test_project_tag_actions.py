"""Tests for project and tag actions, including the delete guard."""
from datetime import datetime

import pytest

from app.core.exceptions import ConflictError, NotFound, Unauthorized
from app.schemas.note import NoteCreate
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.schemas.tag import TagCreate, TagUpdate
from app.services import note_actions, project_actions, tag_actions


async def add_note(db, user_id, project_id=None, tag_ids=()):
    return await note_actions.create_note(
        db,
        user_id,
        NoteCreate(
            title="Note",
            content="Body",
            date=datetime(2024, 1, 1),
            project_id=project_id,
            tag_ids=list(tag_ids),
        ),
    )


class TestProjects:

    async def test_create_and_rename(self, db_session, users):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="  Work "))
        assert project.name == "Work"
        assert project.note_count == 0

        renamed = await project_actions.update_project(
            db_session, "alice", project.id, ProjectUpdate(name="Office")
        )
        assert renamed.name == "Office"
        assert renamed.id == project.id

    async def test_rename_requires_ownership(self, db_session, users):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="Work"))
        with pytest.raises(NotFound):
            await project_actions.update_project(db_session, "bob", project.id, ProjectUpdate(name="Mine"))
        assert (await project_actions.get_project(db_session, "alice", project.id)).name == "Work"

    async def test_delete_with_notes_conflicts(self, db_session, users):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="Work"))
        await add_note(db_session, "alice", project_id=project.id)
        await add_note(db_session, "alice", project_id=project.id)

        with pytest.raises(ConflictError) as exc_info:
            await project_actions.delete_project(db_session, "alice", project.id)

        assert "2 notes" in exc_info.value.message
        unchanged = await project_actions.get_project(db_session, "alice", project.id)
        assert unchanged.name == "Work"
        assert unchanged.note_count == 2

    async def test_delete_without_notes(self, db_session, users):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="Empty"))
        await project_actions.delete_project(db_session, "alice", project.id)
        with pytest.raises(NotFound):
            await project_actions.get_project(db_session, "alice", project.id)

    async def test_delete_other_users_project(self, db_session, users):
        project = await project_actions.create_project(db_session, "alice", ProjectCreate(name="Work"))
        with pytest.raises(NotFound):
            await project_actions.delete_project(db_session, "bob", project.id)

    async def test_requires_user(self, db_session):
        with pytest.raises(Unauthorized):
            await project_actions.create_project(db_session, None, ProjectCreate(name="Work"))


class TestTags:

    async def test_note_count(self, db_session, users):
        tag = await tag_actions.create_tag(db_session, "alice", TagCreate(name="urgent"))
        await add_note(db_session, "alice", tag_ids=[tag.id])
        assert (await tag_actions.get_tag(db_session, "alice", tag.id)).note_count == 1

    async def test_delete_with_one_note_conflicts(self, db_session, users):
        tag = await tag_actions.create_tag(db_session, "alice", TagCreate(name="urgent"))
        await add_note(db_session, "alice", tag_ids=[tag.id])

        with pytest.raises(ConflictError) as exc_info:
            await tag_actions.delete_tag(db_session, "alice", tag.id)
        assert exc_info.value.message == "Cannot delete tag: still referenced by 1 note"

    async def test_delete_unused_tag(self, db_session, users):
        tag = await tag_actions.create_tag(db_session, "alice", TagCreate(name="spare"))
        await tag_actions.delete_tag(db_session, "alice", tag.id)
        with pytest.raises(NotFound):
            await tag_actions.get_tag(db_session, "alice", tag.id)

    async def test_rename_missing_tag(self, db_session, users):
        with pytest.raises(NotFound):
            await tag_actions.update_tag(db_session, "alice", 12345, TagUpdate(name="x"))

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            TagCreate(name=" ")

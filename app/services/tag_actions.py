import logging

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFound
from app.models.tag import Tag
from app.schemas.tag import TagCreate, TagResponse, TagUpdate
from app.services import records, view_cache
from app.services.guards import require_user, still_referenced

logger = logging.getLogger(__name__)

# Notes embed tag names
AFFECTED_VIEWS = (view_cache.TAGS, view_cache.NOTES)


async def get_tag(db: AsyncSession, user_id: str, tag_id: int) -> TagResponse:
    require_user(user_id)
    tag = await records.get_tag(db, tag_id, user_id)
    if not tag:
        raise NotFound("Tag not found")
    return tag


async def create_tag(db: AsyncSession, user_id: str, data: TagCreate) -> TagResponse:
    require_user(user_id)
    tag = Tag(name=data.name, user_id=user_id)
    db.add(tag)
    await db.commit()

    created = await records.get_tag(db, tag.id, user_id)
    logger.info("Created tag %s for user %s", created.id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
    return created


async def update_tag(
    db: AsyncSession, user_id: str, tag_id: int, data: TagUpdate
) -> TagResponse:
    require_user(user_id)
    result = await db.execute(
        update(Tag)
        .where(Tag.id == tag_id, Tag.user_id == user_id)
        .values(name=data.name)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Tag not found")
    await db.commit()

    updated = await records.get_tag(db, tag_id, user_id)
    logger.info("Updated tag %s for user %s", tag_id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)
    return updated


async def delete_tag(db: AsyncSession, user_id: str, tag_id: int) -> None:
    require_user(user_id)
    tag = await records.get_tag(db, tag_id, user_id)
    if not tag:
        raise NotFound("Tag not found")
    if tag.note_count > 0:
        raise still_referenced("tag", tag.note_count)

    await db.execute(delete(Tag).where(Tag.id == tag_id, Tag.user_id == user_id))
    await db.commit()

    logger.info("Deleted tag %s for user %s", tag_id, user_id)
    await view_cache.invalidate(user_id, *AFFECTED_VIEWS)

"""Redis cache for the per-user record lists and view states.

Record lists are cached as JSON under ``views:{user_id}:{view}:rows`` with a
TTL; mutations drop the keys of the views they affect so the next read goes
back to the database. View states live under ``views:{user_id}:{view}:state``
and are kept until the user resets them.
"""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Type

from pydantic import TypeAdapter
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFound
from app.core.redis_client import get_redis
from app.schemas.note import NoteResponse
from app.schemas.project import ProjectResponse
from app.schemas.tag import TagResponse
from app.services import records
from app.services.view_pipeline import VIEW_STATES, ViewState

logger = logging.getLogger(__name__)

NOTES = "notes"
PROJECTS = "projects"
TAGS = "tags"

_FETCHERS: Dict[str, Callable[[AsyncSession, str], Awaitable[List[Any]]]] = {
    NOTES: records.fetch_notes,
    PROJECTS: records.fetch_projects,
    TAGS: records.fetch_tags,
}

_ADAPTERS: Dict[str, TypeAdapter] = {
    NOTES: TypeAdapter(List[NoteResponse]),
    PROJECTS: TypeAdapter(List[ProjectResponse]),
    TAGS: TypeAdapter(List[TagResponse]),
}


def rows_key(user_id: str, view: str) -> str:
    return f"views:{user_id}:{view}:rows"


def state_key(user_id: str, view: str) -> str:
    return f"views:{user_id}:{view}:state"


def _check_view(view: str) -> None:
    if view not in VIEW_STATES:
        raise NotFound(f"Unknown view '{view}'")


async def load_rows(db: AsyncSession, user_id: str, view: str) -> List[Any]:
    """Return the user's records for a view, from cache when possible"""
    _check_view(view)
    redis_client = await get_redis()
    adapter = _ADAPTERS[view]

    cached = await redis_client.get(rows_key(user_id, view))
    if cached is not None:
        logger.debug("View cache hit: %s/%s", user_id, view)
        return adapter.validate_json(cached)

    logger.debug("View cache miss: %s/%s", user_id, view)
    rows = await _FETCHERS[view](db, user_id)
    await redis_client.setex(
        rows_key(user_id, view),
        settings.VIEW_CACHE_TTL_SECONDS,
        adapter.dump_json(rows),
    )
    return rows


async def invalidate(user_id: str, *views: str) -> None:
    """Drop cached record lists so the next read re-fetches them"""
    if not views:
        return
    redis_client = await get_redis()
    try:
        await redis_client.delete(*(rows_key(user_id, view) for view in views))
    except RedisError:
        # The write is already committed; stale rows expire with the TTL
        logger.exception("Failed to invalidate views %s for %s", ", ".join(views), user_id)
        return
    logger.debug("Invalidated views %s for %s", ", ".join(views), user_id)


async def load_state(user_id: str, view: str) -> ViewState:
    _check_view(view)
    state_class: Type[ViewState] = VIEW_STATES[view]
    redis_client = await get_redis()
    raw = await redis_client.get(state_key(user_id, view))
    if raw is None:
        return state_class()
    return state_class.model_validate_json(raw)


async def save_state(user_id: str, view: str, state: ViewState) -> None:
    _check_view(view)
    redis_client = await get_redis()
    await redis_client.set(state_key(user_id, view), state.model_dump_json())

from fastapi import APIRouter
from app.api.v1.endpoints import users, notes, projects, tags, views

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(views.router, prefix="/views", tags=["views"])

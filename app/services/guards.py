from app.core.exceptions import ConflictError, Unauthorized


def require_user(user_id: str) -> str:
    if not user_id:
        raise Unauthorized()
    return user_id


def still_referenced(kind: str, note_count: int) -> ConflictError:
    noun = "note" if note_count == 1 else "notes"
    return ConflictError(f"Cannot delete {kind}: still referenced by {note_count} {noun}")

# app/routers/content.py
from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    UploadFile,
    status,
)
from sqlmodel import Session

from app.core.auth import require_auth
from app.database import get_session
from app.models.user import User
from app.repositories.activity_repo import ActivityRepository
from app.repositories.content_repo import ContentRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.content import (
    Category,
    ContentEntryCreate,
    ContentEntryRead,
    ContentEntryUpdate,
)
from app.services.content_service import ContentService

router = APIRouter(prefix="/content", tags=["Content"])

service = ContentService(ContentRepository(), ActivityRepository(), StatsRepository())


@router.get("", response_model=list[ContentEntryRead])
def list_my_content(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    All of the current user's entries, newest first.
    """
    return service.list_entries(session, current_user)


@router.get("/{category}", response_model=list[ContentEntryRead])
def list_my_content_by_category(
    category: Category,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    The current user's entries in one category, newest first.
    """
    return service.list_entries(session, current_user, category)


@router.post("", response_model=ContentEntryRead, status_code=status.HTTP_201_CREATED)
def create_content(
    payload: ContentEntryCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Create an entry for the current user.

    Also appends a "content_created" activity row.
    """
    return service.create_entry(session, current_user, payload)


@router.put("/{entry_id}", response_model=ContentEntryRead)
def update_content(
    entry_id: int,
    payload: ContentEntryUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update one of the current user's entries.

    403 if the entry belongs to someone else.
    """
    return service.update_entry(session, current_user, entry_id, payload)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_content(
    entry_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Delete one of the current user's entries (and its stored image).
    """
    service.delete_entry(session, current_user, entry_id)
    return None


@router.post(
    "/{entry_id}/image",
    response_model=ContentEntryRead,
    summary="Upload or replace the image of a content entry",
)
def upload_content_image(
    entry_id: int,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Upload a new image for the entry.

    - Accepts JPEG, PNG, WEBP.
    - Replaces any previous image.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    file_bytes = file.file.read()
    return service.set_image(
        session=session,
        user=current_user,
        entry_id=entry_id,
        content_type=file.content_type,
        file_bytes=file_bytes,
    )

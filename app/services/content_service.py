# app/services/content_service.py
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.ownership import require_owned
from app.core.storage_utils import (
    upload_to_storage,
    delete_public_url,
    extract_path_from_public_url,
    generate_filename,
)
from app.models.activity import ActivityLog
from app.models.content import ContentEntry
from app.models.user import User
from app.repositories.activity_repo import ActivityRepository
from app.repositories.content_repo import ContentRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.content import ContentEntryCreate, ContentEntryUpdate

logger = logging.getLogger(__name__)


# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def _counter_deltas(category: str, sign: int) -> dict[str, int]:
    """Counters touched by adding (sign=1) or removing (sign=-1) an entry."""
    deltas = {"total_entries": sign}
    if category == "rituals":
        deltas["active_rituals"] = sign
    return deltas


class ContentService:
    """
    Business logic for content entries.

    Responsibilities:
      - owner is always the authenticated user (never the request body)
      - ownership check before every update/delete
      - activity row + counters on create
      - image upload/replace orchestration with Supabase Storage
    """

    def __init__(
        self,
        repo: ContentRepository,
        activity_repo: ActivityRepository,
        stats_repo: StatsRepository,
    ):
        self.repo = repo
        self.activity_repo = activity_repo
        self.stats_repo = stats_repo

    # ---- internal helpers ----

    def _get_owned(self, session: Session, user: User, entry_id: int) -> ContentEntry:
        entry = self.repo.get_by_id(session, entry_id)
        return require_owned(entry, user, "Content entry")

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    @staticmethod
    def _discard_image(user: User, url: str) -> None:
        """
        Remove an old entry image from Storage.

        Only objects under the owner's own `users/<id>/` prefix are touched;
        external links and other users' files are left alone. Runs after the
        DB change is committed, so a Storage failure is logged, not raised.
        """
        path = extract_path_from_public_url(url)
        if not path or not path.startswith(f"users/{user.id}/"):
            return
        try:
            delete_public_url(url)
        except Exception as e:
            logger.warning(f"Could not delete Storage object {path}: {e}")

    # ---- public operations ----

    def list_entries(
        self,
        session: Session,
        user: User,
        category: str | None = None,
    ) -> list[ContentEntry]:
        return self.repo.list_for_user(session, user.id, category)

    def create_entry(
        self,
        session: Session,
        user: User,
        payload: ContentEntryCreate,
    ) -> ContentEntry:
        """
        Create an entry owned by `user`.

        Side effects:
          - appends a "content_created" activity row
          - bumps total_entries (and active_rituals for rituals)
        """
        entry = ContentEntry(user_id=user.id, **payload.model_dump())
        entry = self.repo.create(session, entry)

        self.activity_repo.create(
            session,
            ActivityLog(
                user_id=user.id,
                action="content_created",
                description=f'Added "{entry.title}" to {entry.category}',
                image_url=entry.image_url,
            ),
        )
        self.stats_repo.increment(session, user.id, **_counter_deltas(entry.category, 1))

        session.refresh(entry)
        return entry

    def update_entry(
        self,
        session: Session,
        user: User,
        entry_id: int,
        payload: ContentEntryUpdate,
    ) -> ContentEntry:
        """
        Partial update of an owned entry. Only fields sent are applied.
        """
        entry = self._get_owned(session, user, entry_id)
        old_category = entry.category

        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "title" and value is None:
                continue
            if field == "category" and value is None:
                continue
            if field == "tags" and value is None:
                value = []
            setattr(entry, field, value)

        entry = self.repo.update(session, entry)

        if old_category != entry.category and "rituals" in (old_category, entry.category):
            delta = 1 if entry.category == "rituals" else -1
            self.stats_repo.increment(session, user.id, active_rituals=delta)
            session.refresh(entry)

        return entry

    def delete_entry(self, session: Session, user: User, entry_id: int) -> None:
        entry = self._get_owned(session, user, entry_id)
        category = entry.category
        image_url = entry.image_url

        self.repo.delete(session, entry)
        self.stats_repo.increment(session, user.id, **_counter_deltas(category, -1))

        if image_url:
            self._discard_image(user, image_url)

    def set_image(
        self,
        session: Session,
        user: User,
        entry_id: int,
        content_type: str,
        file_bytes: bytes,
    ) -> ContentEntry:
        """
        Upload or replace the image of an owned entry.

        - Validates content type + size.
        - Deletes the previous image once the new one is saved, if it is
          one of this user's Storage objects.
        """
        entry = self._get_owned(session, user, entry_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        previous_url = entry.image_url

        path = f"users/{user.id}/content/{entry.id}/{generate_filename(ext)}"
        entry.image_url = upload_to_storage(path, file_bytes, content_type)
        logger.info(f"Uploaded image for content entry {entry.id} ({len(file_bytes)} bytes)")

        entry = self.repo.update(session, entry)
        if previous_url:
            self._discard_image(user, previous_url)
        return entry

    # ---- admin ----

    def list_all(self, session: Session, skip: int, limit: int) -> list[ContentEntry]:
        return self.repo.list_all(session, skip=skip, limit=limit)

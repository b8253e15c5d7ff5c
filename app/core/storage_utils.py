# app/core/storage_utils.py
import uuid

from app.core.config import get_settings
from app.core.supabase_client import supabase_admin

settings = get_settings()


def _bucket():
    # Client is created on first use so the app boots without Storage keys.
    return supabase_admin().storage.from_(settings.STORAGE_BUCKET)


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    If a file already exists at this path, it is overwritten
    thanks to the 'upsert' option.

    Args:
        path: Full object path inside the bucket.
              Example: "users/<user_id>/content/<entry_id>/<uuid>.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Returns:
        Public URL to the uploaded file.
    """
    bucket = _bucket()
    bucket.upload(path, file_bytes, {"upsert": "true", "content-type": content_type})
    return bucket.get_public_url(path)


def extract_path_from_public_url(url: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/assets/users/u/a.png
        -> 'users/u/a.png'
    """
    marker = f"/storage/v1/object/public/{settings.STORAGE_BUCKET}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    return url[idx + len(marker) :].split("?", 1)[0]


def delete_public_url(url: str) -> None:
    """
    Delete a file by its public URL.
    No-op if the URL does not belong to this bucket (e.g. external links).
    """
    path = extract_path_from_public_url(url)
    if path:
        _bucket().remove([path])


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4, e.g. "<uuid4>.png".
    """
    return f"{uuid.uuid4()}.{ext}"

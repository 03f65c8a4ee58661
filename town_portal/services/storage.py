# File: town_portal/services/storage.py
import time
import requests
from pathlib import PurePosixPath
from urllib.parse import quote
from town_portal.core.config import settings

KEY_PREFIX = "reports"


class StorageError(Exception):
    pass


class SupabaseStorage:
    """Supabase Storage over its REST API, authenticated with the service-role key."""

    def __init__(self, url: str, service_role: str, bucket: str, timeout: int = 30):
        self.url = url.rstrip("/")
        self.service_role = service_role
        self.bucket = bucket
        self.timeout = timeout

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Stores one blob under `path` and returns the path as the attachment reference.

        No upsert header is sent, so an existing object is never overwritten.
        """
        url = f"{self.url}/storage/v1/object/{self.bucket}/{quote(path)}"
        try:
            r = requests.post(url, headers={
                "Authorization": f"Bearer {self.service_role}",
                "Content-Type": content_type,
            }, data=data, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise StorageError(f"upload of {path} failed: {e}") from e
        return path


def get_storage() -> SupabaseStorage:
    if not (settings.supabase_url and settings.supabase_service_role):
        raise RuntimeError("Supabase env not set")
    return SupabaseStorage(settings.supabase_url, settings.supabase_service_role, settings.supabase_bucket)


def public_base_url() -> str | None:
    # bucket must be public for these to resolve
    if not settings.supabase_url:
        return None
    return f"{settings.supabase_url.rstrip('/')}/storage/v1/object/public/{settings.supabase_bucket}/"


def make_object_key(filename: str | None, now_ms: int | None = None) -> str:
    name = PurePosixPath((filename or "").replace("\\", "/")).name or "upload"
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{KEY_PREFIX}/{now_ms}_{name}"

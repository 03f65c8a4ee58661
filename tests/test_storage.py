"""Attachment store client and ingestion upload loop tests."""

import pytest
import requests

from town_portal.core.config import settings
from town_portal.services import storage as storage_module
from town_portal.services.ingestion import PendingUpload, upload_attachments
from town_portal.services.storage import StorageError, SupabaseStorage, get_storage, make_object_key, public_base_url


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_object_key_uses_prefix_timestamp_and_filename():
    assert make_object_key("pothole.jpg", now_ms=1700000000123) == "reports/1700000000123_pothole.jpg"


def test_object_key_drops_directories():
    assert make_object_key("../../etc/passwd", now_ms=1) == "reports/1_passwd"
    assert make_object_key("C:\\photos\\lamp.png", now_ms=1) == "reports/1_lamp.png"


def test_object_key_without_filename():
    assert make_object_key("", now_ms=5) == "reports/5_upload"


def test_upload_posts_to_bucket(monkeypatch):
    calls = []

    def fake_post(url, headers=None, data=None, timeout=None):
        calls.append((url, headers, data, timeout))
        return FakeResponse()

    monkeypatch.setattr(storage_module.requests, "post", fake_post)
    client = SupabaseStorage("https://proj.supabase.co/", "service-key", "reports")
    path = client.upload("reports/1_a.jpg", b"img", "image/jpeg")

    assert path == "reports/1_a.jpg"
    url, headers, data, timeout = calls[0]
    assert url == "https://proj.supabase.co/storage/v1/object/reports/reports/1_a.jpg"
    assert headers["Authorization"] == "Bearer service-key"
    assert headers["Content-Type"] == "image/jpeg"
    assert "x-upsert" not in {k.lower() for k in headers}
    assert data == b"img"
    assert timeout == 30


def test_upload_escapes_key_in_url(monkeypatch):
    urls = []

    def fake_post(url, **kwargs):
        urls.append(url)
        return FakeResponse()

    monkeypatch.setattr(storage_module.requests, "post", fake_post)
    client = SupabaseStorage("https://proj.supabase.co", "service-key", "reports")

    assert client.upload("reports/1_pothole #2.jpg", b"img", "image/jpeg") == "reports/1_pothole #2.jpg"
    assert client.upload("reports/2_lamp?.png", b"img", "image/png") == "reports/2_lamp?.png"
    assert urls == [
        "https://proj.supabase.co/storage/v1/object/reports/reports/1_pothole%20%232.jpg",
        "https://proj.supabase.co/storage/v1/object/reports/reports/2_lamp%3F.png",
    ]


def test_upload_http_error_becomes_storage_error(monkeypatch):
    monkeypatch.setattr(storage_module.requests, "post", lambda *a, **kw: FakeResponse(409))
    client = SupabaseStorage("https://proj.supabase.co", "service-key", "reports")
    with pytest.raises(StorageError):
        client.upload("reports/1_a.jpg", b"img", "image/jpeg")


def test_upload_connection_error_becomes_storage_error(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(storage_module.requests, "post", refuse)
    client = SupabaseStorage("https://proj.supabase.co", "service-key", "reports")
    with pytest.raises(StorageError):
        client.upload("reports/1_a.jpg", b"img", "image/jpeg")


def test_get_storage_requires_config(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", None)
    monkeypatch.setattr(settings, "supabase_service_role", None)
    with pytest.raises(RuntimeError):
        get_storage()


def test_get_storage_uses_settings(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "https://proj.supabase.co")
    monkeypatch.setattr(settings, "supabase_service_role", "service-key")
    monkeypatch.setattr(settings, "supabase_bucket", "town-photos")
    client = get_storage()
    assert client.bucket == "town-photos"
    assert public_base_url() == "https://proj.supabase.co/storage/v1/object/public/town-photos/"


def test_upload_loop_skips_failures_and_defaults_content_type(storage):
    storage.fail_on.add("bad.jpg")
    photos = upload_attachments(storage, [
        PendingUpload(filename="bad.jpg", content_type="image/jpeg", data=b"x"),
        PendingUpload(filename="raw.bin", content_type=None, data=b"y"),
    ])
    assert len(photos) == 1
    assert storage.blobs[photos[0]] == (b"y", "application/octet-stream")

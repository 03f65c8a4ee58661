# File: town_portal/services/ingestion.py
"""
Report ingestion: upload attachments, then insert the report.

Uploads run one after another. An attachment whose upload fails is logged
and left off the report; the submission still goes through. Nothing is
rolled back when the insert fails, so blobs uploaded for that request stay
in the bucket.
"""
import logging
from dataclasses import dataclass
from typing import Iterable
from sqlalchemy.orm import Session
from town_portal.schemas.report import ReportCreate
from town_portal.services import record_store
from town_portal.services.storage import StorageError, make_object_key

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class PendingUpload:
    filename: str
    content_type: str | None
    data: bytes


def upload_attachments(storage, uploads: Iterable[PendingUpload]) -> list[str]:
    photos: list[str] = []
    for up in uploads:
        key = make_object_key(up.filename)
        try:
            photos.append(storage.upload(key, up.data, up.content_type or DEFAULT_CONTENT_TYPE))
        except StorageError as e:
            logger.error(f"Attachment upload failed, skipping {key}: {e}")
    return photos


def ingest_report(db: Session, storage, report: ReportCreate, uploads: Iterable[PendingUpload]) -> str:
    """Returns the id the record store generated for the new report."""
    photos = upload_attachments(storage, uploads)
    obj = record_store.insert_report(db, report, photos)
    logger.info(f"Report {obj.id} created with {len(photos)} attachment(s)")
    return obj.id

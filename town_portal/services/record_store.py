# File: town_portal/services/record_store.py
"""
Record store: the `reports` table in the managed Postgres.

Inserts are single-row commits; ordering and id generation are left to the
database row defaults, so callers never pass an id or a timestamp.
"""
from typing import Iterable, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from town_portal.models.report import Report
from town_portal.schemas.report import ReportCreate

RECENT_LIMIT = 200


def insert_report(db: Session, report: ReportCreate, photos: Iterable[str]) -> Report:
    obj = Report(**report.model_dump(), photos=list(photos))
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def list_recent_reports(db: Session, limit: int = RECENT_LIMIT) -> list[Report]:
    limit = max(0, min(limit, RECENT_LIMIT))
    stmt = select(Report).order_by(Report.created_at.desc()).limit(limit)
    return list(db.scalars(stmt).all())


def set_report_status(db: Session, report_id: str, status: str) -> Optional[Report]:
    obj = db.get(Report, report_id)
    if not obj:
        return None
    obj.status = status
    db.commit()
    db.refresh(obj)
    return obj

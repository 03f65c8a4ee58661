# File: town_portal/models/report.py
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Float, Text, JSON, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from town_portal.db.base import Base

DEFAULT_STATUS = "Open"


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(40), index=True, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    severity: Mapped[str | None] = mapped_column(String(40), nullable=True)

    lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    lng: Mapped[float | None] = mapped_column(Float, nullable=True)

    # storage paths, written once at insert
    photos: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    status: Mapped[str] = mapped_column(String(40), default=DEFAULT_STATUS, server_default=DEFAULT_STATUS, index=True)
    reporter_contact: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), index=True)

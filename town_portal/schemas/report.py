# File: town_portal/schemas/report.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, List
from datetime import datetime

Category = Literal["Road", "Street Light", "Drainage", "Water", "Power", "Garbage", "Other"]
Status = Literal["Open", "In Progress", "Resolved"]


class ReportCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    category: Category
    description: str = Field(min_length=1, max_length=4000)
    severity: Optional[str] = Field(default=None, max_length=40)
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    reporter_contact: Optional[str] = Field(default=None, max_length=255)


class ReportOut(BaseModel):
    id: str
    title: str
    category: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[str] = None

    lat: Optional[float] = None
    lng: Optional[float] = None

    photos: List[str] = []
    status: str
    reporter_contact: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReportCreated(BaseModel):
    id: str


class ReportStatusPatch(BaseModel):
    status: Status


class ErrorOut(BaseModel):
    error: str

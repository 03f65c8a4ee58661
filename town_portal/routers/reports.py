# File: town_portal/routers/reports.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile
from typing import List, Optional
from town_portal.db.session import get_db
from town_portal.core.security import require_admin
from town_portal.schemas.report import ReportCreate, ReportCreated, ReportOut, ReportStatusPatch, ErrorOut
from town_portal.services import record_store
from town_portal.services.ingestion import PendingUpload, ingest_report
from town_portal.services.storage import get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])

PHOTO_FIELD = "photos"
SCALAR_FIELDS = ("title", "category", "description", "severity", "lat", "lng", "reporter_contact")
ALLOWED_METHODS = ("GET", "POST")


def _text(form, name: str) -> Optional[str]:
    value = form.get(name)
    return value if isinstance(value, str) else None


def _report_from_form(form) -> ReportCreate:
    fields = {name: _text(form, name) for name in SCALAR_FIELDS}
    # blank coordinates from an unused location button mean "no location"
    for coord in ("lat", "lng"):
        if not (fields[coord] or "").strip():
            fields[coord] = None
    return ReportCreate(**{k: v for k, v in fields.items() if v is not None})


async def _read_uploads(form) -> List[PendingUpload]:
    uploads = []
    for part in form.getlist(PHOTO_FIELD):
        # an empty <input type="file"> still posts a part, with no filename
        if not isinstance(part, UploadFile) or not part.filename:
            continue
        data = await part.read()
        uploads.append(PendingUpload(filename=part.filename, content_type=part.content_type, data=data))
    return uploads


@router.get("", response_model=List[ReportOut], responses={500: {"model": ErrorOut}})
def list_reports(db: Session = Depends(get_db)):
    try:
        rows = record_store.list_recent_reports(db)
    except Exception:
        logger.error("Failed to list reports", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Server error"})
    return [ReportOut.model_validate(r) for r in rows]


@router.post("", response_model=ReportCreated, responses={500: {"model": ErrorOut}})
async def create_report(request: Request, db: Session = Depends(get_db), storage=Depends(get_storage)):
    try:
        form = await request.form()
    except Exception:
        logger.error("Form parse error", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Form parse error"})

    try:
        try:
            report = _report_from_form(form)
            uploads = await _read_uploads(form)
        except Exception:
            logger.error("Form parse error", exc_info=True)
            return JSONResponse(status_code=500, content={"error": "Form parse error"})

        try:
            report_id = await run_in_threadpool(ingest_report, db, storage, report, uploads)
        except Exception:
            logger.error("Failed to store report", exc_info=True)
            return JSONResponse(status_code=500, content={"error": "Server error"})
    finally:
        await form.close()

    return ReportCreated(id=report_id)


def reports_method_not_allowed(request: Request):
    return Response(
        content="Method not allowed",
        status_code=405,
        headers={"Allow": ", ".join(ALLOWED_METHODS)},
        media_type="text/plain",
    )

# a plain route with no method list matches every verb; GET and POST are taken above first
router.add_route(router.prefix, reports_method_not_allowed, include_in_schema=False)


@router.patch("/{report_id}/status", response_model=ReportOut)
def update_status(
    report_id: str,
    body: ReportStatusPatch,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    obj = record_store.set_report_status(db, report_id, body.status)
    if not obj:
        raise HTTPException(status_code=404, detail="Report not found")
    logger.info(f"Report {report_id} status set to {body.status} by {admin.get('sub')}")
    return ReportOut.model_validate(obj)

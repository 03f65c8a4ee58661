# File: town_portal/routers/public.py
# Project: town-portal-backend

import html
from functools import lru_cache
from pathlib import Path
from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from town_portal.core.config import settings
from town_portal.services.storage import public_base_url

TEMPLATES = Path(__file__).resolve().parent.parent / "templates"

router = APIRouter(tags=["public"])

@lru_cache
def _template(name: str) -> str:
    return (TEMPLATES / name).read_text(encoding="utf-8")

def _render(name: str) -> HTMLResponse:
    page = _template(name).replace("{{ site_name }}", html.escape(settings.site_name))
    return HTMLResponse(page)

@router.get("/api/config")
def public_config():
    # never include the service-role key here; this is served to browsers
    return {"site_name": settings.site_name, "photo_base_url": public_base_url()}

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index():
    return _render("index.html")

@router.get("/admin", response_class=HTMLResponse, include_in_schema=False)
def admin_page():
    return _render("admin.html")

# File: town_portal/main.py
# Project: town-portal-backend

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from town_portal.core.config import cors_origins_list, settings
from town_portal.routers import auth, public, reports

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=f"{settings.site_name} API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_list(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"ok": True}

app.include_router(reports.router)
app.include_router(auth.router)
app.include_router(public.router)

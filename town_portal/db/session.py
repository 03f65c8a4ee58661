# File: town_portal/db/session.py
# Project: town-portal-backend

from functools import lru_cache
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from town_portal.core.config import settings

@lru_cache
def get_engine():
    # built on first use so a missing DATABASE_URL only fails the calls that need it
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL not set")
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
        pool_timeout=30
    )

@lru_cache
def get_sessionmaker():
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

def get_db():
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()

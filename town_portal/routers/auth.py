# File: town_portal/routers/auth.py

import logging
from fastapi import APIRouter, HTTPException
from town_portal.schemas.auth import AdminLoginIn, AdminToken
from town_portal.core.security import verify_admin_credentials, make_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])

@router.post("/admin-auth", response_model=AdminToken)
def admin_login(body: AdminLoginIn):
    if not verify_admin_credentials(body.email, body.password):
        logger.warning(f"Rejected admin login for {body.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return make_admin_token(body.email)

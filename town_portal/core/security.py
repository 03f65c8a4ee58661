# File: town_portal/core/security.py
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import hmac, time, jwt
from town_portal.core.config import settings

ALGO = "HS256"
ADMIN_TTL = 12 * 3600
bearer = HTTPBearer(auto_error=False)

def _jwt_secret() -> str:
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET not set")
    return settings.jwt_secret

def verify_admin_credentials(email: str, password: str) -> bool:
    """Checks a login against ADMIN_EMAIL / ADMIN_PASSWORD in constant time."""
    if not (settings.admin_email and settings.admin_password):
        raise RuntimeError("Admin credentials not set")
    email_ok = hmac.compare_digest(email.strip().lower().encode(), settings.admin_email.strip().lower().encode())
    password_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
    return email_ok and password_ok

def make_admin_token(email: str) -> dict:
    now = int(time.time())
    payload = {"sub": email, "role": "admin", "iat": now, "exp": now + ADMIN_TTL}
    return {
        "access_token": jwt.encode(payload, _jwt_secret(), algorithm=ALGO),
        "token_type": "bearer",
        "expires_in": ADMIN_TTL,
    }

def _decode_token(creds: Optional[HTTPAuthorizationCredentials]) -> dict:
    if not creds:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        return jwt.decode(creds.credentials, _jwt_secret(), algorithms=[ALGO])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

def require_admin(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> dict:
    payload = _decode_token(creds)
    if payload.get("role") != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")
    return payload

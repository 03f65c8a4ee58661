# File: town_portal/schemas/auth.py

from pydantic import BaseModel, Field

class AdminLoginIn(BaseModel):
    # only compared against ADMIN_EMAIL, so internal domains must pass
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1, max_length=512)

class AdminToken(BaseModel):
    access_token: str
    token_type: str
    expires_in: int

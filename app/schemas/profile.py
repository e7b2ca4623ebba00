# app/schemas/profile.py
from pydantic import BaseModel, EmailStr
from pydantic.alias_generators import to_camel
from datetime import datetime

from app.models.profile import Role, Tier

class ProfileRegister(BaseModel):
    """Profile registration request (email falls back to the token's)"""
    email: EmailStr | None = None

class ProfileResponse(BaseModel):
    """Profile response"""
    id: str
    email: str
    role: Role
    tier: Tier
    created_at: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

# app/core/permissions.py
from fastapi import HTTPException, status

from app.models.profile import Profile

def can_manage(profile: Profile | None, caller_id: str, owner_id: str) -> bool:
    """Owners manage their own resources; admins manage everything"""
    if profile is not None and profile.is_admin:
        return True
    return caller_id == owner_id

def ensure_can_manage(profile: Profile | None, caller_id: str, owner_id: str) -> None:
    if not can_manage(profile, caller_id, owner_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to manage this event"
        )

# app/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.profile import Profile
from app.services import identity_service
from app.services.identity_service import AuthUser

# Bearer token scheme (401 handled below, not by FastAPI's 403 default)
security = HTTPBearer(auto_error=False)

async def get_current_user(
    token: HTTPAuthorizationCredentials | None = Depends(security)
) -> AuthUser:
    """Resolve the caller from the identity provider"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing access token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token is None or not token.credentials:
        raise credentials_exception

    user = await identity_service.verify_access_token(token.credentials)
    if user is None:
        raise credentials_exception

    return user

def get_profile(db: Session, user: AuthUser) -> Profile | None:
    """Caller's profile (role and tier live here, not in the token)"""
    return db.query(Profile).filter(Profile.id == user.id).first()

from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from quizmaster.database import get_supabase_client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

def verify_supabase_token(token: str):
    """Verify Supabase JWT token"""
    try:
        user = get_supabase_client().auth.get_user(token)
        if user and user.user:
            return user.user
        return None
    except Exception as e:
        logger.error(f"Supabase token verification failed: {e}")
        return None

def _user_from_token(token: str) -> Optional[dict]:
    user = verify_supabase_token(token)
    if user:
        return {
            "id": user.id,
            "email": user.email,
            "metadata": user.user_metadata
        }
    return None

async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Get current user from Supabase JWT token"""
    user = _user_from_token(credentials.credentials)
    if user:
        return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials"
    )

async def get_current_user_optional(credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)):
    """Get current user if a valid token was sent, otherwise None (anonymous respondent)"""
    if not credentials:
        return None
    return _user_from_token(credentials.credentials)

def require_author(quiz, current_user: Optional[dict]) -> None:
    """Only the author of a quiz may edit it or read its results"""
    if not current_user or quiz.author_id != current_user["id"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. You are not the author of this quiz."
        )

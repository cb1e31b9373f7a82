from typing import Optional
from fastapi import APIRouter, Depends
from jitsdiary.deps.auth import AuthUser, get_optional_user
from jitsdiary.schemas.user import Me

router = APIRouter(prefix="/api", tags=["auth"])

@router.get("/me", response_model=Me)
def me(user: Optional[AuthUser] = Depends(get_optional_user)):
    return Me(userId=user.user_id if user else None)

from typing import Optional
from fastapi import APIRouter, Depends
from jitsdiary.deps.auth import AuthUser, get_current_user
from jitsdiary.repositories.profile_repo import ProfileRepository
from jitsdiary.schemas.profile import ProfileRead, ProfileSave

router = APIRouter(prefix="/api/profile", tags=["profile"])

@router.get("", response_model=Optional[ProfileRead])
def get_my_profile(current: AuthUser = Depends(get_current_user)):
    return ProfileRepository(current).get_mine()

@router.put("", response_model=ProfileRead)
def save_my_profile(payload: ProfileSave, current: AuthUser = Depends(get_current_user)):
    return ProfileRepository(current).save(payload)

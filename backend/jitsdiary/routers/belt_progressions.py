from fastapi import APIRouter, Depends, Response, status
from jitsdiary.deps.auth import AuthUser, get_current_user
from jitsdiary.repositories.belt_repo import BeltProgressionRepository
from jitsdiary.schemas.belt_progression import BeltProgressionCreate, BeltProgressionRead

router = APIRouter(prefix="/api/belt-progressions", tags=["belt-progressions"])

@router.get("", response_model=list[BeltProgressionRead])
def list_my_progressions(current: AuthUser = Depends(get_current_user)):
    return BeltProgressionRepository(current).list_mine()

@router.post("", response_model=BeltProgressionRead, status_code=status.HTTP_201_CREATED)
def add_progression(payload: BeltProgressionCreate, current: AuthUser = Depends(get_current_user)):
    return BeltProgressionRepository(current).create(payload)

@router.delete("/{progression_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_progression(progression_id: str, current: AuthUser = Depends(get_current_user)):
    BeltProgressionRepository(current).delete(progression_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

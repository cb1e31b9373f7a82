from fastapi import APIRouter, Depends
from jitsdiary.deps.auth import AuthUser, get_current_user
from jitsdiary.repositories.gym_repo import GymRepository
from jitsdiary.repositories.technique_repo import TechniqueRepository
from jitsdiary.schemas.gym import GymRead
from jitsdiary.schemas.technique import TechniqueRead
from jitsdiary.store import RecordStore, get_store

router = APIRouter(prefix="/api", tags=["library"])

@router.get("/gyms", response_model=list[GymRead])
def list_gyms(current: AuthUser = Depends(get_current_user)):
    return GymRepository(current).list()

@router.get("/techniques", response_model=list[TechniqueRead])
def list_techniques(store: RecordStore = Depends(get_store)):
    return TechniqueRepository(store).list()

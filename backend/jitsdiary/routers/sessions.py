from fastapi import APIRouter, Depends, Query, status
from jitsdiary.deps.auth import AuthUser, get_current_user
from jitsdiary.repositories.round_repo import RoundRepository
from jitsdiary.repositories.session_repo import SessionRepository
from jitsdiary.repositories.technique_repo import SessionTechniqueRepository
from jitsdiary.schemas.session import (
    SessionCreate,
    SessionDetail,
    SessionPage,
    SessionRead,
    SessionUpdate,
)
from jitsdiary.settings import get_settings

router = APIRouter(prefix="/api/sessions", tags=["sessions"])

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def create_session(payload: SessionCreate, current: AuthUser = Depends(get_current_user)):
    return SessionRepository(current).create(payload)

@router.get("", response_model=SessionPage)
def list_my_sessions(
    current: AuthUser = Depends(get_current_user),
    page: int = Query(1, ge=1),
):
    result = SessionRepository(current).list_mine(
        page=page, per_page=get_settings().SESSIONS_PER_PAGE
    )
    return result.as_dict()

@router.get("/{session_id}", response_model=SessionDetail)
def get_session(session_id: str, current: AuthUser = Depends(get_current_user)):
    session = SessionRepository(current).get(session_id)
    return {
        "session": session,
        "rounds": RoundRepository(current).fetch(session_id),
        "techniques": SessionTechniqueRepository(current).fetch(session_id),
    }

@router.patch("/{session_id}", response_model=SessionRead)
def update_session(
    session_id: str,
    payload: SessionUpdate,
    current: AuthUser = Depends(get_current_user),
):
    return SessionRepository(current).update(session_id, payload)

from fastapi import APIRouter, Depends, Response, status
from jitsdiary.deps.auth import AuthUser, get_current_user
from jitsdiary.repositories.round_repo import RoundRepository
from jitsdiary.schemas.rolling_round import RoundCreate, RoundRead

router = APIRouter(prefix="/api/sessions", tags=["rounds"])

@router.get("/{session_id}/rounds", response_model=list[RoundRead])
def list_rounds(session_id: str, current: AuthUser = Depends(get_current_user)):
    return RoundRepository(current).list_for_session(session_id)

@router.post("/{session_id}/rounds", response_model=RoundRead, status_code=status.HTTP_201_CREATED)
def log_round(
    session_id: str,
    payload: RoundCreate,
    current: AuthUser = Depends(get_current_user),
):
    return RoundRepository(current).create(session_id, payload)

@router.delete("/{session_id}/rounds/{round_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_round(session_id: str, round_id: str, current: AuthUser = Depends(get_current_user)):
    RoundRepository(current).delete(session_id, round_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

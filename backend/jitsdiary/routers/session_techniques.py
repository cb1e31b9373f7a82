from fastapi import APIRouter, Depends, Response, status
from jitsdiary.deps.auth import AuthUser, get_current_user
from jitsdiary.repositories.technique_repo import SessionTechniqueRepository
from jitsdiary.schemas.technique import SessionTechniqueRead, SessionTechniquesCreate

router = APIRouter(prefix="/api/sessions", tags=["techniques"])

@router.get("/{session_id}/techniques", response_model=list[SessionTechniqueRead])
def list_session_techniques(session_id: str, current: AuthUser = Depends(get_current_user)):
    return SessionTechniqueRepository(current).list_for_session(session_id)

@router.post(
    "/{session_id}/techniques",
    response_model=list[SessionTechniqueRead],
    status_code=status.HTTP_201_CREATED,
)
def log_techniques(
    session_id: str,
    payload: SessionTechniquesCreate,
    current: AuthUser = Depends(get_current_user),
):
    # only the links created by this call come back
    return SessionTechniqueRepository(current).link(session_id, payload)

@router.delete("/{session_id}/techniques/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
def unlink_technique(session_id: str, link_id: str, current: AuthUser = Depends(get_current_user)):
    SessionTechniqueRepository(current).unlink(session_id, link_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

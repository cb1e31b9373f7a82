import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from jitsdiary.errors import StoreError
from jitsdiary.repositories.user_repo import UserRepository
from jitsdiary.schemas.user import AuthOk, SignIn, SignUp
from jitsdiary.security import (
    OAUTH_PROVIDER_COOKIE,
    OAUTH_STATE_COOKIE,
    OAUTH_VERIFIER_COOKIE,
    clear_oauth_cookies,
    clear_session_cookie,
    set_oauth_cookies,
    set_session_cookie,
)
from jitsdiary.store import RecordStore, get_store

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/sign-up", response_model=AuthOk)
def sign_up(payload: SignUp, response: Response, store: RecordStore = Depends(get_store)):
    try:
        auth = UserRepository(store).sign_up(
            email=payload.email,
            password=payload.password,
            name=payload.name,
        )
    except StoreError as e:
        # store rejections (taken email, weak password) pass through; outages are 500
        raise HTTPException(status_code=e.http_status, detail=str(e))
    set_session_cookie(response, auth.token)
    return AuthOk()

@router.post("/sign-in", response_model=AuthOk)
def sign_in(payload: SignIn, response: Response, store: RecordStore = Depends(get_store)):
    try:
        auth = UserRepository(store).sign_in(email=payload.email, password=payload.password)
    except StoreError as e:
        # never say which half was wrong
        log.info("sign-in failed (status=%s)", e.status)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    set_session_cookie(response, auth.token)
    return AuthOk()

@router.post("/sign-out", response_model=AuthOk)
def sign_out(response: Response):
    clear_session_cookie(response)
    return AuthOk()

@router.get("/oauth2/{provider}")
def oauth2_start(provider: str, request: Request, store: RecordStore = Depends(get_store)):
    try:
        method = UserRepository(store).oauth2_provider(provider)
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    if not method or not method.get("authURL") or not method.get("codeVerifier"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Provider {provider} not found")

    redirect_url = str(request.url_for("oauth2_callback"))
    response = RedirectResponse(method["authURL"] + quote(redirect_url, safe=""))
    set_oauth_cookies(
        response,
        provider=provider,
        code_verifier=method["codeVerifier"],
        state=method.get("state"),
    )
    return response

@router.get("/callback", name="oauth2_callback")
def oauth2_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    code_verifier: Optional[str] = Cookie(None, alias=OAUTH_VERIFIER_COOKIE),
    provider: Optional[str] = Cookie(None, alias=OAUTH_PROVIDER_COOKIE),
    expected_state: Optional[str] = Cookie(None, alias=OAUTH_STATE_COOKIE),
    store: RecordStore = Depends(get_store),
):
    if not code or not state or not code_verifier or not provider:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid OAuth2 callback")
    if expected_state and state != expected_state:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid OAuth2 callback")

    try:
        auth = UserRepository(store).finish_oauth2(
            provider=provider,
            code=code,
            code_verifier=code_verifier,
            redirect_url=str(request.url_for("oauth2_callback")),
        )
    except StoreError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    response = RedirectResponse("/")
    set_session_cookie(response, auth.token)
    clear_oauth_cookies(response)
    return response

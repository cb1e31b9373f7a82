from datetime import datetime, timezone
from typing import Optional
from fastapi import Response
from jose import jwt
from jose.exceptions import JWTError
from jitsdiary.settings import get_settings

OAUTH_VERIFIER_COOKIE = "pb_code_verifier"
OAUTH_PROVIDER_COOKIE = "pb_oauth_provider"
OAUTH_STATE_COOKIE = "pb_oauth_state"

def token_expired(token: str, *, leeway: int = 0) -> bool:
    """
    Cheap local check before asking the backend to refresh a token.

    The signature is NOT verified here (the backend owns the key); a token that
    passes still has to survive auth-refresh. Unreadable tokens count as expired.
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return True
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return True
    now = datetime.now(timezone.utc).timestamp()
    return exp <= now - leeway

def _set_cookie(response: Response, key: str, value: str, max_age: int) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=get_settings().cookie_secure,
        samesite="lax",
    )

def _clear_cookie(response: Response, key: str) -> None:
    response.delete_cookie(
        key=key,
        path="/",
        httponly=True,
        secure=get_settings().cookie_secure,
        samesite="lax",
    )

def set_session_cookie(response: Response, token: str) -> None:
    s = get_settings()
    _set_cookie(response, s.AUTH_COOKIE_NAME, token, s.SESSION_COOKIE_DAYS * 24 * 60 * 60)

def clear_session_cookie(response: Response) -> None:
    _clear_cookie(response, get_settings().AUTH_COOKIE_NAME)

def set_oauth_cookies(response: Response, *, provider: str, code_verifier: str, state: Optional[str]) -> None:
    max_age = get_settings().OAUTH_COOKIE_MINUTES * 60
    _set_cookie(response, OAUTH_VERIFIER_COOKIE, code_verifier, max_age)
    _set_cookie(response, OAUTH_PROVIDER_COOKIE, provider, max_age)
    if state:
        _set_cookie(response, OAUTH_STATE_COOKIE, state, max_age)

def clear_oauth_cookies(response: Response) -> None:
    for key in (OAUTH_VERIFIER_COOKIE, OAUTH_PROVIDER_COOKIE, OAUTH_STATE_COOKIE):
        _clear_cookie(response, key)

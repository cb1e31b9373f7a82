# jitsdiary/deps/auth.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, HTTPException, Request, status

from jitsdiary.errors import StoreError
from jitsdiary.security import token_expired
from jitsdiary.settings import get_settings
from jitsdiary.store import RecordStore, get_store

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthUser:
    """The resolved caller. Passed explicitly into every repository call."""
    user_id: str
    record: dict[str, Any]
    token: str
    store: RecordStore


def resolve_auth_user(token: Optional[str], store: RecordStore) -> Optional[AuthUser]:
    """
    Validate `token` against the backend. Never raises: anything that goes
    wrong (missing, expired, revoked, backend down) means "logged out".
    """
    if not token:
        return None
    if token_expired(token):
        return None

    authed = store.with_token(token)
    try:
        result = authed.collection("users").auth_refresh()
    except StoreError as e:
        log.info("auth refresh rejected (status=%s)", e.status)
        return None
    except (KeyError, TypeError):
        log.warning("auth refresh returned an unexpected payload")
        return None

    user_id = (result.record or {}).get("id")
    if not user_id:
        return None
    return AuthUser(user_id=user_id, record=result.record, token=token, store=authed)


def get_optional_user(
    request: Request,
    store: RecordStore = Depends(get_store),
) -> Optional[AuthUser]:
    token = request.cookies.get(get_settings().AUTH_COOKIE_NAME)
    return resolve_auth_user(token, store)


def get_current_user(user: Optional[AuthUser] = Depends(get_optional_user)) -> AuthUser:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user

# jitsdiary/repositories/user_repo.py
from __future__ import annotations
from typing import Any, Optional

from jitsdiary.store import AuthResult, RecordStore

class UserRepository:
    """Account operations against the store's `users` auth collection."""
    def __init__(self, store: RecordStore):
        self.store = store

    @property
    def users(self):
        return self.store.collection("users")

    def sign_up(self, *, email: str, password: str, name: str) -> AuthResult:
        self.users.create({
            "email": email,
            "password": password,
            "passwordConfirm": password,
            "name": name,
        })
        return self.sign_in(email=email, password=password)

    def sign_in(self, *, email: str, password: str) -> AuthResult:
        return self.users.auth_with_password(email, password)

    def oauth2_provider(self, name: str) -> Optional[dict[str, Any]]:
        """The provider entry (authURL, codeVerifier, state) or None if not enabled."""
        methods = self.users.list_auth_methods()
        providers = ((methods or {}).get("oauth2") or {}).get("providers") or []
        return next((p for p in providers if p.get("name") == name), None)

    def finish_oauth2(self, *, provider: str, code: str, code_verifier: str, redirect_url: str) -> AuthResult:
        return self.users.auth_with_oauth2_code(provider, code, code_verifier, redirect_url)

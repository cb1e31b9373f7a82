# jitsdiary/errors.py
from __future__ import annotations
from typing import Any, Optional


class Forbidden(Exception):
    """The caller is authenticated but does not own the record."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)
        self.message = message


class StoreError(Exception):
    """
    A failed call to the record store.

    `status` is the HTTP status returned by the backend, or 0 when the request
    never got a response (connection refused, timeout, bad JSON).
    `data` holds PocketBase's per-field validation errors, if any.
    """

    def __init__(self, status: int, message: str, data: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.data = data or {}

    @property
    def http_status(self) -> int:
        # 4xx from the backend are the caller's fault; everything else is ours
        if 400 <= self.status < 500:
            return self.status
        return 500

    def __str__(self) -> str:
        details = [
            f"{field}: {err.get('message', err.get('code', 'invalid'))}"
            for field, err in self.data.items()
            if isinstance(err, dict)
        ]
        if details:
            return f"{self.message} ({'; '.join(details)})"
        return self.message


class NotFound(StoreError):
    """A record exists but not where the caller said it is (e.g. wrong parent)."""

    def __init__(self, message: str = "The requested resource wasn't found."):
        super().__init__(404, message)

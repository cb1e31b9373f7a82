"""
In-memory stand-in for the PocketBase HTTP API, mounted on the per-request
`requests.Session` through a transport adapter. Routes, filters, sort,
expand and the auth endpoints behave like the real thing for the subset the
app uses, including the "required number rejects 0" quirk on belt stripes.
"""
import copy
import json
import re
import secrets
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, unquote, urlsplit

import pytest
import requests
from jose import jwt
from requests.adapters import BaseAdapter

from jitsdiary.main import app
from jitsdiary.store import RecordStore, get_store

BASE_URL = "http://pocketbase.test"
FAKE_SECRET = "not-the-real-pocketbase-key"

RELATIONS = {
    "user_id": "users",
    "gym_id": "gyms",
    "session_id": "sessions",
    "technique_id": "techniques",
}

REQUIRED = {
    "sessions": ("user_id", "date", "session_type"),
    "belt_progressions": ("user_id", "belt", "promoted_on"),
    "rolling_rounds": ("session_id",),
    "session_techniques": ("session_id", "technique_id"),
    "profiles": ("user_id",),
}

_CLAUSE = re.compile(r'^\s*(\w+)\s*(!=|=)\s*("(?:[^"\\]|\\.)*"|\S+)\s*$')


def make_token(user_id, *, expires_in=3600):
    exp = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
    return jwt.encode(
        {"id": user_id, "type": "auth", "exp": int(exp.timestamp()), "nonce": secrets.token_hex(4)},
        FAKE_SECRET,
        algorithm="HS256",
    )


def _literal(raw):
    if raw.startswith('"'):
        return re.sub(r"\\(.)", r"\1", raw[1:-1])
    if raw == "null":
        return None
    if raw in ("true", "false"):
        return raw == "true"
    try:
        return int(raw)
    except ValueError:
        return float(raw)


class FakePocketBase(BaseAdapter):
    def __init__(self):
        super().__init__()
        self.collections = defaultdict(dict)
        self.passwords = {}
        self.tokens = {}
        self.calls = []
        self.down = False
        self.providers = [{
            "name": "google",
            "displayName": "Google",
            "state": "st4te",
            "authURL": "https://accounts.example.com/o/oauth2/auth?client_id=abc&redirect_uri=",
            "codeVerifier": "v3rifier",
            "codeChallenge": "ch4llenge",
            "codeChallengeMethod": "S256",
        }]
        self._clock = 0

    # helpers used by tests
    def seed(self, collection, **fields):
        return self._insert(collection, fields)

    def records(self, collection):
        return list(self.collections[collection].values())

    # transport
    def close(self):
        pass

    def send(self, request, **kwargs):
        if self.down:
            raise requests.ConnectionError("connection refused")
        parts = urlsplit(request.url)
        path = unquote(parts.path)
        query = {k: v[0] for k, v in parse_qs(parts.query).items()}
        body = json.loads(request.body) if request.body else None
        self.calls.append((request.method, path))
        status, payload = self._dispatch(request, path, query, body)
        return self._response(request, status, payload)

    def _response(self, request, status, payload):
        resp = requests.Response()
        resp.status_code = status
        resp.url = request.url
        resp.request = request
        resp.encoding = "utf-8"
        if payload is not None:
            resp._content = json.dumps(payload).encode()
            resp.headers["Content-Type"] = "application/json"
        else:
            resp._content = b""
        return resp

    def _error(self, status, message, data=None):
        return status, {"status": status, "message": message, "data": data or {}}

    # routing
    def _dispatch(self, request, path, query, body):
        if path == "/api/health":
            return 200, {"code": 200, "message": "API is healthy.", "data": {}}

        m = re.fullmatch(r"/api/collections/users/(auth-with-password|auth-refresh|auth-methods|auth-with-oauth2)", path)
        if m:
            return getattr(self, "_" + m.group(1).replace("-", "_"))(request, body)

        m = re.fullmatch(r"/api/collections/(\w+)/records(?:/([^/]+))?", path)
        if not m:
            return self._error(404, "The requested resource wasn't found.")
        name, record_id = m.groups()
        if request.method == "GET" and record_id is None:
            return self._list(name, query)
        if request.method == "GET":
            return self._get(name, record_id, query)
        if request.method == "POST" and record_id is None:
            return self._create(name, body or {})
        if request.method == "PATCH":
            return self._update(name, record_id, body or {})
        if request.method == "DELETE":
            if record_id not in self.collections[name]:
                return self._error(404, "The requested resource wasn't found.")
            del self.collections[name][record_id]
            return 204, None
        return self._error(405, "Method not allowed.")

    # auth
    def _issue(self, user_id):
        token = make_token(user_id)
        self.tokens[token] = user_id
        return {"token": token, "record": self._public_user(user_id)}

    def _public_user(self, user_id):
        return copy.deepcopy(self.collections["users"][user_id])

    def _auth_with_password(self, request, body):
        for user in self.collections["users"].values():
            if user["email"].lower() == str(body.get("identity", "")).lower() \
                    and self.passwords.get(user["id"]) == body.get("password"):
                return 200, self._issue(user["id"])
        return self._error(400, "Failed to authenticate.")

    def _auth_refresh(self, request, body):
        token = request.headers.get("Authorization", "")
        user_id = self.tokens.get(token)
        if not user_id or user_id not in self.collections["users"]:
            return self._error(401, "The request requires valid record authorization token.")
        return 200, self._issue(user_id)

    def _auth_methods(self, request, body):
        return 200, {
            "password": {"enabled": True, "identityFields": ["email"]},
            "oauth2": {"enabled": True, "providers": copy.deepcopy(self.providers)},
        }

    def _auth_with_oauth2(self, request, body):
        if body.get("code") != "good-code" or body.get("codeVerifier") != "v3rifier":
            return self._error(400, "Failed to authenticate.")
        for user in self.collections["users"].values():
            if user["email"] == "oauth@example.com":
                return 200, self._issue(user["id"])
        user = self._insert("users", {"email": "oauth@example.com", "name": "OAuth User"})
        return 200, self._issue(user["id"])

    # records
    def _insert(self, collection, fields):
        self._clock += 1
        stamp = (datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self._clock))
        stamp = stamp.strftime("%Y-%m-%d %H:%M:%S.000Z")
        record = {
            "id": secrets.token_hex(8)[:15],
            "collectionName": collection,
            "created": stamp,
            "updated": stamp,
            **fields,
        }
        self.collections[collection][record["id"]] = record
        return record

    def _with_expand(self, record, expand):
        out = copy.deepcopy(record)
        if expand:
            inlined = {}
            for field in expand.split(","):
                target = self.collections[RELATIONS.get(field, "")].get(record.get(field) or "")
                if target:
                    inlined[field] = copy.deepcopy(target)
            if inlined:
                out["expand"] = inlined
        return out

    def _matches(self, record, flt):
        if not flt:
            return True
        for clause in flt.split("&&"):
            m = _CLAUSE.match(clause)
            if not m:
                raise ValueError(f"unsupported filter clause: {clause!r}")
            field, op, raw = m.groups()
            equal = record.get(field) == _literal(raw)
            if equal != (op == "="):
                return False
        return True

    def _list(self, name, query):
        try:
            items = [r for r in self.collections[name].values() if self._matches(r, query.get("filter"))]
        except ValueError as e:
            return self._error(400, "Something went wrong while processing your request.", {"filter": {"code": "invalid", "message": str(e)}})
        for key in reversed([k for k in (query.get("sort") or "").split(",") if k]):
            desc = key.startswith("-")
            field = key.lstrip("-+")
            items.sort(key=lambda r: (r.get(field) is not None, r.get(field) or ""), reverse=desc)
        page = int(query.get("page", 1))
        per_page = int(query.get("perPage", 30))
        total = len(items)
        chunk = items[(page - 1) * per_page: page * per_page]
        return 200, {
            "page": page,
            "perPage": per_page,
            "totalItems": total,
            "totalPages": (total + per_page - 1) // per_page,
            "items": [self._with_expand(r, query.get("expand")) for r in chunk],
        }

    def _get(self, name, record_id, query):
        record = self.collections[name].get(record_id)
        if not record:
            return self._error(404, "The requested resource wasn't found.")
        if name == "users":
            return 200, self._public_user(record_id)
        return 200, self._with_expand(record, query.get("expand"))

    def _validate(self, name, record):
        errors = {}
        for field in REQUIRED.get(name, ()):
            if record.get(field) in (None, ""):
                errors[field] = {"code": "validation_required", "message": "Cannot be blank."}
        if name == "belt_progressions" and record.get("stripes") == 0:
            errors["stripes"] = {"code": "validation_required", "message": "Cannot be blank."}
        return errors

    def _create(self, name, body):
        if name == "users":
            return self._create_user(body)
        errors = self._validate(name, body)
        if errors:
            return self._error(400, "Failed to create record.", errors)
        return 200, self._insert(name, body)

    def _create_user(self, body):
        errors = {}
        email = body.get("email") or ""
        if any(u["email"].lower() == email.lower() for u in self.collections["users"].values()):
            errors["email"] = {"code": "validation_not_unique", "message": "Value must be unique."}
        if len(body.get("password") or "") < 8:
            errors["password"] = {"code": "validation_length_out_of_range", "message": "Must be at least 8 character(s)."}
        if body.get("password") != body.get("passwordConfirm"):
            errors["passwordConfirm"] = {"code": "validation_values_mismatch", "message": "Values don't match."}
        if errors:
            return self._error(400, "Failed to create record.", errors)
        user = self._insert("users", {"email": email, "name": body.get("name") or "", "verified": False})
        self.passwords[user["id"]] = body["password"]
        return 200, self._public_user(user["id"])

    def _update(self, name, record_id, body):
        record = self.collections[name].get(record_id)
        if not record:
            return self._error(404, "The requested resource wasn't found.")
        merged = {**record, **body}
        errors = self._validate(name, merged)
        if errors:
            return self._error(400, "Failed to update record.", errors)
        self._clock += 1
        record.update(body)
        return 200, copy.deepcopy(record)


@pytest.fixture(autouse=True)
def pb():
    fake = FakePocketBase()
    fake.seed("gyms", name="Zenith BJJ", location="Lisbon")
    fake.seed("gyms", name="Alliance HQ", location="Atlanta")
    for name, category in [
        ("Armbar", "submission"),
        ("Closed guard", "guard"),
        ("Double leg", "takedown"),
        ("Elbow escape", "escape"),
    ]:
        fake.seed("techniques", name=name, category=category)

    def store_override():
        session = requests.Session()
        session.mount(BASE_URL, fake)
        store = RecordStore(BASE_URL, session=session)
        try:
            yield store
        finally:
            store.close()

    app.dependency_overrides[get_store] = store_override
    yield fake
    app.dependency_overrides.pop(get_store, None)

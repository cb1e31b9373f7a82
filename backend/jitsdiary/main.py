# jitsdiary/main.py
import time
import logging
import uuid
from urllib.parse import urlencode
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jitsdiary.errors import Forbidden, StoreError
from jitsdiary.routers.auth import router as auth_router
from jitsdiary.routers.me import router as me_router
from jitsdiary.routers.profile import router as profile_router
from jitsdiary.routers.sessions import router as sessions_router
from jitsdiary.routers.rounds import router as rounds_router
from jitsdiary.routers.session_techniques import router as session_techniques_router
from jitsdiary.routers.belt_progressions import router as belt_progressions_router
from jitsdiary.routers.library import router as library_router
from jitsdiary.settings import get_settings
from jitsdiary.store import RecordStore  # for healthz backend check

log = logging.getLogger("uvicorn")
settings = get_settings()

app = FastAPI(
    title="JitsDiary API",
    openapi_tags=[
        {"name": "auth", "description": "Sign-up, sign-in & OAuth2"},
        {"name": "profile", "description": "The caller's profile"},
        {"name": "sessions", "description": "Training sessions"},
        {"name": "rounds", "description": "Rolling rounds per session"},
        {"name": "techniques", "description": "Techniques drilled per session"},
        {"name": "belt-progressions", "description": "Belt promotions"},
        {"name": "library", "description": "Gyms & technique library"},
    ],
)

# Page routes that need a signed-in user; the API routes answer 401 instead
PROTECTED_PAGES = ("/sessions", "/profile")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials="*" not in settings.allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def redirect_anonymous_pages(request: Request, call_next):
    path = request.url.path
    if path.startswith(PROTECTED_PAGES) and not request.cookies.get(settings.AUTH_COOKIE_NAME):
        return RedirectResponse(f"/sign-in?{urlencode({'redirect': path})}")
    return await call_next(request)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        # route errors that escaped the handlers still get an id and a log line
        response = await unhandled_error(request, exc)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

# Every non-2xx body is {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "invalid"))
    return JSONResponse(status_code=400, content={"error": "; ".join(messages) or "Invalid request"})

@app.exception_handler(Forbidden)
async def forbidden_error(request: Request, exc: Forbidden):
    return JSONResponse(status_code=403, content={"error": exc.message})

@app.exception_handler(StoreError)
async def store_error(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.http_status, content={"error": str(exc)})

@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.error("unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

@app.get("/")
def root():
    return {"ok": True, "name": "JitsDiary API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick record store sanity check
    store = RecordStore(settings.POCKETBASE_URL, timeout=settings.POCKETBASE_TIMEOUT_SECONDS)
    try:
        store.health()
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}
    finally:
        store.close()

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(auth_router)
app.include_router(me_router)
app.include_router(profile_router)
app.include_router(sessions_router)
app.include_router(rounds_router)
app.include_router(session_techniques_router)
app.include_router(belt_progressions_router)
app.include_router(library_router)

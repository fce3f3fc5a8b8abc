from __future__ import annotations
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contesthub.config import settings
from contesthub.logging_setup import configure_logging
from contesthub.routes.system import router as system_router
from contesthub.routes.auth import router as auth_router
from contesthub.routes.users import router as users_router
from contesthub.routes.contests import router as contests_router, leaderboard_router
from contesthub.routes.creator import router as creator_router
from contesthub.routes.submissions import router as submissions_router
from contesthub.routes.admin import router as admin_router
from contesthub.routes.payments import router as payments_router
import structlog

configure_logging()
log = structlog.get_logger()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    log.info("startup", env=settings.environment, version=settings.app_version, git_sha=settings.git_sha)
    yield
    # Shutdown
    log.info("shutdown")

app = FastAPI(
    title=f"{settings.app_display_name} API",
    version=settings.app_version,
    lifespan=lifespan,
    description=f"{settings.app_display_name} API for hosting paid contests",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "dev" else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(system_router)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(contests_router)
app.include_router(leaderboard_router)
app.include_router(creator_router)
app.include_router(submissions_router)
app.include_router(admin_router)
app.include_router(payments_router)

# Every error body is {"message": ...}
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "Invalid request")
    return JSONResponse({"message": f"{field}: {msg}" if field else msg}, status_code=400)

@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    log.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse({"message": "Internal server error"}, status_code=500)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    structlog.contextvars.bind_contextvars(request_id=rid)
    response: Response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    structlog.contextvars.clear_contextvars()
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("contesthub.main:app", host=settings.api_host, port=settings.api_port)

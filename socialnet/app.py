import logging

from functools import lru_cache

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from socialnet.core.app_logging import setup_logger
from socialnet.core.config import DEV_SECRET_KEY, get_settings
from socialnet.core.errors import SocialError
from socialnet.routers import auth as auth_router
from socialnet.routers import profile as profile_router
from socialnet.routers import users as users_router

logger = logging.getLogger(__name__)

DEV_ORIGINS = {
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"message": message, "success": False}, status_code=status_code)


async def social_error_handler(request: Request, exc: SocialError):
    return _error(exc.message, exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error("Invalid request", 400)


async def internal_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error("Internal server error", 500)


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = get_settings()
    setup_logger(settings.log_level)
    if settings.app_env == "prod" and settings.secret_key == DEV_SECRET_KEY:
        raise RuntimeError("SECRET_KEY must be configured in production.")

    app = FastAPI(title="socialnet API")

    allowed_cors = set(settings.cors_origins)
    if settings.app_env != "prod":
        allowed_cors.update(DEV_ORIGINS)
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.add_exception_handler(SocialError, social_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(auth_router.router)
    app.include_router(profile_router.router)
    app.include_router(users_router.router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


@lru_cache
def get_app() -> FastAPI:
    return create_app()


def __getattr__(name: str):
    # `uvicorn socialnet.app:app` resolves this on first access, not at import,
    # so settings are read when the server starts.
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from libs.result import Error
from src.app.services.credentials import PasswordHashingError
from .error import ClientError, ServerError, error_body

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    body = error_body(exc.base_error)
    logger.warning(f"Client error: {body['error']}")
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_password_hashing_error(request: Request, exc: PasswordHashingError):
    logger.error("Password hashing failed on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


async def handle_rate_limited(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit hit by %s on %s", get_remote_address(request), request.url.path)
    body = error_body(
        Error(
            "RATE_LIMITED",
            "Too many requests from this IP, please try again later",
            reason=str(exc.detail),
        )
    )
    return JSONResponse(status_code=status.HTTP_429_TOO_MANY_REQUESTS, content=body)


async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info(
        "%s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src.depends import init_models

    logger.info("Starting up resource hub service...")
    await init_models()
    yield
    logger.info("Shutting down resource hub service...")


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Resource Hub API", version="0.1.0", lifespan=lifespan)

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[ApplicationConfig.RATE_LIMIT],
        enabled=ApplicationConfig.RATE_LIMIT_ENABLED,
    )
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from src.api.routes import admin, auth, categories, health_check, resources

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(resources.router, prefix=prefix, tags=["Resources"])
    app.include_router(categories.router, prefix=prefix, tags=["Categories"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(PasswordHashingError, handle_password_hashing_error)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limited)

    return app

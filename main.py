"""
main.py

Application entrypoint for the Gladiator Jobs API.
- Initializes structured logging
- Sets up FastAPI application and middlewares
- Renders domain errors as a tagged {"error": {...}} result
- Registers all API routers
- Integrates rate limiting via SlowAPI
- Adds common security headers
- Configures CORS
"""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from gladiator.core.config import settings
from gladiator.core.exceptions import GladiatorError
from gladiator.core.limiter import limiter
from gladiator.core.logging import init_logging
from gladiator.core.schemas import MessageResponse
from gladiator.directory.routes import router as directory_router
from gladiator.feedback.routes import router as feedback_router
from gladiator.messaging.routes import router as messaging_router
from gladiator.payment.routes import router as payment_router
from gladiator.portfolio.routes import router as portfolio_router
from gladiator.profile.routes import router as profile_router
from gladiator.review.routes import router as review_router

# -----------------------------
# FastAPI App Initialization
# -----------------------------
init_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

# -----------------------------
# Middleware Configuration
# -----------------------------
app.state.limiter = limiter


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> Response:
    return _rate_limit_exceeded_handler(request, exc)  # type: ignore[arg-type]


app.add_exception_handler(429, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


# -----------------------------
# Domain Error Handlers
# -----------------------------
@app.exception_handler(GladiatorError)
async def gladiator_error_handler(request: Request, exc: GladiatorError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} error on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind}/{exc.code} on {request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid input")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": {"kind": "validation", "code": "invalid_input", "message": message}},
    )


# -----------------------------
# Security Headers Middleware
# -----------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add common security headers to responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# -----------------------------
# CORSMiddleware Configuration
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# API Router Registration
# -----------------------------
app.include_router(directory_router)
app.include_router(feedback_router)
app.include_router(messaging_router)
app.include_router(payment_router)
app.include_router(portfolio_router)
app.include_router(profile_router)
app.include_router(review_router)


# -----------------------------
# Root Endpoint
# -----------------------------
@app.get("/", response_model=MessageResponse)
async def home() -> MessageResponse:
    return MessageResponse(detail=f"Welcome to the {settings.APP_NAME} API")

"""
PDF Quiz Server

FastAPI server that turns uploaded PDFs into quizzes:
- User registration and login (bcrypt + JWT bearer tokens)
- Quiz generation through a Claude completion oracle
- Answer evaluation (exact match or oracle grading)
- Quiz storage in AgentFS
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import app_state
from config import get_config
from core.exceptions import QuizServiceError
from core.logger import configure_logging, get_logger
from quiz.router import router as quiz_router
from routers.auth import router as auth_router

logger = get_logger("server")
request_logger = get_logger("requests")


# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    config = get_config()
    configure_logging(config.log_level)
    logger.info(f"Starting PDF Quiz server ({config.environment})")
    if config.uses_default_secret and config.environment != "development":
        logger.warning("JWT_SECRET is not set; tokens are signed with the development secret")
    yield
    await app_state.cleanup()
    logger.info("PDF Quiz server stopped")


app = FastAPI(
    title="PDF Quiz",
    description="Quiz generation and answer evaluation from PDF documents",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)


# =============================================================================
# REQUEST LOGGING
# =============================================================================


def client_ip(request: Request) -> str:
    """Client address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"

    timestamp = datetime.now(timezone.utc).isoformat()
    request_logger.info(f"[{timestamp}] {request.method} {url} - IP: {client_ip(request)}")

    try:
        response = await call_next(request)
    except Exception:
        timestamp = datetime.now(timezone.utc).isoformat()
        request_logger.info(f"[{timestamp}] {request.method} {url} - Status: 500")
        raise

    timestamp = datetime.now(timezone.utc).isoformat()
    request_logger.info(f"[{timestamp}] {request.method} {url} - Status: {response.status_code}")
    return response


# =============================================================================
# ERROR HANDLERS
# =============================================================================


@app.exception_handler(QuizServiceError)
async def quiz_service_error_handler(request: Request, exc: QuizServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {first.get('msg', '')}".strip()
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Server error"})


# =============================================================================
# ROUTERS
# =============================================================================

app.include_router(auth_router)
app.include_router(quiz_router)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health")
async def health_check():
    """Detailed health check."""
    config = get_config()
    return {
        "status": "healthy",
        "environment": config.environment,
        "store": {
            "id": config.agentfs_id,
            "open": app_state.is_store_open(),
        },
        "oracle": {
            "generation_model": config.generation_model,
            "grading_model": config.grading_model,
        },
    }


@app.get("/api/test")
async def api_test():
    return {"message": "Server is working correctly"}


@app.get("/open-test")
async def open_test(request: Request):
    """Connectivity check that echoes the caller address."""
    return {"message": "Open endpoint working correctly", "clientIP": client_ip(request)}


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    configure_logging(config.log_level)
    logger.info(f"Server running on port {config.port} on all interfaces")
    uvicorn.run(app, host=config.host, port=config.port)

import logging

from app import config

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from app.api.base import api_router  # noqa: E402
from app.features.relationships import ErrorKind, RelationshipError  # noqa: E402

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Task Assignment API",
    description="Tasks and users with consistent task ownership and pending lists",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RelationshipError)
async def relationship_error_handler(request: Request, exc: RelationshipError):
    """Render domain errors as {"message", "error"} with the matching status"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.kind.value}): {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "error": exc.kind.value},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same failure shape as domain validation errors"""
    errors = exc.errors()
    if errors and tuple(errors[0].get("loc", ()))[:1] == ("body",):
        message = "Request body must be a JSON object"
    else:
        message = "Invalid request"
    logger.info(f"{request.method} {request.url.path} rejected (validation): {errors}")

    return JSONResponse(
        status_code=400,
        content={"message": message, "error": ErrorKind.VALIDATION.value},
    )


# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "Task Assignment API",
        "docs": "/docs",
        "version": "1.0.0"
    }

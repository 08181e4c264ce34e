import logging
import sys
import time
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request

from api.shared.dtos import ErrorResponse, HealthCheckResponse
from api.shared.exceptions import ChatException
from di.container import ApplicationContainer as DependencyContainer
from core.settings import SETTINGS

# Configure logging
logging.basicConfig(
    level=getattr(logging, SETTINGS.APP.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if SETTINGS.APP.JSON_LOGS
        else structlog.dev.ConsoleRenderer(),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = logging.getLogger("chat")


class CustomFastAPI(FastAPI):
    container: DependencyContainer


@asynccontextmanager
async def lifespan(_app: CustomFastAPI):
    logger.info("Starting application initialization...")
    start_time = time.time()

    try:
        logger.info("Initializing database connection...")
        db_start = time.time()
        db_resource = _app.container.infrastructure.database()
        await db_resource.init()
        await db_resource.ping()
        logger.info(
            f"Database connection established in {time.time() - db_start:.2f}s"
        )

        logger.info(
            f"Application startup completed in {time.time() - start_time:.2f}s"
        )
    except Exception as e:
        logger.exception(f"Failed to initialize application: {str(e)}")
        raise

    yield

    db_resource = _app.container.infrastructure.database()
    await db_resource.shutdown()
    logger.info("Application shutdown complete")


def create_fastapi_app() -> CustomFastAPI:
    origins = {
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:8000",
    }

    _app = CustomFastAPI(
        title="Chat API",
        description="Accounts, typed messages and paginated conversation history",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Initialize dependency container
    _app.container = DependencyContainer()
    _app.container.wire(modules=[sys.modules[__name__]])
    _app.container.init_resources()

    _app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include feature routers
    from api.features.messages.router import router as messages_router
    from api.features.users.router import router as users_router

    _app.include_router(users_router, prefix="/api/v1/users", tags=["Users"])
    _app.include_router(messages_router, prefix="/api/v1/messages", tags=["Messages"])

    return _app


app = create_fastapi_app()


@app.get("/")
async def root():
    return {"message": "Chat API is running", "status": "ok"}


@app.get("/health", response_model=HealthCheckResponse)
async def health():
    db_resource = app.container.infrastructure.database()
    try:
        await db_resource.ping()
    except (RuntimeError, OSError, SQLAlchemyError) as e:
        logger.warning(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content=HealthCheckResponse(
                status="unavailable", dependencies={"database": "unreachable"}
            ).model_dump(mode="json"),
        )
    return HealthCheckResponse(status="ok", dependencies={"database": "ok"})


# Exception handlers
@app.exception_handler(ChatException)
async def chat_exception_handler(request: Request, exc: ChatException):
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error_code=exc.error_code, message=exc.message, details=exc.details
        ).model_dump(mode="json"),
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "detail": f"{exc.detail} : {request.url}",
            "status_code": 404,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "Validation Error", "detail": str(exc), "status_code": 422},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "status_code": 500,
        },
    )

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from jobly.core.auth_middleware import AuthMiddleware
from jobly.core.config import Settings, get_settings
from jobly.core.database import create_db_engine, create_session_factory, init_db
from jobly.core.exceptions import validation_exception_handler
from jobly.core.logging_config import setup_logging
from jobly.core.security import build_password_context
from jobly.api.endpoints import auth, companies, health, jobs, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up Jobly API...")
    init_db(app.state.engine)
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down Jobly API...")
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around an explicit settings object.

    The engine, session factory, password context and signing secret all
    come from ``settings``; routes reach them through ``app.state``.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS, service_name=settings.PROJECT_NAME)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Companies and jobs behind a token-authenticated JSON API",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = create_db_engine(settings.SQLALCHEMY_DATABASE_URL)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.pwd_context = build_password_context(settings.BCRYPT_ROUNDS)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(AuthMiddleware, secret_key=settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(companies.router, prefix=settings.API_PREFIX)
    app.include_router(jobs.router, prefix=settings.API_PREFIX)
    app.include_router(users.router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        """Root endpoint - API health check"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "status": "healthy"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )

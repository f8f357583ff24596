"""Household settlement FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables before settings are read
load_dotenv()

from household.api.errors import register_error_handlers  # noqa: E402
from household.api.routes import (  # noqa: E402
    dashboard,
    households,
    line_items,
    members,
    shared_expenses,
)
from household.models import Base  # noqa: E402
from household.services import engine  # noqa: E402
from household.services.config import settings  # noqa: E402
from household.services.logging import setup_server_logging  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")
    yield
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Build the FastAPI application with all routers registered."""
    app = FastAPI(
        title=settings.api_title,
        description="Monthly income, expenses and settlement for two-person households",
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.include_router(households.router)
    app.include_router(members.router)
    app.include_router(line_items.router)
    app.include_router(shared_expenses.router)
    app.include_router(dashboard.router)
    register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    """Run the API server with file + stdout logging."""
    import uvicorn

    setup_server_logging(settings.log_file, default_level=settings.log_level)
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()

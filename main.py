import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notification_hub.config import get_settings
from notification_hub.infrastructure.database import get_engine
from notification_hub.interfaces.api.dependencies import get_notification_center
from notification_hub.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the notification center at start-up and release the engine on shutdown."""

    build_center = app.dependency_overrides.get(get_notification_center, get_notification_center)
    build_center()
    yield
    get_engine().dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Notification Hub", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from location_base import __version__
from location_base.api.routes import router
from location_base.config import Settings, settings as default_settings
from location_base.controller import AppController
from location_base.exceptions import StorageError
from location_base.logging_config import get_logger
from location_base.theme import APP_TITLE

logger = get_logger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the HTTP screen surface around a freshly wired controller."""
    cfg = app_settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Storage is opened once here and closed on shutdown
        cfg.setup()
        controller = AppController.from_settings(cfg)
        await controller.start()
        app.state.controller = controller
        logger.info("Screen surface ready")
        yield
        controller.close()

    app = FastAPI(
        title=APP_TITLE,
        description="Capture the device location on demand and list every capture.",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)

    @app.get("/health")
    def health_check():
        """Storage health and the number of stored records."""
        controller: AppController = app.state.controller
        try:
            records = controller.repository.count()
        except StorageError as e:
            logger.warning("Health check could not count records: %s", e)
            return {
                "status": "degraded",
                "database_open": controller.repository.database.is_open,
                "records": None,
            }
        return {
            "status": "healthy",
            "database_open": controller.repository.database.is_open,
            "records": records,
        }

    return app


app = create_app()

"""Serve the screen surface: python -m location_base"""

import uvicorn

from location_base.config import settings
from location_base.logging_config import setup_logging


def main() -> None:
    settings.setup()
    setup_logging(level=settings.logging.level, log_file=settings.logging.file)
    uvicorn.run(
        "location_base.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )


if __name__ == "__main__":
    main()

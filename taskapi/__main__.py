"""Run the task API server."""

import logging

import uvicorn

from taskapi.config import load_settings
from taskapi.logging_setup import setup_logging
from taskapi.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    """Load settings, configure logging and serve until interrupted."""
    settings = load_settings()
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()

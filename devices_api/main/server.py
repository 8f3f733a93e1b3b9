"""
HTTP server entry point - Main Layer

Runs the FastAPI application under uvicorn with the configured host
and port: ``python -m devices_api.main`` or the ``devices-api`` script.
"""

import uvicorn

from devices_api.main.config import get_settings
from devices_api.shared import get_logger

logger = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info(
        "server.starting",
        host=settings.api.host,
        port=settings.api.port,
        environment=settings.environment.value,
    )
    uvicorn.run(
        "devices_api.main.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        log_config=None,
    )

"""
Manager Portal - Main Entry Point

Server-rendered portal where business managers moderate reviews and
complaints and maintain products, job listings and their business profile.
"""

import structlog
import uvicorn

from manager_portal.config import get_settings
from manager_portal.core.logging import configure_logging
from manager_portal.web.app import create_app

settings = get_settings()

# Configure structured logging
configure_logging(settings.log_level, json_logs=not settings.is_development)

logger = structlog.get_logger(__name__)

# Create app instance
app = create_app(settings)


def main():
    """Main entry point for running the application."""
    logger.info(
        "starting_server",
        host=settings.api_host,
        port=settings.api_port,
    )

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

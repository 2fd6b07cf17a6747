import asyncio
import sys

import uvicorn
from dotenv import load_dotenv

from application_sdk.observability.logger_adaptor import get_logger
from portfolio.clients import GitHubClient
from portfolio.config import ViewerSettings, load_settings
from portfolio.server import create_app
from portfolio.viewer import PortfolioViewer

APP_NAME = "portfolio_viewer"

logger = get_logger(__name__)


def _configure_and_validate_environment() -> ViewerSettings:
    """
    Load environment variables from .env file and validate them.
    Exits the application if any setting is malformed.
    """
    load_dotenv()
    try:
        settings = load_settings()
    except ValueError as e:
        logger.critical("Fatal: Invalid configuration: %s. Please check your .env file.", e)
        sys.exit(1)
    logger.info("Environment configuration loaded and validated successfully.")
    return settings


async def launch_app():
    """
    Builds the viewer and serves the portfolio page until interrupted.
    """
    settings = _configure_and_validate_environment()

    logger.info("Initializing the %s application.", APP_NAME)
    client = GitHubClient(api_base=settings.api_base, timeout=settings.request_timeout)
    viewer = PortfolioViewer(client)
    app = create_app(viewer, default_username=settings.default_username)

    server = uvicorn.Server(uvicorn.Config(app, host=settings.host, port=settings.port))
    logger.info("Serving on http://%s:%d", settings.host, settings.port)
    await server.serve()


def run():
    asyncio.run(launch_app())


if __name__ == "__main__":
    run()

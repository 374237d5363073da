import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from application_sdk.observability.logger_adaptor import get_logger
from portfolio.config import PortfolioConfig, load_config, missing_env_vars
from portfolio.events import PAGE_READY, EventRegistry
from portfolio.workflow import PortfolioWorkflow

APP_NAME = "portfolio"

logger = get_logger(__name__)


def _configure_and_validate_environment() -> PortfolioConfig:
    """
    Load environment variables from .env file and ensure critical variables are set.
    Exits the application if required configuration is missing.
    """
    load_dotenv()
    missing_vars = missing_env_vars()
    if missing_vars:
        logger.critical(
            "Fatal: Missing required environment variables: %s. Please check your .env file.",
            ", ".join(missing_vars),
        )
        sys.exit(1)
    config = load_config()
    logger.info("Environment configuration loaded and validated successfully.")
    return config


async def launch_app() -> int:
    """
    Fetches the configured account once, renders the gallery page and writes it out.
    """
    config = _configure_and_validate_environment()

    logger.info("Initializing the %s application.", APP_NAME)
    workflow = PortfolioWorkflow(config)
    registry = workflow.bind(EventRegistry())
    try:
        (loaded,) = await asyncio.gather(*registry.dispatch(PAGE_READY))
        await workflow.stats_display.wait()
    finally:
        await workflow.close()

    output = Path(config.output_file)
    output.write_text(workflow.page_html(), encoding="utf-8")
    logger.info("Portfolio initialized; page written to '%s'", output)
    return 0 if loaded else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(launch_app()))

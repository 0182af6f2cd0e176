"""Run the API server: ``python -m weather_likelihood``."""

import sys

import uvicorn
from dotenv import load_dotenv

from weather_likelihood.config import get_settings, validate_settings
from weather_likelihood.exceptions import ConfigurationError
from weather_likelihood.services.logging_service import configure_logging, get_logger


def main() -> int:
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = get_logger("main")

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        logger.error("configuration_invalid", settings_missing=e.missing, error=e.message)
        return 1

    uvicorn.run(
        "weather_likelihood.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

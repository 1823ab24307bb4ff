import os
from aiohttp import web
import logging
from logging.config import dictConfig
import json
from pydantic import ValidationError

from lab.cognito.gateway.app.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False):
    logging_config_file = os.getenv("LOGGING_CONFIG_FILE", "")

    if len(logging_config_file) > 0:
        with open(logging_config_file) as fl:
            dictConfig(json.load(fl))
        return

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.INFO)
    # botocore logs every request and response body at DEBUG.
    logging.getLogger("botocore").setLevel(logging.INFO)


def load_settings() -> Settings:
    """
    Load settings from the environment, exiting with the names of any invalid or missing fields.
    """
    try:
        return Settings()  # type: ignore
    except ValidationError as e:
        fields = sorted(
            ".".join(str(part) for part in error["loc"]) for error in e.errors()
        )
        raise SystemExit(f"Invalid configuration: {', '.join(fields)}") from e


def invoke():
    settings = load_settings()
    configure_logging(settings.debug)

    from lab.cognito.gateway.app.server import start_web_server

    logger.info(
        "Listening on port %d for user pool %s in %s",
        settings.http_port,
        settings.cognito_user_pool_id,
        settings.cognito_region,
    )
    web.run_app(start_web_server(settings), port=settings.http_port, print=None)


if __name__ == "__main__":
    invoke()

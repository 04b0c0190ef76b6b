# This file starts the HTTP server for the price API.
# Configuration is loaded once here and handed to the app factory; uvicorn binds the configured port.

from __future__ import annotations

import logging

import uvicorn

from price_api.api.api_config import load_api_config
from price_api.api.app import create_app

LOGGER = logging.getLogger("price_api.api")


def main() -> None:
    config = load_api_config()
    app = create_app(config)
    LOGGER.info("API running on %s:%s", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()

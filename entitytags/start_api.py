#!/usr/bin/env python3
"""
Entity Tags API Starter
Runs the HTTP API on the configured host and port
"""

import logging

import uvicorn

from entitytags.helpers.logging_helper import configure_logging
from entitytags.services.config_svc import ConfigService


def main() -> None:
    config_service = ConfigService()
    configure_logging(log_dir=config_service.get("log_dir"))
    api = config_service.make_api_config()

    logging.info(f"Starting Entity Tags API on {api.host}:{api.port}...")
    logging.info("  - POST /api/entity-tags/bulk-delete")

    uvicorn.run(
        "entitytags.interfaces.api.api_app:api_app",
        host=api.host,
        port=api.port,
        timeout_keep_alive=90,
        log_level="info",
    )


if __name__ == "__main__":
    main()

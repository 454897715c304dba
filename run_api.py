#!/usr/bin/env python3
"""
Script to run the Bookshelf API server.
"""

import sys

import uvicorn

from bookshelf.config import config
from utilities.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    """
    Run the API server.

    Returns:
        Process exit status, non-zero when the server failed to start or
        stopped on an unexpected error
    """
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.log_file,
        debug=config.debug
    )
    logger.info(
        "Starting Bookshelf API server",
        host=config.host,
        port=config.port,
        debug=config.debug
    )

    try:
        uvicorn.run(
            "bookshelf.main:app",
            host=config.host,
            port=config.port,
            reload=config.debug,
            log_level=config.log_level.lower(),
            log_config=None,
            access_log=True
        )
    except Exception as e:
        logger.critical("Server terminated by an unexpected error", error=str(e), exc_info=e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

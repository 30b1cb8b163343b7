from __future__ import annotations

import logging

LOGGER_NAME = "app"
HANDLER_NAME = "upload-service"
LOG_FORMAT = "level=%(levelname)s time=%(asctime)s module=%(module)s func=%(funcName)s msg=%(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    # the app module may be imported more than once (uvicorn --reload, tests)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    return logger

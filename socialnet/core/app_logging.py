"""Root logger setup: JSON lines on stderr."""

import logging

from pythonjsonlogger import jsonlogger

_HANDLER_NAME = "socialnet-json"


def setup_logger(level: str = "INFO") -> None:
    logger = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in logger.handlers):
        log_handler = logging.StreamHandler()
        log_handler.set_name(_HANDLER_NAME)
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
        log_handler.setFormatter(formatter)
        logger.addHandler(log_handler)
    logger.setLevel(level)

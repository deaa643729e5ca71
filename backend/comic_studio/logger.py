import logging
import sys
from typing import Optional
from pythonjsonlogger import jsonlogger
from .config import settings

SERVICE_NAME = "comic-studio-api"

def setup_logger(name: str = "comic_studio", level: Optional[str] = None) -> logging.Logger:
    """
    JSON lines on stdout; ``extra={...}`` keys become top-level fields.
    """
    logger = logging.getLogger(name)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        rename_fields={"levelname": "level"},
        static_fields={"service": SERVICE_NAME},
    ))
    logger.addHandler(handler)
    # Records stay out of the root logger so uvicorn's handlers don't print them twice
    logger.propagate = False

    return logger

logger = setup_logger()

import logging
import sys
from typing import Optional

from common.config import yaml_config

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name or "game_loader")
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, yaml_config.logging.level, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger

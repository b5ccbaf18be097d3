import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "PURECUT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> int:
    """Configure root logging for hosts that embed the pipeline; returns the level applied."""
    level = level or os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("purecut").setLevel(level)
    return level

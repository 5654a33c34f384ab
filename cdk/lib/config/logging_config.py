import logging
import os
from typing import Optional

DEFAULT_LOG_LEVEL = logging.INFO
LOG_LEVEL_VARIABLE = "LOG_LEVEL"


def resolve_log_level(level_name: Optional[str]) -> int:
    """Map a level name such as "debug" to its number; unknown names give INFO."""
    if not level_name:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def configure_logging() -> None:
    logging.basicConfig(
        level=resolve_log_level(os.environ.get(LOG_LEVEL_VARIABLE)),
        format="%(levelname)s %(name)s: %(message)s"
    )

"""
Logging setup for LearnPath applications.

Library modules only create module-level loggers; the embedding
application (or the CLI) decides handlers and level.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging once for an application.

    Args:
        level: Level name (e.g., "DEBUG") or numeric logging level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)

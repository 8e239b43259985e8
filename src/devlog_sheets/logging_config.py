import logging
from typing import Optional

_console_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stderr.

    Args:
        level: Name of the root logger level, e.g. "INFO" or "DEBUG"

    """
    global _console_handler

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Repeated calls (e.g. in tests) must not stack handlers
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler()
    _console_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(_console_handler)

    # googleapiclient is chatty about discovery caching
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

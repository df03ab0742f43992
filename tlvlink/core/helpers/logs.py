import logging
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Attach a formatted stream handler (stderr by default) to the root logger."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level.upper())
    return handler

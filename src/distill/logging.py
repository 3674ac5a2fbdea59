import logging
import os
import sys

from pythonjsonlogger import jsonlogger

DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: str | None = None):
    """
    Configures structured JSON logging for the command line tool.

    Installs a single JSON stream handler on the root logger. Records go to
    stderr so the terminal output sink keeps stdout to itself. The level is
    taken from ``level`` or the ``DISTILL_LOG_LEVEL`` environment variable.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(
        (level or os.getenv("DISTILL_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    )
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in ["httpx", "httpcore", "google_genai"]:
        lib_logger = logging.getLogger(logger_name)
        lib_logger.setLevel(logging.WARNING)

    return root_logger

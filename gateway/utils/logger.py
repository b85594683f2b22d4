# gateway/utils/logger.py

import logging
import traceback
import os

from gateway.config import settings

formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%Y-%m-%d %H:%M:%S")


def setup_logger(name, logs_path, file_name, level):
    """Point logger ``name`` at logs_path/file_name.

    A file handler already writing elsewhere is closed and replaced, so settings
    injected after import still decide where logs go.
    """
    os.makedirs(logs_path, exist_ok=True)
    log_file = os.path.abspath(os.path.join(logs_path, file_name))

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate logs in parent loggers

    for h in list(logger.handlers):
        if isinstance(h, logging.FileHandler):
            if h.baseFilename == log_file:
                return logger
            logger.removeHandler(h)
            h.close()

    # delay=True: the file is only created once something is logged
    handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def use_logs_path(logs_path):
    """Move the access/error log files under ``logs_path``."""
    setup_logger("access", logs_path, "access.log", logging.INFO)
    setup_logger("error", logs_path, "error.log", logging.ERROR)


access_logger = setup_logger("access", settings.LOGS_PATH, "access.log", logging.INFO)
error_logger = setup_logger("error", settings.LOGS_PATH, "error.log", logging.ERROR)


def log_info(message):
    access_logger.info(message)


def log_exception(e: Exception, context: str = ""):
    error_logger.error(
        f"Exception in {context}: {type(e).__name__}: {e}\n"
        f"{''.join(traceback.format_exception(type(e), e, e.__traceback__))}"
    )

"""
Logging configuration for the Job Track API.

Console output plus a rotating log file, with noisy third-party loggers
turned down.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from jobtrack.core import config


def setup_logging(log_level: str = None, log_dir: str = None):
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to LOG_LEVEL from config.
        log_dir: Directory for the rotating log file. Defaults to LOG_DIR.
    """
    level_name = log_level or config.LOG_LEVEL
    level = getattr(logging, level_name.upper(), logging.INFO)

    log_path = Path(log_dir or config.LOG_DIR)
    log_path.mkdir(exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # Console handler with simple format
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(console_formatter)

    # File handler with detailed format
    file_handler = RotatingFileHandler(
        log_path / "jobtrack.log",
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_formatter)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def sanitize_log_data(data: dict) -> dict:
    """
    Redact sensitive values before a payload is logged.

    Args:
        data: Dictionary to sanitize

    Returns:
        Copy of the dictionary with secrets replaced
    """
    sanitized = data.copy()
    sensitive_keys = ["password", "token", "secret", "database_url"]

    for key in sanitized:
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            sanitized[key] = "***REDACTED***"

    return sanitized

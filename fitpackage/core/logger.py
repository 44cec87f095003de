"""Logger configuration for fitpackage.

Calculation modules only import `from loguru import logger`; the host
application decides where records go by calling one of the setup
functions once at startup.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def _only_fitpackage(record: dict) -> bool:
    return (record["name"] or "").startswith("fitpackage")


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    json_logs: bool = False,
    package_only: bool = False,
) -> None:
    """Replace loguru sinks with a console sink and an optional file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a rotating, zip-compressed log file
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        json_logs: Emit one JSON object per record on the console instead of colored text
        package_only: Drop records from modules outside fitpackage
    """
    logger.remove()
    record_filter = _only_fitpackage if package_only else None

    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True, filter=record_filter)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, filter=record_filter)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            filter=record_filter,
        )

    logger.debug(f"Logging configured: level={level} file={log_file or '-'} json={json_logs}")


def setup_logger_from_settings() -> None:
    """Configure logging from FITPACKAGE_* environment settings."""
    from fitpackage.config.settings import settings

    setup_logger(
        level=settings.log_level,
        log_file=settings.log_file,
        json_logs=settings.log_json,
        package_only=settings.log_package_only,
    )

"""Loguru sinks for the duet CLI and embedding applications."""

import sys
from pathlib import Path

from loguru import logger

from duet.utils.exceptions import ConfigurationError

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
FILE_FORMATS = ("text", "json")


def _resolve_level(level: str) -> str:
    name = level.upper()
    try:
        logger.level(name)
    except ValueError as e:
        raise ConfigurationError(f"Unknown log level: {level}") from e
    return name


def configure_logging(logging_settings, quiet: bool = False) -> None:
    """Replace loguru's handlers with the sinks described by LoggingSettings.

    Args:
        logging_settings: LoggingSettings instance
        quiet: Skip the stderr sink (file sink is still added if configured)

    Raises:
        ConfigurationError: On an unknown level or file format
    """
    level = _resolve_level(logging_settings.level)
    if logging_settings.format not in FILE_FORMATS:
        raise ConfigurationError(
            f"Log format must be one of {', '.join(FILE_FORMATS)}, got {logging_settings.format}"
        )

    logger.remove()

    if not quiet:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if not logging_settings.output_file:
        return

    log_file = Path(logging_settings.output_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level=level,
        format=FILE_FORMAT,
        serialize=logging_settings.format == "json",
        rotation="10 MB",
        retention="1 week",
    )
    logger.debug(f"Logging to {log_file} ({logging_settings.format})")

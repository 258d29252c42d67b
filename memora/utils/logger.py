"""
Logging configuration using Loguru.

Console output is human readable; the optional file sink rotates and can be
serialized to JSON. Records carry the emitting module plus any bound
context (user_id, session_id) in ``extra``.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{line}</cyan>{extra[context]} - <level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{line}{extra[context]} - {message}"
)


def _render_context(record) -> bool:
    """Fill the defaults the formats rely on and render bound context as " [k=v ...]"."""
    extra = record["extra"]
    extra.setdefault("module", record["name"])
    context = {key: value for key, value in extra.items() if key not in ("module", "context")}
    extra["context"] = (
        " [" + " ".join(f"{key}={value}" for key, value in sorted(context.items())) + "]"
        if context
        else ""
    )
    return True


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str = "zip",
    serialize: bool = True,
) -> None:
    """
    Configure the Loguru sinks.

    Args:
        level: Minimum level for every sink
        log_to_file: Also write memora_<date>.log files under log_dir
        log_dir: Directory for log files (created if missing)
        file_rotation: Loguru rotation rule for the file sink
        file_retention: Loguru retention rule for the file sink
        compression: Archive format for rotated files
        serialize: Write the file sink as JSON lines
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        filter=_render_context,
        colorize=True,
    )

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "memora_{time:YYYY-MM-DD}.log",
            level=level,
            format=FILE_FORMAT,
            filter=_render_context,
            rotation=file_rotation,
            retention=file_retention,
            compression=compression,
            serialize=serialize,
            enqueue=True,
        )


def setup_logging_from_config(config) -> None:
    """Configure logging from a Config; debug mode forces DEBUG level."""
    settings = config.logging
    setup_logging(
        level="DEBUG" if config.debug else settings.level,
        log_to_file=settings.log_to_file,
        log_dir=settings.log_dir,
        file_rotation=settings.file_rotation,
        file_retention=settings.file_retention,
        compression=settings.compression,
        serialize=settings.serialize,
    )


def get_logger(name: str, **context):
    """
    Get a logger for a module.

    Args:
        name: Module name, usually __name__
        **context: Extra fields bound to every record (e.g. session_id)
    """
    return logger.bind(module=name, **context)

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "boundedcache"


def setup_logging(
    log_level: str | None = None,
    log_file: Path | None = None,
    logger_name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """Attach console and optional rotating-file output to the package logger.

    Only the ``boundedcache`` logger is touched by default, so applications
    keep control of the root logger. Pass ``logger_name=""`` to configure root.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR). Defaults
            to ``log_level`` from the cache settings.
        log_file: When given, also write to this file with rotation.
        logger_name: Logger to configure.

    Returns:
        The configured logger.
    """
    if log_level is None:
        from boundedcache.config import get_settings

        log_level = get_settings().log_level

    level = getattr(logging, log_level.upper(), logging.INFO)
    target = logging.getLogger(logger_name or None)
    target.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # FileHandler subclasses StreamHandler, hence the exact type check
    if not any(type(h) is logging.StreamHandler for h in target.handlers):
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(formatter)
        target.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if not any(isinstance(h, RotatingFileHandler) for h in target.handlers):
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=5 * 1024 * 1024,  # 5 MB
                backupCount=3,
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            target.addHandler(file_handler)

    return target

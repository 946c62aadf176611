"""Logger setup for scripts and benchmarks."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(
    name: str,
    log_file: Optional[Union[str, Path]] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Get a logger with a console handler and an optional file handler.

    Calling this twice for the same name does not add duplicate handlers.
    Library modules log through logging.getLogger(__name__) and leave
    handler setup to the application; this helper is that setup for the
    bundled scripts.

    Args:
        name: Logger name
        log_file: Optional path; parent directories are created
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    if not any(getattr(h, "_scryptkdf_console", False) for h in logger.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        console._scryptkdf_console = True  # type: ignore[attr-defined]
        logger.addHandler(console)

    if log_file is not None:
        log_path = Path(os.path.abspath(log_file))
        existing = {
            getattr(h, "baseFilename", None)
            for h in logger.handlers
            if isinstance(h, logging.FileHandler)
        }
        if str(log_path) not in existing:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger

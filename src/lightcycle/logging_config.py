"""
Logging Configuration
Sets up the 'lightcycle' logger namespace for the CLI and the frame loop.

Per-tick messages are logged at DEBUG, so --verbose output is dominated by
them; third-party plotting loggers are kept at WARNING so they do not drown
the frame log when the preview is used.
"""
import logging
import sys
from typing import Iterable, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Loggers that become very chatty at DEBUG (font scanning, PNG chunks)
NOISY_LOGGERS = ("matplotlib", "PIL")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Configures the 'lightcycle' logger: console output plus an optional file.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        quiet: Names of third-party loggers capped at WARNING.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("lightcycle")
    logger.setLevel(level)

    # main() may run several times in one process (tests, notebooks)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}"
                 + (f", writing to {log_file}." if log_file else "."))
    return logger

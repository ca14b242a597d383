# -*- coding: utf-8 -*-
"""
Logging for ingestion runs

Every run logs to stdout and, from the CLI, to a daily file under
data/logs/ingestion/. Per-year counts and per-law progress are INFO, retries
and skipped rows WARNING, failed years and laws ERROR. A missing Dutch
translation is only DEBUG.

Examples:
    # Entry point (src/main.py)
    setup_logging(level=logging.DEBUG, log_file=default_log_file())

    # Any module
    logger = get_logger(__name__)
    logger.info("2023: 412 laws found")

"""
# Standard library
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

# Set once the root logger has been configured for this process
_logging_configured = False

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# HTTP stack loggers that would otherwise log every connection at DEBUG
QUIET_LOGGERS = ('urllib3', 'requests', 'charset_normalizer')


def build_handlers(
    level: int,
    log_file: Optional[Union[str, Path]] = None,
    format_string: str = DEFAULT_FORMAT,
) -> List[logging.Handler]:
    """Console handler, plus a UTF-8 file handler appending to `log_file`."""
    formatter = logging.Formatter(format_string)

    console = logging.StreamHandler(sys.stdout)
    handlers: List[logging.Handler] = [console]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: str = DEFAULT_FORMAT,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> None:
    """
    Configure the root logger for an ingestion run (first call only).

    Args:
        level: Root level; --verbose passes logging.DEBUG
        log_file: Run log file, usually default_log_file()
        format_string: Record format
        quiet: Third-party loggers capped at WARNING
    """
    global _logging_configured
    if _logging_configured:
        return

    logging.basicConfig(
        level=level,
        handlers=build_handlers(level, log_file, format_string),
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True


def default_log_file(log_dir: Optional[Path] = None) -> Path:
    """Daily log file for ingestion runs: ingestion_YYYYMMDD.log."""
    if log_dir is None:
        from configs.config import INGESTION_LOGS_PATH
        log_dir = INGESTION_LOGS_PATH
    return Path(log_dir) / f"ingestion_{datetime.now().strftime('%Y%m%d')}.log"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

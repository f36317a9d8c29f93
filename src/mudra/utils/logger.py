"""
Centralised Loguru configuration.

Sets up two logging sinks with different verbosity levels:
  - **stderr** (terminal): INFO and above by default, compact and coloured.
  - **File**: DEBUG and above, full timestamps with source location, daily
    file naming with size-based rotation, compression and 30-day retention.

Call ``setup_logger()`` once at application startup; library modules only
ever do ``from loguru import logger``.
"""
import sys
from pathlib import Path

from loguru import logger


def setup_logger(log_dir: str = "logs", console_level: str = "INFO") -> logger:
    """Configure and return the global Loguru logger.

    Args:
        log_dir: Directory for log files.  Created if it does not exist.
        console_level: Minimum level echoed to stderr.

    Returns:
        The configured ``logger`` singleton.
    """
    logger.remove()

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    # e.g. logs/mudra_2026-10-19.log
    log_file = log_path / "mudra_{time:YYYY-MM-DD}.log"

    logger.add(
        sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    logger.add(
        log_file,
        level="DEBUG",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} - {message}"
        ),
        enqueue=True,
        encoding="utf-8",
    )

    return logger

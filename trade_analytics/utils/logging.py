import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "trade-analytics.log"

# every record carries the CLI command it ran under; "-" outside a command
_RECORD_LAYOUT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[command]: <10} | {name}:{function} | {message}"


def setup_logging(log_level: str = "INFO", log_dir: Path = Path("db/logs")) -> Path:
    """
    Route loguru output to stderr and to a rotating file in log_dir.

    stderr honours log_level so command output stays readable. The file
    keeps the full DEBUG trail of every calculation for later inspection.

    Returns:
        Path of the log file
    """
    logger.remove()
    logger.configure(extra={"command": "-"})

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logger.add(
        sys.stderr,
        format="<level>" + _RECORD_LAYOUT + "</level>",
        level=log_level.upper(),
        colorize=True,
    )
    logger.add(
        log_file,
        format=_RECORD_LAYOUT,
        level="DEBUG",
        rotation="10 MB",
        retention="7 days",
        compression="zip",
        colorize=False,
        encoding="utf-8",
    )

    logger.debug(f"Logging to {log_file} (stderr level {log_level.upper()})")
    return log_file

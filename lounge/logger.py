"""loguru sinks for the CLI and the Streamlit page. The library itself only logs."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <7}</level> <cyan>{name}</cyan> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} {level: <7} {name}:{line} | {message}"


def setup_logger(level: str = "INFO", log_file: str | Path | None = None) -> None:
    """Replace loguru's default sink; `log_file` also keeps a plain-text copy of each run."""
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_path, format=FILE_FORMAT, level=level, mode="w")

    destination = f"stderr and {log_file}" if log_file else "stderr"
    logger.debug(f"logging at {level} to {destination}")

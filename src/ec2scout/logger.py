import logging
from pathlib import Path

from rich.logging import RichHandler

FILE_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logger(name: str = "ec2scout", level: int = logging.INFO) -> logging.Logger:
    """Configures and returns a logger with RichHandler."""

    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers if setup is called multiple times

    if not logger.handlers:
        logger.setLevel(level)

        handler = RichHandler(rich_tracebacks=True, markup=True, show_path=False)

        handler.setFormatter(logging.Formatter("%(message)s"))

        logger.addHandler(handler)

    else:
        logger.setLevel(level)

    return logger


def add_file_handler(logger: logging.Logger, path: Path) -> logging.FileHandler:
    """Mirrors every record into a plain-text run log (append mode)."""
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    logger.addHandler(handler)
    return handler


# Global logger instance (progress lines are part of the interactive output)


logger = setup_logger(level=logging.INFO)

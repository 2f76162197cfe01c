import logging
import sys
from pathlib import Path

from avitio_progress.config import get_settings

CONSOLE_HANDLER_NAME = "avitio_progress.console"
FILE_HANDLER_NAME = "avitio_progress.file"


def setup_logging():
    """Configure logging for the progress engine. Safe to call more than once."""
    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Root logger
    logger = logging.getLogger()
    logger.setLevel(level)
    installed = {handler.get_name() for handler in logger.handlers}

    # Console handler
    if CONSOLE_HANDLER_NAME not in installed:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(level)
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    # File handler (optional)
    if settings.log_to_file and FILE_HANDLER_NAME not in installed:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / "progress.log")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(level)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

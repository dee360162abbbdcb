import sys
from loguru import logger
import os


def setup_logging(debug_mode: bool = True, log_dir: str = "logs", log_to_file: bool = False):
    """
    Configures Loguru logger.
    """
    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if log_to_file:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        logger.add(os.path.join(log_dir, "nodeio_{time}.log"), rotation="10 MB", retention="1 week", level="DEBUG")

    logger.info("Logging initialized.")


def setup_logging_from_config(config) -> None:
    """Configure logging from a ConfigManager's general section."""
    general = config.data.general
    setup_logging(
        debug_mode=general.debug_mode,
        log_dir=general.log_dir,
        log_to_file=general.log_to_file,
    )

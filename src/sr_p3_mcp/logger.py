import logging
import sys
from logging.handlers import RotatingFileHandler

import colorlog

from .config import SRConfig


def setup_logging(config: SRConfig) -> None:
    """Configure the centralised logging settings.

    All console output goes to stderr; stdout is reserved for MCP protocol
    frames.
    """
    logger = logging.getLogger()
    logger.setLevel(config.log_level)

    if not logger.hasHandlers():
        console_handler = logging.StreamHandler(sys.stderr)
        console_formatter = colorlog.ColoredFormatter(
            "%(log_color)s%(levelname)s:%(name)s:%(message)s",
            log_colors={
                'DEBUG': 'bold_blue',
                'INFO': 'bold_green',
                'WARNING': 'bold_yellow',
                'ERROR': 'bold_red',
                'CRITICAL': 'bold_purple'
            }
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        # Add file handler if a log file is configured
        if config.log_file:
            file_handler = RotatingFileHandler(
                config.log_file,
                maxBytes=config.log_file_max_bytes,
                backupCount=config.log_file_backup_count,
            )
            file_formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s - (%(filename)s:%(lineno)d)'
            )
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

    # httpx logs every request at INFO; the client logs its own
    logging.getLogger("httpx").setLevel(logging.WARNING)

"""
Logging utilities for tax_office_resolver scripts.

Provides logging setup and header printing functions with tqdm compatibility.
"""

import logging
import sys
import time
from pathlib import Path

from tax_office_resolver.utils.tqdm_logging import TqdmLoggingHandler, setup_tqdm_logging


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes after each record."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(
    script_name: str,
    log_to_file: bool = False,
    log_dir: Path = Path("logs"),
    tqdm_compatible: bool = True,
) -> logging.Logger:
    """
    Set up logging for a script.

    Args:
        script_name: Name of the script (for log file naming)
        log_to_file: If True, log to file + console. If False, only console.
        log_dir: Directory for log files
        tqdm_compatible: If True, use TqdmLoggingHandler for clean progress bar output

    Returns:
        Configured logger instance
    """
    if not log_to_file:
        if not tqdm_compatible:
            logging.basicConfig(
                level=logging.INFO,
                format="%(message)s",
                stream=sys.stdout,
            )
            return logging.getLogger(script_name)
        logger = logging.getLogger(script_name)
        logger.setLevel(logging.INFO)
        setup_tqdm_logging(logger)
        logger.propagate = False

        # Package loggers only carry a NullHandler; surface their warnings
        pkg_logger = logging.getLogger("tax_office_resolver")
        for handler in pkg_logger.handlers[:]:
            if isinstance(handler, TqdmLoggingHandler):
                pkg_logger.removeHandler(handler)
        pkg_console_handler = TqdmLoggingHandler(level=logging.WARNING)
        pkg_console_handler.setFormatter(logging.Formatter("%(message)s"))
        pkg_logger.addHandler(pkg_console_handler)
        return logger

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{script_name}_{timestamp}.log"

    logger = logging.getLogger(script_name)
    logger.setLevel(logging.DEBUG)
    logger.handlers = []

    # File handler: DEBUG and above (detailed logs, including scoring traces)
    file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))

    # Console handler: INFO and above (summary only)
    if tqdm_compatible:
        console_handler = TqdmLoggingHandler(level=logging.INFO)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter("%(message)s")
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.propagate = False

    # Route package loggers (tax_office_resolver.resolution.*) to the file;
    # the console only shows their errors so progress bars stay readable
    pkg_logger = logging.getLogger("tax_office_resolver")
    pkg_logger.setLevel(logging.DEBUG)
    pkg_logger.handlers = []
    pkg_logger.addHandler(file_handler)
    pkg_console_handler = (
        TqdmLoggingHandler(level=logging.ERROR)
        if tqdm_compatible
        else logging.StreamHandler(sys.stderr)
    )
    pkg_console_handler.setLevel(logging.ERROR)
    pkg_console_handler.setFormatter(console_formatter)
    pkg_logger.addHandler(pkg_console_handler)
    pkg_logger.propagate = False

    logger.info(f"Log file: {log_file}")
    return logger


def print_section_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard section header.

    Args:
        title: Title for the section
        logger: Optional logger instance
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)

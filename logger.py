"""Structured logging infrastructure with verbosity levels and progress tracking."""

import copy
import logging
import logging.handlers
import time
from typing import Any, Dict, Optional

import colorlog

LOGGER_NAME = 'handbook_markdown_sync'


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Set up structured logging with configurable verbosity levels.

    Args:
        verbosity: Verbosity level (0=INFO, 1+=DEBUG)
        log_file: Optional path to log file
        log_format: Optional custom log format string
        date_format: Optional custom date format string
        level: Optional explicit log level string

    Returns:
        Configured logger instance
    """
    if level:
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level_upper = level.upper()
        if level_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{level}'. Must be one of: {sorted(allowed_levels)}"
            )
        log_level = getattr(logging, level_upper)
    elif verbosity >= 1:
        log_level = logging.DEBUG
    else:
        # Created/Updated lines are the tool's normal console output
        log_level = logging.INFO

    if log_format is None:
        log_format = '%(asctime)s - %(levelname)s - %(message)s'

    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False

    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + log_format,
        datefmt=date_format,
        log_colors={
            'DEBUG': 'white',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    ))
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(fmt=log_format, datefmt=date_format))
            logger.addHandler(file_handler)

            logger.debug(f"Logging to file: {log_file}")
        except OSError as e:
            logger.warning(f"Failed to set up file logging: {str(e)}")

    logger.debug(f"Log level: {logging.getLevelName(log_level)}")

    return logger


class ProgressTracker:
    """Context manager for tracking progress across sync outcomes."""

    def __init__(self, total_items: int, item_type: str = "items"):
        """
        Initialize progress tracker.

        Args:
            total_items: Total number of items to process
            item_type: Description of item type (e.g., "pages")
        """
        self.total_items = total_items
        self.item_type = item_type
        self.processed_items = 0
        self.counts: Dict[str, int] = {}
        self.start_time: Optional[float] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    def __enter__(self) -> 'ProgressTracker':
        self.start_time = time.time()
        self.logger.debug(f"Starting processing of {self.total_items} {self.item_type}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is None:
            return

        elapsed = time.time() - self.start_time

        if exc_type is not None:
            self.logger.error(
                f"Stopped after {self.processed_items}/{self.total_items} {self.item_type} "
                f"({self._format_elapsed(elapsed)})"
            )
            return

        summary = ', '.join(f"{count} {status}" for status, count in sorted(self.counts.items()))
        self.logger.info(
            f"Processed {self.processed_items}/{self.total_items} {self.item_type}"
            f"{' (' + summary + ')' if summary else ''} in {self._format_elapsed(elapsed)}"
        )

    def increment(self, status: str) -> None:
        """
        Increment progress counter.

        Args:
            status: Outcome label for the processed item
        """
        self.processed_items += 1
        self.counts[status] = self.counts.get(status, 0) + 1

        if self.processed_items % 50 == 0:
            self.logger.debug(
                f"Processed {self.processed_items}/{self.total_items} {self.item_type} "
                f"({self.total_items - self.processed_items} remaining)"
            )

    def get_stats(self) -> Dict[str, Any]:
        """Get current progress statistics."""
        elapsed = 0.0 if self.start_time is None else time.time() - self.start_time

        return {
            'total': self.total_items,
            'processed': self.processed_items,
            'counts': dict(self.counts),
            'elapsed_time': elapsed,
            'elapsed_time_formatted': self._format_elapsed(elapsed)
        }

    @staticmethod
    def _format_elapsed(seconds: float) -> str:
        """Format elapsed time in human-readable format."""
        if seconds < 60:
            return f"{seconds:.1f}s"

        minutes = int(seconds // 60)
        seconds = int(seconds % 60)

        if minutes < 60:
            return f"{minutes}m {seconds}s"

        hours = minutes // 60
        minutes = minutes % 60

        return f"{hours}h {minutes}m {seconds}s"


def log_section(title: str) -> None:
    """
    Log a decorative section header.

    Args:
        title: Section title to display
    """
    logger = logging.getLogger(LOGGER_NAME)

    separator = "=" * 60
    logger.debug(separator)
    logger.debug(f"  {title.upper()}")
    logger.debug(separator)


def log_config(config: Dict[str, Any]) -> None:
    """
    Log sanitized configuration for debugging.

    Args:
        config: Configuration dictionary to log
    """
    logger = logging.getLogger(LOGGER_NAME)

    sanitized_config = _sanitize_config(config)

    log_section("Configuration")

    handbook = sanitized_config.get('handbook', {})
    logger.debug(f"Team: {handbook.get('team') or '(none)'}")
    logger.debug(f"Handbook: {handbook.get('name', 'handbook')}")
    logger.debug(f"Subdomain: {handbook.get('subdomain', 'make')}")

    export_settings = sanitized_config.get('export', {})
    logger.debug(f"Output Directory: {export_settings.get('output_directory', 'en/')}")
    logger.debug(f"Regenerate: {export_settings.get('regenerate', False)}")
    if export_settings.get('report_path'):
        logger.debug(f"Report Path: {export_settings.get('report_path')}")

    advanced = sanitized_config.get('advanced', {})
    logger.debug(f"Request Timeout: {advanced.get('request_timeout', 30)}s")
    logger.debug(f"Page Size: {advanced.get('per_page', 100)}")
    logger.debug(f"Verify SSL: {advanced.get('verify_ssl', True)}")


def _sanitize_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a sanitized copy of configuration with sensitive fields masked.

    Args:
        config: Configuration dictionary

    Returns:
        Sanitized configuration copy
    """
    sensitive_fields = {'password', 'secret', 'token', 'api_key', 'auth'}

    def mask_sensitive(data: Any) -> Any:
        if isinstance(data, dict):
            masked = {}
            for key, value in data.items():
                if isinstance(value, str) and any(s in str(key).lower() for s in sensitive_fields):
                    masked[key] = "***REDACTED***"
                else:
                    masked[key] = mask_sensitive(value)
            return masked
        elif isinstance(data, list):
            return [mask_sensitive(item) for item in data]
        else:
            return data

    return mask_sensitive(copy.deepcopy(config))


__all__ = [
    'LOGGER_NAME',
    'setup_logging',
    'ProgressTracker',
    'log_section',
    'log_config'
]

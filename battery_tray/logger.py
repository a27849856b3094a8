"""
Logging setup and log retention for Battery Tray.

Sets up Python logging with rotating file handlers and removes log files
older than the retention period.
"""

import logging
import time
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from battery_tray.config import LOG_DIR


def setup_logging(config, log_dir=LOG_DIR) -> logging.Logger:
    """
    Configure logging with rotating file handler.

    Args:
        config: ConfigManager instance
        log_dir: Directory for log files

    Returns:
        Configured logger instance
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    log_level_str = config.get("log_level", "INFO")
    log_level = getattr(logging, log_level_str, logging.INFO)

    logger = logging.getLogger("BatteryTray")
    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_formatter = logging.Formatter(
        '%(levelname)s: %(message)s'
    )

    # File handler with rotation (10 MB max, keep 5 backups)
    log_file = log_path / f"battery_tray_{datetime.now().strftime('%Y-%m-%d')}.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    # Console only shows warnings and errors
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    logger.info("=" * 60)
    logger.info("Battery Tray logging initialized")
    logger.info(f"Log level: {log_level_str}")
    logger.info(f"Log file: {log_file}")
    logger.info("=" * 60)

    return logger


def cleanup_old_logs(log_dir=LOG_DIR, retention_days: int = 30) -> int:
    """
    Delete log files older than retention period.

    Args:
        log_dir: Directory containing log files
        retention_days: Age threshold in days

    Returns:
        Number of files deleted
    """
    logger = logging.getLogger("BatteryTray.Logger")
    log_path = Path(log_dir)

    if not log_path.exists():
        return 0

    deleted_count = 0
    cutoff_time = time.time() - (retention_days * 24 * 3600)

    for log_file in log_path.glob("*.log*"):
        try:
            if log_file.stat().st_mtime < cutoff_time:
                log_file.unlink()
                deleted_count += 1
                logger.info(f"Deleted old log file: {log_file.name}")
        except OSError as e:
            logger.warning(f"Error deleting log file {log_file}: {e}")

    return deleted_count

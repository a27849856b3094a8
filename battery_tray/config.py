"""
Configuration management for Battery Tray.

Handles loading, validating, and saving application configuration. Alert
thresholds and the polling interval are fixed constants, not settings.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict

DATA_DIR = Path.home() / ".battery_tray"
CONFIG_PATH = DATA_DIR / "config.json"
LOG_DIR = DATA_DIR / "logs"


class ConfigManager:
    """Thread-safe configuration manager."""

    DEFAULT_CONFIG = {
        "log_level": "INFO",
        "enable_notifications": True,
        "show_overlay": True,
        "log_retention_days": 30,
    }

    VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    def __init__(self, config_path=CONFIG_PATH):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = Path(config_path)
        self.lock = threading.Lock()
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file, applying defaults if missing.

        Returns:
            Configuration dictionary
        """
        config = self.DEFAULT_CONFIG.copy()

        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    user_config = json.load(f)

                if isinstance(user_config, dict):
                    config.update(user_config)
                    print(f"Configuration loaded from {self.config_path}")
                else:
                    print(f"Ignoring config file {self.config_path}: not a JSON object")

            except json.JSONDecodeError as e:
                print(f"Error parsing config file: {e}")
                print("Using default configuration")
            except OSError as e:
                print(f"Error loading config: {e}")
                print("Using default configuration")

        return self._validate_config(config)

    def _validate_config(self, config: Dict) -> Dict:
        """
        Validate and sanitize configuration values.

        Args:
            config: Configuration dictionary to validate

        Returns:
            Validated configuration dictionary
        """
        if config.get("log_level") not in self.VALID_LOG_LEVELS:
            config["log_level"] = "INFO"

        for key in ("enable_notifications", "show_overlay"):
            if not isinstance(config.get(key), bool):
                config[key] = self.DEFAULT_CONFIG[key]

        retention = config.get("log_retention_days")
        if isinstance(retention, bool) or not isinstance(retention, (int, float)):
            config["log_retention_days"] = 30
        else:
            config["log_retention_days"] = int(max(1, min(365, retention)))

        return config

    def get(self, key: str, default: Any = None) -> Any:
        with self.lock:
            return self.config.get(key, default)

    def get_all(self) -> Dict:
        with self.lock:
            return self.config.copy()

    def update(self, updates: Dict) -> bool:
        """
        Update multiple configuration values.

        Args:
            updates: Dictionary of key-value pairs to update

        Returns:
            True if successful, False otherwise
        """
        with self.lock:
            new_config = self.config.copy()
            new_config.update(updates)
            self.config = self._validate_config(new_config)

        print(f"Configuration updated: {list(updates.keys())}")
        return True

    def set(self, key: str, value: Any) -> bool:
        return self.update({key: value})

    def save(self) -> bool:
        """
        Save configuration to file.

        Returns:
            True if successful, False otherwise
        """
        with self.lock:
            try:
                self.config_path.parent.mkdir(parents=True, exist_ok=True)

                with open(self.config_path, "w", encoding="utf-8") as f:
                    json.dump(self.config, f, indent=2)

                print(f"Configuration saved to {self.config_path}")
                return True

            except OSError as e:
                print(f"Error saving configuration: {e}")
                return False

    def reset_to_defaults(self) -> bool:
        with self.lock:
            self.config = self.DEFAULT_CONFIG.copy()
        print("Configuration reset to defaults")
        return True

    def reload(self) -> bool:
        """Reload configuration from file."""
        with self.lock:
            self.config = self._load_config()
        print("Configuration reloaded")
        return True

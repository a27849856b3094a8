"""
Start-on-login registration.

Windows uses the per-user Run registry key; Linux uses an XDG autostart
desktop entry. Other platforms are reported as unsupported.
"""

import logging
import os
import platform
import sys
from pathlib import Path
from typing import Optional

logger = logging.getLogger("BatteryTray.Startup")

RUN_KEY_PATH = r"Software\Microsoft\Windows\CurrentVersion\Run"
RUN_VALUE_NAME = "BatteryTray"
DESKTOP_FILE_NAME = "battery-tray.desktop"


def get_launch_command() -> str:
    """
    Build the command line that starts the tray app.

    Returns:
        Quoted executable for frozen builds, otherwise the interpreter
        (pythonw.exe on Windows when available) running the package
    """
    if getattr(sys, "frozen", False):
        return f'"{sys.executable}"'

    python = sys.executable
    if platform.system() == "Windows":
        pythonw = os.path.join(os.path.dirname(python), "pythonw.exe")
        if os.path.exists(pythonw):
            python = pythonw

    return f'"{python}" -m battery_tray.main'


def default_autostart_dir() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "autostart"


class StartupRegistration:
    """Registers or unregisters the app to run at login."""

    def __init__(self, system: Optional[str] = None, autostart_dir: Optional[Path] = None):
        """
        Args:
            system: Platform name (defaults to platform.system())
            autostart_dir: XDG autostart directory used on Linux
        """
        self.system = system or platform.system()
        self.autostart_dir = autostart_dir or default_autostart_dir()

    @property
    def supported(self) -> bool:
        return self.system in ("Windows", "Linux")

    @property
    def desktop_file(self) -> Path:
        return self.autostart_dir / DESKTOP_FILE_NAME

    def is_enabled(self) -> bool:
        try:
            if self.system == "Windows":
                import winreg

                with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY_PATH, 0, winreg.KEY_READ) as key:
                    value, _ = winreg.QueryValueEx(key, RUN_VALUE_NAME)
                return bool(str(value).strip())
            if self.system == "Linux":
                return self.desktop_file.exists()
        except FileNotFoundError:
            return False
        except Exception as e:
            logger.warning(f"Failed to check startup registration: {e}")
        return False

    def enable(self) -> bool:
        """
        Register the app to start on login.

        Returns:
            True if successful, False otherwise
        """
        command = get_launch_command()
        try:
            if self.system == "Windows":
                import winreg

                with winreg.CreateKeyEx(winreg.HKEY_CURRENT_USER, RUN_KEY_PATH, 0, winreg.KEY_SET_VALUE) as key:
                    winreg.SetValueEx(key, RUN_VALUE_NAME, 0, winreg.REG_SZ, command)
            elif self.system == "Linux":
                self.autostart_dir.mkdir(parents=True, exist_ok=True)
                self.desktop_file.write_text(
                    "[Desktop Entry]\n"
                    "Type=Application\n"
                    "Name=Battery Tray\n"
                    f"Exec={command}\n"
                    "X-GNOME-Autostart-enabled=true\n",
                    encoding="utf-8",
                )
            else:
                logger.warning(f"Start on login not supported on {self.system}")
                return False

            logger.info(f"Registered for start on login: {command}")
            return True

        except Exception as e:
            logger.error(f"Failed to register for start on login: {e}", exc_info=True)
            return False

    def disable(self) -> bool:
        """
        Remove the start-on-login registration.

        Returns:
            True if successful (or nothing was registered), False otherwise
        """
        try:
            if self.system == "Windows":
                import winreg

                with winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY_PATH, 0, winreg.KEY_SET_VALUE) as key:
                    winreg.DeleteValue(key, RUN_VALUE_NAME)
            elif self.system == "Linux":
                if self.desktop_file.exists():
                    self.desktop_file.unlink()
            else:
                return False

            logger.info("Removed start on login registration")
            return True

        except FileNotFoundError:
            return True
        except Exception as e:
            logger.error(f"Failed to remove start on login registration: {e}", exc_info=True)
            return False

    def toggle(self) -> bool:
        """
        Flip the registration.

        Returns:
            The new enabled state
        """
        if self.is_enabled():
            self.disable()
        else:
            self.enable()
        return self.is_enabled()

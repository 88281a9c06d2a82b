import os
import sys
import logging
from .config import APP_NAME

if sys.platform == "win32":
    import winreg

RUN_KEY_PATH = r"Software\Microsoft\Windows\CurrentVersion\Run"


def _launch_command() -> str:
    # Re-run the interpreter with the script that started us
    return f'"{sys.executable}" "{os.path.abspath(sys.argv[0])}"'


def set_autostart(enable: bool = True) -> bool:
    """
    Toggle launch at login in the Windows Registry.
    """
    if sys.platform != "win32":
        return False

    try:
        registry_key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY_PATH, 0, winreg.KEY_WRITE)
        try:
            if enable:
                command = _launch_command()
                winreg.SetValueEx(registry_key, APP_NAME, 0, winreg.REG_SZ, command)
                logging.info(f"Auto-start enabled: {command}")
            else:
                try:
                    winreg.DeleteValue(registry_key, APP_NAME)
                    logging.info("Auto-start disabled")
                except FileNotFoundError:
                    pass  # Already disabled
        finally:
            winreg.CloseKey(registry_key)
        return True
    except OSError as e:
        logging.error(f"Error setting autostart: {e}")
        return False


def check_autostart() -> bool:
    """Check if auto-start is currently enabled."""
    if sys.platform != "win32":
        return False

    try:
        registry_key = winreg.OpenKey(winreg.HKEY_CURRENT_USER, RUN_KEY_PATH, 0, winreg.KEY_READ)
        try:
            winreg.QueryValueEx(registry_key, APP_NAME)
        finally:
            winreg.CloseKey(registry_key)
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logging.error(f"Error checking autostart: {e}")
        return False


def sync_autostart(launch_at_login: bool) -> bool:
    """
    Bring the registry in line with the launch_at_login setting.
    Returns True when the registration was changed.
    """
    if sys.platform != "win32":
        return False
    if check_autostart() == launch_at_login:
        return False
    return set_autostart(launch_at_login)

import sys
import base64
import logging
import tempfile
from pathlib import Path
from .config import ICON_PLACEHOLDER_PREFIX

MAX_EXTENSION_LENGTH = 20
ICON_SIZE = 32


def sanitize_extension(extension: str) -> str:
    ext = (extension or "").strip().lower()[:MAX_EXTENSION_LENGTH]
    return "".join(c for c in ext if (c.isascii() and c.isalnum()) or c == ".")


class IconProvider:
    """Looks up the icon the OS shows for a file extension."""

    def get_icon(self, extension: str) -> str:
        """Return the icon as base64 PNG, or an empty string."""
        raise NotImplementedError


class NullIconProvider(IconProvider):
    def get_icon(self, extension: str) -> str:
        return ""


class QtIconProvider(IconProvider):
    """
    Asks the shell for an extension's icon through Qt.
    Qt wants an actual file, so an empty placeholder with the extension
    is created in the temp directory for the duration of the lookup.
    Requires a running QApplication; without one the lookup yields "".
    """

    def __init__(self, temp_dir=None):
        self.temp_dir = Path(temp_dir or tempfile.gettempdir())

    def get_icon(self, extension: str) -> str:
        ext = sanitize_extension(extension)
        if not ext:
            return ""

        placeholder = self.temp_dir / f"{ICON_PLACEHOLDER_PREFIX}.{ext}"
        created = False
        try:
            if not placeholder.exists():
                placeholder.touch()
                created = True
            return self._load_icon(placeholder)
        except Exception as e:
            logging.debug(f"Icon lookup failed for '.{ext}': {e}")
            return ""
        finally:
            if created:
                try:
                    placeholder.unlink()
                except OSError as e:
                    logging.debug(f"Could not remove icon placeholder {placeholder}: {e}")

    def _load_icon(self, path: Path) -> str:
        from PySide6.QtCore import QBuffer, QByteArray, QFileInfo, QIODevice
        from PySide6.QtWidgets import QApplication, QFileIconProvider

        if QApplication.instance() is None:
            return ""
        icon = QFileIconProvider().icon(QFileInfo(str(path)))
        if icon.isNull():
            return ""

        data = QByteArray()
        buffer = QBuffer(data)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        icon.pixmap(ICON_SIZE, ICON_SIZE).save(buffer, "PNG")
        buffer.close()
        return base64.b64encode(bytes(data)).decode("ascii")


def get_icon_provider() -> IconProvider:
    if sys.platform == "win32":
        return QtIconProvider()
    return NullIconProvider()

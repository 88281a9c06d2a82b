from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QStandardPaths

# App Config
APP_NAME = "TodoDesk"

# Persisted file names
CONFIG_FILE_NAME = "config.json"
TODOS_FILE_NAME = "todos.json"
DETAIL_FILE_NAME = "content.json"
ASSETS_DIR_NAME = "assets"

# Placeholder used when asking the OS for an extension's icon
ICON_PLACEHOLDER_PREFIX = "tododesk_icon_dummy"


@dataclass(frozen=True)
class AppPaths:
    """
    Locations the backend reads from and writes to.
    config_dir is fixed per installation; data_dir is only the default
    data location, the user may point AppConfig.data_path elsewhere.
    """
    config_dir: Path
    data_dir: Path

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @classmethod
    def default(cls) -> "AppPaths":
        # Independent of QCoreApplication.applicationName()
        config_root = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericConfigLocation)
        data_root = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
        return cls(config_dir=Path(config_root) / APP_NAME, data_dir=Path(data_root) / APP_NAME)

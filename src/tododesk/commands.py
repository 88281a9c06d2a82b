import logging
from typing import Dict, List, Optional
from pydantic import ValidationError
from .config import AppPaths
from .data_manager import DataManager, StorageError
from .icons import IconProvider, get_icon_provider
from .migration import relocate
from .models import AppConfig, TodoItem
from .utils import sync_autostart


def _to_plain(value):
    if isinstance(value, (AppConfig, TodoItem)):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_plain(v) for v in value]
    return value


class Commands:
    """
    The operations the UI layer can invoke.
    Each method does one filesystem operation and raises StorageError on
    failure; invoke() wraps them into {"ok", "data"/"error"} results.
    """

    NAMES = (
        "get_app_config",
        "save_app_config",
        "get_todos",
        "save_todos",
        "create_todo_folder",
        "save_todo_detail",
        "get_todo_detail",
        "move_data",
        "get_file_icon",
    )

    def __init__(self, paths: Optional[AppPaths] = None,
                 icon_provider: Optional[IconProvider] = None):
        self.paths = paths or AppPaths.default()
        self.data_manager = DataManager(self.paths)
        self.icon_provider = icon_provider or get_icon_provider()

    def get_app_config(self) -> AppConfig:
        return self.data_manager.get_app_config()

    def save_app_config(self, config):
        if not isinstance(config, AppConfig):
            config = AppConfig.from_dict(config)
        self.data_manager.save_app_config(config)
        sync_autostart(config.launch_at_login)

    def get_todos(self, data_path: str) -> List[TodoItem]:
        return self.data_manager.get_todos(data_path)

    def save_todos(self, data_path: str, todos):
        if not isinstance(todos, list):
            raise TypeError(f"todos must be a list, got {type(todos).__name__}")
        items = [t if isinstance(t, TodoItem) else TodoItem.from_dict(t) for t in todos]
        self.data_manager.save_todos(data_path, items)

    def create_todo_folder(self, data_path: str) -> str:
        return self.data_manager.create_todo_folder(data_path)

    def save_todo_detail(self, data_path: str, folder_name: str, content: str):
        self.data_manager.save_todo_detail(data_path, folder_name, content)

    def get_todo_detail(self, data_path: str, folder_name: str) -> str:
        return self.data_manager.get_todo_detail(data_path, folder_name)

    def move_data(self, old_path: str, new_path: str):
        relocate(old_path, new_path)

    def get_file_icon(self, extension: str) -> str:
        return self.icon_provider.get_icon(extension)

    def invoke(self, name: str, **kwargs) -> Dict:
        if name not in self.NAMES:
            return {"ok": False, "error": f"Unknown command: {name}"}
        try:
            result = getattr(self, name)(**kwargs)
        except (StorageError, ValidationError, KeyError, TypeError, ValueError) as e:
            logging.error(f"Command {name} failed: {e}")
            return {"ok": False, "error": str(e)}
        return {"ok": True, "data": _to_plain(result)}

import json
import uuid
import logging
from pathlib import Path
from typing import Any, List, Sequence
from pydantic import TypeAdapter, ValidationError
from .config import (AppPaths, TODOS_FILE_NAME, DETAIL_FILE_NAME,
                     ASSETS_DIR_NAME)
from .models import AppConfig, TodoItem


class StorageError(Exception):
    """A write or read the caller has to know about failed."""


_MISSING = object()
_TODO_LIST = TypeAdapter(List[TodoItem])


def _load_json(path: Path) -> Any:
    """
    Soft read: returns _MISSING when the file is absent, unreadable
    or not valid JSON. The failure is logged, never raised.
    """
    if not path.exists():
        return _MISSING
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logging.warning(f"Ignoring unreadable file {path}: {e}")
        return _MISSING


def _save_json(path: Path, data: Any):
    try:
        # Serialize first so a bad payload never truncates the old file
        content = json.dumps(data, ensure_ascii=False, indent=2)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except (OSError, TypeError, ValueError) as e:
        logging.error(f"Error saving {path}: {e}")
        raise StorageError(str(e)) from e


def _todo_folder(data_path: str, folder_name: str) -> Path:
    name = folder_name or ""
    if name in ("", ".", "..") or "/" in name or "\\" in name:
        raise StorageError(f"Invalid todo folder name: {folder_name!r}")
    return Path(data_path) / name


class DataManager:
    def __init__(self, paths: AppPaths):
        self.paths = paths

    # --- App config ---

    def get_app_config(self) -> AppConfig:
        default = AppConfig.default(str(self.paths.data_dir))
        data = _load_json(self.paths.config_file)
        if data is _MISSING:
            return default
        try:
            return AppConfig.from_dict(data)
        except ValidationError as e:
            logging.warning(f"Invalid config in {self.paths.config_file}, using defaults: {e}")
            return default

    def save_app_config(self, config: AppConfig):
        _save_json(self.paths.config_file, config.to_dict())
        logging.info(f"Saved app config to {self.paths.config_file}")

    # --- Todo index ---

    def get_todos(self, data_path: str) -> List[TodoItem]:
        todos_file = Path(data_path) / TODOS_FILE_NAME
        data = _load_json(todos_file)
        if data is _MISSING:
            return []
        try:
            return _TODO_LIST.validate_python(data)
        except ValidationError as e:
            logging.warning(f"Invalid todo index {todos_file}, treating as empty: {e}")
            return []

    def save_todos(self, data_path: str, todos: Sequence[TodoItem]):
        _save_json(Path(data_path) / TODOS_FILE_NAME, [t.to_dict() for t in todos])

    # --- Todo details ---

    def create_todo_folder(self, data_path: str) -> str:
        folder_name = str(uuid.uuid4())
        folder = Path(data_path) / folder_name
        try:
            folder.mkdir(parents=True, exist_ok=True)
            (folder / ASSETS_DIR_NAME).mkdir(exist_ok=True)
        except OSError as e:
            logging.error(f"Error creating todo folder {folder}: {e}")
            raise StorageError(str(e)) from e
        logging.info(f"Created todo folder {folder}")
        return folder_name

    def save_todo_detail(self, data_path: str, folder_name: str, content: str):
        detail_file = _todo_folder(data_path, folder_name) / DETAIL_FILE_NAME
        try:
            # newline="" keeps the payload byte for byte
            with open(detail_file, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
        except (OSError, TypeError) as e:
            logging.error(f"Error saving todo detail {detail_file}: {e}")
            raise StorageError(str(e)) from e

    def get_todo_detail(self, data_path: str, folder_name: str) -> str:
        detail_file = _todo_folder(data_path, folder_name) / DETAIL_FILE_NAME
        if not detail_file.exists():
            return "{}"
        try:
            with open(detail_file, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logging.error(f"Error reading todo detail {detail_file}: {e}")
            raise StorageError(str(e)) from e


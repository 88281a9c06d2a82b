"""
Tests for DataManager

Tests verify:
- Config defaults when the file is missing or corrupt
- Todo index ordering and soft reads
- Todo folder creation and detail round trips
- Errors surfaced by writes
"""

import json
import logging

import pytest

from tododesk.data_manager import StorageError
from tododesk.models import AppConfig, TodoItem


def _todo(n, folder=None):
    return TodoItem(id=f"id-{n}", title=f"Todo {n}", status="pending",
                    folder_name=folder or f"folder-{n}")


# --- App config ---

def test_config_defaults_when_missing(manager, paths):
    config = manager.get_app_config()

    assert config == AppConfig.default(str(paths.data_dir))
    assert not paths.config_file.exists()


def test_config_defaults_when_corrupt(manager, paths, caplog):
    paths.config_dir.mkdir(parents=True)
    paths.config_file.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        config = manager.get_app_config()

    assert config == AppConfig.default(str(paths.data_dir))
    assert "config.json" in caplog.text


def test_config_defaults_when_field_missing(manager, paths):
    paths.config_dir.mkdir(parents=True)
    paths.config_file.write_text(json.dumps({"language": "en"}), encoding="utf-8")

    assert manager.get_app_config().language == "zh-CN"


def test_config_defaults_when_font_size_out_of_range(manager, paths):
    data = AppConfig.default("/elsewhere").to_dict()
    data["font_size"] = 2**40
    paths.config_dir.mkdir(parents=True)
    paths.config_file.write_text(json.dumps(data), encoding="utf-8")

    config = manager.get_app_config()

    assert config.font_size == 14
    assert config.data_path == str(paths.data_dir)


def test_config_save_and_reload(manager, paths):
    config = AppConfig.default("/elsewhere")
    config.theme = "dark"
    config.font_size = 18
    config.launch_at_login = True

    manager.save_app_config(config)

    assert paths.config_file.exists()
    assert manager.get_app_config() == config


def test_config_save_overwrites(manager):
    first = AppConfig.default("/one")
    second = AppConfig.default("/two")

    manager.save_app_config(first)
    manager.save_app_config(second)

    assert manager.get_app_config().data_path == "/two"


def test_config_save_failure_raises(manager, paths):
    # A file where the config directory should be
    paths.config_dir.parent.mkdir(parents=True, exist_ok=True)
    paths.config_dir.write_text("in the way", encoding="utf-8")

    with pytest.raises(StorageError):
        manager.save_app_config(AppConfig.default("/data"))


# --- Todo index ---

def test_todos_empty_when_missing(manager, tmp_path):
    assert manager.get_todos(str(tmp_path / "nowhere")) == []


@pytest.mark.parametrize("content", [
    "garbage",
    '{"id": "1"}',
    '[{"id": "1", "title": "no folder"}]',
])
def test_todos_empty_when_unparsable(manager, tmp_path, content):
    (tmp_path / "todos.json").write_text(content, encoding="utf-8")

    assert manager.get_todos(str(tmp_path)) == []


def test_todos_preserve_order(manager, tmp_path):
    data_path = str(tmp_path / "data")
    todos = [_todo(3), _todo(1), _todo(2)]

    manager.save_todos(data_path, todos)

    assert manager.get_todos(data_path) == todos


def test_todos_save_creates_directory(manager, tmp_path):
    data_path = tmp_path / "deep" / "data"

    manager.save_todos(str(data_path), [_todo(1)])

    saved = json.loads((data_path / "todos.json").read_text(encoding="utf-8"))
    assert saved == [_todo(1).to_dict()]


def test_todos_save_empty_list(manager, tmp_path):
    manager.save_todos(str(tmp_path), [_todo(1)])
    manager.save_todos(str(tmp_path), [])

    assert manager.get_todos(str(tmp_path)) == []


# --- Todo details ---

def test_create_todo_folder_has_assets(manager, tmp_path):
    folder_name = manager.create_todo_folder(str(tmp_path))

    folder = tmp_path / folder_name
    assert folder.is_dir()
    assert (folder / "assets").is_dir()
    assert list((folder / "assets").iterdir()) == []


def test_create_todo_folder_unique_names(manager, tmp_path):
    names = {manager.create_todo_folder(str(tmp_path)) for _ in range(5)}

    assert len(names) == 5


def test_create_todo_folder_creates_data_path(manager, tmp_path):
    data_path = tmp_path / "not" / "yet"

    folder_name = manager.create_todo_folder(str(data_path))

    assert (data_path / folder_name / "assets").is_dir()


def test_create_todo_folder_failure_raises(manager, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(StorageError):
        manager.create_todo_folder(str(blocker))


def test_detail_default_when_missing(manager, tmp_path):
    folder_name = manager.create_todo_folder(str(tmp_path))

    assert manager.get_todo_detail(str(tmp_path), folder_name) == "{}"


def test_detail_round_trip_verbatim(manager, tmp_path):
    folder_name = manager.create_todo_folder(str(tmp_path))
    content = '{"blocks": [ {"text": "héllo"} ],   "v": 2}'

    manager.save_todo_detail(str(tmp_path), folder_name, content)

    assert manager.get_todo_detail(str(tmp_path), folder_name) == content


def test_detail_save_into_missing_folder_raises(manager, tmp_path):
    with pytest.raises(StorageError):
        manager.save_todo_detail(str(tmp_path), "missing-folder", "{}")


@pytest.mark.parametrize("content", [
    '{\r\n  "a": 1\r\n}',
    '{"a": "x"}\r',
    '{\n  "a": 1\n}',
])
def test_detail_line_endings_kept(manager, tmp_path, content):
    folder_name = manager.create_todo_folder(str(tmp_path))

    manager.save_todo_detail(str(tmp_path), folder_name, content)

    on_disk = (tmp_path / folder_name / "content.json").read_bytes()
    assert on_disk == content.encode("utf-8")
    assert manager.get_todo_detail(str(tmp_path), folder_name) == content


@pytest.mark.parametrize("folder_name", ["", ".", "..", "../escape", "a/b"])
def test_detail_rejects_path_like_folder_names(manager, tmp_path, folder_name):
    with pytest.raises(StorageError):
        manager.get_todo_detail(str(tmp_path), folder_name)
    with pytest.raises(StorageError):
        manager.save_todo_detail(str(tmp_path), folder_name, "{}")

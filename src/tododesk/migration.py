import os
import shutil
import logging
from pathlib import Path
from .config import CONFIG_FILE_NAME
from .data_manager import StorageError


class MigrationError(StorageError):
    pass


def copy_tree(src, dst):
    """Copy src into dst recursively, overwriting files that already exist."""
    dst = Path(dst)
    dst.mkdir(parents=True, exist_ok=True)
    with os.scandir(src) as entries:
        for entry in entries:
            target = dst / entry.name
            if entry.is_dir():
                copy_tree(entry.path, target)
            else:
                shutil.copy(entry.path, target)


def _is_inside(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
        return True
    except ValueError:
        return False


def relocate(old_path, new_path):
    """
    Move the data directory to new_path, leaving config.json behind.
    Entries are copied then deleted since the target may be on another
    volume. After a failure, calling again with the same paths finishes the move.
    """
    old_path, new_path = os.fspath(old_path), os.fspath(new_path)
    if not old_path or not new_path or old_path == new_path:
        return

    old_root = Path(old_path)
    new_root = Path(new_path)

    if not old_root.exists():
        logging.info(f"Nothing to migrate, {old_root} does not exist")
        return
    if old_root.resolve() == new_root.resolve():
        return
    if _is_inside(new_root.resolve(), old_root.resolve()):
        raise MigrationError(f"Cannot move data directory into itself: {new_root}")

    if not new_root.exists():
        try:
            new_root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MigrationError(f"Failed to create new directory: {e}") from e

    try:
        with os.scandir(old_root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise MigrationError(f"Failed to read old directory: {e}") from e

    logging.info(f"Moving data from {old_root} to {new_root}")
    for entry in entries:
        # config.json belongs to the application, not to the data directory
        if entry.name == CONFIG_FILE_NAME:
            continue

        source = Path(entry.path)
        target = new_root / entry.name
        if entry.is_dir():
            try:
                copy_tree(source, target)
            except OSError as e:
                logging.error(f"Error copying {source} to {target}: {e}")
                raise MigrationError(f"Failed to copy directory: {e}") from e
            try:
                if entry.is_symlink():
                    source.unlink()
                else:
                    shutil.rmtree(source)
            except OSError as e:
                logging.error(f"Error removing {source}: {e}")
                raise MigrationError(f"Failed to remove old directory: {e}") from e
        else:
            try:
                shutil.copy(source, target)
            except OSError as e:
                logging.error(f"Error copying {source} to {target}: {e}")
                raise MigrationError(f"Failed to copy file: {e}") from e
            try:
                source.unlink()
            except OSError as e:
                logging.error(f"Error removing {source}: {e}")
                raise MigrationError(f"Failed to remove old file: {e}") from e

    logging.info(f"Moved data from {old_root} to {new_root}")

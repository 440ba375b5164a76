# RU: Сохранение состояния в JSON, экспорт/импорт резервной копии, миграция старых savedItems.
"""JSON persistence for BarGen state: load/save, dated backup export, import, clear."""

from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

from bargen.app.state import DEFAULT_MAX_HISTORY_ITEMS, AppState, Folder

logger = logging.getLogger(__name__)

LEGACY_FOLDER_ID = "dmf_legacy"
LEGACY_FOLDER_NAME = "Импортированные"
BACKUP_PREFIX = "bargen_backup_"


class StorageError(Exception):
    """Ошибка чтения/записи файла данных BarGen"""


def backup_filename(day: Optional[date] = None) -> str:
    return f"{BACKUP_PREFIX}{(day or date.today()).isoformat()}.json"


def _read_document(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as ex:
        raise StorageError(f"Failed to read {path}: {ex}") from ex
    if not isinstance(data, dict):
        raise StorageError("Invalid format: expected object in JSON")
    return data


def _state_from_document(doc: Dict[str, Any], max_history_items: int) -> AppState:
    try:
        return AppState.from_document(doc, max_history_items)
    except (KeyError, TypeError, ValueError, AttributeError) as ex:
        raise StorageError(f"Malformed BarGen document: {ex}") from ex


class Storage:
    """
    File-backed store for ``AppState``.

    Args:
        path: JSON data file (created on first ``save``).
        max_history_items: history bound applied on load.
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        max_history_items: int = DEFAULT_MAX_HISTORY_ITEMS,
    ) -> None:
        self.path = Path(path)
        self.max_history_items = max_history_items

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Storage":
        """Storage for the ``storage_path`` / ``max_history_items`` keys of ``load_config()``."""
        return cls(config["storage_path"], int(config["max_history_items"]))

    def load(self) -> AppState:
        """
        Загружает состояние; при ошибке формата пишет в лог и возвращает пустое.

        Legacy ``savedItems`` move into the "Импортированные" folder when no
        DM folders exist yet, and the migrated state is saved back.
        """
        if not self.path.exists():
            logger.info("No data file at %s, starting empty", self.path)
            return AppState(self.max_history_items)
        try:
            state = _state_from_document(_read_document(self.path), self.max_history_items)
        except StorageError as ex:
            logger.error("Load error: %s", ex)
            return AppState(self.max_history_items)

        if state.saved_items and not state.dm.folders:
            state.dm.folders.append(
                Folder(id=LEGACY_FOLDER_ID, name=LEGACY_FOLDER_NAME, items=list(state.saved_items))
            )
            logger.info("Migrated %d legacy items to '%s'", len(state.saved_items), LEGACY_FOLDER_NAME)
            state.saved_items = []
            self.save(state)
        return state

    def save(self, state: AppState) -> None:
        self._write(self.path, state.to_document(), indent=None)
        logger.debug("State saved to %s", self.path)

    def export_data(
        self, state: AppState, directory: Union[str, os.PathLike] = ".", day: Optional[date] = None
    ) -> Path:
        """Writes an indented backup ``bargen_backup_YYYY-MM-DD.json`` into ``directory``."""
        target = Path(directory) / backup_filename(day)
        self._write(target, state.to_document(), indent=2)
        logger.info("Exported backup to %s", target)
        return target

    def import_data(self, path: Union[str, os.PathLike]) -> AppState:
        """
        Replaces stored data with the given backup and returns the new state.

        Raises:
            StorageError: unreadable file or malformed document.
        """
        src = Path(path)
        try:
            state = _state_from_document(_read_document(src), self.max_history_items)
        except StorageError:
            logger.error("Import error: %s", src)
            raise
        self.save(state)
        logger.info("Imported data from %s", src)
        return state

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("Data file removed: %s", self.path)

    @staticmethod
    def _write(path: Path, doc: Dict[str, Any], indent: Optional[int]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=indent)
        except OSError as ex:
            logger.error("Save error (%s): %s", path, ex)
            raise StorageError(f"Failed to write {path}: {ex}") from ex

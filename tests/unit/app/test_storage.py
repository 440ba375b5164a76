import json
from datetime import date
from pathlib import Path

import pytest

from bargen.app.state import AppState, GtinItem
from bargen.app.storage import (
    LEGACY_FOLDER_ID,
    LEGACY_FOLDER_NAME,
    Storage,
    StorageError,
    backup_filename,
)
from bargen.model.enums import HistoryType


@pytest.fixture
def state() -> AppState:
    s = AppState()
    folder = s.dm.find_or_create("Табак")
    folder.items.append(GtinItem(id="dmi_1", barcode="4810099003310"))
    s.history.add(HistoryType.DM, "0104810099003310")
    return s


def test_load_missing_file(tmp_path: Path) -> None:
    state = Storage(tmp_path / "none.json").load()
    assert state.dm.folders == []
    assert len(state.history) == 0


def test_save_and_load(tmp_path: Path, state: AppState) -> None:
    storage = Storage(tmp_path / "data" / "bargen.json")
    storage.save(state)
    loaded = storage.load()
    assert loaded.to_document() == state.to_document()
    raw = json.loads((tmp_path / "data" / "bargen.json").read_text(encoding="utf-8"))
    assert raw["dmFolders"][0]["name"] == "Табак"


def test_load_malformed_returns_empty(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    state = Storage(path).load()
    assert state.to_document()["dmFolders"] == []


def test_load_non_object_returns_empty(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert Storage(path).load().dm.folders == []


def test_load_trims_history(tmp_path: Path) -> None:
    path = tmp_path / "h.json"
    entries = [
        {"id": f"h{i}", "timestamp": "t", "type": "BC", "code": str(i)} for i in range(80)
    ]
    path.write_text(json.dumps({"history": entries}), encoding="utf-8")
    state = Storage(path, max_history_items=50).load()
    assert len(state.history) == 50
    assert state.history.items[0].code == "0"


def test_legacy_items_migrated(tmp_path: Path) -> None:
    path = tmp_path / "legacy.json"
    path.write_text(
        json.dumps(
            {
                "savedItems": [
                    {"id": "1", "barcode": "4810099003310", "template": "type2", "active": True}
                ]
            }
        ),
        encoding="utf-8",
    )
    state = Storage(path).load()
    assert state.saved_items == []
    folder = state.dm.folders[0]
    assert (folder.id, folder.name) == (LEGACY_FOLDER_ID, LEGACY_FOLDER_NAME)
    assert folder.items[0].barcode == "4810099003310"
    # migration is written back
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["savedItems"] == []
    assert saved["dmFolders"][0]["id"] == LEGACY_FOLDER_ID


def test_legacy_items_kept_when_folders_exist(tmp_path: Path) -> None:
    path = tmp_path / "both.json"
    path.write_text(
        json.dumps(
            {
                "savedItems": [{"id": "1", "barcode": "12345678"}],
                "dmFolders": [{"id": "dmf_x", "name": "X", "items": []}],
            }
        ),
        encoding="utf-8",
    )
    state = Storage(path).load()
    assert len(state.saved_items) == 1
    assert [f.id for f in state.dm.folders] == ["dmf_x"]


def test_backup_filename() -> None:
    assert backup_filename(date(2026, 3, 1)) == "bargen_backup_2026-03-01.json"


def test_export_and_import(tmp_path: Path, state: AppState) -> None:
    storage = Storage(tmp_path / "main.json")
    exported = storage.export_data(state, tmp_path / "backups", day=date(2026, 3, 1))
    assert exported.name == "bargen_backup_2026-03-01.json"
    text = exported.read_text(encoding="utf-8")
    assert "\n  " in text
    assert "Табак" in text

    imported = storage.import_data(exported)
    assert imported.to_document() == state.to_document()
    assert storage.load().to_document() == state.to_document()


@pytest.mark.parametrize("content", ["{broken", "[]", '{"dmFolders": [{"name": "no id"}]}'])
def test_import_malformed(tmp_path: Path, content: str) -> None:
    src = tmp_path / "in.json"
    src.write_text(content, encoding="utf-8")
    storage = Storage(tmp_path / "main.json")
    with pytest.raises(StorageError):
        storage.import_data(src)
    assert not (tmp_path / "main.json").exists()


def test_import_missing_file(tmp_path: Path) -> None:
    with pytest.raises(StorageError):
        Storage(tmp_path / "main.json").import_data(tmp_path / "nope.json")


def test_clear(tmp_path: Path, state: AppState) -> None:
    storage = Storage(tmp_path / "main.json")
    storage.save(state)
    storage.clear()
    assert not storage.path.exists()
    storage.clear()


def test_from_config(tmp_path: Path) -> None:
    storage = Storage.from_config(
        {"storage_path": str(tmp_path / "cfg.json"), "max_history_items": "10"}
    )
    assert storage.path == tmp_path / "cfg.json"
    assert storage.max_history_items == 10
    assert storage.load().history.max_items == 10

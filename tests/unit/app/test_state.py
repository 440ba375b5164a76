from unittest.mock import Mock

import pytest

from bargen.app.state import (
    AppState,
    DemoGtinCursor,
    FolderCollection,
    GenerationHistory,
    GtinItem,
    HistoryEntry,
    RotationCarousel,
    SimpleItem,
    WeightItem,
)
from bargen.model.demo_gtins import DEMO_GTINS
from bargen.model.enums import HistoryType, TemplateId


class TestDemoGtinCursor:
    def test_cycles_and_wraps(self) -> None:
        cursor = DemoGtinCursor(["1", "2", "3"])
        assert [cursor.next() for _ in range(4)] == ["1", "2", "3", "1"]
        assert cursor.index == 1

    def test_default_list_and_reset(self) -> None:
        cursor = DemoGtinCursor()
        assert len(cursor) == len(DEMO_GTINS)
        assert cursor.next() == DEMO_GTINS[0]
        cursor.reset()
        assert cursor.next() == DEMO_GTINS[0]

    def test_empty_list(self) -> None:
        with pytest.raises(ValueError):
            DemoGtinCursor([])


class TestGenerationHistory:
    def test_newest_first(self) -> None:
        h = GenerationHistory()
        h.add(HistoryType.DM, "a")
        h.add(HistoryType.BC, "b")
        assert [e.code for e in h.items] == ["b", "a"]
        assert h.items[0].type is HistoryType.BC
        assert h.items[0].timestamp.endswith("Z")

    def test_trimmed_to_max(self) -> None:
        h = GenerationHistory(max_items=50)
        for i in range(60):
            h.add(HistoryType.WC, str(i))
        assert len(h) == 50
        assert h.items[0].code == "59"
        assert h.items[-1].code == "10"

    def test_accepts_string_type(self) -> None:
        assert GenerationHistory().add("SG", "x").type is HistoryType.SG  # type: ignore[arg-type]

    def test_on_change_and_clear(self) -> None:
        hook = Mock()
        h = GenerationHistory(on_change=hook)
        h.add(HistoryType.DM, "x")
        h.clear()
        assert hook.call_count == 2
        assert len(h) == 0

    def test_invalid_max(self) -> None:
        with pytest.raises(ValueError):
            GenerationHistory(max_items=0)

    def test_entry_dict(self) -> None:
        entry = HistoryEntry(id="h_1", timestamp="t", type=HistoryType.DM, code="c")
        assert HistoryEntry.from_dict(entry.to_dict()) == entry
        assert entry.to_dict()["type"] == "DM"


class TestFolders:
    @pytest.fixture
    def coll(self) -> FolderCollection[SimpleItem]:
        return FolderCollection(SimpleItem, "sgf")

    def test_find_or_create_case_insensitive(self, coll: FolderCollection[SimpleItem]) -> None:
        a = coll.find_or_create("Молоко")
        b = coll.find_or_create("  молоко ")
        assert a is b
        assert len(coll.folders) == 1
        assert a.id.startswith("sgf_")

    def test_empty_name(self, coll: FolderCollection[SimpleItem]) -> None:
        with pytest.raises(ValueError):
            coll.find_or_create("   ")

    def test_rename_and_delete(self, coll: FolderCollection[SimpleItem]) -> None:
        f = coll.find_or_create("A")
        coll.selected_id = f.id
        coll.rename(f.id, " B ")
        assert coll.selected is not None and coll.selected.name == "B"
        coll.delete(f.id)
        assert coll.folders == []
        assert coll.selected is None
        with pytest.raises(KeyError):
            coll.rename(f.id, "C")

    def test_selection_operations(self, coll: FolderCollection[SimpleItem]) -> None:
        f = coll.find_or_create("A")
        f.items = [SimpleItem(id=str(i), code=str(i), type="CODE128") for i in range(4)]
        f.toggle("0")
        assert [i.id for i in f.active_items] == ["1", "2", "3"]
        f.set_all_active(False)
        assert f.active_items == []
        f.set_all_active(True)
        f.toggle("1")
        assert f.clear_selected() == 3
        assert [i.id for i in f.items] == ["1"]
        f.remove("1")
        assert f.items == []
        with pytest.raises(KeyError):
            f.toggle("missing")


class TestRotationCarousel:
    def test_cycle(self) -> None:
        c = RotationCarousel(["a", "b", "c"])  # type: ignore[type-var]
        assert c.current == "a"
        assert c.next() == "b"
        assert c.prev() == "a"
        assert c.prev() == "c"
        c.reset()
        assert c.index == 0
        assert len(c) == 3

    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="no active items"):
            RotationCarousel([])


def test_item_dicts() -> None:
    g = GtinItem(id="1", barcode="4810099003310", template=TemplateId.TYPE2)
    assert g.to_dict() == {"id": "1", "barcode": "4810099003310", "template": "type2", "active": True}
    assert GtinItem.from_dict(g.to_dict()) == g

    w = WeightItem(id="2", code="c", format="CODE128", plu="1", weight=500, prefix="77")
    assert "discount" not in w.to_dict()
    assert WeightItem.from_dict(w.to_dict()) == w

    s = SimpleItem.from_dict({"id": "3", "code": "x"})
    assert s.name == "Без названия"
    assert s.type == "CODE128"


def test_app_state_document() -> None:
    state = AppState()
    folder = state.dm.find_or_create("Вода")
    folder.items.append(GtinItem(id="i1", barcode="4810099003310"))
    state.wc.find_or_create("RND PLU 1")
    state.history.add(HistoryType.DM, "code")

    doc = state.to_document()
    assert set(doc) == {"savedItems", "dmFolders", "wcFolders", "sgFolders", "history"}
    assert doc["dmFolders"][0]["items"][0]["barcode"] == "4810099003310"

    restored = AppState.from_document(doc)
    assert restored.to_document() == doc
    assert restored.selected_template is TemplateId.TYPE1


def test_app_state_from_empty_document() -> None:
    state = AppState.from_document({"history": None})
    assert state.dm.folders == []
    assert len(state.history) == 0

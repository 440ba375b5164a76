# RU: Состояние оркестрации: курсор демо-GTIN, история генерации, папки, карусель.
# EN: Orchestration state owned by the caller; the encoders never read any of it.

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from bargen.model.demo_gtins import DEMO_GTINS
from bargen.model.enums import HistoryType, TemplateId

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY_ITEMS = 50


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DemoGtinCursor:
    """Cycles through the demo GTIN list; wraps around at the end."""

    def __init__(self, gtins: Sequence[str] = DEMO_GTINS) -> None:
        if not gtins:
            raise ValueError("Demo GTIN list must not be empty")
        self._gtins = tuple(gtins)
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._gtins)

    def next(self) -> str:
        gtin = self._gtins[self._index]
        self._index = (self._index + 1) % len(self._gtins)
        return gtin

    def reset(self) -> None:
        self._index = 0


@dataclass(frozen=True)
class HistoryEntry:
    id: str
    timestamp: str
    type: HistoryType
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "timestamp": self.timestamp, "type": self.type.value, "code": self.code}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=str(d.get("id", "")),
            timestamp=str(d.get("timestamp", "")),
            type=HistoryType(d["type"]),
            code=str(d["code"]),
        )


class GenerationHistory:
    """Append-only, newest-first log of generated codes, trimmed to ``max_items``."""

    def __init__(
        self,
        max_items: int = DEFAULT_MAX_HISTORY_ITEMS,
        on_change: Optional[Callable[["GenerationHistory"], None]] = None,
    ) -> None:
        if max_items <= 0:
            raise ValueError(f"max_items must be positive, got {max_items}")
        self.max_items = max_items
        self._items: List[HistoryEntry] = []
        self._on_change = on_change

    @property
    def items(self) -> List[HistoryEntry]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, type: HistoryType, code: str) -> HistoryEntry:
        entry = HistoryEntry(id=new_id("h"), timestamp=_now_iso(), type=HistoryType(type), code=code)
        self._items.insert(0, entry)
        del self._items[self.max_items :]
        logger.debug("History += %s (%d items)", entry.type.value, len(self._items))
        if self._on_change is not None:
            self._on_change(self)
        return entry

    def clear(self) -> None:
        self._items.clear()
        if self._on_change is not None:
            self._on_change(self)

    def replace(self, entries: Sequence[HistoryEntry]) -> None:
        self._items = list(entries)[: self.max_items]


# ---- Folder items ----


@dataclass
class GtinItem:
    """GTIN queued for DataMatrix rotation."""

    id: str
    barcode: str
    template: TemplateId = TemplateId.TYPE1
    active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["template"] = self.template.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GtinItem":
        return cls(
            id=str(d["id"]),
            barcode=str(d["barcode"]),
            template=TemplateId(d.get("template", TemplateId.TYPE1.value)),
            active=bool(d.get("active", True)),
        )


@dataclass
class WeightItem:
    """Weight barcode in a carousel folder."""

    id: str
    code: str
    format: str
    plu: str
    weight: int
    prefix: str
    active: bool = True
    discount: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if self.discount is None:
            del d["discount"]
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WeightItem":
        return cls(
            id=str(d["id"]),
            code=str(d["code"]),
            format=str(d.get("format", "CODE128")),
            plu=str(d.get("plu", "")),
            weight=int(d.get("weight", 0)),
            prefix=str(d.get("prefix", "")),
            active=bool(d.get("active", True)),
            discount=d.get("discount"),
        )


@dataclass
class SimpleItem:
    """Saved code from the simple generator."""

    id: str
    code: str
    type: str
    name: str = "Без названия"
    active: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SimpleItem":
        return cls(
            id=str(d["id"]),
            code=str(d["code"]),
            type=str(d.get("type", "CODE128")),
            name=str(d.get("name", "Без названия")),
            active=bool(d.get("active", True)),
        )


T = TypeVar("T", GtinItem, WeightItem, SimpleItem)


@dataclass
class Folder(Generic[T]):
    id: str
    name: str
    items: List[T] = field(default_factory=list)

    @property
    def active_items(self) -> List[T]:
        return [i for i in self.items if i.active]

    def set_all_active(self, active: bool) -> None:
        for item in self.items:
            item.active = active

    def clear_selected(self) -> int:
        """Remove active items; returns how many were removed."""
        before = len(self.items)
        self.items = [i for i in self.items if not i.active]
        return before - len(self.items)

    def toggle(self, item_id: str) -> bool:
        for item in self.items:
            if item.id == item_id:
                item.active = not item.active
                return item.active
        raise KeyError(item_id)

    def remove(self, item_id: str) -> None:
        self.items = [i for i in self.items if i.id != item_id]


class FolderCollection(Generic[T]):
    """Named folders of one item kind with a current selection."""

    def __init__(self, item_type: type, id_prefix: str) -> None:
        self.item_type = item_type
        self.id_prefix = id_prefix
        self.folders: List[Folder[T]] = []
        self.selected_id: Optional[str] = None

    def get(self, folder_id: Optional[str] = None) -> Optional[Folder[T]]:
        """Folder by id; defaults to the selected folder."""
        wanted = folder_id or self.selected_id
        for f in self.folders:
            if f.id == wanted:
                return f
        return None

    @property
    def selected(self) -> Optional[Folder[T]]:
        return self.get()

    def find_by_name(self, name: str) -> Optional[Folder[T]]:
        key = name.strip().lower()
        for f in self.folders:
            if f.name.lower() == key:
                return f
        return None

    def find_or_create(self, name: str) -> Folder[T]:
        name = name.strip()
        if not name:
            raise ValueError("Folder name must not be empty")
        folder = self.find_by_name(name)
        if folder is None:
            folder = Folder(id=new_id(self.id_prefix), name=name)
            self.folders.append(folder)
            logger.info("Folder created: %s", name)
        return folder

    def rename(self, folder_id: str, name: str) -> None:
        folder = self.get(folder_id)
        if folder is None:
            raise KeyError(folder_id)
        if not name.strip():
            raise ValueError("Folder name must not be empty")
        folder.name = name.strip()

    def delete(self, folder_id: str) -> None:
        self.folders = [f for f in self.folders if f.id != folder_id]
        if self.selected_id == folder_id:
            self.selected_id = None

    def to_list(self) -> List[Dict[str, Any]]:
        return [
            {"id": f.id, "name": f.name, "items": [i.to_dict() for i in f.items]}
            for f in self.folders
        ]

    def load_list(self, data: Sequence[Dict[str, Any]]) -> None:
        self.folders = [
            Folder(
                id=str(d["id"]),
                name=str(d.get("name", "")),
                items=[self.item_type.from_dict(i) for i in d.get("items", [])],
            )
            for d in data
        ]
        self.selected_id = None


class RotationCarousel(Generic[T]):
    """
    Cycles through a fixed list of items; the tick timer that drives it
    lives in the UI.
    """

    def __init__(self, items: Sequence[T]) -> None:
        if not items:
            raise ValueError("Nothing to rotate: no active items")
        self._items = list(items)
        self._index = 0

    def __len__(self) -> int:
        return len(self._items)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> T:
        return self._items[self._index]

    def next(self) -> T:
        self._index = (self._index + 1) % len(self._items)
        return self.current

    def prev(self) -> T:
        self._index = (self._index - 1) % len(self._items)
        return self.current

    def reset(self) -> None:
        self._index = 0


class AppState:
    """Everything the application persists, plus the in-memory demo cursor."""

    def __init__(self, max_history_items: int = DEFAULT_MAX_HISTORY_ITEMS) -> None:
        self.dm: FolderCollection[GtinItem] = FolderCollection(GtinItem, "dmf")
        self.wc: FolderCollection[WeightItem] = FolderCollection(WeightItem, "wcf")
        self.sg: FolderCollection[SimpleItem] = FolderCollection(SimpleItem, "sgf")
        self.saved_items: List[GtinItem] = []
        self.history = GenerationHistory(max_history_items)
        self.demo_cursor = DemoGtinCursor()
        self.selected_template = TemplateId.TYPE1

    def to_document(self) -> Dict[str, Any]:
        return {
            "savedItems": [i.to_dict() for i in self.saved_items],
            "dmFolders": self.dm.to_list(),
            "wcFolders": self.wc.to_list(),
            "sgFolders": self.sg.to_list(),
            "history": [e.to_dict() for e in self.history.items],
        }

    @classmethod
    def from_document(
        cls, doc: Dict[str, Any], max_history_items: int = DEFAULT_MAX_HISTORY_ITEMS
    ) -> "AppState":
        state = cls(max_history_items)
        state.saved_items = [GtinItem.from_dict(i) for i in doc.get("savedItems") or []]
        state.dm.load_list(doc.get("dmFolders") or [])
        state.wc.load_list(doc.get("wcFolders") or [])
        state.sg.load_list(doc.get("sgFolders") or [])
        state.history.replace([HistoryEntry.from_dict(e) for e in doc.get("history") or []])
        return state

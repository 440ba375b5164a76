"""
app

Оркестрация поверх кодировщиков: демо-курсор, история, папки, карусели, хранение.
"""

from bargen.app.services import (
    add_to_folder,
    build_weight_items,
    generate_barcode,
    generate_dm,
    generate_next_in_rotation,
    generate_simple_item,
    parse_gtin_lines,
    show_next_weight_item,
    weight_folder_name,
)
from bargen.app.state import (
    AppState,
    DemoGtinCursor,
    Folder,
    FolderCollection,
    GenerationHistory,
    GtinItem,
    HistoryEntry,
    RotationCarousel,
    SimpleItem,
    WeightItem,
)
from bargen.app.storage import Storage, StorageError

__all__ = [
    "AppState",
    "DemoGtinCursor",
    "Folder",
    "FolderCollection",
    "GenerationHistory",
    "GtinItem",
    "HistoryEntry",
    "RotationCarousel",
    "SimpleItem",
    "WeightItem",
    "Storage",
    "StorageError",
    "add_to_folder",
    "build_weight_items",
    "generate_barcode",
    "generate_dm",
    "generate_next_in_rotation",
    "generate_simple_item",
    "parse_gtin_lines",
    "show_next_weight_item",
    "weight_folder_name",
]

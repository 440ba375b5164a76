"""
RU: Сервисы оркестрации: генерация кодов с записью в историю, пакет весовой карусели,
импорт библиотеки GTIN.
EN: Thin orchestration over the stateless encoders. Every successful generation
is reported to ``GenerationHistory``; encoder failures propagate unchanged.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from bargen.app.state import (
    DemoGtinCursor,
    FolderCollection,
    GenerationHistory,
    GtinItem,
    RotationCarousel,
    SimpleItem,
    WeightItem,
    new_id,
)
from bargen.barcodegen.datamatrix import TEMPLATES, encode_datamatrix, resolve_template
from bargen.barcodegen.linear import (
    generate_from_field_config,
    generate_simple,
    generate_weight_barcode,
)
from bargen.barcodegen.padding import digits_only
from bargen.barcodegen.tokens import random_weight
from bargen.model.codes import DataMatrixCode, EncodedCode
from bargen.model.enums import BarcodeFamily, BarcodeFormat, HistoryType, TemplateId, WeightPrefix

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_WEIGHT_RANGE",
    "DEFAULT_FIXED_WEIGHT",
    "DEFAULT_DISCOUNT_RANGE",
    "MIN_GTIN_DIGITS",
    "generate_dm",
    "generate_next_in_rotation",
    "show_next_weight_item",
    "generate_barcode",
    "generate_simple_item",
    "build_weight_items",
    "weight_folder_name",
    "add_to_folder",
    "parse_gtin_lines",
]

DEFAULT_WEIGHT_RANGE: Tuple[int, int] = (150, 8000)
DEFAULT_FIXED_WEIGHT = 500
DEFAULT_DISCOUNT_RANGE: Tuple[int, int] = (5, 30)
DEFAULT_FIXED_DISCOUNT = 0
MIN_GTIN_DIGITS = 8

Mode = Literal["random", "fixed"]


def generate_dm(
    gtin: Optional[str] = None,
    template_id: Union[TemplateId, str] = TemplateId.TYPE1,
    cursor: Optional[DemoGtinCursor] = None,
    history: Optional[GenerationHistory] = None,
    rng: Optional[random.Random] = None,
) -> DataMatrixCode:
    """
    DataMatrix code for ``gtin``; without a GTIN the next demo GTIN is used.

    Raises:
        BarcodeGenError: unknown template id.
        ValueError: no GTIN and no cursor to take one from.
    """
    tid = resolve_template(template_id)
    if not gtin or not gtin.strip():
        if cursor is None:
            raise ValueError("GTIN is required when no demo cursor is given")
        gtin = cursor.next()
        logger.debug("Demo GTIN %s (cursor at %d)", gtin, cursor.index)
    code = encode_datamatrix(gtin, tid, rng)
    if history is not None:
        history.add(HistoryType.DM, code)
    return DataMatrixCode(code=code, template_name=TEMPLATES[tid].name, gtin=gtin.strip())


def generate_next_in_rotation(
    carousel: RotationCarousel[GtinItem],
    history: Optional[GenerationHistory] = None,
    rng: Optional[random.Random] = None,
) -> DataMatrixCode:
    """Encodes the carousel's current item with its own template, then advances."""
    item = carousel.current
    result = generate_dm(item.barcode, item.template, history=history, rng=rng)
    carousel.next()
    return result


def show_next_weight_item(
    carousel: RotationCarousel[WeightItem],
    history: Optional[GenerationHistory] = None,
) -> WeightItem:
    """One carousel tick: returns the current weight item, logs it as WC, advances."""
    item = carousel.current
    if history is not None:
        history.add(HistoryType.WC, item.code)
    carousel.next()
    return item


def generate_barcode(
    family: Union[BarcodeFamily, str],
    values: Mapping[str, Any],
    history: Optional[GenerationHistory] = None,
    simulate_error: bool = False,
    rng: Optional[random.Random] = None,
) -> EncodedCode:
    """Form-driven linear code; ``FieldValidationError`` propagates to the caller."""
    encoded = generate_from_field_config(family, values, simulate_error=simulate_error, rng=rng)
    if history is not None:
        history.add(HistoryType.BC, encoded.code)
    return encoded


def generate_simple_item(
    value: str,
    format: Union[BarcodeFormat, str] = BarcodeFormat.CODE128,
    history: Optional[GenerationHistory] = None,
    name: str = "",
) -> SimpleItem:
    """Simple-generator code ready to be saved into an SG folder."""
    if not value or not value.strip():
        raise ValueError("Barcode value must not be empty")
    encoded = generate_simple(value, format)
    if history is not None:
        history.add(HistoryType.SG, encoded.code)
    return SimpleItem(
        id=new_id("sgi"),
        code=encoded.code,
        type=encoded.format.value,
        name=name.strip() or "Без названия",
    )


def _parse_plu_lines(plu_lines: Union[str, Iterable[str]]) -> List[str]:
    lines = plu_lines.splitlines() if isinstance(plu_lines, str) else plu_lines
    return [p for p in (digits_only(line.strip()) for line in lines) if p]


def build_weight_items(
    plu_lines: Union[str, Iterable[str]],
    variations: int = 10,
    prefixes: Sequence[Union[WeightPrefix, str]] = (WeightPrefix.CAS, WeightPrefix.EAN13_WEIGHT),
    weight_mode: Mode = "random",
    fixed_weight: int = DEFAULT_FIXED_WEIGHT,
    weight_range: Tuple[int, int] = DEFAULT_WEIGHT_RANGE,
    discount_mode: Mode = "fixed",
    fixed_discount: int = DEFAULT_FIXED_DISCOUNT,
    discount_range: Tuple[int, int] = DEFAULT_DISCOUNT_RANGE,
    rng: Optional[random.Random] = None,
) -> List[WeightItem]:
    """
    Batch for the weight carousel: one item per PLU x variation x prefix.

    All prefixes of one variation share the same weight and discount.
    Discount is stored on the item only for prefix 49.

    Raises:
        ValueError: no prefixes, no PLU, or ``weight_range`` min >= max in random mode.
    """
    prefix_values = [p.value if isinstance(p, WeightPrefix) else str(p) for p in prefixes]
    if not prefix_values:
        raise ValueError("Select at least one prefix")
    plus = _parse_plu_lines(plu_lines)
    if not plus:
        raise ValueError("Enter at least one PLU code")
    if variations < 1:
        raise ValueError(f"variations must be positive, got {variations}")

    weight_min, weight_max = weight_range
    if weight_mode == "random" and weight_min >= weight_max:
        raise ValueError(f"Min weight {weight_min} must be less than max {weight_max}")
    disc_min, disc_max = discount_range
    if disc_min > disc_max:
        disc_min, disc_max = disc_max, disc_min

    base_id = new_id("wc")
    items: List[WeightItem] = []
    for plu_idx, plu in enumerate(plus):
        for i in range(variations):
            weight = fixed_weight if weight_mode == "fixed" else random_weight(weight_min, weight_max, rng)
            discount = (
                fixed_discount
                if discount_mode == "fixed"
                else random_weight(disc_min, disc_max, rng)
            )
            for prefix in prefix_values:
                bc = generate_weight_barcode(prefix, plu, weight, discount)
                items.append(
                    WeightItem(
                        id=f"{base_id}_{plu_idx}_{i}_{prefix}",
                        code=bc.code,
                        format=bc.format.value,
                        plu=bc.plu,
                        weight=weight,
                        prefix=prefix,
                        discount=discount if prefix == WeightPrefix.DISCOUNT_WEIGHT.value else None,
                    )
                )
    logger.info("Built %d weight items for %d PLU(s)", len(items), len(plus))
    return items


def weight_folder_name(first_plu: str, weight_mode: Mode, fixed_weight: int = DEFAULT_FIXED_WEIGHT) -> str:
    """Default folder name, e.g. ``FIX 500 PLU 123`` or ``RND PLU 123``."""
    head = f"FIX {fixed_weight}" if weight_mode == "fixed" else "RND"
    return f"{head} PLU {first_plu}"


def add_to_folder(
    collection: FolderCollection[Any],
    items: Sequence[Any],
    folder_name: Optional[str] = None,
    default_name: str = "",
) -> Any:
    """
    Appends items to a folder and selects it.

    Target: the folder named ``folder_name`` (created if missing), else the
    selected folder, else a new folder called ``default_name``.
    """
    if folder_name and folder_name.strip():
        folder = collection.find_or_create(folder_name)
    elif collection.selected is not None:
        folder = collection.selected
    else:
        folder = collection.find_or_create(default_name)
    folder.items.extend(items)
    collection.selected_id = folder.id
    logger.info("Added %d item(s) to folder '%s'", len(items), folder.name)
    return folder


def parse_gtin_lines(
    text: str, template_id: Union[TemplateId, str] = TemplateId.TYPE1
) -> List[GtinItem]:
    """Library import: one GTIN per line, non-digits stripped; lines with fewer than 8 digits are skipped."""
    tid = resolve_template(template_id)
    base_id = new_id("dmi")
    items: List[GtinItem] = []
    for n, line in enumerate(text.splitlines()):
        barcode = digits_only(line.strip())
        if len(barcode) < MIN_GTIN_DIGITS:
            continue
        items.append(GtinItem(id=f"{base_id}_{n}", barcode=barcode, template=tid))
    logger.info("Parsed %d GTIN(s) from %d line(s)", len(items), len(text.splitlines()))
    return items

"""
model/enums.py

(Краткое RU: Перечисления предметной области генератора тестовых штрихкодов.)

EN: Closed domain enums for BarGen. Every barcode family, template, format and
checksum algorithm the encoders know about is listed here; nothing is looked up
by free-form string once it has been coerced into one of these types.

See Also:
    - bargen.barcodegen.linear (family table)
    - bargen.barcodegen.datamatrix (template registry)
"""

from __future__ import annotations

from enum import Enum
from typing import Literal


class BarcodeFormat(str, Enum):
    """Render format tag handed to the symbol renderer."""

    CODE128 = "CODE128"
    EAN13 = "EAN13"
    UPC = "UPC"
    ITF14 = "ITF14"
    DATAMATRIX = "DATAMATRIX"

    @property
    def is_linear(self) -> bool:
        return self is not BarcodeFormat.DATAMATRIX

    @classmethod
    def simple_formats(cls) -> tuple[BarcodeFormat, ...]:
        """Formats offered by the simple generator."""
        return (cls.CODE128, cls.EAN13, cls.UPC, cls.ITF14)


class TemplateId(str, Enum):
    TYPE1 = "type1"
    TYPE2 = "type2"

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            TemplateId.TYPE1: "Тип 1",
            TemplateId.TYPE2: "Тип 2",
        }
        names_en = {
            TemplateId.TYPE1: "Type 1",
            TemplateId.TYPE2: "Type 2",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class WeightPrefix(str, Enum):
    """Prefixes accepted by the weight barcode generator."""

    CAS = "77"
    DISCOUNT_WEIGHT = "49"
    EAN13_WEIGHT = "22"

    @property
    def code_length(self) -> int:
        return {
            WeightPrefix.CAS: 16,
            WeightPrefix.DISCOUNT_WEIGHT: 19,
            WeightPrefix.EAN13_WEIGHT: 13,
        }[self]

    @property
    def render_format(self) -> BarcodeFormat:
        if self is WeightPrefix.EAN13_WEIGHT:
            return BarcodeFormat.EAN13
        return BarcodeFormat.CODE128


class ChecksumAlgorithm(str, Enum):
    FIXED = "fixed"
    MOD10_DIGIT_SUM = "mod10_digit_sum"
    EAN13 = "ean13"


class BarcodeFamily(str, Enum):
    """Configurable linear barcode families, keyed by their form ids."""

    PIECE = "code128_19_piece"
    DISCOUNT_WEIGHT = "code128_19_weight"
    PRICE = "code128_19_price"
    CAS = "code128_16_cas"
    EAN13_WEIGHT = "ean13_weight"


class HistoryType(str, Enum):
    """Source tag of a history entry."""

    DM = "DM"
    BC = "BC"
    WC = "WC"
    SG = "SG"

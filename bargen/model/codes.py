# RU: Объекты-значения кодировщиков: результат кодирования, весовой штрихкод, описание полей семейства.
# EN: Encoder value objects: encoded code, weight barcode, field layout of a barcode family.

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple

from .enums import BarcodeFormat, ChecksumAlgorithm


@dataclass(frozen=True)
class EncodedCode:
    """
    Output of every linear encoder: the wire code and the render format.

    This is the only thing handed to the 1D renderer.
    """

    code: str
    format: BarcodeFormat

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "format": self.format.value}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EncodedCode":
        return cls(code=d["code"], format=BarcodeFormat(d["format"]))

    def __str__(self) -> str:
        return f"{self.format.value}:{self.code}"


@dataclass(frozen=True)
class WeightBarcode(EncodedCode):
    """Weight barcode plus the request values it was built from (metadata only)."""

    weight: int = 0
    plu: str = ""
    prefix: str = ""
    discount: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        dct = super().to_dict()
        dct.update(
            weight=self.weight,
            plu=self.plu,
            prefix=self.prefix,
            discount=self.discount,
        )
        return dct

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "WeightBarcode":
        return cls(
            code=d["code"],
            format=BarcodeFormat(d["format"]),
            weight=int(d.get("weight", 0)),
            plu=str(d.get("plu", "")),
            prefix=str(d.get("prefix", "")),
            discount=d.get("discount"),
        )


@dataclass(frozen=True)
class DataMatrixCode:
    """Result of a DataMatrix generation with the GTIN actually used."""

    code: str
    template_name: str
    gtin: str
    format: ClassVar[BarcodeFormat] = BarcodeFormat.DATAMATRIX


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    length: int


@dataclass(frozen=True)
class BarcodeFieldConfig:
    """
    Layout of one configurable linear barcode family.

    Full code length is prefix + sum of field widths + one check digit.
    """

    prefix: str
    fields: Tuple[FieldSpec, ...]
    render_format: BarcodeFormat
    checksum: ChecksumAlgorithm
    fixed_control_digit: Optional[str] = None
    description: str = ""
    field_names: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.fixed_control_digit is not None:
            if len(self.fixed_control_digit) != 1 or not self.fixed_control_digit.isdigit():
                raise ValueError(
                    f"fixed_control_digit must be a single digit, got {self.fixed_control_digit!r}"
                )
            if self.checksum is not ChecksumAlgorithm.FIXED:
                raise ValueError("fixed_control_digit requires ChecksumAlgorithm.FIXED")
        elif self.checksum is ChecksumAlgorithm.FIXED:
            raise ValueError("ChecksumAlgorithm.FIXED requires fixed_control_digit")
        object.__setattr__(self, "field_names", tuple(f.name for f in self.fields))

    @property
    def code_length(self) -> int:
        return len(self.prefix) + sum(f.length for f in self.fields) + 1

    def to_dict(self) -> Dict[str, Any]:
        dct = asdict(self)
        dct.pop("field_names", None)
        dct["render_format"] = self.render_format.value
        dct["checksum"] = self.checksum.value
        return dct

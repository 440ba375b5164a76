from __future__ import annotations

import logging
from io import BytesIO
from typing import Any, Dict, Optional, TypedDict

import barcode as pybarcode
from barcode.errors import BarcodeError
from barcode.writer import ImageWriter
from PIL import Image

from bargen.model.codes import EncodedCode
from bargen.model.enums import BarcodeFormat

from .checksum import is_valid_ean13
from .errors import BarcodeGenError

logger = logging.getLogger(__name__)

__all__ = [
    "BarcodeRenderer",
    "BarcodeGenError",
    "BarcodeRenderOptions",
]


class BarcodeRenderOptions(TypedDict, total=False):
    """Типобезопасные опции рендеринга штрихкода (ImageWriter python-barcode)."""

    module_width: float
    module_height: float
    font_size: int
    dpi: int
    text_distance: float
    quiet_zone: float
    write_text: bool


class BarcodeRenderer:
    """
    Renders an ``EncodedCode`` from the linear encoders as a PIL image.

    The renderer owns symbol-level encoding (Code128 character sets, EAN
    guard bars); the code string is drawn exactly as given.

    Args:
        encoded: code + format produced by ``bargen.barcodegen.linear``.
    """

    _pybarcode_support: Dict[BarcodeFormat, str] = {
        BarcodeFormat.CODE128: "code128",
        BarcodeFormat.EAN13: "ean13",
        BarcodeFormat.UPC: "upca",
        BarcodeFormat.ITF14: "itf",
    }

    _default_writer_options: Dict[str, Any] = {
        "module_width": 0.2,
        "module_height": 15.0,
        "font_size": 14,
        "dpi": 144,
        "text_distance": 5.0,
        "quiet_zone": 6.5,
        "write_text": True,
    }

    def __init__(self, encoded: EncodedCode) -> None:
        if not isinstance(encoded, EncodedCode):
            raise TypeError(f"encoded must be EncodedCode, got {type(encoded)!r}")
        if encoded.format not in self._pybarcode_support:
            raise BarcodeGenError(f"Format {encoded.format.value} is not a linear format")
        self.encoded = encoded

    @property
    def data(self) -> str:
        return self.encoded.code

    def validate(self) -> None:
        """
        Проверяет код на соответствие правилам формата.
        Raises:
            BarcodeGenError: при ошибке данных.
        """
        data = self.data
        fmt = self.encoded.format
        if not isinstance(data, str) or not data.strip():
            raise BarcodeGenError("Barcode data must be non-empty string")

        if fmt == BarcodeFormat.EAN13:
            if not data.isdigit() or len(data) != 13:
                raise BarcodeGenError("EAN13 must be 13 digits.")
        elif fmt == BarcodeFormat.UPC:
            if not data.isdigit() or len(data) != 12:
                raise BarcodeGenError("UPC-A must be 12 digits.")
            # upca recomputes the 12th digit; a wrong one must go to the CODE128 fallback
            if not is_valid_ean13("0" + data):
                raise BarcodeGenError("UPC-A check digit mismatch.")
        elif fmt == BarcodeFormat.ITF14:
            if not data.isdigit() or len(data) != 14:
                raise BarcodeGenError("ITF14 must be 14 digits.")
        elif fmt == BarcodeFormat.CODE128 and len(data) > 80:
            raise BarcodeGenError("CODE128 data too long (max ~80)")

    def _build(self, fmt: BarcodeFormat) -> Any:
        bclass = pybarcode.get_barcode_class(self._pybarcode_support[fmt])
        if fmt == BarcodeFormat.EAN13:
            # check digit is drawn as generated, even a deliberately wrong one
            return bclass(self.data, writer=ImageWriter(), no_checksum=True)
        return bclass(self.data, writer=ImageWriter())

    def render_image(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        options: Optional[BarcodeRenderOptions] = None,
        strict: bool = True,
    ) -> Image.Image:
        """
        Рендеринг изображения штрихкода.

        Если формат не принимает код, выполняется повторная попытка как
        CODE128. При strict=False вместо исключения возвращается белый
        placeholder и пишется предупреждение.

        Args:
            width: Ширина результата в пикселях (None: как нарисовал writer).
            height: Высота результата в пикселях.
            options: Опции ImageWriter поверх значений по умолчанию.
            strict: Бросать BarcodeGenError при ошибке.

        Returns:
            PIL Image (RGB).

        Raises:
            BarcodeGenError: Если strict=True и рендеринг не удался.
        """
        writer_options = {**self._default_writer_options, **(options or {})}
        fmt = self.encoded.format
        logger.debug("Rendering %s barcode data=%s", fmt.value, self.data)

        try:
            try:
                self.validate()
                img = self._build(fmt).render(writer_options=writer_options)
            except (BarcodeGenError, BarcodeError, ValueError) as e:
                if fmt == BarcodeFormat.CODE128:
                    raise
                logger.warning("%s rendering failed (%s); falling back to CODE128", fmt.value, e)
                if len(self.data) > 80 or not self.data.strip():
                    raise
                img = self._build(BarcodeFormat.CODE128).render(writer_options=writer_options)

            if not isinstance(img, Image.Image):
                raise BarcodeGenError("Barcode output is not an Image.Image object")
            img = img.convert("RGB")
            if width and height:
                img = img.resize((width, height))
            return img
        except Exception as e:
            msg = f"Barcode image generation failed: {fmt.value} {self.data!r}"
            if strict:
                if isinstance(e, BarcodeGenError):
                    raise
                raise BarcodeGenError(msg) from e
            logger.warning("%s; returning placeholder", msg)
            return Image.new("RGB", (width or 400, height or 120), "white")

    def render_bytes(self, options: Optional[BarcodeRenderOptions] = None) -> bytes:
        img = self.render_image(options=options)
        buf = BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)
        return buf.read()

    @classmethod
    def supported_formats(cls) -> set[BarcodeFormat]:
        return set(cls._pybarcode_support.keys())

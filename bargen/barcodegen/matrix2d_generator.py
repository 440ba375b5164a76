"""
RU: Рендеринг DataMatrix для строк элементов GS1 с подписью
EN: DataMatrix renderer for GS1 element strings, with optional caption

Provides:
- DataMatrix image generation via treepoem (BWIPP; requires Ghostscript)
- Raw payloads: GS (0x1D) separators are passed to the symbol as-is
- Captions under the symbol
- PNG / SVG-wrapped PNG bytes

Requirements: Pillow, treepoem
"""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import Any, Dict, Final, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont
from PIL.Image import Resampling

logger = logging.getLogger(__name__)

__all__ = [
    "DataMatrixRenderer",
    "Matrix2DCodeGenError",
]

MAX_IMAGE_WIDTH: Final[int] = 10000
MAX_IMAGE_HEIGHT: Final[int] = 10000

# Константы разметки подписи
CAPTION_VERTICAL_SPACING: Final[int] = 8
CAPTION_TOP_MARGIN: Final[int] = 4


class Matrix2DCodeGenError(Exception):
    """DataMatrix rendering error (Ошибка рендеринга DataMatrix)."""


class DataMatrixRenderer:
    """DataMatrix renderer for element strings produced by ``bargen.barcodegen.datamatrix``.

    Args:
        data: Element string, GS characters included.
        options: BWIPP options (``scale``, ``padding``, ``columns``, ``rows``).

    Examples:
        >>> r = DataMatrixRenderer(encode_datamatrix("4810099003310", "type1"))
        >>> img = r.render_image(width=200, caption="Тип 1")
    """

    _default_options: Dict[str, Any] = {"scale": 4, "padding": 2}
    _passthrough_options = ("scale", "padding", "columns", "rows")

    def __init__(self, data: str, options: Optional[Dict[str, Any]] = None) -> None:
        self.data = data
        self.options = {**self._default_options, **(options or {})}

    def validate(self) -> None:
        """Raises Matrix2DCodeGenError for empty or non-string data."""
        if not isinstance(self.data, str) or not self.data.strip():
            logger.error("Input data is empty or not string, got %r", self.data)
            raise Matrix2DCodeGenError("Data must be a non-empty string")

    def _bwipp_options(self) -> Dict[str, str]:
        return {k: str(self.options[k]) for k in self._passthrough_options if k in self.options}

    def render_image(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        caption: Optional[str] = None,
    ) -> Image.Image:
        """
        Render the symbol as an RGB image, optionally scaled and captioned.

        Raises:
            Matrix2DCodeGenError: on invalid state or renderer errors.
        """
        if width is not None and not (0 < width <= MAX_IMAGE_WIDTH):
            raise Matrix2DCodeGenError(f"Width must be in 1..{MAX_IMAGE_WIDTH}, got {width}")
        if height is not None and not (0 < height <= MAX_IMAGE_HEIGHT):
            raise Matrix2DCodeGenError(f"Height must be in 1..{MAX_IMAGE_HEIGHT}, got {height}")

        self.validate()

        try:
            import treepoem
        except ImportError:
            logger.error("treepoem not installed for DataMatrix")
            raise Matrix2DCodeGenError(
                "treepoem not installed (install with: pip install treepoem)"
            )

        try:
            dm_img = treepoem.generate_barcode(
                barcode_type="datamatrix",
                data=self.data,
                options=self._bwipp_options(),
            )
        except Exception as e:
            logger.error("DataMatrix generation error: %r", e)
            raise Matrix2DCodeGenError(f"DataMatrix generation failed: {e}") from e

        if not isinstance(dm_img, Image.Image):
            logger.error("treepoem did not produce a valid DataMatrix image")
            raise Matrix2DCodeGenError("DataMatrix generation failed via treepoem")

        img = dm_img.convert("RGB")
        size = _target_size(img.size, width, height)
        if size != img.size:
            # modules must stay sharp squares
            img = img.resize(size, resample=Resampling.NEAREST)
        if caption:
            img = _with_caption(img, caption)
        logger.info("DataMatrix rendered: %d chars, %dx%d", len(self.data), img.width, img.height)
        return img

    def render_bytes(self, output_format: str = "PNG", **kwargs: Any) -> bytes:
        """PNG (or any Pillow format) bytes; "SVG" embeds the PNG in an <svg> element."""
        img = self.render_image(**kwargs)
        fmt = output_format.upper()
        buf = BytesIO()
        img.save(buf, format="PNG" if fmt == "SVG" else fmt)
        if fmt != "SVG":
            logger.debug("Output rendered as %s (%d bytes)", fmt, buf.getbuffer().nbytes)
            return buf.getvalue()
        b64 = base64.b64encode(buf.getvalue()).decode("ascii")
        w, h = img.size
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}">'
            f'<image width="{w}" height="{h}" href="data:image/png;base64,{b64}"/></svg>'
        ).encode("utf-8")


def _target_size(
    size: Tuple[int, int], width: Optional[int], height: Optional[int]
) -> Tuple[int, int]:
    """Requested size; a single given side keeps the aspect ratio."""
    w, h = size
    if width and height:
        return width, height
    if width:
        return width, round(h * width / w)
    if height:
        return round(w * height / h), height
    return size


def _with_caption(img: Image.Image, caption: str) -> Image.Image:
    """Подпись по центру под символом, на белом поле."""
    font = ImageFont.load_default()
    left, top, right, bottom = (int(v) for v in font.getbbox(caption))
    canvas = Image.new(
        "RGB", (img.width, img.height + (bottom - top) + CAPTION_VERTICAL_SPACING), "white"
    )
    canvas.paste(img, (0, 0))
    x = (img.width - (right - left)) // 2
    ImageDraw.Draw(canvas).text((x, img.height + CAPTION_TOP_MARGIN), caption, font=font, fill="black")
    return canvas

from unittest.mock import patch

import pytest
from PIL import Image

from bargen.barcodegen.datamatrix import GS, generate_type1
from bargen.barcodegen.matrix2d_generator import DataMatrixRenderer, Matrix2DCodeGenError

GENERATE = "treepoem.generate_barcode"


def fake_symbol(size: int = 40) -> Image.Image:
    return Image.new("1", (size, size), 1)


def test_render_passes_raw_payload() -> None:
    code = generate_type1("4810099003310")
    with patch(GENERATE, return_value=fake_symbol()) as gen:
        img = DataMatrixRenderer(code).render_image()
    assert isinstance(img, Image.Image)
    kwargs = gen.call_args.kwargs
    assert kwargs["barcode_type"] == "datamatrix"
    assert kwargs["data"] == code
    assert GS in kwargs["data"]
    assert kwargs["options"] == {"scale": "4", "padding": "2"}


def test_options_passthrough() -> None:
    with patch(GENERATE, return_value=fake_symbol()) as gen:
        DataMatrixRenderer("01046", {"scale": 2, "columns": 26, "ignored": True}).render_image()
    assert gen.call_args.kwargs["options"] == {"scale": "2", "padding": "2", "columns": "26"}


@pytest.mark.parametrize(
    "width,height,expected",
    [(200, 100, (200, 100)), (80, None, (80, 80)), (None, 120, (120, 120))],
)
def test_resize(width: int, height: int, expected: tuple[int, int]) -> None:
    with patch(GENERATE, return_value=fake_symbol()):
        img = DataMatrixRenderer("data").render_image(width=width, height=height)
    assert img.size == expected


def test_caption_extends_height() -> None:
    with patch(GENERATE, return_value=fake_symbol(100)):
        img = DataMatrixRenderer("data").render_image(caption="Тип 1")
    assert img.width == 100
    assert img.height > 100
    assert img.mode == "RGB"


def test_output_is_rgb_with_sharp_modules() -> None:
    symbol = fake_symbol(2)
    symbol.putpixel((0, 0), 0)
    with patch(GENERATE, return_value=symbol):
        img = DataMatrixRenderer("data").render_image(width=4)
    assert img.mode == "RGB"
    assert {img.getpixel((x, y)) for x in (0, 1) for y in (0, 1)} == {(0, 0, 0)}
    assert img.getpixel((2, 2)) == (255, 255, 255)


@pytest.mark.parametrize("width", [0, -1, 10001])
def test_invalid_width(width: int) -> None:
    with pytest.raises(Matrix2DCodeGenError, match="Width"):
        DataMatrixRenderer("data").render_image(width=width)


@pytest.mark.parametrize("data", ["", "   "])
def test_empty_data(data: str) -> None:
    with pytest.raises(Matrix2DCodeGenError, match="non-empty"):
        DataMatrixRenderer(data).render_image()


def test_backend_error_wrapped() -> None:
    with patch(GENERATE, side_effect=RuntimeError("ghostscript missing")):
        with pytest.raises(Matrix2DCodeGenError, match="ghostscript missing"):
            DataMatrixRenderer("data").render_image()


def test_backend_returns_non_image() -> None:
    with patch(GENERATE, return_value=None):
        with pytest.raises(Matrix2DCodeGenError, match="via treepoem"):
            DataMatrixRenderer("data").render_image()


def test_render_bytes_png_and_svg() -> None:
    with patch(GENERATE, return_value=fake_symbol()):
        png = DataMatrixRenderer("data").render_bytes()
        svg = DataMatrixRenderer("data").render_bytes("svg", width=60)
    assert png.startswith(b"\x89PNG")
    assert svg.startswith(b"<svg")
    assert b'width="60"' in svg

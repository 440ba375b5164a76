import random

import pytest

from bargen.barcodegen.datamatrix import (
    GS,
    TEMPLATES,
    TYPE1_LENGTH,
    TYPE2_LENGTH,
    encode_datamatrix,
    generate_type1,
    generate_type2,
)
from bargen.barcodegen.errors import BarcodeGenError
from bargen.barcodegen.tokens import ALPHANUMERIC, BASE64URLISH, HEX
from bargen.model.enums import TemplateId


def test_gs_is_group_separator() -> None:
    assert GS == "\x1d"
    assert ord(GS) == 29


def test_type1_structure() -> None:
    code = generate_type1("4810099003310", random.Random(5))
    assert len(code) == TYPE1_LENGTH == 32
    assert code.startswith("01" + "04810099003310" + "21")
    serial = code[18:25]
    assert serial[0] == "0"
    assert set(serial[1:]) <= set(ALPHANUMERIC)
    assert code[25] == GS
    assert code[26:28] == "93"
    assert set(code[28:]) <= set(BASE64URLISH)
    assert code.count(GS) == 1


def test_type2_structure() -> None:
    code = generate_type2("4810099003310", random.Random(5))
    assert len(code) == TYPE2_LENGTH == 85
    assert code.startswith("0104810099003310" + "21")
    serial = code[18:31]
    assert serial[0] == "5"
    assert set(serial[1:]) <= set(ALPHANUMERIC)
    assert code[31] == GS
    assert code[32:34] == "91"
    assert set(code[34:38]) <= set(HEX)
    assert code[38] == GS
    assert code[39:41] == "92"
    assert len(code[41:]) == 44
    assert set(code[41:]) <= set(BASE64URLISH)


@pytest.mark.parametrize("gtin", ["", "abc", "123-456", "123456789012345678"])
def test_templates_are_total(gtin: str) -> None:
    assert len(generate_type1(gtin)) == 32
    assert len(generate_type2(gtin)) == 85


def test_seeded_generation_is_reproducible() -> None:
    assert generate_type2("46", random.Random(9)) == generate_type2("46", random.Random(9))


@pytest.mark.parametrize(
    "template_id,length",
    [(TemplateId.TYPE1, 32), ("type1", 32), (TemplateId.TYPE2, 85), ("type2", 85)],
)
def test_encode_datamatrix_dispatch(template_id: object, length: int) -> None:
    assert len(encode_datamatrix("4810099003310", template_id)) == length  # type: ignore[arg-type]


def test_encode_datamatrix_unknown_template() -> None:
    with pytest.raises(BarcodeGenError, match="Unknown DataMatrix template"):
        encode_datamatrix("4810099003310", "type3")


def test_template_registry() -> None:
    assert TEMPLATES[TemplateId.TYPE1].name == "Тип 1"
    assert TEMPLATES[TemplateId.TYPE2].name == "Тип 2"
    assert "короткий" in TEMPLATES[TemplateId.TYPE1].description
    assert TEMPLATES[TemplateId.TYPE2].generate is generate_type2

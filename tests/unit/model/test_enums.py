import pytest

from bargen.model.enums import (
    BarcodeFamily,
    BarcodeFormat,
    ChecksumAlgorithm,
    HistoryType,
    TemplateId,
    WeightPrefix,
)


def test_barcode_format_values() -> None:
    assert BarcodeFormat("CODE128") is BarcodeFormat.CODE128
    assert BarcodeFormat.EAN13 == "EAN13"
    assert BarcodeFormat.CODE128.is_linear
    assert not BarcodeFormat.DATAMATRIX.is_linear


def test_simple_formats() -> None:
    assert BarcodeFormat.simple_formats() == (
        BarcodeFormat.CODE128,
        BarcodeFormat.EAN13,
        BarcodeFormat.UPC,
        BarcodeFormat.ITF14,
    )


@pytest.mark.parametrize(
    "tid,ru,en",
    [(TemplateId.TYPE1, "Тип 1", "Type 1"), (TemplateId.TYPE2, "Тип 2", "Type 2")],
)
def test_template_localized_name(tid: TemplateId, ru: str, en: str) -> None:
    assert tid.localized_name() == ru
    assert tid.localized_name("en") == en


@pytest.mark.parametrize(
    "prefix,length,fmt",
    [
        (WeightPrefix.CAS, 16, BarcodeFormat.CODE128),
        (WeightPrefix.DISCOUNT_WEIGHT, 19, BarcodeFormat.CODE128),
        (WeightPrefix.EAN13_WEIGHT, 13, BarcodeFormat.EAN13),
    ],
)
def test_weight_prefix(prefix: WeightPrefix, length: int, fmt: BarcodeFormat) -> None:
    assert prefix.code_length == length
    assert prefix.render_format == fmt


def test_family_ids() -> None:
    assert {f.value for f in BarcodeFamily} == {
        "code128_19_piece",
        "code128_19_weight",
        "code128_19_price",
        "code128_16_cas",
        "ean13_weight",
    }


def test_unknown_values_rejected() -> None:
    with pytest.raises(ValueError):
        TemplateId("type3")
    with pytest.raises(ValueError):
        HistoryType("QR")
    with pytest.raises(ValueError):
        ChecksumAlgorithm("luhn")

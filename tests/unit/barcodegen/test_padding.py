import pytest

from bargen.barcodegen.padding import GTIN_LENGTH, digits_only, pad_gtin14, zero_pad


@pytest.mark.parametrize(
    "value,length,expected",
    [
        ("12", 5, "00012"),
        ("1a2", 4, "0012"),
        ("ABC123", 6, "000123"),
        ("", 3, "000"),
        (0, 5, "00000"),
        (6789, 5, "06789"),
        ("123456", 4, "123456"),
    ],
)
def test_zero_pad(value: object, length: int, expected: str) -> None:
    assert zero_pad(value, length) == expected  # type: ignore[arg-type]


@pytest.mark.parametrize("value", ["", "7", "12-34", "123456789012345"])
def test_zero_pad_length_property(value: str) -> None:
    out = zero_pad(value, 8)
    assert out.isdigit()
    assert len(out) == max(8, len(digits_only(value)))


@pytest.mark.parametrize(
    "value,expected",
    [
        ("4810099003310", "04810099003310"),
        ("123-456-789-012", "00123456789012"),
        ("123456789012345678", "12345678901234"),
        ("", "00000000000000"),
        ("04810099003310", "04810099003310"),
    ],
)
def test_pad_gtin14(value: str, expected: str) -> None:
    assert pad_gtin14(value) == expected


@pytest.mark.parametrize("digits", ["1", "4607", "12345678901234"])
def test_pad_gtin14_keeps_short_value_at_end(digits: str) -> None:
    out = pad_gtin14(digits)
    assert len(out) == GTIN_LENGTH
    assert out.endswith(digits)
    assert set(out[: GTIN_LENGTH - len(digits)]) <= {"0"}


@pytest.mark.parametrize(
    "value,expected",
    [(2500.0, "2500"), (0.0, "0"), (12.5, "125"), ("2 500", "2500"), (77, "77")],
)
def test_digits_only_numbers(value: object, expected: str) -> None:
    assert digits_only(value) == expected  # type: ignore[arg-type]

"""
RU: Линейные штрихкоды для весового и штучного товара с контрольной цифрой.
EN: Fixed-width numeric payloads for retail weight/price barcode families.

Every family follows the same shape: prefix + zero-padded fields + one check
digit. Two entry points exist with deliberately different over-length behavior:

- ``generate_weight_barcode`` pads permissively; an over-long value passes
  through untruncated and the code grows.
- ``generate_from_field_config`` rejects any field whose digits exceed the
  configured width with ``FieldValidationError``.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Final, Mapping, Optional, Union

from bargen.form.validation import FormValidator, ValidationResult, max_digits
from bargen.model.codes import BarcodeFieldConfig, EncodedCode, FieldSpec, WeightBarcode
from bargen.model.enums import BarcodeFamily, BarcodeFormat, ChecksumAlgorithm, WeightPrefix

from .checksum import ean13_checksum, mod10_digit_sum
from .errors import BarcodeGenError, FieldValidationError
from .padding import digits_only, zero_pad

logger = logging.getLogger(__name__)

__all__ = [
    "FIELD_CONFIGS",
    "CAS_CONTROL_DIGIT",
    "compute_check_digit",
    "generate_weight_barcode",
    "validate_field_values",
    "generate_from_field_config",
    "generate_simple",
]

# Весы CAS пересчитывают контрольный разряд сами, в коде всегда '0'
CAS_CONTROL_DIGIT: Final[str] = "0"

FIELD_CONFIGS: Final[Dict[BarcodeFamily, BarcodeFieldConfig]] = {
    BarcodeFamily.PIECE: BarcodeFieldConfig(
        prefix="47",
        fields=(
            FieldSpec("productCode", "Код товара (9)", 9),
            FieldSpec("discount", "Скидка (2)", 2),
            FieldSpec("quantity", "Кол-во (5)", 5),
        ),
        render_format=BarcodeFormat.CODE128,
        checksum=ChecksumAlgorithm.MOD10_DIGIT_SUM,
        description="Штучный товар - 19 символов",
    ),
    BarcodeFamily.DISCOUNT_WEIGHT: BarcodeFieldConfig(
        prefix="49",
        fields=(
            FieldSpec("productCode", "Код товара (9)", 9),
            FieldSpec("discount", "Скидка (2)", 2),
            FieldSpec("weight", "Вес (5)", 5),
        ),
        render_format=BarcodeFormat.CODE128,
        checksum=ChecksumAlgorithm.MOD10_DIGIT_SUM,
        description="Весовой товар со скидкой - 19 символов",
    ),
    BarcodeFamily.PRICE: BarcodeFieldConfig(
        prefix="44",
        fields=(
            FieldSpec("productCode", "Код товара (9)", 9),
            FieldSpec("price", "Цена (7)", 7),
        ),
        render_format=BarcodeFormat.CODE128,
        checksum=ChecksumAlgorithm.MOD10_DIGIT_SUM,
        description="Товар с ценой - 19 символов",
    ),
    BarcodeFamily.CAS: BarcodeFieldConfig(
        prefix="77",
        fields=(
            FieldSpec("productCode", "Код товара (6)", 6),
            FieldSpec("weight", "Вес (7)", 7),
        ),
        render_format=BarcodeFormat.CODE128,
        checksum=ChecksumAlgorithm.FIXED,
        fixed_control_digit=CAS_CONTROL_DIGIT,
        description="CAS весы - 16 символов",
    ),
    BarcodeFamily.EAN13_WEIGHT: BarcodeFieldConfig(
        prefix="22",
        fields=(
            FieldSpec("productCode", "Код товара (5)", 5),
            FieldSpec("weight", "Вес (5)", 5),
        ),
        render_format=BarcodeFormat.EAN13,
        checksum=ChecksumAlgorithm.EAN13,
        description="EAN-13 весовой - 13 символов",
    ),
}


def compute_check_digit(payload: str, config: BarcodeFieldConfig) -> str:
    if config.checksum is ChecksumAlgorithm.FIXED:
        return config.fixed_control_digit or CAS_CONTROL_DIGIT
    if config.checksum is ChecksumAlgorithm.EAN13:
        return str(ean13_checksum(payload))
    return str(mod10_digit_sum(payload))


def generate_weight_barcode(
    prefix: Union[WeightPrefix, str],
    plu: Union[str, int],
    weight: int,
    discount: Optional[int] = None,
) -> WeightBarcode:
    """
    Weight barcode for the weight carousel.

    - 77: CAS, 77 + PLU(6) + weight(7) + '0' = 16, CODE128
    - 49: 49 + PLU(9) + discount(2) + weight(5) + mod10 = 19, CODE128
    - 22 (and anything else): 22 + PLU(5) + weight(5) + EAN-13 = 13, EAN13

    Fields are padded permissively (see ``zero_pad``); ``weight`` is in grams,
    ``discount`` in percent and only used for prefix 49.
    """
    prefix_value = prefix.value if isinstance(prefix, WeightPrefix) else str(prefix)

    if prefix_value == WeightPrefix.CAS.value:
        payload = WeightPrefix.CAS.value + zero_pad(plu, 6) + zero_pad(weight, 7)
        ctrl = CAS_CONTROL_DIGIT
        fmt = BarcodeFormat.CODE128
    elif prefix_value == WeightPrefix.DISCOUNT_WEIGHT.value:
        payload = (
            WeightPrefix.DISCOUNT_WEIGHT.value
            + zero_pad(plu, 9)
            + zero_pad(discount or 0, 2)
            + zero_pad(weight, 5)
        )
        ctrl = str(mod10_digit_sum(payload))
        fmt = BarcodeFormat.CODE128
    else:
        if prefix_value != WeightPrefix.EAN13_WEIGHT.value:
            logger.warning("Unknown weight prefix %r, using EAN-13 weight layout", prefix_value)
        payload = WeightPrefix.EAN13_WEIGHT.value + zero_pad(plu, 5) + zero_pad(weight, 5)
        ctrl = str(ean13_checksum(payload))
        fmt = BarcodeFormat.EAN13

    logger.debug("Weight barcode %s%s (prefix %s)", payload, ctrl, prefix_value)
    return WeightBarcode(
        code=payload + ctrl,
        format=fmt,
        weight=weight,
        plu=str(plu),
        prefix=prefix_value,
        discount=discount,
    )


def _resolve_family(family: Union[BarcodeFamily, str]) -> BarcodeFieldConfig:
    try:
        return FIELD_CONFIGS[BarcodeFamily(family)]
    except ValueError as e:
        logger.error("Unknown barcode family %r", family)
        raise BarcodeGenError(f"Unknown barcode family: {family!r}") from e


def validate_field_values(
    family: Union[BarcodeFamily, str], values: Mapping[str, Any]
) -> ValidationResult:
    """Per-field width check for the manual barcode form. Never raises on bad values."""
    config = _resolve_family(family)
    validator = FormValidator({f.name: ["numeric", max_digits(f.length)] for f in config.fields})
    return validator.validate(dict(values))


def generate_from_field_config(
    family: Union[BarcodeFamily, str],
    values: Mapping[str, Any],
    simulate_error: bool = False,
    rng: Optional[random.Random] = None,
) -> EncodedCode:
    """
    Build a code for one of the five configured families from form values.

    Missing values count as empty and pad to zeros. With ``simulate_error``
    a family without a fixed control digit gets a different, wrong check
    digit so a scanner can be shown rejecting it.

    Raises:
        FieldValidationError: a field has more digits than its width.
        BarcodeGenError: unknown family id.

    Example:
        >>> generate_from_field_config("code128_16_cas", {"productCode": "1", "weight": "2500"}).code
        '7700000100025000'
    """
    config = _resolve_family(family)
    result = validate_field_values(family, values)
    if not result.ok:
        logger.warning("Barcode form rejected: %s", result.by_field())
        raise FieldValidationError(result)

    payload = config.prefix + "".join(
        zero_pad(values.get(f.name) or "", f.length) for f in config.fields
    )
    ctrl = compute_check_digit(payload, config)

    if simulate_error and config.fixed_control_digit is None:
        source: Any = rng if rng is not None else random
        bad = ctrl
        while bad == ctrl:
            bad = str(source.randrange(10))
        logger.info("Simulated check digit error: %s -> %s", ctrl, bad)
        ctrl = bad

    return EncodedCode(code=payload + ctrl, format=config.render_format)


def generate_simple(value: str, format: Union[BarcodeFormat, str]) -> EncodedCode:
    """
    Pass-through generator with EAN-13 auto-completion.

    A 12-digit EAN13 value gets its check digit appended; anything else is
    returned trimmed and unchanged.

    Example:
        >>> generate_simple("590123412345", "EAN13").code
        '5901234123457'
    """
    try:
        fmt = BarcodeFormat(format)
    except ValueError as e:
        raise BarcodeGenError(f"Unsupported barcode format: {format!r}") from e
    code = value.strip()
    if fmt is BarcodeFormat.EAN13 and len(code) == 12 and digits_only(code) == code:
        code += str(ean13_checksum(code))
    return EncodedCode(code=code, format=fmt)

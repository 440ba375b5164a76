"""
RU: Генерация строк элементов GS1 для DataMatrix по шаблонам "Тип 1" и "Тип 2".
EN: GS1 element strings for DataMatrix label templates.

Layout (``<GS>`` is ASCII 0x1D, terminating a variable-length field):

    Type 1 (tobacco/water), 32 chars:
        01 <GTIN14> 21 <serial 7: '0' + 6 alnum> <GS> 93 <4 base64-ish>
    Type 2 (apparel/footwear), 85 chars:
        01 <GTIN14> 21 <serial 13: '5' + 12 alnum> <GS> 91 <4 hex> <GS> 92 <44 base64-ish>

Both generators are total over any string input: non-digits in the GTIN are
stripped by ``pad_gtin14``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, Final, Optional, Union

from bargen.model.enums import TemplateId

from .errors import BarcodeGenError
from .padding import pad_gtin14
from .tokens import generate_serial, random_base64, random_hex

logger = logging.getLogger(__name__)

__all__ = [
    "GS",
    "AI_GTIN",
    "AI_SERIAL",
    "DataMatrixTemplate",
    "TEMPLATES",
    "generate_type1",
    "generate_type2",
    "encode_datamatrix",
    "resolve_template",
]

GS: Final[str] = "\x1d"

# GS1 Application Identifiers
AI_GTIN: Final[str] = "01"
AI_SERIAL: Final[str] = "21"
AI_CHECK_KEY: Final[str] = "91"
AI_CRYPTO: Final[str] = "92"
AI_CRYPTO_SHORT: Final[str] = "93"

TYPE1_LENGTH: Final[int] = 32
TYPE2_LENGTH: Final[int] = 85


def generate_type1(gtin: str, rng: Optional[random.Random] = None) -> str:
    """Tobacco/water element string: GTIN, short serial, 4-char tail."""
    serial = generate_serial("0", 7, rng)
    tail = random_base64(4, rng)
    code = AI_GTIN + pad_gtin14(gtin) + AI_SERIAL + serial + GS + AI_CRYPTO_SHORT + tail
    logger.debug("Type 1 code generated for GTIN %r", gtin)
    return code


def generate_type2(gtin: str, rng: Optional[random.Random] = None) -> str:
    """Apparel/footwear element string: GTIN, long serial, hex key, 44-char tail."""
    serial = generate_serial("5", 13, rng)
    key = random_hex(4, rng)
    tail = random_base64(44, rng)
    code = (
        AI_GTIN
        + pad_gtin14(gtin)
        + AI_SERIAL
        + serial
        + GS
        + AI_CHECK_KEY
        + key
        + GS
        + AI_CRYPTO
        + tail
    )
    logger.debug("Type 2 code generated for GTIN %r", gtin)
    return code


@dataclass(frozen=True)
class DataMatrixTemplate:
    name: str
    description: str
    generate: Callable[..., str]


TEMPLATES: Final[Dict[TemplateId, DataMatrixTemplate]] = {
    TemplateId.TYPE1: DataMatrixTemplate(
        name=TemplateId.TYPE1.localized_name(),
        description="Табак/Вода - короткий серийник",
        generate=generate_type1,
    ),
    TemplateId.TYPE2: DataMatrixTemplate(
        name=TemplateId.TYPE2.localized_name(),
        description="Одежда/Обувь - длинный серийник",
        generate=generate_type2,
    ),
}


def resolve_template(template_id: Union[TemplateId, str]) -> TemplateId:
    try:
        return TemplateId(template_id)
    except ValueError as e:
        logger.error("Unknown DataMatrix template %r", template_id)
        raise BarcodeGenError(f"Unknown DataMatrix template: {template_id!r}") from e


def encode_datamatrix(
    gtin: str,
    template_id: Union[TemplateId, str] = TemplateId.TYPE1,
    rng: Optional[random.Random] = None,
) -> str:
    """Element string for ``gtin`` using the selected template.

    Raises:
        BarcodeGenError: unknown template id.
    """
    template = TEMPLATES[resolve_template(template_id)]
    return template.generate(gtin, rng)

"""
barcodegen

Кодировщики тестовых штрихкодов и адаптеры рендеринга.

- Строки элементов GS1 для DataMatrix (шаблоны "Тип 1" и "Тип 2").
- Весовые и штучные линейные коды с контрольной цифрой (77, 49, 44, 47, 22).
- Рендеринг: python-barcode для линейных кодов, treepoem для DataMatrix.

Public API:
    - encode_datamatrix, generate_type1, generate_type2: DataMatrix payloads
    - generate_weight_barcode, generate_from_field_config, generate_simple: linear codes
    - BarcodeRenderer: рендеринг EncodedCode в изображение (class)
    - DataMatrixRenderer: рендеринг DataMatrix (class)
    - BarcodeGenError, FieldValidationError, Matrix2DCodeGenError: исключения

Примеры:
    >>> from bargen.barcodegen import BarcodeRenderer, generate_simple
    >>> img = BarcodeRenderer(generate_simple("590123412345", "EAN13")).render_image()

Зависимости:
    Pillow, python-barcode, treepoem
"""

from bargen.barcodegen.barcode_generator import BarcodeRenderer, BarcodeRenderOptions
from bargen.barcodegen.datamatrix import (
    GS,
    TEMPLATES,
    encode_datamatrix,
    generate_type1,
    generate_type2,
)
from bargen.barcodegen.errors import BarcodeGenError, FieldValidationError
from bargen.barcodegen.linear import (
    FIELD_CONFIGS,
    generate_from_field_config,
    generate_simple,
    generate_weight_barcode,
    validate_field_values,
)
from bargen.barcodegen.matrix2d_generator import DataMatrixRenderer, Matrix2DCodeGenError

__all__ = [
    "GS",
    "TEMPLATES",
    "FIELD_CONFIGS",
    "encode_datamatrix",
    "generate_type1",
    "generate_type2",
    "generate_weight_barcode",
    "generate_from_field_config",
    "validate_field_values",
    "generate_simple",
    "BarcodeRenderer",
    "BarcodeRenderOptions",
    "DataMatrixRenderer",
    "BarcodeGenError",
    "FieldValidationError",
    "Matrix2DCodeGenError",
]

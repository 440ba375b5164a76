from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bargen.form.validation import ValidationResult

__all__ = ["BarcodeGenError", "FieldValidationError"]


class BarcodeGenError(Exception):
    """Barcode generation/validation error."""


class FieldValidationError(BarcodeGenError):
    """One or more form fields exceed their configured width.

    Attributes:
        result: per-field validation errors (``result.errors[i].field``).
    """

    def __init__(self, result: "ValidationResult") -> None:
        fields = ", ".join(e.field or "?" for e in result.errors)
        super().__init__(f"Field validation failed: {fields}")
        self.result = result

"""
validation.py: валидатор полей ручной формы штрихкода,
расширяемый механизм встроенных и кастомных правил.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from bargen.barcodegen.padding import digits_only


class ValidationError(Exception):
    """Ошибка валидации одного поля."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class Validator(Protocol):
    """Протокол валидатора поля: None если значение корректно, иначе текст ошибки."""

    def __call__(self, value: Any, context: Dict[str, Any]) -> Optional[str]: ...


class ValidationResult:
    """
    Результат валидации.
    errors: список ValidationError.
    """

    def __init__(self) -> None:
        self.errors: List[ValidationError] = []

    def add(self, error: ValidationError) -> None:
        self.errors.append(error)

    @property
    def ok(self) -> bool:
        return not self.errors

    def by_field(self) -> Dict[str, List[str]]:
        """Сообщения, сгруппированные по имени поля (для вывода под каждым полем)."""
        grouped: Dict[str, List[str]] = {}
        for e in self.errors:
            grouped.setdefault(e.field or "", []).append(str(e))
        return grouped


def numeric_text(value: Any, context: Dict[str, Any]) -> Optional[str]:
    """Текст или число; нецифровые символы потом отбрасываются, не ошибка."""
    if value is not None and not isinstance(value, (str, int, float)):
        return "Value must be text or a number."
    return None


def max_digits(max_len: int) -> Validator:
    """Цифр (после удаления нецифровых символов) не больше max_len."""

    def validator(value: Any, context: Dict[str, Any]) -> Optional[str]:
        if value is None:
            return None
        if len(digits_only(value)) > max_len:
            return f"Максимум {max_len} цифр"
        return None

    return validator


BUILTIN_VALIDATORS: Dict[str, Callable[[Any, Dict[str, Any]], Optional[str]]] = {
    "numeric": numeric_text,
}


class FormValidator:
    """
    Валидатор значений формы по схеме.
    Проверяет каждое поле схемы; лишние поля по желанию считаются ошибкой.
    """

    def __init__(
        self,
        schema: Dict[str, List[Union[str, Validator]]],
        allow_extra: bool = True,
        stop_on_error: bool = False,
    ):
        """
        schema: mapping field -> список имен builtin validators или callable.
        Пример:
            {
                "productCode": ["numeric", max_digits(9)],
                "weight": ["numeric", max_digits(5)],
            }
        """
        self.schema = schema
        self.allow_extra = allow_extra
        self.stop_on_error = stop_on_error

    def validate(
        self, data: Dict[str, Any], context: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        result = ValidationResult()
        ctx = dict(context) if context else dict(data)
        for field, rules in self.schema.items():
            value = data.get(field)
            for rule in rules:
                if isinstance(rule, str):
                    validator = BUILTIN_VALIDATORS[rule]
                else:
                    validator = rule
                msg = validator(value, ctx)
                if msg:
                    result.add(ValidationError(msg, field=field))
                    if self.stop_on_error:
                        return result
                    break
        if not self.allow_extra:
            extra = sorted(set(data.keys()) - set(self.schema.keys()))
            for k in extra:
                result.add(ValidationError(f"Extra field: {k}", field=k))
        return result

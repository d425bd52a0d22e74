"""
Term — Дерево алгебраического терма

Immutable Pydantic модели (discriminated union по полю kind):
- Value: лист с конкретным числом
- Variable: лист с несвязанным именем
- Addition, Multiplication, Exponentiation, RootExtraction: бинарные узлы

Операции:
- has_bound_value: в дереве нет достижимых Variable
- substitute: замена Variable(name) на Value(value), возвращает новое дерево
- evaluate: свёртка полностью связанного дерева в Number (None если есть
  свободные переменные)

Деревья никогда не изменяются на месте, поэтому неизменённые поддеревья
разделяются между исходным и новым деревом.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from src.core.domain.number import (
    Number,
    NumericValue,
    add,
    as_number,
    multiply,
    power,
    reciprocal,
)

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


class MultiplicationMode(str, Enum):
    """Как вычисляются узлы Multiplication.

    - MULTIPLY: произведение операндов
    - LEGACY_ADDITION: сумма операндов (прежнее ошибочное поведение),
      только для сравнения результатов
    """

    MULTIPLY = "MULTIPLY"
    LEGACY_ADDITION = "LEGACY_ADDITION"


@dataclass(frozen=True)
class EvaluationConfig:
    """Конфигурация свёртки терма."""

    multiplication_mode: MultiplicationMode = MultiplicationMode.MULTIPLY


DEFAULT_EVALUATION_CONFIG = EvaluationConfig()


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TermInvariantViolation(RuntimeError):
    """
    Свёртка дошла до Variable, хотя has_bound_value вернул True.

    Внутренняя ошибка: has_bound_value и свёртка обходят дерево одинаково,
    поэтому это состояние недостижимо для корректных моделей.
    """

    pass


# =============================================================================
# MODELS
# =============================================================================


class Term(BaseModel):
    """Базовый класс узла терма."""

    model_config = {"frozen": True}

    def has_bound_value(self) -> bool:
        raise NotImplementedError

    def free_variables(self) -> frozenset[str]:
        raise NotImplementedError

    def substitute(self, name: str, value: Any) -> "Term":
        raise NotImplementedError

    def evaluate(self, config: Optional[EvaluationConfig] = None) -> Optional[Number]:
        """
        Значение терма, или None если остались свободные переменные.

        Raises:
            ZeroReciprocalError: корень нулевой степени, 0 ** (отрицательное)
            ExponentOutOfRangeError: целый показатель вне i32
            NumericDomainError: неопределённая float-степень
        """
        if not self.has_bound_value():
            logger.debug(f"Term has free variables {sorted(self.free_variables())}")
            return None

        result = self._collapse(config or DEFAULT_EVALUATION_CONFIG)
        logger.debug(f"Evaluated {self.kind} term to {result!r}")
        return result

    def _collapse(self, config: EvaluationConfig) -> Number:
        raise NotImplementedError


class Value(Term):
    """Лист с конкретным числом. Принимает Number, int, float или Fraction."""

    kind: Literal["value"] = "value"
    value: NumericValue

    def __init__(self, value: Any, **data: Any) -> None:
        super().__init__(value=value, **data)

    @field_validator("value", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Any:
        if isinstance(v, (int, float, Fraction)) and not isinstance(v, bool):
            return as_number(v)
        return v

    def has_bound_value(self) -> bool:
        return True

    def free_variables(self) -> frozenset[str]:
        return frozenset()

    def substitute(self, name: str, value: Any) -> Term:
        return self

    def _collapse(self, config: EvaluationConfig) -> Number:
        return self.value


class Variable(Term):
    """Лист с несвязанным именем."""

    kind: Literal["variable"] = "variable"
    name: str = Field(..., min_length=1, description="Имя переменной")

    def __init__(self, name: str, **data: Any) -> None:
        super().__init__(name=name, **data)

    def has_bound_value(self) -> bool:
        return False

    def free_variables(self) -> frozenset[str]:
        return frozenset({self.name})

    def substitute(self, name: str, value: Any) -> Term:
        if self.name != name:
            return self
        return Value(as_number(value))

    def _collapse(self, config: EvaluationConfig) -> Number:
        raise TermInvariantViolation(
            f"Variable '{self.name}' reached during evaluation of a bound term"
        )


class BinaryTerm(Term):
    """
    Бинарный узел, владеющий двумя поддеревьями.

    Подклассы задают имена полей операндов (operand_fields) и операцию над
    значениями операндов (_combine).
    """

    operand_fields: ClassVar[tuple[str, str]] = ("left", "right")

    def operands(self) -> tuple[Term, Term]:
        first, second = self.operand_fields
        return getattr(self, first), getattr(self, second)

    def has_bound_value(self) -> bool:
        first, second = self.operands()
        return first.has_bound_value() and second.has_bound_value()

    def free_variables(self) -> frozenset[str]:
        first, second = self.operands()
        return first.free_variables() | second.free_variables()

    def substitute(self, name: str, value: Any) -> Term:
        number = as_number(value)
        first, second = self.operands()
        new_first = first.substitute(name, number)
        new_second = second.substitute(name, number)
        if new_first is first and new_second is second:
            return self
        return type(self)(new_first, new_second)

    def _collapse(self, config: EvaluationConfig) -> Number:
        first, second = self.operands()
        return self._combine(first._collapse(config), second._collapse(config), config)

    def _combine(self, first: Number, second: Number, config: EvaluationConfig) -> Number:
        raise NotImplementedError


class Addition(BinaryTerm):
    """left + right"""

    kind: Literal["addition"] = "addition"
    left: "AnyTerm"
    right: "AnyTerm"

    def __init__(self, left: Term, right: Term, **data: Any) -> None:
        super().__init__(left=left, right=right, **data)

    def _combine(self, first: Number, second: Number, config: EvaluationConfig) -> Number:
        return add(first, second)


class Multiplication(BinaryTerm):
    """left * right (или left + right в режиме LEGACY_ADDITION)"""

    kind: Literal["multiplication"] = "multiplication"
    left: "AnyTerm"
    right: "AnyTerm"

    def __init__(self, left: Term, right: Term, **data: Any) -> None:
        super().__init__(left=left, right=right, **data)

    def _combine(self, first: Number, second: Number, config: EvaluationConfig) -> Number:
        if config.multiplication_mode is MultiplicationMode.LEGACY_ADDITION:
            return add(first, second)
        return multiply(first, second)


class Exponentiation(BinaryTerm):
    """base ** power"""

    kind: Literal["exponentiation"] = "exponentiation"
    base: "AnyTerm"
    power: "AnyTerm"

    operand_fields: ClassVar[tuple[str, str]] = ("base", "power")

    def __init__(self, base: Term, power: Term, **data: Any) -> None:
        super().__init__(base=base, power=power, **data)

    def _combine(self, first: Number, second: Number, config: EvaluationConfig) -> Number:
        return power(first, second)


class RootExtraction(BinaryTerm):
    """Корень степени degree из radicand: radicand ** (1 / degree)"""

    kind: Literal["root_extraction"] = "root_extraction"
    radicand: "AnyTerm"
    degree: "AnyTerm"

    operand_fields: ClassVar[tuple[str, str]] = ("radicand", "degree")

    def __init__(self, radicand: Term, degree: Term, **data: Any) -> None:
        super().__init__(radicand=radicand, degree=degree, **data)

    def _combine(self, first: Number, second: Number, config: EvaluationConfig) -> Number:
        return power(first, reciprocal(second))


AnyTerm = Annotated[
    Union[Value, Variable, Addition, Multiplication, Exponentiation, RootExtraction],
    Field(discriminator="kind"),
]

for _model in (Addition, Multiplication, Exponentiation, RootExtraction):
    _model.model_rebuild()

_TERM_ADAPTER: TypeAdapter[Term] = TypeAdapter(AnyTerm)


# =============================================================================
# FUNCTIONS
# =============================================================================


def parse_term(data: Any) -> Term:
    """
    Разбор терма из dict (формат model_dump).

    Raises:
        pydantic.ValidationError: структура не соответствует модели
    """
    return _TERM_ADAPTER.validate_python(data)


def has_bound_value(term: Term) -> bool:
    return term.has_bound_value()


def substitute(term: Term, name: str, value: Any) -> Term:
    return term.substitute(name, value)


def substitute_all(term: Term, bindings: Mapping[str, Any]) -> Term:
    """Последовательная подстановка всех пар name → value из bindings."""
    for name, value in bindings.items():
        term = term.substitute(name, value)
    logger.debug(f"Substituted {sorted(bindings)}")
    return term


def evaluate(term: Term, config: Optional[EvaluationConfig] = None) -> Optional[Number]:
    return term.evaluate(config)

"""
Number — Числовое значение терма (Rational | Irrational)

Immutable Pydantic модели:
- Rational: точная несократимая дробь numerator/denominator в пределах i64
- Irrational: приближённое float-значение

Арифметика (add, multiply, power, reciprocal) сохраняет точность, пока оба
операнда Rational, и переходит к float, как только точность сохранить нельзя.

ВАЖНО: равенство чувствительно к варианту. Rational и Irrational НИКОГДА не
равны друг другу, даже Rational(1) и Irrational(1.0). Числовое сравнение
между вариантами выполняется явно через float(a) == float(b).
"""

import logging
from fractions import Fraction
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator

from src.core.math.approximation import approximate_float
from src.core.math.numerical_safeguards import (
    I64_MAX,
    I64_MIN,
    ExponentOutOfRangeError,
    ZeroReciprocalError,
    fits_i32,
    fits_i64,
    integer_power_may_fit_i64,
    safe_float_pow,
    safe_float_reciprocal,
)

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================


class Number(BaseModel):
    """
    Общий интерфейс числового значения.

    Операторы +, * и ** эквивалентны add, multiply и power.
    """

    model_config = {"frozen": True}

    def add(self, other: "Number") -> "Number":
        return add(self, other)

    def multiply(self, other: "Number") -> "Number":
        return multiply(self, other)

    def power(self, exponent: "Number") -> "Number":
        return power(self, exponent)

    def reciprocal(self) -> "Number":
        return reciprocal(self)

    def to_float(self) -> float:
        return float(self)

    def __add__(self, other: Any) -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return add(self, other)

    def __mul__(self, other: Any) -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return multiply(self, other)

    def __pow__(self, other: Any) -> "Number":
        if not isinstance(other, Number):
            return NotImplemented
        return power(self, other)


class Rational(Number):
    """
    Точная дробь.

    Всегда хранится в несократимом виде со знаменателем > 0:
    Rational(170, 100) == Rational(17, 10), Rational(1, -2) хранится как -1/2.
    Нулевой знаменатель отклоняется при создании (ValidationError).
    """

    kind: Literal["rational"] = "rational"
    numerator: int = Field(..., strict=True, ge=I64_MIN, le=I64_MAX, description="Числитель")
    denominator: int = Field(
        default=1, strict=True, gt=0, le=I64_MAX, description="Знаменатель (> 0)"
    )

    def __init__(self, numerator: int, denominator: int = 1, **data: Any) -> None:
        super().__init__(numerator=numerator, denominator=denominator, **data)

    @model_validator(mode="before")
    @classmethod
    def normalize_fraction(cls, data: Any) -> Any:
        """Сокращение дроби и перенос знака в числитель."""
        if not isinstance(data, dict):
            return data

        numerator = data.get("numerator")
        denominator = data.get("denominator", 1)
        if not _is_plain_int(numerator) or not _is_plain_int(denominator):
            return data

        if denominator == 0:
            raise ValueError(f"denominator must be non-zero (numerator={numerator})")

        fraction = Fraction(numerator, denominator)
        return {
            **data,
            "numerator": fraction.numerator,
            "denominator": fraction.denominator,
        }

    @classmethod
    def from_fraction(cls, fraction: Fraction) -> Number:
        """
        Rational из Fraction, либо Irrational если дробь не помещается в i64.
        """
        if fits_i64(fraction.numerator) and fits_i64(fraction.denominator):
            return cls(fraction.numerator, fraction.denominator)

        logger.debug(f"Exact result {fraction} exceeds 64-bit rational, using float")
        return Irrational(float(fraction))

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def is_integer(self) -> bool:
        return self.denominator == 1

    def __float__(self) -> float:
        return self.numerator / self.denominator

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return (self.numerator, self.denominator) == (other.numerator, other.denominator)
        if isinstance(other, Number):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.kind, self.numerator, self.denominator))

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"


class Irrational(Number):
    """
    Приближённое значение (float).

    Используется, когда точность сохранить нельзя: дробный показатель степени,
    операнд-Irrational, float без точного представления отношением i64.
    """

    kind: Literal["irrational"] = "irrational"
    value: float = Field(..., description="Приближённое значение")

    def __init__(self, value: float, **data: Any) -> None:
        super().__init__(value=value, **data)

    def __float__(self) -> float:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Irrational):
            return self.value == other.value
        if isinstance(other, Number):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __str__(self) -> str:
        return repr(self.value)


# Discriminated union для полей моделей и разбора документов
NumericValue = Annotated[Union[Rational, Irrational], Field(discriminator="kind")]


# =============================================================================
# CONSTRUCTION
# =============================================================================


def from_ratio(numerator: int, denominator: int = 1) -> Rational:
    """Точное значение numerator/denominator."""
    return Rational(numerator, denominator)


def from_float(value: float) -> Number:
    """
    Число из float-литерала.

    Сначала пытается восстановить точную дробь (0.5 → 1/2, 1.2 → 6/5);
    Irrational только если это невозможно (NaN, Inf, |value| > I64_MAX).

    Examples:
        >>> from_float(1.2)
        Rational(kind='rational', numerator=6, denominator=5)
        >>> from_float(float('inf'))
        Irrational(kind='irrational', value=inf)
    """
    ratio = approximate_float(value)
    if ratio is None:
        return Irrational(value)
    return Rational(*ratio)


def as_number(raw: Any) -> Number:
    """
    Приведение «сырого» значения к Number.

    - Number → без изменений
    - int → Rational(n, 1)
    - Fraction → Rational (или Irrational вне i64)
    - float → from_float

    Raises:
        TypeError: неподдерживаемый тип (включая bool)
    """
    if isinstance(raw, Number):
        return raw
    if _is_plain_int(raw):
        return Rational(raw)
    if isinstance(raw, Fraction):
        return Rational.from_fraction(raw)
    if isinstance(raw, float):
        return from_float(raw)
    raise TypeError(f"Cannot convert {type(raw).__name__} to a numeric value")


def _is_plain_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# ARITHMETIC
# =============================================================================


def add(a: Number, b: Number) -> Number:
    """
    Сумма. Оба Rational → точная дробь; иначе Irrational(float(a) + float(b)).
    """
    if isinstance(a, Rational) and isinstance(b, Rational):
        return Rational.from_fraction(a.as_fraction() + b.as_fraction())
    return Irrational(float(a) + float(b))


def multiply(a: Number, b: Number) -> Number:
    """
    Произведение. Правило точности то же, что у add.
    """
    if isinstance(a, Rational) and isinstance(b, Rational):
        return Rational.from_fraction(a.as_fraction() * b.as_fraction())
    return Irrational(float(a) * float(b))


def power(base: Number, exponent: Number) -> Number:
    """
    Степень base ** exponent.

    - Rational ** целый Rational → точный результат
    - иначе → Irrational(float(base) ** float(exponent))

    Raises:
        ExponentOutOfRangeError: целый показатель вне диапазона i32
        ZeroReciprocalError: 0 ** (отрицательное целое)
        NumericDomainError: float-степень не определена или переполняется

    Examples:
        >>> power(Rational(2), Rational(3))
        Rational(kind='rational', numerator=8, denominator=1)
        >>> power(Rational(2), Rational(1, 2))
        Irrational(kind='irrational', value=1.4142135623730951)
    """
    if isinstance(base, Rational) and isinstance(exponent, Rational) and exponent.is_integer():
        return _rational_integer_power(base, exponent.numerator)
    return Irrational(safe_float_pow(float(base), float(exponent)))


def _rational_integer_power(base: Rational, exponent: int) -> Number:
    if not fits_i32(exponent):
        raise ExponentOutOfRangeError(
            f"Exponent {exponent} does not fit a signed 32-bit integer"
        )

    if base.numerator == 0 and exponent < 0:
        raise ZeroReciprocalError(f"0 ** {exponent} requires the reciprocal of zero")

    if not integer_power_may_fit_i64(base.numerator, base.denominator, exponent):
        logger.debug(f"({base}) ** {exponent} exceeds 64-bit rational, using float")
        return Irrational(safe_float_pow(float(base), float(exponent)))

    return Rational.from_fraction(base.as_fraction() ** exponent)


def reciprocal(value: Number) -> Number:
    """
    Обратное значение 1 / value.

    Raises:
        ZeroReciprocalError: value точно равен нулю (Rational 0 или float 0.0)
    """
    if isinstance(value, Rational):
        if value.numerator == 0:
            raise ZeroReciprocalError("Reciprocal of zero is undefined")
        return Rational.from_fraction(1 / value.as_fraction())
    return Irrational(safe_float_reciprocal(float(value)))

"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость арифметики над термами:
- Границы 64-битных и 32-битных целых (модель Rational хранит i64)
- Проверка валидности float (NaN/Inf)
- Безопасное возведение в степень и обращение float с явными ошибками
- Оценка, поместится ли точный результат целой степени в i64

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит молча (ZeroReciprocalError)
2. Неопределённая float-степень никогда не возвращает complex или мусор
   (NumericDomainError)
3. Целочисленный показатель степени всегда в диапазоне i32
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ГРАНИЦЫ ЦЕЛЫХ
# =============================================================================

# Диапазон числителя/знаменателя Rational
I64_MIN: Final[int] = -(2**63)
I64_MAX: Final[int] = 2**63 - 1

# Диапазон целочисленного показателя точной степени
I32_MIN: Final[int] = -(2**31)
I32_MAX: Final[int] = 2**31 - 1

# float(I64_MAX) округляется до 2**63, поэтому сравнение строгое
I64_MAX_FLOAT: Final[float] = float(I64_MAX)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumericError(ArithmeticError):
    """Базовая ошибка числовой модели (Rational/Irrational)."""

    pass


class ExponentOutOfRangeError(NumericError):
    """
    Целочисленный показатель точной степени вне диапазона i32.

    Возникает только на точном пути (Rational ** Rational с знаменателем 1).
    Вызывающий код может перехватить ошибку и перейти к float-вычислению сам.
    """

    pass


class ZeroReciprocalError(NumericError, ZeroDivisionError):
    """
    Обращение точного нуля: reciprocal(0) или 0 ** (отрицательное целое).

    Корень нулевой степени сводится к этой же ошибке, так как
    radicand ** (1 / degree) требует reciprocal(degree).
    """

    pass


class NumericDomainError(NumericError, ValueError):
    """
    float-степень не определена или переполняется.

    Например: (-8.0) ** (1/3), 0.0 ** -1.0, 10.0 ** 400.0.
    """

    pass


# =============================================================================
# ПРОВЕРКИ ДИАПАЗОНОВ
# =============================================================================


def fits_i64(value: int) -> bool:
    """True если value помещается в знаковое 64-битное целое."""
    return I64_MIN <= value <= I64_MAX


def fits_i32(value: int) -> bool:
    """True если value помещается в знаковое 32-битное целое."""
    return I32_MIN <= value <= I32_MAX


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def integer_power_may_fit_i64(numerator: int, denominator: int, exponent: int) -> bool:
    """
    Быстрая оценка: может ли (numerator/denominator) ** exponent уместиться в i64.

    Для |c| >= 2 выполняется |c| >= 2**(bits - 1), поэтому
    |c| ** |e| >= 2**((bits - 1) * |e|). Если эта нижняя граница уже больше
    2**63, точный результат заведомо не помещается и вычислять огромные
    целые не нужно.

    Args:
        numerator: Числитель основания
        denominator: Знаменатель основания (> 0)
        exponent: Целочисленный показатель (любого знака)

    Returns:
        False если результат гарантированно не помещается в i64,
        True если может поместиться (окончательная проверка после вычисления)

    Examples:
        >>> integer_power_may_fit_i64(2, 1, 62)
        True
        >>> integer_power_may_fit_i64(2, 1, 64)
        False
        >>> integer_power_may_fit_i64(1, 1, 2**31 - 1)
        True
    """
    magnitude = abs(exponent)
    for component in (numerator, denominator):
        bits = abs(component).bit_length()
        if bits > 1 and (bits - 1) * magnitude > 63:
            return False
    return True


# =============================================================================
# БЕЗОПАСНЫЕ FLOAT-ОПЕРАЦИИ
# =============================================================================


def safe_float_pow(base: float, exponent: float) -> float:
    """
    Возведение float в степень с явной ошибкой вместо complex/исключений math.

    Встроенный оператор ** для отрицательного основания и дробного показателя
    возвращает complex, поэтому используется math.pow.

    Args:
        base: Основание
        exponent: Показатель

    Returns:
        base ** exponent

    Raises:
        NumericDomainError: результат не определён в вещественных числах
            или переполняет float

    Examples:
        >>> safe_float_pow(2.0, 0.5)
        1.4142135623730951
        >>> safe_float_pow(-8.0, 1.0 / 3.0)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        NumericDomainError: ...
    """
    try:
        return math.pow(base, exponent)
    except ValueError as e:
        raise NumericDomainError(
            f"{base!r} ** {exponent!r} is undefined over the reals"
        ) from e
    except OverflowError as e:
        raise NumericDomainError(f"{base!r} ** {exponent!r} overflows float") from e


def safe_float_reciprocal(value: float) -> float:
    """
    Обращение float: 1 / value.

    Args:
        value: Обращаемое значение

    Returns:
        1.0 / value

    Raises:
        ZeroReciprocalError: если value точно равен нулю (включая -0.0)
    """
    if value == 0.0:
        raise ZeroReciprocalError("Reciprocal of zero is undefined")
    return 1.0 / value

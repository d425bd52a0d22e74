"""
Approximation — восстановление точной дроби из float

Перевод float → Rational выполняется алгоритмом цепных дробей:
- числитель и знаменатель ограничены i64
- итерации прекращаются, когда |n/d - value| < RATIO_MAX_ERROR
- не более RATIO_MAX_ITERATIONS подходящих дробей

Так литерал 1.2 становится 6/5, а не 5404319552844595/4503599627370496
(точное двоичное значение float).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN, ±Inf и |value| > I64_MAX не восстанавливаются (None)
2. Возвращаемая дробь всегда несократима, знаменатель > 0
3. Результат детерминирован для данного float
"""

import math
from typing import Final

from src.core.math.numerical_safeguards import I64_MAX, I64_MAX_FLOAT

# =============================================================================
# ПАРАМЕТРЫ ЦЕПНЫХ ДРОБЕЙ
# =============================================================================

# Максимальная абсолютная погрешность подходящей дроби
RATIO_MAX_ERROR: Final[float] = 10e-20

# Максимальное число подходящих дробей
RATIO_MAX_ITERATIONS: Final[int] = 30


def approximate_float(
    value: float,
    max_error: float = RATIO_MAX_ERROR,
    max_iterations: int = RATIO_MAX_ITERATIONS,
) -> tuple[int, int] | None:
    """
    Ближайшая простая дробь n/d (n, d в i64) для value.

    Args:
        value: Исходный float
        max_error: Допустимая абсолютная погрешность
        max_iterations: Лимит подходящих дробей

    Returns:
        (numerator, denominator) с denominator > 0, или None если value
        нельзя выразить отношением 64-битных целых

    Examples:
        >>> approximate_float(0.5)
        (1, 2)
        >>> approximate_float(1.2)
        (6, 5)
        >>> approximate_float(-0.75)
        (-3, 4)
        >>> approximate_float(float('nan')) is None
        True
    """
    if math.isnan(value):
        return None

    negative = math.copysign(1.0, value) < 0
    ratio = _approximate_unsigned(abs(value), max_error, max_iterations)
    if ratio is None:
        return None

    numerator, denominator = ratio
    if negative:
        numerator = -numerator
    return numerator, denominator


def _approximate_unsigned(
    value: float, max_error: float, max_iterations: int
) -> tuple[int, int] | None:
    if value > I64_MAX_FLOAT:
        return None

    # 1/epsilon > I64_MAX
    epsilon = 1.0 / I64_MAX_FLOAT

    q = value
    n0, d0 = 0, 1
    n1, d1 = 1, 0

    for _ in range(max_iterations):
        if q >= I64_MAX_FLOAT:
            break
        a = int(q)
        f = q - float(a)

        # Следующая подходящая дробь переполнила бы i64
        if a != 0 and (
            n1 > I64_MAX // a
            or d1 > I64_MAX // a
            or a * n1 > I64_MAX - n0
            or a * d1 > I64_MAX - d0
        ):
            break

        n = a * n1 + n0
        d = a * d1 + d0
        n0, d0 = n1, d1
        n1, d1 = n, d

        g = math.gcd(n1, d1)
        if g != 0:
            n1 //= g
            d1 //= g

        if abs(float(n) / float(d) - value) < max_error:
            break

        if f < epsilon:
            break
        q = 1.0 / f

    if d1 == 0:
        return None
    return n1, d1

"""
Тесты для Number — Rational / Irrational

Проверяемые инварианты:
1. Rational всегда несократим, знаменатель > 0, нулевой знаменатель отклоняется
2. Равенство чувствительно к варианту (Rational != Irrational всегда)
3. Точность сохраняется только для Rational-операндов
4. Ошибки степени и обращения явные (ExponentOutOfRangeError, ZeroReciprocalError)
5. float → Number сначала пытается восстановить точную дробь
"""

import logging
import math
from fractions import Fraction

import pytest
from pydantic import ValidationError

from src.core.domain.number import (
    Irrational,
    Rational,
    add,
    as_number,
    from_float,
    from_ratio,
    multiply,
    power,
    reciprocal,
)
from src.core.math.numerical_safeguards import (
    I32_MAX,
    I32_MIN,
    I64_MAX,
    I64_MIN,
    ExponentOutOfRangeError,
    NumericDomainError,
    ZeroReciprocalError,
)

# =============================================================================
# ТЕСТЫ: Construction
# =============================================================================


class TestRationalConstruction:
    """Тесты нормализации и валидации Rational."""

    def test_reduced_form(self):
        r = Rational(170, 100)
        assert (r.numerator, r.denominator) == (17, 10)
        assert r == Rational(17, 10)

    def test_sign_moves_to_numerator(self):
        r = Rational(1, -2)
        assert (r.numerator, r.denominator) == (-1, 2)

        r = Rational(-3, -6)
        assert (r.numerator, r.denominator) == (1, 2)

    def test_zero_normalized(self):
        r = Rational(0, 5)
        assert (r.numerator, r.denominator) == (0, 1)

    def test_default_denominator(self):
        assert Rational(5).denominator == 1
        assert Rational(5).is_integer()
        assert not Rational(5, 2).is_integer()

    def test_zero_denominator_rejected(self):
        with pytest.raises(ValidationError, match="denominator must be non-zero"):
            Rational(1, 0)

    def test_out_of_i64_rejected(self):
        with pytest.raises(ValidationError):
            Rational(I64_MAX + 1)

        with pytest.raises(ValidationError):
            Rational(1, I64_MAX + 1)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError):
            Rational(1.5)

        with pytest.raises(ValidationError):
            Rational(True)

    def test_keyword_and_dict_construction(self):
        assert Rational(numerator=2, denominator=4) == Rational(1, 2)
        assert Rational.model_validate({"numerator": 2, "denominator": -4}) == Rational(-1, 2)

    def test_frozen(self):
        r = Rational(1, 2)
        with pytest.raises(ValidationError):
            r.numerator = 3

    def test_from_fraction_beyond_i64_degrades(self):
        value = Rational.from_fraction(Fraction(2**64, 3))
        assert isinstance(value, Irrational)
        assert value.value == pytest.approx(2**64 / 3)


class TestConversions:
    """Тесты from_float / from_ratio / as_number / float()."""

    def test_reference_literals(self):
        assert from_float(0.5) == Rational(1, 2)
        assert from_float(1.2) == Rational(6, 5)

    def test_non_finite_becomes_irrational(self):
        nan = from_float(float("nan"))
        assert isinstance(nan, Irrational)
        assert math.isnan(nan.value)

        assert from_float(float("inf")) == Irrational(float("inf"))

    def test_from_ratio(self):
        assert from_ratio(6, 4) == Rational(3, 2)

    def test_as_number(self):
        r = Rational(1, 3)
        assert as_number(r) is r
        assert as_number(3) == Rational(3)
        assert as_number(Fraction(3, 4)) == Rational(3, 4)
        assert as_number(0.25) == Rational(1, 4)

    def test_as_number_rejects_unsupported(self):
        with pytest.raises(TypeError):
            as_number(True)

        with pytest.raises(TypeError):
            as_number("1")

    def test_to_float(self):
        assert float(Rational(1, 4)) == 0.25
        assert Rational(-3, 2).to_float() == -1.5
        assert float(Irrational(2.5)) == 2.5

    def test_str(self):
        assert str(Rational(17, 10)) == "17/10"
        assert str(Rational(3)) == "3"
        assert str(Irrational(0.5)) == "0.5"


# =============================================================================
# ТЕСТЫ: Equality
# =============================================================================


class TestEquality:
    """Равенство чувствительно к варианту."""

    def test_rational_equality(self):
        assert Rational(1, 2) == Rational(2, 4)
        assert Rational(1, 2) != Rational(1, 3)

    def test_irrational_equality(self):
        assert Irrational(0.5) == Irrational(0.5)
        assert Irrational(0.5) != Irrational(0.25)

    def test_cross_variant_never_equal(self):
        """Rational и Irrational не равны, даже если числа совпадают."""
        assert Rational(1) != Irrational(1.0)
        assert Irrational(0.5) != Rational(1, 2)
        # Числовое сравнение выполняется явно
        assert float(Rational(1, 2)) == float(Irrational(0.5))

    def test_not_equal_to_plain_numbers(self):
        assert Rational(1) != 1
        assert Irrational(1.0) != 1.0

    def test_hash_consistent_with_equality(self):
        assert len({Rational(1, 2), Rational(2, 4), Irrational(0.5)}) == 2


# =============================================================================
# ТЕСТЫ: Arithmetic
# =============================================================================


class TestAdd:
    """Тесты add."""

    def test_rational_sum_is_exact(self):
        result = add(Rational(1, 2), Rational(6, 5))
        assert isinstance(result, Rational)
        assert result == Rational(17, 10)

    def test_reference_scenario(self):
        """0.5 + 1.2 == 17/10 (литералы восстанавливаются как дроби)."""
        assert add(from_float(0.5), from_float(1.2)) == Rational(170, 100)

    def test_irrational_operand_gives_irrational(self):
        result = add(Rational(1, 2), Irrational(0.25))
        assert result == Irrational(0.75)

        result = add(Irrational(0.25), Rational(1, 2))
        assert result == Irrational(0.75)

    def test_operator_and_method(self):
        a, b = Rational(1, 3), Rational(1, 6)
        assert a + b == Rational(1, 2)
        assert a.add(b) == add(a, b)

    def test_operator_rejects_plain_numbers(self):
        with pytest.raises(TypeError):
            Rational(1) + 1

    def test_overflow_degrades_to_irrational(self):
        result = add(Rational(I64_MAX), Rational(1))
        assert isinstance(result, Irrational)
        assert result.value == float(2**63)

    def test_overflow_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="src.core.domain.number"):
            add(Rational(I64_MAX), Rational(1))
        assert "exceeds 64-bit rational" in caplog.text


class TestMultiply:
    """Тесты multiply."""

    def test_rational_product_is_exact(self):
        assert multiply(Rational(2, 3), Rational(3, 4)) == Rational(1, 2)
        assert Rational(-2) * Rational(5) == Rational(-10)

    def test_irrational_operand_gives_irrational(self):
        assert multiply(Irrational(1.5), Rational(2)) == Irrational(3.0)
        assert Rational(2).multiply(Irrational(1.5)) == Irrational(3.0)


class TestPower:
    """Тесты power."""

    def test_integer_exponent_is_exact(self):
        assert power(Rational(2), Rational(3)) == Rational(8)
        assert Rational(2, 3) ** Rational(-2) == Rational(9, 4)
        assert power(Rational(5), Rational(0)) == Rational(1)

    def test_fractional_exponent_is_irrational(self):
        result = power(Rational(2), Rational(1, 2))
        assert isinstance(result, Irrational)
        assert result.value == pytest.approx(1.41421356, abs=1e-8)

    def test_irrational_base(self):
        assert power(Irrational(4.0), Rational(1, 2)) == Irrational(2.0)
        assert Irrational(2.0).power(Rational(3)) == Irrational(8.0)

    def test_exponent_outside_i32_rejected(self):
        with pytest.raises(ExponentOutOfRangeError):
            power(Rational(1), Rational(I32_MAX + 1))

        with pytest.raises(ExponentOutOfRangeError):
            power(Rational(2), Rational(I32_MIN - 1))

    def test_exponent_at_i32_edge_allowed(self):
        assert power(Rational(1), Rational(I32_MAX)) == Rational(1)
        assert power(Rational(-1), Rational(I32_MAX)) == Rational(-1)

    def test_result_beyond_i64_degrades(self):
        assert power(Rational(2), Rational(62)) == Rational(2**62)

        # 2**63 вычисляется точно и не помещается в i64
        result = power(Rational(2), Rational(63))
        assert result == Irrational(float(2**63))

        # 2**64 заведомо не помещается, сразу float
        result = power(Rational(2), Rational(64))
        assert result == Irrational(2.0**64)

    def test_zero_to_negative_power_rejected(self):
        with pytest.raises(ZeroReciprocalError):
            power(Rational(0), Rational(-1))

    def test_undefined_float_power_rejected(self):
        with pytest.raises(NumericDomainError):
            power(Rational(-8), Rational(1, 3))


class TestReciprocal:
    """Тесты reciprocal."""

    def test_rational_reciprocal_is_exact(self):
        assert reciprocal(Rational(2, 3)) == Rational(3, 2)
        assert Rational(-2, 3).reciprocal() == Rational(-3, 2)

    def test_irrational_reciprocal(self):
        assert reciprocal(Irrational(4.0)) == Irrational(0.25)

    def test_zero_rejected(self):
        with pytest.raises(ZeroReciprocalError):
            reciprocal(Rational(0))

        with pytest.raises(ZeroDivisionError):
            reciprocal(Rational(0, 7))

        with pytest.raises(ZeroReciprocalError):
            reciprocal(Irrational(0.0))

    def test_i64_min_reciprocal_degrades(self):
        """1 / -2**63 требует знаменатель 2**63 > I64_MAX."""
        result = reciprocal(Rational(I64_MIN))
        assert isinstance(result, Irrational)
        assert result.value == -1.0 / 2.0**63

"""
Core math modules для symterm

Математические примитивы для точной и приближённой арифметики термов.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Integer bounds
    I32_MAX,
    I32_MIN,
    I64_MAX,
    I64_MAX_FLOAT,
    I64_MIN,
    # Exceptions
    ExponentOutOfRangeError,
    NumericDomainError,
    NumericError,
    ZeroReciprocalError,
    # Range checks
    fits_i32,
    fits_i64,
    integer_power_may_fit_i64,
    is_valid_float,
    # Safe float operations
    safe_float_pow,
    safe_float_reciprocal,
)

# Approximation (float → ratio)
from src.core.math.approximation import (
    RATIO_MAX_ERROR,
    RATIO_MAX_ITERATIONS,
    approximate_float,
)

__all__ = [
    # Numerical Safeguards — Integer bounds
    "I32_MAX",
    "I32_MIN",
    "I64_MAX",
    "I64_MAX_FLOAT",
    "I64_MIN",
    # Numerical Safeguards — Exceptions
    "ExponentOutOfRangeError",
    "NumericDomainError",
    "NumericError",
    "ZeroReciprocalError",
    # Numerical Safeguards — Range checks
    "fits_i32",
    "fits_i64",
    "integer_power_may_fit_i64",
    "is_valid_float",
    # Numerical Safeguards — Safe float operations
    "safe_float_pow",
    "safe_float_reciprocal",
    # Approximation — Constants
    "RATIO_MAX_ERROR",
    "RATIO_MAX_ITERATIONS",
    # Approximation — Functions
    "approximate_float",
]

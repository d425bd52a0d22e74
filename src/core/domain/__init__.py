"""
Domain models and value objects.

Contains the numeric value model (Rational, Irrational) and the term tree
(Value, Variable, Addition, Multiplication, Exponentiation, RootExtraction).
"""

from src.core.domain.number import (
    Irrational,
    Number,
    NumericValue,
    Rational,
    add,
    as_number,
    from_float,
    from_ratio,
    multiply,
    power,
    reciprocal,
)
from src.core.domain.term import (
    DEFAULT_EVALUATION_CONFIG,
    Addition,
    AnyTerm,
    BinaryTerm,
    EvaluationConfig,
    Exponentiation,
    Multiplication,
    MultiplicationMode,
    RootExtraction,
    Term,
    TermInvariantViolation,
    Value,
    Variable,
    evaluate,
    has_bound_value,
    parse_term,
    substitute,
    substitute_all,
)

__all__ = [
    # Number model
    "Number",
    "NumericValue",
    "Rational",
    "Irrational",
    "from_ratio",
    "from_float",
    "as_number",
    "add",
    "multiply",
    "power",
    "reciprocal",
    # Term model
    "Term",
    "AnyTerm",
    "BinaryTerm",
    "Value",
    "Variable",
    "Addition",
    "Multiplication",
    "Exponentiation",
    "RootExtraction",
    "TermInvariantViolation",
    # Term evaluation
    "EvaluationConfig",
    "MultiplicationMode",
    "DEFAULT_EVALUATION_CONFIG",
    "has_bound_value",
    "substitute",
    "substitute_all",
    "evaluate",
    "parse_term",
]

"""Evaluator — свёртка термов с подстановкой набора переменных.

- TermEvaluator: bind + evaluate с общей EvaluationConfig
- EvaluationResult: значение или оставшиеся свободные переменные
"""

from .term_evaluator import (
    EvaluationResult,
    TermEvaluator,
)

__all__ = [
    "EvaluationResult",
    "TermEvaluator",
]

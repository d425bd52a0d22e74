"""Term Evaluator — связывание переменных и свёртка терма с диагностикой.

- Подстановка набора значений за один вызов (bind)
- Свёртка с результатом EvaluationResult: значение или список свободных
  переменных, оставшихся после подстановки
- Числовые ошибки (ZeroReciprocalError, ExponentOutOfRangeError,
  NumericDomainError) пробрасываются вызывающему коду
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from src.core.domain.number import Number
from src.core.domain.term import (
    DEFAULT_EVALUATION_CONFIG,
    EvaluationConfig,
    Term,
    substitute_all,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Результат свёртки терма."""

    value: Optional[Number]
    free_variables: frozenset[str]
    term: Term

    @property
    def is_bound(self) -> bool:
        return not self.free_variables


class TermEvaluator:
    """Свёртка термов с общей конфигурацией.

    Пример:
        evaluator = TermEvaluator()
        result = evaluator.evaluate(term, {"x": 2, "y": 0.5})
        if result.is_bound:
            print(result.value)
    """

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or DEFAULT_EVALUATION_CONFIG

    def bind(self, term: Term, bindings: Mapping[str, Any]) -> Term:
        """Подстановка всех значений из bindings."""
        return substitute_all(term, bindings)

    def evaluate(
        self, term: Term, bindings: Optional[Mapping[str, Any]] = None
    ) -> EvaluationResult:
        """Подстановка bindings (если заданы) и свёртка терма.

        Args:
            term: исходный терм
            bindings: значения переменных (name → Number | int | float | Fraction)

        Returns:
            EvaluationResult; value is None если остались свободные переменные
        """
        bound = self.bind(term, bindings) if bindings else term
        free = bound.free_variables()

        if free:
            logger.debug(f"Cannot evaluate, free variables remain: {sorted(free)}")
            return EvaluationResult(value=None, free_variables=free, term=bound)

        value = bound.evaluate(self.config)
        return EvaluationResult(value=value, free_variables=free, term=bound)

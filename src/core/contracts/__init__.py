"""
Contract Validation Module

Модуль для валидации JSON контрактов документов термов.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    TermDocumentValidator,
    term_from_document,
    term_to_document,
    validate_term_document,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "TermDocumentValidator",
    # Functions
    "validate_term_document",
    "term_to_document",
    "term_from_document",
]

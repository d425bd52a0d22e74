"""
JSON Schema Contract Validators

Модуль для валидации документов термов согласно формальному JSON Schema
контракту. Использует библиотеку jsonschema для проверки соответствия данных
схемам.

Документ терма: dict, полученный из model_dump() моделей
src.core.domain.term. Схемы:
- term.json (термы и числа в $defs)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.term import Term, parse_term

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    По умолчанию ищет схемы в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'term')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug(f"Loaded schema '{schema_name}' from {schema_path}")
        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации (ValidationError)."""
        return self.validator.iter_errors(data)


class TermDocumentValidator(ContractValidator):
    """Валидатор документа терма (term.json)."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("term", loader)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_term_document(data: Dict[str, Any]) -> None:
    """
    Валидация документа терма.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    TermDocumentValidator().validate(data)


def term_to_document(term: Term) -> Dict[str, Any]:
    """
    Документ терма (dict из встроенных типов Python).

    Irrational NaN/Inf сохраняются как float, поэтому документ не всегда
    сериализуем строгим JSON.
    """
    return term.model_dump()


def term_from_document(data: Dict[str, Any]) -> Term:
    """
    Терм из документа: проверка контракта, затем разбор моделями.

    Raises:
        ValidationError: Документ не соответствует схеме
        pydantic.ValidationError: Документ нарушает инварианты модели
    """
    validate_term_document(data)
    return parse_term(data)

"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (src/core/contracts/schema/):
- indexing_config.json: конфигурация scope индексирования
- indexing_error.json: отчёт об ошибке валидации (IndexingError.to_dict())
- range_snapshot.json: диагностический снапшот Index/Range/pointer-значений
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются как package data рядом с этим модулем.
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'range_snapshot')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

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

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
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
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


class IndexingConfigValidator(ContractValidator):
    """Валидатор для indexing_config контракта."""

    def __init__(self):
        super().__init__("indexing_config")


class IndexingErrorValidator(ContractValidator):
    """Валидатор для indexing_error контракта."""

    def __init__(self):
        super().__init__("indexing_error")


class RangeSnapshotValidator(ContractValidator):
    """
    Валидатор для range_snapshot контракта.

    Помимо схемы проверяет start <= end: JSON Schema не выражает
    отношение между двумя полями.
    """

    def __init__(self):
        super().__init__("range_snapshot")

    def validate(self, data: Dict[str, Any]) -> None:
        super().validate(data)
        if data["start"] > data["end"]:
            raise ValidationError(
                f"snapshot start {data['start']} is greater than end {data['end']}"
            )
        if data["nonempty"] and data["start"] == data["end"]:
            raise ValidationError("snapshot is marked nonempty but has zero length")

    def is_valid(self, data: Dict[str, Any]) -> bool:
        try:
            self.validate(data)
        except ValidationError:
            return False
        return True


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_indexing_config(data: Dict[str, Any]) -> None:
    """
    Валидация indexing_config данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    IndexingConfigValidator().validate(data)


def validate_indexing_error(data: Dict[str, Any]) -> None:
    """
    Валидация отчёта об ошибке индексирования.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    IndexingErrorValidator().validate(data)


def validate_range_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация снапшота Index/Range.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    RangeSnapshotValidator().validate(data)

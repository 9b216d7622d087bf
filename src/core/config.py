"""
IndexingConfig — конфигурация индексирования

Immutable Pydantic модель. Соответствует схеме
src/core/contracts/schema/indexing_config.json.

- growable_buffers: доступны ли растущие буферы (push/insert). Без них
  доступны только буферы фиксированной длины (read-only и mutable).
- debug_assertions: повторная проверка границ при каждом unchecked-доступе
  (AssertionError при нарушении). Для отладки; по умолчанию выключено.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class IndexingConfig(BaseModel):
    """Конфигурация scope индексирования."""

    growable_buffers: bool = Field(
        default=True, description="Разрешены ли растущие буферы (push/insert)"
    )
    debug_assertions: bool = Field(
        default=False, description="Повторная проверка границ при unchecked-доступе"
    )

    model_config = {"frozen": True, "extra": "forbid"}


DEFAULT_INDEXING_CONFIG = IndexingConfig()


def load_indexing_config(data: Dict[str, Any]) -> IndexingConfig:
    """
    Загрузка конфигурации из plain dict.

    Сначала JSON Schema контракт, затем Pydantic модель.

    Raises:
        jsonschema.ValidationError: данные не соответствуют схеме
    """
    # Локальный импорт: contracts загружает схемы при импорте
    from src.core.contracts import validate_indexing_config

    validate_indexing_config(data)
    return IndexingConfig(**data)

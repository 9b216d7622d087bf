"""
Contract Validation Module

Валидация JSON контрактов: конфигурация scope, отчёты об ошибках,
диагностические снапшоты доказанных значений.
"""

from .validators import (
    ContractValidator,
    IndexingConfigValidator,
    IndexingErrorValidator,
    RangeSnapshotValidator,
    SchemaLoader,
    validate_indexing_config,
    validate_indexing_error,
    validate_range_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IndexingConfigValidator",
    "IndexingErrorValidator",
    "RangeSnapshotValidator",
    # Functions
    "validate_indexing_config",
    "validate_indexing_error",
    "validate_range_snapshot",
]

"""
Indexing Errors — таксономия ошибок валидации

Два класса отказов:
- IndexingError: валидация сырого смещения/диапазона не прошла
  (или логическое предусловие алгебры нарушено). Возвращается вызывающему
  коду явно, без clamping и без усечения.
- BrandViolation: значение предъявлено не тому Container (чужой token)
  или после закрытия scope. Это нарушение контракта, а не recoverable-ошибка.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. IndexingError никогда не возникает одновременно с успешно возвращённым Index/Range
2. Для уже доказанных значений bounds-ошибки невозможны; возможен только BrandViolation
"""

from enum import Enum
from typing import Any, Dict, Tuple


# =============================================================================
# ENUMS
# =============================================================================


class IndexingErrorKind(str, Enum):
    """Вид отказа валидации."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"  # offset >= length (или < 0)
    PAST_END = "PAST_END"  # start > end или end > length
    ADJACENCY_MISMATCH = "ADJACENCY_MISMATCH"  # join несмежных диапазонов
    EMPTY_RANGE = "EMPTY_RANGE"  # first/last/nonempty на пустом диапазоне


# =============================================================================
# EXCEPTIONS
# =============================================================================


class IndexingError(IndexError):
    """
    Ошибка валидации индекса или диапазона.

    Несёт машинно-различимый kind и нарушающие значения (values).
    Наследуется от IndexError, поэтому обычный `except IndexError` её ловит.
    """

    def __init__(self, kind: IndexingErrorKind, values: Tuple[int, ...], message: str):
        super().__init__(message)
        self.kind = IndexingErrorKind(kind)
        self.values = tuple(values)
        self.message = message

    @classmethod
    def out_of_bounds(cls, offset: int, length: int) -> "IndexingError":
        return cls(
            IndexingErrorKind.OUT_OF_BOUNDS,
            (offset, length),
            f"index {offset} out of bounds for length {length}",
        )

    @classmethod
    def past_end(cls, start: int, end: int, length: int) -> "IndexingError":
        if start > end:
            message = f"range start {start} is past its end {end}"
        else:
            message = f"range end {end} is past the end of length {length}"
        return cls(IndexingErrorKind.PAST_END, (start, end, length), message)

    @classmethod
    def adjacency_mismatch(cls, left_end: int, right_start: int) -> "IndexingError":
        return cls(
            IndexingErrorKind.ADJACENCY_MISMATCH,
            (left_end, right_start),
            f"ranges are not adjacent: left ends at {left_end}, right starts at {right_start}",
        )

    @classmethod
    def empty_range(cls, start: int) -> "IndexingError":
        return cls(
            IndexingErrorKind.EMPTY_RANGE,
            (start,),
            f"range starting at {start} is empty",
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Отчёт об ошибке в виде plain dict.

        Соответствует схеме indexing_error.json (см. src.core.contracts).
        """
        return {
            "kind": self.kind.value,
            "values": list(self.values),
            "message": self.message,
        }


class BrandViolation(RuntimeError):
    """
    Значение предъявлено Container'у с другим token.

    Фатальный дефект программы: повторять операцию бессмысленно.
    """

    pass


class ScopeClosedError(BrandViolation):
    """Token scope уже закрыт; значения этого scope больше не принимаются."""

    pass

"""
Search — бинарный поиск и lower bound на доказанных диапазонах

Все варианты (Range, PRange, PSlice) строятся на одном шаге:
split_in_half -> первая позиция верхней половины. Верхняя половина
непуста для непустого диапазона, поэтому разыменование не требует
повторной проверки границ.

Соглашения:
- predicate(element) истинен на префиксе диапазона и ложен после него
  (классическая форма element < target)
- compare(element) < 0 / == 0 / > 0, если element меньше / равен / больше искомого

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. lower_bound возвращает edge index p: predicate истинен на [start, p), ложен на [p, end)
2. found=True  =>  compare(container[index]) == 0
3. found=False =>  index — точка вставки, сохраняющая порядок
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from src.container import Container, with_buffer
from src.core.domain.index import Index
from src.core.domain.range import Range
from src.pointer import PIndex, PRange, PSlice


P = TypeVar("P")

Predicate = Callable[[Any], bool]
Comparator = Callable[[Any], int]


@dataclass(frozen=True)
class SearchResult(Generic[P]):
    """
    Результат бинарного поиска.

    found=True: index указывает на совпавший элемент (разыменовываемый).
    found=False: index — edge-позиция вставки.
    """

    found: bool
    index: P


# =============================================================================
# ОБЩИЙ ШАГ
# =============================================================================


def _lower_bound(container: Container, r, predicate: Predicate):
    while not r.is_empty():
        lower, upper = r.split_in_half()
        mid = upper.first()
        if predicate(container[mid]):
            r = upper.tail()
        else:
            r = lower
    return r.past_the_end()


def _binary_search_by(container: Container, r, compare: Comparator) -> SearchResult:
    r = r.no_proof()
    while True:
        lower, upper = r.split_in_half()
        if upper.is_empty():
            break
        mid = upper.first()
        order = compare(container[mid])
        if order == 0:
            return SearchResult(True, mid)
        if order > 0:
            r = lower
        else:
            r = upper.tail()
    return SearchResult(False, r.past_the_end())


def _require(value: Any, kind: type, name: str) -> None:
    if not isinstance(value, kind):
        raise TypeError(f"{name} expects {kind.__name__}, got {type(value).__name__}")


# =============================================================================
# INDEX / RANGE
# =============================================================================


def lower_bound(container: Container, r: Range, predicate: Predicate) -> Index:
    """
    Первая позиция r, на которой predicate ложен.

    Args:
        container: контейнер scope
        r: диапазон поиска (того же scope)
        predicate: истинен на префиксе, ложен после него

    Returns:
        Edge Index в [r.start, r.end]
    """
    _require(r, Range, "lower_bound")
    return _lower_bound(container, r, predicate)


def binary_search_by(
    container: Container, r: Range, compare: Comparator
) -> SearchResult[Index]:
    """
    Бинарный поиск в отсортированном диапазоне.

    Returns:
        SearchResult(True, Index совпадения) или SearchResult(False, edge Index вставки)
    """
    _require(r, Range, "binary_search_by")
    return _binary_search_by(container, r, compare)


# =============================================================================
# POINTER VARIANTS
# =============================================================================


def lower_bound_prange(container: Container, pr: PRange, predicate: Predicate) -> PIndex:
    _require(pr, PRange, "lower_bound_prange")
    return _lower_bound(container, pr, predicate)


def lower_bound_pslice(container: Container, ps: PSlice, predicate: Predicate) -> PIndex:
    _require(ps, PSlice, "lower_bound_pslice")
    return _lower_bound(container, ps, predicate)


def binary_search_by_prange(
    container: Container, pr: PRange, compare: Comparator
) -> SearchResult[PIndex]:
    _require(pr, PRange, "binary_search_by_prange")
    return _binary_search_by(container, pr, compare)


def binary_search_by_pslice(
    container: Container, ps: PSlice, compare: Comparator
) -> SearchResult[PIndex]:
    _require(ps, PSlice, "binary_search_by_pslice")
    return _binary_search_by(container, ps, compare)


# =============================================================================
# PLAIN SEQUENCES
# =============================================================================


def _three_way(x: Any) -> Comparator:
    return lambda element: (element > x) - (element < x)


def binary_search_seq_by(data: Sequence, compare: Comparator) -> SearchResult[int]:
    """
    Бинарный поиск по отсортированной последовательности.

    Returns:
        SearchResult с целой позицией (совпадение или точка вставки)
    """

    def search(v: Container) -> SearchResult[int]:
        result = _binary_search_by(v, v.range(), compare)
        return SearchResult(result.found, result.index.integer())

    return with_buffer(data, search)


def binary_search(data: Sequence, x: Any) -> SearchResult[int]:
    """Поиск x в отсортированной последовательности (natural ordering)."""
    return binary_search_seq_by(data, _three_way(x))


def lower_bound_seq(data: Sequence, x: Any) -> int:
    """Первая позиция, где элемент не меньше x."""
    return with_buffer(
        data,
        lambda v: _lower_bound(v, v.range(), lambda element: element < x).integer(),
    )

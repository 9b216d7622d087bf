"""
Sorting — алгоритмы сортировки и слияния на доказанном API

Все функции работают in-place над изменяемой последовательностью:
открывают scope, получают доказанные диапазоны и не выполняют ни одной
повторной проверки границ для доказанных значений.

- quicksort_range / quicksort_prange: median-of-three quicksort
  с трёхсторонним разбиением; короткие участки — insertion sort
- insertion_sort_*: варианты insertion sort (scan, range, lower bound)
- heapify: построение min-heap
- merge_internal: слияние двух отсортированных половин через swap-буфер
- zip_dot_prange / copy_prange: синхронный обход двух буферов
"""

import logging
import operator
from typing import Any, Callable, Final, MutableSequence, Sequence

from src.algorithms.search import _lower_bound
from src.container import Container, scope
from src.core.domain.range import Range
from src.pointer import zip_ranges


logger = logging.getLogger(__name__)

LessThan = Callable[[Any, Any], bool]

# Порог перехода на insertion sort
QS_INSERTION_SORT_THRESH: Final[int] = 24


# =============================================================================
# ОБЩИЕ ШАГИ (Range и PRange)
# =============================================================================


def _swapper(v: Container, r) -> Callable:
    return v.swap if isinstance(r, Range) else v.swap_ptr


def _rotator(v: Container, r) -> Callable:
    return v.rotate1_up if isinstance(r, Range) else v.rotate1_prange


def _insertion_sort_lower(v: Container, r, less_than: LessThan) -> None:
    """
    Insertion sort участка r: позиция вставки ищется lower bound'ом
    по уже отсортированному префиксу.

    Вставка после равных элементов сохраняет стабильность.
    """
    rotate = _rotator(v, r)
    for i in r:
        x = v[i]
        head, _ = r.split_at(i)
        pos = _lower_bound(v, head, lambda element: not less_than(x, element))
        _, from_pos = r.split_at(pos)
        moved, _ = from_pos.split_at(i.after())
        rotate(moved)


def _median_of_three(v: Container, r):
    low, mid, high = r.first(), r.upper_middle(), r.last()
    a, b, c = v[low], v[mid], v[high]
    if a <= b <= c:
        return mid
    if b <= a <= c:
        return low
    return high


def _quicksort(v: Container, r) -> None:
    swap = _swapper(v, r)
    while len(r) > QS_INSERTION_SORT_THRESH:
        pivot = v[_median_of_three(v, r)]

        # [start, mid.start) < pivot; [mid.start, unknown.start) == pivot;
        # unknown: ещё не просмотрено; [mid.end, end) > pivot
        mid = r
        unknown = r
        while not unknown.is_empty():
            k = unknown.first()
            element = v[k]
            if element < pivot:
                swap(mid.first(), k)
                mid = mid.tail()
                unknown = unknown.tail()
            elif pivot < element:
                swap(k, unknown.last())
                mid = mid.init()
                unknown = unknown.init()
            else:
                unknown = unknown.tail()

        less, rest = r.split_at(mid.front())
        _, greater = rest.split_at(mid.past_the_end())

        # рекурсия по меньшей части, цикл по большей: глубина O(log n)
        if len(less) < len(greater):
            _quicksort(v, less)
            r = greater
        else:
            _quicksort(v, greater)
            r = less
    _insertion_sort_lower(v, r, operator.lt)


# =============================================================================
# QUICKSORT
# =============================================================================


def quicksort_range(data: MutableSequence) -> None:
    """Quicksort на Index/Range."""
    with scope(data) as v:
        _quicksort(v, v.range())


def quicksort_prange(data: MutableSequence) -> None:
    """Quicksort на PIndex/PRange."""
    with scope(data) as v:
        _quicksort(v, v.pointer_range())


# =============================================================================
# INSERTION SORT
# =============================================================================


def insertion_sort_indexes(data: MutableSequence, less_than: LessThan = operator.lt) -> None:
    """Insertion sort: для каждого индекса сканирование назад и сдвиг."""
    with scope(data) as v:
        for i in v.range():
            x = v[i]
            jtail = v.scan_from_rev(i, lambda element: less_than(x, element))
            v.rotate1_up(jtail)


def insertion_sort_ranges(data: MutableSequence, less_than: LessThan = operator.lt) -> None:
    """Insertion sort: обход через advance непустого диапазона."""
    with scope(data) as v:
        r = v.range()
        if r.is_empty():
            return
        r = r.advance()
        while r is not None:
            i = r.first()
            x = v[i]
            jtail = v.scan_from_rev(i, lambda element: less_than(x, element))
            v.rotate1_up(jtail)
            r = r.advance()


def insertion_sort_prange_lower(
    data: MutableSequence, less_than: LessThan = operator.lt
) -> None:
    """Insertion sort на указателях с поиском позиции через lower bound."""
    with scope(data) as v:
        for i in v.pointer_range():
            x = v[i]
            up_to = v.pointer_range_to(i)
            lb = _lower_bound(v, up_to, lambda element: not less_than(x, element))
            v.rotate1_prange(v.nonempty_range(lb, i.after()))


# =============================================================================
# HEAP
# =============================================================================


def heapify(data: MutableSequence) -> None:
    """
    Построение min-heap in-place.

    Для элемента k дети — 2k + 1 и 2k + 2.
    """
    with scope(data) as v:
        full = v.range()
        left, _ = full.split_in_half()
        for i in reversed(left):
            pos = i
            child = full.index_at(pos.integer() * 2 + 1)
            while child is not None:
                right = v.forward(child)
                if right is not None and v[child] > v[right]:
                    child = right
                if v[pos] <= v[child]:
                    break
                v.swap(pos, child)
                pos = child
                child = full.index_at(pos.integer() * 2 + 1)


# =============================================================================
# MERGE
# =============================================================================


def _block_swap(d: Container, r: Range, b: Container, rb: Range) -> None:
    """Обмен элементов двух регионов по длине более короткого."""
    for x, y in zip(r, rb):
        d[x], b[y] = b[y], d[x]


def merge_internal(data: MutableSequence, left_end: int, buffer: MutableSequence) -> None:
    """
    Слияние отсортированных частей data[:left_end] и data[left_end:] in-place.

    buffer[:left_end] служит рабочим swap-пространством: элементы только
    обмениваются, поэтому по завершении он содержит тот же набор значений,
    но порядок может измениться.

    Raises:
        ValueError: left_end больше длины data или buffer
    """
    if left_end > len(data) or left_end > len(buffer):
        raise ValueError("merge_internal: data or buffer too short")
    with scope(data) as d, scope(buffer) as b:
        r = d.range()
        rb = b.validate_range(0, left_end)
        if rb.is_empty() or r.is_empty():
            return
        _, right = r.split_at(left_end)
        if right.is_empty():
            return
        i = rb.nonempty()
        out = r.nonempty()
        j = right.nonempty()

        _block_swap(d, r, b, rb)
        while True:
            if b[i.first()] <= d[j.first()]:
                bi, do = i.first(), out.first()
                b[bi], d[do] = d[do], b[bi]
                out = out.advance()
                i = i.advance()
                if out is None or i is None:
                    break
            else:
                d.swap(j.first(), out.first())
                out = out.advance()
                if out is None:
                    break
                j = j.advance()
                if j is None:
                    _block_swap(d, out, b, i)
                    break
        logger.debug("merge_internal: merged %d + %d", left_end, len(r) - left_end)


# =============================================================================
# POINTER ZIPS
# =============================================================================


def zip_dot_prange(xs: Sequence, ys: Sequence) -> Any:
    """Скалярное произведение по длине более короткой последовательности."""
    total = 0
    with scope(xs) as v, scope(ys) as u:

        def accumulate(p, q) -> None:
            nonlocal total
            total += v[p] * u[q]

        zip_ranges(v.pointer_range(), v, u.pointer_range(), u, accumulate)
    return total


def copy_prange(xs: Sequence, ys: MutableSequence) -> int:
    """
    Копирование xs в ys по длине более короткой.

    Returns:
        Число скопированных элементов
    """
    with scope(xs) as v, scope(ys) as u:

        def assign(p, q) -> None:
            u[q] = v[p]

        return zip_ranges(v.pointer_range(), v, u.pointer_range(), u, assign)

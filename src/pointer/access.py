"""
Pointer access — операции Container над PIndex / PRange / PSlice

PointerAccessMixin подмешивается в Container и опирается на его
проверки: _check (scope открыт, token совпадает), _require_writable,
_debug_check. Адрес переводится в смещение как address - buffer.address.

zip_ranges — синхронный обход двух pointer-диапазонов двух контейнеров.
"""

import logging
from typing import Any, Callable, Tuple, Union

from src.core.domain.errors import IndexingError
from src.core.domain.index import Index, mint_index
from src.core.domain.proof import NonEmpty, Unknown
from src.core.domain.range import Range, mint_range
from src.pointer.values import PIndex, PRange, PSlice, mint_pindex, mint_prange, mint_pslice


logger = logging.getLogger(__name__)

PointerRange = Union[PRange, PSlice]


class PointerAccessMixin:
    """Pointer-вариант доступа к доказанным позициям контейнера."""

    # =========================================================================
    # ПОСТРОЕНИЕ И КОНВЕРСИЯ
    # =========================================================================

    def _base(self) -> int:
        return self._buffer.address

    def pointer_range(self) -> PRange:
        """Весь контейнер как PRange."""
        self._ensure_open()
        base = self._base()
        return mint_prange(base, base + len(self._buffer), self._token, Unknown)

    def pointer_slice(self) -> PSlice:
        """Весь контейнер как PSlice."""
        self._ensure_open()
        return mint_pslice(self._base(), len(self._buffer), self._token, Unknown)

    def distance_to(self, pointer: PIndex) -> int:
        """Смещение pointer от начала контейнера (в элементах)."""
        self._check(pointer)
        return pointer.address - self._base()

    def to_pindex(self, index: Index) -> PIndex:
        self._check(index)
        return mint_pindex(self._base() + index.offset, self._token, index.proof)

    def to_index(self, pointer: PIndex) -> Index:
        self._check(pointer)
        return mint_index(pointer.address - self._base(), self._token, pointer.proof)

    def to_prange(self, r: Range) -> PRange:
        self._check(r)
        base = self._base()
        return mint_prange(base + r.start, base + r.end, self._token, r.proof)

    def to_range(self, pr: PointerRange) -> Range:
        self._check(pr)
        base = self._base()
        return mint_range(pr.start - base, pr.end - base, self._token, pr.proof)

    # =========================================================================
    # SPLIT / SCAN
    # =========================================================================

    def split_at_pointer(self, pointer: PIndex) -> Tuple[PRange, PRange]:
        """([начало, pointer), [pointer, конец)); proof pointer переходит ко второй части."""
        self._check(pointer)
        base = self._base()
        return (
            mint_prange(base, pointer.address, self._token, Unknown),
            mint_prange(pointer.address, base + len(self._buffer), self._token, pointer.proof),
        )

    def pointer_range_to(self, pointer: PIndex) -> PRange:
        """Диапазон от начала контейнера до pointer (не включая)."""
        self._check(pointer)
        return mint_prange(self._base(), pointer.address, self._token, Unknown)

    def nonempty_range(self, start: PIndex, end: PIndex) -> PRange:
        """
        Непустой диапазон [start, end).

        Raises:
            IndexingError(PAST_END): start > end
            IndexingError(EMPTY_RANGE): start == end
        """
        self._check(start)
        self._check(end)
        if start.address > end.address:
            base = self._base()
            raise IndexingError.past_end(
                start.address - base, end.address - base, len(self._buffer)
            )
        if start.address == end.address:
            raise IndexingError.empty_range(start.address - self._base())
        return mint_prange(start.address, end.address, self._token, NonEmpty)

    def scan_tail(self, pointer: PIndex, predicate: Callable[[Any], bool]) -> PRange:
        """
        Расширение влево от pointer, пока predicate истинен на элементе.

        Результат всегда включает pointer.

        Raises:
            IndexingError(OUT_OF_BOUNDS): edge pointer указывает за конец
        """
        self._check(pointer)
        base = self._base()
        self._deref(pointer.address - base, pointer.proof)
        get = self._buffer.get_unchecked
        start = pointer.address
        while start > base and predicate(get(start - 1 - base)):
            start -= 1
        return mint_prange(start, pointer.address + 1, self._token, NonEmpty)

    def scan_pointer_range(
        self, pr: PointerRange, predicate: Callable[[Any], bool]
    ) -> Tuple[PRange, PRange]:
        """Префикс pr, на котором predicate истинен, и остаток."""
        self._check(pr)
        base = self._base()
        get = self._buffer.get_unchecked
        mid = pr.start
        while mid != pr.end and predicate(get(mid - base)):
            mid += 1
        return (
            mint_prange(pr.start, mid, self._token, Unknown),
            mint_prange(mid, pr.end, self._token, Unknown),
        )

    def scan_pointer_range_rev(
        self, pr: PointerRange, predicate: Callable[[Any], bool]
    ) -> Tuple[PRange, PRange]:
        """Суффикс pr, на котором predicate истинен (сканирование с конца), и остаток перед ним."""
        self._check(pr)
        base = self._base()
        get = self._buffer.get_unchecked
        mid = pr.end
        while mid != pr.start and predicate(get(mid - 1 - base)):
            mid -= 1
        return (
            mint_prange(pr.start, mid, self._token, Unknown),
            mint_prange(mid, pr.end, self._token, Unknown),
        )

    # =========================================================================
    # ДОСТУП
    # =========================================================================

    def get_ptr(self, pointer: PIndex) -> Any:
        """
        Элемент по адресу.

        Raises:
            IndexingError(OUT_OF_BOUNDS): edge pointer указывает за конец
        """
        self._check(pointer)
        offset = self._deref(pointer.address - self._base(), pointer.proof)
        return self._buffer.get_unchecked(offset)

    def set_ptr(self, pointer: PIndex, value: Any) -> None:
        self._require_writable()
        self._check(pointer)
        offset = self._deref(pointer.address - self._base(), pointer.proof)
        self._buffer.set_unchecked(offset, value)

    def view_prange(self, pr: PointerRange):
        """Представление региона pr без копирования."""
        self._check(pr)
        base = self._base()
        return self._buffer.view(pr.start - base, pr.end - base)

    def swap_ptr(self, i: PIndex, j: PIndex) -> None:
        """Обмен элементов по адресам (i и j могут совпадать)."""
        self._require_writable()
        self._check(i)
        self._check(j)
        base = self._base()
        self._buffer.swap_unchecked(
            self._deref(i.address - base, i.proof),
            self._deref(j.address - base, j.proof),
        )

    def rotate1_prange(self, pr: PointerRange) -> None:
        """Циклический сдвиг pr на одну позицию вправо (к старшим адресам)."""
        self._require_writable()
        self._check(pr)
        if len(pr) < 2:
            return
        base = self._base()
        self._buffer.rotate_right_unchecked(pr.start - base, pr.end - base)


def zip_ranges(
    r1: PointerRange,
    c1,
    r2: PointerRange,
    c2,
    f: Callable[[PIndex, PIndex], None],
) -> int:
    """
    Синхронный обход r1 (из c1) и r2 (из c2) по длине более короткого.

    f получает пару разыменовываемых PIndex; элементы читаются и пишутся
    через соответствующий контейнер.

    Returns:
        Число обработанных пар
    """
    c1._check(r1)
    c2._check(r2)
    n = min(len(r1), len(r2))
    token1 = c1.token
    token2 = c2.token
    for k in range(n):
        f(
            mint_pindex(r1.start + k, token1, NonEmpty),
            mint_pindex(r2.start + k, token2, NonEmpty),
        )
    logger.debug("zip_ranges: scopes=%d/%d pairs=%d", token1.scope_id, token2.scope_id, n)
    return n

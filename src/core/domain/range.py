"""
Range — доказанный непрерывный регион буфера и его алгебра

Immutable значение (start, end, token, proof) с инвариантом
0 <= start <= end <= length. Все операции алгебры (split, join, cover,
narrow, containment) работают только с тройкой (start, end, token),
без доступа к буферу, и потому не требуют повторной проверки длины.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Partition law: join(*split_at(r, p)) == r для любого start <= p <= end
2. Adjacency law: join(a, b) успешен iff a.end == b.start
3. Covering law: join_cover(a, b) — минимальный диапазон, покрывающий a и b
4. proof == NonEmpty  =>  start < end
"""

import operator
from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from .errors import IndexingError
from .index import Index, _MINT_KEY, mint_index
from .proof import NonEmpty, ProofType, Unknown, proof_add
from .token import Token, ensure_same_brand


@dataclass(frozen=True, repr=False)
class Range:
    """
    Доказанный диапазон [start, end).

    Равенство: тот же token и те же границы (proof не учитывается).
    Итерация выдаёт разыменовываемые Index от start к end.
    """

    start: int
    end: int
    token: Token
    proof: ProofType = field(default=Unknown, compare=False)
    _key: InitVar[object] = None

    def __post_init__(self, _key: object) -> None:
        if _key is not _MINT_KEY:
            raise TypeError("Range values are minted by a Container, not constructed directly")

    # =========================================================================
    # БАЗОВЫЕ СВОЙСТВА
    # =========================================================================

    def __len__(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start >= self.end

    def nonempty(self) -> "Range":
        """
        Доказательство непустоты.

        Returns:
            Тот же диапазон с proof = NonEmpty

        Raises:
            IndexingError(EMPTY_RANGE): диапазон пуст
        """
        self._require_nonempty()
        if self.proof is NonEmpty:
            return self
        return mint_range(self.start, self.end, self.token, NonEmpty)

    def no_proof(self) -> "Range":
        return mint_range(self.start, self.end, self.token, Unknown)

    def as_range(self) -> range:
        return range(self.start, self.end)

    def as_slice(self) -> slice:
        return slice(self.start, self.end)

    def snapshot(self) -> Dict[str, Any]:
        """Диагностический снапшот (схема range_snapshot.json, kind=range)."""
        return {
            "kind": "range",
            "scope_id": self.token.scope_id,
            "start": self.start,
            "end": self.end,
            "nonempty": self.proof is NonEmpty,
        }

    def _require_nonempty(self) -> None:
        # NonEmpty proof уже гарантирует start < end
        if self.proof is not NonEmpty and self.start >= self.end:
            raise IndexingError.empty_range(self.start)

    def _point(self, point: Union[int, Index]) -> int:
        if isinstance(point, Index):
            ensure_same_brand(self.token, point.token)
            return point.offset
        return operator.index(point)

    # =========================================================================
    # ГРАНИЧНЫЕ ИНДЕКСЫ
    # =========================================================================

    def first(self) -> Index:
        """Первый индекс непустого диапазона."""
        self._require_nonempty()
        return mint_index(self.start, self.token, NonEmpty)

    def last(self) -> Index:
        """Последний индекс непустого диапазона."""
        self._require_nonempty()
        return mint_index(self.end - 1, self.token, NonEmpty)

    def upper_middle(self) -> Index:
        """Средний индекс с округлением вверх: start + len / 2."""
        self._require_nonempty()
        return mint_index(self.start + len(self) // 2, self.token, NonEmpty)

    def lower_middle(self) -> Index:
        """Средний индекс с округлением вниз: start + (len - 1) / 2."""
        self._require_nonempty()
        return mint_index(self.start + (len(self) - 1) // 2, self.token, NonEmpty)

    def front(self) -> Index:
        """Edge index в начале диапазона (разыменовываем только если диапазон непуст)."""
        return mint_index(self.start, self.token, self.proof)

    def past_the_end(self) -> Index:
        """Edge index сразу за концом диапазона."""
        return mint_index(self.end, self.token, Unknown)

    def tail(self) -> "Range":
        """Диапазон без первого элемента."""
        self._require_nonempty()
        return mint_range(self.start + 1, self.end, self.token, Unknown)

    def init(self) -> "Range":
        """Диапазон без последнего элемента."""
        self._require_nonempty()
        return mint_range(self.start, self.end - 1, self.token, Unknown)

    def frontiers(self) -> Tuple["Range", "Range"]:
        """Два пустых диапазона: в начале и в конце."""
        return (
            mint_range(self.start, self.start, self.token, Unknown),
            mint_range(self.end, self.end, self.token, Unknown),
        )

    # =========================================================================
    # SPLIT / NARROW
    # =========================================================================

    def split_at(self, point: Union[int, Index]) -> Tuple["Range", "Range"]:
        """
        Разбиение в абсолютной точке point.

        Args:
            point: абсолютное смещение (int) или Index того же scope,
                start <= point <= end

        Returns:
            ([start, point), [point, end))

        Raises:
            IndexingError(OUT_OF_BOUNDS): point вне [start, end]
        """
        mid = self._point(point)
        if not self.start <= mid <= self.end:
            raise IndexingError.out_of_bounds(mid, self.end)
        return (
            mint_range(self.start, mid, self.token, Unknown),
            mint_range(mid, self.end, self.token, Unknown),
        )

    def split_in_half(self) -> Tuple["Range", "Range"]:
        """
        Разбиение пополам; upper middle попадает во вторую половину.

        Proof переходит ко второй половине.
        """
        mid = self.start + len(self) // 2
        return (
            mint_range(self.start, mid, self.token, Unknown),
            mint_range(mid, self.end, self.token, self.proof),
        )

    def narrow(self, start: Union[int, Index], end: Union[int, Index]) -> "Range":
        """
        Поддиапазон [start, end) внутри текущего.

        Raises:
            IndexingError(PAST_END): start > end
            IndexingError(OUT_OF_BOUNDS): границы вне [self.start, self.end]
        """
        lo = self._point(start)
        hi = self._point(end)
        if lo > hi:
            raise IndexingError.past_end(lo, hi, self.end)
        if lo < self.start:
            raise IndexingError.out_of_bounds(lo, self.end)
        if hi > self.end:
            raise IndexingError.out_of_bounds(hi, self.end)
        return mint_range(lo, hi, self.token, NonEmpty if lo < hi else Unknown)

    def subdivide(self, n: int) -> Iterator["Range"]:
        """
        Разбиение на n максимально равных непустых неперекрывающихся частей.

        Если длина меньше n, частей нет.
        """
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        decimal_step, frac_step = divmod(len(self), n)
        stop = self.end if decimal_step else self.start
        pos = self.start
        acc = 0
        while pos < stop:
            part_start = pos
            pos += decimal_step
            acc += frac_step
            if acc >= n:
                acc -= n
                pos += 1
            yield mint_range(part_start, pos, self.token, NonEmpty)

    # =========================================================================
    # JOIN / COVER
    # =========================================================================

    def join(self, other: "Range") -> "Range":
        """
        Склейка смежных диапазонов (self слева, other справа).

        Raises:
            IndexingError(ADJACENCY_MISMATCH): self.end != other.start
        """
        ensure_same_brand(self.token, other.token)
        if self.end != other.start:
            raise IndexingError.adjacency_mismatch(self.end, other.start)
        return mint_range(self.start, other.end, self.token, proof_add(self.proof, other.proof))

    def join_cover(self, other: "Range") -> "Range":
        """
        Минимальный диапазон, покрывающий оба (в любом порядке, с зазором или перекрытием).

        Оба конца уже доказаны <= length, поэтому max(end) тоже в границах:
        повторная проверка длины не нужна.
        """
        ensure_same_brand(self.token, other.token)
        start = min(self.start, other.start)
        end = max(self.end, other.end)
        return mint_range(start, end, self.token, proof_add(self.proof, other.proof))

    join_cover_both = join_cover

    # =========================================================================
    # CONTAINMENT
    # =========================================================================

    def contains(self, index: Index) -> bool:
        # edge index тоже содержится, если указывает на элемент диапазона
        ensure_same_brand(self.token, index.token)
        return self.start <= index.offset < self.end

    def contains_range(self, other: "Range") -> bool:
        ensure_same_brand(self.token, other.token)
        return self.start <= other.start and other.end <= self.end

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Range):
            return self.contains_range(item)
        if isinstance(item, Index):
            return self.contains(item)
        return False

    def index_at(self, abs_index: int) -> Optional[Index]:
        """Index для абсолютного смещения, если оно внутри диапазона."""
        abs_index = operator.index(abs_index)
        if self.start <= abs_index < self.end:
            return mint_index(abs_index, self.token, NonEmpty)
        return None

    # =========================================================================
    # ШАГИ
    # =========================================================================

    def advance(self) -> Optional["Range"]:
        """Сдвиг start на 1, если результат остаётся непустым; иначе None."""
        return self.advance_by(1)

    def advance_by(self, offset: int) -> Optional["Range"]:
        """
        Сдвиг start на offset, если результат остаётся непустым; иначе None.

        Raises:
            ValueError: offset < 0
        """
        start = self.start + _step(offset)
        if start < self.end:
            return mint_range(start, self.end, self.token, NonEmpty)
        return None

    def advance_back(self) -> Optional["Range"]:
        """Сдвиг end на -1, если результат остаётся непустым; иначе None."""
        end = self.end - 1
        if self.start < end:
            return mint_range(self.start, end, self.token, NonEmpty)
        return None

    def forward_by(self, index: Index, offset: int) -> Optional[Index]:
        """index + offset, если результат ещё до конца диапазона; иначе None."""
        ensure_same_brand(self.token, index.token)
        i = index.offset + operator.index(offset)
        if self.start <= i < self.end:
            return mint_index(i, self.token, NonEmpty)
        return None

    def forward_range_by(self, other: "Range", offset: int) -> "Range":
        """
        Сдвиг other на offset с clamping к концу self.

        Raises:
            ValueError: offset < 0
        """
        ensure_same_brand(self.token, other.token)
        offset = _step(offset)
        start = min(other.start + offset, self.end)
        end = min(other.end + offset, self.end)
        return mint_range(start, end, self.token, NonEmpty if start < end else Unknown)

    # =========================================================================
    # ИТЕРАЦИЯ
    # =========================================================================

    def __iter__(self) -> Iterator[Index]:
        for i in range(self.start, self.end):
            yield mint_index(i, self.token, NonEmpty)

    def __reversed__(self) -> Iterator[Index]:
        for i in range(self.end - 1, self.start - 1, -1):
            yield mint_index(i, self.token, NonEmpty)

    def __repr__(self) -> str:
        return f"Range({self.start}, {self.end})"


def _step(offset: int) -> int:
    """Шаг вперёд по диапазону: offset >= 0."""
    offset = operator.index(offset)
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    return offset


def mint_range(start: int, end: int, token: Token, proof: ProofType = Unknown) -> Range:
    """Чеканка Range. Вызывающий отвечает за 0 <= start <= end <= length."""
    return Range(start, end, token, proof, _key=_MINT_KEY)

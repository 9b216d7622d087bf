"""
Container — буфер, привязанный к token одного scope

Единственная точка, где сырые int превращаются в доказанные Index/Range
(validate / validate_range), и единственное место, где доказанные значения
разыменовываются. Для доказанных значений проверка границ не повторяется:
проверяются только открытость scope и identity token.

Edge index (proof = Unknown) при разыменовании проходит одну runtime-проверку.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. validate(i) успешен iff 0 <= i < length()
2. validate_range(s, e) успешен iff 0 <= s <= e <= length()
3. Длина буфера только растёт, поэтому выданные значения остаются в границах
4. Значение чужого scope -> BrandViolation; после закрытия scope -> ScopeClosedError
"""

import logging
import operator
from typing import Any, Callable, Optional, Tuple, Union

from src.core.buffers import Buffer, BufferView
from src.core.config import DEFAULT_INDEXING_CONFIG, IndexingConfig
from src.core.domain.errors import IndexingError
from src.core.domain.index import Index, mint_index
from src.core.domain.proof import NonEmpty, ProofType, Unknown
from src.core.domain.range import Range, mint_range
from src.core.domain.token import Token, ensure_open, ensure_same_brand
from src.pointer import PIndex, PointerAccessMixin, PRange, PSlice


logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]


class Container(PointerAccessMixin):
    """
    Буфер + token + конфигурация.

    Создаётся только scope entry (with_buffer / scope / indices),
    который выпускает свежий token.
    """

    def __init__(
        self,
        buffer: Buffer,
        token: Token,
        config: Optional[IndexingConfig] = None,
    ):
        self._buffer = buffer
        self._token = token
        self._config = config or DEFAULT_INDEXING_CONFIG

    # =========================================================================
    # СВОЙСТВА
    # =========================================================================

    @property
    def token(self) -> Token:
        return self._token

    @property
    def buffer(self) -> Buffer:
        self._ensure_open()
        return self._buffer

    @property
    def config(self) -> IndexingConfig:
        return self._config

    def length(self) -> int:
        self._ensure_open()
        return len(self._buffer)

    def __len__(self) -> int:
        return self.length()

    def __repr__(self) -> str:
        return f"Container(scope_id={self._token.scope_id}, {self._buffer!r})"

    # =========================================================================
    # ВНУТРЕННИЕ ПРОВЕРКИ
    # =========================================================================

    def _ensure_open(self) -> None:
        ensure_open(self._token)

    def _check(self, value: Any) -> None:
        """Scope открыт и value выпущено этим scope."""
        ensure_open(self._token)
        ensure_same_brand(self._token, value.token)

    def _require_writable(self) -> None:
        if not self._buffer.writable:
            raise TypeError(f"{type(self._buffer).__name__} does not support writes")

    def _require_growable(self) -> None:
        if not self._buffer.growable:
            raise TypeError(f"{type(self._buffer).__name__} does not support growth")

    def _debug_check(self, offset: int) -> None:
        if self._config.debug_assertions and not 0 <= offset < len(self._buffer):
            raise AssertionError(
                f"proven offset {offset} outside buffer of length {len(self._buffer)}"
            )

    def _deref(self, offset: int, proof: ProofType) -> int:
        """Смещение, пригодное для разыменования; edge-значения проверяются один раз."""
        if proof is not NonEmpty and offset >= len(self._buffer):
            raise IndexingError.out_of_bounds(offset, len(self._buffer))
        self._debug_check(offset)
        return offset

    def _debug_check_range(self, r: Range) -> None:
        if self._config.debug_assertions and not 0 <= r.start <= r.end <= len(self._buffer):
            raise AssertionError(
                f"proven range {r!r} outside buffer of length {len(self._buffer)}"
            )

    # =========================================================================
    # ВАЛИДАЦИЯ
    # =========================================================================

    def validate(self, raw: int) -> Index:
        """
        Проверка сырого смещения.

        Args:
            raw: смещение (любой объект с __index__)

        Returns:
            Разыменовываемый Index

        Raises:
            IndexingError(OUT_OF_BOUNDS): raw < 0 или raw >= length()
        """
        self._ensure_open()
        raw = operator.index(raw)
        length = len(self._buffer)
        if not 0 <= raw < length:
            logger.debug("validate failed: offset=%d length=%d", raw, length)
            raise IndexingError.out_of_bounds(raw, length)
        return mint_index(raw, self._token, NonEmpty)

    def validate_range(self, start: int, end: int) -> Range:
        """
        Проверка сырого диапазона [start, end).

        Returns:
            Range; proof = NonEmpty если start < end

        Raises:
            IndexingError(OUT_OF_BOUNDS): start < 0
            IndexingError(PAST_END): start > end или end > length()
        """
        self._ensure_open()
        start = operator.index(start)
        end = operator.index(end)
        length = len(self._buffer)
        if start < 0:
            logger.debug("validate_range failed: start=%d length=%d", start, length)
            raise IndexingError.out_of_bounds(start, length)
        if start > end or end > length:
            logger.debug("validate_range failed: start=%d end=%d length=%d", start, end, length)
            raise IndexingError.past_end(start, end, length)
        return mint_range(start, end, self._token, NonEmpty if start < end else Unknown)

    def range(self) -> Range:
        """Весь контейнер."""
        self._ensure_open()
        length = len(self._buffer)
        return mint_range(0, length, self._token, NonEmpty if length else Unknown)

    def empty_range(self) -> Range:
        self._ensure_open()
        return mint_range(0, 0, self._token, Unknown)

    # =========================================================================
    # ДОСТУП
    # =========================================================================

    def get(self, index: Index) -> Any:
        """
        Элемент по доказанному индексу.

        Raises:
            IndexingError(OUT_OF_BOUNDS): edge index указывает за конец
        """
        self._check(index)
        return self._buffer.get_unchecked(self._deref(index.offset, index.proof))

    def get_range(self, r: Range) -> BufferView:
        """Регион по доказанному диапазону (view без копирования)."""
        self._check(r)
        self._debug_check_range(r)
        return self._buffer.view(r.start, r.end)

    def set(self, index: Index, value: Any) -> None:
        self._require_writable()
        self._check(index)
        self._buffer.set_unchecked(self._deref(index.offset, index.proof), value)

    def swap(self, i: Index, j: Index) -> None:
        """Обмен элементов (i и j могут совпадать)."""
        self._require_writable()
        self._check(i)
        self._check(j)
        self._buffer.swap_unchecked(
            self._deref(i.offset, i.proof), self._deref(j.offset, j.proof)
        )

    def rotate1_up(self, r: Range) -> None:
        """Циклический сдвиг r на одну позицию вправо (последний элемент встаёт первым)."""
        self._require_writable()
        self._check(r)
        if len(r) < 2:
            return
        self._debug_check_range(r)
        self._buffer.rotate_right_unchecked(r.start, r.end)

    def rotate1_down(self, r: Range) -> None:
        """Циклический сдвиг r на одну позицию влево (первый элемент встаёт последним)."""
        self._require_writable()
        self._check(r)
        if len(r) < 2:
            return
        self._debug_check_range(r)
        self._buffer.rotate_left_unchecked(r.start, r.end)

    def index_twice(self, r: Range, s: Range) -> Tuple[BufferView, BufferView]:
        """
        Два непересекающихся view, r перед s.

        Raises:
            IndexingError(ADJACENCY_MISMATCH): r заканчивается после начала s
        """
        self._check(r)
        self._check(s)
        if r.end > s.start:
            raise IndexingError.adjacency_mismatch(r.end, s.start)
        return self._buffer.view(r.start, r.end), self._buffer.view(s.start, s.end)

    # =========================================================================
    # РОСТ
    # =========================================================================

    def push(self, value: Any) -> Index:
        """
        Добавление в хвост.

        Все выданные значения остаются валидными: длина только выросла.

        Returns:
            Разыменовываемый Index нового элемента
        """
        self._require_growable()
        self._ensure_open()
        offset = self._buffer.push(value)
        return mint_index(offset, self._token, NonEmpty)

    def insert(self, index: Index, value: Any) -> None:
        """
        Вставка в позицию index (допускается edge index == length()).

        Выданные значения остаются в границах, но элементы сдвигаются.
        """
        self._require_growable()
        self._check(index)
        if self._config.debug_assertions and index.offset > len(self._buffer):
            raise AssertionError(f"insert position {index.offset} past the end")
        self._buffer.insert_unchecked(index.offset, value)

    # =========================================================================
    # РАЗБИЕНИЯ
    # =========================================================================

    def split_at(self, index: Index) -> Tuple[Range, Range]:
        """([0, index), [index, length)); proof index переходит ко второй части."""
        self._check(index)
        return (
            mint_range(0, index.offset, self._token, Unknown),
            mint_range(index.offset, len(self._buffer), self._token, index.proof),
        )

    def split_after(self, index: Index) -> Tuple[Range, Range]:
        """([0, index], (index, length)); первая часть включает index."""
        self._check(index)
        if index.proof is not NonEmpty:
            raise ValueError("split_after() requires a dereferenceable index")
        mid = index.offset + 1
        return (
            mint_range(0, mid, self._token, NonEmpty),
            mint_range(mid, len(self._buffer), self._token, Unknown),
        )

    def split_around(self, r: Range) -> Tuple[Range, Range]:
        """Диапазоны до r и после r: вместе с r покрывают контейнер."""
        self._check(r)
        return (
            mint_range(0, r.start, self._token, Unknown),
            mint_range(r.end, len(self._buffer), self._token, Unknown),
        )

    def before(self, index: Index) -> Range:
        self._check(index)
        return mint_range(0, index.offset, self._token, Unknown)

    def after(self, index: Index) -> Range:
        self._check(index)
        if index.proof is not NonEmpty:
            raise ValueError("after() requires a dereferenceable index")
        return mint_range(index.offset + 1, len(self._buffer), self._token, Unknown)

    # =========================================================================
    # ШАГИ
    # =========================================================================

    def forward(self, index: Index) -> Optional[Index]:
        """Следующий индекс, если он в границах; иначе None."""
        return self.forward_by(index, 1)

    def forward_by(self, index: Index, offset: int) -> Optional[Index]:
        self._check(index)
        i = index.offset + operator.index(offset)
        if 0 <= i < len(self._buffer):
            return mint_index(i, self._token, NonEmpty)
        return None

    def backward(self, index: Index) -> Optional[Index]:
        """Предыдущий индекс, если index не первый; иначе None."""
        self._check(index)
        if index.offset > 0:
            return mint_index(index.offset - 1, self._token, NonEmpty)
        return None

    def forward_range_by(self, r: Range, offset: int) -> Range:
        """
        Сдвиг r на offset с clamping к концу контейнера.

        Raises:
            ValueError: offset < 0
        """
        self._check(r)
        offset = operator.index(offset)
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        length = len(self._buffer)
        start = min(r.start + offset, length)
        end = min(r.end + offset, length)
        return mint_range(start, end, self._token, NonEmpty if start < end else Unknown)

    # =========================================================================
    # СКАНИРОВАНИЕ
    # =========================================================================

    def scan_from(self, index: Index, predicate: Predicate) -> Range:
        """
        Расширение вправо от index, пока predicate истинен на следующем элементе.

        Результат всегда включает index.
        """
        self._check(index)
        self._deref(index.offset, index.proof)
        get = self._buffer.get_unchecked
        length = len(self._buffer)
        end = index.offset + 1
        while end < length and predicate(get(end)):
            end += 1
        return mint_range(index.offset, end, self._token, NonEmpty)

    def scan_from_rev(self, index: Index, predicate: Predicate) -> Range:
        """
        Расширение влево от index, пока predicate истинен на предыдущем элементе.

        Результат всегда включает index.
        """
        self._check(index)
        self._deref(index.offset, index.proof)
        get = self._buffer.get_unchecked
        start = index.offset
        while start > 0 and predicate(get(start - 1)):
            start -= 1
        return mint_range(start, index.offset + 1, self._token, NonEmpty)

    def scan_range(self, r: Range, predicate: Predicate) -> Tuple[Range, Range]:
        """Префикс r, на котором predicate истинен, и остаток."""
        self._check(r)
        get = self._buffer.get_unchecked
        mid = r.start
        while mid < r.end and predicate(get(mid)):
            mid += 1
        return (
            mint_range(r.start, mid, self._token, Unknown),
            mint_range(mid, r.end, self._token, Unknown),
        )

    # =========================================================================
    # SUBSCRIPT
    # =========================================================================

    def __getitem__(self, key: Union[Index, Range, PIndex, PRange, PSlice]) -> Any:
        if isinstance(key, Index):
            return self.get(key)
        if isinstance(key, Range):
            return self.get_range(key)
        if isinstance(key, PIndex):
            return self.get_ptr(key)
        if isinstance(key, (PRange, PSlice)):
            return self.view_prange(key)
        raise TypeError(
            f"Container indices must be proven Index/Range values, not {type(key).__name__}"
        )

    def __setitem__(self, key: Union[Index, PIndex], value: Any) -> None:
        if isinstance(key, Index):
            self.set(key, value)
        elif isinstance(key, PIndex):
            self.set_ptr(key, value)
        else:
            raise TypeError(
                f"Container assignment requires a proven Index, not {type(key).__name__}"
            )

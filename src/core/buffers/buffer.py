"""
Buffer — абстракция непрерывного хранилища

Три варианта capability:
- ReadOnlyBuffer: чтение элемента и региона (tuple, str, bytes, read-only memoryview)
- MutableBuffer: + запись элемента, swap, сдвиги (фиксированная длина)
- GrowableBuffer: + push/insert, длина только растёт (list, bytearray, array)

Буфер оборачивает исходный объект без копирования: identity хранилища
фиксирована на всё время scope. Методы *_unchecked не проверяют границы:
их вызывает только Container с уже доказанными смещениями.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни один метод Buffer не уменьшает длину
2. push/insert увеличивают длину ровно на 1
"""

import array
import logging
from abc import ABC
from collections.abc import MutableSequence, Sequence
from enum import Enum
from typing import Any, Iterator, Union


logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class BufferKind(str, Enum):
    """Вариант capability буфера."""

    READ_ONLY = "read_only"
    MUTABLE = "mutable"
    GROWABLE = "growable"


# =============================================================================
# BUFFERS
# =============================================================================


class Buffer(ABC):
    """
    Базовая capability: длина и чтение по доказанному смещению.

    address — базовый адрес хранилища для pointer-слоя
    (адреса считаются в единицах элементов).
    """

    kind: BufferKind = BufferKind.READ_ONLY
    writable: bool = False
    growable: bool = False

    def __init__(self, storage: Any):
        self._storage = storage

    @property
    def storage(self) -> Any:
        return self._storage

    @property
    def address(self) -> int:
        return id(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def get_unchecked(self, offset: int) -> Any:
        return self._storage[offset]

    def view(self, start: int, end: int) -> "BufferView":
        return BufferView(self, start, end)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={len(self)})"


class ReadOnlyBuffer(Buffer):
    """Буфер только для чтения."""

    def __init__(self, storage: Sequence):
        if not isinstance(storage, (Sequence, memoryview, array.array)):
            raise TypeError(f"ReadOnlyBuffer requires a sequence, got {type(storage).__name__}")
        super().__init__(storage)


class MutableBuffer(ReadOnlyBuffer):
    """Буфер фиксированной длины с записью."""

    kind = BufferKind.MUTABLE
    writable = True

    def __init__(self, storage: Union[MutableSequence, memoryview]):
        if isinstance(storage, memoryview):
            if storage.readonly:
                raise TypeError("MutableBuffer requires a writable memoryview")
        elif not isinstance(storage, (MutableSequence, array.array)):
            raise TypeError(
                f"MutableBuffer requires a mutable sequence, got {type(storage).__name__}"
            )
        Buffer.__init__(self, storage)

    def set_unchecked(self, offset: int, value: Any) -> None:
        self._storage[offset] = value

    def swap_unchecked(self, i: int, j: int) -> None:
        storage = self._storage
        storage[i], storage[j] = storage[j], storage[i]

    def rotate_right_unchecked(self, start: int, end: int) -> None:
        """Циклический сдвиг [start, end) на одну позицию вправо."""
        storage = self._storage
        last = storage[end - 1]
        for k in range(end - 1, start, -1):
            storage[k] = storage[k - 1]
        storage[start] = last

    def rotate_left_unchecked(self, start: int, end: int) -> None:
        """Циклический сдвиг [start, end) на одну позицию влево."""
        storage = self._storage
        first = storage[start]
        for k in range(start, end - 1):
            storage[k] = storage[k + 1]
        storage[end - 1] = first

    def view(self, start: int, end: int) -> "MutableBufferView":
        return MutableBufferView(self, start, end)


class GrowableBuffer(MutableBuffer):
    """
    Растущий буфер: push/insert.

    Уменьшение длины (pop/remove/del) не предоставляется: выданные индексы
    обязаны оставаться в границах.
    """

    kind = BufferKind.GROWABLE
    growable = True

    def __init__(self, storage: MutableSequence):
        if not (hasattr(storage, "append") and hasattr(storage, "insert")):
            raise TypeError(
                f"GrowableBuffer requires append/insert support, got {type(storage).__name__}"
            )
        super().__init__(storage)

    def push(self, value: Any) -> int:
        """Добавление в хвост; возвращает смещение нового элемента."""
        offset = len(self._storage)
        self._storage.append(value)
        logger.debug("buffer push: offset=%d new_len=%d", offset, offset + 1)
        return offset

    def insert_unchecked(self, offset: int, value: Any) -> None:
        self._storage.insert(offset, value)
        logger.debug("buffer insert: offset=%d new_len=%d", offset, len(self._storage))


# =============================================================================
# VIEWS
# =============================================================================


class BufferView(Sequence):
    """
    Представление региона [start, end) буфера без копирования.

    Индексация view — относительная и проверяется обычным образом
    (это сырые int вызывающего кода, а не доказанные значения).
    """

    def __init__(self, buffer: Buffer, start: int, end: int):
        self._buffer = buffer
        self._start = start
        self._end = end

    def __len__(self) -> int:
        return self._end - self._start

    def _absolute(self, i: int) -> int:
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"view index {i} out of range for length {n}")
        return self._start + i

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self[k] for k in range(*i.indices(len(self)))]
        return self._buffer.get_unchecked(self._absolute(i))

    def __iter__(self) -> Iterator[Any]:
        get = self._buffer.get_unchecked
        for k in range(self._start, self._end):
            yield get(k)

    def __reversed__(self) -> Iterator[Any]:
        get = self._buffer.get_unchecked
        for k in range(self._end - 1, self._start - 1, -1):
            yield get(k)

    def tolist(self) -> list:
        return list(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (BufferView, list, tuple)):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.tolist()!r})"


class MutableBufferView(BufferView):
    """Представление региона с записью."""

    def __setitem__(self, i: int, value: Any) -> None:
        self._buffer.set_unchecked(self._absolute(i), value)

    def swap(self, i: int, j: int) -> None:
        self._buffer.swap_unchecked(self._absolute(i), self._absolute(j))


# =============================================================================
# COERCION
# =============================================================================


def as_buffer(obj: Any, growable_buffers: bool = True) -> Buffer:
    """
    Приведение объекта к Buffer.

    Args:
        obj: Buffer или встроенная последовательность
        growable_buffers: доступны ли растущие буферы

    Returns:
        - Buffer как есть
        - list/bytearray/array -> GrowableBuffer (MutableBuffer без growable_buffers)
        - memoryview -> MutableBuffer или ReadOnlyBuffer по флагу readonly
        - прочие MutableSequence -> MutableBuffer
        - прочие Sequence -> ReadOnlyBuffer

    Raises:
        ValueError: передан GrowableBuffer при выключенных growable_buffers
        TypeError: объект не является последовательностью
    """
    if isinstance(obj, Buffer):
        if obj.growable and not growable_buffers:
            raise ValueError("growable buffers are disabled by configuration")
        return obj

    if isinstance(obj, memoryview):
        return ReadOnlyBuffer(obj) if obj.readonly else MutableBuffer(obj)

    if isinstance(obj, (MutableSequence, array.array)):
        if growable_buffers and hasattr(obj, "append") and hasattr(obj, "insert"):
            return GrowableBuffer(obj)
        return MutableBuffer(obj)

    if isinstance(obj, Sequence):
        return ReadOnlyBuffer(obj)

    raise TypeError(f"cannot use {type(obj).__name__} as an indexing buffer")

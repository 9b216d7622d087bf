"""
Pointer values — указательные варианты Index и Range

Адрес — целое в единицах элементов: base + offset, где base — адрес
хранилища буфера (Buffer.address). Арифметика адресов не выходит за
[base, base + length]: каждое значение чеканится только Container'ом
или комбинаторами над уже доказанными значениями того же scope.

- PIndex: адрес элемента (NonEmpty) или edge-адрес (Unknown, past-the-end)
- PRange: пара адресов [start, end)
- PSlice: адрес начала и длина

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. PRange <-> PSlice <-> Range конвертируются без потерь
2. proof == NonEmpty  =>  длина > 0 (для PIndex: адрес разыменовываем)
"""

from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from src.core.domain.errors import BrandViolation, IndexingError
from src.core.domain.index import _MINT_KEY
from src.core.domain.proof import NonEmpty, ProofType, Unknown
from src.core.domain.token import Token


# =============================================================================
# PINDEX
# =============================================================================


@dataclass(frozen=True, repr=False)
class PIndex:
    """
    Доказанный адрес элемента.

    Равенство: тот же token и тот же адрес (proof не учитывается).
    """

    address: int
    token: Token
    proof: ProofType = field(default=NonEmpty, compare=False)
    _key: InitVar[object] = None

    def __post_init__(self, _key: object) -> None:
        if _key is not _MINT_KEY:
            raise TypeError("PIndex values are minted by a Container, not constructed directly")

    @property
    def is_edge(self) -> bool:
        return self.proof is not NonEmpty

    def after(self) -> "PIndex":
        """Адрес сразу после разыменовываемого элемента (edge)."""
        if self.proof is not NonEmpty:
            raise ValueError("after() requires a dereferenceable pointer")
        return mint_pindex(self.address + 1, self.token, Unknown)

    def no_proof(self) -> "PIndex":
        return mint_pindex(self.address, self.token, Unknown)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "kind": "pindex",
            "scope_id": self.token.scope_id,
            "start": self.address,
            "end": self.address + 1 if self.proof is NonEmpty else self.address,
            "nonempty": self.proof is NonEmpty,
        }

    def _ordered_with(self, other: object):
        if not isinstance(other, PIndex):
            return NotImplemented
        if other.token is not self.token:
            raise BrandViolation("pointers from different scopes cannot be ordered")
        return other

    def __lt__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.address < other.address

    def __le__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.address <= other.address

    def __gt__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.address > other.address

    def __ge__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.address >= other.address

    def __repr__(self) -> str:
        return f"PIndex({self.address:#x})"


# =============================================================================
# PRANGE
# =============================================================================


@dataclass(frozen=True, repr=False)
class PRange:
    """Доказанный диапазон адресов [start, end)."""

    start: int
    end: int
    token: Token
    proof: ProofType = field(default=Unknown, compare=False)
    _key: InitVar[object] = None

    def __post_init__(self, _key: object) -> None:
        if _key is not _MINT_KEY:
            raise TypeError("PRange values are minted by a Container, not constructed directly")

    def __len__(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def nonempty(self) -> "PRange":
        """
        Raises:
            IndexingError(EMPTY_RANGE): диапазон пуст
        """
        if self.start == self.end:
            raise IndexingError.empty_range(self.start)
        if self.proof is NonEmpty:
            return self
        return mint_prange(self.start, self.end, self.token, NonEmpty)

    def no_proof(self) -> "PRange":
        return mint_prange(self.start, self.end, self.token, Unknown)

    def to_pslice(self) -> "PSlice":
        return mint_pslice(self.start, self.end - self.start, self.token, self.proof)

    def _require_nonempty(self) -> None:
        if self.proof is not NonEmpty and self.start == self.end:
            raise IndexingError.empty_range(self.start)

    def split_in_half(self) -> Tuple["PRange", "PRange"]:
        """Upper middle попадает во вторую половину вместе с proof."""
        mid = self.start + len(self) // 2
        return (
            mint_prange(self.start, mid, self.token, Unknown),
            mint_prange(mid, self.end, self.token, self.proof),
        )

    def split_at(self, pointer: PIndex) -> Tuple["PRange", "PRange"]:
        """
        Разбиение по адресу pointer: ([start, pointer), [pointer, end)).

        Raises:
            IndexingError(OUT_OF_BOUNDS): pointer вне [start, end]
                (values в ошибке — адреса, а не смещения)
        """
        if pointer.token is not self.token:
            raise BrandViolation("pointer from a different scope")
        if not self.start <= pointer.address <= self.end:
            raise IndexingError.out_of_bounds(pointer.address, self.end)
        return (
            mint_prange(self.start, pointer.address, self.token, Unknown),
            mint_prange(pointer.address, self.end, self.token, Unknown),
        )

    def first(self) -> PIndex:
        self._require_nonempty()
        return mint_pindex(self.start, self.token, NonEmpty)

    def last(self) -> PIndex:
        self._require_nonempty()
        return mint_pindex(self.end - 1, self.token, NonEmpty)

    def upper_middle(self) -> PIndex:
        self._require_nonempty()
        return mint_pindex(self.start + len(self) // 2, self.token, NonEmpty)

    def front(self) -> PIndex:
        """Адрес начала; разыменовываем только для непустого диапазона."""
        return mint_pindex(self.start, self.token, self.proof)

    def past_the_end(self) -> PIndex:
        return mint_pindex(self.end, self.token, Unknown)

    def tail(self) -> "PRange":
        self._require_nonempty()
        return mint_prange(self.start + 1, self.end, self.token, Unknown)

    def init(self) -> "PRange":
        self._require_nonempty()
        return mint_prange(self.start, self.end - 1, self.token, Unknown)

    def advance(self) -> Optional["PRange"]:
        """Сдвиг start на 1, если диапазон остаётся непустым."""
        if self.start + 1 < self.end:
            return mint_prange(self.start + 1, self.end, self.token, NonEmpty)
        return None

    def advance_back(self) -> Optional["PRange"]:
        """Сдвиг end на -1, если диапазон остаётся непустым."""
        if self.start < self.end - 1:
            return mint_prange(self.start, self.end - 1, self.token, NonEmpty)
        return None

    def contains(self, pointer: PIndex) -> bool:
        if pointer.token is not self.token:
            raise BrandViolation("pointer from a different scope")
        return self.start <= pointer.address < self.end

    def snapshot(self) -> Dict[str, Any]:
        return {
            "kind": "prange",
            "scope_id": self.token.scope_id,
            "start": self.start,
            "end": self.end,
            "nonempty": self.proof is NonEmpty,
        }

    def __iter__(self) -> Iterator[PIndex]:
        for address in range(self.start, self.end):
            yield mint_pindex(address, self.token, NonEmpty)

    def __reversed__(self) -> Iterator[PIndex]:
        for address in range(self.end - 1, self.start - 1, -1):
            yield mint_pindex(address, self.token, NonEmpty)

    def __repr__(self) -> str:
        return f"PRange({self.start:#x}, len={len(self)})"


# =============================================================================
# PSLICE
# =============================================================================


@dataclass(frozen=True, repr=False)
class PSlice:
    """Доказанный диапазон адресов в представлении (start, length)."""

    start: int
    length: int
    token: Token
    proof: ProofType = field(default=Unknown, compare=False)
    _key: InitVar[object] = None

    def __post_init__(self, _key: object) -> None:
        if _key is not _MINT_KEY:
            raise TypeError("PSlice values are minted by a Container, not constructed directly")

    @property
    def end(self) -> int:
        return self.start + self.length

    def __len__(self) -> int:
        return self.length

    def is_empty(self) -> bool:
        return self.length == 0

    def nonempty(self) -> "PSlice":
        """
        Raises:
            IndexingError(EMPTY_RANGE): срез пуст
        """
        if self.length == 0:
            raise IndexingError.empty_range(self.start)
        if self.proof is NonEmpty:
            return self
        return mint_pslice(self.start, self.length, self.token, NonEmpty)

    def no_proof(self) -> "PSlice":
        return mint_pslice(self.start, self.length, self.token, Unknown)

    def to_prange(self) -> PRange:
        return mint_prange(self.start, self.end, self.token, self.proof)

    def _require_nonempty(self) -> None:
        if self.proof is not NonEmpty and self.length == 0:
            raise IndexingError.empty_range(self.start)

    def split_in_half(self) -> Tuple["PSlice", "PSlice"]:
        half = self.length // 2
        return (
            mint_pslice(self.start, half, self.token, Unknown),
            mint_pslice(self.start + half, self.length - half, self.token, self.proof),
        )

    def first(self) -> PIndex:
        self._require_nonempty()
        return mint_pindex(self.start, self.token, NonEmpty)

    def last(self) -> PIndex:
        self._require_nonempty()
        return mint_pindex(self.end - 1, self.token, NonEmpty)

    def upper_middle(self) -> PIndex:
        self._require_nonempty()
        return mint_pindex(self.start + self.length // 2, self.token, NonEmpty)

    def front(self) -> PIndex:
        return mint_pindex(self.start, self.token, self.proof)

    def past_the_end(self) -> PIndex:
        return mint_pindex(self.end, self.token, Unknown)

    def tail(self) -> "PSlice":
        self._require_nonempty()
        return mint_pslice(self.start + 1, self.length - 1, self.token, Unknown)

    def init(self) -> "PSlice":
        self._require_nonempty()
        return mint_pslice(self.start, self.length - 1, self.token, Unknown)

    def advance(self) -> Optional["PSlice"]:
        if self.length > 1:
            return mint_pslice(self.start + 1, self.length - 1, self.token, NonEmpty)
        return None

    def advance_back(self) -> Optional["PSlice"]:
        if self.length > 1:
            return mint_pslice(self.start, self.length - 1, self.token, NonEmpty)
        return None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "kind": "pslice",
            "scope_id": self.token.scope_id,
            "start": self.start,
            "end": self.end,
            "nonempty": self.proof is NonEmpty,
        }

    def __iter__(self) -> Iterator[PIndex]:
        return iter(self.to_prange())

    def __reversed__(self) -> Iterator[PIndex]:
        return reversed(self.to_prange())

    def __repr__(self) -> str:
        return f"PSlice({self.start:#x}, len={self.length})"


# =============================================================================
# MINTING
# =============================================================================


def mint_pindex(address: int, token: Token, proof: ProofType = NonEmpty) -> PIndex:
    return PIndex(address, token, proof, _key=_MINT_KEY)


def mint_prange(start: int, end: int, token: Token, proof: ProofType = Unknown) -> PRange:
    return PRange(start, end, token, proof, _key=_MINT_KEY)


def mint_pslice(start: int, length: int, token: Token, proof: ProofType = Unknown) -> PSlice:
    return PSlice(start, length, token, proof, _key=_MINT_KEY)

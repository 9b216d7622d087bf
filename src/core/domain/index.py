"""
Index — доказанная позиция в буфере

Immutable значение (offset, token, proof). Ссылки на буфер не хранит:
только token и смещение. Создаётся исключительно Container'ом или
комбинаторами над уже доказанными значениями.

- proof = NonEmpty: 0 <= offset < length (разыменовываемый индекс)
- proof = Unknown:  0 <= offset <= length (edge index, например past-the-end)

Длина буфера под token только растёт, поэтому инвариант сохраняется
на всё время жизни scope.
"""

from dataclasses import InitVar, dataclass, field
from typing import Any, Dict

from .errors import BrandViolation
from .proof import NonEmpty, ProofType, Unknown
from .token import Token


# Ключ чеканки значений; используется mint_* функциями этого пакета
_MINT_KEY = object()


@dataclass(frozen=True, repr=False)
class Index:
    """
    Доказанный индекс.

    Равенство: тот же token и то же смещение (proof не учитывается).
    Упорядочивание определено только внутри одного scope.
    """

    offset: int
    token: Token
    proof: ProofType = field(default=NonEmpty, compare=False)
    _key: InitVar[object] = None

    def __post_init__(self, _key: object) -> None:
        if _key is not _MINT_KEY:
            raise TypeError("Index values are minted by a Container, not constructed directly")

    def integer(self) -> int:
        """Сырое смещение."""
        return self.offset

    @property
    def is_edge(self) -> bool:
        """True, если индекс не доказан разыменовываемым."""
        return self.proof is not NonEmpty

    def after(self) -> "Index":
        """
        Индекс сразу после этого.

        offset + 1 <= length, так как сам индекс разыменовываем;
        результат — edge index.
        """
        if self.proof is not NonEmpty:
            raise ValueError("after() requires a dereferenceable index")
        return mint_index(self.offset + 1, self.token, Unknown)

    def no_proof(self) -> "Index":
        return mint_index(self.offset, self.token, Unknown)

    def snapshot(self) -> Dict[str, Any]:
        """Диагностический снапшот (схема range_snapshot.json, kind=index)."""
        return {
            "kind": "index",
            "scope_id": self.token.scope_id,
            "start": self.offset,
            "end": self.offset + 1 if self.proof is NonEmpty else self.offset,
            "nonempty": self.proof is NonEmpty,
        }

    def _ordered_with(self, other: object) -> "Index":
        if not isinstance(other, Index):
            return NotImplemented
        if other.token is not self.token:
            raise BrandViolation("indices from different scopes cannot be ordered")
        return other

    def __lt__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.offset < other.offset

    def __le__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.offset <= other.offset

    def __gt__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.offset > other.offset

    def __ge__(self, other: object) -> bool:
        other = self._ordered_with(other)
        if other is NotImplemented:
            return NotImplemented
        return self.offset >= other.offset

    def __repr__(self) -> str:
        return f"Index({self.offset})"


def mint_index(offset: int, token: Token, proof: ProofType = NonEmpty) -> Index:
    """Чеканка Index. Вызывающий отвечает за доказанность bounds."""
    return Index(offset, token, proof, _key=_MINT_KEY)

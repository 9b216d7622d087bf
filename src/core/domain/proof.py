"""
Proof — маркеры доказательств длины

Доказательство не несёт данных: это маркер-класс, хранящийся в значении
(Index/Range/PIndex/PRange/PSlice) и сообщающий, что уже известно о нём.

- NonEmpty: диапазон гарантированно непуст; индекс разыменовываем
- Unknown: про длину ничего не известно; индекс может быть edge (past-the-end)

ProofAdd: правило сложения доказательств при join/cover:
    (NonEmpty, Q) -> NonEmpty
    (Unknown, Q)  -> Q
"""

from typing import Protocol, Type


class Proof:
    """Базовый маркер доказательства. Экземпляры не создаются."""

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"{cls.__name__} is a proof marker and has no instances")


class NonEmpty(Proof):
    """Длина известна как ненулевая."""

    pass


class Unknown(Proof):
    """Длина неизвестна (может быть нулевой)."""

    pass


ProofType = Type[Proof]


def proof_add(p: ProofType, q: ProofType) -> ProofType:
    """
    Сумма доказательств для объединения двух значений.

    Args:
        p: доказательство левого операнда
        q: доказательство правого операнда

    Returns:
        NonEmpty если p == NonEmpty, иначе q
    """
    if p is NonEmpty:
        return NonEmpty
    return q


def is_nonempty(proof: ProofType) -> bool:
    return proof is NonEmpty


class Provable(Protocol):
    """Значение с доказательством, которое можно «забыть»."""

    @property
    def proof(self) -> ProofType: ...

    def no_proof(self) -> "Provable": ...

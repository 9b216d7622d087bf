"""
Token — брендирование scope

Token заменяет compile-time brand: объект-capability с уникальным
scope_id из монотонного счётчика. Вызывающий код не может его построить
(конструктор требует приватный ключ), а при выходе из scope token отзывается.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Два token из разных scope никогда не равны (сравнение по identity)
2. После revoke() ни одно значение этого token не принимается Container'ом
"""

import itertools
from typing import Final

from .errors import BrandViolation, ScopeClosedError


# Ключ выпуска token; доступен только модулю scope через issue_token()
_ISSUE_KEY: Final[object] = object()

# Монотонный счётчик scope_id (next() атомарен под GIL)
_SCOPE_IDS = itertools.count(1)


class Token:
    """
    Уникальная identity одного activation scope.

    Не сравнивается по значению: равенство — только identity объекта.
    """

    __slots__ = ("_scope_id", "_open")

    def __init__(self, scope_id: int, *, _key: object = None):
        if _key is not _ISSUE_KEY:
            raise TypeError("Token cannot be constructed directly; open a scope instead")
        self._scope_id = scope_id
        self._open = True

    @property
    def scope_id(self) -> int:
        return self._scope_id

    @property
    def is_open(self) -> bool:
        return self._open

    def revoke(self) -> None:
        """Закрытие scope: значения этого token становятся непригодными."""
        self._open = False

    def __repr__(self) -> str:
        state = "open" if self._open else "closed"
        return f"Token(scope_id={self._scope_id}, {state})"

    def __reduce__(self):
        raise TypeError("Token cannot be pickled or copied out of its scope")

    def __copy__(self) -> "Token":
        return self

    def __deepcopy__(self, memo) -> "Token":
        return self


def issue_token() -> Token:
    """Выпуск свежего token (вызывается только при открытии scope)."""
    return Token(next(_SCOPE_IDS), _key=_ISSUE_KEY)


def ensure_open(token: Token) -> None:
    if not token.is_open:
        raise ScopeClosedError(f"scope {token.scope_id} is closed")


def ensure_same_brand(expected: Token, actual: Token) -> None:
    """
    Проверка identity token (без проверки открытости scope).

    Raises:
        BrandViolation: token принадлежит другому scope
    """
    if actual is not expected:
        raise BrandViolation(
            f"value from scope {actual.scope_id} presented to scope {expected.scope_id}"
        )

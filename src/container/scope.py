"""
Scope entry — открытие scope индексирования

Каждый вход выпускает свежий token, оборачивает буфер в Container и
передаёт его callback'у (или в тело with). При выходе (в том числе по
исключению) token отзывается: значения scope и сам Container становятся
непригодными, поэтому вынести их из scope невозможно.

Открытие scope не может завершиться ошибкой индексирования; ошибки
callback'а пробрасываются без изменений.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from src.core.buffers import as_buffer
from src.core.config import DEFAULT_INDEXING_CONFIG, IndexingConfig
from src.core.domain.range import Range
from src.core.domain.token import issue_token
from src.container.container import Container


logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def scope(buffer: Any, config: Optional[IndexingConfig] = None) -> Iterator[Container]:
    """
    Context manager форма scope.

    Args:
        buffer: Buffer или встроенная последовательность (list, tuple, bytearray, ...)
        config: конфигурация scope (по умолчанию DEFAULT_INDEXING_CONFIG)

    Yields:
        Container со свежим token

    Raises:
        ValueError: GrowableBuffer при выключенных growable_buffers
        TypeError: buffer не является последовательностью
    """
    config = config or DEFAULT_INDEXING_CONFIG
    wrapped = as_buffer(buffer, growable_buffers=config.growable_buffers)
    token = issue_token()
    container = Container(wrapped, token, config)
    logger.debug("scope %d opened: %r", token.scope_id, wrapped)
    try:
        yield container
    finally:
        token.revoke()
        logger.debug("scope %d closed", token.scope_id)


def with_buffer(
    buffer: Any,
    callback: Callable[[Container], T],
    config: Optional[IndexingConfig] = None,
) -> T:
    """
    Выполнение callback над Container со свежим token.

    Returns:
        Результат callback (значения этого scope в нём непригодны после выхода)
    """
    with scope(buffer, config) as container:
        return callback(container)


def indices(
    buffer: Any,
    callback: Callable[[Container, Range], T],
    config: Optional[IndexingConfig] = None,
) -> T:
    """Как with_buffer, но callback получает также полный диапазон контейнера."""
    with scope(buffer, config) as container:
        return callback(container, container.range())

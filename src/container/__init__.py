"""
Container — брендированный буфер и точки входа в scope.
"""

from src.container.container import Container
from src.container.scope import indices, scope, with_buffer

__all__ = [
    "Container",
    "with_buffer",
    "scope",
    "indices",
]

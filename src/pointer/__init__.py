"""
Pointer layer — адресные варианты доказанных значений.

Contains PIndex, PRange, PSlice, the container pointer-access mixin and zip_ranges.
"""

from src.pointer.access import PointerAccessMixin, PointerRange, zip_ranges
from src.pointer.values import PIndex, PRange, PSlice, mint_pindex, mint_prange, mint_pslice

__all__ = [
    # Values
    "PIndex",
    "PRange",
    "PSlice",
    "PointerRange",
    "mint_pindex",
    "mint_prange",
    "mint_pslice",
    # Container access
    "PointerAccessMixin",
    "zip_ranges",
]

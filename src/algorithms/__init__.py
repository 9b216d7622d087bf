"""
Algorithms — поиск и сортировка на доказанном API индексирования.
"""

from src.algorithms.search import (
    SearchResult,
    binary_search,
    binary_search_by,
    binary_search_by_prange,
    binary_search_by_pslice,
    binary_search_seq_by,
    lower_bound,
    lower_bound_prange,
    lower_bound_pslice,
    lower_bound_seq,
)
from src.algorithms.sorting import (
    QS_INSERTION_SORT_THRESH,
    copy_prange,
    heapify,
    insertion_sort_indexes,
    insertion_sort_prange_lower,
    insertion_sort_ranges,
    merge_internal,
    quicksort_prange,
    quicksort_range,
    zip_dot_prange,
)

__all__ = [
    # Search
    "SearchResult",
    "lower_bound",
    "binary_search_by",
    "lower_bound_prange",
    "lower_bound_pslice",
    "binary_search_by_prange",
    "binary_search_by_pslice",
    "binary_search",
    "binary_search_seq_by",
    "lower_bound_seq",
    # Sorting
    "QS_INSERTION_SORT_THRESH",
    "quicksort_range",
    "quicksort_prange",
    "insertion_sort_indexes",
    "insertion_sort_ranges",
    "insertion_sort_prange_lower",
    "heapify",
    "merge_internal",
    "zip_dot_prange",
    "copy_prange",
]

"""
Tests for search algorithms

Проверяет:
1. lower_bound: predicate истинен слева от результата и ложен справа
2. binary_search_by: found iff элемент присутствует; иначе точка вставки
3. Совпадение pointer-вариантов с Index-вариантами
4. Сравнение с bisect стандартной библиотеки на случайных данных
"""

import bisect
import random

import pytest

from src.algorithms import (
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
from src.container import scope
from src.core.domain import NonEmpty


def cmp_to(x):
    """Comparator в форме element <=> x."""
    return lambda element: (element > x) - (element < x)


# =============================================================================
# LOWER BOUND
# =============================================================================


class TestLowerBound:
    """Тесты для lower_bound"""

    def test_basic(self) -> None:
        data = [1, 3, 3, 5, 7]
        with scope(data) as v:
            assert lower_bound(v, v.range(), lambda x: x < 3).integer() == 1
            assert lower_bound(v, v.range(), lambda x: x < 4).integer() == 3
            assert lower_bound(v, v.range(), lambda x: x < 0).integer() == 0
            assert lower_bound(v, v.range(), lambda x: x < 100).integer() == 5

    def test_result_is_edge(self) -> None:
        with scope([1, 2, 3]) as v:
            p = lower_bound(v, v.range(), lambda x: True)
            assert p.is_edge
            assert p == v.range().past_the_end()

    def test_empty_range(self) -> None:
        with scope([]) as v:
            assert lower_bound(v, v.range(), lambda x: x < 1).integer() == 0

    def test_subrange(self) -> None:
        data = [9, 1, 2, 3, 0]
        with scope(data) as v:
            r = v.validate_range(1, 4)
            assert lower_bound(v, r, lambda x: x < 3).integer() == 3

    def test_random_partition_property(self) -> None:
        """predicate истинен на [start, p) и ложен на [p, end)"""
        rng = random.Random(2024)
        for _ in range(200):
            data = sorted(rng.randint(0, 20) for _ in range(rng.randint(0, 30)))
            target = rng.randint(-2, 22)
            with scope(data) as v:
                r = v.range()
                p = lower_bound(v, r, lambda x: x < target)
                left, right = r.split_at(p)
                assert all(x < target for x in v[left])
                assert all(not x < target for x in v[right])
                assert p.integer() == bisect.bisect_left(data, target)

    def test_pointer_variants_agree(self) -> None:
        rng = random.Random(8)
        for _ in range(100):
            data = sorted(rng.randint(0, 50) for _ in range(rng.randint(0, 25)))
            target = rng.randint(0, 50)
            with scope(data) as v:
                expected = lower_bound(v, v.range(), lambda x: x < target).integer()
                p1 = lower_bound_prange(v, v.pointer_range(), lambda x: x < target)
                p2 = lower_bound_pslice(v, v.pointer_slice(), lambda x: x < target)
                assert v.distance_to(p1) == expected
                assert v.distance_to(p2) == expected

    def test_wrong_range_type(self) -> None:
        with scope([1, 2]) as v:
            with pytest.raises(TypeError):
                lower_bound(v, v.pointer_range(), lambda x: x < 1)
            with pytest.raises(TypeError):
                lower_bound_prange(v, v.range(), lambda x: x < 1)


# =============================================================================
# BINARY SEARCH
# =============================================================================


class TestBinarySearch:
    """Тесты для binary_search_by"""

    def test_found(self) -> None:
        data = [3, 7, 8, 11, 15, 22, 26]
        with scope(data) as v:
            result = binary_search_by(v, v.range(), cmp_to(11))
            assert result.found
            assert result.index.integer() == 3
            assert result.index.proof is NonEmpty
            assert v[result.index] == 11

    def test_not_found_insertion_point(self) -> None:
        data = [3, 7, 8, 11, 15, 22, 26]
        with scope(data) as v:
            result = binary_search_by(v, v.range(), cmp_to(12))
            assert not result.found
            assert result.index.integer() == 4
            assert result.index.is_edge

    def test_past_all(self) -> None:
        with scope([1, 2, 3]) as v:
            result = binary_search_by(v, v.range(), cmp_to(9))
            assert result == SearchResult(False, v.range().past_the_end())

    def test_empty(self) -> None:
        with scope([]) as v:
            result = binary_search_by(v, v.range(), cmp_to(1))
            assert not result.found
            assert result.index.integer() == 0

    @pytest.mark.parametrize("x", [2, 3, 7, 11, 25, 26, 27, 28])
    def test_sequence_helper(self, x) -> None:
        data = [3, 7, 8, 11, 15, 22, 26]
        result = binary_search(data, x)
        assert result.found == (x in data)
        if result.found:
            assert data[result.index] == x
        else:
            assert result.index == bisect.bisect_left(data, x)

    def test_random_search_correctness(self) -> None:
        """found iff элемент присутствует; иначе вставка сохраняет порядок"""
        rng = random.Random(31337)
        for _ in range(300):
            data = sorted(set(rng.randint(0, 60) for _ in range(rng.randint(0, 25))))
            x = rng.randint(-1, 61)
            with scope(data) as v:
                result = binary_search_by(v, v.range(), cmp_to(x))
                if x in data:
                    assert result.found
                    assert v[result.index] == x
                else:
                    assert not result.found
                    pos = result.index.integer()
                    assert sorted(data[:pos] + [x] + data[pos:]) == data[:pos] + [x] + data[pos:]

    def test_pointer_variants_agree(self) -> None:
        rng = random.Random(77)
        for _ in range(100):
            data = sorted(rng.randint(0, 40) for _ in range(rng.randint(0, 20)))
            x = rng.randint(0, 40)
            with scope(data) as v:
                base = binary_search_by(v, v.range(), cmp_to(x))
                pr = binary_search_by_prange(v, v.pointer_range(), cmp_to(x))
                ps = binary_search_by_pslice(v, v.pointer_slice(), cmp_to(x))
                assert base.found == pr.found == ps.found
                assert v.distance_to(pr.index) == base.index.integer()
                assert v.distance_to(ps.index) == base.index.integer()

    def test_seq_by_and_lower_bound_seq(self) -> None:
        data = (1, 4, 4, 9)
        assert binary_search_seq_by(data, cmp_to(9)) == SearchResult(True, 3)
        assert binary_search_seq_by(data, cmp_to(5)) == SearchResult(False, 3)
        assert lower_bound_seq(data, 4) == 1
        assert lower_bound_seq(data, 10) == 4

"""
Tests for Index / Range algebra

Проверяет законы алгебры диапазонов:
1. Partition law: join(*split_at(r, p)) == r
2. Adjacency law: join успешен iff a.end == b.start
3. Covering law: join_cover — минимальное покрытие
4. Proof: NonEmpty распространяется по правилу proof_add
"""

import random

import pytest

from src.container import scope
from src.core.domain import IndexingError, IndexingErrorKind, NonEmpty, Unknown


@pytest.fixture
def data():
    return list(range(10))


# =============================================================================
# ЗАКОНЫ
# =============================================================================


class TestPartitionLaw:
    """join(split_at(r, p)) == r"""

    def test_all_split_points(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 8)
            for p in range(2, 9):
                left, right = r.split_at(p)
                assert (left.start, left.end) == (2, p)
                assert (right.start, right.end) == (p, 8)
                assert left.join(right) == r

    def test_split_at_index(self, data) -> None:
        """Точка разбиения может быть Index того же scope"""
        with scope(data) as v:
            r = v.range()
            left, right = r.split_at(v.validate(4))
            assert (left.end, right.start) == (4, 4)

    @pytest.mark.parametrize("point", [1, 9, -1])
    def test_split_outside_range(self, data, point) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 8)
            with pytest.raises(IndexingError) as exc_info:
                r.split_at(point)
            assert exc_info.value.kind == IndexingErrorKind.OUT_OF_BOUNDS

    def test_random_partition(self) -> None:
        rng = random.Random(7)
        for _ in range(300):
            n = rng.randint(0, 30)
            with scope(list(range(n))) as v:
                s = rng.randint(0, n)
                e = rng.randint(s, n)
                r = v.validate_range(s, e)
                p = rng.randint(s, e)
                left, right = r.split_at(p)
                assert len(left) + len(right) == len(r)
                assert left.join(right) == r


class TestAdjacencyLaw:
    """join(a, b) успешен iff a.end == b.start"""

    def test_adjacent(self, data) -> None:
        with scope(data) as v:
            joined = v.validate_range(1, 3).join(v.validate_range(3, 6))
            assert (joined.start, joined.end) == (1, 6)

    def test_gap_rejected(self, data) -> None:
        with scope(data) as v:
            with pytest.raises(IndexingError) as exc_info:
                v.validate_range(1, 3).join(v.validate_range(4, 6))
            assert exc_info.value.kind == IndexingErrorKind.ADJACENCY_MISMATCH
            assert exc_info.value.values == (3, 4)

    def test_overlap_rejected(self, data) -> None:
        with scope(data) as v:
            with pytest.raises(IndexingError):
                v.validate_range(1, 5).join(v.validate_range(3, 6))

    def test_wrong_order_rejected(self, data) -> None:
        with scope(data) as v:
            with pytest.raises(IndexingError):
                v.validate_range(3, 6).join(v.validate_range(1, 3))

    def test_random_adjacency(self) -> None:
        rng = random.Random(11)
        with scope(list(range(20))) as v:
            for _ in range(300):
                a = sorted(rng.randint(0, 20) for _ in range(2))
                b = sorted(rng.randint(0, 20) for _ in range(2))
                ra = v.validate_range(*a)
                rb = v.validate_range(*b)
                if ra.end == rb.start:
                    assert ra.join(rb) == v.validate_range(ra.start, rb.end)
                else:
                    with pytest.raises(IndexingError):
                        ra.join(rb)


class TestCoveringLaw:
    """join_cover — минимальный диапазон, покрывающий оба"""

    def test_gap_covered(self, data) -> None:
        with scope(data) as v:
            cover = v.validate_range(1, 2).join_cover(v.validate_range(5, 7))
            assert (cover.start, cover.end) == (1, 7)

    def test_reverse_order_covered(self, data) -> None:
        with scope(data) as v:
            cover = v.validate_range(5, 7).join_cover(v.validate_range(1, 2))
            assert (cover.start, cover.end) == (1, 7)

    def test_join_cover_both_same(self, data) -> None:
        with scope(data) as v:
            a = v.validate_range(4, 6)
            b = v.validate_range(0, 9)
            assert a.join_cover_both(b) == a.join_cover(b) == b

    def test_random_cover(self) -> None:
        rng = random.Random(5)
        with scope(list(range(25))) as v:
            for _ in range(300):
                a = v.validate_range(*sorted(rng.randint(0, 25) for _ in range(2)))
                b = v.validate_range(*sorted(rng.randint(0, 25) for _ in range(2)))
                cover = a.join_cover(b)
                assert cover.contains_range(a)
                assert cover.contains_range(b)
                assert cover.start == min(a.start, b.start)
                assert cover.end == max(a.end, b.end)


# =============================================================================
# ПРОЧАЯ АЛГЕБРА
# =============================================================================


class TestRangeOperations:
    """Тесты для операций Range"""

    def test_first_last(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(3, 7)
            assert v[r.first()] == 3
            assert v[r.last()] == 6

    def test_first_on_empty(self, data) -> None:
        with scope(data) as v:
            with pytest.raises(IndexingError) as exc_info:
                v.validate_range(4, 4).first()
            assert exc_info.value.kind == IndexingErrorKind.EMPTY_RANGE
            with pytest.raises(IndexingError):
                v.empty_range().last()

    def test_nonempty(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 5).no_proof()
            assert r.proof is Unknown
            assert r.nonempty().proof is NonEmpty
            with pytest.raises(IndexingError) as exc_info:
                v.validate_range(2, 2).nonempty()
            assert exc_info.value.kind == IndexingErrorKind.EMPTY_RANGE

    def test_narrow(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 8)
            sub = r.narrow(3, 5)
            assert (sub.start, sub.end) == (3, 5)
            assert sub.proof is NonEmpty
            assert r.narrow(4, 4).is_empty()

    def test_narrow_errors(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 8)
            with pytest.raises(IndexingError) as exc_info:
                r.narrow(5, 3)
            assert exc_info.value.kind == IndexingErrorKind.PAST_END
            with pytest.raises(IndexingError) as exc_info:
                r.narrow(1, 4)
            assert exc_info.value.kind == IndexingErrorKind.OUT_OF_BOUNDS
            with pytest.raises(IndexingError) as exc_info:
                r.narrow(4, 9)
            assert exc_info.value.kind == IndexingErrorKind.OUT_OF_BOUNDS

    def test_contains(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 5)
            assert r.contains(v.validate(2))
            assert r.contains(v.validate(4))
            assert not r.contains(v.validate(5))
            assert v.validate(3) in r
            assert v.validate_range(3, 5) in r
            assert v.validate_range(3, 6) not in r
            assert 3 not in r

    def test_middles(self) -> None:
        with scope(list(range(4))) as v:
            r = v.range()
            assert r.upper_middle().integer() == 2
            assert r.lower_middle().integer() == 1
        with scope(list(range(5))) as v:
            r = v.range()
            assert r.upper_middle().integer() == 2
            assert r.lower_middle().integer() == 2

    def test_split_in_half(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(0, 5)
            lower, upper = r.split_in_half()
            assert (lower.start, lower.end, upper.start, upper.end) == (0, 2, 2, 5)
            assert upper.proof is NonEmpty
            assert lower.proof is Unknown

    def test_tail_init(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 5)
            assert (r.tail().start, r.tail().end) == (3, 5)
            assert (r.init().start, r.init().end) == (2, 4)

    def test_front_and_past_the_end(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 5)
            assert r.front().integer() == 2
            assert r.past_the_end().integer() == 5
            assert r.past_the_end().is_edge

    def test_frontiers(self, data) -> None:
        with scope(data) as v:
            head, tail = v.validate_range(2, 5).frontiers()
            assert head.is_empty() and tail.is_empty()
            assert (head.start, tail.start) == (2, 5)

    def test_advance(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 4)
            step = r.advance()
            assert (step.start, step.end) == (3, 4)
            assert step.advance() is None
            assert r.advance_by(2) is None
            back = r.advance_back()
            assert (back.start, back.end) == (2, 3)
            assert back.advance_back() is None

    def test_subdivide(self, data) -> None:
        with scope(data) as v:
            parts = list(v.range().subdivide(3))
            assert [(p.start, p.end) for p in parts] == [(0, 3), (3, 6), (6, 10)]
            assert all(p.proof is NonEmpty for p in parts)

    def test_subdivide_short_range(self, data) -> None:
        with scope(data) as v:
            assert list(v.validate_range(0, 2).subdivide(5)) == []

    def test_subdivide_invalid(self, data) -> None:
        with scope(data) as v:
            with pytest.raises(ValueError):
                list(v.range().subdivide(0))

    def test_random_subdivide_covers(self) -> None:
        rng = random.Random(3)
        for _ in range(100):
            n = rng.randint(0, 40)
            k = rng.randint(1, 8)
            with scope(list(range(n))) as v:
                parts = list(v.range().subdivide(k))
                if n >= k:
                    assert len(parts) == k
                    assert parts[0].start == 0 and parts[-1].end == n
                    sizes = [len(p) for p in parts]
                    assert max(sizes) - min(sizes) <= 1
                    for a, b in zip(parts, parts[1:]):
                        assert a.end == b.start

    def test_index_at(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 5)
            assert r.index_at(3).integer() == 3
            assert r.index_at(5) is None

    def test_range_forward_by(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(2, 5)
            assert r.forward_by(v.validate(2), 2).integer() == 4
            assert r.forward_by(v.validate(2), 3) is None
            moved = r.forward_range_by(v.validate_range(2, 4), 2)
            assert (moved.start, moved.end) == (4, 5)

    def test_negative_steps_rejected(self, data) -> None:
        """Шаг назад не может вывести диапазон за start"""
        with scope(data) as v:
            r = v.validate_range(2, 5)
            with pytest.raises(ValueError, match="non-negative"):
                r.forward_range_by(v.validate_range(2, 4), -2)
            with pytest.raises(ValueError, match="non-negative"):
                v.range().advance_by(-2)
            with pytest.raises(TypeError):
                r.advance_by(1.5)
            assert r.forward_by(v.validate(3), -1) is None

    def test_iteration(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(3, 6)
            assert [i.integer() for i in r] == [3, 4, 5]
            assert [i.integer() for i in reversed(r)] == [5, 4, 3]
            assert all(i.proof is NonEmpty for i in r)

    def test_as_range_and_slice(self, data) -> None:
        with scope(data) as v:
            r = v.validate_range(3, 6)
            assert r.as_range() == range(3, 6)
            assert data[r.as_slice()] == [3, 4, 5]

    def test_index_after(self, data) -> None:
        with scope(data) as v:
            i = v.validate(9)
            edge = i.after()
            assert edge.integer() == 10
            assert edge.is_edge
            with pytest.raises(ValueError):
                edge.after()

    def test_index_ordering(self, data) -> None:
        with scope(data) as v:
            assert v.validate(1) < v.validate(2) <= v.validate(2)
            assert max(v.validate(4), v.validate(7)).integer() == 7

    def test_values_are_immutable(self, data) -> None:
        with scope(data) as v:
            r = v.range()
            with pytest.raises(AttributeError):
                r.start = 3

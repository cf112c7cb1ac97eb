"""
Tests for the Loop container.
"""

import math

import numpy as np
import pytest

from braidflow.core.loop import Loop
from braidflow.validation import BadArgumentError


class TestConstruction:

    def test_integers_become_floats(self):
        loop = Loop([0, 1])
        assert loop.coords.dtype == np.float64
        assert loop.basepoint is False

    def test_object_dtype_kept(self):
        loop = Loop(np.array([0, -1], dtype=object))
        assert loop.coords.dtype == object

    @pytest.mark.parametrize('coords', [[], [1, 2, 3]])
    def test_bad_sizes(self, coords):
        with pytest.raises(BadArgumentError):
            Loop(coords)

    def test_non_numeric(self):
        with pytest.raises(BadArgumentError):
            Loop(['a', 'b'])

    def test_from_ab(self):
        loop = Loop.from_ab([1, 2], [3, 4])
        assert loop.a.tolist() == [1.0, 2.0]
        assert loop.b.tolist() == [3.0, 4.0]

    def test_from_ab_mismatch(self):
        with pytest.raises(BadArgumentError):
            Loop.from_ab([1, 2], [3])


class TestGeneratingSet:
    """Canonical basepoint loop a = 0, b = -1."""

    @pytest.mark.parametrize('n', [2, 3, 5, 8])
    def test_shape(self, n):
        loop = Loop.generating_set(n)
        assert loop.basepoint
        assert loop.n == n + 1
        assert loop.m == n - 1
        assert np.all(loop.a == 0)
        assert np.all(loop.b == -1)

    @pytest.mark.parametrize('n', [3, 4, 6])
    def test_lengths(self, n):
        loop = Loop.generating_set(n)
        assert loop.intaxis() == 2 * (n - 1)
        assert loop.minlength() == n * (n - 1)
        assert loop.l2norm() == pytest.approx(math.sqrt(2 * (n - 1)))

    def test_exact(self):
        loop = Loop.generating_set(4, exact=True)
        assert loop.coords.dtype == object
        assert isinstance(loop.intaxis(), int)

    def test_too_few_strands(self):
        with pytest.raises(BadArgumentError):
            Loop.generating_set(1)


class TestComparison:

    def test_equality(self):
        assert Loop([0, 1]) == Loop([0.0, 1.0])
        assert Loop([0, 1]) != Loop([0, 1], basepoint=True)
        assert Loop([0, 1]) != Loop([0, 1, 0, 1])

    def test_division(self):
        loop = Loop([2, -4], basepoint=True) / 2
        assert loop == Loop([1, -2], basepoint=True)

    def test_isclose(self):
        assert Loop([1, 1]).isclose(Loop([1 + 1e-12, 1]))
        assert not Loop([1, 1]).isclose(Loop([1.1, 1]))
        assert not Loop([1, 1]).isclose(Loop([1, 1, 1, 1]))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Loop([0, 1]))

    def test_len_and_copy(self):
        loop = Loop([0, 1, 2, 3])
        clone = loop.copy()
        clone.coords[0] = 9
        assert len(loop) == 4
        assert loop.coords[0] == 0


class TestLengthAccessors:

    def test_length_flag(self):
        loop = Loop([0, 0, -1, -1])
        assert loop.length('intaxis') == 4
        assert loop.length() == pytest.approx(math.sqrt(2))

    def test_intersections(self):
        mu, nu = Loop([0, 1]).intersections()
        assert nu.tolist() == [2, 0]
        assert mu.tolist() == [1, 1]


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

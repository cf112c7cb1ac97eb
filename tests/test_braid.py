"""
Tests for Braid words.
"""

import math

import numpy as np
import pytest

from braidflow.core.braid import Braid
from braidflow.core.loop import Loop
from braidflow.validation import BadArgumentError


class TestConstruction:

    def test_default_strands(self):
        assert Braid([1, -2]).n == 3
        assert Braid([]).n == 1

    def test_explicit_strands(self):
        b = Braid([1], 4)
        assert b.n == 4
        assert b.word.dtype == np.int64

    def test_integral_floats_accepted(self):
        assert Braid([1.0, -2.0]).word.tolist() == [1, -2]

    @pytest.mark.parametrize('word, n', [
        ([0, 1], None),
        ([1.5], None),
        ([3], 3),
        ([1], 0),
    ])
    def test_rejected(self, word, n):
        with pytest.raises(BadArgumentError):
            Braid(word, n)

    def test_repr_and_len(self):
        b = Braid([1, -2], 3)
        assert len(b) == 2
        assert repr(b) == "Braid([1, -2], n=3)"


class TestEquality:

    def test_lexeq(self):
        assert Braid([1, -2], 3) == Braid([1, -2], 3)
        assert Braid([1, -2], 3) != Braid([1, -2], 4)
        assert Braid([1, -2], 3) != Braid([-2, 1], 3)

    def test_relation_not_lexically_equal(self):
        # equal as braids, different as words
        assert not Braid([1, 2, 1]).lexeq(Braid([2, 1, 2]))


class TestProducts:

    def test_concatenation(self):
        b = Braid([1], 2) * Braid([-2], 3)
        assert b.word.tolist() == [1, -2]
        assert b.n == 3

    def test_tensor(self):
        b = Braid([1], 2).tensor(Braid([-1, 2], 3))
        assert b.word.tolist() == [1, -3, 4]
        assert b.n == 5

    def test_act(self):
        loop = Braid([1, -2], 3) * Loop.generating_set(3)
        assert loop.a.tolist() == [-1.0, 1.0]
        assert loop.b.tolist() == [-2.0, 1.0]

    def test_act_needs_enough_punctures(self):
        with pytest.raises(BadArgumentError):
            Braid([1, -2, 3], 4).act(Loop([0, 1]))

    def test_relation_acts_identically(self):
        loop = Loop.generating_set(3)
        assert Braid([1, 2, 1]) * loop == Braid([2, 1, 2]) * loop


class TestSubbraid:

    def test_follows_permutation(self):
        # sigma_1 swaps strands 1 and 2, so sigma_2 then crosses 1 and 3
        sub = Braid([1, 2], 3).subbraid([1, 3])
        assert sub.word.tolist() == [1]
        assert sub.n == 2

    def test_indices(self):
        sub, kept = Braid([1, 2, -1], 3).subbraid([2, 3], return_indices=True)
        assert kept.tolist() == [2]
        assert sub.word.tolist() == [-1]

    def test_all_strands(self):
        b = Braid([1, -2, 1], 3)
        assert b.subbraid([1, 2, 3]) == b

    @pytest.mark.parametrize('strands', [[], [0, 1], [1, 4], [1, 1], [1.5, 2]])
    def test_bad_strands(self, strands):
        with pytest.raises(BadArgumentError):
            Braid([1, 2], 3).subbraid(strands)


class TestEntropy:

    def test_entropy(self):
        assert Braid([1, -2], 3).entropy() == pytest.approx(
            math.log((3 + math.sqrt(5)) / 2), abs=1e-5
        )

    def test_entropy_estimate(self):
        result = Braid([1, -2], 3).entropy_estimate(onestep=True)
        assert result.iterations == 1

    def test_complexity(self):
        assert Braid([1, -2], 3).complexity() == pytest.approx(math.log(4))

    def test_trivial(self):
        assert Braid([1, 1, 1], 2).entropy() == 0.0


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

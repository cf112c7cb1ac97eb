"""
Tests for ChronoBraid: chronology checks, chronology-preserving
operations, and the finite-time braiding exponent.
"""

import math

import numpy as np
import pytest

from braidflow.core.braid import Braid
from braidflow.core.collaborators import ByProjectionAngle, ByTimestamps
from braidflow.core.databraid import ChronoBraid, tensor
from braidflow.core.loop import Loop
from braidflow.validation import (
    BadArgumentError,
    BadTimesError,
    ChronologyError,
    NotChronologicalError,
    UndefinedOperationError,
)


class TestConstruction:

    def test_default_times(self):
        cb = ChronoBraid([1, -2, 1])
        assert cb.tcross.tolist() == [1.0, 2.0, 3.0]
        assert cb.n == 3

    def test_from_braid(self):
        cb = ChronoBraid(Braid([1], 4), [0.5])
        assert cb.n == 4
        assert cb.word.tolist() == [1]

    def test_to_braid(self):
        cb = ChronoBraid([1, -2], [0.0, 1.0], n=4)
        assert cb.to_braid() == Braid([1, -2], 4)
        assert cb.braid == Braid([1, -2], 4)

    def test_times_count_mismatch(self):
        with pytest.raises(BadTimesError):
            ChronoBraid([1, 2], [1.0])

    def test_decreasing_times(self):
        with pytest.raises(BadTimesError):
            ChronoBraid([1, 2], [2.0, 1.0])

    def test_simultaneous_noncommuting(self):
        with pytest.raises(BadTimesError):
            ChronoBraid([1, 2], [1.0, 1.0])
        with pytest.raises(BadTimesError):
            ChronoBraid([2, -2], [1.0, 1.0])

    @pytest.mark.parametrize('tcross', [[np.nan], [1.0, np.nan], [np.nan, 2.0]])
    def test_nan_times(self, tcross):
        word = [1, 3][:len(tcross)]
        with pytest.raises(BadTimesError):
            ChronoBraid(word, tcross, n=4)

    def test_simultaneous_commuting(self):
        cb = ChronoBraid([1, 3], [1.0, 1.0], n=4)
        assert len(cb) == 2

    def test_chronology_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            ChronoBraid([1], [1.0, 2.0])


class TestEquality:

    def test_same(self):
        assert ChronoBraid([1, -2], [1, 2]) == ChronoBraid([1, -2], [1.0, 2.0])

    def test_times_matter(self):
        assert ChronoBraid([1, -2], [1, 2]) != ChronoBraid([1, -2], [1, 3])

    def test_strands_matter(self):
        assert ChronoBraid([1], [1], n=2) != ChronoBraid([1], [1], n=3)


class TestProduct:

    def test_chronological(self):
        cb = ChronoBraid([1], [1.0], n=3) * ChronoBraid([-2], [2.0], n=3)
        assert cb.word.tolist() == [1, -2]
        assert cb.tcross.tolist() == [1.0, 2.0]

    def test_strand_count_is_max(self):
        cb = ChronoBraid([1], [1.0], n=2) * ChronoBraid([3], [2.0], n=4)
        assert cb.n == 4

    def test_touching_times_allowed(self):
        cb = ChronoBraid([1], [1.0], n=4) * ChronoBraid([3], [1.0], n=4)
        assert cb.tcross.tolist() == [1.0, 1.0]

    def test_overlap_rejected(self):
        with pytest.raises(NotChronologicalError):
            ChronoBraid([1], [2.0], n=3) * ChronoBraid([2], [1.0], n=3)

    def test_overlap_is_chronology_error(self):
        with pytest.raises(ChronologyError):
            ChronoBraid([1, 1], [1.0, 3.0]) * ChronoBraid([1], [2.0])

    def test_acts_on_loop(self):
        loop = Loop.generating_set(3)
        cb = ChronoBraid([1, -2], [0.1, 0.2])
        assert cb * loop == Braid([1, -2], 3) * loop


class TestTensor:

    def test_merged_by_time(self):
        left = ChronoBraid([1], [1.0], n=2)
        right = ChronoBraid([1], [0.5], n=2)
        cb = tensor(left, right)
        assert cb.word.tolist() == [3, 1]
        assert cb.tcross.tolist() == [0.5, 1.0]
        assert cb.n == 4

    def test_ties_keep_left_first(self):
        cb = ChronoBraid([1], [1.0], n=2).tensor(ChronoBraid([-1], [1.0], n=2))
        assert cb.word.tolist() == [1, -3]

    def test_three_operands(self):
        a = ChronoBraid([1], [1.0], n=2)
        b = ChronoBraid([1], [0.5], n=2)
        c = ChronoBraid([-1], [2.0], n=2)
        cb = tensor(a, b, c)
        assert cb.word.tolist() == [3, 1, -5]
        assert cb.tcross.tolist() == [0.5, 1.0, 2.0]
        assert cb.n == 6

    def test_needs_two(self):
        with pytest.raises(BadArgumentError):
            tensor(ChronoBraid([1], [1.0]))

    def test_only_chronobraids(self):
        with pytest.raises(BadArgumentError):
            tensor(ChronoBraid([1], [1.0]), Braid([1]))


class TestCompact:

    def test_nested_cancellation(self):
        cb = ChronoBraid([1, 2, -2, -1, 3], [1, 2, 3, 4, 5], n=4).compact()
        assert cb.word.tolist() == [3]
        assert cb.tcross.tolist() == [5.0]
        assert cb.n == 4

    def test_idempotent(self):
        once = ChronoBraid([1, 2, -2, -1, 3, 1], [1, 2, 3, 4, 5, 6], n=4).compact()
        assert once.compact() == once

    def test_nothing_to_cancel(self):
        cb = ChronoBraid([1, 2, 1], [1, 2, 3])
        assert cb.compact() == cb

    def test_everything_cancels(self):
        cb = ChronoBraid([2, -2, 1, -1], [1, 2, 3, 4]).compact()
        assert len(cb) == 0
        assert cb.n == 3


class TestTrunc:

    @pytest.fixture
    def cb(self):
        return ChronoBraid([1, -2, 1], [1.0, 2.0, 3.0])

    def test_interval(self, cb):
        out = cb.trunc([1.5, 3])
        assert out.word.tolist() == [-2, 1]
        assert out.tcross.tolist() == [2.0, 3.0]
        assert out.n == 3

    def test_scalar_is_upper_bound(self, cb):
        out = cb.trunc(2)
        assert out.word.tolist() == [1, -2]

    def test_closed_interval(self, cb):
        assert len(cb.trunc([1, 1])) == 1

    @pytest.mark.parametrize('interval', [[], [1, 2, 3], 'ab', None])
    def test_bad_interval(self, cb, interval):
        with pytest.raises(BadArgumentError):
            cb.trunc(interval)


class TestSubbraid:

    def test_times_follow_crossings(self):
        cb = ChronoBraid([1, 2], [1.0, 2.0]).subbraid([1, 3])
        assert cb.word.tolist() == [1]
        assert cb.tcross.tolist() == [2.0]
        assert cb.n == 2


class TestFTBE:
    """One pass of [1, -1, 2] doubles the discounted intaxis length."""

    @pytest.fixture
    def cb(self):
        return ChronoBraid([1, -1, 2], [0.0, 1.0, 3.0])

    def test_projective(self, cb):
        assert cb.ftbe() == pytest.approx(math.log(2) / 3)

    def test_nonprojective(self, cb):
        assert cb.ftbe(method='nonproj') == pytest.approx(math.log(2) / 3)

    def test_methods_agree(self):
        cb = ChronoBraid([1, -2] * 10, np.arange(20.0))
        assert cb.ftbe('proj') == pytest.approx(cb.ftbe('nonproj'), rel=1e-9)

    def test_aliases(self, cb):
        assert cb.ftbe('entropy') == cb.ftbe('proj')
        assert cb.ftbe('complexity') == cb.ftbe('nonproj')

    def test_base(self, cb):
        assert cb.ftbe(base=2) == pytest.approx(1 / 3)

    def test_natural_base(self, cb):
        assert cb.ftbe(base=math.e) == pytest.approx(cb.ftbe())
        assert cb.ftbe(method='nonproj', base=math.e) == pytest.approx(cb.ftbe(method='nonproj'))

    def test_explicit_interval(self, cb):
        assert cb.ftbe(T=1.5) == pytest.approx(math.log(2) / 1.5)

    def test_zero_interval(self):
        with pytest.raises(BadArgumentError):
            ChronoBraid([1, 3], [1.0, 1.0], n=4).ftbe()

    @pytest.mark.parametrize('kwargs', [
        {'method': 'bogus'},
        {'base': 1},
        {'base': -2},
        {'T': -1.0},
    ])
    def test_bad_arguments(self, cb, kwargs):
        with pytest.raises(BadArgumentError):
            cb.ftbe(**kwargs)


class TestUndefined:
    """Operations that reorder or repeat crossings are refused."""

    @pytest.fixture
    def cb(self):
        return ChronoBraid([1, -2], [1.0, 2.0])

    def test_inverse(self, cb):
        with pytest.raises(UndefinedOperationError):
            cb.inv()
        with pytest.raises(UndefinedOperationError):
            ~cb

    def test_power(self, cb):
        with pytest.raises(UndefinedOperationError):
            cb ** 2

    def test_entropy_points_to_ftbe(self, cb):
        with pytest.raises(UndefinedOperationError, match="ftbe"):
            cb.entropy()

    def test_complexity(self, cb):
        with pytest.raises(TypeError) as excinfo:
            cb.complexity()
        assert excinfo.value.code == "databraid:complexity:undefined"


class TestFromTrajectories:

    @staticmethod
    def fake_braider(XY, t, angle):
        # one crossing at the second sample
        return Braid([1], XY.shape[2]), [t[1]]

    def test_timestamps(self):
        XY = np.zeros((3, 2, 2))
        cb = ChronoBraid.from_trajectories(XY, ByTimestamps([0.0, 0.5, 1.0]), self.fake_braider)
        assert cb.tcross.tolist() == [0.5]
        assert cb.n == 2

    def test_projection_angle(self):
        XY = np.zeros((3, 2, 2))
        cb = ChronoBraid.from_trajectories(XY, ByProjectionAngle(0.3), self.fake_braider)
        assert cb.tcross.tolist() == [2.0]

    def test_angle_passed_through(self):
        seen = {}

        def braider(XY, t, angle):
            seen['angle'] = angle
            return Braid([], 2), []

        ChronoBraid.from_trajectories(np.zeros((2, 2, 2)), ByProjectionAngle(1.25), braider)
        assert seen['angle'] == 1.25

    def test_bad_shape(self):
        with pytest.raises(BadArgumentError):
            ChronoBraid.from_trajectories(np.zeros((3, 3, 2)), ByProjectionAngle(), self.fake_braider)

    def test_times_mismatch(self):
        with pytest.raises(BadArgumentError):
            ChronoBraid.from_trajectories(np.zeros((3, 2, 2)), ByTimestamps([0.0, 1.0]), self.fake_braider)

    def test_unknown_sampling(self):
        with pytest.raises(BadArgumentError):
            ChronoBraid.from_trajectories(np.zeros((3, 2, 2)), 0.5, self.fake_braider)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])

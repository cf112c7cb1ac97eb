"""
ChronoBraid - Braids With Crossing Times
========================================

A braid built from data remembers when each crossing happened. The crossing
times make some braid operations meaningless (inverses and powers reorder
or duplicate events, iterating a one-off event has no entropy), so a
ChronoBraid wraps a Braid instead of extending it and exposes only the
operations that respect chronology:

    ==          same word, same strand count, identical crossing times
    b1 * b2     chronological concatenation (b1 entirely before b2)
    b * loop    action on a loop
    tensor      side-by-side product, crossings merged by time
    compact     cancel adjacent g, -g pairs without reordering
    trunc       keep crossings inside a time interval
    subbraid    restrict to a strand subset
    ftbe        Finite-Time Braiding Exponent

FTBE is to braid entropy what finite-time Lyapunov exponents are to
Lyapunov exponents: the growth of the generating set E under one pass of
the braid, per unit of physical time,

    E = log(|B.E| / |E|) / T

with T the span of crossing times unless given.
"""

import math
from functools import reduce
from typing import Optional, Sequence, Union

import numpy as np

from braidflow.config import BraidflowConfig, default_config
from braidflow.config.schema import FTBE_METHOD_ALIASES
from braidflow.validation.chronology import check_tcross, check_interval
from braidflow.validation.errors import (
    BadArgumentError,
    NotChronologicalError,
    UndefinedOperationError,
)
from .braid import Braid
from .collaborators import ColorBraider, Sampling, check_trajectories, resolve_sampling
from .entropy import estimate_entropy, complexity
from .length import LengthFlag
from .loop import Loop


class ChronoBraid:
    """Braid word with a nondecreasing crossing time per generator."""

    __slots__ = ('_braid', 'tcross')

    def __init__(
        self,
        braid: Union[Braid, Sequence[int]],
        tcross: Optional[Sequence[float]] = None,
        n: Optional[int] = None,
    ):
        """
        Args:
            braid: A Braid, or a list of signed generators
            tcross: Crossing times (default 1..len)
            n: Strand count when ``braid`` is a plain word

        Raises:
            BadTimesError: Times do not match the word or break chronology
        """
        if isinstance(braid, Braid):
            if n is not None and n != braid.n:
                braid = Braid(braid.word, n)
        else:
            braid = Braid(braid, n)

        if tcross is None:
            tcross = np.arange(1, len(braid) + 1, dtype=np.float64)
        tcross = np.asarray(tcross, dtype=np.float64).ravel()

        check_tcross(braid.word, tcross)

        self._braid = braid
        self.tcross = tcross

    @classmethod
    def from_trajectories(
        cls,
        XY,
        sampling: Sampling,
        colorbraiding: ColorBraider,
    ) -> "ChronoBraid":
        """
        Build a ChronoBraid from particle trajectories.

        Args:
            XY: Array of shape (nsteps, 2, nparticles)
            sampling: ByProjectionAngle(angle) or ByTimestamps(times, angle)
            colorbraiding: Crossing detector returning (Braid, tcross)
        """
        XY = check_trajectories(XY)
        t, angle = resolve_sampling(sampling, XY.shape[0])
        braid, tcross = colorbraiding(XY, t, angle)
        return cls(braid, tcross)

    @classmethod
    def _unchecked(cls, braid: Braid, tcross: np.ndarray) -> "ChronoBraid":
        # Skips argument coercion; chronology is still checked.
        obj = cls.__new__(cls)
        obj._braid = braid
        obj.tcross = tcross
        check_tcross(braid.word, tcross)
        return obj

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def word(self) -> np.ndarray:
        return self._braid.word

    @property
    def n(self) -> int:
        return self._braid.n

    def to_braid(self) -> Braid:
        """Drop the crossing times."""
        return Braid(self._braid.word.copy(), self._braid.n)

    braid = property(to_braid)

    def __len__(self) -> int:
        return len(self._braid)

    def __repr__(self) -> str:
        return (
            f"ChronoBraid({self.word.tolist()}, tcross={self.tcross.tolist()}, n={self.n})"
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChronoBraid):
            return NotImplemented
        return (
            self._braid.lexeq(other._braid)
            and self.tcross.shape == other.tcross.shape
            and bool(np.all(self.tcross == other.tcross))
        )

    __hash__ = None

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def __mul__(self, other: Union["ChronoBraid", Loop]):
        """Chronological product with another ChronoBraid, or action on a loop."""
        if isinstance(other, ChronoBraid):
            if len(self) and len(other) and self.tcross.max() > other.tcross.min():
                raise NotChronologicalError(
                    "First braid must have earlier times than second."
                )
            return ChronoBraid._unchecked(
                Braid(np.concatenate([self.word, other.word]), max(self.n, other.n)),
                np.concatenate([self.tcross, other.tcross]),
            )
        if isinstance(other, Loop):
            return self._braid.act(other)
        return NotImplemented

    def tensor(self, *others: "ChronoBraid") -> "ChronoBraid":
        """Tensor product with one or more ChronoBraids (see module ``tensor``)."""
        return tensor(self, *others)

    # -------------------------------------------------------------------------
    # Chronology-preserving reductions
    # -------------------------------------------------------------------------

    def compact(self) -> "ChronoBraid":
        """
        Cancel adjacent inverse generators, keeping the order of the rest.

        Pairs (g, -g) at even offsets are removed first, then at odd offsets;
        the pass repeats until nothing changes. Weaker than a full braid
        reduction, since generators are never moved past each other.
        """
        word = self.word.tolist()
        tcross = self.tcross.tolist()

        shorter = True
        while shorter:
            shorter = False
            for start in (0, 1):
                for i in range(start, len(word) - 1, 2):
                    if word[i] != 0 and word[i] == -word[i + 1]:
                        word[i] = word[i + 1] = 0
                        shorter = True
            keep = [k for k, g in enumerate(word) if g != 0]
            word = [word[k] for k in keep]
            tcross = [tcross[k] for k in keep]

        return ChronoBraid._unchecked(
            Braid(np.asarray(word, dtype=np.int64), self.n),
            np.asarray(tcross, dtype=np.float64),
        )

    def trunc(self, interval: Union[float, Sequence[float]]) -> "ChronoBraid":
        """
        Keep crossings with lo <= tcross <= hi.

        A single number keeps crossings with tcross <= interval.
        """
        lo, hi = check_interval(interval)
        sel = (self.tcross >= lo) & (self.tcross <= hi)
        return ChronoBraid._unchecked(Braid(self.word[sel], self.n), self.tcross[sel])

    def subbraid(self, strands: Sequence[int]) -> "ChronoBraid":
        """Restrict to a subset of strands; times follow the kept crossings."""
        sub, kept = self._braid.subbraid(strands, return_indices=True)
        return ChronoBraid._unchecked(sub, self.tcross[kept])

    # -------------------------------------------------------------------------
    # Finite-Time Braiding Exponent
    # -------------------------------------------------------------------------

    def ftbe(
        self,
        method: Optional[str] = None,
        length=None,
        T: Optional[float] = None,
        base: Optional[float] = None,
        config: Optional[BraidflowConfig] = None,
    ) -> float:
        """
        Finite-Time Braiding Exponent.

        Args:
            method: 'proj' (projectivized coordinates; scales to long braids)
                or 'nonproj' (exact integer growth; slow for very long braids).
                'entropy' and 'complexity' are accepted as aliases.
            length: 'intaxis', 'minlength' or 'l2norm'
            T: Time interval (default max(tcross) - min(tcross))
            base: Logarithm base (default natural log)
            config: Defaults for anything left unspecified

        Returns:
            stretch / T

        Raises:
            BadArgumentError: Bad method, base, or a non-positive interval
        """
        config = config if config is not None else default_config()
        fcfg = config.ftbe

        method = _resolve_method(fcfg.method if method is None else method)
        flag = LengthFlag.parse(fcfg.length if length is None else length)
        base = fcfg.base if base is None else base
        T = fcfg.T if T is None else T

        if T is None:
            if len(self) == 0:
                raise BadArgumentError("Cannot infer the time interval of an empty braid.",
                                       code="databraid:ftbe:badarg")
            T = float(self.tcross.max() - self.tcross.min())
        if T <= 0:
            raise BadArgumentError(f"Time interval must be positive, got T={T}.",
                                   code="databraid:ftbe:badarg")

        if method == 'proj':
            stretch = estimate_entropy(
                self.word, self.n, onestep=True, length=flag, config=config
            ).value
        else:
            stretch = complexity(self.word, self.n, flag)

        if base is not None:
            if base <= 0 or base == 1:
                raise BadArgumentError(f"Logarithm base must be positive and not 1, got {base}.",
                                       code="databraid:ftbe:badarg")
            stretch = stretch / math.log(base)

        return stretch / T

    # -------------------------------------------------------------------------
    # Undefined for time-stamped braids
    # -------------------------------------------------------------------------

    def inv(self):
        raise UndefinedOperationError('inv', hint=None)

    def __invert__(self):
        raise UndefinedOperationError('inv', hint=None)

    def __pow__(self, k):
        raise UndefinedOperationError('mpower', hint=None)

    def entropy(self, *args, **kwargs):
        raise UndefinedOperationError('entropy')

    def complexity(self, *args, **kwargs):
        raise UndefinedOperationError('complexity')


def _resolve_method(method: str) -> str:
    key = str(method).lower()
    if key not in FTBE_METHOD_ALIASES:
        raise BadArgumentError(f"Unknown FTBE method {method!r}; use 'proj' or 'nonproj'.",
                               code="databraid:ftbe:badarg")
    return FTBE_METHOD_ALIASES[key]


def _tensor2(left: ChronoBraid, right: ChronoBraid) -> ChronoBraid:
    merged = left._braid.tensor(right._braid)
    tcross = np.concatenate([left.tcross, right.tcross])
    order = np.argsort(tcross, kind='stable')
    return ChronoBraid._unchecked(Braid(merged.word[order], merged.n), tcross[order])


def tensor(*braids: ChronoBraid) -> ChronoBraid:
    """
    Tensor product of ChronoBraids: laid side by side, left to right, with
    crossings merged in time order (ties keep the left braid first).

    Raises:
        BadArgumentError: Fewer than two braids
    """
    if len(braids) < 2:
        raise BadArgumentError("Need at least two databraids.", code="databraid:tensor:badarg")
    for b in braids:
        if not isinstance(b, ChronoBraid):
            raise BadArgumentError(
                f"tensor expects ChronoBraid arguments, got {type(b).__name__}.",
                code="databraid:tensor:badarg",
            )
    return reduce(_tensor2, braids)

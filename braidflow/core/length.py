"""
Loop Length Functionals
=======================

Three ways of reducing Dynnikov coordinates (a, b) to a positive length:

    intaxis     number of intersections with the real axis (Dynnikov-Wiest)
    minlength   length of the tightened loop, punctures one unit apart
    l2norm      Euclidean norm of the coordinate vector

All three are homogeneous of degree one, so any of them measures the same
exponential growth rate; they differ only over a finite number of
iterations.

Functions accept plain sequences and work on Python ints as well as floats:
integer coordinates give exact integer lengths for intaxis and minlength.

Intersection numbers (n punctures, m = n - 2 coordinate pairs):

    b_0     = -max_i ( |a_i| + b_i^+ + sum_{j<i} b_j )
    nu_1    = -2 b_0,   nu_{i+1} = nu_i - 2 b_i          (n - 1 values)
    mu_{2i-1}, mu_{2i} = -/+ a_i + b_i^+ + nu_{i+1} / 2  (2n - 4 values)
"""

import math
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

from braidflow.validation.errors import BadLengthFlagError, BadLengthError


class LengthFlag(str, Enum):
    """Loop length functional."""
    INTAXIS = "intaxis"
    MINLENGTH = "minlength"
    L2NORM = "l2norm"

    @property
    def code(self) -> int:
        """Integer code shared with the compiled kernel."""
        return _FLAG_CODES[self]

    @classmethod
    def parse(cls, value) -> "LengthFlag":
        """Resolve a flag from a member, name, alias, or integer code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise BadLengthFlagError(value)
        if isinstance(value, int):
            for flag, code in _FLAG_CODES.items():
                if code == value:
                    return flag
            raise BadLengthFlagError(value)
        if isinstance(value, str):
            key = value.strip().lower()
            if key in _FLAG_ALIASES:
                return _FLAG_ALIASES[key]
        raise BadLengthFlagError(value)


_FLAG_CODES = {
    LengthFlag.INTAXIS: 0,
    LengthFlag.MINLENGTH: 1,
    LengthFlag.L2NORM: 2,
}

_FLAG_ALIASES = {
    'intaxis': LengthFlag.INTAXIS,
    'minlength': LengthFlag.MINLENGTH,
    'l2norm': LengthFlag.L2NORM,
    'l2': LengthFlag.L2NORM,
}


def _pos(x):
    return x if x > 0 else 0


def _left_b(a: Sequence, b: Sequence):
    """b_0: the (negated) largest partial sum; measures crossings left of puncture 1."""
    best = None
    cumb = 0
    for ai, bi in zip(a, b):
        val = abs(ai) + _pos(bi) + cumb
        if best is None or val > best:
            best = val
        cumb = cumb + bi
    return -best


def intersections(a: Sequence, b: Sequence) -> Tuple[List, List]:
    """
    Intersection numbers of a loop with the Dynnikov arcs.

    Args:
        a, b: Dynnikov coordinates (m = n - 2 each)

    Returns:
        (mu, nu): mu has 2n - 4 entries (arcs above/below interior
        punctures), nu has n - 1 entries (vertical lines between punctures)
    """
    nu = [-2 * _left_b(a, b)]
    for bi in b:
        nu.append(nu[-1] - 2 * bi)

    mu = []
    for i, (ai, bi) in enumerate(zip(a, b)):
        half = _pos(bi) + nu[i + 1] / 2
        mu.append(-ai + half)
        mu.append(ai + half)
    return mu, nu


def intaxis(a: Sequence, b: Sequence):
    """Number of intersections of the loop with the real axis."""
    m = len(a)
    if m == 0:
        return 0

    b0 = _left_b(a, b)
    bend = -b0 - sum(b)

    total = abs(a[0]) + abs(a[m - 1])
    for i in range(m - 1):
        total += abs(a[i + 1] - a[i])
    total += abs(b0) + abs(bend)
    for bi in b:
        total += abs(bi)
    return total


def minlength(a: Sequence, b: Sequence):
    """Minimal length of the loop with unit-spaced, zero-size punctures."""
    if len(a) == 0:
        return 0
    _, nu = intersections(a, b)
    return sum(nu)


def l2norm(a: Sequence, b: Sequence) -> float:
    """Euclidean norm of the concatenated coordinates."""
    return math.sqrt(sum(x * x for x in a) + sum(x * x for x in b))


LENGTH_FUNCTIONS: Dict[LengthFlag, Callable] = {
    LengthFlag.INTAXIS: intaxis,
    LengthFlag.MINLENGTH: minlength,
    LengthFlag.L2NORM: l2norm,
}


def loop_length(a: Sequence, b: Sequence, flag=LengthFlag.L2NORM):
    """
    Length of a loop under the chosen functional.

    Raises:
        BadLengthFlagError: Unknown flag
        BadLengthError: Computed length is negative
    """
    flag = LengthFlag.parse(flag)
    value = LENGTH_FUNCTIONS[flag](a, b)
    if value < 0:
        raise BadLengthError(value)
    return value


def discount(flag, n_punctures: int, basepoint: bool = False) -> int:
    """
    Crossings that intaxis counts but that do not grow under iteration.

    A loop on n punctures always crosses the axis n - 1 times around the
    braid's own punctures; a basepoint loop has one puncture more than the
    braid. Other functionals need no discount.
    """
    if LengthFlag.parse(flag) is not LengthFlag.INTAXIS:
        return 0
    return n_punctures - 1 - (1 if basepoint else 0)

"""
Generator Action on Dynnikov Coordinates
========================================

Piecewise-linear action of a braid generator sigma_i^{+-1} on the Dynnikov
coordinates of a loop with n punctures (m = n - 2 coordinate pairs).

With x^+ = max(x, 0) and x^- = min(x, 0), generator i touches:

    i = 1        pair 1 only               (left end)
    i = n - 1    pair n - 2 only           (right end)
    otherwise    pairs i - 1 and i         (middle)

Middle rule, sigma_i, pairs (a1, b1), (a2, b2):
    z   = a1 - b1^- - a2 + b2^+
    a1' = a1 + b1^+ + (b2^+ - z)^+          b1' = b2 - z^+
    a2' = a2 + b2^- + (b1^- + z)^-          b2' = b1 + z^+

Middle rule, sigma_i^{-1}:
    z   = a1 + b1^- - a2 - b2^+
    a1' = a1 - b1^+ - (b2^+ + z)^+          b1' = b2 + z^-
    a2' = a2 - b2^- - (b1^- - z)^-          b2' = b1 - z^-

The end rules are the middle rule with a phantom puncture just outside the
loop (pair 0 = (0, -nu_1/2) on the left, pair n-1 = (0, nu_{n-1}/2) on the
right); the phantom pair drops out, leaving

    left,  sigma_1:        b' = b^+ - a,   a' = a + b^- + b'^-
    left,  sigma_1^{-1}:   b' = a + b^+,   a' = a - b^- - b'^-
    right, sigma_{n-1}:    b' = b^- - a,   a' = a + b^+ + b'^+
    right, sigma_{n-1}^{-1}: b' = a + b^-, a' = a - b^+ - b'^+

Each pair of rules is an exact inverse, and the rules satisfy the braid
relations. Every update is O(1); a word of length L costs O(L).

References:
    Dynnikov (2002), On a Yang-Baxter map and the Dehornoy ordering
    Dehornoy, Dynnikov, Rolfsen, Wiest (2008), Ordering Braids, ch. XII
    Thiffeault (2010), Braids of entangled particle trajectories
"""

from typing import List, Sequence

import numpy as np

from braidflow.validation.errors import BadArgumentError
from .loop import Loop


def _pos(x):
    return x if x > 0 else 0


def _neg(x):
    return x if x < 0 else 0


def act_generator(g: int, a: List, b: List) -> None:
    """
    Apply one signed generator to coordinate lists, in place.

    Args:
        g: Signed generator index, 1 <= |g| <= n - 1
        a, b: Coordinate lists of a loop on n = len(a) + 2 punctures
    """
    m = len(a)
    if m == 0:
        raise BadArgumentError("A loop needs at least 3 punctures to be acted on.")
    n = m + 2
    i = g if g > 0 else -g
    if i < 1 or i > n - 1:
        raise BadArgumentError(
            f"Generator {g} out of range for a loop with {n} punctures."
        )

    if i == 1:
        ai, bi = a[0], b[0]
        if g > 0:
            bn = _pos(bi) - ai
            a[0] = ai + _neg(bi) + _neg(bn)
        else:
            bn = ai + _pos(bi)
            a[0] = ai - _neg(bi) - _neg(bn)
        b[0] = bn

    elif i == n - 1:
        ai, bi = a[m - 1], b[m - 1]
        if g > 0:
            bn = _neg(bi) - ai
            a[m - 1] = ai + _pos(bi) + _pos(bn)
        else:
            bn = ai + _neg(bi)
            a[m - 1] = ai - _pos(bi) - _pos(bn)
        b[m - 1] = bn

    else:
        j = i - 2
        a1, b1, a2, b2 = a[j], b[j], a[j + 1], b[j + 1]
        if g > 0:
            z = a1 - _neg(b1) - a2 + _pos(b2)
            a[j] = a1 + _pos(b1) + _pos(_pos(b2) - z)
            b[j] = b2 - _pos(z)
            a[j + 1] = a2 + _neg(b2) + _neg(_neg(b1) + z)
            b[j + 1] = b1 + _pos(z)
        else:
            z = a1 + _neg(b1) - a2 - _pos(b2)
            a[j] = a1 - _pos(b1) - _pos(_pos(b2) + z)
            b[j] = b2 + _neg(z)
            a[j + 1] = a2 - _neg(b2) - _neg(_neg(b1) - z)
            b[j + 1] = b1 - _neg(z)


def apply_word(word: Sequence[int], a: List, b: List) -> None:
    """Apply every generator of a word, left to right, in place."""
    for g in word:
        act_generator(int(g), a, b)


def generator_action(g: int, loop: Loop) -> Loop:
    """Return the loop obtained by acting with one generator."""
    return word_action([g], loop)


def word_action(word: Sequence[int], loop: Loop) -> Loop:
    """Return the loop obtained by acting with a whole word."""
    a, b = loop.ab_lists()
    apply_word(word, a, b)
    return Loop.from_ab(
        np.array(a, dtype=loop.coords.dtype),
        np.array(b, dtype=loop.coords.dtype),
        basepoint=loop.basepoint,
    )

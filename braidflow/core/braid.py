"""
Braid Words
===========

A braid on n strands as an ordered word of signed generators: g > 0 is
sigma_g (strands g and g + 1 cross one way), g < 0 is its inverse.

Only the operations needed by the entropy estimator and by time-stamped
braids live here: concatenation, side-by-side tensor product, restriction to
a strand subset, and action on loops.
"""

from typing import List, Optional, Sequence, Union

import numpy as np

from braidflow.validation.errors import BadArgumentError
from .entropy import EntropyEstimate, estimate_entropy, complexity as _complexity
from .loop import Loop
from .update_rules import word_action


class Braid:
    """Signed generator word plus strand count."""

    __slots__ = ('word', 'n')

    def __init__(self, word: Sequence[int] = (), n: Optional[int] = None):
        word = np.asarray(word if not isinstance(word, Braid) else word.word)
        if word.size and word.dtype.kind not in 'iu':
            if word.dtype.kind != 'f' or not np.all(word == np.round(word)):
                raise BadArgumentError("Braid generators must be integers.", code="braid:badgen")
        word = word.astype(np.int64).ravel()

        if np.any(word == 0):
            raise BadArgumentError("Generator 0 is not allowed in a braid word.", code="braid:badgen")

        maxgen = int(np.max(np.abs(word))) if word.size else 0
        if n is None:
            n = max(maxgen + 1, 1)
        n = int(n)
        if n < 1:
            raise BadArgumentError(f"Braid needs at least one strand, got n={n}.", code="braid:badarg")
        if maxgen > n - 1:
            raise BadArgumentError(
                f"Generator index {maxgen} too large for {n} strands.", code="braid:badgen"
            )

        self.word = word
        self.n = n

    # -------------------------------------------------------------------------
    # Basic protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return int(self.word.size)

    def __repr__(self) -> str:
        return f"Braid({self.word.tolist()}, n={self.n})"

    def lexeq(self, other: "Braid") -> bool:
        """Lexicographic equality: same strand count, same generators."""
        return (
            self.n == other.n
            and self.word.shape == other.word.shape
            and bool(np.all(self.word == other.word))
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Braid):
            return NotImplemented
        return self.lexeq(other)

    __hash__ = None

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    def __mul__(self, other: Union["Braid", Loop]):
        """Concatenate braids, or act on a loop."""
        if isinstance(other, Braid):
            return Braid(np.concatenate([self.word, other.word]), max(self.n, other.n))
        if isinstance(other, Loop):
            return self.act(other)
        return NotImplemented

    def act(self, loop: Loop) -> Loop:
        """Loop obtained by applying this braid."""
        if loop.n < self.n:
            raise BadArgumentError(
                f"Loop has {loop.n} punctures, fewer than the {self.n} braid strands.",
                code="braid:badloop",
            )
        return word_action(self.word.tolist(), loop)

    def tensor(self, other: "Braid") -> "Braid":
        """Lay ``other`` to the right of this braid."""
        shifted = np.sign(other.word) * (np.abs(other.word) + self.n)
        return Braid(np.concatenate([self.word, shifted]), self.n + other.n)

    # -------------------------------------------------------------------------
    # Sub-braids
    # -------------------------------------------------------------------------

    def subbraid(self, strands: Sequence[int], return_indices: bool = False):
        """
        Braid formed by a subset of strands.

        Strands are followed through the permutation: a crossing is kept when
        both strands it exchanges are in the subset, and relabelled by its
        position among the kept strands.

        Args:
            strands: 1-based strand labels (positions at the start of the braid)
            return_indices: Also return the indices of the kept generators

        Returns:
            Braid on len(strands) strands, or (Braid, indices)
        """
        keep = _check_strands(strands, self.n)

        perm = list(range(1, self.n + 1))  # perm[pos] = strand at that position
        sub: List[int] = []
        kept: List[int] = []

        for k, g in enumerate(self.word.tolist()):
            i = abs(g)
            s1, s2 = perm[i - 1], perm[i]
            if s1 in keep and s2 in keep:
                rank = sum(1 for s in perm[:i] if s in keep)
                sub.append(rank if g > 0 else -rank)
                kept.append(k)
            perm[i - 1], perm[i] = s2, s1

        result = Braid(sub, len(keep))
        if return_indices:
            return result, np.asarray(kept, dtype=np.int64)
        return result

    # -------------------------------------------------------------------------
    # Entropy
    # -------------------------------------------------------------------------

    def entropy_estimate(self, *args, **kwargs) -> EntropyEstimate:
        """Full entropy result; arguments as ``estimate_entropy``."""
        return estimate_entropy(self.word, self.n, *args, **kwargs)

    def entropy(self, *args, **kwargs) -> float:
        """Topological entropy; arguments as ``estimate_entropy``."""
        return self.entropy_estimate(*args, **kwargs).value

    def complexity(self, length='intaxis') -> float:
        """Exact one-pass growth of the generating set."""
        return _complexity(self.word, self.n, length)


def _check_strands(strands: Sequence[int], n: int) -> set:
    values = np.atleast_1d(np.asarray(strands))
    if values.size == 0:
        raise BadArgumentError("Need at least one strand.", code="braid:subbraid:badarg")
    if values.dtype.kind not in 'iu':
        raise BadArgumentError("Strand labels must be integers.", code="braid:subbraid:badarg")
    if np.any(values < 1) or np.any(values > n):
        raise BadArgumentError(f"Strand labels must lie in 1..{n}.", code="braid:subbraid:badarg")
    if len(np.unique(values)) != values.size:
        raise BadArgumentError("Strand labels must be distinct.", code="braid:subbraid:badarg")
    return set(int(s) for s in values)

"""
Loop Coordinates
================

A multicurve on the disk with n punctures, up to isotopy, encoded by its
Dynnikov coordinates: two real vectors a, b of length m = n - 2, stored
back to back as ``coords = [a_1..a_m, b_1..b_m]``.

Coordinates are only meaningful up to positive rescaling once they have been
projectivized (divided by a length), which is how the entropy estimator
keeps them bounded.

A ``basepoint`` loop carries one puncture more than the braid that acts on
it. ``Loop.generating_set(n)`` is the canonical such loop for a braid on n
strands: a = 0, b = -1 on n + 1 punctures.
"""

from typing import Sequence, Tuple

import numpy as np

from braidflow.validation.errors import BadArgumentError
from .length import (
    LengthFlag,
    intaxis as _intaxis,
    minlength as _minlength,
    l2norm as _l2norm,
    intersections as _intersections,
    loop_length,
)


class Loop:
    """Dynnikov coordinates of a multicurve."""

    __slots__ = ('coords', 'basepoint')

    def __init__(self, coords: Sequence, basepoint: bool = False):
        coords = np.asarray(coords)
        if coords.dtype.kind in 'iub':
            coords = coords.astype(np.float64)
        elif coords.dtype.kind not in 'fO':
            raise BadArgumentError(f"Loop coordinates must be numeric, got dtype {coords.dtype}")

        coords = coords.ravel()
        if coords.size == 0 or coords.size % 2 != 0:
            raise BadArgumentError(
                f"Loop needs a positive, even number of coordinates, got {coords.size}."
            )

        self.coords = coords
        self.basepoint = bool(basepoint)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_ab(cls, a: Sequence, b: Sequence, basepoint: bool = False) -> "Loop":
        """Build a loop from separate a and b vectors."""
        a = np.asarray(a).ravel()
        b = np.asarray(b).ravel()
        if a.shape != b.shape:
            raise BadArgumentError(f"a and b must have the same length ({a.size} != {b.size}).")
        return cls(np.concatenate([a, b]), basepoint=basepoint)

    @classmethod
    def generating_set(cls, n: int, exact: bool = False) -> "Loop":
        """
        Canonical generating set of the fundamental group for n strands.

        Args:
            n: Number of braid strands (>= 2)
            exact: Use Python integers (object dtype) instead of float64,
                so coordinates never overflow or round

        Returns:
            Basepoint loop on n + 1 punctures
        """
        if n < 2:
            raise BadArgumentError(f"Generating set needs at least 2 strands, got {n}.")
        m = n - 1
        if exact:
            coords = np.array([0] * m + [-1] * m, dtype=object)
        else:
            coords = np.concatenate([np.zeros(m), -np.ones(m)])
        return cls(coords, basepoint=True)

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------

    @property
    def m(self) -> int:
        """Number of coordinate pairs."""
        return self.coords.size // 2

    @property
    def n(self) -> int:
        """Number of punctures (including a basepoint, if any)."""
        return self.m + 2

    @property
    def a(self) -> np.ndarray:
        return self.coords[:self.m]

    @property
    def b(self) -> np.ndarray:
        return self.coords[self.m:]

    def ab_lists(self) -> Tuple[list, list]:
        """Coordinates as Python lists (the form the update rules mutate)."""
        return self.a.tolist(), self.b.tolist()

    def copy(self) -> "Loop":
        return Loop(self.coords.copy(), basepoint=self.basepoint)

    # -------------------------------------------------------------------------
    # Arithmetic and comparison
    # -------------------------------------------------------------------------

    def __truediv__(self, scalar) -> "Loop":
        return Loop(self.coords / scalar, basepoint=self.basepoint)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Loop):
            return NotImplemented
        return (
            self.basepoint == other.basepoint
            and self.coords.shape == other.coords.shape
            and bool(np.all(self.coords == other.coords))
        )

    __hash__ = None

    def isclose(self, other: "Loop", tol: float = 1e-10) -> bool:
        """Componentwise |c_i - d_i| < tol."""
        if self.coords.shape != other.coords.shape:
            return False
        diff = np.abs(
            np.asarray(self.coords, dtype=np.float64) - np.asarray(other.coords, dtype=np.float64)
        )
        return bool(np.all(diff < tol))

    def __len__(self) -> int:
        return self.coords.size

    def __repr__(self) -> str:
        bp = ", basepoint=True" if self.basepoint else ""
        return f"Loop(a={self.a.tolist()}, b={self.b.tolist()}{bp})"

    # -------------------------------------------------------------------------
    # Lengths
    # -------------------------------------------------------------------------

    def intaxis(self):
        return _intaxis(*self.ab_lists())

    def minlength(self):
        return _minlength(*self.ab_lists())

    def l2norm(self) -> float:
        return _l2norm(*self.ab_lists())

    def length(self, flag=LengthFlag.L2NORM):
        """Length under the given functional (see braidflow.core.length)."""
        return loop_length(*self.ab_lists(), flag)

    def intersections(self) -> Tuple[np.ndarray, np.ndarray]:
        """(mu, nu) intersection numbers with the Dynnikov arcs."""
        mu, nu = _intersections(*self.ab_lists())
        return np.asarray(mu), np.asarray(nu)


"""
Entropy Engine - Iterative Topological Entropy
===============================================

Estimates the topological entropy of a braid as the exponential growth
rate of loop length under repeated application of the braid (Moussafir's
power method on Dynnikov coordinates).

Each iteration:
    1. rescale coordinates (and the intaxis discount) by the last length
    2. act with the whole word
    3. entr = log(new length)

The estimate has converged once |entr_k - entr_{k-1}| < tol holds nconv
times in a row. Failing that within maxit iterations is the signature of a
finite-order braid: the entropy is reported as zero with a
ConvergenceWarning. With tol = 0 exactly maxit iterations are run and the
last value is returned as is.

Two interchangeable strategies run the loop: a compiled numba kernel
(``braidflow.core._native``) and a pure-Python reference. A failure of the
compiled one falls back to the reference with a NativeFallbackWarning.
Runs with a nonzero debug level always use the reference, which is the one
that logs.

Also here:
    complexity()    exact one-shot growth on integer coordinates
"""

import logging
import math
import warnings
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from braidflow.config import BraidflowConfig, default_config
from braidflow.validation.errors import (
    BadArgumentError,
    BadLengthError,
    ConvergenceWarning,
    NativeFallbackWarning,
    ReducibleWarning,
)
from . import _native
from .length import LengthFlag, loop_length, discount as length_discount
from .loop import Loop
from .update_rules import apply_word


logger = logging.getLogger(__name__)


# Smallest known dilatation family on n strands gives about 19 / n^3 decimal
# digits per iteration.
SPECTRAL_GAP_COEFF = 19.0
EXTRA_ITERATIONS = 30


@dataclass
class EntropyEstimate:
    """Result of an entropy run."""
    value: float
    iterations: int
    loop: Optional[Loop] = None
    converged: bool = False

    def __float__(self) -> float:
        return float(self.value)


@dataclass
class ConvergenceTracker:
    """
    Counts consecutive within-tolerance steps of an estimate sequence.

    ``update`` returns True once ``nconvreq`` consecutive differences have
    been below ``tol``; one difference at or above ``tol`` resets the count.
    """
    tol: float
    nconvreq: int = 3
    debug: int = 0
    previous: float = -1.0
    nconv: int = 0

    def update(self, entr: float) -> bool:
        done = False
        if abs(entr - self.previous) < self.tol:
            self.nconv += 1
            done = self.nconv >= self.nconvreq
        elif self.nconv > 0:
            _debugmsg(self.debug, 1, "Converged %d time(s) in a row (< %d)", self.nconv, self.nconvreq)
            self.nconv = 0
        self.previous = entr
        return done


def _debugmsg(debug: int, level: int, msg: str, *args) -> None:
    if debug >= level:
        logger.debug(msg, *args)


def default_maxit(tol: float, n: int) -> int:
    """
    Iteration cap from the tolerance and the worst-case spectral gap.

    maxit = ceil(-log10(tol) / (19 n^-3)) + 30
    """
    if tol <= 0:
        raise BadArgumentError("Must specify either tolerance > 0 or maximum iterations.",
                               code="entropy:badarg")
    spgap = SPECTRAL_GAP_COEFF * float(n) ** -3
    return int(math.ceil(-math.log10(tol) / spgap)) + EXTRA_ITERATIONS


# =============================================================================
# STRATEGIES
# =============================================================================

def run_reference(
    word: Sequence[int],
    coords: np.ndarray,
    maxit: int,
    nconvreq: int,
    tol: float,
    flag: LengthFlag,
    basepoint: bool,
    debug: int = 0,
) -> Tuple[float, int, bool, np.ndarray]:
    """
    Pure-Python power iteration.

    Returns:
        (entropy, iterations, converged, normalized final coordinates)
    """
    m = len(coords) // 2
    a = [float(x) for x in coords[:m]]
    b = [float(x) for x in coords[m:]]
    word = [int(g) for g in word]

    disc = float(length_discount(flag, m + 2, basepoint))
    length = _checked_initial_length(a, b, flag, disc)

    tracker = ConvergenceTracker(tol=tol, nconvreq=nconvreq, debug=debug)
    entr = 0.0
    converged = False
    it = 0

    for it in range(1, maxit + 1):
        disc /= length
        for k in range(m):
            a[k] /= length
            b[k] /= length

        apply_word(word, a, b)

        length = loop_length(a, b, flag) - disc
        if length <= 0:
            raise BadLengthError(length, "Loop length must stay positive after discount.")

        entr = math.log(length)
        _debugmsg(debug, 2, "  iteration %d  entr=%.10e  diff=%.4e", it, entr, entr - tracker.previous)

        if tracker.update(entr):
            converged = True
            break

    final = np.array(a + b, dtype=np.float64) / length
    return entr, it, converged, final


def run_native(
    word: Sequence[int],
    coords: np.ndarray,
    maxit: int,
    nconvreq: int,
    tol: float,
    flag: LengthFlag,
    basepoint: bool,
) -> Tuple[float, int, bool, np.ndarray]:
    """
    Compiled power iteration; same contract as ``run_reference``.

    Raises:
        BadArgumentError: A generator does not fit the loop
        BadLengthError: The kernel produced a negative length
    """
    m = len(coords) // 2
    # the kernel does no bounds checking
    if any(abs(int(g)) < 1 or abs(int(g)) > m + 1 for g in word) or (m == 0 and len(word)):
        raise BadArgumentError(
            f"Word does not fit a loop with {m + 2} punctures.", code="entropy:badgen"
        )
    disc = float(length_discount(flag, m + 2, basepoint))
    coords = np.asarray(coords, dtype=np.float64)

    entr, it, converged, status, length, a, b = _native.run_kernel(
        word, coords[:m], coords[m:], maxit, nconvreq, tol, flag.code, disc
    )

    if status == _native.STATUS_NEGATIVE_LENGTH:
        raise BadLengthError(length)
    if status == _native.STATUS_NONPOSITIVE_LENGTH:
        if it == 0:
            raise BadArgumentError(
                f"Initial loop has non-positive {flag.value} length after discount; "
                "use another length or loop.",
                code="entropy:badloop",
            )
        raise BadLengthError(length, "Loop length must stay positive after discount.")

    return entr, it, converged, np.concatenate([a, b]) / length


def _check_word(word: Sequence[int], n: int) -> List[int]:
    """Integer generators with 1 <= |g| <= n - 1."""
    word = [int(g) for g in word]
    for g in word:
        if g == 0 or abs(g) > n - 1:
            raise BadArgumentError(
                f"Generator {g} out of range for a braid on {n} strands.",
                code="entropy:badgen",
            )
    return word


def _checked_initial_length(a, b, flag, disc):
    length = loop_length(a, b, flag) - disc
    if length <= 0:
        raise BadArgumentError(
            f"Initial loop has non-positive {flag.value} length after discount; "
            "use another length or loop.",
            code="entropy:badloop",
        )
    return length


# =============================================================================
# PUBLIC API
# =============================================================================

def estimate_entropy(
    word: Sequence[int],
    n: int,
    tol: Optional[float] = None,
    maxit: Optional[int] = None,
    nconv: Optional[int] = None,
    length=None,
    *,
    loop: Optional[Loop] = None,
    finite: bool = False,
    onestep: bool = False,
    method: str = 'iterative',
    train_tracks: Optional[Callable] = None,
    native: Optional[bool] = None,
    config: Optional[BraidflowConfig] = None,
) -> EntropyEstimate:
    """
    Topological entropy of a braid word.

    Args:
        word: Signed generators, 1 <= |g| <= n - 1
        n: Number of strands
        tol: Absolute tolerance; 0 disables the convergence check
        maxit: Iteration cap (default from tol and n)
        nconv: Consecutive convergences required (default 3)
        length: 'intaxis', 'minlength' or 'l2norm' (default from config)
        loop: Initial loop (default: generating set of n strands)
        finite: Run exactly maxit iterations (tol = 0)
        onestep: One iteration only (tol = 0, maxit = 1)
        method: 'iterative' or 'trains' (needs ``train_tracks``)
        train_tracks: Callable (word, n) -> (tag, entropy)
        native: Try the compiled kernel first (default from config)
        config: Defaults for everything left unspecified

    Returns:
        EntropyEstimate(value, iterations, loop, converged)

    Raises:
        BadLengthFlagError: Unknown length
        BadArgumentError: tol = 0 without maxit, loop too small for the braid
        BadLengthError: A loop length came out negative
    """
    word = _check_word(word, n)

    # Trivial braids have no topological complexity.
    if len(word) == 0 or n < 3:
        return EntropyEstimate(0.0, 0, None, True)

    config = config if config is not None else default_config()
    ecfg = config.entropy
    debug = config.debug

    flag = LengthFlag.parse(ecfg.length if length is None else length)
    nconvreq = ecfg.nconv if nconv is None else int(nconv)
    if nconvreq < 1:
        raise BadArgumentError(f"nconv must be at least 1, got {nconvreq}.", code="entropy:badarg")
    use_native = ecfg.native if native is None else bool(native)

    if method in ('trains', 'train-tracks', 'bh'):
        if train_tracks is None:
            raise BadArgumentError("method='trains' needs a train_tracks solver.", code="entropy:badarg")
        tag, value = train_tracks(word, n)
        if not str(tag).startswith('reducible'):
            return EntropyEstimate(float(value), 0, None, True)
        warnings.warn(
            "Reducible braid... falling back on iterative method.",
            ReducibleWarning, stacklevel=2,
        )
        tol, maxit = ecfg.tol, None
    elif method != 'iterative':
        raise BadArgumentError(f"Unknown entropy method {method!r}.", code="entropy:badarg")

    if onestep:
        tol, maxit = 0.0, 1
    elif finite:
        tol = 0.0
    tol = ecfg.tol if tol is None else float(tol)
    if tol < 0:
        raise BadArgumentError(f"Tolerance must be nonnegative, got {tol}.", code="entropy:badarg")

    if maxit is None:
        maxit = ecfg.maxit
    if maxit is None or maxit <= 0:
        if tol == 0:
            raise BadArgumentError("Must specify either tolerance > 0 or maximum iterations.",
                                   code="entropy:badarg")
        maxit = default_maxit(tol, n)
    maxit = int(maxit)

    if loop is None:
        loop = Loop.generating_set(n)
    if loop.n < n:
        raise BadArgumentError(
            f"Loop has {loop.n} punctures, fewer than the {n} braid strands.",
            code="entropy:badloop",
        )

    _debugmsg(debug, 1, "TOL = %.1e \t MAXIT = %d \t NCONV = %d \t LENGTH = %s",
              tol, maxit, nconvreq, flag.value)

    if use_native and debug > 0:
        # the compiled loop emits no diagnostics
        _debugmsg(debug, 1, "Debug output requested; running the Python entropy loop.")
        use_native = False

    result = None
    if use_native:
        try:
            result = run_native(word, loop.coords, maxit, nconvreq, tol, flag, loop.basepoint)
        except (BadArgumentError, BadLengthError):
            raise
        except Exception as e:
            warnings.warn(
                f"Native entropy failed ({type(e).__name__}: {e}). Reverting to Python entropy.",
                NativeFallbackWarning, stacklevel=2,
            )
    if result is None:
        result = run_reference(word, loop.coords, maxit, nconvreq, tol, flag, loop.basepoint, debug)

    entr, it, converged, coords = result

    if tol > 0:
        if not converged:
            warnings.warn(
                "Failed to converge to requested tolerance; braid is likely "
                "finite-order or has low entropy.  Returning zero entropy.",
                ConvergenceWarning, stacklevel=2,
            )
            entr = 0.0
        else:
            _debugmsg(debug, 1, "Converged %d time(s) in a row after %d iterations", nconvreq, it)

    return EntropyEstimate(
        value=float(entr),
        iterations=it,
        loop=Loop(coords, basepoint=loop.basepoint),
        converged=converged,
    )


def complexity(word: Sequence[int], n: int, length='intaxis') -> float:
    """
    Non-projective growth of the generating set under one pass of the word.

        C = log(|beta E| - D) - log(|E| - D)

    with E the generating set, D the length discount. Coordinates are
    Python integers, so intaxis and minlength are exact for any word length.

    Returns:
        Growth in natural-log units (0 for empty words or n < 3)
    """
    word = _check_word(word, n)
    if len(word) == 0 or n < 3:
        return 0.0

    flag = LengthFlag.parse(length)
    loop = Loop.generating_set(n, exact=True)
    a, b = loop.ab_lists()
    disc = length_discount(flag, loop.n, basepoint=True)

    before = _log_length(a, b, flag, disc)
    apply_word(word, a, b)
    after = _log_length(a, b, flag, disc)
    return after - before


def _log_length(a, b, flag: LengthFlag, disc) -> float:
    if flag is LengthFlag.L2NORM:
        # log of the norm without forming the (possibly huge) square root
        squares = sum(x * x for x in a) + sum(x * x for x in b)
        return 0.5 * math.log(squares)
    value = loop_length(a, b, flag) - disc
    if value <= 0:
        raise BadLengthError(value, "Loop length must stay positive after discount.")
    return math.log(value)

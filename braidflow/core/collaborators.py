"""
External Collaborators
======================

Contracts for the two algorithms braidflow consumes but does not implement:

    ColorBraider        trajectories -> (Braid, crossing times)
    TrainTrackSolver    braid word -> (Thurston-Nielsen tag, entropy)

and the sampling configuration handed to the color braider, resolved once
here instead of being guessed from argument types:

    ByProjectionAngle(angle)          times default to 1..nsteps
    ByTimestamps(times, angle=0.0)    explicit sample times
"""

from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, Union

import numpy as np

from braidflow.validation.errors import BadArgumentError


# (XY[nsteps, 2, nparticles], t[nsteps], projection angle) -> (Braid, tcross)
ColorBraider = Callable[[np.ndarray, np.ndarray, float], Tuple[object, Sequence[float]]]

# (word, n) -> (tag, entropy); tags starting with 'reducible' trigger the
# iterative fallback
TrainTrackSolver = Callable[[Sequence[int], int], Tuple[str, float]]


@dataclass(frozen=True)
class ByProjectionAngle:
    """Project onto a line at ``angle`` radians from the X axis; unit-spaced times."""
    angle: float = 0.0


@dataclass(frozen=True)
class ByTimestamps:
    """Sample times of the trajectory rows, projecting at ``angle``."""
    times: Sequence[float]
    angle: float = 0.0


Sampling = Union[ByProjectionAngle, ByTimestamps]


def check_trajectories(XY) -> np.ndarray:
    """Validate a (nsteps, 2, nparticles) trajectory array."""
    XY = np.asarray(XY, dtype=np.float64)
    if XY.ndim != 3 or XY.shape[1] != 2:
        raise BadArgumentError(
            f"Trajectories must have shape (nsteps, 2, nparticles), got {XY.shape}.",
            code="databraid:badarg",
        )
    return XY


def resolve_sampling(sampling: Sampling, nsteps: int) -> Tuple[np.ndarray, float]:
    """
    Turn a sampling configuration into (times, angle).

    Raises:
        BadArgumentError: Unknown configuration or wrong number of times
    """
    if isinstance(sampling, ByProjectionAngle):
        return np.arange(1, nsteps + 1, dtype=np.float64), float(sampling.angle)

    if isinstance(sampling, ByTimestamps):
        t = np.asarray(sampling.times, dtype=np.float64).ravel()
        if t.size != nsteps:
            raise BadArgumentError(
                f"Need one time per trajectory sample ({t.size} times for {nsteps} samples).",
                code="databraid:badarg",
            )
        return t, float(sampling.angle)

    raise BadArgumentError(
        f"Sampling must be ByProjectionAngle or ByTimestamps, got {type(sampling).__name__}.",
        code="databraid:badarg",
    )

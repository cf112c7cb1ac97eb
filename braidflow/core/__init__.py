"""
braidflow Core
==============

Braid words, loops, and the entropy machinery that connects them.

Structure:
    length.py        - Loop length functionals (intaxis, minlength, l2norm)
    loop.py          - Loop: Dynnikov coordinates of a multicurve
    update_rules.py  - Generator action on Dynnikov coordinates
    entropy.py       - Iterative entropy estimator and complexity
    _native.py       - numba kernel behind the estimator's fast path
    braid.py         - Braid: signed generator word
    databraid.py     - ChronoBraid: braid with crossing times, FTBE
    collaborators.py - Contracts for color braiding and train tracks
"""

# length first: the config schema imports LengthFlag from it
from .length import (
    LengthFlag,
    LENGTH_FUNCTIONS,
    intersections,
    intaxis,
    minlength,
    l2norm,
    loop_length,
    discount,
)
from .loop import Loop
from .update_rules import (
    act_generator,
    apply_word,
    generator_action,
    word_action,
)
from .entropy import (
    EntropyEstimate,
    ConvergenceTracker,
    estimate_entropy,
    complexity,
    default_maxit,
)
from .braid import Braid
from .collaborators import (
    ByProjectionAngle,
    ByTimestamps,
    ColorBraider,
    TrainTrackSolver,
)
from .databraid import ChronoBraid, tensor

__all__ = [
    # Lengths
    'LengthFlag',
    'LENGTH_FUNCTIONS',
    'intersections',
    'intaxis',
    'minlength',
    'l2norm',
    'loop_length',
    'discount',
    # Loops and action
    'Loop',
    'act_generator',
    'apply_word',
    'generator_action',
    'word_action',
    # Entropy
    'EntropyEstimate',
    'ConvergenceTracker',
    'estimate_entropy',
    'complexity',
    'default_maxit',
    # Braids
    'Braid',
    'ChronoBraid',
    'tensor',
    # Collaborators
    'ByProjectionAngle',
    'ByTimestamps',
    'ColorBraider',
    'TrainTrackSolver',
]

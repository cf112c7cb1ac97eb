"""
braidflow - topological entropy of braids and finite-time braiding exponents.

Public API:
    from braidflow import Braid, ChronoBraid, Loop

    Braid([1, -2], 3).entropy()                    # ~0.9624
    ChronoBraid([1, -2], [0.5, 1.5]).ftbe()        # growth per unit time

Layers:
    braidflow.core        Loops, braids, entropy estimation, ChronoBraid
    braidflow.config      YAML defaults validated with pydantic
    braidflow.validation  Error taxonomy, warnings, chronology checks

Diagnostics go through the ``braidflow`` logger; set ``debug`` in the config
(1 = summary, 2 = per iteration) and enable DEBUG logging to see them.
"""

# core before config: config.schema needs braidflow.core.length
from braidflow.core import (
    Braid,
    ChronoBraid,
    Loop,
    LengthFlag,
    EntropyEstimate,
    ByProjectionAngle,
    ByTimestamps,
    estimate_entropy,
    complexity,
    tensor,
)
from braidflow.config import BraidflowConfig, load_config, default_config
from braidflow.validation import (
    BraidError,
    ConfigurationError,
    InvariantError,
    ChronologyError,
    UndefinedOperationError,
    ConvergenceWarning,
    NativeFallbackWarning,
    ReducibleWarning,
)

__version__ = "0.1.0"

__all__ = [
    'Braid',
    'ChronoBraid',
    'Loop',
    'LengthFlag',
    'EntropyEstimate',
    'ByProjectionAngle',
    'ByTimestamps',
    'estimate_entropy',
    'complexity',
    'tensor',
    'BraidflowConfig',
    'load_config',
    'default_config',
    'BraidError',
    'ConfigurationError',
    'InvariantError',
    'ChronologyError',
    'UndefinedOperationError',
    'ConvergenceWarning',
    'NativeFallbackWarning',
    'ReducibleWarning',
]

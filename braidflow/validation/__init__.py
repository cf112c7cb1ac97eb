"""
braidflow Validation Module

Error taxonomy and argument checks shared by the core.

Exports:
    - BraidError and its subclasses (configuration, invariant, chronology,
      undefined-operation errors)
    - ConvergenceWarning, NativeFallbackWarning, ReducibleWarning
    - check_tcross: Validate crossing times against a braid word
    - check_interval: Normalize a truncation interval
"""

from .errors import (
    BraidError,
    ConfigurationError,
    BadLengthFlagError,
    BadArgumentError,
    InvariantError,
    BadLengthError,
    ChronologyError,
    BadTimesError,
    NotChronologicalError,
    UndefinedOperationError,
    ConvergenceWarning,
    NativeFallbackWarning,
    ReducibleWarning,
)

from .chronology import (
    check_tcross,
    check_interval,
)

__all__ = [
    # Errors
    'BraidError',
    'ConfigurationError',
    'BadLengthFlagError',
    'BadArgumentError',
    'InvariantError',
    'BadLengthError',
    'ChronologyError',
    'BadTimesError',
    'NotChronologicalError',
    'UndefinedOperationError',
    # Warnings
    'ConvergenceWarning',
    'NativeFallbackWarning',
    'ReducibleWarning',
    # Checks
    'check_tcross',
    'check_interval',
]

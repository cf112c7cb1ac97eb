"""
Error and Warning Taxonomy
==========================

Four families of errors, matching how they are handled:

    ConfigurationError    caller misuse, detected before any iteration starts
    InvariantError        should be unreachable; indicates a logic bug
    ChronologyError       time-stamped braids whose crossings are out of order
    UndefinedOperationError
                          operations that have no meaning once crossings
                          carry timestamps

Convergence failures are NOT errors: they surface as ConvergenceWarning and
a zero entropy.

Every error carries a short stable ``code`` (e.g. ``databraid:badtimes``) so
callers can identify the failure without parsing messages.
"""

from typing import Optional


class BraidError(Exception):
    """Base class for all braidflow errors."""

    code: str = "braidflow:error"

    def __init__(self, message: str, code: Optional[str] = None):
        if code is not None:
            self.code = code
        super().__init__(message)


# =============================================================================
# CONFIGURATION
# =============================================================================

class ConfigurationError(BraidError, ValueError):
    """Raised when arguments or configuration values are invalid."""

    code = "config:badarg"


class BadLengthFlagError(ConfigurationError):
    """Raised for an unrecognized loop length flag."""

    code = "entropy:badlengthflag"

    def __init__(self, flag, message: Optional[str] = None):
        self.flag = flag
        if message is None:
            message = (
                f"Unsupported loop length flag {flag!r}. "
                f"Supported flags: 'intaxis' (0), 'minlength' (1), 'l2norm' (2)."
            )
        super().__init__(message)


class BadArgumentError(ConfigurationError):
    """Raised for malformed arguments (sizes, ranges, missing values)."""

    code = "config:badarg"


# =============================================================================
# INVARIANTS
# =============================================================================

class InvariantError(BraidError, RuntimeError):
    """Raised when an internal invariant is violated."""

    code = "invariant"


class BadLengthError(InvariantError):
    """Raised when a loop length comes out negative."""

    code = "entropy:badlength"

    def __init__(self, value: float, message: Optional[str] = None):
        self.value = value
        if message is None:
            message = f"Loop length must never be negative (got {value!r})."
        super().__init__(message)


# =============================================================================
# CHRONOLOGY
# =============================================================================

class ChronologyError(BraidError, ValueError):
    """Base class for time-ordering violations of a ChronoBraid."""

    code = "databraid:chronology"


class BadTimesError(ChronologyError):
    """Raised when crossing times do not match the word or are out of order."""

    code = "databraid:badtimes"


class NotChronologicalError(ChronologyError):
    """Raised when composing braids whose times overlap."""

    code = "databraid:notchrono"


# =============================================================================
# UNSUPPORTED OPERATIONS
# =============================================================================

class UndefinedOperationError(BraidError, TypeError):
    """Raised for operations that are not defined on time-stamped braids."""

    code = "databraid:undefined"

    def __init__(self, operation: str, hint: Optional[str] = "ftbe"):
        self.operation = operation
        message = f"Operation '{operation}' is not defined for ChronoBraid."
        if hint:
            message += f"  Use ChronoBraid.{hint} instead."
        super().__init__(message, code=f"databraid:{operation}:undefined")


# =============================================================================
# WARNINGS
# =============================================================================

class ConvergenceWarning(RuntimeWarning):
    """Iteration did not reach the requested tolerance; entropy set to zero."""


class NativeFallbackWarning(RuntimeWarning):
    """The compiled path failed and the pure-Python path was used instead."""


class ReducibleWarning(RuntimeWarning):
    """The train-track solver reported a reducible braid."""

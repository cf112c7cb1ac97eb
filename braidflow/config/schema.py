"""
braidflow Config Schema

Typed, validated view of ``defaults.yaml``.

Usage:
    config = BraidflowConfig()                       # built-in defaults
    config = BraidflowConfig(entropy={'tol': 1e-8})  # override one field
    config.entropy.length                            # LengthFlag.L2NORM
"""

from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from braidflow.core.length import LengthFlag


FTBE_METHOD_ALIASES = {
    'proj': 'proj',
    'entropy': 'proj',
    'nonproj': 'nonproj',
    'complexity': 'nonproj',
}


class EntropyConfig(BaseModel):
    """Parameters of the iterative entropy estimator."""
    model_config = ConfigDict(frozen=True)

    tol: float = Field(1e-6, ge=0, description="Absolute tolerance (0 disables the check)")
    maxit: Optional[int] = Field(None, gt=0, description="Iteration cap (None = heuristic)")
    nconv: int = Field(3, ge=1, description="Consecutive convergences required")
    length: LengthFlag = Field(LengthFlag.L2NORM, description="Loop length functional")
    native: bool = Field(True, description="Try the numba kernel first")

    @field_validator('length', mode='before')
    @classmethod
    def _parse_length(cls, v):
        return LengthFlag.parse(v)


class FTBEConfig(BaseModel):
    """Parameters of the finite-time braiding exponent."""
    model_config = ConfigDict(frozen=True)

    method: Literal['proj', 'nonproj'] = 'proj'
    length: LengthFlag = LengthFlag.INTAXIS
    T: Optional[float] = Field(None, gt=0, description="Time interval (None = span of tcross)")
    base: Optional[float] = Field(None, gt=0, description="Logarithm base (None = natural)")

    @field_validator('method', mode='before')
    @classmethod
    def _parse_method(cls, v):
        key = str(v).lower()
        if key not in FTBE_METHOD_ALIASES:
            raise ValueError(f"Unknown FTBE method {v!r}; use 'proj' or 'nonproj'")
        return FTBE_METHOD_ALIASES[key]

    @field_validator('length', mode='before')
    @classmethod
    def _parse_length(cls, v):
        return LengthFlag.parse(v)

    @field_validator('base')
    @classmethod
    def _check_base(cls, v):
        if v is not None and v == 1:
            raise ValueError("Logarithm base cannot be 1")
        return v


class BraidflowConfig(BaseModel):
    """Top-level configuration."""
    model_config = ConfigDict(frozen=True)

    entropy: EntropyConfig = Field(default_factory=EntropyConfig)
    ftbe: FTBEConfig = Field(default_factory=FTBEConfig)
    debug: int = Field(0, ge=0, description="Diagnostic verbosity level")

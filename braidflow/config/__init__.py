"""
braidflow Configuration

Estimator defaults live in ``defaults.yaml``; ``load_config`` layers user
files and overrides on top and validates the result.
"""

from .schema import BraidflowConfig, EntropyConfig, FTBEConfig
from .loader import load_config, default_config, DEFAULTS_PATH

__all__ = [
    'BraidflowConfig',
    'EntropyConfig',
    'FTBEConfig',
    'load_config',
    'default_config',
    'DEFAULTS_PATH',
]

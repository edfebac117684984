"""Configuration management for Linear Covariance.

Provides global configuration and random seed management for reproducible
start pairs and random subspaces.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, get_random_state, get_rng
from .defaults import RESEARCH_CONFIGS, SAMPLING_DISTRIBUTIONS, DefaultConfig

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed',
    'get_random_state',
    'get_rng',
    'Settings',
    'RESEARCH_CONFIGS',
    'SAMPLING_DISTRIBUTIONS',
    'DefaultConfig'
]

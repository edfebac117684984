"""Global random seed management for reproducible start pairs and subspaces."""

import random
import numpy as np
from typing import Optional, Dict, Any, Union
import os
import hashlib

# Global random state storage
_GLOBAL_SEED: Optional[int] = None
_RNG_STATE: Optional[Dict[str, Any]] = None
_GENERATOR: Optional[np.random.Generator] = None

SEED_ENVIRONMENT_VARIABLE = 'LINEAR_COVARIANCE_SEED'


def set_global_seed(seed: int) -> None:
    """Set global random seed for all random number generators.

    Seeds Python's random, the legacy NumPy global state, and the
    package-wide ``numpy.random.Generator`` returned by :func:`get_rng`.

    Parameters
    ----------
    seed : int
        Random seed value for reproducibility

    Examples
    --------
    >>> set_global_seed(42)
    >>> # All subsequent random subspaces and start pairs are reproducible
    """
    global _GLOBAL_SEED, _RNG_STATE, _GENERATOR

    _GLOBAL_SEED = seed

    random.seed(seed)
    np.random.seed(seed)
    _GENERATOR = np.random.default_rng(seed)

    # Store the initial state for reference
    _RNG_STATE = {
        'seed': seed,
        'python_state': random.getstate(),
        'numpy_state': np.random.get_state(),
        'generator_state': _GENERATOR.bit_generator.state
    }


def get_global_seed() -> Optional[int]:
    """Get the current global random seed, or None if not set."""
    return _GLOBAL_SEED


def get_random_state() -> Optional[Dict[str, Any]]:
    """Get the random number generator states recorded by :func:`set_global_seed`."""
    return _RNG_STATE


def get_rng(seed: Union[None, int, np.random.Generator] = None) -> np.random.Generator:
    """Resolve a random source.

    Parameters
    ----------
    seed : None, int or np.random.Generator
        A generator is returned unchanged, an integer creates a fresh
        generator, and None returns the package-wide generator

    Returns
    -------
    np.random.Generator
    """
    global _GENERATOR

    if isinstance(seed, np.random.Generator):
        return seed
    if seed is not None:
        return np.random.default_rng(seed)
    if _GENERATOR is None:
        ensure_reproducibility()
    if _GENERATOR is None:
        _GENERATOR = np.random.default_rng()
    return _GENERATOR


def create_deterministic_seed(base_string: str) -> int:
    """Create a deterministic seed from a string.

    Useful for creating reproducible seeds from model identifiers such as
    tree ids.

    Examples
    --------
    >>> seed = create_deterministic_seed("{{1, 2}, {3, 4}}")
    >>> set_global_seed(seed)
    """
    hash_object = hashlib.sha256(base_string.encode())
    hash_hex = hash_object.hexdigest()

    # Convert first 8 hex characters to integer
    seed = int(hash_hex[:8], 16)

    return seed % (2**31 - 1)


def reset_random_state() -> None:
    """Reset all random number generators to their initial states.

    Only works if set_global_seed() was called previously.
    """
    if _RNG_STATE is None:
        raise RuntimeError("Random state not initialized. Call set_global_seed() first.")

    random.setstate(_RNG_STATE['python_state'])
    np.random.set_state(_RNG_STATE['numpy_state'])
    _GENERATOR.bit_generator.state = _RNG_STATE['generator_state']


def get_environment_seed() -> int:
    """Get seed from the ``LINEAR_COVARIANCE_SEED`` environment variable.

    Returns
    -------
    int
        Seed from environment, or a default value if not set
    """
    env_seed = os.environ.get(SEED_ENVIRONMENT_VARIABLE)

    if env_seed is not None:
        try:
            return int(env_seed)
        except ValueError:
            # Non-integer values are hashed into a seed
            return create_deterministic_seed(env_seed)

    return 42


def ensure_reproducibility() -> int:
    """Set the global seed from the environment if it is not set yet.

    Returns
    -------
    int
        The seed in effect
    """
    if _GLOBAL_SEED is None:
        seed = get_environment_seed()
        set_global_seed(seed)
        return seed
    return _GLOBAL_SEED


# Seed on import unless the environment variable is set to an empty string
if os.environ.get(SEED_ENVIRONMENT_VARIABLE) != '':
    ensure_reproducibility()

"""Main configuration settings with TOML loading support."""

import logging
from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Fallback for older Python
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

from .defaults import DEFAULT_CONFIG, RESEARCH_CONFIGS, DefaultConfig, validate_config

logger = logging.getLogger(__name__)

_SECTIONS = ('start_pair', 'numerics', 'symbolic', 'advanced')


@dataclass
class Settings:
    """Main configuration settings for Linear Covariance.

    Can be loaded from TOML files for user customization while providing
    sensible defaults for different use cases.
    """

    # Start pair synthesis
    max_start_pair_attempts: int = DEFAULT_CONFIG.max_start_pair_attempts
    sampling: str = DEFAULT_CONFIG.sampling

    # Numerical acceptance thresholds
    residual_tolerance: float = DEFAULT_CONFIG.residual_tolerance
    max_condition_number: float = DEFAULT_CONFIG.max_condition_number

    # Symbolic construction
    large_model_size: int = DEFAULT_CONFIG.large_model_size

    # Reproducibility
    random_seed: Optional[int] = None

    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.sampling not in ('normal', 'uniform'):
            raise ValueError(f"Unknown sampling distribution '{self.sampling}'")
        if self.max_start_pair_attempts < 1:
            raise ValueError("max_start_pair_attempts must be at least 1")

        temp_config = DefaultConfig(
            max_start_pair_attempts=self.max_start_pair_attempts,
            sampling=self.sampling,
            residual_tolerance=self.residual_tolerance,
            max_condition_number=self.max_condition_number,
            large_model_size=self.large_model_size,
        )

        warnings = validate_config(temp_config)
        if warnings and self.verbose:
            for warning in warnings:
                logger.warning("Configuration warning: %s", warning)

    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.

        Parameters
        ----------
        preset : str
            Preset name ('default', 'strict', 'exploratory')

        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in RESEARCH_CONFIGS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(RESEARCH_CONFIGS.keys())}")

        config = RESEARCH_CONFIGS[preset]
        return cls(**asdict(config))

    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.

        Both a flat layout and the sectioned layout written by
        :meth:`to_toml` are accepted.

        Raises
        ------
        ImportError
            If tomllib is not available
        FileNotFoundError
            If TOML file doesn't exist
        """
        if tomllib is None:
            raise ImportError("tomllib not available. Install tomli for Python < 3.11")

        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)

        settings_data = {}
        for section in _SECTIONS:
            if section in config_data:
                settings_data.update(config_data[section])

        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value

        return cls(**settings_data)

    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file.

        Raises
        ------
        ImportError
            If tomli_w is not available
        """
        if tomli_w is None:
            raise ImportError("tomli_w not available. Install tomli-w for TOML writing")

        config_data = {
            'start_pair': {
                'max_start_pair_attempts': self.max_start_pair_attempts,
                'sampling': self.sampling,
            },
            'numerics': {
                'residual_tolerance': self.residual_tolerance,
                'max_condition_number': self.max_condition_number,
            },
            'symbolic': {
                'large_model_size': self.large_model_size,
            },
            'advanced': {
                'verbose': self.verbose,
            },
        }
        # TOML has no null
        if self.random_seed is not None:
            config_data['advanced']['random_seed'] = self.random_seed

        toml_path = Path(toml_path)
        with open(toml_path, 'wb') as f:
            tomli_w.dump(config_data, f)

    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values."""
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None


def get_config(config_path: Optional[Union[str, Path]] = None,
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.

    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset configuration name ('default', 'strict', 'exploratory').
        Ignored if config_path is provided.
    reload : bool
        Force reload configuration even if already loaded

    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG

    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG

    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            'linear_covariance.toml',
            Path.home() / '.linear_covariance.toml',
            Path.cwd() / 'config' / 'linear_covariance.toml'
        ]

        config_loaded = False
        for path in default_paths:
            if Path(path).exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError) as e:
                    logger.warning("Could not load config from %s: %s", path, e)
                    continue

        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'default')

    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)

    return _GLOBAL_CONFIG


def set_config(settings: Settings) -> None:
    """Set global configuration settings."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings

    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)

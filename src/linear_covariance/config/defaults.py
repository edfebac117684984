"""Default numerical settings for start pair synthesis and model construction."""

from dataclasses import dataclass
from typing import List


@dataclass
class DefaultConfig:
    """Base configuration structure for MLE system construction."""

    # Start pair synthesis
    max_start_pair_attempts: int
    sampling: str

    # Numerical acceptance thresholds
    residual_tolerance: float
    max_condition_number: float

    # Symbolic construction
    large_model_size: int


DEFAULT_CONFIG = DefaultConfig(
    max_start_pair_attempts=10,
    sampling="normal",
    residual_tolerance=1e-8,
    max_condition_number=1e8,
    large_model_size=6,
)

# Tighter certification, more resampling
STRICT_CONFIG = DefaultConfig(
    max_start_pair_attempts=50,
    sampling="normal",
    residual_tolerance=1e-11,
    max_condition_number=1e6,
    large_model_size=6,
)

RESEARCH_CONFIGS = {
    "default": DEFAULT_CONFIG,
    "strict": STRICT_CONFIG,
    "exploratory": DefaultConfig(
        max_start_pair_attempts=3,
        sampling="uniform",
        residual_tolerance=1e-6,
        max_condition_number=1e10,
        large_model_size=8,
    ),
}

# Distributions for θ₀ over the complex plane
SAMPLING_DISTRIBUTIONS = [
    "normal",   # standard complex normal
    "uniform",  # uniform on the square [-1, 1] + [-1, 1]i
]

# Below this, float64 rounding alone can fail certification
MIN_RESIDUAL_TOLERANCE = 1e-14
# Condition numbers past 1/eps make K₀ meaningless
MAX_CONDITION_LIMIT = 1e15


def validate_config(config: DefaultConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []

    if config.max_start_pair_attempts < 1:
        warnings.append(f"max_start_pair_attempts {config.max_start_pair_attempts} must be at least 1")

    if config.sampling not in SAMPLING_DISTRIBUTIONS:
        warnings.append(f"Sampling distribution '{config.sampling}' not recognized")

    if config.residual_tolerance < MIN_RESIDUAL_TOLERANCE:
        warnings.append(f"Residual tolerance {config.residual_tolerance} is below float64 rounding")

    if config.max_condition_number > MAX_CONDITION_LIMIT:
        warnings.append(f"Condition number limit {config.max_condition_number:g} exceeds {MAX_CONDITION_LIMIT:g}")

    if config.large_model_size > 10:
        warnings.append(f"Large model threshold {config.large_model_size} will not warn before very slow constructions")

    return warnings

"""Environment validation for Linear Covariance dependencies."""

import sys
import warnings
from packaging import version


def check_environment(min_numpy: str = "1.25", min_scipy: str = "1.11",
                      min_sympy: str = "1.12") -> None:
    """Check that environment meets minimum dependency requirements.

    Parameters
    ----------
    min_numpy : str, default="1.25"
        Minimum required NumPy version
    min_scipy : str, default="1.11"
        Minimum required SciPy version
    min_sympy : str, default="1.12"
        Minimum required SymPy version

    Raises
    ------
    RuntimeError
        If any dependency requirements are not met

    Examples
    --------
    >>> check_environment()  # Uses default minimums
    >>> check_environment(min_numpy="1.24", min_scipy="1.10")
    """
    errors = []

    if sys.version_info < (3, 9):
        errors.append(f"Python 3.9+ required, found {sys.version_info.major}.{sys.version_info.minor}")

    try:
        import numpy as np
        if version.parse(np.__version__) < version.parse(min_numpy):
            errors.append(f"NumPy {min_numpy}+ required, found {np.__version__}")
    except ImportError:
        errors.append("NumPy not installed - required for numeric start pairs")

    try:
        import scipy
        if version.parse(scipy.__version__) < version.parse(min_scipy):
            errors.append(f"SciPy {min_scipy}+ required, found {scipy.__version__}")
    except ImportError:
        errors.append("SciPy not installed - required for matrix inversion and linear solves")

    try:
        import sympy
        if version.parse(sympy.__version__) < version.parse(min_sympy):
            errors.append(f"SymPy {min_sympy}+ required, found {sympy.__version__}")
    except ImportError:
        errors.append("SymPy not installed - required for polynomial systems")

    optional_warnings = []
    try:
        import tomli_w  # noqa: F401
    except ImportError:
        optional_warnings.append("tomli-w not found - settings cannot be written to TOML")

    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)

        if optional_warnings:
            error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)

        error_msg += "\n\nTo install required dependencies:\n  pip install numpy scipy sympy packaging"
        raise RuntimeError(error_msg)

    if optional_warnings:
        warning_msg = "Environment warnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        warnings.warn(warning_msg, UserWarning)


def get_dependency_versions() -> dict:
    """Get versions of all relevant dependencies.

    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }

    for name in ('numpy', 'scipy', 'sympy', 'packaging', 'tomli_w'):
        try:
            module = __import__(name)
            versions[name] = getattr(module, '__version__', 'unknown')
        except ImportError:
            versions[name] = 'not installed'

    try:
        import tomllib  # noqa: F401
        versions['tomllib'] = 'built-in (3.11+)'
    except ImportError:
        try:
            import tomli
            versions['tomli'] = tomli.__version__
        except ImportError:
            versions['tomli'] = 'not installed'

    return versions


def validate_numerical_stability() -> None:
    """Check that dense complex inversion behaves as the start pair synthesis expects."""
    import numpy as np
    from scipy import linalg

    rng = np.random.default_rng(0)
    test_matrix = rng.standard_normal((20, 20)) + 1j * rng.standard_normal((20, 20))
    test_matrix = test_matrix @ test_matrix.conj().T + 20 * np.eye(20)

    inverse = linalg.inv(test_matrix)
    if not np.allclose(inverse @ test_matrix, np.eye(20), atol=1e-10):
        raise RuntimeError("Complex matrix inversion numerical stability test failed")

    rhs = rng.standard_normal(20)
    solution, *_ = linalg.lstsq(test_matrix, rhs)
    if not np.allclose(test_matrix @ solution, rhs, atol=1e-10):
        raise RuntimeError("Least squares numerical stability test failed")

"""Error kinds raised while building MLE systems and start pairs."""


class LinearCovarianceError(Exception):
    """Base class for all package errors."""


class DimensionError(LinearCovarianceError, ValueError):
    """A size has no valid symmetric-matrix dimension.

    Raised for vectors whose length is not a triangular number, non-square
    matrices, and subspace dimensions exceeding n(n+1)/2.
    """


class ModelError(LinearCovarianceError, ValueError):
    """A covariance model violates its structural invariants.

    Examples are a non-symmetric Σ, entries that are not affine-linear in the
    parameters, or free symbols that differ from the declared parameters.
    """


class NonLinearError(LinearCovarianceError, ValueError):
    """An affine-linear system was required but a higher degree term was found."""

    def __init__(self, message: str, equation_index: int = -1):
        super().__init__(message)
        self.equation_index = equation_index


class SingularityError(LinearCovarianceError, ArithmeticError):
    """A numeric matrix or linear system is singular or inconsistent.

    Start pair synthesis treats this as a signal to resample θ₀.
    """

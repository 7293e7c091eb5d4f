from ._spline_error import SplineError


class ValidationError(SplineError):
    """Raised when sample data cannot be calibrated (shape mismatch, NaNs)."""

    pass

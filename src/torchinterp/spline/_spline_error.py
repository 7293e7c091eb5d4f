class SplineError(Exception):
    """Base exception for all spline interpolation errors."""

    pass

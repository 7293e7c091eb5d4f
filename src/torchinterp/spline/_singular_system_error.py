from ._spline_error import SplineError


class SingularSystemError(SplineError):
    """Raised when a banded system has a zero or non-finite pivot."""

    pass

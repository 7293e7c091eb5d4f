from ._spline_error import SplineError


class OutOfDomainError(SplineError):
    """Raised when a query point lies outside the knot range [x[0], x[-1]]."""

    pass

"""Differentiable piecewise polynomial interpolation for PyTorch tensors.

Samples (x, y) are calibrated with one of several interpolation variants
into a SplineInterpolation, which is then evaluated inside [x[0], x[-1]].
Extrapolation is never attempted.

Entry Points
------------
calibrate
    Fit an interpolation variant to samples.
interpolate
    Evaluate a calibrated spline, or calibrate and evaluate in one call.
spline_interpolation
    Create an interpolator from data (calibrate + callable).

Variants
--------
LinearSpline
    Piecewise linear interpolation.
ClampedCubicSpline
    Cubic spline with prescribed end slopes.
NaturalCubicSpline
    Cubic spline with zero curvature at the ends.
NotAKnotCubicSpline
    Cubic spline with third derivative continuity at the second and
    second-to-last knots.
AkimaSpline
    Akima's local cubic Hermite spline.
KrugerSpline
    Kruger's constrained cubic spline.

Calculus
--------
spline_interpolation_evaluate
    Evaluate a calibrated spline at query points.
spline_interpolation_derivative
    Evaluate derivatives of a calibrated spline.
spline_interpolation_integral
    Compute definite integral of a calibrated spline.

Linear Algebra
--------------
solve_banded
    Solve a banded linear system.

Data Types
----------
SplineInterpolation
    Calibrated piecewise polynomial interpolant.

Exceptions
----------
SplineError
    Base exception for spline operations.
ValidationError
    Invalid sample data.
KnotError
    Invalid knot vector.
OutOfDomainError
    Query point outside spline domain.
SingularSystemError
    Linear system could not be solved.
"""

# Import base exception first
from ._spline_error import SplineError

# Import exception subclasses
from ._knot_error import KnotError
from ._out_of_domain_error import OutOfDomainError
from ._singular_system_error import SingularSystemError
from ._validation_error import ValidationError

# Import spline implementations
from ._calibrate import calibrate, interpolate, spline_interpolation
from ._solve_banded import solve_banded
from ._spline_interpolation import (
    SplineInterpolation,
    spline_interpolation_derivative,
    spline_interpolation_evaluate,
    spline_interpolation_integral,
)
from ._variants import (
    AkimaSpline,
    ClampedCubicSpline,
    KrugerSpline,
    LinearSpline,
    NaturalCubicSpline,
    NotAKnotCubicSpline,
    SplineVariant,
    resolve_variant,
)

__all__ = [
    "AkimaSpline",
    "ClampedCubicSpline",
    "KnotError",
    "KrugerSpline",
    "LinearSpline",
    "NaturalCubicSpline",
    "NotAKnotCubicSpline",
    "OutOfDomainError",
    "SingularSystemError",
    "SplineError",
    "SplineInterpolation",
    "SplineVariant",
    "ValidationError",
    "calibrate",
    "interpolate",
    "resolve_variant",
    "solve_banded",
    "spline_interpolation",
    "spline_interpolation_derivative",
    "spline_interpolation_evaluate",
    "spline_interpolation_integral",
]

from ._spline_interpolation import SplineInterpolation
from ._spline_interpolation_derivative import spline_interpolation_derivative
from ._spline_interpolation_evaluate import spline_interpolation_evaluate
from ._spline_interpolation_integral import spline_interpolation_integral

__all__ = [
    "SplineInterpolation",
    "spline_interpolation_derivative",
    "spline_interpolation_evaluate",
    "spline_interpolation_integral",
]

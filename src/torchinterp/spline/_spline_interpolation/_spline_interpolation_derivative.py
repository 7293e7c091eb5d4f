from __future__ import annotations

import math
from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from ._spline_interpolation_evaluate import _locate

if TYPE_CHECKING:
    from ._spline_interpolation import SplineInterpolation


def spline_interpolation_derivative(
    spline: SplineInterpolation,
    t: Union[float, Tensor],
    order: int = 1,
) -> Tensor:
    """
    Evaluate a derivative of a calibrated spline at query points.

    Parameters
    ----------
    spline : SplineInterpolation
        Calibrated spline from calibrate
    t : float or Tensor
        Query points, shape (*query_shape) or scalar
    order : int
        Order of the derivative, >= 1. Default is 1.

    Returns
    -------
    Tensor
        Derivative values, shape (*query_shape). Orders at or above the
        number of coefficients per segment give zeros.

    Raises
    ------
    ValueError
        If order < 1.
    OutOfDomainError
        If any query point is outside [x[0], x[-1]] or is NaN

    Notes
    -----
    For p(dx) = sum_j c_j * dx^j the derivative of order r is

        sum_{j >= r} c_j * j! / (j - r)! * dx^(j - r)

    At interior knots the right-hand segment is used.
    """
    if order < 1:
        raise ValueError(f"Derivative order must be >= 1, got {order}")

    coeffs = spline.coefficients
    k = coeffs.shape[1]

    t, segment_idx, dx, is_scalar = _locate(spline, t)

    if order >= k:
        y = torch.zeros_like(dx)
    else:
        rows = coeffs[segment_idx]
        scales = [
            math.factorial(j) // math.factorial(j - order)
            for j in range(order, k)
        ]
        # Horner's method over the differentiated coefficients
        y = scales[-1] * rows[:, k - 1]
        for j in range(k - 2, order - 1, -1):
            y = scales[j - order] * rows[:, j] + dx * y

    y = y.view(t.shape)

    if is_scalar:
        y = y.squeeze(0)

    return y

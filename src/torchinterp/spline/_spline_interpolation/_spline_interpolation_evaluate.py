from __future__ import annotations

from typing import TYPE_CHECKING, Tuple, Union

import torch
from torch import Tensor

from .._out_of_domain_error import OutOfDomainError

if TYPE_CHECKING:
    from ._spline_interpolation import SplineInterpolation


def spline_interpolation_evaluate(
    spline: SplineInterpolation,
    t: Union[float, Tensor],
) -> Tensor:
    """
    Evaluate a calibrated spline at query points.

    Parameters
    ----------
    spline : SplineInterpolation
        Calibrated spline from calibrate
    t : float or Tensor
        Query points, shape (*query_shape) or scalar

    Returns
    -------
    y : Tensor
        Interpolated values, shape (*query_shape)

    Raises
    ------
    OutOfDomainError
        If any query point is outside [x[0], x[-1]] or is NaN
    """
    coeffs = spline.coefficients

    t, segment_idx, dx, is_scalar = _locate(spline, t)

    # Evaluate polynomial using Horner's method:
    # y = c0 + dx*(c1 + dx*(c2 + dx*c3)) for the cubic case
    rows = coeffs[segment_idx]  # (*query_flat, k)
    y = rows[:, -1]
    for j in range(coeffs.shape[1] - 2, -1, -1):
        y = rows[:, j] + dx * y

    y = y.view(t.shape)

    # Handle scalar input: return scalar output
    if is_scalar:
        y = y.squeeze(0)

    return y


def _locate(
    spline: SplineInterpolation,
    t: Union[float, Tensor],
) -> Tuple[Tensor, Tensor, Tensor, bool]:
    """Check the domain and find the active segment of each query point.

    Returns the (at least 1-d) query tensor, the flat segment indices, the
    flat offsets t - x[segment] and whether the query was a scalar.
    """
    knots = spline.x

    if not isinstance(t, Tensor):
        t = torch.as_tensor(t, dtype=knots.dtype, device=knots.device)
    elif t.dtype != knots.dtype or t.device != knots.device:
        t = t.to(dtype=knots.dtype, device=knots.device)

    # Check if t is scalar (0-d tensor)
    is_scalar = t.dim() == 0
    if is_scalar:
        t = t.unsqueeze(0)

    t_flat = t.flatten()

    # Get domain bounds
    t_min = knots[0]
    t_max = knots[-1]

    if (
        torch.any(torch.isnan(t_flat))
        or torch.any(t_flat < t_min)
        or torch.any(t_flat > t_max)
    ):
        raise OutOfDomainError(
            f"Query points outside spline domain [{t_min.item()}, {t_max.item()}]"
        )

    # Greatest segment index i such that knots[i] <= t
    segment_idx = (
        torch.searchsorted(
            knots.detach().contiguous(), t_flat.detach(), right=True
        )
        - 1
    )

    # t == knots[-1] belongs to the last segment
    n_segments = knots.shape[0] - 1
    segment_idx = torch.clamp(segment_idx, 0, n_segments - 1)

    dx = t_flat - knots[segment_idx]

    return t, segment_idx, dx, is_scalar

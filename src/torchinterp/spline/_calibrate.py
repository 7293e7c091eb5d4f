"""Calibration of interpolation variants and the interpolate entry point."""

from typing import Callable, Optional, Sequence, Type, Union

import torch
from torch import Tensor

from ._knot_error import KnotError
from ._out_of_domain_error import OutOfDomainError
from ._spline_interpolation import (
    SplineInterpolation,
    spline_interpolation_evaluate,
)
from ._validation_error import ValidationError
from ._variants import SplineVariant, resolve_variant

VariantLike = Union[str, SplineVariant, Type[SplineVariant]]


def calibrate(
    x: Union[Tensor, Sequence[float]],
    y: Union[Tensor, Sequence[float]],
    variant: VariantLike,
) -> SplineInterpolation:
    """
    Fit an interpolation variant to samples.

    Parameters
    ----------
    x : Tensor or sequence of float
        Knot positions, shape (n_points,). Must be strictly increasing.
    y : Tensor or sequence of float
        Values at knots, shape (n_points,).
    variant : str, SplineVariant or SplineVariant subclass
        Interpolation algorithm, e.g. ``NaturalCubicSpline()``,
        ``ClampedCubicSpline(alpha=0.0, beta=1.0)`` or ``"akima"``.

    Returns
    -------
    SplineInterpolation
        Calibrated spline.

    Raises
    ------
    ValidationError
        If x and y are not one-dimensional, differ in length, or contain
        non-finite values.
    KnotError
        If x is not strictly increasing or has fewer points than the
        variant requires (2, or 4 for not-a-knot).
    SingularSystemError
        If the variant's linear system cannot be solved.
    ValueError
        If the variant is not recognised.

    Examples
    --------
    >>> spline = calibrate([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 1.0], "linear")
    >>> spline(0.5)
    tensor(0.5000, dtype=torch.float64)
    """
    variant = resolve_variant(variant)
    x, y = _as_samples(x, y)

    if x.dim() != 1 or y.dim() != 1:
        raise ValidationError(
            f"x and y must be one-dimensional, got shapes "
            f"{tuple(x.shape)} and {tuple(y.shape)}"
        )

    n = x.shape[0]
    if y.shape[0] != n:
        raise ValidationError(
            f"x and y must be the same length, got {n} and {y.shape[0]}"
        )
    if n < variant.min_points:
        raise KnotError(
            f"{variant.name} interpolation needs at least "
            f"{variant.min_points} points, got {n}"
        )
    if not (torch.all(torch.isfinite(x)) and torch.all(torch.isfinite(y))):
        raise ValidationError("x and y must be finite")
    if not torch.all(x[1:] > x[:-1]):
        raise KnotError("Knots must be strictly increasing")

    coefficients = variant.coefficients(x, y)

    return SplineInterpolation(
        x=x,
        y=y,
        coefficients=coefficients,
        variant=variant.name,
        batch_size=[],
    )


def interpolate(
    t: Union[float, Tensor],
    x: Union[SplineInterpolation, Tensor, Sequence[float]],
    y: Optional[Union[Tensor, Sequence[float]]] = None,
    variant: Optional[VariantLike] = None,
) -> Tensor:
    """
    Interpolate at query points.

    Either evaluates a calibrated spline, ``interpolate(t, spline)``, or
    calibrates and evaluates in one go, ``interpolate(t, x, y, variant)``.

    Parameters
    ----------
    t : float or Tensor
        Query points, shape (*query_shape) or scalar.
    x : SplineInterpolation, Tensor or sequence of float
        Calibrated spline, or knot positions.
    y : Tensor or sequence of float, optional
        Values at knots. Required when x holds knot positions.
    variant : str, SplineVariant or SplineVariant subclass, optional
        Interpolation algorithm. Required when x holds knot positions.

    Returns
    -------
    Tensor
        Interpolated values, shape (*query_shape).

    Raises
    ------
    OutOfDomainError
        If any query point is outside [x[0], x[-1]]. When samples are given
        the check happens before any calibration work.
    """
    if isinstance(x, SplineInterpolation):
        if y is not None or variant is not None:
            raise ValueError(
                "y and variant must not be given together with a calibrated spline"
            )
        return spline_interpolation_evaluate(x, t)

    if y is None or variant is None:
        raise ValueError("y and variant are required when x holds knot positions")

    x, y = _as_samples(x, y)
    if x.dim() == 1 and x.shape[0] > 0:
        t_check = torch.as_tensor(t, dtype=x.dtype, device=x.device)
        if (
            torch.any(torch.isnan(t_check))
            or torch.any(t_check < x[0])
            or torch.any(t_check > x[-1])
        ):
            raise OutOfDomainError(
                f"Query points outside spline domain "
                f"[{x[0].item()}, {x[-1].item()}]"
            )

    return spline_interpolation_evaluate(calibrate(x, y, variant), t)


def spline_interpolation(
    x: Union[Tensor, Sequence[float]],
    y: Union[Tensor, Sequence[float]],
    variant: VariantLike,
) -> Callable[[Union[float, Tensor]], Tensor]:
    """Create an interpolator from data.

    This is a convenience function that calibrates a spline and returns
    a callable that evaluates it.

    Parameters
    ----------
    x : Tensor or sequence of float
        Data x-coordinates. Must be strictly monotonically increasing.
    y : Tensor or sequence of float
        Data y-values, same length as x.
    variant : str, SplineVariant or SplineVariant subclass
        Interpolation algorithm.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given points.

    Examples
    --------
    >>> import torch
    >>> x = torch.linspace(0, 1, 10, dtype=torch.float64)
    >>> y = torch.sin(x * 2 * torch.pi)
    >>> f = spline_interpolation(x, y, "akima")
    >>> f(torch.tensor([0.5], dtype=torch.float64))  # Evaluate at x=0.5
    """
    fitted = calibrate(x, y, variant)
    return lambda t: spline_interpolation_evaluate(fitted, t)


def _as_samples(x, y):
    x = _as_float_tensor(x)
    y = _as_float_tensor(y)

    dtype = torch.promote_types(x.dtype, y.dtype)
    return x.to(dtype=dtype), y.to(dtype=dtype, device=x.device)


def _as_float_tensor(values: Union[Tensor, Sequence[float]]) -> Tensor:
    # Clone so that the calibrated spline never aliases caller memory
    if isinstance(values, Tensor):
        tensor = values.clone()
        if not tensor.is_floating_point():
            tensor = tensor.to(torch.float64)
        return tensor

    return torch.tensor(values, dtype=torch.float64)

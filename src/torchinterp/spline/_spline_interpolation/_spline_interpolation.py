"""Piecewise polynomial produced by calibrating an interpolation variant."""

from typing import Union

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._knot_error import KnotError
from .._validation_error import ValidationError


@tensorclass
class SplineInterpolation:
    """Calibrated piecewise polynomial interpolant.

    Attributes
    ----------
    x : Tensor
        Knots, shape (n_knots,). Strictly increasing, n_knots >= 2.
    y : Tensor
        Sample values at the knots, shape (n_knots,).
    coefficients : Tensor
        Polynomial coefficients, shape (n_knots - 1, k) with k = 2 for the
        linear variant and k = 4 for the cubic and Hermite variants.
        For segment i, the polynomial is:
        c[i, 0] + c[i, 1]*(t-x[i]) + ... + c[i, k-1]*(t-x[i])^(k-1)
        where c = coefficients (ascending degree).
    variant : str
        Name of the interpolation variant that produced the coefficients.

    Raises
    ------
    ValidationError
        If the shapes of x, y and coefficients are inconsistent.
    KnotError
        If there are fewer than two knots or x is not strictly increasing.
    """

    x: Tensor
    y: Tensor
    coefficients: Tensor
    variant: str

    def __post_init__(self):
        if self.x.dim() != 1 or self.y.dim() != 1:
            raise ValidationError(
                f"x and y must be one-dimensional, got shapes "
                f"{tuple(self.x.shape)} and {tuple(self.y.shape)}"
            )
        n = self.x.shape[0]
        if self.y.shape[0] != n:
            raise ValidationError(
                f"x and y must be the same length, got {n} and {self.y.shape[0]}"
            )
        if n < 2:
            raise KnotError(f"Need at least 2 points, got {n}")
        if not torch.all(self.x[1:] > self.x[:-1]):
            raise KnotError("Knots must be strictly increasing")
        if self.coefficients.dim() != 2 or self.coefficients.shape[1] not in (
            2,
            4,
        ):
            raise ValidationError(
                f"coefficients must have shape (n_segments, 2) or "
                f"(n_segments, 4), got {tuple(self.coefficients.shape)}"
            )
        if self.coefficients.shape[0] != n - 1:
            raise ValidationError(
                f"Expected {n - 1} coefficient rows for {n} knots, "
                f"got {self.coefficients.shape[0]}"
            )

    def __call__(self, t: Union[float, Tensor]) -> Tensor:
        from ._spline_interpolation_evaluate import (
            spline_interpolation_evaluate,
        )

        return spline_interpolation_evaluate(self, t)

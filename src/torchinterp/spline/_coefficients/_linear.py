import torch
from torch import Tensor


def linear_coefficients(x: Tensor, y: Tensor) -> Tensor:
    """
    Coefficients of the piecewise linear interpolant.

    Parameters
    ----------
    x : Tensor
        Knot positions, shape (n_points,). Strictly increasing.
    y : Tensor
        Values at knots, shape (n_points,).

    Returns
    -------
    Tensor
        Coefficients, shape (n_points - 1, 2). Row i is [y[i], s[i]] where
        s[i] is the secant slope of segment i.
    """
    h = x[1:] - x[:-1]
    s = (y[1:] - y[:-1]) / h

    return torch.stack([y[:-1], s], dim=-1)

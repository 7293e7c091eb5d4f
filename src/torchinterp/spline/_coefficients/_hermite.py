import torch
from torch import Tensor


def hermite_coefficients(x: Tensor, y: Tensor, dydx: Tensor) -> Tensor:
    """
    Convert knot values and first derivatives into cubic coefficients.

    Parameters
    ----------
    x : Tensor
        Knot positions, shape (n_points,).
    y : Tensor
        Values at knots, shape (n_points,).
    dydx : Tensor
        Derivative estimates at knots, shape (n_points,).

    Returns
    -------
    Tensor
        Coefficients, shape (n_points - 1, 4).

    Notes
    -----
    With secant s = (y[i+1] - y[i]) / h on a segment of width h:

        a = y[i]
        b = dydx[i]
        c = (3*s - dydx[i+1] - 2*dydx[i]) / h
        d = -(2*s - dydx[i+1] - dydx[i]) / h^2
    """
    h = x[1:] - x[:-1]
    s = (y[1:] - y[:-1]) / h

    a = y[:-1]
    b = dydx[:-1]
    c = (3 * s - dydx[1:] - 2 * dydx[:-1]) / h
    d = -(2 * s - dydx[1:] - dydx[:-1]) / h**2

    return torch.stack([a, b, c, d], dim=-1)

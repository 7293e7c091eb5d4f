import torch
from torch import Tensor

from ._hermite import hermite_coefficients


def kruger_coefficients(x: Tensor, y: Tensor) -> Tensor:
    """
    Coefficients of Kruger's constrained cubic spline.

    Parameters
    ----------
    x : Tensor
        Knot positions, shape (n_points,). Strictly increasing, n_points >= 2.
    y : Tensor
        Values at knots, shape (n_points,).

    Returns
    -------
    Tensor
        Coefficients, shape (n_points - 1, 4).

    Notes
    -----
    Interior derivatives are the harmonic mean of the adjacent secants where
    both have the same sign and zero otherwise, so the curve never overshoots
    at a local extremum:

        dydx[i] = 2 / (1/s[i-1] + 1/s[i])   if s[i-1]*s[i] > 0
        dydx[i] = 0                          otherwise

    End derivatives are one-sided:

        dydx[0]  = 1.5*s[0]  - 0.5*dydx[1]
        dydx[-1] = 1.5*s[-1] - 0.5*dydx[-2]

    With only two points both derivatives equal the secant.

    References
    ----------
    Kruger, C. J. C. (2002). "Constrained Cubic Spline Interpolation for
    Chemical Engineering Applications".
    """
    n = x.shape[0]
    h = x[1:] - x[:-1]
    s = (y[1:] - y[:-1]) / h

    if n == 2:
        return hermite_coefficients(x, y, torch.cat([s, s]))

    s_left = s[:-1]
    s_right = s[1:]

    same_sign = (s_left * s_right) > 0

    # Avoid division by zero where the harmonic mean is discarded
    s_sum = torch.where(same_sign, s_left + s_right, torch.ones_like(s_left))
    harmonic = 2 * s_left * s_right / s_sum

    interior = torch.where(same_sign, harmonic, torch.zeros_like(harmonic))

    first = 1.5 * s[:1] - 0.5 * interior[:1]
    last = 1.5 * s[-1:] - 0.5 * interior[-1:]

    dydx = torch.cat([first, interior, last])

    return hermite_coefficients(x, y, dydx)

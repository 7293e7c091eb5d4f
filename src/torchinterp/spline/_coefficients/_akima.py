import torch
from torch import Tensor

from ._hermite import hermite_coefficients


def akima_coefficients(x: Tensor, y: Tensor) -> Tensor:
    """
    Coefficients of the Akima spline.

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
    The secant sequence s is extended by two virtual slopes on each side
    through linear extrapolation: 2*s[0] - s[1] precedes s[0], and the slope
    before that repeats the step (likewise past the end). With s indexed so
    that s[i] is the secant to the right of knot i, the derivative at knot i
    is

        (|s[i+1] - s[i]| * s[i-1] + |s[i-1] - s[i-2]| * s[i])
        / (|s[i+1] - s[i]| + |s[i-1] - s[i-2]|)

    falling back to (s[i-1] + s[i]) / 2 when both weights vanish.

    References
    ----------
    Akima, H. (1970). "A New Method of Interpolation and Smooth Curve Fitting
    Based on Local Procedures". Journal of the ACM. 17 (4): 589-602.
    """
    n = x.shape[0]
    h = x[1:] - x[:-1]
    s = (y[1:] - y[:-1]) / h

    # A single secant extends as a constant
    second = s[1:2] if n > 2 else s[:1]
    penultimate = s[-2:-1] if n > 2 else s[-1:]

    before = 2 * s[:1] - second
    before_2 = 2 * before - s[:1]
    after = 2 * s[-1:] - penultimate
    after_2 = 2 * after - s[-1:]

    s_ext = torch.cat([before_2, before, s, after, after_2])  # (n + 3,)
    s_diff = torch.abs(s_ext[1:] - s_ext[:-1])  # (n + 2,)

    left = s_ext[1 : n + 1]
    right = s_ext[2 : n + 2]
    w_left = s_diff[2 : n + 2]
    w_right = s_diff[:n]

    w_sum = w_left + w_right
    flat = w_sum == 0
    w_sum_safe = torch.where(flat, torch.ones_like(w_sum), w_sum)

    dydx = torch.where(
        flat,
        (left + right) / 2,
        (w_left * left + w_right * right) / w_sum_safe,
    )

    return hermite_coefficients(x, y, dydx)

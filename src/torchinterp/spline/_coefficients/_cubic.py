"""Cubic splines determined by a banded system in the second derivatives."""

from typing import Tuple, Union

import torch
from torch import Tensor

from .._solve_banded import solve_banded


def clamped_cubic_coefficients(
    x: Tensor,
    y: Tensor,
    alpha: Union[float, Tensor] = 0.0,
    beta: Union[float, Tensor] = 0.0,
) -> Tensor:
    """
    Coefficients of the cubic spline with prescribed end slopes.

    Parameters
    ----------
    x : Tensor
        Knot positions, shape (n_points,). Strictly increasing, n_points >= 2.
    y : Tensor
        Values at knots, shape (n_points,).
    alpha : float or Tensor
        First derivative at x[0].
    beta : float or Tensor
        First derivative at x[-1].

    Returns
    -------
    Tensor
        Coefficients, shape (n_points - 1, 4).
    """
    h, s = _widths_and_secants(x, y)
    alpha = torch.as_tensor(alpha, dtype=y.dtype, device=y.device).reshape(1)
    beta = torch.as_tensor(beta, dtype=y.dtype, device=y.device).reshape(1)

    zero = h.new_zeros(1)

    # First row: 2*h[0]*m[0] + h[0]*m[1] = 6*(s[0] - alpha)
    # Last row: h[-1]*m[-2] + 2*h[-1]*m[-1] = 6*(beta - s[-1])
    diag = 2 * (torch.cat([zero, h]) + torch.cat([h, zero]))
    upper = torch.cat([zero, h])
    lower = torch.cat([h, zero])
    bands = torch.stack([upper, diag, lower])

    rhs = 6 * torch.cat([s[:1] - alpha, s[1:] - s[:-1], beta - s[-1:]])

    m = solve_banded(bands, rhs, lower=1, upper=1)

    return _second_derivative_coefficients(y, h, s, m)


def natural_cubic_coefficients(x: Tensor, y: Tensor) -> Tensor:
    """
    Coefficients of the cubic spline with zero curvature at both ends.

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
    """
    h, s = _widths_and_secants(x, y)

    one = h.new_ones(1)
    zero = h.new_zeros(1)

    # Boundary rows reduce to m[0] = 0 and m[-1] = 0
    diag = torch.cat([one, 2 * (h[:-1] + h[1:]), one])
    upper = torch.cat([zero, zero, h[1:]])
    lower = torch.cat([h[:-1], zero, zero])
    bands = torch.stack([upper, diag, lower])

    rhs = _interior_rhs(s)

    m = solve_banded(bands, rhs, lower=1, upper=1)

    return _second_derivative_coefficients(y, h, s, m)


def not_a_knot_cubic_coefficients(x: Tensor, y: Tensor) -> Tensor:
    """
    Coefficients of the not-a-knot cubic spline.

    The first two and the last two segments are forced to be pieces of the
    same cubic, i.e. the third derivative is continuous at x[1] and x[-2].

    Parameters
    ----------
    x : Tensor
        Knot positions, shape (n_points,). Strictly increasing, n_points >= 4.
    y : Tensor
        Values at knots, shape (n_points,).

    Returns
    -------
    Tensor
        Coefficients, shape (n_points - 1, 4).

    Notes
    -----
    The boundary rows read

        -h[1]*m[0] + (h[0] + h[1])*m[1] - h[0]*m[2] = 0
        -h[-1]*m[-3] + (h[-2] + h[-1])*m[-2] - h[-2]*m[-1] = 0

    which reach two places off the diagonal, so the system is pentadiagonal.
    """
    n = x.shape[0]
    h, s = _widths_and_secants(x, y)

    zero = h.new_zeros(1)
    zeros = h.new_zeros(n - 3)

    upper_2 = torch.cat([zero, zero, -h[:1], zeros])
    upper_1 = torch.cat([zero, h[:1] + h[1:2], h[1:]])
    diag = torch.cat([-h[1:2], 2 * (h[:-1] + h[1:]), -h[-2:-1]])
    lower_1 = torch.cat([h[:-1], h[-2:-1] + h[-1:], zero])
    lower_2 = torch.cat([zeros, -h[-1:], zero, zero])
    bands = torch.stack([upper_2, upper_1, diag, lower_1, lower_2])

    rhs = _interior_rhs(s)

    m = solve_banded(bands, rhs, lower=2, upper=2)

    return _second_derivative_coefficients(y, h, s, m)


def _widths_and_secants(x: Tensor, y: Tensor) -> Tuple[Tensor, Tensor]:
    h = x[1:] - x[:-1]
    s = (y[1:] - y[:-1]) / h
    return h, s


def _interior_rhs(s: Tensor) -> Tensor:
    # 6*(s[i] - s[i-1]) on interior rows, 0 on both boundary rows
    zero = s.new_zeros(1)
    return torch.cat([zero, 6 * (s[1:] - s[:-1]), zero])


def _second_derivative_coefficients(
    y: Tensor, h: Tensor, s: Tensor, m: Tensor
) -> Tensor:
    # p_i(t) = a_i + b_i*t + c_i*t^2 + d_i*t^3 with t = x - x_i, where
    #   a_i = y_i
    #   b_i = s_i - h_i*m_i/2 - h_i*(m_{i+1} - m_i)/6
    #   c_i = m_i/2
    #   d_i = (m_{i+1} - m_i)/(6*h_i)
    m_left = m[:-1]
    m_diff = m[1:] - m[:-1]

    a = y[:-1]
    b = s - h * m_left / 2 - h * m_diff / 6
    c = m_left / 2
    d = m_diff / (6 * h)

    return torch.stack([a, b, c, d], dim=-1)

import math
import warnings

import torch
from torch import Tensor

from ._singular_system_error import SingularSystemError


def solve_banded(
    bands: Tensor,
    rhs: Tensor,
    lower: int,
    upper: int,
) -> Tensor:
    """
    Solve a banded system Ax = b by band-limited Gaussian elimination.

    The matrix is given in diagonal-ordered form, one diagonal per row of
    ``bands``::

        bands[upper + i - j, j] == A[i, j]

    For a tridiagonal matrix (``lower = upper = 1``) this is:

        [ *   u0  u1 ... un-2]
        [d0   d1  d2 ... dn-1]
        [l0   l1  l2 ...   * ]

    Entries marked ``*`` fall outside the matrix and are ignored.

    Parameters
    ----------
    bands : Tensor
        Diagonals of A, shape (lower + upper + 1, n)
    rhs : Tensor
        Right-hand side, shape (*batch, n)
    lower : int
        Number of sub-diagonals
    upper : int
        Number of super-diagonals

    Returns
    -------
    Tensor
        Solution x, shape (*batch, n)

    Raises
    ------
    ValueError
        If the shapes of ``bands`` and ``rhs`` do not match ``lower``,
        ``upper`` and each other.
    SingularSystemError
        If elimination meets a zero or non-finite pivot.

    Notes
    -----
    No pivoting is performed, so fill-in never leaves the band and the cost
    is O(n * lower * upper). This is the generalised Thomas algorithm; it is
    stable for the diagonally dominant (or, after the first boundary row,
    diagonally dominant) systems produced by the cubic spline builders.
    The implementation is fully differentiable.
    """
    if lower < 0 or upper < 0:
        raise ValueError(
            f"Band widths must be non-negative, got lower={lower}, upper={upper}"
        )
    if bands.dim() != 2 or bands.shape[0] != lower + upper + 1:
        raise ValueError(
            f"bands must have shape ({lower + upper + 1}, n), got {tuple(bands.shape)}"
        )

    n = bands.shape[1]
    if n == 0:
        raise ValueError("Cannot solve an empty system")
    if rhs.dim() == 0 or rhs.shape[-1] != n:
        raise ValueError(
            f"rhs must have trailing dimension {n}, got {tuple(rhs.shape)}"
        )

    # Move system axis to front for easier indexing
    # rhs: (*batch, n) -> (n, *batch)
    rhs_t = rhs.movedim(-1, 0)

    # rows[i][j - i + lower] holds A[i, j] for j inside the band of row i.
    # Plain lists keep the elimination free of in-place tensor updates.
    width = lower + upper + 1
    zero = bands.new_zeros(())
    rows = []
    for i in range(n):
        row = []
        for offset in range(width):
            j = i - lower + offset
            if 0 <= j < n:
                row.append(bands[upper + i - j, j])
            else:
                row.append(zero)
        rows.append(row)

    b = list(rhs_t.unbind(0))

    eps = torch.finfo(bands.dtype).eps
    scale = bands.abs().max().item()

    # Forward elimination
    for k in range(n):
        pivot = rows[k][lower]
        pivot_value = pivot.item()
        if pivot_value == 0.0 or not math.isfinite(pivot_value):
            raise SingularSystemError(
                f"Zero or non-finite pivot in row {k} of a {n}x{n} banded system"
            )
        if abs(pivot_value) <= n * eps * scale:
            warnings.warn(
                f"Banded system is nearly singular (pivot {pivot_value:.3e} "
                f"in row {k}); results may be inaccurate",
                RuntimeWarning,
                stacklevel=2,
            )

        for i in range(k + 1, min(n, k + lower + 1)):
            factor = rows[i][k - i + lower] / pivot
            for j in range(k + 1, min(n, k + upper + 1)):
                rows[i][j - i + lower] = (
                    rows[i][j - i + lower] - factor * rows[k][j - k + lower]
                )
            b[i] = b[i] - factor * b[k]

    # Back substitution, building the solution from back to front
    x_list = [None] * n
    for i in range(n - 1, -1, -1):
        acc = b[i]
        for j in range(i + 1, min(n, i + upper + 1)):
            acc = acc - rows[i][j - i + lower] * x_list[j]
        x_list[i] = acc / rows[i][lower]

    x = torch.stack(x_list, dim=0)

    # Move system axis back: (n, *batch) -> (*batch, n)
    return x.movedim(0, -1)

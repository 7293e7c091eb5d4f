from ._akima import akima_coefficients
from ._cubic import (
    clamped_cubic_coefficients,
    natural_cubic_coefficients,
    not_a_knot_cubic_coefficients,
)
from ._hermite import hermite_coefficients
from ._kruger import kruger_coefficients
from ._linear import linear_coefficients

__all__ = [
    "akima_coefficients",
    "clamped_cubic_coefficients",
    "hermite_coefficients",
    "kruger_coefficients",
    "linear_coefficients",
    "natural_cubic_coefficients",
    "not_a_knot_cubic_coefficients",
]

"""Interpolation variants accepted by calibrate."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, Type, Union

from torch import Tensor

from ._coefficients import (
    akima_coefficients,
    clamped_cubic_coefficients,
    kruger_coefficients,
    linear_coefficients,
    natural_cubic_coefficients,
    not_a_knot_cubic_coefficients,
)


class SplineVariant(ABC):
    """Interpolation algorithm that turns samples into coefficients.

    Subclasses set ``name`` and ``min_points`` and implement
    ``coefficients(x, y)``, returning a table of shape (n_points - 1, k).
    """

    name: ClassVar[str]
    min_points: ClassVar[int] = 2

    @abstractmethod
    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        raise NotImplementedError


@dataclass(frozen=True)
class LinearSpline(SplineVariant):
    """Piecewise linear interpolation."""

    name: ClassVar[str] = "linear"

    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        return linear_coefficients(x, y)


@dataclass(frozen=True)
class ClampedCubicSpline(SplineVariant):
    """Cubic spline with first derivatives ``alpha`` at x[0] and ``beta`` at x[-1]."""

    alpha: Union[float, Tensor] = 0.0
    beta: Union[float, Tensor] = 0.0

    name: ClassVar[str] = "clamped"

    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        return clamped_cubic_coefficients(x, y, self.alpha, self.beta)


@dataclass(frozen=True)
class NaturalCubicSpline(SplineVariant):
    """Cubic spline with zero second derivative at both ends."""

    name: ClassVar[str] = "natural"

    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        return natural_cubic_coefficients(x, y)


@dataclass(frozen=True)
class NotAKnotCubicSpline(SplineVariant):
    """Cubic spline with third derivative continuity at x[1] and x[-2]."""

    name: ClassVar[str] = "not_a_knot"
    min_points: ClassVar[int] = 4

    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        return not_a_knot_cubic_coefficients(x, y)


@dataclass(frozen=True)
class AkimaSpline(SplineVariant):
    """Akima's local cubic Hermite spline."""

    name: ClassVar[str] = "akima"

    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        return akima_coefficients(x, y)


@dataclass(frozen=True)
class KrugerSpline(SplineVariant):
    """Kruger's constrained cubic spline (no overshoot at extrema)."""

    name: ClassVar[str] = "kruger"

    def coefficients(self, x: Tensor, y: Tensor) -> Tensor:
        return kruger_coefficients(x, y)


_VARIANTS: Dict[str, Type[SplineVariant]] = {
    variant.name: variant
    for variant in (
        LinearSpline,
        ClampedCubicSpline,
        NaturalCubicSpline,
        NotAKnotCubicSpline,
        AkimaSpline,
        KrugerSpline,
    )
}


def resolve_variant(
    variant: Union[str, SplineVariant, Type[SplineVariant]],
) -> SplineVariant:
    """Return a variant instance for a name, a variant class or an instance.

    Parameters
    ----------
    variant : str, SplineVariant or SplineVariant subclass
        One of ``"linear"``, ``"clamped"``, ``"natural"``, ``"not_a_knot"``,
        ``"akima"``, ``"kruger"``, or the corresponding variant. Classes are
        instantiated with their default parameters.

    Raises
    ------
    ValueError
        If the variant is not recognised.
    """
    if isinstance(variant, SplineVariant):
        return variant
    if isinstance(variant, type) and issubclass(variant, SplineVariant):
        if variant is SplineVariant:
            raise ValueError("SplineVariant is abstract; pick a concrete variant")
        return variant()
    if isinstance(variant, str) and variant in _VARIANTS:
        return _VARIANTS[variant]()
    raise ValueError(
        f"Unknown interpolation variant: {variant!r}. "
        f"Expected one of {sorted(_VARIANTS)}"
    )

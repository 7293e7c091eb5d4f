"""torchinterp: differentiable one-dimensional spline interpolation for PyTorch."""

from . import spline

__all__ = [
    "spline",
]

__version__ = "0.1.0"

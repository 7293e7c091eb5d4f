"""Tests for the calibrated spline type and its evaluation."""

import math

import pytest
import torch


def _zigzag():
    from torchinterp.spline import calibrate

    return calibrate([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 1.0], "linear")


class TestSplineInterpolation:
    def test_construct_directly(self):
        """Test building a SplineInterpolation from a coefficient table."""
        from torchinterp.spline import SplineInterpolation

        spline = SplineInterpolation(
            x=torch.tensor([0.0, 1.0], dtype=torch.float64),
            y=torch.tensor([1.0, 2.0], dtype=torch.float64),
            coefficients=torch.tensor([[1.0, 1.0]], dtype=torch.float64),
            variant="linear",
            batch_size=[],
        )

        torch.testing.assert_close(
            spline(0.25), torch.tensor(1.25, dtype=torch.float64)
        )

    def test_length_mismatch_raises(self):
        """Test that x and y of different lengths are rejected."""
        from torchinterp.spline import SplineInterpolation, ValidationError

        with pytest.raises(ValidationError, match="same length"):
            SplineInterpolation(
                x=torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64),
                y=torch.tensor([1.0, 2.0], dtype=torch.float64),
                coefficients=torch.zeros(2, 2, dtype=torch.float64),
                variant="linear",
                batch_size=[],
            )

    def test_coefficient_rows_mismatch_raises(self):
        """Test that the coefficient table must have n - 1 rows."""
        from torchinterp.spline import SplineInterpolation, ValidationError

        with pytest.raises(ValidationError, match="coefficient rows"):
            SplineInterpolation(
                x=torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64),
                y=torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64),
                coefficients=torch.zeros(3, 4, dtype=torch.float64),
                variant="natural",
                batch_size=[],
            )

    def test_coefficient_width_mismatch_raises(self):
        """Test that only linear or cubic tables are accepted."""
        from torchinterp.spline import SplineInterpolation, ValidationError

        with pytest.raises(ValidationError, match="coefficients must have shape"):
            SplineInterpolation(
                x=torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64),
                y=torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64),
                coefficients=torch.zeros(2, 3, dtype=torch.float64),
                variant="quadratic",
                batch_size=[],
            )

    def test_unsorted_knots_raise(self):
        """Test that unsorted knots are rejected at construction."""
        from torchinterp.spline import KnotError, SplineInterpolation

        with pytest.raises(KnotError, match="strictly increasing"):
            SplineInterpolation(
                x=torch.tensor([0.0, 2.0, 1.0], dtype=torch.float64),
                y=torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64),
                coefficients=torch.zeros(2, 2, dtype=torch.float64),
                variant="linear",
                batch_size=[],
            )

    def test_calibrate_does_not_alias_inputs(self):
        """Test that later changes to the samples do not reach the spline."""
        from torchinterp.spline import calibrate

        x = torch.tensor([0.0, 1.0, 2.0], dtype=torch.float64)
        y = torch.tensor([0.0, 1.0, 0.0], dtype=torch.float64)

        spline = calibrate(x, y, "linear")
        y[1] = 100.0

        assert spline.y[1].item() == 1.0
        torch.testing.assert_close(
            spline(0.5), torch.tensor(0.5, dtype=torch.float64)
        )


class TestSplineInterpolationEvaluate:
    def test_scalar_query(self):
        """Test that a scalar query returns a 0-d tensor."""
        from torchinterp.spline import spline_interpolation_evaluate

        spline = _zigzag()

        y_float = spline_interpolation_evaluate(spline, 0.5)
        y_tensor = spline_interpolation_evaluate(
            spline, torch.tensor(0.5, dtype=torch.float64)
        )

        assert y_float.shape == ()
        assert y_tensor.shape == ()
        assert y_float.item() == 0.5

    def test_query_shape_preserved(self):
        """Test that multi-dimensional queries keep their shape."""
        spline = _zigzag()

        t = torch.tensor([[0.0, 0.5, 1.0], [1.5, 2.0, 3.0]], dtype=torch.float64)

        y = spline(t)

        expected = torch.tensor(
            [[0.0, 0.5, 1.0], [0.5, 0.0, 1.0]], dtype=torch.float64
        )
        assert y.shape == (2, 3)
        torch.testing.assert_close(y, expected)

    def test_last_knot_uses_last_segment(self):
        """Test that the final knot evaluates the last segment at its end."""
        from torchinterp.spline import calibrate

        spline = calibrate(
            [0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 5.0], "natural"
        )

        assert spline(3.0).item() == pytest.approx(5.0, abs=1e-12)

    def test_boundaries_succeed(self):
        """Test that both ends of the domain are inside it."""
        spline = _zigzag()

        assert spline(0.0).item() == 0.0
        assert spline(3.0).item() == 1.0

    @pytest.mark.parametrize("t", [-1e-9, 3.0 + 1e-9, -10.0, 42.0])
    def test_out_of_domain_raises(self, t):
        """Test that queries outside [x[0], x[-1]] raise OutOfDomainError."""
        from torchinterp.spline import OutOfDomainError

        spline = _zigzag()

        with pytest.raises(OutOfDomainError):
            spline(t)

    def test_any_point_out_of_domain_raises(self):
        """Test that a single bad point in a batch rejects the whole batch."""
        from torchinterp.spline import OutOfDomainError

        spline = _zigzag()

        with pytest.raises(OutOfDomainError):
            spline(torch.tensor([0.5, 1.0, 3.5], dtype=torch.float64))

    def test_nan_query_raises(self):
        """Test that NaN is never silently interpolated."""
        from torchinterp.spline import OutOfDomainError

        spline = _zigzag()

        with pytest.raises(OutOfDomainError):
            spline(float("nan"))

    def test_float32_query_on_float64_spline(self):
        """Test that queries are cast to the dtype of the knots."""
        spline = _zigzag()

        y = spline(torch.tensor([0.5], dtype=torch.float32))

        assert y.dtype == torch.float64

    @pytest.mark.skipif(not torch.cuda.is_available(), reason="CUDA not available")
    def test_cpu_query_on_cuda_spline(self):
        """Test that queries are moved to the device of the knots."""
        from torchinterp.spline import calibrate

        x = torch.tensor([0.0, 1.0, 2.0, 3.0], dtype=torch.float64)
        y = torch.tensor([0.0, 1.0, 0.0, 1.0], dtype=torch.float64)
        t = torch.tensor([0.5, 2.5], dtype=torch.float32)

        expected = calibrate(x, y, "natural")(t)
        spline = calibrate(x.cuda(), y, "natural")

        result = spline(t)

        assert result.device == spline.x.device
        torch.testing.assert_close(result.cpu(), expected)

    def test_gradient_with_respect_to_query(self):
        """Test that gradients flow into the query points."""
        from torchinterp.spline import calibrate

        x = torch.linspace(0, 1, 6, dtype=torch.float64)
        spline = calibrate(x, torch.sin(x), "natural")

        t = torch.tensor([0.1, 0.55, 0.9], dtype=torch.float64, requires_grad=True)

        assert torch.autograd.gradcheck(lambda q: spline(q), (t,))


class TestSplineInterpolationDerivative:
    def test_linear_derivative(self):
        """Test that the first derivative of a linear spline is the slope."""
        from torchinterp.spline import spline_interpolation_derivative

        spline = _zigzag()

        t = torch.tensor([0.5, 1.0, 1.5, 2.5], dtype=torch.float64)
        dydx = spline_interpolation_derivative(spline, t)

        expected = torch.tensor([1.0, -1.0, -1.0, 1.0], dtype=torch.float64)
        torch.testing.assert_close(dydx, expected)

    def test_orders_above_degree_are_zero(self):
        """Test that derivatives beyond the polynomial degree vanish."""
        from torchinterp.spline import (
            calibrate,
            spline_interpolation_derivative,
        )

        linear = _zigzag()
        cubic = calibrate([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 0.0, 1.0], "natural")

        assert spline_interpolation_derivative(linear, 0.5, order=2).item() == 0.0
        assert spline_interpolation_derivative(cubic, 0.5, order=4).item() == 0.0

    def test_cubic_derivatives(self):
        """Test derivatives of a spline that reproduces x^3."""
        from torchinterp.spline import (
            ClampedCubicSpline,
            calibrate,
            spline_interpolation_derivative,
        )

        x = torch.linspace(0, 2, 6, dtype=torch.float64)
        spline = calibrate(x, x**3, ClampedCubicSpline(alpha=0.0, beta=12.0))

        t = torch.tensor([0.3, 1.1, 1.9], dtype=torch.float64)

        for order, expected in (
            (1, 3 * t**2),
            (2, 6 * t),
            (3, torch.full_like(t, 6.0)),
        ):
            torch.testing.assert_close(
                spline_interpolation_derivative(spline, t, order=order),
                expected,
                atol=1e-10,
                rtol=1e-10,
            )

    def test_invalid_order_raises(self):
        """Test that order < 1 raises ValueError."""
        from torchinterp.spline import spline_interpolation_derivative

        with pytest.raises(ValueError, match="Derivative order"):
            spline_interpolation_derivative(_zigzag(), 0.5, order=0)

    def test_out_of_domain_raises(self):
        """Test that derivatives obey the same domain as values."""
        from torchinterp.spline import (
            OutOfDomainError,
            spline_interpolation_derivative,
        )

        with pytest.raises(OutOfDomainError):
            spline_interpolation_derivative(_zigzag(), 3.5)


class TestSplineInterpolationIntegral:
    def test_linear_full_domain(self):
        """Test the integral of the zigzag over its domain."""
        from torchinterp.spline import spline_interpolation_integral

        integral = spline_interpolation_integral(_zigzag(), 0.0, 3.0)

        torch.testing.assert_close(
            integral, torch.tensor(1.5, dtype=torch.float64)
        )

    def test_partial_segments(self):
        """Test bounds that fall inside segments."""
        from torchinterp.spline import calibrate, spline_interpolation_integral

        spline = calibrate([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 2.0, 3.0], "linear")

        integral = spline_interpolation_integral(spline, 0.5, 2.5)

        torch.testing.assert_close(
            integral, torch.tensor(3.0, dtype=torch.float64)
        )

    def test_natural_cubic(self):
        """Test the integral of the natural spline through y = x^2."""
        from torchinterp.spline import calibrate, spline_interpolation_integral

        spline = calibrate([0.0, 1.0, 2.0], [0.0, 1.0, 4.0], "natural")

        # 0.375 on the first segment, 2.375 on the second
        torch.testing.assert_close(
            spline_interpolation_integral(spline, 0.0, 2.0),
            torch.tensor(2.75, dtype=torch.float64),
        )

    def test_reproduced_polynomial(self):
        """Test the integral of a spline that reproduces x^2."""
        from torchinterp.spline import (
            ClampedCubicSpline,
            calibrate,
            spline_interpolation_integral,
        )

        x = torch.linspace(0, 1, 7, dtype=torch.float64)
        spline = calibrate(x, x**2, ClampedCubicSpline(alpha=0.0, beta=2.0))

        torch.testing.assert_close(
            spline_interpolation_integral(spline, 0.0, 1.0),
            torch.tensor(1.0 / 3.0, dtype=torch.float64),
            atol=1e-12,
            rtol=1e-12,
        )

    def test_reversed_and_empty_bounds(self):
        """Test sign flip for a > b and zero for a == b."""
        from torchinterp.spline import spline_interpolation_integral

        spline = _zigzag()

        forward = spline_interpolation_integral(spline, 0.25, 2.0)
        backward = spline_interpolation_integral(spline, 2.0, 0.25)

        torch.testing.assert_close(backward, -forward)
        assert spline_interpolation_integral(spline, 1.0, 1.0).item() == 0.0

    def test_out_of_domain_raises(self):
        """Test that integration bounds must lie inside the domain."""
        from torchinterp.spline import (
            OutOfDomainError,
            spline_interpolation_integral,
        )

        with pytest.raises(OutOfDomainError):
            spline_interpolation_integral(_zigzag(), -1.0, 1.0)

        with pytest.raises(OutOfDomainError):
            spline_interpolation_integral(_zigzag(), 1.0, math.inf)

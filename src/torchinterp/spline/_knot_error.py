from ._validation_error import ValidationError


class KnotError(ValidationError):
    """Raised for invalid knot vectors (non-monotonic, insufficient knots)."""

    pass

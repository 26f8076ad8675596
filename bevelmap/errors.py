"""Precondition errors raised by the map generation stages."""


class BevelMapError(ValueError):
    """Base class for invalid pipeline input."""
    pass


class InvalidDimensions(BevelMapError):
    """Raised when width or height is not a positive integer."""
    pass


class FieldLengthMismatch(BevelMapError):
    """Raised when a field does not hold exactly width * height values."""

    def __init__(self, name, expected, actual):
        super().__init__(
            f"{name} has {actual} values, expected {expected} (width * height)"
        )
        self.name = name
        self.expected = expected
        self.actual = actual

"""Exceptions raised by the packing engine."""

import math
import numbers


class PackingError(Exception):
    """Base class for packing engine errors."""

    pass


class InvalidDimensionError(PackingError, ValueError):
    """A block, layer or container was built with a non-positive dimension."""

    pass


def validate_dimensions(**dimensions: float) -> None:
    """
    Ensure every named dimension is a positive, finite number.

    Raises:
        InvalidDimensionError: If any dimension is not positive
    """
    for name, value in dimensions.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidDimensionError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value) or value <= 0:
            raise InvalidDimensionError(f"{name} must be positive, got {value}")

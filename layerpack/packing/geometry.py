"""
Planar Geometry Primitives

Points and axis-aligned rectangles in the footprint (x, y) plane of the
container. All placement bookkeeping in a layer is expressed with these.
"""

from typing import NamedTuple

# Numerical tolerance for real-valued dimension comparisons
EPS = 1e-9


class Point(NamedTuple):
    """2D point in container footprint coordinates."""
    x: float
    y: float


class Rect(NamedTuple):
    """
    Axis-aligned rectangle anchored at its minimum corner.

    Attributes:
        x (float): Minimum X coordinate
        y (float): Minimum Y coordinate
        width (float): Extent along X
        height (float): Extent along Y
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def origin(self) -> Point:
        """Minimum corner of the rectangle."""
        return Point(self.x, self.y)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        """True if the rectangle has no usable area."""
        return self.width <= EPS or self.height <= EPS

    def fits(self, width: float, height: float) -> bool:
        """Check whether a width x height footprint fits inside this rectangle."""
        return width <= self.width + EPS and height <= self.height + EPS

    def contains(self, other: "Rect") -> bool:
        """
        Check if this rectangle fully contains another one.

        Shared edges count as contained.
        """
        return (
            other.min_x >= self.min_x - EPS
            and other.min_y >= self.min_y - EPS
            and other.max_x <= self.max_x + EPS
            and other.max_y <= self.max_y + EPS
        )

    def intersects(self, other: "Rect") -> bool:
        """
        Check if two rectangles overlap with positive area.

        Rectangles that only touch along an edge or corner do not intersect.
        """
        return (
            self.min_x < other.max_x - EPS
            and other.min_x < self.max_x - EPS
            and self.min_y < other.max_y - EPS
            and other.min_y < self.max_y - EPS
        )

    def __repr__(self) -> str:
        return f"Rect(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"

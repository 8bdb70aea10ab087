"""
Block Class for Layered Packing

Represents a rectangular cuboid (width x height x depth) that is packed into
a container layer. Width and height span the layer footprint; depth runs
along the stacking axis and decides which layers the block may join.

A block is an immutable value. Placement and rotation never mutate a block,
they return a new one, so a placed block keeps its position for good.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .errors import PackingError, validate_dimensions
from .geometry import Point, Rect


@dataclass(frozen=True)
class Block:
    """
    Rectangular cuboid item for layered packing.

    Attributes:
        width (float): Footprint X-dimension
        height (float): Footprint Y-dimension
        depth (float): Extent along the stacking axis
        block_id (int): Sequential index inside the owning layer once placed
        position (Point | None): Footprint origin, None until placed
        label (str | None): Optional caller tag carried through placement
    """

    width: float
    height: float
    depth: float
    block_id: int = 0
    position: Optional[Point] = None
    label: Optional[str] = None

    def __post_init__(self):
        """Validate dimensions are positive and normalize the position to a Point."""
        validate_dimensions(width=self.width, height=self.height, depth=self.depth)
        if self.position is not None and not isinstance(self.position, Point):
            object.__setattr__(self, "position", Point(*self.position))

    @property
    def dimensions(self):
        """Get block dimensions as tuple (w, h, d)."""
        return (self.width, self.height, self.depth)

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def footprint_area(self) -> float:
        return self.width * self.height

    @property
    def is_placed(self) -> bool:
        return self.position is not None

    @property
    def is_square(self) -> bool:
        """True if rotating the footprint yields the same block."""
        return self.width == self.height

    def footprint(self) -> Optional[Rect]:
        """
        Get the 2D rectangle covered by this block.

        Returns:
            Rect at the block position, or None if the block is unplaced
        """
        if self.position is None:
            return None
        return Rect(self.position.x, self.position.y, self.width, self.height)

    def occupies(self, rect: Rect) -> bool:
        """
        Check whether rect fully contains this block's footprint.

        Used to test whether a tracked free rectangle has become covered.
        An unplaced block occupies nothing.
        """
        footprint = self.footprint()
        if footprint is None:
            return False
        return rect.contains(footprint)

    def rotated(self) -> "Block":
        """Return the block turned 90° in the footprint plane (depth unchanged)."""
        return replace(self, width=self.height, height=self.width)

    def placed_at(self, position: Point, block_id: int) -> "Block":
        """
        Return a placed copy of this block.

        Args:
            position: Footprint origin assigned by the layer
            block_id: Sequential index of the block in its layer

        Raises:
            PackingError: If the block already has a position
        """
        if self.position is not None:
            raise PackingError(f"Block {self.block_id} is already placed at {self.position}")
        return replace(self, position=Point(*position), block_id=block_id)

    def __repr__(self) -> str:
        where = "unplaced" if self.position is None else f"({self.position.x:.2f}, {self.position.y:.2f})"
        tag = f", label={self.label!r}" if self.label is not None else ""
        return (f"Block(id={self.block_id}, w={self.width:.2f}, h={self.height:.2f}, "
                f"d={self.depth:.2f}, pos={where}{tag})")

"""
Layer Class with Free-Rectangle Placement

A layer is a slab of the container with a fixed depth. Blocks inside a layer
share that depth ceiling and are packed in the 2D footprint plane using a
free-rectangle heuristic with guillotine splits:

1. Free rectangles are scanned newest first; the first one large enough
   for the block (given orientation, then rotated 90°) is chosen.
2. The block is anchored at the rectangle's minimum corner.
3. The consumed rectangle is split into a "right" remainder (block height,
   rest of the width) and a "top" remainder (full width, rest of the height).

The free list is kept sorted by (min_y, min_x) for reproducible state, while
each rectangle remembers its creation sequence so the scan stays recency
ordered.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .block import Block
from .errors import validate_dimensions
from .geometry import EPS, Point, Rect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FreeRectangle:
    """Unoccupied footprint area tracked by a layer."""
    rect: Rect
    sequence: int  # creation order, higher is newer


class Layer:
    """
    Depth layer holding a 2D packing of blocks.

    Attributes:
        index (int): Position of the layer in the container stacking order
        depth (float): Depth ceiling shared by all blocks in the layer
        container_width (float): Footprint width of the layer
        container_height (float): Footprint height of the layer
        allow_rotation (bool): Whether 90° footprint rotation is attempted
        last_rotated (bool): Whether the most recent placement was rotated
    """

    def __init__(self, index: int, container_width: float, container_height: float,
                 depth: float, allow_rotation: bool = True):
        """
        Initialize an empty layer covering the full container footprint.

        Args:
            index: Stacking index assigned by the container
            container_width: Footprint X-dimension
            container_height: Footprint Y-dimension
            depth: Initial depth (replaced by the first placed block's depth)
            allow_rotation: Try the 90° rotated orientation when the given one fails
        """
        validate_dimensions(
            container_width=container_width,
            container_height=container_height,
            depth=depth,
        )

        self.index = index
        self.depth = depth
        self.container_width = container_width
        self.container_height = container_height
        self.allow_rotation = allow_rotation
        self.last_rotated = False

        self._blocks: List[Block] = []
        self._sequence = 0
        self._free: List[FreeRectangle] = [self._new_free(Rect(0, 0, container_width, container_height))]

    def _new_free(self, rect: Rect) -> FreeRectangle:
        free = FreeRectangle(rect=rect, sequence=self._sequence)
        self._sequence += 1
        return free

    @property
    def blocks(self) -> Tuple[Block, ...]:
        """Placed blocks in placement order."""
        return tuple(self._blocks)

    @property
    def free_rectangles(self) -> Tuple[Rect, ...]:
        """Free rectangles ordered by (min_y, min_x)."""
        return tuple(free.rect for free in self._free)

    @property
    def is_empty(self) -> bool:
        return not self._blocks

    @property
    def num_blocks(self) -> int:
        return len(self._blocks)

    @property
    def used_area(self) -> float:
        """Footprint area covered by placed blocks."""
        return sum(block.footprint_area for block in self._blocks)

    @property
    def free_area(self) -> float:
        """Footprint area still tracked as free."""
        return sum(free.rect.area for free in self._free)

    @property
    def fill_ratio(self) -> float:
        """Covered fraction of the layer footprint."""
        return self.used_area / (self.container_width * self.container_height)

    def accepts_depth(self, block: Block) -> bool:
        """Check the depth gate: an empty layer takes any depth."""
        return self.is_empty or block.depth <= self.depth + EPS

    def _candidates(self, block: Block) -> List[Block]:
        candidates = [block]
        if self.allow_rotation and not block.is_square:
            candidates.append(block.rotated())
        return candidates

    def _find_free(self, width: float, height: float) -> Optional[FreeRectangle]:
        """Scan free rectangles newest first for one that fits width x height."""
        for free in sorted(self._free, key=lambda f: f.sequence, reverse=True):
            if free.rect.fits(width, height):
                return free
        return None

    def try_place(self, block: Block, container_width: float,
                  container_height: float) -> Optional[Point]:
        """
        Try to place a block in this layer.

        Args:
            block: Unplaced block to add
            container_width: Footprint bound along X
            container_height: Footprint bound along Y

        Returns:
            Position of the placed block, or None if the layer rejects it
        """
        if not self.accepts_depth(block):
            logger.debug(f"Layer {self.index}: block depth {block.depth} exceeds layer depth {self.depth}")
            return None

        for rotated, candidate in enumerate(self._candidates(block)):
            if candidate.width > container_width + EPS or candidate.height > container_height + EPS:
                continue

            free = self._find_free(candidate.width, candidate.height)
            if free is None:
                continue

            placed = self._apply_placement(free, candidate)
            self.last_rotated = bool(rotated)
            logger.debug(f"Layer {self.index}: placed {placed}"
                         f"{' (rotated)' if rotated else ''}")
            return placed.position

        return None

    def _apply_placement(self, free: FreeRectangle, candidate: Block) -> Block:
        """
        Commit a placement as a single state transition.

        Removes the chosen free rectangle, appends its guillotine remainders,
        re-sorts the free list and records the placed block.
        """
        rect = free.rect
        placed = candidate.placed_at(rect.origin, block_id=len(self._blocks))

        remainders = []
        right = Rect(rect.x + candidate.width, rect.y,
                     rect.width - candidate.width, candidate.height)
        if not right.is_empty:
            remainders.append(self._new_free(right))

        top = Rect(rect.x, rect.y + candidate.height,
                   rect.width, rect.height - candidate.height)
        if not top.is_empty:
            remainders.append(self._new_free(top))

        free_list = [f for f in self._free if f is not free] + remainders
        free_list.sort(key=lambda f: (f.rect.min_y, f.rect.min_x, f.sequence))

        if self.is_empty:
            self.depth = candidate.depth
        self._free = free_list
        self._blocks.append(placed)
        return placed

    def __repr__(self) -> str:
        return (f"Layer(index={self.index}, depth={self.depth:.2f}, "
                f"blocks={self.num_blocks}, free={len(self._free)}, fill={self.fill_ratio:.1%})")

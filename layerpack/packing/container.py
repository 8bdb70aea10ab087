"""
Container Class with Depth Layers

The container owns an ordered stack of layers. Each incoming block is routed
to the first layer that accepts it; if none does, a new layer is opened at
the block's depth. Layers are stacked along the depth axis in creation
order, front (offset 0) to back.

The container never reorders blocks. Callers decide the submission order
(see ordering.sort_blocks for the usual policy).
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple, Union

from .block import Block
from .errors import validate_dimensions
from .geometry import EPS, Point
from .layer import Layer

logger = logging.getLogger(__name__)

REJECTED_BY_ALL_LAYERS = "rejected_by_all_layers"
ALREADY_PLACED = "already_placed"


@dataclass(frozen=True)
class Placed:
    """Successful placement of a block."""
    layer_index: int
    position: Point
    block: Block  # placed copy, carries position and block_id
    rotated: bool = False


@dataclass(frozen=True)
class Rejected:
    """Block the container did not place, with the reason."""
    block: Block
    reason: str = REJECTED_BY_ALL_LAYERS


PlacementResult = Union[Placed, Rejected]


@dataclass
class PackingResult:
    """Outcome of packing a sequence of blocks."""
    placements: List[Placed] = field(default_factory=list)
    unplaced: List[Block] = field(default_factory=list)

    @property
    def num_placed(self) -> int:
        return len(self.placements)

    @property
    def num_unplaced(self) -> int:
        return len(self.unplaced)

    @property
    def total_blocks(self) -> int:
        return self.num_placed + self.num_unplaced


class Container:
    """
    Fixed-size container packed layer by layer.

    Attributes:
        width (float): Footprint X-dimension shared by all layers
        height (float): Footprint Y-dimension shared by all layers
        depth (float): Stacking bound (advisory, not enforced)
        allow_rotation (bool): Whether layers may rotate blocks by 90°
        layers (List[Layer]): Layers in creation (stacking) order
    """

    def __init__(self, width: float, height: float, depth: float, allow_rotation: bool = True):
        """
        Initialize container.

        Args:
            width: Footprint X-dimension
            height: Footprint Y-dimension
            depth: Total depth along the stacking axis
            allow_rotation: Try rotated orientations when placing blocks

        Raises:
            InvalidDimensionError: If any dimension is not positive
        """
        validate_dimensions(width=width, height=height, depth=depth)

        self.width = width
        self.height = height
        self.depth = depth
        self.allow_rotation = allow_rotation
        self.layers: List[Layer] = []

    def reset(self):
        """Reset container to empty state."""
        self.layers.clear()

    def _new_layer(self, depth: float) -> Layer:
        return Layer(
            index=len(self.layers),
            container_width=self.width,
            container_height=self.height,
            depth=depth,
            allow_rotation=self.allow_rotation,
        )

    def add_block(self, block: Block) -> PlacementResult:
        """
        Place a block in the first layer that accepts it.

        Existing layers are tried in creation order. If all of them reject
        the block, a new layer is created at the block's depth. A block that
        does not fit even an empty layer is rejected; this is not an error
        and the container stays usable. A block that already carries a
        position (e.g. a Placed.block from another container) is rejected
        with reason "already_placed".

        Args:
            block: Unplaced block

        Returns:
            Placed with the layer index and position, or Rejected
        """
        if block.is_placed:
            logger.warning(f"Block is already placed, not packing it again: {block}")
            return Rejected(block=block, reason=ALREADY_PLACED)

        for layer in self.layers:
            position = layer.try_place(block, self.width, self.height)
            if position is not None:
                return self._placed(layer, position)

        layer = self._new_layer(block.depth)
        position = layer.try_place(block, self.width, self.height)
        if position is None:
            logger.warning(f"Block could not be added to a new layer: {block} "
                           f"(container footprint {self.width}x{self.height})")
            return Rejected(block=block)

        self.layers.append(layer)
        logger.debug(f"Opened layer {layer.index} with depth {layer.depth} "
                     f"at offset {self.layer_offset(layer.index)}")
        if self.exceeds_depth:
            logger.warning(f"Stacked depth {self.stacked_depth} exceeds container depth {self.depth}")
        return self._placed(layer, position)

    def _placed(self, layer: Layer, position: Point) -> Placed:
        return Placed(
            layer_index=layer.index,
            position=position,
            block=layer.blocks[-1],
            rotated=layer.last_rotated,
        )

    def pack(self, blocks: Iterable[Block]) -> PackingResult:
        """
        Add blocks one by one in the given order.

        A rejected block never stops the run; it is collected in
        PackingResult.unplaced.
        """
        result = PackingResult()
        for block in blocks:
            outcome = self.add_block(block)
            if isinstance(outcome, Placed):
                result.placements.append(outcome)
            else:
                result.unplaced.append(outcome.block)

        logger.info(f"Packed {result.num_placed}/{result.total_blocks} blocks "
                    f"into {self.num_layers} layers")
        return result

    @property
    def num_layers(self) -> int:
        return len(self.layers)

    def layer_offsets(self) -> List[float]:
        """Offset of each layer along the stacking axis (cumulative depths)."""
        offsets = []
        total = 0.0
        for layer in self.layers:
            offsets.append(total)
            total += layer.depth
        return offsets

    def layer_offset(self, index: int) -> float:
        """Sum of the depths of all layers created before layer `index`."""
        if not 0 <= index < len(self.layers):
            raise IndexError(f"Layer index must be 0-{len(self.layers) - 1}, got {index}")
        return sum(layer.depth for layer in self.layers[:index])

    @property
    def stacked_depth(self) -> float:
        """Total depth used by all layers."""
        return sum(layer.depth for layer in self.layers)

    @property
    def exceeds_depth(self) -> bool:
        return self.stacked_depth > self.depth + EPS

    def placed_blocks(self) -> List[Tuple[int, Block]]:
        """All placed blocks as (layer_index, block) pairs in stacking order."""
        return [(layer.index, block) for layer in self.layers for block in layer.blocks]

    @property
    def num_placed(self) -> int:
        return sum(layer.num_blocks for layer in self.layers)

    @property
    def volume(self) -> float:
        """Total container volume."""
        return self.width * self.height * self.depth

    @property
    def packed_volume(self) -> float:
        """Volume of placed blocks."""
        return sum(block.volume for _, block in self.placed_blocks())

    @property
    def utilization(self) -> float:
        """Packed volume / container volume."""
        return self.packed_volume / self.volume

    def __repr__(self) -> str:
        return (f"Container(W={self.width}, H={self.height}, D={self.depth}, "
                f"layers={self.num_layers}, placed={self.num_placed}, util={self.utilization:.2%})")

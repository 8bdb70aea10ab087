"""
Layered Block Packing Engine

This module implements the packing core with:
- Immutable blocks with footprint queries and 90° rotation
- Depth layers packed with a free-rectangle guillotine heuristic
- A container that routes blocks to layers and stacks them
"""

from .block import Block
from .container import Container, PackingResult, Placed, Rejected
from .errors import InvalidDimensionError, PackingError
from .geometry import Point, Rect
from .layer import Layer
from .ordering import sort_blocks

__all__ = [
    "Block",
    "Container",
    "Layer",
    "PackingResult",
    "Placed",
    "Rejected",
    "Point",
    "Rect",
    "PackingError",
    "InvalidDimensionError",
    "sort_blocks",
]

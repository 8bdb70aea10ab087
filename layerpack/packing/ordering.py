"""
Block Ordering Policy

The packing engine processes blocks strictly in submission order. Greedy
layering works best when deep, large blocks open the layers, so callers
usually sort before packing.
"""

from typing import Iterable, List

from .block import Block


def sort_blocks(blocks: Iterable[Block]) -> List[Block]:
    """
    Sort blocks descending by depth, then by footprint area.

    The sort is stable: blocks with equal depth and area keep their
    relative input order.

    Example:
        >>> ordered = sort_blocks([Block(10, 10, 5), Block(20, 20, 8)])
        >>> [b.depth for b in ordered]
        [8, 5]
    """
    return sorted(blocks, key=lambda block: (-block.depth, -block.footprint_area))

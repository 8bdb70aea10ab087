"""
Layered 3D Block Packing

Packs rectangular blocks into a fixed-size container by grouping them into
depth layers and packing each layer's footprint with a free-rectangle
heuristic (guillotine splits, 90° rotation).
"""

__version__ = "0.1.0"

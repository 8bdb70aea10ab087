"""
Visualization of layered packings

Translates a packed container into interactive plotly figures.
"""

from .plotly_3d import LayerVisualizer

__all__ = ["LayerVisualizer"]

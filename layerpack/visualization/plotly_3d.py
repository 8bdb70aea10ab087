"""
3D Visualization using Plotly

Renders a packed container: every placed block becomes a cuboid mesh and
layers are stacked front to back along negative Z using the container's
layer offsets. Colours are sampled per layer from a plotly colour scale, so
the same packing always renders the same way.
"""

import plotly.graph_objects as go
import plotly.express as px
import numpy as np
from typing import Optional
from pathlib import Path

from ..packing.block import Block
from ..packing.container import Container
from ..packing.layer import Layer


class LayerVisualizer:
    """
    Interactive 3D visualization for layered packing.

    Example:
        >>> visualizer = LayerVisualizer()
        >>> visualizer.visualize_container(container)
        >>> visualizer.save_html("outputs/packing.html")
    """

    def __init__(self, color_scheme: str = "Viridis"):
        """
        Initialize visualizer.

        Args:
            color_scheme: Plotly color scale, sampled once per layer
        """
        self.color_scheme = color_scheme
        self.fig = None

    def _layer_colors(self, n_layers: int):
        if n_layers == 0:
            return []
        return px.colors.sample_colorscale(
            self.color_scheme, [i / max(n_layers - 1, 1) for i in range(n_layers)]
        )

    def visualize_container(
        self,
        container: Container,
        show_container_bounds: bool = True,
        title: Optional[str] = None,
    ) -> go.Figure:
        """
        Visualize packed container in 3D.

        Args:
            container: Container with placed blocks
            show_container_bounds: Whether to draw the container wireframe
            title: Plot title

        Returns:
            Plotly figure object
        """
        fig = go.Figure()
        colors = self._layer_colors(container.num_layers)

        for layer, offset in zip(container.layers, container.layer_offsets()):
            for block in layer.blocks:
                self._add_box(
                    fig,
                    block=block,
                    z_front=-offset,
                    color=colors[layer.index],
                    name=f"Layer {layer.index} / Block {block.block_id}",
                )

        if show_container_bounds:
            self._add_container_bounds(fig, container)

        if title is None:
            title = (f"Layered Packing ({container.num_layers} layers, "
                     f"Utilization: {container.utilization:.1%})")

        fig.update_layout(
            title=title,
            scene=dict(
                xaxis=dict(title="Width", range=[0, container.width]),
                yaxis=dict(title="Height", range=[0, container.height]),
                zaxis=dict(title="Depth", range=[-max(container.depth, container.stacked_depth), 0]),
                aspectmode="data",
            ),
            showlegend=True,
            hovermode="closest",
        )

        self.fig = fig
        return fig

    def _add_box(
        self,
        fig: go.Figure,
        block: Block,
        z_front: float,
        color: str,
        name: str,
        opacity: float = 0.8,
    ):
        """
        Add a placed block as a cuboid mesh.

        The block's front face sits at z_front and it extends block.depth
        towards negative Z.
        """
        x, y = block.position
        w, h, d = block.dimensions
        z0, z1 = z_front - d, z_front

        vertices = np.array([
            [x, y, z0],
            [x + w, y, z0],
            [x + w, y + h, z0],
            [x, y + h, z0],
            [x, y, z1],
            [x + w, y, z1],
            [x + w, y + h, z1],
            [x, y + h, z1],
        ])

        # 12 triangles, 2 per face
        i = [7, 0, 0, 0, 4, 4, 6, 6, 4, 0, 3, 2]
        j = [3, 4, 1, 2, 5, 6, 5, 2, 0, 1, 6, 3]
        k = [0, 7, 2, 3, 6, 7, 1, 1, 5, 5, 7, 6]

        fig.add_trace(go.Mesh3d(
            x=vertices[:, 0],
            y=vertices[:, 1],
            z=vertices[:, 2],
            i=i,
            j=j,
            k=k,
            color=color,
            opacity=opacity,
            name=name,
            hovertext=f"{name}<br>Pos: ({x:.2f}, {y:.2f}, {z1:.2f})<br>Dim: ({w:.2f}, {h:.2f}, {d:.2f})",
            hoverinfo="text",
            showlegend=True,
        ))

    def _add_container_bounds(self, fig: go.Figure, container: Container):
        """Add container boundary wireframe (front face at z=0)."""
        W, H, D = container.width, container.height, -container.depth

        edges = [
            # Front face
            ([0, W], [0, 0], [0, 0]),
            ([W, W], [0, H], [0, 0]),
            ([W, 0], [H, H], [0, 0]),
            ([0, 0], [H, 0], [0, 0]),
            # Back face
            ([0, W], [0, 0], [D, D]),
            ([W, W], [0, H], [D, D]),
            ([W, 0], [H, H], [D, D]),
            ([0, 0], [H, 0], [D, D]),
            # Depth edges
            ([0, 0], [0, 0], [0, D]),
            ([W, W], [0, 0], [0, D]),
            ([W, W], [H, H], [0, D]),
            ([0, 0], [H, H], [0, D]),
        ]

        for x, y, z in edges:
            fig.add_trace(
                go.Scatter3d(
                    x=x,
                    y=y,
                    z=z,
                    mode="lines",
                    line=dict(color="black", width=2),
                    showlegend=False,
                    hoverinfo="skip",
                )
            )

    def visualize_layer(self, layer: Layer, show_free: bool = True,
                        title: Optional[str] = None) -> go.Figure:
        """
        Draw one layer's footprint in 2D: placed blocks and free rectangles.

        Args:
            layer: Layer to draw
            show_free: Outline the free rectangles still tracked by the layer
            title: Plot title

        Returns:
            Plotly figure
        """
        fig = go.Figure()

        for block in layer.blocks:
            rect = block.footprint()
            fig.add_shape(
                type="rect",
                x0=rect.min_x, y0=rect.min_y, x1=rect.max_x, y1=rect.max_y,
                line=dict(color="black", width=1),
                fillcolor="steelblue",
                opacity=0.7,
            )

        if show_free:
            for rect in layer.free_rectangles:
                fig.add_shape(
                    type="rect",
                    x0=rect.min_x, y0=rect.min_y, x1=rect.max_x, y1=rect.max_y,
                    line=dict(color="firebrick", width=1, dash="dash"),
                )

        if title is None:
            title = f"Layer {layer.index} (depth {layer.depth:.2f}, fill {layer.fill_ratio:.1%})"

        fig.update_layout(
            title=title,
            xaxis=dict(title="Width", range=[0, layer.container_width]),
            yaxis=dict(title="Height", range=[0, layer.container_height], scaleanchor="x"),
        )

        return fig

    def save_html(self, filepath: str, fig: Optional[go.Figure] = None) -> Path:
        """
        Save a figure as HTML.

        Args:
            filepath: Path to save HTML file
            fig: Figure to save (defaults to the last container figure)

        Returns:
            Path of the written file
        """
        fig = fig if fig is not None else self.fig
        if fig is None:
            raise ValueError("No figure to save. Call visualize_container first.")

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        fig.write_html(str(filepath))
        return filepath

    def show(self):
        """Display current figure."""
        if self.fig is None:
            raise ValueError("No figure to show. Call visualize_container first.")

        self.fig.show()

"""
Metrics for Layered Packing

Summaries of how well a container was packed: volume utilization, how many
blocks found a place, and how densely each layer's footprint is covered.
"""

import numpy as np
from typing import Dict, List, Any

from ..packing.container import Container, PackingResult


class PackingMetrics:
    """
    Calculate metrics for a packed container.

    Metrics include:
    - Volume utilization (placed volume / container volume)
    - Packing ratio (placed blocks / submitted blocks)
    - Layer count and per-layer footprint fill
    - Depth usage along the stacking axis
    """

    @staticmethod
    def calculate_volume_utilization(container: Container) -> float:
        return container.utilization

    @staticmethod
    def calculate_packing_ratio(num_placed: int, total_blocks: int) -> float:
        """
        Calculate packing ratio.

        Args:
            num_placed: Number of placed blocks
            total_blocks: Number of submitted blocks

        Returns:
            Packing ratio [0, 1]
        """
        return num_placed / total_blocks if total_blocks > 0 else 0.0

    @staticmethod
    def calculate_layer_fill(container: Container) -> List[float]:
        """Footprint fill ratio of each layer, in stacking order."""
        return [layer.fill_ratio for layer in container.layers]

    @staticmethod
    def calculate_layer_utilization(container: Container) -> float:
        """
        Volume utilization inside the layers themselves.

        Unlike volume utilization this ignores unused depth behind the last
        layer, so it measures how much space the layering itself wastes.
        """
        if not container.layers:
            return 0.0

        layer_volume = container.width * container.height * container.stacked_depth
        return container.packed_volume / layer_volume

    @staticmethod
    def calculate_depth_usage(container: Container) -> float:
        """Stacked layer depth / container depth (may exceed 1)."""
        return container.stacked_depth / container.depth

    @staticmethod
    def calculate_all_metrics(container: Container, result: PackingResult = None) -> Dict[str, Any]:
        """
        Calculate all available metrics for a container.

        Args:
            container: Packed container
            result: Packing result, used for the packing ratio when given

        Returns:
            Dictionary of all metrics
        """
        layer_fill = np.array(PackingMetrics.calculate_layer_fill(container), dtype=np.float64)
        total_blocks = result.total_blocks if result is not None else container.num_placed

        metrics = {
            "utilization": PackingMetrics.calculate_volume_utilization(container),
            "layer_utilization": PackingMetrics.calculate_layer_utilization(container),
            "packing_ratio": PackingMetrics.calculate_packing_ratio(container.num_placed, total_blocks),
            "depth_usage": PackingMetrics.calculate_depth_usage(container),
            "mean_layer_fill": float(np.mean(layer_fill)) if layer_fill.size > 0 else 0.0,
            "min_layer_fill": float(np.min(layer_fill)) if layer_fill.size > 0 else 0.0,
            "num_layers": container.num_layers,
            "num_placed": container.num_placed,
            "num_unplaced": result.num_unplaced if result is not None else 0,
        }

        return metrics

    @staticmethod
    def print_metrics(metrics: Dict[str, Any], title: str = "Metrics"):
        """
        Print metrics in a formatted table.

        Args:
            metrics: Dictionary of metrics
            title: Table title
        """
        print(f"\n{'='*50}")
        print(f"{title:^50}")
        print(f"{'='*50}")

        for key, value in metrics.items():
            if isinstance(value, float):
                if "ratio" in key or "utilization" in key or "fill" in key or "usage" in key:
                    print(f"{key:.<40} {value:>8.2%}")
                else:
                    print(f"{key:.<40} {value:>8.4f}")
            else:
                print(f"{key:.<40} {value:>8}")

        print(f"{'='*50}\n")

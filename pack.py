"""
Packing Script for Layered Block Packing

Pack the blocks listed in a configuration file and report the result.

Usage:
    python pack.py
    python pack.py --config config/default.yaml --save-html
    python pack.py --config my_blocks.yaml --no-sort --no-rotation
"""

import argparse
import logging
import sys
from pathlib import Path

from layerpack.packing.ordering import sort_blocks
from layerpack.utils.config import (
    DEFAULT_CONFIG_PATH,
    blocks_from_config,
    container_from_config,
    load_config,
    optional_section,
    update_config_from_args,
    validate_config,
)
from layerpack.utils.logger import setup_logger
from layerpack.utils.metrics import PackingMetrics


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Pack blocks into a layered container")

    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help="Path to YAML config with container and blocks",
    )

    # Packing
    parser.add_argument(
        "--no-sort",
        dest="sort_blocks",
        action="store_const",
        const=False,
        default=None,
        help="Pack blocks in file order instead of depth/area order",
    )
    parser.add_argument(
        "--no-rotation",
        dest="allow_rotation",
        action="store_const",
        const=False,
        default=None,
        help="Never rotate block footprints",
    )

    # Output
    parser.add_argument(
        "--save-html",
        action="store_const",
        const=True,
        default=None,
        help="Save an interactive 3D view as HTML",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save outputs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the log to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every placement",
    )

    return parser.parse_args(argv)


def run(config, logger):
    """
    Pack the configured blocks.

    Returns:
        (container, result, metrics)
    """
    container = container_from_config(config)
    blocks = blocks_from_config(config)

    if optional_section(config, "packing").get("sort_blocks", True):
        blocks = sort_blocks(blocks)

    logger.info(f"Packing {len(blocks)} blocks into "
                f"{container.width}x{container.height}x{container.depth} container")
    result = container.pack(blocks)

    for layer, offset in zip(container.layers, container.layer_offsets()):
        logger.info(f"Layer {layer.index}: depth={layer.depth}, offset={offset}, "
                    f"blocks={layer.num_blocks}, fill={layer.fill_ratio:.1%}")
        for block in layer.blocks:
            logger.debug(f"  {block}")

    for block in result.unplaced:
        logger.warning(f"Unplaced: {block}")

    metrics = PackingMetrics.calculate_all_metrics(container, result)
    return container, result, metrics


def main(argv=None):
    """Main packing entry point."""
    args = parse_args(argv)

    logger = setup_logger(
        "layerpack",
        log_file=args.log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    logger.info(f"Loading configuration from: {args.config}")
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    config = update_config_from_args(config, vars(args))
    validate_config(config)

    container, result, metrics = run(config, logger)
    PackingMetrics.print_metrics(metrics, title="Packing Results")

    output_config = optional_section(config, "output")
    if output_config.get("save_html", False):
        # Imported lazily so plain packing runs do not load plotly
        from layerpack.visualization.plotly_3d import LayerVisualizer

        output_dir = Path(output_config.get("dir", "outputs"))
        visualizer = LayerVisualizer()
        visualizer.visualize_container(container)
        path = visualizer.save_html(output_dir / "packing.html")
        logger.info(f"Visualization saved to: {path}")

        for layer in container.layers:
            fig = visualizer.visualize_layer(layer)
            visualizer.save_html(output_dir / f"layer_{layer.index}.html", fig=fig)

    return 0


if __name__ == "__main__":
    sys.exit(main())

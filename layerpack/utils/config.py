"""
Configuration Management

Load, save, and validate packing run configurations, and build containers
and block lists from them.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, List
import copy

from ..packing.block import Block
from ..packing.container import Container

DEFAULT_CONFIG_PATH = "config/default.yaml"


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Example:
        >>> config = load_config("config/default.yaml")
        >>> print(config["container"]["width"])
        202
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    validate_config(config)

    return config


def save_config(config: Dict[str, Any], save_path: str):
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        save_path: Path to save YAML file
    """
    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)

    with open(save_path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def merge_configs(base_config: Dict[str, Any],
                  override_config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge two configurations (override takes precedence).

    Args:
        base_config: Base configuration
        override_config: Override configuration

    Returns:
        Merged configuration
    """
    merged = copy.deepcopy(base_config)

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def optional_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """
    Get an optional config section; an empty or missing section is {}.

    Raises:
        ValueError: If the section is present but not a mapping
    """
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
    return section


def _is_positive(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_config(config: Dict[str, Any]):
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValueError("Configuration must be a mapping")

    required_sections = ["container", "blocks"]

    for section in required_sections:
        if section not in config:
            raise ValueError(f"Missing required section: {section}")

    # Validate container
    container_config = config["container"]
    if not isinstance(container_config, dict):
        raise ValueError("container must be a mapping with width, height and depth")
    for key in ("width", "height", "depth"):
        if not _is_positive(container_config.get(key)):
            raise ValueError(f"container.{key} must be a positive number")

    # Validate blocks
    blocks_config = config["blocks"]
    if not isinstance(blocks_config, list):
        raise ValueError("blocks must be a list")

    for idx, entry in enumerate(blocks_config):
        dims = _block_dimensions(entry, idx)
        if not all(_is_positive(d) for d in dims):
            raise ValueError(f"blocks[{idx}] dimensions must be positive, got {dims}")

    optional_section(config, "output")

    # Validate packing options
    packing_config = optional_section(config, "packing")
    for key in ("sort_blocks", "allow_rotation"):
        if key in packing_config and not isinstance(packing_config[key], bool):
            raise ValueError(f"packing.{key} must be true or false")


def _block_dimensions(entry: Any, idx: int):
    """Extract (width, height, depth) from a list or mapping block entry."""
    if isinstance(entry, dict):
        try:
            return (entry["width"], entry["height"], entry["depth"])
        except KeyError as e:
            raise ValueError(f"blocks[{idx}] is missing {e.args[0]}") from e
    if isinstance(entry, (list, tuple)) and len(entry) == 3:
        return tuple(entry)
    raise ValueError(f"blocks[{idx}] must be [width, height, depth] or a mapping")


def blocks_from_config(config: Dict[str, Any]) -> List[Block]:
    """
    Build unplaced blocks from the `blocks` section.

    Entries are either [width, height, depth] lists or mappings with
    width/height/depth and an optional label.
    """
    blocks = []
    for idx, entry in enumerate(config["blocks"]):
        width, height, depth = _block_dimensions(entry, idx)
        label = entry.get("label") if isinstance(entry, dict) else None
        blocks.append(Block(width=width, height=height, depth=depth,
                            label=str(label) if label is not None else f"block-{idx}"))
    return blocks


def container_from_config(config: Dict[str, Any]) -> Container:
    """Build an empty container from the `container` and `packing` sections."""
    container_config = config["container"]
    packing_config = optional_section(config, "packing")
    return Container(
        width=container_config["width"],
        height=container_config["height"],
        depth=container_config["depth"],
        allow_rotation=packing_config.get("allow_rotation", True),
    )


def update_config_from_args(config: Dict[str, Any],
                            args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update configuration from command-line arguments.

    Args:
        config: Base configuration
        args: Command-line arguments

    Returns:
        Updated configuration
    """
    updated_config = copy.deepcopy(config)

    # Map CLI args to config keys
    arg_mapping = {
        "sort_blocks": ("packing", "sort_blocks"),
        "allow_rotation": ("packing", "allow_rotation"),
        "save_html": ("output", "save_html"),
        "output_dir": ("output", "dir"),
    }

    for arg_key, (section, config_key) in arg_mapping.items():
        if arg_key in args and args[arg_key] is not None:
            if updated_config.get(section) is None:
                updated_config[section] = {}
            updated_config[section][config_key] = args[arg_key]

    return updated_config

"""
Utility modules for packing runs
"""

from .config import load_config, save_config, blocks_from_config, container_from_config
from .logger import setup_logger
from .metrics import PackingMetrics

__all__ = [
    "load_config",
    "save_config",
    "blocks_from_config",
    "container_from_config",
    "setup_logger",
    "PackingMetrics",
]

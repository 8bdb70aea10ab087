"""Pytest configuration and shared fixtures."""

import pytest
import numpy as np
from pathlib import Path

from layerpack.packing.block import Block
from layerpack.packing.container import Container

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def default_config_path():
    """Path of the shipped default configuration."""
    return PROJECT_ROOT / "config" / "default.yaml"


@pytest.fixture
def test_config():
    """Minimal packing configuration."""
    return {
        "container": {"width": 100, "height": 100, "depth": 50},
        "packing": {"sort_blocks": True, "allow_rotation": True},
        "output": {"dir": "outputs", "save_html": False},
        "blocks": [
            [50, 50, 10],
            {"width": 50, "height": 50, "depth": 10, "label": "twin"},
            [20, 20, 30],
        ],
    }


@pytest.fixture
def container():
    """Empty 202 x 120 x 202 container."""
    return Container(width=202, height=120, depth=202)


@pytest.fixture
def square_container():
    """Empty 100 x 100 x 100 container."""
    return Container(width=100, height=100, depth=100)


@pytest.fixture
def scenario_a_blocks():
    """Panel sizes from the reference 202 x 120 layout, all 10 deep."""
    return [
        Block(180, 77, 10),
        Block(77, 75, 10),
        Block(120, 76, 10),
        Block(30, 22, 10),
        Block(90, 22, 10),
    ]


@pytest.fixture
def random_blocks():
    """Factory for integer-sized random blocks used in property checks."""

    def make(n_blocks, seed=0, max_width=80, max_height=60, depths=(5, 10, 15, 20)):
        rng = np.random.RandomState(seed)
        return [
            Block(
                width=int(rng.randint(1, max_width + 1)),
                height=int(rng.randint(1, max_height + 1)),
                depth=int(rng.choice(depths)),
            )
            for _ in range(n_blocks)
        ]

    return make


@pytest.fixture(autouse=True)
def set_random_seed():
    """Set random seeds for reproducible tests."""
    np.random.seed(42)

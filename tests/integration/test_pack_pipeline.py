"""Integration tests for the packing pipeline."""

import logging

import pytest

import pack
from layerpack.packing.block import Block
from layerpack.packing.container import Container
from layerpack.packing.ordering import sort_blocks
from layerpack.utils.config import load_config, save_config
from layerpack.visualization.plotly_3d import LayerVisualizer


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers that setup_logger attaches during a test."""
    yield
    logger = logging.getLogger("layerpack")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestPackPipeline:
    """Test config -> packing -> metrics -> output."""

    def test_run_default_config(self, default_config_path):
        """Test packing the default config."""
        config = load_config(str(default_config_path))
        container, result, metrics = pack.run(config, logging.getLogger("layerpack.test"))

        assert result.num_placed == len(config["blocks"])
        assert result.unplaced == []
        assert metrics["num_layers"] == container.num_layers
        assert 0.0 < metrics["utilization"] <= 1.0

    def test_run_respects_sort_flag(self, test_config):
        """Test the sort_blocks option."""
        logger = logging.getLogger("layerpack.test")

        test_config["packing"]["sort_blocks"] = False
        container, _, _ = pack.run(test_config, logger)
        assert [layer.depth for layer in container.layers] == [10, 30]

        test_config["packing"]["sort_blocks"] = True
        container, _, _ = pack.run(test_config, logger)
        assert [layer.depth for layer in container.layers] == [30]

    def test_main_writes_html(self, test_config, tmp_path):
        """Test the CLI writes HTML views and a log file."""
        config_path = tmp_path / "config.yaml"
        save_config(test_config, str(config_path))
        output_dir = tmp_path / "outputs"

        status = pack.main([
            "--config", str(config_path),
            "--save-html",
            "--output-dir", str(output_dir),
            "--log-file", str(tmp_path / "pack.log"),
        ])

        assert status == 0
        assert (output_dir / "packing.html").exists()
        assert (output_dir / "layer_0.html").exists()
        assert "Packed 3/3 blocks" in (tmp_path / "pack.log").read_text()

    def test_main_reports_unplaced_without_failing(self, test_config, tmp_path, capsys):
        """Test the CLI reports unplaced blocks and exits 0."""
        test_config["blocks"].append([500, 500, 10])
        config_path = tmp_path / "config.yaml"
        save_config(test_config, str(config_path))

        status = pack.main(["--config", str(config_path), "--no-sort", "--no-rotation"])
        out = capsys.readouterr().out

        assert status == 0
        assert "Unplaced" in out
        assert "num_unplaced" in out

    def test_main_with_empty_packing_section(self, test_config, tmp_path):
        """Test the CLI accepts a config whose packing section is empty."""
        test_config["packing"] = None
        config_path = tmp_path / "config.yaml"
        save_config(test_config, str(config_path))

        assert pack.main(["--config", str(config_path)]) == 0
        assert pack.main(["--config", str(config_path), "--no-sort"]) == 0

    def test_main_invalid_section(self, tmp_path):
        """Test the CLI reports a malformed optional section and exits 1."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "container: {width: 10, height: 10, depth: 10}\n"
            "blocks: [[1, 1, 1]]\n"
            "packing: [sort_blocks]\n"
        )

        assert pack.main(["--config", str(config_path)]) == 1

    def test_main_missing_config(self, tmp_path):
        """Test the CLI fails cleanly on a missing config."""
        assert pack.main(["--config", str(tmp_path / "nope.yaml")]) == 1


class TestLayerVisualizer:
    """Test plotly figure construction from a packed container."""

    @pytest.fixture
    def packed(self, container, scenario_a_blocks):
        container.pack(sort_blocks(scenario_a_blocks + [Block(40, 40, 25)]))
        return container

    def test_visualize_container(self, packed):
        """Test one mesh per block plus the wireframe."""
        visualizer = LayerVisualizer()
        fig = visualizer.visualize_container(packed)

        meshes = [trace for trace in fig.data if trace.type == "mesh3d"]
        edges = [trace for trace in fig.data if trace.type == "scatter3d"]
        assert len(meshes) == packed.num_placed
        assert len(edges) == 12
        assert visualizer.fig is fig

    def test_layers_stack_towards_negative_z(self, packed):
        """Test layers are drawn at their offsets."""
        fig = LayerVisualizer().visualize_container(packed, show_container_bounds=False)

        offsets = packed.layer_offsets()
        meshes = iter(fig.data)
        for layer, offset in zip(packed.layers, offsets):
            for block in layer.blocks:
                mesh = next(meshes)
                assert max(mesh.z) == pytest.approx(-offset)
                assert min(mesh.z) == pytest.approx(-offset - block.depth)

    def test_visualize_layer(self, packed):
        """Test the 2D layer view shapes."""
        layer = packed.layers[0]
        fig = LayerVisualizer().visualize_layer(layer)

        assert len(fig.layout.shapes) == layer.num_blocks + len(layer.free_rectangles)

    def test_save_html(self, packed, tmp_path):
        """Test HTML export."""
        visualizer = LayerVisualizer()

        with pytest.raises(ValueError):
            visualizer.save_html(str(tmp_path / "empty.html"))

        visualizer.visualize_container(packed)
        path = visualizer.save_html(str(tmp_path / "viz" / "packing.html"))
        assert path.exists()

    def test_empty_container(self):
        """Test rendering an empty container."""
        fig = LayerVisualizer().visualize_container(Container(10, 10, 10))

        assert len(fig.data) == 12

"""Tests for CLI configuration and its YAML import/export."""

import pytest
import yaml

from src.domain.options import ReadPointCloudOptions
from src.ptsio.config import CliConfig, export_cli_config, import_cli_config
from src.shared.exceptions import ConfigError


class TestCliConfig:
    """Test configuration validation."""

    def test_defaults(self):
        config = CliConfig()

        assert config.log_level == "INFO"
        assert config.read == ReadPointCloudOptions()
        assert config.write.float_precision == 10

    def test_log_level_normalized(self):
        assert CliConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError, match="field: log_level"):
            CliConfig(log_level="LOUD")

    def test_with_progress(self):
        config = CliConfig().with_progress(True)

        assert config.read.print_progress
        assert config.write.print_progress

    def test_without_progress_keeps_config(self):
        config = CliConfig()
        config.read.print_progress = True

        assert config.with_progress(False).read.print_progress

    def test_from_dict_unknown_section(self):
        with pytest.raises(ConfigError, match="Unknown config section"):
            CliConfig.from_dict({"viewer": {}})

    def test_from_dict_bad_value_type(self):
        with pytest.raises((ConfigError, TypeError)):
            CliConfig.from_dict({"write": {"float_precision": "ten"}})


class TestConfigIO:
    """Test YAML export/import."""

    def test_roundtrip(self, temp_dir):
        config = CliConfig(log_level="WARNING")
        config.read.strict_lines = False
        config.read.max_points = 500
        config.write.float_precision = 4
        path = temp_dir / "nested" / "ptsio.yaml"

        export_cli_config(config, path)
        loaded = import_cli_config(path)

        assert loaded.log_level == "WARNING"
        assert not loaded.read.strict_lines
        assert loaded.read.max_points == 500
        assert loaded.write.float_precision == 4

    def test_exported_yaml_has_no_callback(self, temp_dir):
        path = temp_dir / "ptsio.yaml"

        export_cli_config(CliConfig(), path)
        data = yaml.safe_load(path.read_text())

        assert set(data) == {"read", "write", "log_level"}
        assert "update_progress" not in data["read"]

    def test_partial_file(self, temp_dir):
        path = temp_dir / "ptsio.yaml"
        path.write_text("read:\n  remove_nan_points: true\n")

        config = import_cli_config(path)

        assert config.read.remove_nan_points
        assert config.write.float_precision == 10

    def test_empty_file_yields_defaults(self, temp_dir):
        path = temp_dir / "ptsio.yaml"
        path.write_text("")

        assert import_cli_config(path).to_dict() == CliConfig().to_dict()

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            import_cli_config(temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "ptsio.yaml"
        path.write_text("read: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            import_cli_config(path)

    def test_non_mapping_root(self, temp_dir):
        path = temp_dir / "ptsio.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            import_cli_config(path)

    def test_unknown_option(self, temp_dir):
        path = temp_dir / "ptsio.yaml"
        path.write_text("write:\n  precision: 3\n")

        with pytest.raises(ConfigError) as exc_info:
            import_cli_config(path)

        assert exc_info.value.field_name == "precision"

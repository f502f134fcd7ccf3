"""
Unit tests for Pydantic config schema validation.

Tests defaults, constraints, YAML loading, and reference-parameter detection.
"""

import pytest
import yaml
from pydantic import ValidationError

from footarch.config_schema import (
    GeneralSettings,
    BinarizationSettings,
    MorphologySettings,
    ToeTrimSettings,
    ClassificationSettings,
    VisualizationSettings,
    ExportSettings,
    FootArchConfig,
    load_config
)
from footarch.exceptions import ConfigFileNotFoundError


class TestGeneralSettings:
    """Test general settings validation"""

    def test_default_values(self):
        """Default general settings should be valid"""
        settings = GeneralSettings()
        assert settings.output_dir == "results"
        assert settings.log_level == "INFO"

    def test_log_level_valid_choices(self):
        """Log level must be from allowed choices"""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            assert GeneralSettings(log_level=level).log_level == level

        with pytest.raises(ValidationError):
            GeneralSettings(log_level="INVALID")

    def test_output_dir_cannot_be_file(self, tmp_path):
        """An existing file is not a valid output directory"""
        existing = tmp_path / "file.txt"
        existing.write_text("x")

        with pytest.raises(ValidationError):
            GeneralSettings(output_dir=str(existing))


class TestMeasurementSettings:
    """Test measurement parameter validation"""

    def test_reference_defaults(self):
        """Defaults are the reference measurement parameters"""
        assert BinarizationSettings().block_size == 25
        assert BinarizationSettings().bias == 10
        assert MorphologySettings().kernel_size == 5
        assert ToeTrimSettings().toe_fraction == 0.18
        assert ClassificationSettings().flat_threshold == 0.28

    def test_block_size_positive(self):
        """Block size must be at least 1"""
        with pytest.raises(ValidationError):
            BinarizationSettings(block_size=0)

    def test_bias_range(self):
        """Bias must lie in [0, 255]"""
        with pytest.raises(ValidationError):
            BinarizationSettings(bias=-1)
        with pytest.raises(ValidationError):
            BinarizationSettings(bias=300)

    def test_kernel_size_bounds(self):
        """Kernel size must lie in [1, 51]"""
        assert MorphologySettings(kernel_size=1).kernel_size == 1
        with pytest.raises(ValidationError):
            MorphologySettings(kernel_size=0)
        with pytest.raises(ValidationError):
            MorphologySettings(kernel_size=52)

    def test_toe_fraction_below_one(self):
        """Toe fraction of 1 would remove the whole footprint"""
        assert ToeTrimSettings(toe_fraction=0.0).toe_fraction == 0.0
        with pytest.raises(ValidationError):
            ToeTrimSettings(toe_fraction=1.0)

    def test_threshold_open_interval(self):
        """Threshold must be strictly between 0 and 1"""
        with pytest.raises(ValidationError):
            ClassificationSettings(flat_threshold=0.0)
        with pytest.raises(ValidationError):
            ClassificationSettings(flat_threshold=1.0)


class TestOutputSettings:
    """Test visualization and export settings"""

    def test_defaults(self):
        """Every output is enabled by default"""
        vis = VisualizationSettings()
        export = ExportSettings()
        assert vis.generate_plots and vis.save_images
        assert vis.plot_dpi == 150
        assert export.export_xlsx and export.export_json

    def test_plot_format_choices(self):
        """Only png, pdf and svg are accepted"""
        assert VisualizationSettings(plot_format="svg").plot_format == "svg"
        with pytest.raises(ValidationError):
            VisualizationSettings(plot_format="gif")

    def test_dpi_bounds(self):
        """DPI must lie in [72, 600]"""
        with pytest.raises(ValidationError):
            VisualizationSettings(plot_dpi=50)


class TestFootArchConfig:
    """Test complete configuration"""

    def test_default_is_reference(self):
        """Default config uses reference parameters"""
        config = FootArchConfig()
        assert config.is_reference_configuration()
        assert config.get_modified_parameters() == []

    def test_modified_parameters_reported(self):
        """Changed measurement parameters are listed"""
        config = FootArchConfig.from_dict({
            "binarization": {"bias": 5},
            "toe_trim": {"toe_fraction": 0.2}
        })
        assert config.get_modified_parameters() == ["bias", "toe_fraction"]
        assert not config.is_reference_configuration()

    def test_output_settings_do_not_affect_reference(self):
        """Plot and export toggles are not measurement parameters"""
        config = FootArchConfig.from_dict({"visualization": {"generate_plots": False}})
        assert config.is_reference_configuration()

    def test_from_dict_round_trip(self, config_dict):
        """to_dict output rebuilds an equal config"""
        config = FootArchConfig.from_dict(config_dict)
        assert FootArchConfig.from_dict(config.to_dict()) == config

    def test_invalid_nested_value(self):
        """Nested validation errors surface"""
        with pytest.raises(ValidationError):
            FootArchConfig.from_dict({"morphology": {"kernel_size": -3}})

    def test_load_yaml(self, temp_yaml_config):
        """YAML file is loaded and validated"""
        config = load_config(str(temp_yaml_config))
        assert config.visualization.plot_dpi == 100
        assert config.export.export_xlsx is False

    def test_empty_yaml_gives_defaults(self, tmp_path):
        """An empty YAML file means all defaults"""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == FootArchConfig()

    def test_partial_yaml(self, tmp_path):
        """Missing sections fall back to defaults"""
        path = tmp_path / "partial.yaml"
        with open(path, 'w') as f:
            yaml.dump({"classification": {"flat_threshold": 0.3}}, f)

        config = load_config(str(path))

        assert config.classification.flat_threshold == 0.3
        assert config.binarization.block_size == 25

    def test_missing_file(self, tmp_path):
        """Missing file raises ConfigFileNotFoundError"""
        with pytest.raises(ConfigFileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

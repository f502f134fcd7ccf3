"""
Pydantic schema validation for footprint analysis configuration files.

Provides strong typing, validation, and documentation for all config parameters.
Defaults reproduce the reference measurement exactly; changing any
measurement parameter produces Arch Index values that are not comparable
with the 0.28 clinical cut-off.

Version: 1.0.0
"""

from typing import Literal, Dict, Any
from pydantic import BaseModel, Field, field_validator
from pathlib import Path

from .constants import (
    ADAPTIVE_BLOCK_SIZE_DEFAULT,
    ADAPTIVE_BIAS_DEFAULT,
    MORPH_KERNEL_SIZE_DEFAULT,
    TOE_REMOVAL_FRACTION_DEFAULT,
    FLAT_FOOT_ARCH_INDEX_THRESHOLD,
    PLOT_DPI,
)
from .exceptions import ConfigFileNotFoundError


class GeneralSettings(BaseModel):
    """General pipeline settings"""

    output_dir: str = Field(
        default="results",
        description="Directory for output files (images, plots, workbook, logs)"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level"
    )

    @field_validator('output_dir')
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        """Ensure output directory is valid"""
        path = Path(v)
        if path.exists() and not path.is_dir():
            raise ValueError(f"Output path exists but is not a directory: {v}")
        return v


class BinarizationSettings(BaseModel):
    """Adaptive (local mean) thresholding"""

    block_size: int = Field(
        default=ADAPTIVE_BLOCK_SIZE_DEFAULT,
        ge=1,
        le=201,
        description="Side of the local mean window. Even sizes behave as the next odd size"
    )

    bias: float = Field(
        default=ADAPTIVE_BIAS_DEFAULT,
        ge=0,
        le=255,
        description="Constant subtracted from the local mean before comparison"
    )


class MorphologySettings(BaseModel):
    """Mask cleanup (closing)"""

    kernel_size: int = Field(
        default=MORPH_KERNEL_SIZE_DEFAULT,
        ge=1,
        le=51,
        description="Side of the square structuring element"
    )


class ToeTrimSettings(BaseModel):
    """Toe region removal"""

    toe_fraction: float = Field(
        default=TOE_REMOVAL_FRACTION_DEFAULT,
        ge=0.0,
        lt=1.0,
        description="Fraction of the footprint height removed from the top"
    )


class ClassificationSettings(BaseModel):
    """Arch Index classification"""

    flat_threshold: float = Field(
        default=FLAT_FOOT_ARCH_INDEX_THRESHOLD,
        gt=0.0,
        lt=1.0,
        description="Arch Index above this value is classified as flat"
    )


class VisualizationSettings(BaseModel):
    """Rendering settings"""

    generate_plots: bool = Field(
        default=True,
        description="Generate the matplotlib dashboard"
    )

    save_images: bool = Field(
        default=True,
        description="Write original/processed/segmented PNG files"
    )

    plot_dpi: int = Field(
        default=PLOT_DPI,
        ge=72,
        le=600,
        description="Plot resolution (DPI)"
    )

    plot_format: Literal["png", "pdf", "svg"] = Field(
        default="png",
        description="Output format for the dashboard"
    )


class ExportSettings(BaseModel):
    """Result export settings"""

    export_xlsx: bool = Field(
        default=True,
        description="Write an Excel workbook with areas and processing steps"
    )

    export_json: bool = Field(
        default=True,
        description="Write result.json next to the images"
    )


class FootArchConfig(BaseModel):
    """Complete footprint Arch Index pipeline configuration"""

    general: GeneralSettings = Field(default_factory=GeneralSettings)
    binarization: BinarizationSettings = Field(default_factory=BinarizationSettings)
    morphology: MorphologySettings = Field(default_factory=MorphologySettings)
    toe_trim: ToeTrimSettings = Field(default_factory=ToeTrimSettings)
    classification: ClassificationSettings = Field(default_factory=ClassificationSettings)
    visualization: VisualizationSettings = Field(default_factory=VisualizationSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'FootArchConfig':
        """Load and validate config from YAML file"""
        import yaml

        yaml_file = Path(yaml_path)
        if not yaml_file.exists():
            raise ConfigFileNotFoundError(str(yaml_path))

        with open(yaml_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        return cls(**raw_config)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'FootArchConfig':
        """Load and validate config from dictionary"""
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Export config to dictionary"""
        return self.model_dump()

    def is_reference_configuration(self) -> bool:
        """True when every measurement parameter equals its reference default"""
        return not self.get_modified_parameters()

    def get_modified_parameters(self) -> list[str]:
        """List measurement parameters that differ from the reference defaults"""
        modified = []
        if self.binarization.block_size != ADAPTIVE_BLOCK_SIZE_DEFAULT:
            modified.append("block_size")
        if self.binarization.bias != ADAPTIVE_BIAS_DEFAULT:
            modified.append("bias")
        if self.morphology.kernel_size != MORPH_KERNEL_SIZE_DEFAULT:
            modified.append("kernel_size")
        if self.toe_trim.toe_fraction != TOE_REMOVAL_FRACTION_DEFAULT:
            modified.append("toe_fraction")
        if self.classification.flat_threshold != FLAT_FOOT_ARCH_INDEX_THRESHOLD:
            modified.append("flat_threshold")
        return modified


def load_config(config_path: str) -> FootArchConfig:
    """
    Load and validate footprint analysis config.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated FootArchConfig object

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist
        ValidationError: If config contains invalid values
    """
    return FootArchConfig.from_yaml(config_path)

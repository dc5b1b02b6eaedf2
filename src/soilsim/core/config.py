"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings for robust configuration management.
"""
from pathlib import Path
import yaml
from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional, Union

from soilsim.core.constants import (
    DIFFUSION_STABILITY_LIMIT,
    NEWTON_MAX_ITERATIONS,
    NEWTON_MIN_DERIVATIVE,
    NEWTON_TOLERANCE,
)
from soilsim.core.exceptions import ConfigurationError, ErrorContext


class DiffusionConfig(BaseSettings):
    """Configuration for the explicit heat diffusion solver"""

    stability_limit: float = Field(
        DIFFUSION_STABILITY_LIMIT, gt=0,
        description="Largest alpha = D*dt/dz² accepted without a stability advisory"
    )

    model_config = SettingsConfigDict(env_prefix="SOILSIM_DIFFUSION_", case_sensitive=False)


class InfiltrationConfig(BaseSettings):
    """Configuration for the Green-Ampt Newton solver"""

    tolerance: float = Field(NEWTON_TOLERANCE, gt=0, description="Absolute residual tolerance")
    max_iterations: int = Field(NEWTON_MAX_ITERATIONS, gt=0, description="Iteration cap per time point")
    min_derivative: float = Field(
        NEWTON_MIN_DERIVATIVE, gt=0,
        description="Stop when |g'(F)| falls below this value"
    )

    model_config = SettingsConfigDict(env_prefix="SOILSIM_INFILTRATION_", case_sensitive=False)


class LoggingConfig(BaseSettings):
    """Configuration for logging"""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    model_config = SettingsConfigDict(env_prefix="SOILSIM_LOGGING_", case_sensitive=False)


class SoilSimConfig(BaseSettings):
    """Main configuration for the soilsim solvers"""

    # Component configurations
    diffusion: DiffusionConfig = Field(default_factory=DiffusionConfig)
    infiltration: InfiltrationConfig = Field(default_factory=InfiltrationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="SOILSIM_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_config(self):
        """Cross-field validation"""
        if self.infiltration.min_derivative >= 1.0:
            # g'(F) = F/(F+C) never reaches 1, every iteration would stall
            raise ValueError("infiltration.min_derivative must be below 1")
        return self

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "SoilSimConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(
                f"Config file must contain a mapping, got {type(yaml_config).__name__}",
                ErrorContext(component="config", operation="from_yaml"),
            )

        try:
            return cls(**yaml_config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {yaml_path}: {e}",
                ErrorContext(component="config", operation="from_yaml"),
            ) from e

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)


# USAGE: Environment variables override defaults
# export SOILSIM_INFILTRATION__MAX_ITERATIONS=200
# export SOILSIM_LOGGING__LOG_LEVEL=DEBUG

# Global configuration instance
_config: Optional[SoilSimConfig] = None


def get_config(config_path: Optional[Path] = None) -> SoilSimConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and Path(config_path).exists():
            _config = SoilSimConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = SoilSimConfig()

    return _config


def set_config(config: Optional[SoilSimConfig]):
    """Set configuration (useful for testing); None resets to lazy defaults"""
    global _config
    _config = config

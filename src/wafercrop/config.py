"""
Configuration management using Pydantic for wafer-crop.
Provides type-safe configuration with validation and environment variable support.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wafercrop.common.constants import (
    APIConstants,
    ImageConstants,
    StorageConstants,
    SystemConstants,
    VisionConstants,
)
from wafercrop.core.exceptions import ConfigurationException
from wafercrop.vision.params import CircleDetectionParams, PanelDetectionParams

logger = logging.getLogger(__name__)


class PipelineConfig(BaseModel):
    """
    Branch selection for a single pipeline invocation.

    Passed explicitly to each call; the pipeline never mutates it.
    """

    model_config = ConfigDict(frozen=True)

    include_circle: bool = Field(default=True, description="Run the wafer disk branch")
    include_rect: bool = Field(default=False, description="Run the histogram panel branch")


class PipelineSettings(BaseSettings):
    """Default branch selection and output sizing."""

    include_circle: bool = Field(default=True, description="Run the wafer disk branch by default")
    include_rect: bool = Field(default=False, description="Run the histogram panel branch by default")
    circle_target_size: int = Field(
        default=ImageConstants.CIRCLE_TARGET_SIZE,
        ge=1,
        le=10000,
        description="Side of the square footprint circular crops are fitted to",
    )
    rect_target_width: int = Field(
        default=ImageConstants.RECT_TARGET_WIDTH,
        ge=1,
        le=10000,
        description="Width rectangular crops are fitted to",
    )

    model_config = SettingsConfigDict(env_prefix="WC_PIPELINE_", extra="ignore")


class VisionSettings(BaseSettings):
    """Detector tuning."""

    hough_min_dist: float = Field(default=VisionConstants.HOUGH_MIN_DIST, gt=0)
    hough_param1: float = Field(default=VisionConstants.HOUGH_PARAM1, gt=0)
    hough_param2: float = Field(default=VisionConstants.HOUGH_PARAM2, gt=0)
    hough_min_radius: int = Field(default=VisionConstants.HOUGH_MIN_RADIUS, ge=0)
    hough_max_radius: int = Field(default=VisionConstants.HOUGH_MAX_RADIUS, ge=0)

    gaussian_blur_size: int = Field(
        default=VisionConstants.GAUSSIAN_BLUR_SIZE_DEFAULT,
        ge=VisionConstants.GAUSSIAN_BLUR_SIZE_MIN,
        le=VisionConstants.GAUSSIAN_BLUR_SIZE_MAX,
        description="Gaussian blur kernel size before panel edge detection",
    )
    canny_low_threshold: int = Field(
        default=VisionConstants.CANNY_LOW_THRESHOLD_DEFAULT,
        ge=VisionConstants.CANNY_THRESHOLD_MIN,
        le=VisionConstants.CANNY_THRESHOLD_MAX,
    )
    canny_high_threshold: int = Field(
        default=VisionConstants.CANNY_HIGH_THRESHOLD_DEFAULT,
        ge=VisionConstants.CANNY_THRESHOLD_MIN,
        le=VisionConstants.CANNY_THRESHOLD_MAX,
    )
    panel_min_width: int = Field(default=VisionConstants.PANEL_MIN_WIDTH, ge=0)
    panel_min_height: int = Field(default=VisionConstants.PANEL_MIN_HEIGHT, ge=0)

    @field_validator("gaussian_blur_size")
    @classmethod
    def validate_odd_number(cls, v):
        """Ensure kernel size is odd."""
        if v % 2 == 0:
            return v + 1
        return v

    model_config = SettingsConfigDict(env_prefix="WC_VISION_", extra="ignore")

    def circle_params(self) -> CircleDetectionParams:
        return CircleDetectionParams(
            min_dist=self.hough_min_dist,
            param1=self.hough_param1,
            param2=self.hough_param2,
            min_radius=self.hough_min_radius,
            max_radius=self.hough_max_radius,
        )

    def panel_params(self) -> PanelDetectionParams:
        return PanelDetectionParams(
            blur_kernel=self.gaussian_blur_size,
            canny_low=self.canny_low_threshold,
            canny_high=self.canny_high_threshold,
            min_width=self.panel_min_width,
            min_height=self.panel_min_height,
        )


class StorageSettings(BaseSettings):
    """Relational storage configuration."""

    database: str = Field(
        default=StorageConstants.DEFAULT_DATABASE,
        description="Database connection target (sqlite file path or ':memory:')",
    )

    model_config = SettingsConfigDict(env_prefix="WC_STORAGE_", extra="ignore")


class APISettings(BaseSettings):
    """API configuration."""

    host: str = Field(default=APIConstants.DEFAULT_HOST, description="API host address")
    port: int = Field(default=APIConstants.DEFAULT_PORT, ge=1, le=65535, description="API port")
    api_version: str = Field(default=APIConstants.API_VERSION, description="API version")
    max_upload_size_mb: int = Field(
        default=APIConstants.MAX_UPLOAD_SIZE_MB,
        ge=1,
        le=500,
        description="Maximum upload file size in MB",
    )

    model_config = SettingsConfigDict(env_prefix="WC_API_", extra="ignore")


class SystemSettings(BaseSettings):
    """System configuration."""

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default=SystemConstants.LOG_LEVEL_DEFAULT, description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        v_upper = v.upper()
        if v_upper not in SystemConstants.VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of {SystemConstants.VALID_LOG_LEVELS}"
            )
        return v_upper

    model_config = SettingsConfigDict(env_prefix="WC_SYSTEM_", extra="ignore")


class Settings(BaseSettings):
    """Main application settings."""

    # Sub-configurations
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    vision: VisionSettings = Field(default_factory=VisionSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    system: SystemSettings = Field(default_factory=SystemSettings)

    # Environment
    environment: str = Field(
        default="production", description="Environment (development, staging, production)"
    )

    # Config file support
    config_file: Optional[str] = Field(default=None, description="Path to YAML config file")

    model_config = SettingsConfigDict(
        env_prefix="WC_",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def load_config_file(cls, values):
        """Load configuration from YAML file if specified."""
        if not isinstance(values, dict):
            return values

        config_file = values.get("config_file") or os.getenv("WC_CONFIG_FILE")

        if config_file and Path(config_file).exists():
            import yaml

            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config file {config_file}: {e}")
                file_config = None

            if file_config and not isinstance(file_config, dict):
                raise ConfigurationException(
                    "config_file", f"{config_file} must contain a mapping at top level"
                )

            if file_config:
                for key, value in file_config.items():
                    values[key] = cls._merge_file_value(key, value, values.get(key))

        return values

    @classmethod
    def _merge_file_value(cls, key: str, file_value: Any, current: Any) -> Any:
        """
        Combine one top-level YAML entry with the value already collected.

        Explicit and environment values win. For a settings section, a YAML
        mapping only fills the keys its own WC_<SECTION>_ variables leave unset.
        """
        if current is not None and not isinstance(current, dict):
            return current

        field = cls.model_fields.get(key)
        section = field.annotation if field is not None else None
        if not (isinstance(file_value, dict) and isinstance(section, type)
                and issubclass(section, BaseSettings)):
            return file_value if current is None else current

        from_env = section().model_fields_set
        merged = {k: v for k, v in file_value.items() if k not in from_env}
        merged.update(current or {})
        return merged

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_envs = ["development", "staging", "production", "test"]
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v

    def pipeline_config(self) -> PipelineConfig:
        """Default branch selection for pipeline invocations."""
        return PipelineConfig(
            include_circle=self.pipeline.include_circle,
            include_rect=self.pipeline.include_rect,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings object with validated configuration
    """
    return Settings()


# Convenience function to reload settings (clears cache)
def reload_settings() -> Settings:
    """
    Reload settings, clearing the cache.

    Returns:
        Fresh Settings object
    """
    get_settings.cache_clear()
    return get_settings()

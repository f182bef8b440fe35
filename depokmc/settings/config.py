"""
Configuration module using Pydantic Settings.

This module handles project configuration including environment variables,
logging setup and the ambient conditions processes evaluate their rates under.
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..data.constants import get_physical_constants


class LogConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="DEPOKMC_LOG_")

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(default=None, description="Log file path (None = stdout only)")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of {valid_levels}")
        return v.upper()


class KMCConfig(BaseSettings):
    """Ambient conditions and lattice parameters of a deposition run."""

    model_config = SettingsConfigDict(env_prefix="DEPOKMC_KMC_")

    # Lattice dimensions
    lattice_size_x: int = Field(default=50, description="Lattice size in X direction", gt=0)
    lattice_size_y: int = Field(default=50, description="Lattice size in Y direction", gt=0)

    # Physical conditions
    temperature: float = Field(default=600.0, description="Temperature in Kelvin", gt=0)
    pressure: float = Field(default=101325.0, description="Gas pressure in Pa", ge=0)

    # Boltzmann constant (eV/K), used by Arrhenius-type rates
    k_boltzmann: float = Field(
        default=get_physical_constants().k_boltzmann_ev,
        description="Boltzmann constant in eV/K",
        gt=0,
    )

    # Step edge classification
    step_threshold: int = Field(
        default=1, description="Height difference that counts as a step edge", ge=1
    )


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DEPOKMC_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Project metadata
    project_name: str = Field(default="depokmc", description="Project name")
    environment: Literal["development", "production", "testing"] = Field(
        default="development", description="Environment"
    )

    # Configuration sections
    log: LogConfig = Field(default_factory=LogConfig)
    kmc: KMCConfig = Field(default_factory=KMCConfig)

    def setup_logging(self) -> logging.Logger:
        """
        Setup logging configuration.

        Returns:
            Configured logger instance.
        """
        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if self.log.file is not None:
            log_path = Path(self.log.file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path))

        logging.basicConfig(
            level=getattr(logging, self.log.level),
            format=self.log.format,
            handlers=handlers,
        )

        logger = logging.getLogger(self.project_name)
        logger.info(f"Logging initialized at level {self.log.level}")
        logger.info(f"Environment: {self.environment}")

        return logger

    def model_dump_summary(self) -> dict[str, dict]:
        """
        Get a summary of all configuration settings.

        Returns:
            Dictionary containing all settings organized by section.
        """
        return {
            "project": {
                "name": self.project_name,
                "environment": self.environment,
            },
            "kmc": self.kmc.model_dump(),
            "log": self.log.model_dump(),
        }


# Global settings instance
settings = Settings()

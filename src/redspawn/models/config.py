"""Configuration models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuntimeConfig(BaseModel):
    """Container runtime configuration."""
    docker_host: Optional[str] = Field(
        default=None,
        description="Docker daemon URL, defaults to the environment",
    )
    host_override: Optional[str] = Field(
        default=None,
        description="Host used to reach mapped ports, instead of the daemon host",
    )


class ReadinessConfig(BaseModel):
    """Readiness wait configuration."""
    startup_timeout: float = Field(default=60.0, gt=0)
    poll_interval: float = Field(default=0.1, gt=0)
    request_timeout: float = Field(default=2.0, gt=0)


class RedspawnConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore")

    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    readiness: ReadinessConfig = Field(default_factory=ReadinessConfig)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

"""Configuration management for the injector."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResolutionConfig(BaseModel):
    """Resolution behaviour."""

    thread_safe: bool = Field(
        default=False, description="Serialize registry access and resolution under one lock"
    )
    log_resolutions: bool = Field(
        default=False, description="Emit a debug record for every factory resolution"
    )
    trace_resolutions: bool = Field(
        default=True, description="Open a trace span for each top-level resolution"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="jest_injector", description="Service name for tracing")
    metrics_enabled: bool = Field(default=False, description="Record Prometheus metrics")
    metrics_port: int | None = Field(
        default=None, ge=1, le=65535, description="Expose metrics over HTTP on this port"
    )


class Config(BaseSettings):
    """Main configuration for the injector."""

    model_config = SettingsConfigDict(
        env_prefix="JEST_INJECTOR_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()

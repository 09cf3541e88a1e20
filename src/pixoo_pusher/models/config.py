"""Configuration models."""

from pathlib import Path
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CLOUD_HOST = "app.divoom-gz.com"


class DeviceConfig(BaseModel):
    """Pixoo device configuration, persisted as device.json."""

    host: Optional[str] = Field(default=None, description="IP address or hostname of the Pixoo")
    device_id: Optional[Union[int, str]] = Field(default=None, description="DeviceId sent with local commands")
    cloud_host: str = Field(default=DEFAULT_CLOUD_HOST, description="Divoom cloud API host")
    timeout: float = Field(default=5.0, gt=0, description="Request timeout in seconds")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="PIXOO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    config_dir: Path = Field(
        default=Path("config"),
        description="Path to configuration directory",
    )
    host: Optional[str] = Field(default=None, description="Pixoo host, skips discovery when set")
    device_id: Optional[str] = Field(default=None, description="DeviceId sent with local commands")
    cloud_host: str = Field(default=DEFAULT_CLOUD_HOST, description="Divoom cloud API host")
    timeout: float = Field(default=5.0, gt=0, description="Request timeout in seconds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level when --verbose is not given"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

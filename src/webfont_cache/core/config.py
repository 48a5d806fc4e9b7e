"""Configuration management for the web font cache."""

from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigLoadError, ConfigurationError, InvalidYamlError


class CacheConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WEBFONTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Disk cache and download configuration."""

    cache_root_dir: Path = Field(
        Path("~/.cache/webfont-cache"), description="Root directory of the disk cache"
    )
    local_fonts_dir: Path = Field(
        Path("./fonts"), description="Directory receiving locally downloaded font files"
    )
    catalog_path: Path | None = Field(None, description="Optional catalog JSON file")

    request_timeout_seconds: float = Field(10.0, gt=0.0, description="Byte fetch timeout")
    max_retries: int = Field(2, ge=0, description="Extra byte fetch attempts")
    backoff_seconds: float = Field(1.0, ge=0.0, description="Retry backoff base")
    user_agent: str = Field("webfont-cache/1.0.0", description="HTTP User-Agent")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")

    @field_validator("cache_root_dir", "local_fonts_dir", "catalog_path")
    @classmethod
    def expand_user(cls, v):
        if v is None:
            return v
        return Path(v).expanduser()

    @property
    def variants_dir(self) -> Path:
        """Root of the variant cache tree."""
        return self.cache_root_dir / "variants"

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "CacheConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env"
    ) -> "CacheConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open() as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise ConfigurationError(f"Empty configuration file: {config_path}")

    try:
        # YAML-based configs must not pick up values from .env
        class TempConfig(config_class):
            model_config = SettingsConfigDict(
                env_file=None,
                case_sensitive=False,
                extra="ignore",
            )

        return TempConfig(**config_data)
    except Exception as e:
        raise ConfigLoadError(str(e)) from e

"""
Configuration management for kube-switch

Provides pydantic-based settings with environment variable support
and YAML file loading capabilities.
"""

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import SettingsError

SETTINGS_FILE_ENV = "KUBE_SWITCH_SETTINGS_FILE"


def default_settings_path() -> Path:
    """Location of the optional YAML settings file"""
    override = os.environ.get(SETTINGS_FILE_ENV)
    if override:
        return Path(override)
    return Path.home() / ".config" / "kube-switch" / "config.yml"


class KubeSwitchSettings(BaseSettings):
    """Main kube-switch settings"""

    model_config = SettingsConfigDict(
        env_prefix="KUBE_SWITCH_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["text", "json"] = "text"

    # Persistence
    write_mode: Literal["atomic", "truncate"] = "atomic"
    output_format: Literal["preserve", "json", "yaml"] = "preserve"
    check_conflicts: bool = False

    # Completion
    namespace_timeout: float = Field(default=5.0, gt=0)
    namespace_alias: str = "cn"
    context_alias: str = "sc"

    @classmethod
    def load_from_file(
        cls, config_path: Optional[str] = None
    ) -> "KubeSwitchSettings":
        """
        Load settings from YAML file with environment variable override

        Raises:
            SettingsError: if the file cannot be read or parsed, or the
                resulting settings do not validate
        """
        import yaml

        config_file = Path(config_path) if config_path else default_settings_path()
        config_data = {}

        if config_file.exists():
            try:
                with open(config_file, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise SettingsError(f"Cannot load settings file {config_file}: {e}") from e
            if not isinstance(config_data, dict):
                raise SettingsError(f"Settings file {config_file} must contain a mapping")

        # Environment variables win over file values
        env_prefix = cls.model_config["env_prefix"]
        config_data = {
            key: value
            for key, value in config_data.items()
            if f"{env_prefix}{key}".upper() not in os.environ
        }
        try:
            return cls(**config_data)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings: {e}") from e


# Global settings instance
_config: Optional[KubeSwitchSettings] = None


def get_config() -> KubeSwitchSettings:
    """Get the global settings instance"""
    global _config
    if _config is None:
        _config = KubeSwitchSettings.load_from_file()
    return _config


def set_config(config: Optional[KubeSwitchSettings]) -> None:
    """Set (or reset with None) the global settings instance"""
    global _config
    _config = config

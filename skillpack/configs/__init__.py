"""
SkillPack configuration.

Values come from the environment with the ``SKILLPACK_`` prefix; nested
sections use ``_`` as delimiter, e.g. ``SKILLPACK_REGISTRY_PATHS='["./skills"]'``
or ``SKILLPACK_REGISTRY_DUPLICATEPOLICY=replace``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .registry import RegistryConfig


class SkillPackConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SKILLPACK_",
        env_nested_delimiter="_",
        case_sensitive=False,
        extra="ignore",
    )

    Host: str = Field(default="127.0.0.1", description="API bind host")
    Port: int = Field(default=8000, description="API bind port")
    Debug: bool = Field(default=False, description="Enable auto-reload and debug logging")
    LogLevel: str = Field(default="INFO", description="Root log level for skillpack loggers")

    Registry: RegistryConfig = Field(
        default_factory=lambda: RegistryConfig(),
        description="Skill registry configuration",
    )


configs = SkillPackConfig()

__all__ = ["RegistryConfig", "SkillPackConfig", "configs"]

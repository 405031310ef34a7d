"""Configuration management for create-vapor.

Settings come from three layers, later ones winning: built-in defaults,
an optional TOML file, and environment variables.
"""

import os
import tomllib
from pathlib import Path
from typing import Dict, Optional, Any

from pydantic import BaseModel, Field, field_validator, ValidationError

from .exceptions import ConfigError
from .models.options import STORE_URL_SUFFIX, is_valid_store_url, is_valid_theme_name

DEFAULT_TEMPLATE_REPO = "git@github.com:ehousestudio/ehouse-starter-repo.git"
DEFAULT_TEMPLATE_BRANCH = "add-accelerator"
DEFAULT_THEME_NAME = "shopify-custom-theme"
DEFAULT_STORE_URL = "example-store.myshopify.com"

SUPPORTED_PACKAGE_MANAGERS = ("npm", "pnpm", "yarn", "bun")

CONFIG_TABLE = "create-vapor"
CONFIG_ENV_VAR = "VAPOR_CONFIG"

# Environment variable -> Settings field
ENV_OVERRIDES = {
    "VAPOR_TEMPLATE_REPO": "template_repo",
    "VAPOR_TEMPLATE_BRANCH": "template_branch",
    "VAPOR_PACKAGE_MANAGER": "package_manager",
}


class Settings(BaseModel):
    """Tool settings shared by every scaffold run."""

    template_repo: str = Field(default=DEFAULT_TEMPLATE_REPO, description="Template repository to clone")
    template_branch: str = Field(default=DEFAULT_TEMPLATE_BRANCH, description="Template branch to clone")
    package_manager: str = Field(default="npm", description="Package manager used to install dependencies")
    default_theme_name: str = Field(default=DEFAULT_THEME_NAME, description="Theme name used for empty input")
    default_store_url: str = Field(default=DEFAULT_STORE_URL, description="Store URL used for empty input")

    @field_validator("template_repo", "template_branch")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate required strings are not blank."""
        v = v.strip()
        if not v:
            raise ValueError("Value cannot be empty")
        return v

    @field_validator("default_theme_name")
    @classmethod
    def validate_default_theme_name(cls, v: str) -> str:
        """Validate the default theme name is usable as a directory name."""
        v = v.strip()
        if not is_valid_theme_name(v):
            raise ValueError(f"Default theme name must be a plain directory name, got: {v!r}")
        return v

    @field_validator("package_manager")
    @classmethod
    def validate_package_manager(cls, v: str) -> str:
        """Validate the package manager is one we know how to drive."""
        v = v.strip().lower()
        if v not in SUPPORTED_PACKAGE_MANAGERS:
            raise ValueError(
                f"Unsupported package manager '{v}'. "
                f"Expected one of: {', '.join(SUPPORTED_PACKAGE_MANAGERS)}"
            )
        return v

    @field_validator("default_store_url")
    @classmethod
    def validate_default_store_url(cls, v: str) -> str:
        """Validate the default store URL has the Shopify suffix."""
        v = v.strip()
        if not v or not is_valid_store_url(v):
            raise ValueError(f"Default store URL must end with {STORE_URL_SUFFIX}")
        return v


class ConfigManager:
    """Loads create-vapor settings from file and environment."""

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_file: Settings file path. If None, uses $VAPOR_CONFIG or
                ~/.create-vapor/config.toml.
        """
        self.config_file = Path(config_file) if config_file else self.default_config_file()
        self._settings: Optional[Settings] = None

    @staticmethod
    def default_config_file() -> Path:
        """Get the settings file path used when none is given."""
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / ".create-vapor" / "config.toml"

    @property
    def settings(self) -> Settings:
        """Loaded settings, read on first access."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> Settings:
        """Load settings from the settings file and environment.

        Returns:
            Validated settings

        Raises:
            ConfigError: If the file cannot be parsed or a value is invalid
        """
        data = self._load_file()
        data.update(self.get_environment_overrides())

        try:
            return Settings(**data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(f"Invalid configuration: {errors}", details={"file": str(self.config_file)})

    def has_config_file(self) -> bool:
        """Check whether the settings file exists."""
        return self.config_file.is_file()

    def get_environment_overrides(self) -> Dict[str, str]:
        """Get settings overridden through environment variables.

        Returns:
            Mapping of Settings field name to value
        """
        overrides = {}
        for env_var, field in ENV_OVERRIDES.items():
            value = os.getenv(env_var)
            if value:
                overrides[field] = value
        return overrides

    def _load_file(self) -> Dict[str, Any]:
        """Read the settings file, if there is one."""
        if not self.has_config_file():
            return {}

        try:
            with open(self.config_file, "rb") as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse {self.config_file}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read {self.config_file}: {e}")

        table = config_data.get(CONFIG_TABLE, config_data)
        if not isinstance(table, dict):
            raise ConfigError(f"[{CONFIG_TABLE}] in {self.config_file} must be a table")

        return {key: value for key, value in table.items() if key in Settings.model_fields}

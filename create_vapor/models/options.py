"""Scaffold options model for create-vapor."""

from pydantic import BaseModel, Field, field_validator

STORE_URL_SUFFIX = ".myshopify.com"


def is_valid_store_url(url: str) -> bool:
    """Return True if the store URL is empty or ends with the Shopify suffix."""
    return not url or url.endswith(STORE_URL_SUFFIX)


def is_valid_theme_name(name: str) -> bool:
    """Return True if the theme name is a single, non-empty directory name."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


class ScaffoldOptions(BaseModel):
    """Everything the pipeline needs to know about the theme being created."""

    theme_name: str = Field(..., description="Theme directory and package name")
    store_url: str = Field(default="", description="Shopify store URL")
    init_git: bool = Field(default=True, description="Reinitialize git history")
    install_deps: bool = Field(default=True, description="Install dependencies")

    @field_validator("theme_name")
    @classmethod
    def validate_theme_name(cls, v: str) -> str:
        """Validate the theme name can be used as a directory name."""
        v = v.strip()
        if not v:
            raise ValueError("Theme name cannot be empty")
        if not is_valid_theme_name(v):
            raise ValueError(f"Theme name must be a plain directory name, got: {v}")
        return v

    @field_validator("store_url")
    @classmethod
    def validate_store_url(cls, v: str) -> str:
        """Validate store URL suffix."""
        v = v.strip()
        if not is_valid_store_url(v):
            raise ValueError(f"Store URL must end with {STORE_URL_SUFFIX}")
        return v

"""Pydantic models for create-vapor."""

from .options import ScaffoldOptions, STORE_URL_SUFFIX, is_valid_store_url, is_valid_theme_name
from .result import ScaffoldResult, StepResult, StepStatus

__all__ = [
    "ScaffoldOptions",
    "ScaffoldResult",
    "StepResult",
    "StepStatus",
    "STORE_URL_SUFFIX",
    "is_valid_store_url",
    "is_valid_theme_name",
]

"""
Centralized configuration for the hydrator.

Pydantic v2 settings management: values are parsed once from the
environment (prefix ``HYDRATOR_``), validated strictly and frozen for
the lifetime of the process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "rendering" / "templates"


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    Fails fast at startup if a value is malformed.
    """

    # ---------------------------------------------------------------------
    # Rendering
    # ---------------------------------------------------------------------

    template_dir: Annotated[
        Path,
        Field(
            default=DEFAULT_TEMPLATE_DIR,
            description="Directory holding the Jinja2 page templates",
        ),
    ]

    root_element_id: Annotated[
        str,
        Field(
            default="app",
            min_length=1,
            pattern=r"^[A-Za-z][A-Za-z0-9_-]*$",
            description="DOM id of the element the page object is mounted on",
        ),
    ]

    asset_version: Annotated[
        Optional[str],
        Field(
            default=None,
            description=(
                "Client asset version stamped into rendered page objects. "
                "A mismatch tells the client to do a full reload."
            ),
        ),
    ]

    # ---------------------------------------------------------------------
    # Payload contract
    # ---------------------------------------------------------------------

    allow_unknown_fields: Annotated[
        bool,
        Field(
            default=True,
            description=(
                "Pass fields outside the declared schema through to the "
                "renderer. When false, unknown fields fail validation."
            ),
        ),
    ]

    # ---------------------------------------------------------------------
    # Logging
    # ---------------------------------------------------------------------

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(default="INFO"),
    ]

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    model_config = SettingsConfigDict(
        env_prefix="HYDRATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


# -------------------------------------------------------------------------
# Settings Dependency Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Dependency injection provider for application settings.

    Uses an explicit singleton pattern within the process lifecycle.
    """
    return Settings()

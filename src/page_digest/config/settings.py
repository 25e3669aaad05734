"""
Pydantic settings models for page-digest.

Extraction limits default to the values the summary contract is written
against; they can be tightened but never loosened past the hard caps.
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


class ExtractionSettings(BaseModel):
    """Content extraction limits and literal defaults."""

    max_key_points: int = Field(
        default=8,
        ge=1,
        le=8,
        description="Maximum number of ranked key points in a summary",
    )
    max_images: int = Field(
        default=5,
        ge=0,
        le=5,
        description="Maximum number of image URLs in a summary",
    )
    min_image_size: int = Field(
        default=150,
        ge=1,
        le=2000,
        description="Rendered width and height must both exceed this (pixels)",
    )
    min_meta_description_length: int = Field(
        default=20,
        ge=0,
        le=200,
        description="Meta descriptions must be longer than this to be used",
    )
    min_paragraph_length: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Shortest paragraph usable as a description",
    )
    max_paragraph_length: int = Field(
        default=500,
        ge=2,
        le=5000,
        description="Paragraphs at or above this length are not used as a description",
    )
    max_description_length: int = Field(
        default=300,
        ge=20,
        le=2000,
        description="Paragraph descriptions are truncated to this length",
    )
    default_title: str = Field(
        default="Content Page",
        min_length=1,
        description="Title used when no candidate passes the quality filter",
    )
    default_description: str = Field(
        default="No description available",
        min_length=1,
        description="Description used when no candidate qualifies",
    )
    fallback_title: str = Field(
        default="Unknown Page",
        min_length=1,
        description="Title of the fallback summary when the document title is unavailable",
    )
    fallback_description: str = Field(
        default="Content extraction failed",
        min_length=1,
        description="Description of the fallback summary",
    )
    default_primary_color: str = Field(
        default="#667eea",
        description="Primary brand color when none can be inferred",
    )
    default_secondary_color: str = Field(
        default="#764ba2",
        description="Secondary brand color paired with the default primary",
    )

    @field_validator("default_primary_color", "default_secondary_color")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        """Require 6-digit hex colors and store them lowercase."""
        if not HEX_COLOR_PATTERN.match(v):
            raise ValueError(f"Expected a #rrggbb color, got: {v!r}")
        return v.lower()

    @model_validator(mode="after")
    def check_paragraph_bounds(self) -> "ExtractionSettings":
        """Paragraph length window must be non-empty."""
        if self.min_paragraph_length >= self.max_paragraph_length:
            raise ValueError(
                "min_paragraph_length must be smaller than max_paragraph_length")
        return self


class FetchSettings(BaseModel):
    """HTTP settings used by the command line when SOURCE is a URL."""

    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="Timeout for fetching a page in seconds",
    )
    user_agent: str = Field(
        default="page-digest/0.1",
        description="User agent sent with page requests",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Whether to follow HTTP redirects",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum logging level",
    )
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format string",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log timestamps",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path to log file. None means console only.",
    )
    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum log file size before rotation",
    )
    backup_count: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Number of backup log files to keep",
    )
    log_to_console: bool = Field(
        default=True,
        description="Whether to output logs to console",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def convert_file_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class Settings(BaseModel):
    """
    Root configuration model.

    Settings are loaded from YAML with environment variable overrides.
    """

    extraction: ExtractionSettings = Field(
        default_factory=ExtractionSettings,
        description="Content extraction settings",
    )
    fetch: FetchSettings = Field(
        default_factory=FetchSettings,
        description="HTTP fetch settings for the command line",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    model_config = {
        "extra": "forbid",
        "validate_default": True,
    }

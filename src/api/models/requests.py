"""Pydantic request models for API endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from core.config import DEFAULT_INPUT_PATTERN


class ParseDateRequest(BaseModel):
    text: str
    pattern: str = DEFAULT_INPUT_PATTERN
    locale: str | None = None


class ParseTimeRequest(BaseModel):
    text: str


class FormatRequest(BaseModel):
    """Render a date (or datetime) through one of the output formats."""

    value: datetime
    format: Literal["date", "iso", "custom"] = "iso"
    pattern: str | None = Field(default=None, description="Required for the custom format")
    locale: str | None = None

    @model_validator(mode="after")
    def check_pattern(self):
        if self.format == "custom" and not self.pattern:
            raise ValueError("pattern is required for the custom format")
        return self

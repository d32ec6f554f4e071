"""JSON response models for the MCP tools."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class FrequencyItem(BaseModel):
    token: str = Field(description="Matched severity keyword or IPv4 literal.")
    count: int = Field(ge=0, description="Number of occurrences across all inputs.")


class FrequencyReport(BaseModel):
    mode: Literal["errors", "ips"]
    total: int = Field(ge=0, description="Distinct tokens found, before any top-N cut.")
    items: list[FrequencyItem] = Field(default_factory=list)


class GrepReport(BaseModel):
    count: int = Field(ge=0, description="Number of lines returned.")
    truncated: bool = Field(description="True when more lines matched than were returned.")
    lines: list[str] = Field(default_factory=list)

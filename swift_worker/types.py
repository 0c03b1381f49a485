"""Output file map domain types."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_REDIRECTED_KINDS, DEFAULT_STRATEGY


class IncrementalConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    storage_root: Path | None = None
    redirected_kinds: frozenset[str] = Field(default=DEFAULT_REDIRECTED_KINDS)
    strategy: Literal["digest", "mirror"] = DEFAULT_STRATEGY

    @field_validator("redirected_kinds", mode="before")
    @classmethod
    def _split_kinds(cls, value: object) -> object:
        """Accept a comma-separated string as well as a list of kinds."""
        if isinstance(value, str):
            return frozenset(kind.strip() for kind in value.split(",") if kind.strip())
        return value


class CopyAction(BaseModel):
    source: str
    destination: str


class ReconcileResult(BaseModel):
    copied: list[CopyAction]
    missing: list[str]

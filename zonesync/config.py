"""Configuration loading and validation using Pydantic models."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .catalog import LOCAL_ZONE, default_catalog
from .catalog_data import POPULAR_ZONES
from .projection import GapPolicy, OverlapPolicy


def _check_zones(values: list[str], *, allow_local: bool) -> list[str]:
    catalog = default_catalog()
    unknown = [
        zone
        for zone in values
        if not (allow_local and zone == LOCAL_ZONE) and not catalog.is_valid(zone)
    ]
    if unknown:
        raise ValueError(f"Unknown zone identifiers: {', '.join(unknown)}")
    return values


class DisplayConfig(BaseModel):
    use_24_hour: bool = Field(True, description="Render clocks as HH:MM instead of h:MM AM.")
    show_date: bool = Field(True, description="Render the local date under each clock.")


class ZonesConfig(BaseModel):
    initial: list[str] = Field(
        default_factory=lambda: [LOCAL_ZONE, "UTC"],
        description="Zones shown at startup; 'local' resolves to the host zone.",
    )
    candidates: list[str] = Field(
        default_factory=lambda: list(POPULAR_ZONES),
        min_length=1,
        description="Pool for zones added without an explicit choice.",
    )
    min_entries: int = Field(
        2,
        ge=0,
        description="Leading entries that stay undeletable while no more than this many exist.",
    )

    @field_validator("initial")
    @classmethod
    def validate_initial(cls, value: list[str]) -> list[str]:
        return _check_zones(value, allow_local=True)

    @field_validator("candidates")
    @classmethod
    def validate_candidates(cls, value: list[str]) -> list[str]:
        return _check_zones(value, allow_local=False)


class EditsConfig(BaseModel):
    on_gap: GapPolicy = Field(
        GapPolicy.REJECT,
        description="Time/date edits landing in a DST gap: reject or advance.",
    )
    on_overlap: OverlapPolicy = Field(
        OverlapPolicy.EARLIER,
        description="Time/date edits landing in a DST overlap: earlier or reject.",
    )


class RefreshConfig(BaseModel):
    interval_s: int = Field(60, ge=1, description="Period of the external now-refresh timer.")
    suppress_after_edit_s: int = Field(
        300,
        ge=0,
        description="Ignore refresh proposals for this long after a manual edit.",
    )


class LoggingConfig(BaseModel):
    level: str = Field("INFO")
    dir: Optional[Path] = Field(None, description="Directory for the rotating log file.")


class AppConfig(BaseModel):
    display: DisplayConfig = DisplayConfig()
    zones: ZonesConfig = ZonesConfig()
    edits: EditsConfig = EditsConfig()
    refresh: RefreshConfig = RefreshConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: Path | str) -> AppConfig:
    """Load YAML configuration from disk."""

    config_path = Path(path)
    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return AppConfig.model_validate(data or {})

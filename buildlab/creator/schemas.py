"""
Schemas for the two oracle responses (preference analysis, build generation).

The oracle is schema-constrained only by instruction, so both payloads are
validated and repaired here before anything downstream sees them.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from buildlab.height import height_to_inches
from buildlab.models import AttributeCapSet, PhysicalPreferences, PreferenceRecord
from buildlab.vocabulary import ATTRIBUTE_KEYS, MAX_ATTRIBUTE_RATING, MIN_ATTRIBUTE_RATING, POSITIONS

POSITION_ALIASES = {
    "point guard": "PG",
    "shooting guard": "SG",
    "small forward": "SF",
    "power forward": "PF",
    "center": "C",
    "centre": "C",
}

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def parse_position(value: Any) -> str | None:
    """PG/SG/SF/PF/C from a code or a spelled-out position; None otherwise."""
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    if s.upper() in POSITIONS:
        return s.upper()
    return POSITION_ALIASES.get(s.lower())


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def _rating(value: Any) -> int:
    """Attribute cap as an int clamped to 25..99. Non-numeric values are rejected."""
    if isinstance(value, bool):
        raise ValueError("rating must be a number")
    if isinstance(value, str):
        m = _NUMBER.search(value)
        if not m:
            raise ValueError(f"rating is not numeric: {value!r}")
        value = float(m.group(0))
    if not isinstance(value, (int, float)):
        raise ValueError(f"rating is not numeric: {value!r}")
    return max(MIN_ATTRIBUTE_RATING, min(MAX_ATTRIBUTE_RATING, int(round(value))))


def _measurement(value: Any) -> int | None:
    """Inches/pounds from a number, a feet'inches string, or the first number in a string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(round(value))
    if isinstance(value, str):
        inches = height_to_inches(value)
        if inches is not None:
            return inches
        m = _NUMBER.search(value)
        if m:
            return int(round(float(m.group(0))))
    return None


Rating = Annotated[int, BeforeValidator(_rating)]
Measurement = Annotated[Optional[int], BeforeValidator(_measurement)]


# ---------- Preference analysis ----------


class PhysicalPreferencesPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    height: str | None = None
    weight: str | None = None
    wingspan: str | None = None

    @field_validator("height", "weight", "wingspan", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> str | None:
        return _optional_text(v)


class AnalysisPayload(BaseModel):
    """Analysis schema: position, playStyle, keyAttributes, physicalPreferences, badges, gameMode."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    position: str | None = None
    play_style: str | None = Field(None, alias="playStyle")
    key_attributes: list[str] = Field(default_factory=list, alias="keyAttributes")
    physical_preferences: PhysicalPreferencesPayload = Field(
        default_factory=PhysicalPreferencesPayload, alias="physicalPreferences"
    )
    badges: list[str] = Field(default_factory=list)
    game_mode: str | None = Field(None, alias="gameMode")

    @field_validator("position", mode="before")
    @classmethod
    def clean_position(cls, v: Any) -> str | None:
        return parse_position(v)

    @field_validator("play_style", "game_mode", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("key_attributes", "badges", mode="before")
    @classmethod
    def clean_lists(cls, v: Any) -> list[str]:
        return _text_list(v)

    @field_validator("physical_preferences", mode="before")
    @classmethod
    def clean_physical(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    def to_record(self) -> PreferenceRecord:
        p = self.physical_preferences
        return PreferenceRecord(
            position=self.position,
            play_style=self.play_style,
            key_attributes=tuple(self.key_attributes),
            physical_preferences=PhysicalPreferences(height=p.height, weight=p.weight, wingspan=p.wingspan),
            badges=tuple(self.badges),
            game_mode=self.game_mode,
        )


# ---------- Build generation ----------


class BuildPayload(BaseModel):
    """
    Build schema: all canonical attributes (required) plus position, height, weight,
    wingspan and an optional build name guess. Badge suggestions are ignored; badges
    are resolved from the requirement data instead.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    position: str | None = None
    height: Measurement = None
    weight: Measurement = None
    wingspan: Measurement = None

    closeShot: Rating
    drivingLayup: Rating
    drivingDunk: Rating
    standingDunk: Rating
    postControl: Rating
    midrange: Rating
    threePoint: Rating
    freeThrow: Rating
    passAccuracy: Rating
    ballHandle: Rating
    speedWithBall: Rating
    interiorDefense: Rating
    perimeterDefense: Rating
    steal: Rating
    block: Rating
    offensiveRebound: Rating
    defensiveRebound: Rating
    speed: Rating
    acceleration: Rating
    strength: Rating
    vertical: Rating
    stamina: Rating

    build_name: str | None = Field(None, alias="buildName")

    @field_validator("position", mode="before")
    @classmethod
    def clean_position(cls, v: Any) -> str | None:
        return parse_position(v)

    @field_validator("build_name", mode="before")
    @classmethod
    def clean_name(cls, v: Any) -> str | None:
        return _optional_text(v)

    def to_caps(self, fallback_position: str | None, fallback_height: int | None) -> AttributeCapSet:
        return AttributeCapSet(
            attributes=MappingProxyType({key: getattr(self, key) for key in ATTRIBUTE_KEYS}),
            position=self.position or fallback_position,
            height=self.height or fallback_height,
            weight=self.weight,
            wingspan=self.wingspan,
            build_name_guess=self.build_name,
        )

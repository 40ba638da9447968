"""
Data models for the build creator.
Domain records only; no oracle or HTTP logic.

Every record is created by one orchestration call and is not mutated afterwards.
Serialised keys are camelCase because that is what the UI consumes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping

from buildlab.vocabulary import ATTRIBUTE_KEYS


# ---------- Badge tiers ----------
class BadgeTier(IntEnum):
    """Ordered badge tiers. Integer value is the rank used for comparisons."""
    BRONZE = 1
    SILVER = 2
    GOLD = 3
    HALL_OF_FAME = 4
    LEGEND = 5

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @classmethod
    def from_label(cls, value: str | None) -> BadgeTier | None:
        """Parse "Bronze" .. "Legend"; accepts both "HoF" and "Hall of Fame". None if unknown."""
        if not value:
            return None
        return _TIER_BY_LABEL.get(str(value).strip().lower())


_TIER_LABELS = {
    BadgeTier.BRONZE: "Bronze",
    BadgeTier.SILVER: "Silver",
    BadgeTier.GOLD: "Gold",
    BadgeTier.HALL_OF_FAME: "Hall of Fame",
    BadgeTier.LEGEND: "Legend",
}

_TIER_BY_LABEL = {
    "bronze": BadgeTier.BRONZE,
    "silver": BadgeTier.SILVER,
    "gold": BadgeTier.GOLD,
    "hof": BadgeTier.HALL_OF_FAME,
    "hall of fame": BadgeTier.HALL_OF_FAME,
    "legend": BadgeTier.LEGEND,
}


# ---------- Preferences (output of the analyzer) ----------
@dataclass(frozen=True)
class PhysicalPreferences:
    height: str | None = None
    weight: str | None = None
    wingspan: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"height": self.height, "weight": self.weight, "wingspan": self.wingspan}


@dataclass(frozen=True)
class PreferenceRecord:
    """
    What the user asked for. Any field may be empty: extraction is best effort.
    position is one of PG/SG/SF/PF/C or None.
    """
    position: str | None = None
    play_style: str | None = None
    key_attributes: tuple[str, ...] = ()
    physical_preferences: PhysicalPreferences = field(default_factory=PhysicalPreferences)
    badges: tuple[str, ...] = ()
    game_mode: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "playStyle": self.play_style,
            "keyAttributes": list(self.key_attributes),
            "physicalPreferences": self.physical_preferences.to_dict(),
            "badges": list(self.badges),
            "gameMode": self.game_mode,
        }


# ---------- Attribute caps (output of the generator) ----------
@dataclass(frozen=True)
class AttributeCapSet:
    """
    Maximum-potential rating per canonical attribute plus body measurements.
    build_name_guess is the oracle's own suggestion; naming only falls back to it.
    attributes is read-only once the set is assembled.
    """
    attributes: Mapping[str, int]
    position: str | None
    height: int | None
    weight: int | None = None
    wingspan: int | None = None
    build_name_guess: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "position": self.position,
            "height": self.height,
            "weight": self.weight,
            "wingspan": self.wingspan,
        }
        for key in ATTRIBUTE_KEYS:
            d[key] = self.attributes.get(key)
        return d


# ---------- Resolved badges ----------
@dataclass(frozen=True)
class ResolvedBadgeSet:
    """badges: name -> tier label. hof / gold: highlighted tier-1 and tier-2 badge names ("" if none)."""
    badges: dict[str, str] = field(default_factory=dict)
    hof: str = ""
    gold: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"badges": dict(self.badges), "hof": self.hof, "gold": self.gold}


# ---------- Final result ----------
@dataclass(frozen=True)
class BuildResult:
    caps: AttributeCapSet
    overall: int
    badges: ResolvedBadgeSet
    build_name: str

    def to_dict(self) -> dict[str, Any]:
        d = self.caps.to_dict()
        d["overall"] = self.overall
        d["badges"] = dict(self.badges.badges)
        d["tier1MaxPlusOne"] = self.badges.hof
        d["tier2MaxPlusOne"] = self.badges.gold
        d["buildName"] = self.build_name
        return d

"""
Attribute vocabulary: canonical attribute keys and the spellings used by external datasets.

The badge-requirement table, the attribute-weight table and the official build catalog
each name attributes differently ("Three-Point Shot", "three_pointer", "Three_Pointer").
Everything inside the package uses the canonical camelCase keys below.
All tables are read-only after import.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

# ---------- Canonical attribute keys (order is the display order) ----------

ATTRIBUTE_KEYS: tuple[str, ...] = (
    "closeShot",
    "drivingLayup",
    "drivingDunk",
    "standingDunk",
    "postControl",
    "midrange",
    "threePoint",
    "freeThrow",
    "passAccuracy",
    "ballHandle",
    "speedWithBall",
    "interiorDefense",
    "perimeterDefense",
    "steal",
    "block",
    "offensiveRebound",
    "defensiveRebound",
    "speed",
    "acceleration",
    "strength",
    "vertical",
    "stamina",
)

MIN_ATTRIBUTE_RATING = 25
MAX_ATTRIBUTE_RATING = 99

# Canonical key -> spellings seen in external data.
ATTRIBUTE_NAME_MAPPING: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "closeShot": ("close shot", "closeshot", "close_shot"),
    "drivingLayup": ("driving layup", "drivinglayup", "layup", "driving_layup"),
    "drivingDunk": ("driving dunk", "drivingdunk", "driving_dunk"),
    "standingDunk": ("standing dunk", "standingdunk", "standing_dunk"),
    "postControl": ("post control", "postcontrol", "post_control"),
    "midrange": ("mid-range shot", "midrange shot", "midrangeshot", "midrange_shot", "mid-rangeshot"),
    "threePoint": (
        "three-point shot",
        "threepoint shot",
        "threepointshot",
        "three_pointer",
        "three-pointer",
        "three-pointshot",
    ),
    "freeThrow": ("free throw", "freethrow", "free_throw"),
    "passAccuracy": ("pass accuracy", "passaccuracy", "pass_accuracy"),
    "ballHandle": ("ball handle", "ballhandle", "ball_handle"),
    "speedWithBall": ("speed with ball", "speedwithball", "speed_with_ball"),
    "interiorDefense": ("interior defense", "interiordefense", "interior_defense"),
    "perimeterDefense": ("perimeter defense", "perimeterdefense", "perimeter_defense"),
    "steal": ("steal",),
    "block": ("block",),
    "offensiveRebound": ("offensive rebound", "offensiverebound", "offensive_rebound"),
    "defensiveRebound": ("defensive rebound", "defensiverebound", "defensive_rebound"),
    "speed": ("speed",),
    "acceleration": ("acceleration", "agility"),
    "strength": ("strength",),
    "vertical": ("vertical",),
    "stamina": ("stamina",),
})

# Keys used by the official build-name catalog. No stamina column there.
OFFICIAL_BUILD_ATTRIBUTE_MAPPING: Mapping[str, str] = MappingProxyType({
    "closeShot": "Close_Shot",
    "drivingLayup": "Layup",
    "drivingDunk": "Driving_Dunk",
    "standingDunk": "Standing_Dunk",
    "postControl": "Post_Control",
    "midrange": "Midrange_Shot",
    "threePoint": "Three_Pointer",
    "freeThrow": "Free_Throw",
    "passAccuracy": "Pass_Accuracy",
    "ballHandle": "Ball_Handle",
    "speedWithBall": "Speed_With_Ball",
    "interiorDefense": "Interior_Defense",
    "perimeterDefense": "Perimeter_Defense",
    "steal": "Steal",
    "block": "Block",
    "offensiveRebound": "Offensive_Rebound",
    "defensiveRebound": "Defensive_Rebound",
    "speed": "Speed",
    "acceleration": "Agility",
    "strength": "Strength",
    "vertical": "Vertical",
})

# ---------- Positions and point budgets ----------

POSITIONS: tuple[str, ...] = ("PG", "SG", "SF", "PF", "C")

# Position code -> catalog position code.
POSITION_MAPPING: Mapping[str, str] = MappingProxyType({
    "PG": "pg",
    "SG": "sg",
    "SF": "sf",
    "PF": "pf",
    "C": "c",
})
DEFAULT_CATALOG_POSITION = "pg"

# Total attribute points per position. Instructed to the oracle, not enforced.
ATTRIBUTE_TOTAL_CAPS: Mapping[str, int] = MappingProxyType({
    "PG": 610,
    "SG": 605,
    "SF": 600,
    "PF": 595,
    "C": 590,
})
DEFAULT_TOTAL_CAP = 600

# Attribute cost brackets (context for the generation prompt).
ATTRIBUTE_RANGES: tuple[Mapping[str, int | str], ...] = tuple(
    MappingProxyType({"name": name, "min": lo, "max": hi})
    for name, lo, hi in (
        ("25-74", 25, 74),
        ("75-79", 75, 79),
        ("80-84", 80, 84),
        ("85-89", 85, 89),
        ("90-94", 90, 94),
        ("95-98", 95, 98),
        ("99", 99, 99),
    )
)

# ---------- Normalization ----------

_SEPARATORS = re.compile(r"[\s\-_]+")


def _squash(name: str) -> str:
    return _SEPARATORS.sub("", name.lower())


def _build_reverse_index() -> Mapping[str, str]:
    index: dict[str, str] = {}
    for key, spellings in ATTRIBUTE_NAME_MAPPING.items():
        # The canonical key itself must normalize to itself.
        index[_squash(key)] = key
        for spelling in spellings:
            index[_squash(spelling)] = key
    return MappingProxyType(index)


ATTRIBUTE_REVERSE_MAPPING: Mapping[str, str] = _build_reverse_index()

# Applied after the generic lookup; these win.
_NAME_OVERRIDES: Mapping[str, str] = MappingProxyType({
    "agility": "acceleration",
})

# Short forms that only show up in badge-requirement rows.
_BADGE_ATTRIBUTE_OVERRIDES: Mapping[str, str] = MappingProxyType({
    "midrange": "midrange",
    "midrangeshot": "midrange",
    "layup": "drivingLayup",
    "drivinglayup": "drivingLayup",
    "threepoint": "threePoint",
    "threepointer": "threePoint",
    "threepointshot": "threePoint",
    "threepointshoot": "threePoint",
    "acceleration": "acceleration",
    "agility": "acceleration",
})


def normalize_attribute_name(name: str | None) -> str:
    """
    Map an external attribute name to its canonical key.

    Case and separators (space, hyphen, underscore) are ignored. Names with no mapping
    come back unchanged; callers treat that as "no match". Never raises.
    """
    if not name:
        return ""
    squashed = _squash(str(name))
    if squashed in _NAME_OVERRIDES:
        return _NAME_OVERRIDES[squashed]
    return ATTRIBUTE_REVERSE_MAPPING.get(squashed, name)


def resolve_badge_attribute(name: str | None) -> str:
    """Canonical key for the governing attribute of a badge-requirement row."""
    if not name:
        return ""
    squashed = _squash(str(name))
    if squashed in _BADGE_ATTRIBUTE_OVERRIDES:
        return _BADGE_ATTRIBUTE_OVERRIDES[squashed]
    return normalize_attribute_name(name)


def point_budget_for(position: str | None) -> int:
    """Total attribute points for a position code; 600 when unset or unknown."""
    if not position:
        return DEFAULT_TOTAL_CAP
    return ATTRIBUTE_TOTAL_CAPS.get(position.strip().upper(), DEFAULT_TOTAL_CAP)


def catalog_position(position: str | None) -> str:
    """Catalog position code for a build; "pg" when unset or unrecognised."""
    if not position:
        return DEFAULT_CATALOG_POSITION
    return POSITION_MAPPING.get(position.strip().upper(), DEFAULT_CATALOG_POSITION)

"""
Build naming.

Precedence: nearest official catalog build (same position, close attributes) >
name the oracle already supplied > rule-based archetype, where the user's own
playstyle wording short-circuits the archetype rules.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from buildlab.models import AttributeCapSet, PreferenceRecord
from buildlab.vocabulary import OFFICIAL_BUILD_ATTRIBUTE_MAPPING, catalog_position

logger = logging.getLogger(__name__)

# ---------- Catalog matching ----------

# (max absolute difference, points), checked in order.
DIFF_SCORE_BANDS: tuple[tuple[int, int], ...] = ((3, 10), (7, 5), (15, 2))
MIN_MATCH_SCORE = 3

DEFAULT_BUILD_NAME = "All-Around Player"


def _attribute_points(diff: float) -> int:
    for limit, points in DIFF_SCORE_BANDS:
        if diff <= limit:
            return points
    return 0


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def similarity_score(caps: AttributeCapSet, entry: Mapping[str, Any]) -> float:
    """Average per-attribute points over the attributes both sides have. 0 when none overlap."""
    total = 0
    compared = 0
    for key, catalog_key in OFFICIAL_BUILD_ATTRIBUTE_MAPPING.items():
        ours = caps.attributes.get(key)
        theirs = _as_number(entry.get(catalog_key))
        if ours is None or theirs is None:
            continue
        total += _attribute_points(abs(ours - theirs))
        compared += 1
    return total / compared if compared else 0.0


def find_official_build_name(caps: AttributeCapSet, catalog: Any) -> str | None:
    """
    Name of the closest official build at the same position, or None.
    Unset or unknown positions are matched against point guards.
    """
    if not isinstance(catalog, list) or not catalog:
        return None
    position = catalog_position(caps.position)
    candidates = [e for e in catalog if isinstance(e, Mapping) and e.get("position") == position]
    if not candidates:
        return None
    scored = [(similarity_score(caps, e), e.get("name")) for e in candidates]
    # Stable: the earliest entry wins ties.
    scored.sort(key=lambda item: item[0], reverse=True)
    best_score, best_name = scored[0]
    logger.debug("Best catalog match %r scored %.2f", best_name, best_score)
    if best_score >= MIN_MATCH_SCORE and best_name:
        return str(best_name)
    return None


# ---------- Rule-based archetypes ----------

# Checked in order; first true predicate names the build.
ARCHETYPE_RULES: tuple[tuple[str, Callable[[Mapping[str, int]], bool]], ...] = (
    ("Offensive Threat", lambda a: a["threePoint"] >= 80 and a["ballHandle"] >= 80),
    ("3&D Wing", lambda a: a["threePoint"] >= 80 and a["perimeterDefense"] >= 80),
    ("Two-Way Finisher", lambda a: a["drivingDunk"] >= 85 and a["perimeterDefense"] >= 80),
    ("Lockdown Defender", lambda a: a["perimeterDefense"] >= 85 and a["steal"] >= 85),
    ("Sharpshooter", lambda a: a["threePoint"] >= 90),
    ("Playmaker", lambda a: a["ballHandle"] >= 90 and a["passAccuracy"] >= 85),
    ("Slasher", lambda a: a["drivingDunk"] >= 90),
    (
        "Paint Beast",
        lambda a: a["interiorDefense"] >= 85 and a["block"] >= 85 and a["defensiveRebound"] >= 85,
    ),
    ("Post Scorer", lambda a: a["postControl"] >= 85),
    ("Scoring Machine", lambda a: a["drivingDunk"] >= 80 and a["threePoint"] >= 80),
)


class _Ratings(dict):
    """Missing attributes read as 0 so a predicate on them is simply false."""

    def __missing__(self, key: str) -> int:
        return 0


def _playstyle_override(play_style: str | None, ratings: Mapping[str, int]) -> str | None:
    if not play_style:
        return None
    style = play_style.lower()
    two_way = ratings["perimeterDefense"] >= 80
    if "sharp" in style or "shoot" in style:
        return "3&D Wing" if two_way else "Sharpshooter"
    if "slash" in style or "finish" in style:
        return "Two-Way Finisher" if two_way else "Slasher"
    if "play" in style or "pass" in style:
        return "Playmaker"
    if "def" in style or "lock" in style:
        return "Lockdown Defender"
    if "post" in style or "center" in style:
        return "Paint Beast"
    return None


def generate_build_name(caps: AttributeCapSet, prefs: PreferenceRecord | None) -> str:
    """Archetype name from the caps; the user's stated playstyle takes priority when it names one."""
    ratings = _Ratings(caps.attributes)
    override = _playstyle_override(prefs.play_style if prefs else None, ratings)
    if override:
        return override
    for name, rule in ARCHETYPE_RULES:
        if rule(ratings):
            return name
    return DEFAULT_BUILD_NAME


def resolve_build_name(caps: AttributeCapSet, prefs: PreferenceRecord | None, catalog: Any) -> str:
    official = find_official_build_name(caps, catalog)
    if official:
        return official
    if caps.build_name_guess:
        return caps.build_name_guess
    return generate_build_name(caps, prefs)

"""
Badge resolution: which badges a set of attribute caps unlocks, and at what tier.

Inputs are the external badge-requirement rows (one row per badge/attribute pair, with
per-tier rating thresholds) and the badge max-level-by-height table. A badge never
resolves above its height ceiling or above what the governing attribute supports.

Malformed inputs degrade to an empty result; nothing here raises.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from buildlab.height import height_to_inches, height_word_key, is_supported_height
from buildlab.models import AttributeCapSet, BadgeTier, ResolvedBadgeSet
from buildlab.vocabulary import resolve_badge_attribute

logger = logging.getLogger(__name__)

# Used when the caps carry no height (6'8").
DEFAULT_HEIGHT_INCHES = 80

BADGE_CATEGORIES: tuple[str, ...] = (
    "Finishing",
    "Shooting",
    "Playmaking",
    "Defense",
    "Rebounding",
    "Inside Scoring",
    "Outside Scoring",
    "General",
    "General Offense",
    "All Around",
)
# Older data files use the 2K24 category names.
CATEGORY_ALIASES: dict[str, tuple[str, ...]] = {
    "Finishing": ("Inside Scoring",),
    "Shooting": ("Outside Scoring",),
}
BADGES_PER_CATEGORY = 3

# Fallbacks when a row has neither the threshold nor the tier below it.
DEFAULT_THRESHOLDS = {"Legend": 99, "HoF": 94, "Gold": 85, "Bronze": 75}
THRESHOLD_STEP = 5


# ---------- Threshold ladder ----------


def _threshold_value(row: Mapping[str, Any], key: str) -> float | None:
    """Numeric threshold from a row; missing, zero or unparsable counts as absent."""
    value = row.get(key)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or value != value:  # NaN
        return None
    return value or None


def _inferred(own: float | None, below: float | None, default: int) -> float:
    if own:
        return own
    if below:
        return below + THRESHOLD_STEP
    return default


def tier_thresholds(row: Mapping[str, Any]) -> list[tuple[float, BadgeTier]]:
    """
    Rating needed for each tier, highest first.

    The Legend column unlocks Hall of Fame, HoF unlocks Gold, Gold unlocks Silver and
    Bronze unlocks Bronze. A missing column is inferred as the column below it + 5,
    then falls back to 99 / 94 / 85 / 75.
    """
    legend = _threshold_value(row, "Legend")
    hof = _threshold_value(row, "HoF")
    gold = _threshold_value(row, "Gold")
    silver = _threshold_value(row, "Silver")
    bronze = _threshold_value(row, "Bronze")
    return [
        (_inferred(legend, hof, DEFAULT_THRESHOLDS["Legend"]), BadgeTier.HALL_OF_FAME),
        (_inferred(hof, gold, DEFAULT_THRESHOLDS["HoF"]), BadgeTier.GOLD),
        (_inferred(gold, silver, DEFAULT_THRESHOLDS["Gold"]), BadgeTier.SILVER),
        (bronze or DEFAULT_THRESHOLDS["Bronze"], BadgeTier.BRONZE),
    ]


def attained_tier(rating: float, row: Mapping[str, Any]) -> BadgeTier | None:
    """First tier whose threshold the rating meets, checked from the top. None if none."""
    for threshold, tier in tier_thresholds(row):
        if rating >= threshold:
            return tier
    return None


def apply_height_ceiling(tier: BadgeTier, ceiling_label: str | None) -> BadgeTier | None:
    """
    Cap a tier to the max level allowed at this height.
    No ceiling -> unchanged. A Legend ceiling displays as Hall of Fame.
    A ceiling label we cannot read allows nothing.
    """
    if not ceiling_label:
        return tier
    ceiling = BadgeTier.from_label(ceiling_label)
    if ceiling is None:
        return None
    if tier <= ceiling:
        return tier
    return min(ceiling, BadgeTier.HALL_OF_FAME)


# ---------- Height ceilings ----------


def _ceiling_rows(height_ceilings: Any) -> list[Any]:
    if isinstance(height_ceilings, list):
        return height_ceilings
    if isinstance(height_ceilings, Mapping):
        page_props = height_ceilings.get("pageProps")
        if isinstance(page_props, Mapping) and isinstance(page_props.get("badgeTiers"), list):
            return page_props["badgeTiers"]
    return []


def ceilings_for_height(height_ceilings: Any, height_key: str | None) -> dict[str, str]:
    """badge name -> max tier label at height_key. Badges without an entry have no ceiling."""
    if not height_key:
        return {}
    out: dict[str, str] = {}
    for row in _ceiling_rows(height_ceilings):
        if not isinstance(row, Mapping):
            continue
        badge = row.get("badge")
        level = row.get(height_key)
        if badge and level:
            out[str(badge)] = str(level)
    return out


def _excluded_by_height(row: Mapping[str, Any], height: int) -> bool:
    """Only rows that declare both bounds (and whose bounds parse) can exclude a height."""
    if not (row.get("Min_Height") and row.get("Max_Height")):
        return False
    lo = height_to_inches(row["Min_Height"])
    hi = height_to_inches(row["Max_Height"])
    if lo is None or hi is None:
        return False
    return height < lo or height > hi


# ---------- Resolution ----------


def _top_per_category(levels: Mapping[str, tuple[BadgeTier, str | None]]) -> dict[str, str]:
    out: dict[str, str] = {}
    for category in BADGE_CATEGORIES:
        accepted = (category, *CATEGORY_ALIASES.get(category, ()))
        members = [(name, tier) for name, (tier, cat) in levels.items() if cat in accepted]
        # sorted() is stable: equal tiers keep encounter order.
        members = sorted(members, key=lambda item: item[1], reverse=True)[:BADGES_PER_CATEGORY]
        for name, tier in members:
            out[name] = tier.label
    return out


def _first_with_tier(levels: Mapping[str, tuple[BadgeTier, str | None]], tier: BadgeTier) -> str:
    for name, (level, _category) in levels.items():
        if level == tier:
            return name
    return ""


def resolve_badges(
    caps: AttributeCapSet,
    requirements: Iterable[Mapping[str, Any]] | None,
    height_ceilings: Any = None,
) -> ResolvedBadgeSet:
    """
    Derive the achievable badge set for a build.

    requirements: badge-requirement rows (Badge, Attribute, Category, tier thresholds,
    optional Min_Height / Max_Height). height_ceilings: the badge-max-level-by-height
    payload or its badgeTiers list. Returns badges (top 3 per category) plus the first
    Hall of Fame badge (hof) and first Gold badge (gold).
    """
    if not isinstance(requirements, list):
        logger.warning("Badge requirements are not a list (%s); resolving no badges", type(requirements).__name__)
        return ResolvedBadgeSet()

    height = caps.height or DEFAULT_HEIGHT_INCHES
    height_key = height_word_key(height) if is_supported_height(height) else None
    if height_key is None:
        logger.warning("Height %s is outside the supported range; ignoring height ceilings", height)
    ceilings = ceilings_for_height(height_ceilings, height_key)
    logger.debug("Resolving %d badge requirements at %s (%s)", len(requirements), height, height_key)

    levels: dict[str, tuple[BadgeTier, str | None]] = {}
    for row in requirements:
        if not isinstance(row, Mapping) or not row.get("Attribute") or not row.get("Badge"):
            continue
        if _excluded_by_height(row, height):
            continue
        attribute = resolve_badge_attribute(row["Attribute"])
        rating = caps.attributes.get(attribute)
        if not rating:
            continue
        badge = str(row["Badge"])
        tier = attained_tier(rating, row)
        if tier is None:
            continue
        tier = apply_height_ceiling(tier, ceilings.get(badge))
        if tier is None:
            continue
        current = levels.get(badge)
        if current is None or tier > current[0]:
            levels[badge] = (tier, row.get("Category"))

    return ResolvedBadgeSet(
        badges=_top_per_category(levels),
        hof=_first_with_tier(levels, BadgeTier.HALL_OF_FAME),
        gold=_first_with_tier(levels, BadgeTier.GOLD),
    )

"""
Overall rating estimate for a set of attribute caps.
Pure functions; no I/O.
"""
from __future__ import annotations

import math
from typing import Mapping

# ---------- Categories ----------

RATING_CATEGORIES: dict[str, tuple[str, ...]] = {
    "finishing": ("closeShot", "drivingLayup", "drivingDunk", "standingDunk", "postControl"),
    "shooting": ("midrange", "threePoint", "freeThrow"),
    "playmaking": ("passAccuracy", "ballHandle", "speedWithBall"),
    "defense": (
        "interiorDefense",
        "perimeterDefense",
        "steal",
        "block",
        "offensiveRebound",
        "defensiveRebound",
    ),
    "physical": ("speed", "acceleration", "strength", "vertical", "stamina"),
}

# ---------- Weights ----------
# "general" is declared but has no category, so applied weights sum to 0.86.

CATEGORY_WEIGHTS: dict[str, float] = {
    "finishing": 0.18,
    "shooting": 0.18,
    "playmaking": 0.18,
    "defense": 0.18,
    "physical": 0.14,
    "general": 0.14,
}


def category_averages(attributes: Mapping[str, int]) -> dict[str, float]:
    """Arithmetic mean per category. Missing attributes raise KeyError."""
    return {
        name: sum(attributes[key] for key in keys) / len(keys)
        for name, keys in RATING_CATEGORIES.items()
    }


def calculate_overall_rating(attributes: Mapping[str, int]) -> int:
    """
    Weighted sum of category averages, rounded half up. Not clamped.
    All attributes at 80 -> 80 * 0.86 = 68.8 -> 69.
    """
    averages = category_averages(attributes)
    total = sum(avg * CATEGORY_WEIGHTS[name] for name, avg in averages.items())
    return math.floor(total + 0.5)

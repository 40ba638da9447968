"""
Build generation: second oracle call proposing attribute caps for the analysed preferences.

The point budget is passed to the oracle as an instruction only; the returned caps are
range-checked (25..99) but their total is not verified against the budget.
"""
from __future__ import annotations

import logging

from pydantic import ValidationError

from buildlab.creator.prompt import GENERATION_TEMPERATURE, build_generation_prompt
from buildlab.creator.schemas import BuildPayload
from buildlab.datasets import ReferenceData
from buildlab.errors import OracleResponseError
from buildlab.height import format_height, height_to_inches
from buildlab.llm import TextCompletionService
from buildlab.models import AttributeCapSet, PreferenceRecord
from buildlab.vocabulary import point_budget_for

logger = logging.getLogger(__name__)

# ---------- Recommended heights ----------
# position -> playstyle bucket -> height in inches. Used only when the user gave no height.

POSITION_HEIGHTS: dict[str, dict[str, int]] = {
    "PG": {"default": 74, "shooter": 76, "defender": 77, "slasher": 75},
    "SG": {"default": 77, "shooter": 78, "defender": 79, "slasher": 77},
    "SF": {"default": 80, "shooter": 79, "defender": 81, "slasher": 80},
    "PF": {"default": 82, "shooter": 81, "defender": 83, "slasher": 82},
    "C": {"default": 84, "shooter": 82, "defender": 86, "slasher": 84},
}
DEFAULT_POSITION = "SF"
FALLBACK_HEIGHT = 80

# Checked in order; first keyword found wins.
PLAYSTYLE_BUCKETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("shooter", ("shoot", "sharp")),
    ("defender", ("defend", "lock")),
    ("slasher", ("slash", "finish")),
)


def playstyle_bucket(play_style: str | None) -> str:
    style = (play_style or "").lower()
    for bucket, keywords in PLAYSTYLE_BUCKETS:
        if any(k in style for k in keywords):
            return bucket
    return "default"


def recommend_height(position: str | None, play_style: str | None) -> str:
    """Height string for a position/playstyle. Unset position -> SF; unknown position -> 6'8"."""
    heights = POSITION_HEIGHTS.get(position or DEFAULT_POSITION)
    if heights is None:
        return format_height(FALLBACK_HEIGHT)
    return format_height(heights.get(playstyle_bucket(play_style)) or heights["default"])


def target_height(prefs: PreferenceRecord) -> tuple[str, int | None]:
    """
    (recommended height string, inches). A user-stated height wins and leaves the
    recommended string empty.
    """
    stated = prefs.physical_preferences.height
    if stated:
        return ("", height_to_inches(stated))
    recommended = recommend_height(prefs.position, prefs.play_style)
    return (recommended, height_to_inches(recommended))


def generate_build(
    prefs: PreferenceRecord,
    service: TextCompletionService,
    reference: ReferenceData,
) -> AttributeCapSet:
    """Ask the oracle for attribute caps; validate and repair the response."""
    recommended, inches = target_height(prefs)
    budget = point_budget_for(prefs.position)
    messages = build_generation_prompt(
        prefs,
        recommended_height=recommended,
        height_inches=inches,
        point_budget=budget,
        attribute_weights_sample=reference.attribute_weights_for_height(inches),
        badge_requirements_sample=reference.badge_requirement_sample(),
    )
    data = service.complete(messages, temperature=GENERATION_TEMPERATURE, schema_name="build_generation")
    try:
        payload = BuildPayload.model_validate(data)
    except ValidationError as e:
        raise OracleResponseError(f"build_generation: {e!s}") from e
    caps = payload.to_caps(fallback_position=prefs.position, fallback_height=inches)
    logger.info(
        "Generated caps: position=%s height=%s budget=%d total=%d",
        caps.position, caps.height, budget, sum(caps.attributes.values()),
    )
    return caps

"""
Prompts for the two oracle calls.

Analysis: free text -> six preference fields. Generation: preferences + budget +
grounding samples -> attribute caps. Both answer with a single JSON object.
"""
from __future__ import annotations

import json
from typing import Any

from buildlab.models import PreferenceRecord
from buildlab.vocabulary import ATTRIBUTE_KEYS, ATTRIBUTE_RANGES, ATTRIBUTE_TOTAL_CAPS

ANALYSIS_TEMPERATURE = 0.3
GENERATION_TEMPERATURE = 0.7


ANALYSIS_SYSTEM_INSTRUCTION = """You are an NBA 2K25 build expert. Analyze the user's request and identify what kind of player build they want.
Extract the following information from their query:
1. Position (PG, SG, SF, PF, C)
2. Play style or archetype they want (e.g., shooter, slasher, defender, etc.)
3. Key attributes they prioritize (shooting, finishing, defense, playmaking, etc.)
4. Any physical preferences (height, weight, wingspan)
5. Specific badges they might want
6. Game mode (Park, Rec, MyCareer, etc.)

Output your analysis as a JSON object with exactly these fields:
{
  "position": "string or null",
  "playStyle": "string or null",
  "keyAttributes": ["array of strings"],
  "physicalPreferences": {
    "height": "string or null",
    "weight": "string or null",
    "wingspan": "string or null"
  },
  "badges": ["array of strings or empty"],
  "gameMode": "string or null"
}
Use null or an empty array for anything the user did not say. Do not guess."""


def build_analysis_prompt(user_prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_INSTRUCTION},
        {"role": "user", "content": f'User request: "{user_prompt}"'},
    ]


def _caps_line() -> str:
    return ", ".join(f"{pos}: {cap}" for pos, cap in ATTRIBUTE_TOTAL_CAPS.items())


def _build_schema_block() -> str:
    lines = [
        '  "position": "string",',
        '  "height": number (in inches),',
        '  "weight": number,',
        '  "wingspan": number,',
    ]
    lines += [f'  "{key}": number,' for key in ATTRIBUTE_KEYS]
    lines += [
        '  "badges": {"badgeName": "level"},',
        '  "buildName": "string"',
    ]
    return "{\n" + "\n".join(lines) + "\n}"


def build_generation_prompt(
    prefs: PreferenceRecord,
    recommended_height: str,
    height_inches: int | None,
    point_budget: int,
    attribute_weights_sample: list[dict[str, Any]],
    badge_requirements_sample: list[dict[str, Any]],
) -> list[dict[str, str]]:
    """
    System message: the analysed preferences, the build rules and the response schema.
    User message: budget, recommended height and the two grounding samples.
    """
    prefs_json = json.dumps(prefs.to_dict(), indent=2)
    system = f"""You are an NBA 2K25 build optimization expert. Create an optimized build configuration from the user's preferences and 2K Lab data. You set ATTRIBUTE CAPS (maximum potential) for each attribute, NOT current values.

The user's preferences have been analyzed as:
{prefs_json}

Key information about NBA 2K25 builds:
1. Each position has a total attribute point cap ({_caps_line()})
2. Attribute costs increase steeply at higher ratings (cost brackets: {json.dumps([dict(r) for r in ATTRIBUTE_RANGES])})
3. Taller players pay more attribute points for certain skills (shooting, ball handling)
4. Specific badge tiers require minimum attribute thresholds
5. Some badges are restricted by height

Create a build with these specifications:
1. Position: {prefs.position or "Based on playstyle and preferences"}
2. Height: {recommended_height or "Optimal for position and playstyle"}
3. Weight and Wingspan: Optimized for the playstyle
4. Attribute Caps: Set to maximize effectiveness for the playstyle, each between 25 and 99
5. Badge Selection: Identify key badges that match the playstyle

Follow these attribute cap guidelines:
- Prioritize attributes for the key playstyle
- Meet minimum thresholds for important badges
- Distribute attribute points efficiently based on attribute costs
- Set lower caps for non-essential attributes
- Target key attribute breakpoints that unlock specific animations

Return a complete build configuration as a JSON object:
{_build_schema_block()}"""

    user = f"""User preferences: {json.dumps(prefs.to_dict())}
Recommended height: {recommended_height} ({height_inches} inches)
Total attribute cap: {point_budget} points

Badge requirements sample:
{json.dumps(badge_requirements_sample)}

Attribute weights sample for this height:
{json.dumps(attribute_weights_sample)}

Please create an optimized build configuration that sets ATTRIBUTE CAPS (not current values) based on these preferences and constraints."""
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]

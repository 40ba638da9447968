"""
Prompt for ranking existing builds against analysed preferences.
"""
from __future__ import annotations

import json
from typing import Any

from buildlab.models import PreferenceRecord

MATCH_TEMPERATURE = 0.1

SCORING_RUBRIC = """Follow this scoring system to evaluate each build (0-100 points total):
1. Position match (0-30 points):
   - Exact position match: 30 points
   - Similar position (e.g., SG/SF): 15 points
   - No match: 0 points
2. Play style match (0-25 points):
   - For shooters, prioritize three-point and mid-range shooting
   - For slashers, prioritize driving dunk, layup, and speed
   - For defenders, prioritize perimeter/interior defense, block, and steal
   - For playmakers, prioritize ball handling and pass accuracy
3. Key attributes match (0-25 points):
   - Score each requested attribute (divide 25 by the number of key attributes)
4. Physical attributes match (0-10 points):
   - Height match: 4 points
   - Weight match: 3 points
   - Wingspan match: 3 points
5. Badge match (0-10 points):
   - Score based on matching badges"""


def build_match_prompt(prefs: PreferenceRecord, builds: list[dict[str, Any]]) -> list[dict[str, str]]:
    system = f"""You are an NBA 2K25 build matcher. Based on the user's preferences, analyze ALL available builds and find the BEST matching build.

The user's preferences have been analyzed as:
{json.dumps(prefs.to_dict(), indent=2)}

{SCORING_RUBRIC}

Scan every build; do not stop at the first decent match.
Answer with a JSON object: {{"index": <0-based index of the best build>}}"""
    user = f"""Available builds ({len(builds)} total):
{json.dumps(builds)}

Return only the JSON object with the 0-based index of the best matching build."""
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]

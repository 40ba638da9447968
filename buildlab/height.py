"""
Height codec: feet-inches strings <-> inches <-> word keys.

Height-conditioned tables (badge ceilings) are keyed by words, e.g. 6'8" -> "six_eight",
7'0" -> "seven". The word key is a lookup key only, not a display string.
"""
from __future__ import annotations

import re

HEIGHT_WORDS: tuple[str, ...] = (
    "", "one", "two", "three", "four", "five",
    "six", "seven", "eight", "nine", "ten", "eleven",
)

# Range callers should check before asking for a word key (4'0" to 8'0").
MIN_SUPPORTED_HEIGHT = 48
MAX_SUPPORTED_HEIGHT = 96

_FEET_INCHES = re.compile(r"(\d+)'(\d+)\"?")


class HeightOutOfRangeError(ValueError):
    """Feet value has no word form."""


def height_to_inches(value: int | str | None) -> int | None:
    """
    Convert a height to inches.

    Integers are taken as inches already. Strings need a feet'inches pattern, with the
    closing quote optional ("6'8\"", "6'8", "a 6'2 point guard"). Anything else -> None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not value:
        return None
    m = _FEET_INCHES.search(value)
    if not m:
        return None
    return int(m.group(1)) * 12 + int(m.group(2))


def format_height(inches: int) -> str:
    """6'8\" style display string."""
    return f"{inches // 12}'{inches % 12}\""


def is_supported_height(inches: int | None) -> bool:
    return inches is not None and MIN_SUPPORTED_HEIGHT <= inches <= MAX_SUPPORTED_HEIGHT


def height_word_key(inches: int) -> str:
    """
    Word key for a height in inches: 80 -> "six_eight", 84 -> "seven".
    Raises HeightOutOfRangeError when the feet value has no word (negative or 12+ feet).
    """
    feet, rem = divmod(int(inches), 12)
    if feet < 0 or feet >= len(HEIGHT_WORDS):
        raise HeightOutOfRangeError(f"No word key for height {inches} inches ({feet} feet)")
    if rem == 0:
        return HEIGHT_WORDS[feet]
    return f"{HEIGHT_WORDS[feet]}_{HEIGHT_WORDS[rem]}"

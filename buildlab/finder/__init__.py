"""
Build finder: pick the best existing build for a request instead of generating one.
Shares the preference analysis with the build creator; the oracle does the ranking.
"""
from __future__ import annotations

from buildlab.finder.orchestration import find_build, find_matching_build

__all__ = ["find_build", "find_matching_build"]

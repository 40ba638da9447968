"""
Build creator core: free-text playstyle request -> attribute caps, badges, rating, build name.

The UI and HTTP layers consume create_build(); everything else in the package is
pure post-processing around two oracle calls.
"""
from __future__ import annotations

from buildlab.creator.orchestration import create_build, run_build_pipeline
from buildlab.errors import BuildCreatorError

__all__ = ["create_build", "run_build_pipeline", "BuildCreatorError"]

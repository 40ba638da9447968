"""
Build creator: free-text request -> preference analysis -> attribute caps -> rating,
badges and build name. The oracle suggests; everything after it is deterministic.
"""
from __future__ import annotations

from buildlab.creator.orchestration import create_build, run_build_pipeline

__all__ = ["create_build", "run_build_pipeline"]

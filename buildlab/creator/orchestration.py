"""
Orchestration for the build creator. The only entry point the UI layer calls.

Pipeline:
  1. Validate the prompt.
  2. Analyse preferences (oracle call 1).
  3. Fetch the four reference datasets concurrently (all-or-nothing).
  4. Generate attribute caps (oracle call 2).
  5. Post-process: overall rating, badges, build name.

Fatal errors come back as {"error", "details"}; nothing is retried here.
"""
from __future__ import annotations

import logging
from functools import partial
from typing import Any

from buildlab.badges import resolve_badges
from buildlab.config import Settings, get_settings
from buildlab.creator.analyzer import analyze_preferences
from buildlab.creator.generator import generate_build
from buildlab.datasets import ReferenceFetcher, fetch_reference_data
from buildlab.errors import BuildCreatorError, InputError
from buildlab.llm import OpenAICompletionService, TextCompletionService
from buildlab.models import BuildResult, PreferenceRecord
from buildlab.naming import resolve_build_name
from buildlab.rating import calculate_overall_rating

logger = logging.getLogger(__name__)


def run_build_pipeline(
    prompt: str,
    service: TextCompletionService,
    fetcher: ReferenceFetcher,
) -> tuple[PreferenceRecord, BuildResult]:
    """Run the full pipeline and return typed records. Raises BuildCreatorError subclasses."""
    if not prompt or not prompt.strip():
        raise InputError("The prompt is empty")
    logger.info("Processing build request: %s", prompt.strip())

    prefs = analyze_preferences(prompt, service)
    reference = fetcher()
    caps = generate_build(prefs, service, reference)

    overall = calculate_overall_rating(caps.attributes)
    badges = resolve_badges(caps, reference.badge_requirements, reference.badge_tiers)
    name = resolve_build_name(caps, prefs, reference.build_names)
    logger.info("Build ready: %s (overall %d, %d badges)", name, overall, len(badges.badges))
    return prefs, BuildResult(caps=caps, overall=overall, badges=badges, build_name=name)


def create_build(
    prompt: str,
    *,
    service: TextCompletionService | None = None,
    fetcher: ReferenceFetcher | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Free-text prompt -> {"analysis": ..., "build": ...} or {"error": ..., "details": ...}.
    Defaults to the OpenAI oracle and the live reference datasets.
    """
    settings = settings or get_settings()
    try:
        if not prompt or not prompt.strip():
            raise InputError("The prompt is empty")
        if service is None:
            service = OpenAICompletionService(settings)
        if fetcher is None:
            fetcher = partial(fetch_reference_data, settings)
        prefs, result = run_build_pipeline(prompt, service, fetcher)
    except BuildCreatorError as e:
        logger.error("Build creation failed: %s", e)
        return e.to_dict()
    return {"analysis": prefs.to_dict(), "build": result.to_dict()}

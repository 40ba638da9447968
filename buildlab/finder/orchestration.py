"""
Orchestration for the build finder.

  1. Analyse preferences (same oracle call as the build creator).
  2. Load the list of existing builds.
  3. Ask the oracle for the index of the best match; reject anything out of range.
"""
from __future__ import annotations

import logging
from typing import Any

import httpx

from buildlab.config import Settings, get_settings
from buildlab.creator.analyzer import analyze_preferences
from buildlab.datasets import fetch_json
from buildlab.errors import BuildCreatorError, InputError, OracleResponseError, UpstreamDataError
from buildlab.finder.prompt import MATCH_TEMPERATURE, build_match_prompt
from buildlab.llm import OpenAICompletionService, TextCompletionService
from buildlab.models import PreferenceRecord

logger = logging.getLogger(__name__)


def fetch_builds(settings: Settings, client: httpx.Client | None = None) -> list[dict[str, Any]]:
    """GET the existing-build list. It must be a JSON array."""
    own_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.http_timeout, follow_redirects=True)
    try:
        builds = fetch_json(client, settings.builds_url)
    finally:
        if own_client:
            client.close()
    if not isinstance(builds, list):
        raise UpstreamDataError(f"{settings.builds_url}: expected a list of builds")
    logger.info("Loaded %d builds", len(builds))
    return builds


def _parse_index(data: dict[str, Any], count: int) -> int:
    raw = data.get("index")
    if isinstance(raw, bool):
        raw = None
    elif isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    try:
        index = int(str(raw).strip())
    except (TypeError, ValueError):
        raise OracleResponseError(f"Invalid build index returned: {raw!r}") from None
    if index < 0 or index >= count:
        raise OracleResponseError(f"Build index {index} out of range (0-{count - 1})")
    return index


def find_matching_build(
    prefs: PreferenceRecord,
    service: TextCompletionService,
    builds: list[dict[str, Any]],
) -> dict[str, Any]:
    """The existing build the oracle ranks highest for these preferences."""
    if not builds:
        raise UpstreamDataError("No builds available to match against")
    data = service.complete(
        build_match_prompt(prefs, builds),
        temperature=MATCH_TEMPERATURE,
        schema_name="build_match",
    )
    index = _parse_index(data, len(builds))
    logger.info("Selected build index %d of %d", index, len(builds))
    return builds[index]


def find_build(
    prompt: str,
    *,
    service: TextCompletionService | None = None,
    builds: list[dict[str, Any]] | None = None,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Free-text prompt -> {"analysis", "build"} or {"error", "details"}."""
    settings = settings or get_settings()
    try:
        if not prompt or not prompt.strip():
            raise InputError("The prompt is empty")
        if service is None:
            service = OpenAICompletionService(settings)
        if builds is None:
            builds = fetch_builds(settings)
        prefs = analyze_preferences(prompt, service)
        build = find_matching_build(prefs, service, builds)
    except BuildCreatorError as e:
        logger.error("Build search failed: %s", e)
        return e.to_dict()
    return {"analysis": prefs.to_dict(), "build": build}

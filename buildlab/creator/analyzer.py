"""
Preference analysis: one oracle call turning the user's free text into a PreferenceRecord.

Extraction is best effort; every field may come back empty and downstream code copes.
Oracle failures propagate (OracleError / OracleResponseError); no retries here.
"""
from __future__ import annotations

import logging

from pydantic import ValidationError

from buildlab.creator.prompt import ANALYSIS_TEMPERATURE, build_analysis_prompt
from buildlab.creator.schemas import AnalysisPayload
from buildlab.errors import InputError, OracleResponseError
from buildlab.llm import TextCompletionService
from buildlab.models import PreferenceRecord

logger = logging.getLogger(__name__)


def analyze_preferences(prompt: str, service: TextCompletionService) -> PreferenceRecord:
    """Extract position, playstyle, key attributes, physical preferences, badges and game mode."""
    text = (prompt or "").strip()
    if not text:
        raise InputError("The prompt is empty")
    data = service.complete(
        build_analysis_prompt(text),
        temperature=ANALYSIS_TEMPERATURE,
        schema_name="preference_analysis",
    )
    try:
        record = AnalysisPayload.model_validate(data).to_record()
    except ValidationError as e:
        raise OracleResponseError(f"preference_analysis: {e!s}") from e
    logger.info("Analysis: position=%s playStyle=%s", record.position, record.play_style)
    return record

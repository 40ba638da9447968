"""
Text-completion oracle used by the analyzer, the generator and the build finder.

This module is the only place that calls an external LLM. Callers depend on the
TextCompletionService protocol, so tests can pass a deterministic fake.
Responses are requested in JSON-object mode and parsed here; schema validation of
the parsed object is the caller's job.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from buildlab.config import Settings, get_settings
from buildlab.errors import OracleError, OracleResponseError

logger = logging.getLogger(__name__)


class TextCompletionService(Protocol):
    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        schema_name: str,
    ) -> dict[str, Any]:
        """Send role/content messages; return the single JSON object the model answered with."""
        ...


def parse_json_object(content: str | None) -> dict[str, Any]:
    """
    Parse model output into a dict. Tolerates a ```json fence around the object.
    Raises OracleResponseError for empty content, invalid JSON or a non-object.
    """
    s = (content or "").strip()
    if not s:
        raise OracleResponseError("Empty response content")
    if s.startswith("```"):
        chunks = s.split("```")
        if len(chunks) >= 3:
            s = chunks[1].strip()
            if s.lower().startswith("json"):
                s = s[4:].strip()
    try:
        data = json.loads(s)
    except json.JSONDecodeError as e:
        raise OracleResponseError(f"Invalid JSON: {e!s}") from e
    if not isinstance(data, dict):
        raise OracleResponseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class OpenAICompletionService:
    """OpenAI chat completions in JSON-object mode."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: Any | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if client is None:
            if not self.settings.openai_api_key:
                raise OracleError("OPENAI_API_KEY is not set")
            client = OpenAI(api_key=self.settings.openai_api_key, timeout=self.settings.openai_timeout)
        self._client = client

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        schema_name: str,
    ) -> dict[str, Any]:
        logger.info("Requesting %s from %s", schema_name, self.settings.openai_model)
        try:
            response = self._client.chat.completions.create(
                model=self.settings.openai_model,
                messages=messages,
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            raise OracleError(f"{schema_name}: {e!s}") from e

        if not response.choices:
            raise OracleError(f"{schema_name}: no choices returned")
        content = response.choices[0].message.content
        if not content:
            raise OracleError(f"{schema_name}: empty message content")
        return parse_json_object(content)

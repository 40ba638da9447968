"""
Shared fakes: a scripted completion service and attribute-cap builders.
No test touches the network or a real model.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

# Ensure project root on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from buildlab.models import AttributeCapSet
from buildlab.vocabulary import ATTRIBUTE_KEYS


class FakeCompletionService:
    """Returns a canned JSON object per schema name and records every call."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[dict[str, Any]] = []

    def complete(self, messages: list[dict[str, str]], *, temperature: float, schema_name: str) -> dict[str, Any]:
        self.calls.append({"messages": messages, "temperature": temperature, "schema_name": schema_name})
        response = self.responses[schema_name]
        if isinstance(response, Exception):
            raise response
        return response

    def calls_for(self, schema_name: str) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["schema_name"] == schema_name]


def make_attributes(value: int = 70, **overrides: int) -> dict[str, int]:
    attrs = {key: value for key in ATTRIBUTE_KEYS}
    attrs.update(overrides)
    return attrs


def make_caps(
    value: int = 70,
    position: str | None = "PG",
    height: int | None = 74,
    build_name_guess: str | None = None,
    **overrides: int,
) -> AttributeCapSet:
    return AttributeCapSet(
        attributes=make_attributes(value, **overrides),
        position=position,
        height=height,
        weight=190,
        wingspan=80,
        build_name_guess=build_name_guess,
    )


"""
Completion service: JSON parsing and the OpenAI adapter with a fake client.
"""
from __future__ import annotations

from types import SimpleNamespace

import pytest
from openai import OpenAIError

from buildlab.config import Settings
from buildlab.errors import OracleError, OracleResponseError
from buildlab.llm import OpenAICompletionService, parse_json_object


# ---------- parse_json_object ----------


class TestParseJsonObject:
    def test_plain_object(self):
        assert parse_json_object('{"position": "PG"}') == {"position": "PG"}

    def test_fenced_object(self):
        assert parse_json_object('```json\n{"index": 3}\n```') == {"index": 3}

    def test_bare_fence(self):
        assert parse_json_object('```\n{"a": 1}\n```') == {"a": 1}

    @pytest.mark.parametrize("content", [None, "", "   "])
    def test_empty(self, content):
        with pytest.raises(OracleResponseError):
            parse_json_object(content)

    def test_invalid_json(self):
        with pytest.raises(OracleResponseError):
            parse_json_object("{not json")

    def test_non_object(self):
        with pytest.raises(OracleResponseError):
            parse_json_object("[1, 2, 3]")


# ---------- OpenAICompletionService ----------


class _FakeCompletions:
    def __init__(self, content=None, error=None, choices=True):
        self.content = content
        self.error = error
        self.choices = choices
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _client(completions: _FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


SETTINGS = Settings(openai_api_key="sk-test", openai_model="test-model")
MESSAGES = [{"role": "user", "content": "hi"}]


def test_complete_sends_json_mode_request():
    completions = _FakeCompletions(content='{"position": "C"}')
    service = OpenAICompletionService(SETTINGS, client=_client(completions))

    assert service.complete(MESSAGES, temperature=0.3, schema_name="preference_analysis") == {"position": "C"}
    assert completions.kwargs["model"] == "test-model"
    assert completions.kwargs["messages"] == MESSAGES
    assert completions.kwargs["temperature"] == 0.3
    assert completions.kwargs["response_format"] == {"type": "json_object"}


def test_client_error_becomes_oracle_error():
    service = OpenAICompletionService(SETTINGS, client=_client(_FakeCompletions(error=OpenAIError("boom"))))
    with pytest.raises(OracleError) as exc:
        service.complete(MESSAGES, temperature=0.7, schema_name="build_generation")
    assert "boom" in exc.value.details


def test_no_choices():
    service = OpenAICompletionService(SETTINGS, client=_client(_FakeCompletions(choices=False)))
    with pytest.raises(OracleError):
        service.complete(MESSAGES, temperature=0.7, schema_name="build_generation")


def test_empty_content():
    service = OpenAICompletionService(SETTINGS, client=_client(_FakeCompletions(content="")))
    with pytest.raises(OracleError):
        service.complete(MESSAGES, temperature=0.7, schema_name="build_generation")


def test_unparseable_content():
    service = OpenAICompletionService(SETTINGS, client=_client(_FakeCompletions(content="Sure! Here is a build.")))
    with pytest.raises(OracleResponseError):
        service.complete(MESSAGES, temperature=0.7, schema_name="build_generation")


def test_missing_api_key():
    with pytest.raises(OracleError) as exc:
        OpenAICompletionService(Settings(openai_api_key=""))
    assert "OPENAI_API_KEY" in exc.value.details

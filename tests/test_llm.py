"""
AI review tests; the OpenRouter client is mocked.
"""

from unittest.mock import MagicMock

import pytest

from src import llm
from src.llm import _build_context, get_ai_review
from src.roster import Dashboard, build_dashboard


@pytest.fixture
def fake_client(monkeypatch):
    client = MagicMock()
    client.chat.completions.create.return_value.choices = [MagicMock(message=MagicMock(content="## Review"))]
    monkeypatch.setattr(llm, "OpenAI", MagicMock(return_value=client))
    return client


class TestGetAiReview:
    """Tests for the AI review call."""

    def test_no_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        assert get_ai_review(Dashboard(), []) == (None, "No API key provided")

    def test_returns_content(self, fake_client):
        content, error = get_ai_review(Dashboard(), [], api_key="test-key", model="test/model")

        assert (content, error) == ("## Review", None)
        kwargs = fake_client.chat.completions.create.call_args.kwargs
        assert kwargs['model'] == "test/model"
        assert kwargs['messages'][0]['role'] == "system"

    def test_key_from_environment(self, monkeypatch, fake_client):
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        content, _ = get_ai_review(Dashboard(), [])
        assert content == "## Review"

    @pytest.mark.parametrize("message,expected", [
        ("Error code: 401 - unauthorized", "Invalid API key"),
        ("Error code: 404 - no such model", "not found"),
        ("Request timeout", "timed out"),
        ("Connection refused", "Connection error"),
        ("boom", "Error: boom"),
    ])
    def test_error_messages(self, fake_client, message, expected):
        fake_client.chat.completions.create.side_effect = Exception(message)

        content, error = get_ai_review(Dashboard(), [], api_key="test-key")

        assert content is None
        assert expected in error


class TestBuildContext:
    """Tests for the prompt context."""

    def test_mentions_roles_and_findings(self, scenario_employees, scenario_roles):
        dashboard = build_dashboard(scenario_employees, scenario_roles)
        findings = [{'priority': 'High', 'title': 'Something to check'}]

        context = _build_context(dashboard, findings)

        assert "Аналитик" in context
        assert "Employees:** 3" in context
        assert "[High] Something to check" in context
        assert context.index("Кузнецов Олег") < context.index("Иванов Петр")

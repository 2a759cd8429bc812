"""Tests for bottleneckiq.insights.enrichment."""

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from bottleneckiq.config import Settings
from bottleneckiq.exceptions import EnrichmentError
from bottleneckiq.insights import enrichment
from bottleneckiq.insights.enrichment import LLMInsightEnricher, get_default_enricher
from bottleneckiq.models import InsightType


class TestLLMInsightEnricher:
    def test_returns_model_text(self, dispatch_analysis):
        model = MagicMock()
        model.invoke.return_value = AIMessage(content="  🔴 Dispatch is 9 min over; add loaders.  ")

        enricher = LLMInsightEnricher(model=model)
        result = enricher.enrich(dispatch_analysis, InsightType.CRITICAL)

        assert result == "🔴 Dispatch is 9 min over; add loaders."

    def test_prompt_describes_process(self, dispatch_analysis):
        model = MagicMock()
        model.invoke.return_value = AIMessage(content="ok")

        LLMInsightEnricher(model=model).enrich(dispatch_analysis, InsightType.CRITICAL)

        messages = model.invoke.call_args.args[0]
        assert len(messages) == 1
        assert isinstance(messages[0], HumanMessage)
        prompt = messages[0].content
        assert "**Process:** Dispatch" in prompt
        assert "**Risk Score:** 93/100" in prompt
        assert "**Severity:** critical" in prompt
        assert "21 minutes (expected: 12 minutes)" in prompt

    def test_empty_completion_raises(self, dispatch_analysis):
        model = MagicMock()
        model.invoke.return_value = AIMessage(content="")

        with pytest.raises(EnrichmentError) as exc_info:
            LLMInsightEnricher(model=model).enrich(dispatch_analysis, InsightType.CRITICAL)
        assert exc_info.value.process_name == "Dispatch"

    def test_transport_error_propagates(self, dispatch_analysis):
        model = MagicMock()
        model.invoke.side_effect = TimeoutError("read timed out")

        with pytest.raises(TimeoutError):
            LLMInsightEnricher(model=model).enrich(dispatch_analysis, InsightType.CRITICAL)

    def test_builds_model_from_settings(self):
        with patch.object(enrichment, "get_chat_model") as factory:
            LLMInsightEnricher(provider="ollama", timeout=3.0)
        factory.assert_called_once_with(provider="ollama", timeout=3.0)


class TestGetDefaultEnricher:
    def test_disabled(self, monkeypatch):
        monkeypatch.setattr(
            enrichment, "settings", Settings(_env_file=None, enrichment_enabled=False)
        )
        assert get_default_enricher() is None

    def test_provider_without_key(self, monkeypatch):
        monkeypatch.setattr(
            enrichment,
            "settings",
            Settings(_env_file=None, llm_provider="openai", openai_api_key=""),
        )
        assert get_default_enricher() is None

    def test_configured(self, monkeypatch):
        monkeypatch.setattr(enrichment, "settings", Settings(_env_file=None, llm_provider="ollama"))

        with patch.object(enrichment, "get_chat_model", return_value=MagicMock()):
            result = get_default_enricher()

        assert isinstance(result, LLMInsightEnricher)

"""LLM phrasing of insight messages.

The generator only depends on the InsightEnricher protocol, so tests and
offline runs can pass a stub (or nothing) instead of a live model.
"""

import logging
from typing import Protocol

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from bottleneckiq.config import settings
from bottleneckiq.exceptions import EnrichmentError
from bottleneckiq.insights.templates import INSIGHT_GLYPHS
from bottleneckiq.llm import extract_text_content, get_chat_model
from bottleneckiq.models import InsightType, RiskAnalysis
from bottleneckiq.prompts import get_insight_prompt

logger = logging.getLogger(__name__)


class InsightEnricher(Protocol):
    """Anything that can phrase an insight for a scored process."""

    def enrich(self, analysis: RiskAnalysis, insight_type: InsightType) -> str:
        """Return the message text. May raise; callers fall back."""
        ...


class LLMInsightEnricher:
    """Phrases insights with a LangChain chat model.

    One call per insight, no retries. Raises EnrichmentError on an empty
    completion; transport errors and timeouts propagate as raised by the
    client.
    """

    def __init__(
        self,
        model: BaseChatModel | None = None,
        provider: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.model = model or get_chat_model(provider=provider, timeout=timeout)

    def enrich(self, analysis: RiskAnalysis, insight_type: InsightType) -> str:
        prompt = get_insight_prompt(
            process_name=analysis.process_name,
            status=analysis.status.value,
            actual_duration=analysis.actual_duration,
            average_duration=analysis.average_duration,
            delay_percentage=analysis.delay_percentage,
            risk_score=analysis.risk_score,
            severity=insight_type.value,
            glyphs={t.value: g for t, g in INSIGHT_GLYPHS.items()},
        )

        logger.debug("Requesting AI insight for %s", analysis.process_name)
        response = self.model.invoke([HumanMessage(content=prompt)])
        message = extract_text_content(response)

        if not message:
            raise EnrichmentError(
                message=f"Empty completion for {analysis.process_name}",
                process_name=analysis.process_name,
            )

        logger.info("AI insight generated for %s", analysis.process_name)
        return message


def get_default_enricher() -> InsightEnricher | None:
    """Build the configured enricher, or None when enrichment is off.

    Returns None (rule-based messages only) if enrichment is disabled or
    the provider has no API key.
    """
    if not settings.enrichment_enabled:
        logger.debug("Enrichment disabled, using rule-based insights")
        return None

    if not settings.is_llm_configured():
        logger.info(
            "AI service not configured for %s, using rule-based insights",
            settings.llm_provider,
        )
        return None

    return LLMInsightEnricher()

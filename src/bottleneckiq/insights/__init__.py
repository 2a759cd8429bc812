"""BottleneckIQ insight messages (rule-based with optional LLM phrasing)."""

from bottleneckiq.insights.enrichment import (
    InsightEnricher,
    LLMInsightEnricher,
    get_default_enricher,
)
from bottleneckiq.insights.generator import (
    annotate_analyses,
    generate_insights,
    generate_message,
)
from bottleneckiq.insights.templates import (
    ALL_CLEAR_MESSAGE,
    INSIGHT_GLYPHS,
    NO_DATA_MESSAGE,
    render_fallback_message,
    select_insight_type,
)

__all__ = [
    "ALL_CLEAR_MESSAGE",
    "INSIGHT_GLYPHS",
    "NO_DATA_MESSAGE",
    "InsightEnricher",
    "LLMInsightEnricher",
    "annotate_analyses",
    "generate_insights",
    "generate_message",
    "get_default_enricher",
    "render_fallback_message",
    "select_insight_type",
]

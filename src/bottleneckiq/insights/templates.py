"""Rule-based insight messages.

These are the messages users see whenever the LLM is disabled, not
configured, below its risk threshold, or fails. Output is fully
determined by the analysis and the insight type.
"""

from bottleneckiq.analysis.scoring import round_half_up, rounded_delay_percentage
from bottleneckiq.models import InsightType, ProcessStatus, RiskAnalysis

INSIGHT_GLYPHS: dict[InsightType, str] = {
    InsightType.CRITICAL: "🔴",
    InsightType.URGENT: "⚠️",
    InsightType.WARNING: "📊",
    InsightType.ATTENTION: "💡",
    InsightType.INFO: "ℹ️",
}

NO_DATA_MESSAGE = "ℹ️ No process data available for the selected time range"
ALL_CLEAR_MESSAGE = "✅ All processes operating normally: no bottlenecks detected"

# Minimum risk score per tier; a matching status also promotes to the tier
_TIER_RULES: list[tuple[InsightType, ProcessStatus | None, int]] = [
    (InsightType.CRITICAL, ProcessStatus.CRITICAL, 80),
    (InsightType.URGENT, ProcessStatus.FAILED, 70),
    (InsightType.WARNING, ProcessStatus.DELAYED, 60),
    (InsightType.ATTENTION, None, 40),
]


def select_insight_type(risk_score: int, status: ProcessStatus) -> InsightType:
    """Pick the message tier from status and risk score."""
    for insight_type, promoting_status, min_score in _TIER_RULES:
        if status is promoting_status or risk_score >= min_score:
            return insight_type
    return InsightType.INFO


def render_fallback_message(analysis: RiskAnalysis, insight_type: InsightType) -> str:
    """Render the deterministic message for an analysis.

    Args:
        analysis: Scored process.
        insight_type: Tier selecting the template.

    Returns:
        Message prefixed with the tier's glyph.
    """
    glyph = INSIGHT_GLYPHS[insight_type]
    name = analysis.process_name
    delay_minutes = int(round_half_up(analysis.delay_time / 60))
    # Whole percent, shown with one decimal: 33.33 -> "33.0"
    rounded_pct = rounded_delay_percentage(analysis.actual_duration, analysis.average_duration)
    delay_pct = f"{abs(rounded_pct):.1f}"
    score = analysis.risk_score

    if insight_type is InsightType.CRITICAL:
        return (
            f"{glyph} CRITICAL: {name} severely delayed by {delay_minutes} minutes ({delay_pct}%). "
            "Immediate intervention required: deploy additional resources and investigate root cause."
        )
    if insight_type is InsightType.URGENT:
        return (
            f"{glyph} URGENT: {name} experiencing {delay_minutes} minute delay (risk score: {score}). "
            "Recommend immediate resource reallocation and process review."
        )
    if insight_type is InsightType.WARNING:
        return (
            f"{glyph} WARNING: {name} showing {delay_pct}% delay. "
            "Monitor closely and prepare contingency plans to prevent escalation."
        )
    if insight_type is InsightType.ATTENTION:
        return (
            f"{glyph} ATTENTION: {name} has early warning signs (risk: {score}). "
            "Continue monitoring and consider process optimization."
        )
    return (
        f"{glyph} {name} showing {delay_pct}% delay. "
        "Review for potential optimization opportunities."
    )

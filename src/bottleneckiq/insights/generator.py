"""Insight generation for scored processes.

Each message starts as the rule-based template. High-risk processes are
offered to the enricher once; any failure (error, empty completion,
timeout) keeps the rule-based text. Nothing here raises for an
enrichment problem.
"""

import logging
import time
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from bottleneckiq.analysis.scoring import is_bottleneck_combined, rounded_delay_percentage
from bottleneckiq.config import settings
from bottleneckiq.insights.enrichment import InsightEnricher
from bottleneckiq.insights.templates import (
    ALL_CLEAR_MESSAGE,
    NO_DATA_MESSAGE,
    render_fallback_message,
    select_insight_type,
)
from bottleneckiq.models import (
    Insight,
    InsightReport,
    InsightType,
    RiskAnalysis,
    RiskThresholds,
)

logger = logging.getLogger(__name__)


def generate_message(
    analysis: RiskAnalysis,
    insight_type: InsightType | None = None,
    enricher: InsightEnricher | None = None,
    min_score: int | None = None,
) -> tuple[str, bool]:
    """Generate the message for one analysis.

    Args:
        analysis: Scored process.
        insight_type: Tier; derived from score and status if None.
        enricher: Optional LLM enricher.
        min_score: Minimum risk score for enrichment (defaults to settings).

    Returns:
        Tuple of (message, ai_generated).
    """
    insight_type = insight_type or select_insight_type(analysis.risk_score, analysis.status)
    min_score = settings.enrichment_min_risk_score if min_score is None else min_score
    fallback = render_fallback_message(analysis, insight_type)

    if enricher is None or analysis.risk_score < min_score:
        return fallback, False

    try:
        message = enricher.enrich(analysis, insight_type).strip()
    except Exception as e:
        logger.warning(
            "AI generation failed for %s, using fallback: %s", analysis.process_name, e
        )
        return fallback, False

    if not message:
        logger.warning("AI returned empty message for %s, using fallback", analysis.process_name)
        return fallback, False

    return message, True


def generate_insights(
    analyses: Sequence[RiskAnalysis],
    threshold: int | None = None,
    enricher: InsightEnricher | None = None,
    thresholds: RiskThresholds | None = None,
    timeout: float | None = None,
    max_workers: int | None = None,
) -> InsightReport:
    """Build the insight report for a batch of analyses.

    A process qualifies when its score reaches ``threshold`` or its delay
    percentage reaches the bottleneck delay threshold. Enrichment calls
    run concurrently and all share one ``timeout``. Insights are sorted by
    risk score, highest first; ties keep input order.

    Args:
        analyses: Scored processes.
        threshold: Minimum risk score (defaults to settings.insight_threshold).
        enricher: Optional LLM enricher; None means rule-based only.
        thresholds: Threshold set for the delay alternative.
        timeout: Enrichment timeout for the whole batch, in seconds.
        max_workers: Thread pool size for enrichment.

    Returns:
        InsightReport with display messages and per-insight details.
    """
    threshold = settings.insight_threshold if threshold is None else threshold

    if not analyses:
        logger.info("No process data, returning empty insight report")
        return InsightReport(count=0, threshold=threshold, messages=[NO_DATA_MESSAGE])

    candidates = [
        a
        for a in analyses
        if is_bottleneck_combined(
            a.risk_score, a.delay_percentage, thresholds, score_threshold=threshold
        )
    ]
    types = [select_insight_type(a.risk_score, a.status) for a in candidates]

    logger.info(
        "Generating insights for %d of %d processes (threshold=%d, AI %s)",
        len(candidates),
        len(analyses),
        threshold,
        "enabled" if enricher else "disabled",
    )

    results = _generate_messages(candidates, types, enricher, timeout, max_workers)

    insights = [
        Insight(
            message=message,
            process_name=a.process_name,
            delay_percentage=rounded_delay_percentage(a.actual_duration, a.average_duration),
            risk_score=a.risk_score,
            type=insight_type,
            ai_generated=ai_generated,
        )
        for a, insight_type, (message, ai_generated) in zip(
            candidates, types, results, strict=True
        )
    ]
    insights.sort(key=lambda i: i.risk_score, reverse=True)

    messages = [i.message for i in insights] or [ALL_CLEAR_MESSAGE]

    ai_count = sum(1 for i in insights if i.ai_generated)
    logger.info(
        "Generated %d insights (%d AI-powered, %d rule-based)",
        len(insights),
        ai_count,
        len(insights) - ai_count,
    )

    return InsightReport(
        count=len(insights),
        threshold=threshold,
        messages=messages,
        details=insights,
    )


def annotate_analyses(
    analyses: Sequence[RiskAnalysis],
    enricher: InsightEnricher | None = None,
    timeout: float | None = None,
    max_workers: int | None = None,
) -> list[RiskAnalysis]:
    """Return copies of the analyses with ``message`` filled in, same order."""
    types = [select_insight_type(a.risk_score, a.status) for a in analyses]
    results = _generate_messages(analyses, types, enricher, timeout, max_workers)
    return [
        a.model_copy(update={"message": message})
        for a, (message, _) in zip(analyses, results, strict=True)
    ]


def _generate_messages(
    analyses: Sequence[RiskAnalysis],
    types: Sequence[InsightType],
    enricher: InsightEnricher | None,
    timeout: float | None,
    max_workers: int | None,
) -> list[tuple[str, bool]]:
    """Generate messages, fanning enrichment out over a thread pool."""
    min_score = settings.enrichment_min_risk_score
    eligible = [
        i for i, a in enumerate(analyses) if enricher is not None and a.risk_score >= min_score
    ]

    if not eligible:
        return [generate_message(a, t) for a, t in zip(analyses, types, strict=True)]

    timeout = timeout or settings.enrichment_timeout_seconds
    workers = min(max_workers or settings.enrichment_max_workers, len(eligible))
    results: list[tuple[str, bool]] = [
        (render_fallback_message(a, t), False) for a, t in zip(analyses, types, strict=True)
    ]

    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="insight-enrich")
    try:
        futures: dict[int, Future[tuple[str, bool]]] = {
            i: executor.submit(generate_message, analyses[i], types[i], enricher, min_score)
            for i in eligible
        }
        # One shared deadline: the batch waits at most ``timeout`` in total
        deadline = time.monotonic() + timeout
        for i, future in futures.items():
            try:
                results[i] = future.result(timeout=max(0.0, deadline - time.monotonic()))
            except FutureTimeoutError:
                logger.warning(
                    "AI generation timed out after %.0fs for %s, using fallback",
                    timeout,
                    analyses[i].process_name,
                )
    finally:
        # Don't block on calls that already timed out
        executor.shutdown(wait=False, cancel_futures=True)

    return results

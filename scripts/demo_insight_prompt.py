"""Standalone demo of insight generation.

Shows the rule-based message, the prompt the LLM would receive, and what
happens when the LLM fails. No API key required.

Usage:
    uv run python scripts/demo_insight_prompt.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bottleneckiq.analysis import analyze_observations, format_risk_report
from bottleneckiq.insights import INSIGHT_GLYPHS, generate_insights, select_insight_type
from bottleneckiq.models import ProcessObservation, RiskAnalysis
from bottleneckiq.prompts import get_insight_prompt

# ---------------------------------------------------------------------------
# Step 1: A snapshot of warehouse process timings (seconds)
# ---------------------------------------------------------------------------

observations = [
    ProcessObservation(name="Receiving", actual_duration=840, average_duration=900, status="completed"),
    ProcessObservation(name="Quality Check", actual_duration=1020, average_duration=780, status="delayed"),
    ProcessObservation(name="Material Picking", actual_duration=1500, average_duration=1200, status="in-progress"),
    ProcessObservation(name="Dispatch", actual_duration=1260, average_duration=720, status="critical"),
    ProcessObservation(name="Packaging", actual_duration=660, average_duration=600, status="failed"),
]

analyses = analyze_observations(observations)
print(format_risk_report(analyses))

# ---------------------------------------------------------------------------
# Step 2: Show the prompt sent for the worst process
# ---------------------------------------------------------------------------

worst = max(analyses, key=lambda a: a.risk_score)
insight_type = select_insight_type(worst.risk_score, worst.status)

print("=" * 70)
print(f"PROMPT FOR {worst.process_name} ({insight_type.value})")
print("=" * 70)
print(
    get_insight_prompt(
        process_name=worst.process_name,
        status=worst.status.value,
        actual_duration=worst.actual_duration,
        average_duration=worst.average_duration,
        delay_percentage=worst.delay_percentage,
        risk_score=worst.risk_score,
        severity=insight_type.value,
        glyphs={t.value: g for t, g in INSIGHT_GLYPHS.items()},
    )
)
print()

# ---------------------------------------------------------------------------
# Step 3: A failing LLM falls back to the rule-based messages
# ---------------------------------------------------------------------------


class BrokenEnricher:
    def enrich(self, analysis: RiskAnalysis, insight_type: object) -> str:
        raise TimeoutError("simulated 10s timeout")


print("=" * 70)
print("INSIGHTS WITH A FAILING LLM (identical to rule-based output)")
print("=" * 70)
report = generate_insights(analyses, threshold=20, enricher=BrokenEnricher())
for message in report.messages:
    print(message)
print(f"\n{report.count} insights, {report.ai_count} AI-generated")

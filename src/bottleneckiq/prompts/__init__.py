"""Jinja2 prompt template loader for BottleneckIQ.

Usage:
    from bottleneckiq.prompts import render_prompt

    prompt = render_prompt("insight", process_name="Dispatch", ...)

Available templates:
    - insight: Phrase one bottleneck alert (1-2 sentences)
"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

logger = logging.getLogger(__name__)

# Template directory is the same directory as this file
TEMPLATE_DIR = Path(__file__).parent

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
    undefined=StrictUndefined,
)


def render_prompt(template_name: str, **kwargs: Any) -> str:
    """Render a prompt template with the given variables.

    Args:
        template_name: Name of the template (without .j2 extension)
        **kwargs: Variables to pass to the template

    Returns:
        Rendered prompt string

    Raises:
        TemplateNotFound: If template doesn't exist
        jinja2.TemplateError: If template has syntax errors or a variable is missing
    """
    template_file = f"{template_name}.j2"

    try:
        template = _env.get_template(template_file)
        rendered: str = template.render(**kwargs)
        logger.debug("Rendered template: %s", template_name)
        return rendered.strip()
    except TemplateNotFound:
        logger.error("Template not found: %s", template_file)
        raise


def list_templates() -> list[str]:
    """List all available template names."""
    return [p.stem for p in TEMPLATE_DIR.glob("*.j2")]


def get_template_path(template_name: str) -> Path:
    """Get the file path for a template."""
    return TEMPLATE_DIR / f"{template_name}.j2"


def get_insight_prompt(
    process_name: str,
    status: str,
    actual_duration: float,
    average_duration: float,
    delay_percentage: float,
    risk_score: int,
    severity: str,
    glyphs: dict[str, str],
) -> str:
    """Get the prompt asking the LLM to phrase one bottleneck insight.

    Durations are in seconds and shown to the model as whole minutes.

    Args:
        process_name: Name of the process step.
        status: Process status value.
        actual_duration: Seconds actually taken.
        average_duration: Expected seconds.
        delay_percentage: Signed delay percentage.
        risk_score: Risk score (0-100).
        severity: Insight tier (critical, urgent, warning, attention, info).
        glyphs: Tier -> leading emoji the message should use.

    Returns:
        Rendered prompt string.
    """
    from bottleneckiq.analysis.scoring import round_half_up

    actual_minutes = int(round_half_up(actual_duration / 60))
    average_minutes = int(round_half_up(average_duration / 60))

    return render_prompt(
        "insight",
        process_name=process_name,
        status=status,
        actual_minutes=actual_minutes,
        average_minutes=average_minutes,
        delay_minutes=actual_minutes - average_minutes,
        delay_percentage=delay_percentage,
        risk_score=risk_score,
        severity=severity,
        glyphs=glyphs,
    )

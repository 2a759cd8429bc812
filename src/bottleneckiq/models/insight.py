"""Insight message models for BottleneckIQ."""

from enum import Enum

from pydantic import BaseModel, Field


class InsightType(str, Enum):
    """Tier that selects the message template and glyph."""

    CRITICAL = "critical"
    URGENT = "urgent"
    WARNING = "warning"
    ATTENTION = "attention"
    INFO = "info"


class Insight(BaseModel):
    """One human-readable alert for a scored process."""

    message: str = Field(..., min_length=1)
    process_name: str
    delay_percentage: int = Field(..., description="Delay percentage rounded to integer")
    risk_score: int = Field(..., ge=0, le=100)
    type: InsightType
    ai_generated: bool = Field(
        default=False, description="True if the LLM phrased this message"
    )


class InsightReport(BaseModel):
    """Batch of insights ready for the alerting layer."""

    count: int = Field(default=0, ge=0)
    threshold: int = Field(..., ge=0, le=100)
    messages: list[str] = Field(default_factory=list)
    details: list[Insight] = Field(default_factory=list)

    @property
    def ai_count(self) -> int:
        return sum(1 for i in self.details if i.ai_generated)

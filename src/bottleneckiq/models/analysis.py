"""Risk analysis result models for BottleneckIQ."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from bottleneckiq.models.observation import ProcessStatus


class RiskLevel(str, Enum):
    """Severity band derived from a risk score."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class RiskThresholds(BaseModel):
    """The single threshold set used for classification and bottleneck flags.

    Lower bounds are inclusive.
    """

    medium: int = Field(default=40, ge=0, le=100)
    high: int = Field(default=60, ge=0, le=100)
    critical: int = Field(default=80, ge=0, le=100)
    bottleneck_score: int = Field(
        default=60, ge=0, le=100, description="Score at which a process is a bottleneck"
    )
    bottleneck_delay_pct: float = Field(
        default=20.0,
        description="Delay percentage that qualifies a process in the combined predicate",
    )

    @model_validator(mode="after")
    def check_ordering(self) -> "RiskThresholds":
        if not self.medium < self.high < self.critical:
            raise ValueError(
                f"Thresholds must satisfy medium < high < critical "
                f"(got {self.medium}, {self.high}, {self.critical})"
            )
        return self


class RiskAnalysis(BaseModel):
    """Scored view of one process observation. Recomputed on every refresh."""

    process_name: str = Field(..., description="Name of the process step")
    process_id: str | None = Field(default=None)
    status: ProcessStatus = Field(..., description="Status carried from the observation")
    actual_duration: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Seconds actually taken"
    )
    average_duration: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Expected seconds"
    )
    delay_percentage: float = Field(
        ..., description="Signed overrun vs. expected, one decimal"
    )
    delay_time: float = Field(..., description="Actual minus expected, in seconds")
    risk_score: int = Field(..., ge=0, le=100)
    risk_level: RiskLevel
    is_potential_bottleneck: bool
    message: str | None = Field(default=None, description="Insight text, once generated")

    @property
    def delay_minutes(self) -> float:
        return self.delay_time / 60


class RiskDistribution(BaseModel):
    """Count of analyses per risk level."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class AggregateSummary(BaseModel):
    """Roll-up statistics across a batch of analyses."""

    total_processes: int = Field(default=0, ge=0)
    bottleneck_count: int = Field(default=0, ge=0)
    bottlenecks: list[str] = Field(default_factory=list)
    risk_distribution: RiskDistribution = Field(default_factory=RiskDistribution)
    average_risk_score: int = Field(default=0, ge=0, le=100)
    total_delay: float = Field(
        default=0.0, ge=0, description="Sum of positive delays, in seconds"
    )
    most_problematic: str = Field(default="None")


class ProcessRunStats(BaseModel):
    """Run statistics for all observations sharing a process name."""

    name: str
    total_runs: int = Field(..., ge=1)
    status_counts: dict[str, int] = Field(default_factory=dict)
    avg_duration: float = Field(..., ge=0, description="Mean actual duration, seconds")
    max_duration: float = Field(..., ge=0)
    min_duration: float = Field(..., ge=0)
    total_delay: float = Field(
        default=0.0, ge=0, description="Sum of positive delays, in seconds"
    )


class CostImpact(BaseModel):
    """Estimated operational cost of a bottleneck's delay."""

    process_name: str
    delay_minutes: float
    orders_affected: int = Field(..., ge=0)
    cost_per_day: float = Field(..., ge=0)
    cost_per_week: float = Field(..., ge=0)
    cost_per_month: float = Field(..., ge=0)
    assumptions: list[str] = Field(default_factory=list)


class CostImpactTotals(BaseModel):
    """Cost impact summed across bottlenecks."""

    items: list[CostImpact] = Field(default_factory=list)
    cost_per_day: float = 0.0
    cost_per_week: float = 0.0
    cost_per_month: float = 0.0
    orders_affected: int = 0

    @property
    def bottleneck_count(self) -> int:
        return len(self.items)


class Trend(str, Enum):
    """Direction of a period-over-period change; higher values are worse."""

    WORSENING = "Worsening"
    IMPROVING = "Improving"
    STABLE = "Stable"

    @classmethod
    def from_change(cls, change: float) -> "Trend":
        if change > 0:
            return cls.WORSENING
        if change < 0:
            return cls.IMPROVING
        return cls.STABLE


class PeriodMetrics(BaseModel):
    """Headline figures for one period's analyses."""

    process_count: int = Field(default=0, ge=0)
    bottleneck_count: int = Field(default=0, ge=0)
    average_delay_percentage: float = Field(
        default=0.0, description="Mean delay % over bottlenecks, one decimal"
    )
    average_risk_score: int = Field(default=0, ge=0, le=100)
    critical_count: int = Field(default=0, ge=0)
    high_count: int = Field(default=0, ge=0)


class PeriodComparison(BaseModel):
    """Current period measured against an earlier one (current minus previous)."""

    current: PeriodMetrics
    previous: PeriodMetrics
    bottleneck_change: int
    average_delay_change: float
    average_risk_change: int
    critical_change: int

    @property
    def trends(self) -> dict[str, Trend]:
        return {
            "bottlenecks": Trend.from_change(self.bottleneck_change),
            "average_delay": Trend.from_change(self.average_delay_change),
            "average_risk": Trend.from_change(self.average_risk_change),
            "critical": Trend.from_change(self.critical_change),
        }


class ImprovementScenario(BaseModel):
    """A candidate intervention and its expected effect on process durations."""

    name: str = Field(..., min_length=1)
    improvement_pct: float = Field(
        ..., ge=0, le=100, description="Expected cut in actual duration, percent"
    )
    cost: float = Field(..., ge=0, description="One-off implementation cost")
    timeframe_weeks: int = Field(..., ge=0, description="Weeks until fully in effect")


class ScenarioProjection(BaseModel):
    """Before/after view of a set of improvement scenarios."""

    scenarios: list[str] = Field(default_factory=list)
    combined_improvement_pct: float = 0.0
    total_cost: float = 0.0
    timeframe_weeks: int | None = Field(
        default=None, description="Longest timeframe among the scenarios; None if none chosen"
    )

    current_average_delay: int = Field(
        default=0, description="Mean bottleneck delay %, whole number"
    )
    projected_average_delay: int = 0
    delay_reduction: int = 0
    monthly_savings: float = 0.0
    annual_roi: int = Field(default=0, description="Percent; 0 when nothing is spent")

    current_average_risk: int = 0
    projected_average_risk: int = 0
    current_bottleneck_count: int = 0
    projected_bottleneck_count: int = 0
    current_cost_per_day: float = 0.0
    projected_cost_per_day: float = 0.0

    @property
    def has_bottlenecks(self) -> bool:
        return self.current_bottleneck_count > 0

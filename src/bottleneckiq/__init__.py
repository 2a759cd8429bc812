"""BottleneckIQ - risk scoring and bottleneck insights for warehouse processes.

Import from submodules directly:
    from bottleneckiq.analysis import analyze_observations, summarize
    from bottleneckiq.insights import generate_insights
    from bottleneckiq.models import ProcessObservation, RiskAnalysis
"""

__version__ = "0.1.0"

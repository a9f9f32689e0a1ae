"""Health-analytics and goal-tracking engine.

Pure computation over values handed in by storage collaborators.
"""

from fittrack.engine.aggregation import AggregationEngine, DailyValue
from fittrack.engine.alerts import AlertRuleEngine
from fittrack.engine.bmi import (
    classify,
    compute_bmi,
    ideal_weight_range,
    target_weight_for,
)
from fittrack.engine.goals import create_goal, progress_percentage, update_progress
from fittrack.engine.metric_types import BMICategory
from fittrack.engine.trends import TrendAnalyzer, trend_direction

__all__ = [
    "AggregationEngine",
    "AlertRuleEngine",
    "BMICategory",
    "DailyValue",
    "TrendAnalyzer",
    "classify",
    "compute_bmi",
    "create_goal",
    "ideal_weight_range",
    "progress_percentage",
    "target_weight_for",
    "trend_direction",
    "update_progress",
]

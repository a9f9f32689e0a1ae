"""Closed vocabularies used across the engine.

Every "type" that travels through the system (goal kinds, workout kinds,
alert kinds, metrics) is one of these enums. Strings from the outside world
are parsed into them at the boundary, so the engine never branches on free
text.
"""

from enum import Enum

UNDERWEIGHT_LIMIT = 18.5
OVERWEIGHT_LIMIT = 25.0
OBESE_LIMIT = 30.0

# Upper bound used for the ideal weight range (BMI 24.9)
NORMAL_UPPER_BMI = 24.9


class BMICategory(str, Enum):
    """WHO BMI bands. Lower bounds are inclusive."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"

    @classmethod
    def from_bmi(cls, bmi: float) -> "BMICategory":
        if bmi < UNDERWEIGHT_LIMIT:
            return cls.UNDERWEIGHT
        if bmi < OVERWEIGHT_LIMIT:
            return cls.NORMAL
        if bmi < OBESE_LIMIT:
            return cls.OVERWEIGHT
        return cls.OBESE

    @property
    def label(self) -> str:
        return _BMI_LABELS[self]

    @property
    def range_text(self) -> str:
        return _BMI_RANGES[self]

    @property
    def advice(self) -> str:
        return _BMI_ADVICE[self]

    def needs_alert(self) -> bool:
        return self is not BMICategory.NORMAL


_BMI_LABELS = {
    BMICategory.UNDERWEIGHT: "Underweight",
    BMICategory.NORMAL: "Normal",
    BMICategory.OVERWEIGHT: "Overweight",
    BMICategory.OBESE: "Obese",
}

_BMI_RANGES = {
    BMICategory.UNDERWEIGHT: "BMI < 18.5",
    BMICategory.NORMAL: "BMI 18.5 - 24.9",
    BMICategory.OVERWEIGHT: "BMI 25 - 29.9",
    BMICategory.OBESE: "BMI >= 30",
}

_BMI_ADVICE = {
    BMICategory.UNDERWEIGHT: (
        "Consider increasing calorie intake with nutrient-rich foods. "
        "Consult a healthcare provider for personalized advice."
    ),
    BMICategory.NORMAL: (
        "Maintain your healthy lifestyle with balanced diet and regular exercise."
    ),
    BMICategory.OVERWEIGHT: (
        "Consider increasing physical activity and monitoring calorie intake. "
        "Small lifestyle changes can make a big difference."
    ),
    BMICategory.OBESE: (
        "It's recommended to consult a healthcare provider for a personalized "
        "weight management plan. Focus on gradual, sustainable changes."
    ),
}


class GoalType(str, Enum):
    STEPS = "steps"
    CALORIES_BURN = "calories_burn"
    CALORIES_INTAKE = "calories_intake"
    WORKOUT_DURATION = "workout_duration"
    WEIGHT = "weight"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class GoalStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class Intensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WorkoutType(str, Enum):
    RUNNING = "running"
    WALKING = "walking"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    WEIGHT_TRAINING = "weight_training"
    YOGA = "yoga"
    HIIT = "hiit"
    OTHER = "other"

    @property
    def label(self) -> str:
        if self is WorkoutType.HIIT:
            return "HIIT"
        return self.value.replace("_", " ").title()


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertType(str, Enum):
    BMI_UNDERWEIGHT = "BMI_UNDERWEIGHT"
    BMI_OVERWEIGHT = "BMI_OVERWEIGHT"
    BMI_OBESE = "BMI_OBESE"
    GOAL_COMPLETED = "GOAL_COMPLETED"
    TRAINER_ASSIGNED = "TRAINER_ASSIGNED"
    NEW_PLAN = "NEW_PLAN"
    NEW_GOAL = "NEW_GOAL"
    NEW_SUGGESTION = "NEW_SUGGESTION"

    @classmethod
    def for_bmi(cls, category: BMICategory) -> "AlertType":
        return cls(f"BMI_{category.name}")


class ActivityMetric(str, Enum):
    """Per-day quantities the aggregation engine can total or chart."""

    STEPS = "steps"
    CALORIES_CONSUMED = "calories_consumed"
    CALORIES_BURNED = "calories_burned"
    WORKOUT_DURATION = "workout_duration"
    WORKOUT_CALORIES = "workout_calories"
    WORKOUT_COUNT = "workout_count"


class PlanType(str, Enum):
    WORKOUT = "workout"
    DIET = "diet"
    GENERAL = "general"


class Role(str, Enum):
    INDIVIDUAL = "individual"
    TRAINER = "trainer"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


# Which activity metric feeds progress for each goal type. Weight goals have
# no activity metric and only change through manual progress updates.
GOAL_METRICS = {
    GoalType.STEPS: ActivityMetric.STEPS,
    GoalType.CALORIES_BURN: ActivityMetric.CALORIES_BURNED,
    GoalType.CALORIES_INTAKE: ActivityMetric.CALORIES_CONSUMED,
    GoalType.WORKOUT_DURATION: ActivityMetric.WORKOUT_DURATION,
}

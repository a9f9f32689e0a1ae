"""BMI computation, classification and weight targets.

All functions are pure. Values are never rounded here; callers format for
display.
"""

from typing import NamedTuple

from fittrack.core.exceptions import InvalidMeasurement
from fittrack.engine.metric_types import NORMAL_UPPER_BMI, UNDERWEIGHT_LIMIT, BMICategory

# Target BMI used for the per-category target weight recommendation
CATEGORY_TARGET_BMI = {
    BMICategory.UNDERWEIGHT: 20.0,
    BMICategory.OVERWEIGHT: 23.0,
    BMICategory.OBESE: 24.0,
}

CATEGORY_RECOMMENDATIONS = {
    BMICategory.UNDERWEIGHT: (
        "Increase daily calorie intake by 300-500 calories",
        "Focus on strength training to build muscle mass",
        "Eat protein-rich foods with every meal",
        "Target weight gain: 0.5 kg per week",
    ),
    BMICategory.NORMAL: (
        "Maintain current healthy weight",
        "Exercise 150+ minutes per week",
        "Walk 10,000 steps daily",
        "Maintain balanced diet of 2000-2500 calories",
        "Get regular health check-ups",
    ),
    BMICategory.OVERWEIGHT: (
        "Reduce daily calorie intake by 300-500 calories",
        "Exercise 200+ minutes per week",
        "Walk 12,000+ steps daily",
        "Target weight loss: 0.5 kg per week",
    ),
    BMICategory.OBESE: (
        "Consult a healthcare provider for a comprehensive plan",
        "Reduce daily calorie intake by 500-750 calories",
        "Start with low-impact exercises (walking, swimming)",
        "Target sustainable weight loss: 0.5-1 kg per week",
    ),
}


class WeightRange(NamedTuple):
    min_kg: float
    max_kg: float


def _height_m_squared(height_cm: float) -> float:
    height_m = height_cm / 100.0
    return height_m * height_m


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Return ``weight_kg / (height_cm / 100) ** 2``.

    Raises:
        InvalidMeasurement: If either argument is not positive.
    """
    if weight_kg <= 0 or height_cm <= 0:
        raise InvalidMeasurement(weight_kg, height_cm)
    return weight_kg / _height_m_squared(height_cm)


def classify(bmi: float) -> BMICategory:
    """Boundary values belong to the higher band (18.5 is Normal, 25.0 Overweight)."""
    return BMICategory.from_bmi(bmi)


def ideal_weight_range(height_cm: float) -> WeightRange:
    """Weight range that keeps BMI within 18.5 to 24.9 for this height."""
    if height_cm <= 0:
        raise InvalidMeasurement(weight_kg=0, height_cm=height_cm)
    squared = _height_m_squared(height_cm)
    return WeightRange(UNDERWEIGHT_LIMIT * squared, NORMAL_UPPER_BMI * squared)


def target_weight_for(height_cm: float, target_bmi: float) -> float:
    if height_cm <= 0:
        raise InvalidMeasurement(weight_kg=0, height_cm=height_cm)
    return target_bmi * _height_m_squared(height_cm)


def health_assessment(bmi: float) -> dict:
    """Structured assessment for display layers (dashboard, assistant)."""
    category = classify(bmi)
    return {
        "bmi": round(bmi, 1),
        "category": category.value,
        "label": category.label,
        "range": category.range_text,
        "advice": category.advice,
        "needs_attention": category.needs_alert(),
    }


def personalized_targets(category: BMICategory, height_cm: float) -> dict:
    """Recommendations for a category plus a target weight where one applies."""
    target_bmi = CATEGORY_TARGET_BMI.get(category)
    target_weight = target_weight_for(height_cm, target_bmi) if target_bmi else None
    return {
        "category": category.value,
        "recommendations": list(CATEGORY_RECOMMENDATIONS[category]),
        "target_bmi": target_bmi,
        "target_weight_kg": round(target_weight, 1) if target_weight is not None else None,
    }

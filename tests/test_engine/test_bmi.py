"""Tests for BMI computation and classification."""

from dataclasses import replace
from datetime import date

import pytest

from fittrack.core.exceptions import InvalidMeasurement
from fittrack.engine.bmi import (
    classify,
    compute_bmi,
    health_assessment,
    ideal_weight_range,
    personalized_targets,
    target_weight_for,
)
from fittrack.engine.entities import HealthMeasurement
from fittrack.engine.metric_types import BMICategory


class TestComputeBmi:
    """Tests for compute_bmi."""

    def test_normal_weight(self):
        """70 kg at 175 cm is about 22.86."""
        bmi = compute_bmi(70, 175)
        assert bmi == pytest.approx(22.857, abs=0.001)
        assert classify(bmi) is BMICategory.NORMAL

    def test_obese_weight(self):
        bmi = compute_bmi(95, 175)
        assert bmi == pytest.approx(31.02, abs=0.01)
        assert classify(bmi) is BMICategory.OBESE

    @pytest.mark.parametrize(
        "weight,height",
        [(0, 175), (-70, 175), (70, 0), (70, -175)],
    )
    def test_rejects_non_positive_values(self, weight, height):
        with pytest.raises(InvalidMeasurement) as exc_info:
            compute_bmi(weight, height)
        assert exc_info.value.status_code == 422


class TestClassify:
    """Band boundaries belong to the higher band."""

    @pytest.mark.parametrize(
        "bmi,expected",
        [
            (18.4, BMICategory.UNDERWEIGHT),
            (18.5, BMICategory.NORMAL),
            (24.9, BMICategory.NORMAL),
            (25.0, BMICategory.OVERWEIGHT),
            (29.9, BMICategory.OVERWEIGHT),
            (30.0, BMICategory.OBESE),
        ],
    )
    def test_boundaries(self, bmi, expected):
        assert classify(bmi) is expected

    def test_only_normal_needs_no_alert(self):
        assert not BMICategory.NORMAL.needs_alert()
        assert all(
            category.needs_alert()
            for category in BMICategory
            if category is not BMICategory.NORMAL
        )


class TestWeightTargets:
    """Tests for ideal weight range and category targets."""

    def test_ideal_weight_range(self):
        low, high = ideal_weight_range(175)
        assert low == pytest.approx(56.66, abs=0.01)
        assert high == pytest.approx(76.26, abs=0.01)

    def test_ideal_weight_range_rejects_zero_height(self):
        with pytest.raises(InvalidMeasurement):
            ideal_weight_range(0)

    def test_target_weight_for(self):
        assert target_weight_for(175, 24.0) == pytest.approx(73.5)

    def test_personalized_targets_obese(self):
        targets = personalized_targets(BMICategory.OBESE, 175)
        assert targets["target_bmi"] == 24.0
        assert targets["target_weight_kg"] == 73.5
        assert targets["recommendations"]

    def test_personalized_targets_normal_has_no_target_weight(self):
        targets = personalized_targets(BMICategory.NORMAL, 175)
        assert targets["target_weight_kg"] is None
        assert "Maintain current healthy weight" in targets["recommendations"]

    def test_health_assessment(self):
        assessment = health_assessment(compute_bmi(95, 175))
        assert assessment["bmi"] == 31.0
        assert assessment["category"] == "obese"
        assert assessment["label"] == "Obese"
        assert assessment["needs_attention"] is True


class TestHealthMeasurement:
    """Derived fields follow the weight/height pair."""

    def test_derived_fields(self):
        measurement = HealthMeasurement(1, 70, 175, date(2026, 3, 1))
        assert measurement.bmi == pytest.approx(22.857, abs=0.001)
        assert measurement.category is BMICategory.NORMAL

    def test_replace_recomputes(self):
        measurement = HealthMeasurement(1, 70, 175, date(2026, 3, 1))
        heavier = replace(measurement, weight_kg=95)
        assert heavier.category is BMICategory.OBESE
        assert measurement.category is BMICategory.NORMAL

    def test_invalid_values_rejected_on_construction(self):
        with pytest.raises(InvalidMeasurement):
            HealthMeasurement(1, 70, 0, date(2026, 3, 1))

    def test_replace_revalidates(self):
        measurement = HealthMeasurement(1, 70, 175, date(2026, 3, 1))
        with pytest.raises(InvalidMeasurement):
            replace(measurement, weight_kg=-1)

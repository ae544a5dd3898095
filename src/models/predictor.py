"""
Height Predictor:
- Runs the three prediction strategies in a fixed order
- The first (Khamis-Roche) supplies the primary prediction and confidence
- Attaches current percentile, BMI analysis and growth stage
- Builds growth-chart series from a result
"""
from typing import List

import numpy as np

from config.settings import ADULT_AGE_YEARS
from src.models.age import age_in_months, age_in_years
from src.models.algorithms import ALGORITHMS
from src.models.data_structures import (
    ChartPoint, MeasurementInput, PredictionResult
)
from src.models.growth_standards import GrowthReference, default_reference
from src.models.health import calculate_bmi, determine_growth_stage


class HeightPredictor:
    """Aggregates all prediction strategies into one ``PredictionResult``."""

    def __init__(self, reference: GrowthReference = None):
        self.reference = reference or default_reference
        self.algorithms = ALGORITHMS

    def predict(self, data: MeasurementInput, now=None) -> PredictionResult:
        months = age_in_months(data.birth_date, now)

        results = tuple(
            algorithm(data, now=now, reference=self.reference)
            for algorithm in self.algorithms
        )
        heights = [r.predicted_height for r in results]

        return PredictionResult(
            primary_prediction=results[0].predicted_height,
            prediction_range=(min(heights), max(heights)),
            current_percentile=self.reference.height_percentile(
                data.current_height, months, data.gender
            ),
            confidence=results[0].confidence,
            algorithms=results,
            bmi_analysis=calculate_bmi(data.current_height, data.current_weight),
            growth_stage=determine_growth_stage(months),
        )

    def chart_data(self, data: MeasurementInput, result: PredictionResult,
                   now=None) -> List[ChartPoint]:
        """Reference lines around the child's age plus a straight-line
        trajectory from current height to the primary prediction at 18."""
        current_age = age_in_years(data.birth_date, now)
        first_age = max(1, current_age - 2)

        trajectory = {}
        if current_age < ADULT_AGE_YEARS:
            ages = np.arange(current_age + 1, ADULT_AGE_YEARS + 1)
            ratios = (ages - current_age) / (ADULT_AGE_YEARS - current_age)
            heights = data.current_height + (
                result.primary_prediction - data.current_height
            ) * ratios
            trajectory = {int(a): float(h) for a, h in zip(ages, heights)}
            trajectory[current_age] = data.current_height

        points = []
        for age in sorted(self.reference.chart_reference):
            if age < first_age or age > ADULT_AGE_YEARS:
                continue
            p10, p50, p90 = self.reference.reference_row(age, data.gender)
            points.append(ChartPoint(
                age=age, p10=p10, p50=p50, p90=p90,
                current_height=data.current_height if age == current_age else None,
                predicted_trajectory=trajectory.get(age),
                predicted_height=(result.primary_prediction
                                  if age == ADULT_AGE_YEARS else None),
            ))
        return points


_default_predictor = HeightPredictor()


def calculate_height_prediction(data: MeasurementInput, now=None) -> PredictionResult:
    return _default_predictor.predict(data, now=now)

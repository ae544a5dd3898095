"""
Data structures for the Child Height Prediction system.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Tuple, Union


@dataclass(frozen=True)
class MeasurementInput:
    """Prediction input. Heights and weight are already metric (cm, kg)."""
    gender: str              # 'male' or 'female'
    birth_date: Union[date, datetime]
    current_height: float
    current_weight: float
    father_height: float
    mother_height: float
    unit: str = 'metric'     # display preference only


@dataclass(frozen=True)
class PercentileSet:
    p3: float
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    p97: float

    def value(self, percentile: int) -> float:
        return getattr(self, f'p{percentile}')


@dataclass(frozen=True)
class GrowthStandard:
    age_months: int
    male: PercentileSet
    female: PercentileSet

    def for_gender(self, gender: str) -> PercentileSet:
        if gender not in ('male', 'female'):
            raise ValueError(f"Unknown gender '{gender}'")
        return getattr(self, gender)


@dataclass(frozen=True)
class AlgorithmResult:
    name: str                # 'khamis-roche', 'mid-parental', 'percentile-tracking'
    predicted_height: float
    confidence: int
    description: str

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'predicted_height': self.predicted_height,
            'confidence': self.confidence,
            'description': self.description,
        }


@dataclass(frozen=True)
class BMIAnalysis:
    bmi: float
    category: str            # 'underweight', 'normal', 'overweight', 'obese'
    percentile: int
    recommendation: str

    def to_dict(self) -> dict:
        return {
            'bmi': self.bmi,
            'category': self.category,
            'percentile': self.percentile,
            'recommendation': self.recommendation,
        }


@dataclass(frozen=True)
class GrowthStage:
    stage: str               # 'infant' ... 'adult'
    description: str
    expected_growth_rate: float  # cm per year
    key_factors: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'stage': self.stage,
            'description': self.description,
            'expected_growth_rate': self.expected_growth_rate,
            'key_factors': list(self.key_factors),
        }


@dataclass(frozen=True)
class PredictionResult:
    primary_prediction: float
    prediction_range: Tuple[float, float]
    current_percentile: int
    confidence: int
    algorithms: Tuple[AlgorithmResult, ...]
    bmi_analysis: BMIAnalysis
    growth_stage: GrowthStage

    def to_dict(self) -> dict:
        return {
            'primary_prediction': self.primary_prediction,
            'prediction_range': list(self.prediction_range),
            'current_percentile': self.current_percentile,
            'confidence': self.confidence,
            'algorithms': [a.to_dict() for a in self.algorithms],
            'bmi_analysis': self.bmi_analysis.to_dict(),
            'growth_stage': self.growth_stage.to_dict(),
        }


@dataclass(frozen=True)
class ChartPoint:
    age: int
    p10: float
    p50: float
    p90: float
    current_height: float = None
    predicted_trajectory: float = None
    predicted_height: float = None

    def to_dict(self) -> dict:
        point = {'age': self.age, 'p10': self.p10, 'p50': self.p50, 'p90': self.p90}
        for key in ('current_height', 'predicted_trajectory', 'predicted_height'):
            val = getattr(self, key)
            if val is not None:
                point[key] = round(val, 2)
        return point


@dataclass(frozen=True)
class LifestyleRecommendation:
    nutrition: List[str]
    exercise: List[str]
    sleep_hours: str
    sleep: List[str]

    def to_dict(self) -> dict:
        return {
            'nutrition': list(self.nutrition),
            'exercise': list(self.exercise),
            'sleep_hours': self.sleep_hours,
            'sleep': list(self.sleep),
        }

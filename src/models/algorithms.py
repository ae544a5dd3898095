"""
Adult-height prediction strategies.

Each strategy takes a metric ``MeasurementInput`` and returns an
``AlgorithmResult``. None of them validates input ranges.
"""
from config.settings import MID_PARENTAL_OFFSET_CM
from src.models.age import age_in_months, age_in_years
from src.models.data_structures import AlgorithmResult, MeasurementInput
from src.models.growth_standards import GrowthReference, default_reference
from src.models.units import round1

KHAMIS_ROCHE = 'khamis-roche'
MID_PARENTAL = 'mid-parental'
PERCENTILE_TRACKING = 'percentile-tracking'

DESCRIPTIONS = {
    KHAMIS_ROCHE: ('Comprehensive prediction model based on parental height, '
                   'current height and age, suitable for children aged 2-18.'),
    MID_PARENTAL: ('Simplified prediction method based on parental height, '
                   'with genetic factors being dominant.'),
    PERCENTILE_TRACKING: ('Prediction method assuming children maintain their '
                          'current height percentile until adulthood.'),
}


def mid_parental_height(gender: str, father_height: float,
                        mother_height: float) -> float:
    """Gender-adjusted average of both parents' heights."""
    if gender == 'male':
        return (father_height + mother_height + MID_PARENTAL_OFFSET_CM) / 2
    if gender == 'female':
        return (father_height + mother_height - MID_PARENTAL_OFFSET_CM) / 2
    raise ValueError(f"Unknown gender '{gender}'")


def _age_factor(age_years: int) -> float:
    if age_years < 4:
        return 0.4
    if age_years < 8:
        return 0.6
    if age_years < 12:
        return 0.7
    if age_years < 16:
        return 0.8
    return 0.9


def khamis_roche(data: MeasurementInput, now=None,
                 reference: GrowthReference = None) -> AlgorithmResult:
    """Modified Khamis-Roche regression: parents, current height and age."""
    reference = reference or default_reference
    age_years = age_in_years(data.birth_date, now)
    mph = mid_parental_height(data.gender, data.father_height, data.mother_height)

    months = age_in_months(data.birth_date, now)
    percentile = reference.height_percentile(data.current_height, months, data.gender)
    adjustment = (percentile - 50) * 0.1

    prediction = mph * 0.6 + data.current_height * _age_factor(age_years) + adjustment

    # Widest band first, the narrower band overrides
    confidence = 85
    if 2 <= age_years <= 16:
        confidence = 90
    if 4 <= age_years <= 14:
        confidence = 95

    return AlgorithmResult(
        name=KHAMIS_ROCHE,
        predicted_height=round1(prediction),
        confidence=confidence,
        description=DESCRIPTIONS[KHAMIS_ROCHE],
    )


def mid_parental(data: MeasurementInput, now=None,
                 reference: GrowthReference = None) -> AlgorithmResult:
    mph = mid_parental_height(data.gender, data.father_height, data.mother_height)
    return AlgorithmResult(
        name=MID_PARENTAL,
        predicted_height=round1(mph),
        confidence=75,
        description=DESCRIPTIONS[MID_PARENTAL],
    )


def percentile_tracking(data: MeasurementInput, now=None,
                        reference: GrowthReference = None) -> AlgorithmResult:
    """Carry the current percentile bucket through to the adult row."""
    reference = reference or default_reference
    months = age_in_months(data.birth_date, now)
    percentile = reference.height_percentile(data.current_height, months, data.gender)
    adult = reference.adult_standard().for_gender(data.gender)

    if percentile <= 10:
        prediction = adult.p10
    elif percentile <= 25:
        prediction = adult.p25
    elif percentile <= 50:
        prediction = adult.p50
    elif percentile <= 75:
        prediction = adult.p75
    elif percentile <= 90:
        prediction = adult.p90
    else:
        prediction = adult.p97

    return AlgorithmResult(
        name=PERCENTILE_TRACKING,
        predicted_height=round1(prediction),
        confidence=80,
        description=DESCRIPTIONS[PERCENTILE_TRACKING],
    )


# The first entry supplies the primary prediction and overall confidence.
ALGORITHMS = (khamis_roche, mid_parental, percentile_tracking)
ALGORITHM_IDS = (KHAMIS_ROCHE, MID_PARENTAL, PERCENTILE_TRACKING)

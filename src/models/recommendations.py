"""
Lifestyle recommendations shown alongside a prediction.
"""
from src.models.age import age_in_years
from src.models.data_structures import LifestyleRecommendation, MeasurementInput

NUTRITION_TIPS = (
    'Ensure adequate protein intake to promote growth and development',
    'Supplement calcium and vitamin D to strengthen bone health',
    'Eat more fresh vegetables and fruits for vitamins and minerals',
    'Control sugar and processed food intake',
)

EXERCISE_TIPS = (
    'At least 1 hour of moderate-intensity exercise daily',
    'Do more stretching and jumping exercises like basketball and swimming',
    'Avoid excessive weight training',
    'Keep exercise fun and varied',
)

SLEEP_TIPS = (
    'Maintain regular sleep schedule',
    'Create a good sleep environment',
    'Avoid electronic devices before bedtime',
)


def sleep_hours(age_years: int) -> str:
    if age_years <= 6:
        return '10-11 hours'
    if age_years <= 12:
        return '9-10 hours'
    return '8-9 hours'


def lifestyle_recommendations(data: MeasurementInput,
                              now=None) -> LifestyleRecommendation:
    hours = sleep_hours(age_in_years(data.birth_date, now))
    return LifestyleRecommendation(
        nutrition=list(NUTRITION_TIPS),
        exercise=list(EXERCISE_TIPS),
        sleep_hours=hours,
        sleep=[f'{hours} of quality sleep', *SLEEP_TIPS],
    )

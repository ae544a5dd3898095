"""
BMI and growth-stage classification.

Both classifiers use fixed universal thresholds; BMI is not adjusted for age
or gender.
"""
from config.settings import BMI_PERCENTILE_PLACEHOLDER
from src.models.data_structures import BMIAnalysis, GrowthStage
from src.models.units import round1

BMI_RECOMMENDATIONS = {
    'underweight': ('Underweight, recommend increasing nutritional intake '
                    'and consulting a pediatrician.'),
    'normal': 'Normal weight, maintain balanced diet and moderate exercise.',
    'overweight': ('Overweight, recommend controlling diet and increasing '
                   'physical exercise.'),
    'obese': ('Obese, recommend consulting a doctor to develop a healthy '
              'weight loss plan.'),
}

# (upper bound in years, exclusive) -> stage
GROWTH_STAGES = (
    (1, GrowthStage(
        stage='infant',
        description='Infancy (0-1 years)',
        expected_growth_rate=25,
        key_factors=('Adequate sleep', 'Breastfeeding', 'Regular check-ups'),
    )),
    (3, GrowthStage(
        stage='toddler',
        description='Toddler (1-3 years)',
        expected_growth_rate=12,
        key_factors=('Balanced nutrition', 'Outdoor activities', 'Regular routine'),
    )),
    (6, GrowthStage(
        stage='preschool',
        description='Preschool (3-6 years)',
        expected_growth_rate=7,
        key_factors=('Varied diet', 'Physical exercise', 'Adequate sleep'),
    )),
    (12, GrowthStage(
        stage='school-age',
        description='School age (6-12 years)',
        expected_growth_rate=6,
        key_factors=('Balanced nutrition', 'Sports', 'Balance of study and rest'),
    )),
    (18, GrowthStage(
        stage='adolescent',
        description='Adolescence (12-18 years)',
        expected_growth_rate=8,
        key_factors=('Adequate protein', 'Strength training', 'Mental health'),
    )),
    (None, GrowthStage(
        stage='adult',
        description='Adulthood (18+ years)',
        expected_growth_rate=0,
        key_factors=('Stay healthy', 'Regular check-ups', 'Good habits'),
    )),
)


def bmi_category(bmi: float) -> str:
    if bmi < 16:
        return 'underweight'
    if bmi < 25:
        return 'normal'
    if bmi < 30:
        return 'overweight'
    return 'obese'


def calculate_bmi(height_cm: float, weight_kg: float) -> BMIAnalysis:
    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    category = bmi_category(bmi)
    return BMIAnalysis(
        bmi=round1(bmi),
        category=category,
        percentile=BMI_PERCENTILE_PLACEHOLDER,
        recommendation=BMI_RECOMMENDATIONS[category],
    )


def determine_growth_stage(age_months: float) -> GrowthStage:
    age_years = age_months / 12
    for upper, stage in GROWTH_STAGES:
        if upper is None or age_years < upper:
            return stage
    return GROWTH_STAGES[-1][1]

"""
Display strings for result ids, keyed by locale.

The core returns stable ids (algorithm names, BMI categories, growth stages)
and English text; this module maps them to the requested locale. Unknown
keys fall back to the value passed in.
"""
from config.settings import DEFAULT_LOCALE, SUPPORTED_LOCALES
from src.models.algorithms import (
    DESCRIPTIONS, KHAMIS_ROCHE, MID_PARENTAL, PERCENTILE_TRACKING,
)
from src.models.data_structures import PredictionResult
from src.models.health import BMI_RECOMMENDATIONS as RECOMMENDATIONS

ALGORITHM_NAMES = {
    KHAMIS_ROCHE: {'en': 'Modified Khamis-Roche Method', 'zh': 'Khamis-Roche 改良法'},
    MID_PARENTAL: {'en': 'Mid-Parental Height Method', 'zh': '中位父母身高法'},
    PERCENTILE_TRACKING: {'en': 'Percentile Tracking Method', 'zh': '百分位追踪法'},
}

ALGORITHM_DESCRIPTIONS = {
    KHAMIS_ROCHE: {
        'en': DESCRIPTIONS[KHAMIS_ROCHE],
        'zh': '基于父母身高、当前身高和年龄的综合预测模型，适用于2-18岁儿童。',
    },
    MID_PARENTAL: {
        'en': DESCRIPTIONS[MID_PARENTAL],
        'zh': '基于父母身高的简化预测方法，遗传因素占主导。',
    },
    PERCENTILE_TRACKING: {
        'en': DESCRIPTIONS[PERCENTILE_TRACKING],
        'zh': '假设儿童保持当前身高百分位直至成年的预测方法。',
    },
}

BMI_CATEGORIES = {
    'underweight': {'en': 'Underweight', 'zh': '偏瘦'},
    'normal': {'en': 'Normal', 'zh': '正常'},
    'overweight': {'en': 'Overweight', 'zh': '偏重'},
    'obese': {'en': 'Obese', 'zh': '肥胖'},
}

BMI_RECOMMENDATIONS = {
    'underweight': {
        'en': RECOMMENDATIONS['underweight'],
        'zh': '体重偏轻，建议增加营养摄入，咨询儿科医生。',
    },
    'normal': {
        'en': RECOMMENDATIONS['normal'],
        'zh': '体重正常，保持均衡饮食和适量运动。',
    },
    'overweight': {
        'en': RECOMMENDATIONS['overweight'],
        'zh': '体重偏重，建议控制饮食，增加体育锻炼。',
    },
    'obese': {
        'en': RECOMMENDATIONS['obese'],
        'zh': '体重过重，建议咨询医生制定健康的减重计划。',
    },
}

STAGE_DESCRIPTIONS = {
    'infant': {'en': 'Infancy (0-1 years)', 'zh': '婴儿期 (0-1岁)'},
    'toddler': {'en': 'Toddler (1-3 years)', 'zh': '幼儿期 (1-3岁)'},
    'preschool': {'en': 'Preschool (3-6 years)', 'zh': '学龄前期 (3-6岁)'},
    'school-age': {'en': 'School age (6-12 years)', 'zh': '学龄期 (6-12岁)'},
    'adolescent': {'en': 'Adolescence (12-18 years)', 'zh': '青春期 (12-18岁)'},
    'adult': {'en': 'Adulthood (18+ years)', 'zh': '成年期 (18岁+)'},
}

STAGE_FACTORS = {
    'infant': {'zh': ('充足睡眠', '母乳喂养', '定期体检')},
    'toddler': {'zh': ('均衡营养', '户外活动', '规律作息')},
    'preschool': {'zh': ('多样化饮食', '体育锻炼', '充足睡眠')},
    'school-age': {'zh': ('营养均衡', '体育运动', '学习与休息平衡')},
    'adolescent': {'zh': ('充足蛋白质', '力量训练', '心理健康')},
    'adult': {'zh': ('保持健康', '定期检查', '良好习惯')},
}


def check_locale(locale: str = None) -> str:
    locale = locale or DEFAULT_LOCALE
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(f"Unsupported locale '{locale}'")
    return locale


def translate(table: dict, key: str, locale: str = None, fallback=None):
    entry = table.get(key, {})
    return entry.get(check_locale(locale), fallback if fallback is not None else key)


def localize_result(result: PredictionResult, locale: str = None) -> dict:
    """``result.to_dict()`` with display strings in ``locale``."""
    locale = check_locale(locale)
    payload = result.to_dict()

    for algo in payload['algorithms']:
        algo['display_name'] = translate(ALGORITHM_NAMES, algo['name'], locale)
        algo['description'] = translate(
            ALGORITHM_DESCRIPTIONS, algo['name'], locale, algo['description']
        )

    bmi = payload['bmi_analysis']
    bmi['category_label'] = translate(BMI_CATEGORIES, bmi['category'], locale)
    bmi['recommendation'] = translate(
        BMI_RECOMMENDATIONS, bmi['category'], locale, bmi['recommendation']
    )

    stage = payload['growth_stage']
    stage['description'] = translate(
        STAGE_DESCRIPTIONS, stage['stage'], locale, stage['description']
    )
    stage['key_factors'] = list(translate(
        STAGE_FACTORS, stage['stage'], locale, stage['key_factors']
    ))
    return payload

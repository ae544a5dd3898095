"""
Metric/imperial unit conversion for heights (cm/in) and weights (kg/lb).
"""
import math

from config.settings import CM_PER_INCH, LB_PER_KG

UNITS = ('metric', 'imperial')


def round1(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    scaled = abs(value) * 10
    return math.copysign(math.floor(scaled + 0.5) / 10, value)


def _check_units(from_unit: str, to_unit: str):
    for u in (from_unit, to_unit):
        if u not in UNITS:
            raise ValueError(f"Unknown unit system '{u}'")


def convert_height(value: float, from_unit: str, to_unit: str) -> float:
    _check_units(from_unit, to_unit)
    if from_unit == to_unit:
        return value
    if from_unit == 'imperial':
        return value * CM_PER_INCH
    return value / CM_PER_INCH


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    _check_units(from_unit, to_unit)
    if from_unit == to_unit:
        return value
    if from_unit == 'imperial':
        return round1(value / LB_PER_KG)
    return round1(value * LB_PER_KG)

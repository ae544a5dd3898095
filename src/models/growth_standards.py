"""
Height-for-age reference table and percentile bucketing.

The tables are small illustrative samples shaped like the WHO/CDC growth
charts, not the full datasets.
"""
import numpy as np

from config.settings import PERCENTILE_BUCKETS
from src.models.data_structures import GrowthStandard, PercentileSet

# =============================================================================
# Reference Tables
# =============================================================================

# age_months -> (p3, p10, p25, p50, p75, p90, p97), cm
_HEIGHT_TABLE = {
    0: {
        'male': (46.1, 47.5, 49.0, 50.4, 51.8, 53.2, 54.7),
        'female': (45.4, 46.8, 48.2, 49.6, 51.0, 52.4, 53.9),
    },
    12: {
        'male': (71.0, 72.8, 74.7, 76.6, 78.5, 80.4, 82.3),
        'female': (69.8, 71.6, 73.5, 75.4, 77.3, 79.2, 81.1),
    },
    24: {
        'male': (82.3, 84.4, 86.6, 88.8, 91.0, 93.2, 95.4),
        'female': (81.2, 83.3, 85.5, 87.7, 89.9, 92.1, 94.3),
    },
    36: {
        'male': (90.3, 92.6, 95.0, 97.4, 99.8, 102.2, 104.6),
        'female': (89.0, 91.4, 93.8, 96.2, 98.6, 101.0, 103.4),
    },
    60: {
        'male': (103.2, 106.0, 108.9, 111.8, 114.7, 117.6, 120.5),
        'female': (102.0, 104.8, 107.7, 110.6, 113.5, 116.4, 119.3),
    },
    120: {
        'male': (133.5, 137.2, 141.0, 144.8, 148.6, 152.4, 156.2),
        'female': (133.2, 136.9, 140.7, 144.5, 148.3, 152.1, 155.9),
    },
    180: {
        'male': (157.2, 162.0, 166.8, 171.6, 176.4, 181.2, 186.0),
        'female': (150.7, 154.7, 158.7, 162.7, 166.7, 170.7, 174.7),
    },
    216: {
        'male': (162.1, 167.6, 173.1, 178.6, 184.1, 189.6, 195.1),
        'female': (151.2, 155.4, 159.6, 163.8, 168.0, 172.2, 176.4),
    },
}

HEIGHT_STANDARDS = tuple(
    GrowthStandard(
        age_months=age,
        male=PercentileSet(*row['male']),
        female=PercentileSet(*row['female']),
    )
    for age, row in sorted(_HEIGHT_TABLE.items())
)

# age_years -> {gender: (p10, p50, p90)}, cm; yearly chart reference lines
CHART_REFERENCE = {
    1: {'male': (71, 76, 82), 'female': (70, 75, 81)},
    2: {'male': (80, 87, 95), 'female': (79, 86, 94)},
    3: {'male': (88, 96, 104), 'female': (87, 95, 103)},
    4: {'male': (95, 103, 112), 'female': (94, 102, 111)},
    5: {'male': (101, 110, 119), 'female': (100, 109, 118)},
    6: {'male': (107, 116, 126), 'female': (106, 115, 125)},
    7: {'male': (112, 122, 132), 'female': (111, 121, 131)},
    8: {'male': (118, 128, 138), 'female': (117, 127, 137)},
    9: {'male': (123, 133, 144), 'female': (122, 132, 143)},
    10: {'male': (127, 138, 150), 'female': (126, 137, 149)},
    11: {'male': (131, 143, 156), 'female': (130, 142, 156)},
    12: {'male': (136, 149, 163), 'female': (135, 148, 163)},
    13: {'male': (142, 156, 171), 'female': (142, 155, 169)},
    14: {'male': (149, 163, 178), 'female': (148, 160, 173)},
    15: {'male': (155, 169, 184), 'female': (150, 162, 174)},
    16: {'male': (160, 173, 188), 'female': (151, 163, 175)},
    17: {'male': (163, 176, 190), 'female': (152, 163, 175)},
    18: {'male': (164, 177, 191), 'female': (152, 163, 175)},
}


class GrowthReference:
    """Nearest-age lookup and percentile bucketing over a fixed table."""

    def __init__(self, standards: tuple = None, chart_reference: dict = None):
        if standards is None:
            standards = HEIGHT_STANDARDS
        if chart_reference is None:
            chart_reference = CHART_REFERENCE
        self.standards = standards
        self.chart_reference = chart_reference
        self._ages = np.array([s.age_months for s in self.standards], dtype=float)

    def find_closest_standard(self, age_months: float) -> GrowthStandard:
        # argmin returns the first index on ties, i.e. the earlier entry
        idx = int(np.argmin(np.abs(self._ages - age_months)))
        return self.standards[idx]

    def height_percentile(self, height: float, age_months: float,
                          gender: str) -> int:
        percentiles = self.find_closest_standard(age_months).for_gender(gender)
        for p in PERCENTILE_BUCKETS:
            if height <= percentiles.value(p):
                return p
        return PERCENTILE_BUCKETS[-1]

    def adult_standard(self) -> GrowthStandard:
        """Oldest table entry, used as the adult-height proxy."""
        return self.standards[-1]

    def reference_row(self, age_years: int, gender: str):
        row = self.chart_reference.get(age_years)
        if row is None:
            return None
        return row[gender]

    def percentile_lines(self, gender: str) -> dict:
        lines = {10: [], 50: [], 90: []}
        for age in sorted(self.chart_reference):
            p10, p50, p90 = self.chart_reference[age][gender]
            lines[10].append({'age': age, 'value': p10})
            lines[50].append({'age': age, 'value': p50})
            lines[90].append({'age': age, 'value': p90})
        return lines


default_reference = GrowthReference()


def find_closest_standard(age_months: float) -> GrowthStandard:
    return default_reference.find_closest_standard(age_months)


def height_percentile(height: float, age_months: float, gender: str) -> int:
    return default_reference.height_percentile(height, age_months, gender)

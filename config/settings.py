"""
Configuration for the Child Height Prediction service.
"""
import os

# ── Server ────────────────────────────────────────────────────
PORT = int(os.environ.get("PORT", 8000))
HOST = os.environ.get("HOST", "0.0.0.0")
DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
VERSION = "1.0.0"

# ── Auth (optional) ───────────────────────────────────────────
AUTH_ENABLED = os.environ.get("AUTH_ENABLED", "false").lower() == "true"
AUTH_USERNAME = os.environ.get("AUTH_USERNAME", "admin")
AUTH_PASSWORD = os.environ.get("AUTH_PASSWORD", "changeme")

# ── Logging ───────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
LOG_FORMAT = os.environ.get(
    "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# ── Localization ──────────────────────────────────────────────
SUPPORTED_LOCALES = ('en', 'zh')
DEFAULT_LOCALE = os.environ.get("DEFAULT_LOCALE", "en")

# ── Domain constants ──────────────────────────────────────────
DAYS_PER_MONTH = 30.44
MS_PER_MONTH = 24 * 3600 * 1000 * DAYS_PER_MONTH
CM_PER_INCH = 2.54
LB_PER_KG = 2.20462
MID_PARENTAL_OFFSET_CM = 13
PERCENTILE_BUCKETS = (3, 10, 25, 50, 75, 90, 97)
ADULT_AGE_YEARS = 18
BMI_PERCENTILE_PLACEHOLDER = 50

# ── Form validation ranges (metric) ───────────────────────────
HEIGHT_RANGE_CM = (50, 220)
FATHER_HEIGHT_RANGE_CM = (140, 220)
MOTHER_HEIGHT_RANGE_CM = (130, 200)
WEIGHT_RANGE_KG = (5, 150)
AGE_RANGE_YEARS = (1, 18)

"""
Child Height Predictor — FastAPI Backend
========================================

Adult height prediction from parental and current measurements.

REST API endpoints:
    POST   /predict                     Predicted adult height + BMI + stage
    POST   /chart                       Growth chart series
    POST   /recommendations             Lifestyle recommendations
    POST   /report                      Downloadable PDF report
    GET    /reference/percentile-lines  Reference percentile lines
    GET    /convert/height              Height unit conversion
    GET    /convert/weight              Weight unit conversion
    GET    /health                      Health check
    GET    /                            Landing page
"""
import sys
import logging
import secrets
from pathlib import Path
from datetime import date, datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel, Field, model_validator

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import HOST, PORT, VERSION, LOG_LEVEL, LOG_FORMAT
from config.settings import AUTH_ENABLED, AUTH_USERNAME, AUTH_PASSWORD
from config.settings import (
    HEIGHT_RANGE_CM, FATHER_HEIGHT_RANGE_CM, MOTHER_HEIGHT_RANGE_CM,
    WEIGHT_RANGE_KG, AGE_RANGE_YEARS,
)
from src.models.age import age_in_years
from src.models.algorithms import ALGORITHM_IDS
from src.models.data_structures import MeasurementInput
from src.models.predictor import HeightPredictor
from src.models.recommendations import lifestyle_recommendations
from src.models.translations import check_locale, localize_result
from src.models.units import convert_height, convert_weight, round1
from src.reports.pdf_report import render_pdf, report_filename

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# ── Auth ─────────────────────────────────────────────────────────
security = HTTPBasic()

def verify_credentials(credentials: HTTPBasicCredentials = Depends(security)):
    """HTTP Basic Auth — only enforced when AUTH_ENABLED=true."""
    if not AUTH_ENABLED:
        return True
    correct_user = secrets.compare_digest(credentials.username, AUTH_USERNAME)
    correct_pass = secrets.compare_digest(credentials.password, AUTH_PASSWORD)
    if not (correct_user and correct_pass):
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return True

# ── Global State ──────────────────────────────────────────────

_predictor = HeightPredictor()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Height predictor ready — algorithms: %s",
                ", ".join(ALGORITHM_IDS))
    yield
    logger.info("Shutting down")


# ── App ──────────────────────────────────────────────────────

_deps = [Depends(verify_credentials)] if AUTH_ENABLED else []

app = FastAPI(
    title="Child Height Predictor API",
    description=(
        "Predicts adult height from parental heights and current growth "
        "measurements using three methods (modified Khamis-Roche, "
        "mid-parental height, percentile tracking), with BMI and growth "
        "stage analysis. For reference only; not medical advice."
    ),
    version=VERSION,
    lifespan=lifespan,
    dependencies=_deps,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request / Response Models ─────────────────────────────────

def _check_range(name: str, value: float, bounds: tuple, unit: str):
    low, high = bounds
    if value < low or value > high:
        raise ValueError(f"{name} must be between {low}-{high}{unit}")


class HeightFormRequest(BaseModel):
    """Form input; heights in inches and weight in pounds when imperial."""
    gender: str = Field(..., pattern="^(male|female)$")
    birth_date: date
    current_height: float = Field(..., gt=0)
    current_weight: float = Field(..., gt=0)
    father_height: float = Field(..., gt=0)
    mother_height: float = Field(..., gt=0)
    unit: str = Field("metric", pattern="^(metric|imperial)$")

    @model_validator(mode="after")
    def check_ranges(self):
        if self.birth_date > date.today():
            raise ValueError("birth_date cannot be in the future")
        age = age_in_years(self.birth_date)
        _check_range("age", age, AGE_RANGE_YEARS, " years")

        _check_range("current_height", self.metric_height(self.current_height),
                     HEIGHT_RANGE_CM, "cm")
        _check_range("father_height", self.metric_height(self.father_height),
                     FATHER_HEIGHT_RANGE_CM, "cm")
        _check_range("mother_height", self.metric_height(self.mother_height),
                     MOTHER_HEIGHT_RANGE_CM, "cm")
        _check_range("current_weight", self.current_weight, WEIGHT_RANGE_KG, "kg")
        return self

    def metric_height(self, value: float) -> float:
        return convert_height(value, self.unit, "metric")

    def to_measurement(self) -> MeasurementInput:
        return MeasurementInput(
            gender=self.gender,
            birth_date=self.birth_date,
            current_height=self.metric_height(self.current_height),
            current_weight=convert_weight(self.current_weight, self.unit, "metric"),
            father_height=self.metric_height(self.father_height),
            mother_height=self.metric_height(self.mother_height),
            unit=self.unit,
        )


class ConversionResponse(BaseModel):
    value: float
    from_unit: str
    to_unit: str
    result: float


# ── Helper ────────────────────────────────────────────────────

def _locale(locale):
    try:
        return check_locale(locale)
    except ValueError as e:
        raise HTTPException(400, str(e))


def _log_request(kind: str, data: MeasurementInput, now: datetime = None):
    logger.info("%s request — gender=%s age=%dy unit=%s", kind, data.gender,
                age_in_years(data.birth_date, now), data.unit)


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "algorithms": list(ALGORITHM_IDS),
        "version": VERSION,
    }


@app.post("/predict")
async def predict_height(req: HeightFormRequest,
                         locale: str = Query(None, description="en or zh")):
    locale = _locale(locale)
    data = req.to_measurement()
    now = datetime.now()
    _log_request("predict", data, now)

    result = _predictor.predict(data, now=now)
    payload = localize_result(result, locale)
    payload["age_years"] = age_in_years(data.birth_date, now)
    payload["unit"] = data.unit
    return payload


@app.post("/chart")
async def growth_chart(req: HeightFormRequest):
    data = req.to_measurement()
    now = datetime.now()
    _log_request("chart", data, now)

    result = _predictor.predict(data, now=now)
    points = _predictor.chart_data(data, result, now=now)
    return {
        "gender": data.gender,
        "current_age": age_in_years(data.birth_date, now),
        "primary_prediction": result.primary_prediction,
        "points": [p.to_dict() for p in points],
    }


@app.post("/recommendations")
async def recommendations(req: HeightFormRequest):
    data = req.to_measurement()
    return lifestyle_recommendations(data).to_dict()


@app.post("/report")
async def download_report(req: HeightFormRequest):
    data = req.to_measurement()
    now = datetime.now()
    _log_request("report", data, now)

    result = _predictor.predict(data, now=now)
    pdf = render_pdf(data, result, now=now)
    filename = report_filename(data, now=now)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ── Reference Lines ──────────────────────────────────────────

@app.get("/reference/percentile-lines")
async def get_percentile_lines(
    gender: str = Query("male", pattern="^(male|female)$"),
):
    lines = _predictor.reference.percentile_lines(gender)
    return {
        "gender": gender,
        "lines": [
            {"percentile": pct, "points": points}
            for pct, points in lines.items()
        ],
    }


# ── Unit Conversion ──────────────────────────────────────────

@app.get("/convert/height", response_model=ConversionResponse)
async def convert_height_endpoint(
    value: float = Query(...),
    from_unit: str = Query(..., pattern="^(metric|imperial)$"),
    to_unit: str = Query(..., pattern="^(metric|imperial)$"),
):
    return ConversionResponse(
        value=value, from_unit=from_unit, to_unit=to_unit,
        result=round1(convert_height(value, from_unit, to_unit)),
    )


@app.get("/convert/weight", response_model=ConversionResponse)
async def convert_weight_endpoint(
    value: float = Query(...),
    from_unit: str = Query(..., pattern="^(metric|imperial)$"),
    to_unit: str = Query(..., pattern="^(metric|imperial)$"),
):
    return ConversionResponse(
        value=value, from_unit=from_unit, to_unit=to_unit,
        result=convert_weight(value, from_unit, to_unit),
    )


# ── Landing ───────────────────────────────────────────────────

@app.get("/", response_class=HTMLResponse)
async def landing():
    return HTMLResponse(content=f"""
    <html><body>
    <h1>Child Height Predictor API v{VERSION}</h1>
    <p>Adult height prediction from parental and current measurements.</p>
    <p>Visit <a href="/docs">/docs</a> for the interactive API documentation.</p>
    </body></html>
    """)


# ── Run ───────────────────────────────────────────────────────

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("src.api.server:app", host=HOST, port=PORT, reload=True)

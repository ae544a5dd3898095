"""
Tests for the Child Height Predictor API
Run: pytest tests/test_api.py -v
"""
from datetime import date, datetime, time, timedelta

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPBasicCredentials
from fastapi.testclient import TestClient

from src.api import server
from src.api.server import app, verify_credentials

client = TestClient(app)


def years_ago(years: int) -> date:
    today = date.today()
    try:
        return today.replace(year=today.year - years)
    except ValueError:  # Feb 29
        return today.replace(year=today.year - years, day=28)


def form(**overrides) -> dict:
    body = {
        "gender": "male",
        "birth_date": years_ago(10).isoformat(),
        "current_height": 138,
        "current_weight": 32,
        "father_height": 175,
        "mother_height": 160,
        "unit": "metric",
    }
    body.update(overrides)
    return body


@pytest.fixture
def yesterday_clock(monkeypatch):
    """Pin the endpoints' clock to the day before the tenth birthday of form()."""
    birth = years_ago(10)
    tenth = birth.replace(year=birth.year + 10)
    fixed = datetime.combine(tenth - timedelta(days=1), time(12))

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return fixed

    monkeypatch.setattr(server, "datetime", FrozenDatetime)
    return fixed


class TestHealthAndInfo:

    def test_health(self):
        r = client.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "healthy"
        assert data["algorithms"] == [
            "khamis-roche", "mid-parental", "percentile-tracking"
        ]

    def test_landing(self):
        r = client.get("/")
        assert r.status_code == 200
        assert "/docs" in r.text

    def test_docs_available(self):
        r = client.get("/docs")
        assert r.status_code == 200


class TestAuth:

    @pytest.fixture
    def auth_on(self, monkeypatch):
        monkeypatch.setattr(server, "AUTH_ENABLED", True)
        monkeypatch.setattr(server, "AUTH_USERNAME", "parent")
        monkeypatch.setattr(server, "AUTH_PASSWORD", "s3cret")

    def test_correct_credentials(self, auth_on):
        creds = HTTPBasicCredentials(username="parent", password="s3cret")
        assert verify_credentials(creds) is True

    @pytest.mark.parametrize("username,password", [
        ("parent", "wrong"), ("someone", "s3cret"), ("", ""),
    ])
    def test_wrong_credentials(self, auth_on, username, password):
        creds = HTTPBasicCredentials(username=username, password=password)
        with pytest.raises(HTTPException) as exc:
            verify_credentials(creds)
        assert exc.value.status_code == 401
        assert exc.value.headers["WWW-Authenticate"] == "Basic"

    def test_disabled_accepts_anything(self, monkeypatch):
        monkeypatch.setattr(server, "AUTH_ENABLED", False)
        creds = HTTPBasicCredentials(username="x", password="y")
        assert verify_credentials(creds) is True


class TestPredict:

    def test_predict_ten_year_old_boy(self):
        r = client.post("/predict", json=form())
        assert r.status_code == 200
        data = r.json()
        assert data["age_years"] == 10
        assert data["primary_prediction"] == 198.5
        assert data["confidence"] == 95
        assert data["current_percentile"] == 25
        assert data["prediction_range"] == [173.1, 198.5]

        algos = {a["name"]: a for a in data["algorithms"]}
        assert algos["mid-parental"]["predicted_height"] == 174.0
        assert algos["percentile-tracking"]["predicted_height"] == 173.1
        assert algos["khamis-roche"]["display_name"] == "Modified Khamis-Roche Method"

        assert data["bmi_analysis"]["bmi"] == 16.8
        assert data["bmi_analysis"]["category"] == "normal"
        assert data["growth_stage"]["stage"] == "school-age"

    def test_predict_chinese_locale(self):
        r = client.post("/predict", params={"locale": "zh"}, json=form())
        assert r.status_code == 200
        data = r.json()
        assert data["algorithms"][1]["display_name"] == "中位父母身高法"
        assert data["bmi_analysis"]["category_label"] == "正常"
        assert data["growth_stage"]["description"] == "学龄期 (6-12岁)"

    def test_unsupported_locale(self):
        r = client.post("/predict", params={"locale": "fr"}, json=form())
        assert r.status_code == 400

    def test_imperial_input_is_normalized(self):
        metric = client.post("/predict", json=form()).json()
        r = client.post("/predict", json=form(
            unit="imperial",
            current_height=138 / 2.54,
            current_weight=70.5,
            father_height=175 / 2.54,
            mother_height=160 / 2.54,
        ))
        assert r.status_code == 200
        data = r.json()
        assert data["unit"] == "imperial"
        assert data["primary_prediction"] == pytest.approx(
            metric["primary_prediction"], abs=0.1
        )
        assert data["algorithms"][1]["predicted_height"] == pytest.approx(174.0, abs=0.1)

    def test_age_uses_request_clock(self, yesterday_clock):
        # the pinned clock is one day short of the tenth birthday
        r = client.post("/predict", json=form())
        assert r.status_code == 200
        assert r.json()["age_years"] == 9


class TestValidation:

    def test_invalid_gender(self):
        r = client.post("/predict", json=form(gender="unknown"))
        assert r.status_code == 422

    def test_invalid_unit(self):
        r = client.post("/predict", json=form(unit="stone"))
        assert r.status_code == 422

    def test_negative_height(self):
        r = client.post("/predict", json=form(current_height=-1))
        assert r.status_code == 422

    def test_height_out_of_range(self):
        r = client.post("/predict", json=form(current_height=230))
        assert r.status_code == 422

    def test_father_height_out_of_range(self):
        r = client.post("/predict", json=form(father_height=120))
        assert r.status_code == 422

    def test_mother_height_out_of_range(self):
        r = client.post("/predict", json=form(mother_height=205))
        assert r.status_code == 422

    def test_weight_out_of_range(self):
        r = client.post("/predict", json=form(current_weight=200))
        assert r.status_code == 422

    def test_too_young(self):
        r = client.post("/predict", json=form(birth_date=date.today().isoformat()))
        assert r.status_code == 422

    def test_too_old(self):
        r = client.post("/predict", json=form(birth_date=years_ago(20).isoformat()))
        assert r.status_code == 422

    def test_future_birth_date(self):
        future = date.today().replace(year=date.today().year + 1, day=1)
        r = client.post("/predict", json=form(birth_date=future.isoformat()))
        assert r.status_code == 422

    def test_missing_field(self):
        body = form()
        del body["father_height"]
        r = client.post("/predict", json=body)
        assert r.status_code == 422


class TestChartAndReport:

    def test_chart(self):
        r = client.post("/chart", json=form())
        assert r.status_code == 200
        data = r.json()
        points = data["points"]
        assert [p["age"] for p in points] == list(range(8, 19))

        current = next(p for p in points if p["age"] == 10)
        assert current["current_height"] == 138
        assert current["predicted_trajectory"] == 138

        last = points[-1]
        assert last["predicted_height"] == data["primary_prediction"]
        assert last["predicted_trajectory"] == pytest.approx(data["primary_prediction"])
        assert "predicted_trajectory" not in points[0]

    def test_chart_uses_request_clock(self, yesterday_clock):
        r = client.post("/chart", json=form())
        assert r.status_code == 200
        data = r.json()
        assert data["current_age"] == 9
        current = next(p for p in data["points"] if p["age"] == 9)
        assert current["current_height"] == 138
        assert data["points"][0]["age"] == 7

    def test_recommendations(self):
        r = client.post("/recommendations", json=form())
        assert r.status_code == 200
        data = r.json()
        assert data["sleep_hours"] == "9-10 hours"
        assert len(data["nutrition"]) == 4

    def test_report_pdf(self):
        r = client.post("/report", json=form(gender="female", current_height=140,
                                              current_weight=33))
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/pdf"
        assert r.content[:4] == b"%PDF"
        disposition = r.headers["content-disposition"]
        assert "Height_Prediction_Report_Girl_10years_" in disposition


class TestReferenceAndConversion:

    def test_percentile_lines(self):
        r = client.get("/reference/percentile-lines", params={"gender": "female"})
        assert r.status_code == 200
        lines = r.json()["lines"]
        assert [l["percentile"] for l in lines] == [10, 50, 90]
        assert len(lines[0]["points"]) == 18

    def test_percentile_lines_invalid_gender(self):
        r = client.get("/reference/percentile-lines", params={"gender": "x"})
        assert r.status_code == 422

    def test_convert_height(self):
        r = client.get("/convert/height",
                       params={"value": 60, "from_unit": "imperial", "to_unit": "metric"})
        assert r.status_code == 200
        assert r.json()["result"] == 152.4

    def test_convert_weight(self):
        r = client.get("/convert/weight",
                       params={"value": 10, "from_unit": "metric", "to_unit": "imperial"})
        assert r.status_code == 200
        assert r.json()["result"] == 22.0

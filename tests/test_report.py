"""
Tests for the PDF report.
Run: pytest tests/test_report.py -v
"""
from datetime import date, datetime

from src.models.data_structures import MeasurementInput
from src.models.predictor import calculate_height_prediction
from src.reports.pdf_report import render_pdf, report_filename, report_lines

NOW = datetime(2026, 10, 18, 12, 0)

GIRL = MeasurementInput(
    gender='female',
    birth_date=date(2019, 3, 2),
    current_height=118,
    current_weight=21.5,
    father_height=180,
    mother_height=165,
)


def test_filename():
    assert report_filename(GIRL, now=NOW) == \
        "Height_Prediction_Report_Girl_7years_10-18-2026.pdf"


def test_lines_cover_every_section():
    result = calculate_height_prediction(GIRL, now=NOW)
    lines = report_lines(GIRL, result, now=NOW)
    sections = [text for kind, text in lines if kind == 'section']
    assert sections == [
        'Basic Information', 'Prediction Results', 'Algorithm Comparison',
        'Health Status Analysis', 'Personalized Growth Recommendations',
        'Disclaimer',
    ]
    texts = [text for _, text in lines]
    assert 'Age: 7 years old' in texts
    assert '2. Mid-Parental Height Method' in texts
    assert f'Prediction Confidence: {result.confidence}%' in texts
    assert '• 9-10 hours of quality sleep' in texts


def test_render_pdf():
    result = calculate_height_prediction(GIRL, now=NOW)
    pdf = render_pdf(GIRL, result, now=NOW)
    assert pdf.startswith(b'%PDF')
    assert len(pdf) > 1000

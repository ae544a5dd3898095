"""
PDF export of a height prediction.

Rendered in memory with reportlab; the caller decides what to do with the
bytes. Text is English only since the built-in PDF fonts carry no CJK glyphs.
"""
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from src.models.age import age_in_years
from src.models.data_structures import MeasurementInput, PredictionResult
from src.models.recommendations import lifestyle_recommendations
from src.models.translations import (
    ALGORITHM_DESCRIPTIONS, ALGORITHM_NAMES, BMI_CATEGORIES,
    BMI_RECOMMENDATIONS, translate,
)

TITLE = 'Height Prediction Analysis Report'
FOOTER = 'Height Calculator - Free Online Height Prediction Tool'

DISCLAIMER = (
    'The height prediction results provided in this report are for reference '
    'only and cannot replace professional medical advice. Children\'s growth '
    'and development are influenced by multiple factors including genetics, '
    'nutrition, exercise and sleep. If you have questions about child growth '
    'and development, please consult a pediatrician or growth development '
    'specialist. This tool does not collect or store any personal information.'
)


def report_filename(data: MeasurementInput, now: datetime = None) -> str:
    now = now or datetime.now()
    child = 'Boy' if data.gender == 'male' else 'Girl'
    age = age_in_years(data.birth_date, now)
    return f"Height_Prediction_Report_{child}_{age}years_{now.strftime('%m-%d-%Y')}.pdf"


def report_lines(data: MeasurementInput, result: PredictionResult,
                 now: datetime = None) -> list:
    """Report content as (kind, text) pairs; kind is 'section' or 'text'."""
    age = age_in_years(data.birth_date, now)
    lines = [
        ('section', 'Basic Information'),
        ('text', f"Gender: {'Boy' if data.gender == 'male' else 'Girl'}"),
        ('text', f'Age: {age} years old'),
        ('text', f'Current Height: {data.current_height:.1f}cm'),
        ('text', f'Current Weight: {data.current_weight:.1f}kg'),
        ('text', f'Father Height: {data.father_height:.1f}cm'),
        ('text', f'Mother Height: {data.mother_height:.1f}cm'),

        ('section', 'Prediction Results'),
        ('text', f'<b>Predicted Adult Height: {result.primary_prediction:.1f}cm</b>'),
        ('text', (f'Prediction Range: {result.prediction_range[0]:.1f} - '
                  f'{result.prediction_range[1]:.1f}cm')),
        ('text', f'Current Height Percentile: {result.current_percentile}th percentile'),
        ('text', f'Prediction Confidence: {result.confidence}%'),

        ('section', 'Algorithm Comparison'),
    ]
    for i, algo in enumerate(result.algorithms, start=1):
        lines.append(('text', f"{i}. {translate(ALGORITHM_NAMES, algo.name, 'en')}"))
        lines.append(('text', (f'Predicted Height: {algo.predicted_height:.1f}cm '
                               f'(Confidence: {algo.confidence}%)')))
        lines.append(('text', escape(translate(
            ALGORITHM_DESCRIPTIONS, algo.name, 'en', algo.description))))

    bmi = result.bmi_analysis
    lines += [
        ('section', 'Health Status Analysis'),
        ('text', f'Current BMI: {bmi.bmi}'),
        ('text', f"BMI Category: {translate(BMI_CATEGORIES, bmi.category, 'en')}"),
        ('text', 'Recommendation: ' + escape(translate(
            BMI_RECOMMENDATIONS, bmi.category, 'en', bmi.recommendation))),
        ('text', f'Growth Stage: {result.growth_stage.description}'),
    ]

    recs = lifestyle_recommendations(data, now)
    lines.append(('section', 'Personalized Growth Recommendations'))
    for heading, tips in (('Nutrition', recs.nutrition),
                          ('Exercise', recs.exercise),
                          ('Sleep', recs.sleep)):
        lines.append(('text', f'<b>{heading} Recommendations:</b>'))
        lines.extend(('text', f'\u2022 {escape(tip)}') for tip in tips)

    lines.append(('section', 'Disclaimer'))
    lines.append(('text', escape(DISCLAIMER)))
    return lines


def render_pdf(data: MeasurementInput, result: PredictionResult,
               now: datetime = None) -> bytes:
    now = now or datetime.now()
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, rightMargin=40, leftMargin=40,
                            topMargin=40, bottomMargin=40, title=TITLE)
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name='ReportTitle', fontSize=18, leading=22,
                              spaceAfter=16, alignment=1,
                              textColor=colors.darkblue))
    styles.add(ParagraphStyle(name='ReportSection', fontSize=13, leading=16,
                              spaceBefore=8, spaceAfter=6,
                              textColor=colors.darkgreen))
    styles.add(ParagraphStyle(name='ReportFooter', fontSize=8, leading=10,
                              textColor=colors.grey))

    flow = [Paragraph(TITLE, styles['ReportTitle'])]
    for kind, text in report_lines(data, result, now):
        style = styles['ReportSection'] if kind == 'section' else styles['Normal']
        flow.append(Paragraph(text, style))
        flow.append(Spacer(1, 4))

    flow.append(Spacer(1, 12))
    flow.append(Paragraph(
        f"Generated: {now.strftime('%m/%d/%Y, %I:%M:%S %p')} | {FOOTER}",
        styles['ReportFooter'],
    ))
    doc.build(flow)
    return buffer.getvalue()

"""Case summary PDF."""
from __future__ import annotations

import io
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.models import Case
from core.presets import DISCLAIMER, UNKNOWN_LABEL
from core.utils import format_money, pretty_label, show_unknown

GRID = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _table(rows, col_widths=None):
    t = Table(rows, hAlign="LEFT", colWidths=col_widths)
    t.setStyle(GRID)
    return t


def build_case_summary_pdf(case: Case, title: str = "Scenario Summary") -> bytes:
    """Render deal, borrowers, ratios, risk flags and checklist of ``case``."""
    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36
    )
    story = [Paragraph(f"<b>{escape(title)}</b>", styles["Title"]), Spacer(1, 6)]
    if case.case_id:
        story.append(Paragraph(f"Case {escape(case.case_id)} &bull; {case.status}", styles["Normal"]))
    story.append(Spacer(1, 12))

    deal = case.deal
    deal_rows = [
        ["Deal Snapshot", ""],
        ["Purpose", pretty_label(deal.purpose)],
        ["Occupancy", pretty_label(deal.occupancy)],
        ["Property Type", pretty_label(deal.property_type)],
        ["State", deal.state],
        ["Target Close", f"{deal.target_close_days} days"],
        ["Purchase Price", format_money(case.property.purchase_price)],
        ["Loan Amount", format_money(case.property.loan_amount)],
        ["Monthly Gross Income", format_money(case.income.monthly_gross_income)],
        ["Monthly Debts", format_money(case.liabilities.monthly_debts_total)],
    ]
    story += [_table(deal_rows, [200, 320]), Spacer(1, 12)]

    if case.borrowers:
        rows = [["Borrower", "Primary", "Credit (mid)", "Citizenship", "Income Type"]]
        for idx, b in enumerate(case.borrowers, start=1):
            rows.append(
                [
                    f"Borrower {idx}",
                    "Yes" if b.is_primary else "",
                    show_unknown(b.credit_score_mid),
                    pretty_label(b.citizenship),
                    pretty_label(b.employment.income_type),
                ]
            )
        story += [Paragraph("<b>Borrowers</b>", styles["Heading3"]), Spacer(1, 6)]
        story += [_table(rows), Spacer(1, 12)]

    calc = case.calculations
    ratio_rows = [
        ["Ratio", "Value"],
        ["LTV", show_unknown(calc.ltv)],
        ["Front DTI", show_unknown(calc.front_dti)],
        ["Back DTI", show_unknown(calc.back_dti)],
    ]
    story += [_table(ratio_rows, [200, 320]), Spacer(1, 12)]

    if case.risk_flags:
        rows = [["Code", "Severity", "Details"]]
        rows += [[f.code, f.severity, Paragraph(escape(f.details), styles["Normal"])] for f in case.risk_flags]
        story += [Paragraph("<b>Risk Flags</b>", styles["Heading3"]), Spacer(1, 6)]
        story += [_table(rows, [120, 80, 320]), Spacer(1, 12)]

    if case.copilot.doc_checklist:
        rows = [["Document Checklist"]] + [[d] for d in case.copilot.doc_checklist]
        story += [_table(rows, [520]), Spacer(1, 12)]

    outcome = case.outcome
    if outcome.decision != UNKNOWN_LABEL or outcome.final_lender != UNKNOWN_LABEL:
        lender = "" if outcome.final_lender == UNKNOWN_LABEL else outcome.final_lender
        story.append(
            Paragraph(
                f"Outcome: AUS {outcome.aus} &bull; Decision {outcome.decision} &bull; Lender {escape(lender or 'Unknown')}",
                styles["Normal"],
            )
        )

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"])]
    doc.build(story)
    return buf.getvalue()

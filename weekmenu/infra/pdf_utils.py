import io
from datetime import date

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from weekmenu.domain.Checklist import ChecklistState
from weekmenu.logic.grocery.formatting import format_amount
from weekmenu.logic.grocery.list_builder import GroceryGroups
from weekmenu.logic.planner.weeks import week_range
from weekmenu.utilities.constants import MEAL_TYPES

HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#047857")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, 0), 12),
    ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
]


def _week_label(week_start: date) -> str:
    start, end = week_range(week_start)
    return f"{start.strftime('%b %d')} - {end.strftime('%b %d, %Y')}"


def generate_pdf_for_week(grid_rows, week_start: date) -> bytes:
    """Printable grid: Day / Breakfast / Lunch / Dinner / Snack for the week view rows."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )
    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Meal Plan - {_week_label(week_start)}", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Day"] + [m.capitalize() for m in MEAL_TYPES]]
    for row in grid_rows:
        cells = [f"{row['day']} ({row['date'].strftime('%b %d')})"]
        for meal_type in MEAL_TYPES:
            recipe = row['meals'].get(meal_type)
            cells.append(recipe.name if recipe else "-")
        data.append(cells)

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(HEADER_STYLE + [("ALIGN", (0, 0), (-1, -1), "CENTER")]))
    elements.append(table)
    doc.build(elements)
    return buf.getvalue()


def generate_pdf_for_grocery_list(groups: GroceryGroups, week_start: date,
                                  checklist: ChecklistState = None) -> bytes:
    """Printable grocery list: one box / item / quantity row per item, grouped by category."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=24, leftMargin=24, topMargin=24, bottomMargin=24)
    styles = getSampleStyleSheet()
    elements = [
        Paragraph("Grocery List", styles["Title"]),
        Paragraph(f"Week of {_week_label(week_start)}", styles["Normal"]),
        Spacer(1, 16),
    ]
    if not groups:
        elements.append(Paragraph("No meals planned for this week.", styles["Normal"]))

    for category, items in groups:
        elements.append(Paragraph(category, styles["Heading3"]))
        data = [["", "Item", "Quantity"]]
        for item in items:
            box = "[x]" if checklist and checklist.is_checked(item.key) else "[ ]"
            data.append([box, item.name, format_amount(item.amount, item.unit)])
        table = Table(data, colWidths=[40, 320, 120], repeatRows=1)
        table.setStyle(TableStyle(HEADER_STYLE + [("ALIGN", (2, 0), (2, -1), "RIGHT")]))
        elements.append(table)
        elements.append(Spacer(1, 10))

    doc.build(elements)
    return buf.getvalue()

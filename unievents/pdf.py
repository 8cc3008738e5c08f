from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from unievents import reports

FONT_NAME = "Helvetica"
FONT_NAME_BOLD = "Helvetica-Bold"
FONT_SIZE = 9
CELL_PADDING = 12
PAGE_SIZE = landscape(letter)
TITLE = "University Event Reports"


def generate_report_pdf(events, output_path):
    """
    Build the schedule/roster/statistics PDF for a list of events.

    Args:
        events (list[Event]): Events to report on.
        output_path (str|Path): Destination PDF path.

    Returns:
        Path: Path to the generated PDF.
    """

    pdf_path = Path(output_path)
    doc = SimpleDocTemplate(str(pdf_path), pagesize=PAGE_SIZE, topMargin=0.75 * inch)
    # usable horizontal space after subtracting margins
    available_width = PAGE_SIZE[0] - doc.leftMargin - doc.rightMargin

    styles = getSampleStyleSheet()
    heading_style = ParagraphStyle(
        name="CenteredHeading",
        parent=styles["Heading2"],
        alignment=TA_CENTER,
    )

    stats = reports.statistics(events)
    elements = [
        Paragraph(TITLE, styles["Title"]),
        _build_statistics_table(stats, available_width),
        Spacer(1, 6),
        Paragraph("Upcoming Schedule", heading_style),
        _build_rows_table(
            reports.upcoming_schedule(events),
            reports.SCHEDULE_COLUMNS,
            available_width,
            "No events scheduled yet.",
        ),
        PageBreak(),
        Paragraph("Participant Roster", heading_style),
        _build_rows_table(
            reports.participant_roster(events),
            reports.ROSTER_COLUMNS,
            available_width,
            "No participants have registered yet.",
        ),
        Spacer(1, 6),
        Paragraph("Date/Venue Conflicts", heading_style),
    ]
    clash_lines = reports.venue_clash_lines(events) or ["No venue clashes detected."]
    elements += [Paragraph(escape(line), styles["Normal"]) for line in clash_lines]

    # custom canvas prints "Page X of Y" in the footer
    doc.build(elements, canvasmaker=NumberedCanvas)
    return pdf_path


def _build_statistics_table(stats, available_width):
    """Build the totals table shown under the title."""

    table_data = [
        ["Total Events", "Total Participants", "Busiest Event"],
        [
            str(stats["total_events"]),
            str(stats["total_participants"]),
            reports.busiest_label(stats),
        ],
    ]
    return _styled_table(table_data, available_width)


def _build_rows_table(rows, columns, available_width, empty_message):
    """Build a table with one row per report row, or a placeholder when empty."""

    display_headers = [c.replace("_", " ").title() for c in columns]
    if not rows:
        placeholder = [empty_message] + [""] * (len(columns) - 1)
        return _styled_table([display_headers, placeholder], available_width)
    table_data = [display_headers] + [[str(row[c]) for c in columns] for row in rows]
    return _styled_table(table_data, available_width)


def _styled_table(table_data, available_width):
    col_widths = _compute_scaled_col_widths(
        data=table_data,
        font_name=FONT_NAME,
        font_size=FONT_SIZE,
        padding=CELL_PADDING,
        total_width=available_width,
    )
    table = Table(table_data, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), FONT_NAME_BOLD),
                ("FONTNAME", (0, 1), (-1, -1), FONT_NAME),
                ("FONTSIZE", (0, 0), (-1, -1), FONT_SIZE),
            ]
        )
    )
    return table


def _compute_scaled_col_widths(data, font_name, font_size, padding, total_width):
    """Compute column widths scaled to fit the available page width."""

    num_cols = len(data[0])
    max_widths = [0] * num_cols
    for row in data:
        for idx, cell in enumerate(row):
            width = stringWidth(str(cell), font_name, font_size)
            max_widths[idx] = max(max_widths[idx], width)
    raw_widths = [width + padding for width in max_widths]
    raw_total = sum(raw_widths)
    return [width * total_width / raw_total for width in raw_widths]


class NumberedCanvas(canvas.Canvas):
    """Canvas subclass that prints 'Page X of Y' in the footer."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        num_pages = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_page_number(num_pages)
            super().showPage()
        super().save()

    def draw_page_number(self, total):
        self.setFont(FONT_NAME, FONT_SIZE)
        text = f"Page {self.getPageNumber()} of {total}"
        self.drawCentredString(self._pagesize[0] / 2, 0.5 * inch, text)

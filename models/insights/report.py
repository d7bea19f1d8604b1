"""
Analytics report assembly and Excel export.
"""

import io
from datetime import datetime
from typing import Any, Dict, List

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from models.insights.bookings import get_booking_metrics
from models.insights.guests import get_guest_metrics
from models.insights.revenue import get_revenue_metrics
from models.insights.rooms import get_room_metrics
from models.insights.window import filter_by_window, get_window_start


def build_analytics_report(bookings: List[Dict[str, Any]], users: List[Dict[str, Any]],
                           rooms: List[Dict[str, Any]], time_range: str,
                           now: datetime) -> Dict[str, Any]:
    """
    Aggregate all analytics metrics for a time range.

    Args:
        bookings: All bookings
        users: All user accounts
        rooms: All rooms
        time_range: '1month', '3months', '6months' or '1year'
        now: Window end (naive datetime in the hotel timezone)

    Returns:
        dict with generated_at, time_range, period, revenue, bookings,
        rooms and guests

    Raises:
        ValueError: For unknown time ranges
    """
    today = now.date()
    start = get_window_start(time_range, today)
    window = filter_by_window(bookings, start, now)

    return {
        'generated_at': now.isoformat(timespec='seconds'),
        'time_range': time_range,
        'period': {'start': start.isoformat(), 'end': today.isoformat()},
        'revenue': get_revenue_metrics(window),
        'bookings': get_booking_metrics(window),
        'rooms': get_room_metrics(window, rooms),
        'guests': get_guest_metrics(window, users),
    }


# =============================================================================
# EXCEL EXPORT
# =============================================================================

HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
HEADER_FILL = PatternFill(start_color="1A3A5C", end_color="1A3A5C", fill_type="solid")
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center", wrap_text=True)
TITLE_FONT = Font(bold=True, size=14, color="1A3A5C")
THIN_BORDER = Border(
    left=Side(style='thin', color="D4D4D4"),
    right=Side(style='thin', color="D4D4D4"),
    top=Side(style='thin', color="D4D4D4"),
    bottom=Side(style='thin', color="D4D4D4")
)


def _write_table(ws, title: str, headers: List[str], rows: List[List[Any]]) -> None:
    """Title in row 1, headers in row 3, data below."""
    ws.cell(row=1, column=1, value=title).font = TITLE_FONT

    header_row = 3
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=header_row, column=col, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = THIN_BORDER

    for row_idx, values in enumerate(rows, header_row + 1):
        for col, value in enumerate(values, 1):
            ws.cell(row=row_idx, column=col, value=value).border = THIN_BORDER

    ws.freeze_panes = f'A{header_row + 1}'
    for col in range(1, len(headers) + 1):
        ws.column_dimensions[chr(64 + col)].width = 22


def export_report_to_excel(report: Dict[str, Any], app_name: str = 'Anand Hotels') -> bytes:
    """
    Render an analytics report as an .xlsx workbook, one sheet per metric group.

    Returns:
        Workbook bytes
    """
    wb = Workbook()
    period = f"{report['period']['start']} to {report['period']['end']}"

    ws = wb.active
    ws.title = "Summary"
    _write_table(ws, f"{app_name} Analytics ({period})", ["Metric", "Value"], [
        ["Generated at", report['generated_at']],
        ["Time range", report['time_range']],
        ["Total revenue", report['revenue']['total']],
        ["Revenue growth (%)", report['revenue']['growth']],
        ["Paid bookings", report['revenue']['paid_bookings']],
        ["Total bookings", report['bookings']['total']],
        ["Occupancy rate (%)", report['rooms']['occupancy_rate']],
        ["Total guests", report['guests']['total']],
        ["New guests", report['guests']['new']],
        ["Returning guests", report['guests']['returning']],
        ["VIP guests", report['guests']['vip']],
    ])

    _write_table(wb.create_sheet("Revenue"), "Monthly Revenue", ["Month", "Revenue"],
                 [[m['month'], m['amount']] for m in report['revenue']['monthly']])

    bookings_ws = wb.create_sheet("Bookings")
    _write_table(bookings_ws, "Monthly Bookings", ["Month", "Bookings"],
                 [[m['month'], m['count']] for m in report['bookings']['monthly']])
    status_col = 4
    bookings_ws.cell(row=3, column=status_col, value="Status").font = Font(bold=True)
    bookings_ws.cell(row=3, column=status_col + 1, value="Count").font = Font(bold=True)
    for row_idx, item in enumerate(report['bookings']['by_status'], 4):
        bookings_ws.cell(row=row_idx, column=status_col, value=item['status'])
        bookings_ws.cell(row=row_idx, column=status_col + 1, value=item['count'])

    revenue_by_type = {item['room_type']: item['revenue'] for item in report['rooms']['revenue']}
    _write_table(wb.create_sheet("Rooms"), "Room Types", ["Room type", "Bookings", "Paid revenue"],
                 [[item['room_type'], item['bookings'], revenue_by_type.get(item['room_type'], 0)]
                  for item in report['rooms']['popular']])

    _write_table(wb.create_sheet("Guests"), "Loyalty Tiers", ["Tier", "Guests"],
                 [[tier, count] for tier, count in report['guests']['loyalty'].items()])

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()

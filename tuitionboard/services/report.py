"""Monthly attendance report export."""

import calendar
from datetime import date
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from sqlalchemy import select
from sqlalchemy.orm import Session

from tuitionboard.models.base import RecordStatus
from tuitionboard.models.student import Student
from tuitionboard.models.tuition import Tuition
from tuitionboard.schemas.calendar import DayStatus
from tuitionboard.services.calendar import CalendarService
from tuitionboard.services.class_status import month_dates

STATUS_FILLS = {
    DayStatus.CONDUCTED: "C6EFCE",
    DayStatus.MISSED: "FFC7CE",
    DayStatus.SCHEDULED: "DDEBF7",
}

STATUS_LETTERS = {
    DayStatus.CONDUCTED: "C",
    DayStatus.MISSED: "M",
    DayStatus.SCHEDULED: "S",
    DayStatus.NONE: "",
}


class ReportService:
    """Builds the monthly attendance workbook for a tuition."""

    def __init__(self, db: Session):
        self.db = db

    def export_month(
        self,
        tuition: Tuition,
        year: int,
        month: int,
        today: date | None = None,
    ) -> bytes:
        """Student-by-day grid plus a summary sheet.

        Columns are the days of the month, rows are students (active ones
        plus anyone with attendance that month). The last row carries the
        day status letter.
        """
        calendar_service = CalendarService(self.db)
        overview = calendar_service.month_overview(tuition, year, month, today=today)
        attendance = calendar_service.attendance_for_month(tuition.id, year, month)
        dates = month_dates(year, month)

        marked_ids = {r.student_id for rows in attendance.values() for r in rows}
        students = self._get_students(tuition.id, marked_ids)
        presence = {
            (r.student_id, day): r.is_present
            for day, rows in attendance.items()
            for r in rows
        }

        wb = Workbook()
        ws = wb.active
        ws.title = "Attendance"

        # Styles
        header_font = Font(bold=True)
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        center_align = Alignment(horizontal="center", vertical="center")

        title = f"{tuition.name} - {calendar.month_name[month]} {year}"
        ws.cell(row=1, column=1, value=title).font = Font(bold=True, size=12)

        # Day headers (Row 2)
        ws.cell(row=2, column=1, value="Student").font = header_font
        ws.cell(row=2, column=2, value="Class").font = header_font
        for offset, day in enumerate(dates):
            entry = overview.day(day)
            cell = ws.cell(row=2, column=3 + offset, value=f"{day.day}\n{calendar.day_abbr[day.weekday()]}")
            cell.font = header_font
            cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
            cell.border = thin_border
            fill = STATUS_FILLS.get(entry.status) if entry else None
            if fill:
                cell.fill = PatternFill(start_color=fill, end_color=fill, fill_type="solid")

        # Student rows
        row_idx = 3
        for student in students:
            ws.cell(row=row_idx, column=1, value=student.name).border = thin_border
            ws.cell(row=row_idx, column=2, value=student.class_level).border = thin_border
            for offset, day in enumerate(dates):
                mark = presence.get((student.id, day))
                value = "" if mark is None else ("P" if mark else "A")
                cell = ws.cell(row=row_idx, column=3 + offset, value=value)
                cell.border = thin_border
                cell.alignment = center_align
            row_idx += 1

        # Day status row
        ws.cell(row=row_idx, column=1, value="Day status").font = header_font
        for offset, day in enumerate(dates):
            entry = overview.day(day)
            cell = ws.cell(row=row_idx, column=3 + offset, value=STATUS_LETTERS[entry.status])
            cell.alignment = center_align
            cell.border = thin_border

        # Adjust column widths
        ws.column_dimensions["A"].width = 25
        ws.column_dimensions["B"].width = 10
        for offset in range(len(dates)):
            ws.column_dimensions[get_column_letter(3 + offset)].width = 5

        # Summary sheet
        summary = wb.create_sheet("Summary")
        rows = [
            ("Tuition", tuition.name),
            ("Subject", tuition.subject),
            ("Month", f"{calendar.month_name[month]} {year}"),
            ("Teaching days", ", ".join(d.title() for d in tuition.teaching_days or [])),
            ("", ""),
            ("Scheduled", overview.stats.scheduled),
            ("Conducted", overview.stats.conducted),
            ("Missed", overview.stats.missed),
            ("Remaining", overview.stats.remaining),
            ("Extra classes", overview.stats.extra),
            ("", ""),
            ("Legend", "P present, A absent, C conducted, M missed, S scheduled"),
        ]
        for idx, (label, value) in enumerate(rows, start=1):
            summary.cell(row=idx, column=1, value=label).font = header_font
            summary.cell(row=idx, column=2, value=value)
        summary.column_dimensions["A"].width = 18
        summary.column_dimensions["B"].width = 40

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output.getvalue()

    def _get_students(self, tuition_id: int, include_ids: set[int]) -> list[Student]:
        """Active students plus archived ones that still have marks this month."""
        result = self.db.execute(
            select(Student)
            .where(Student.tuition_id == tuition_id)
            .order_by(Student.name, Student.id)
        )
        return [
            s for s in result.scalars().all()
            if s.status == RecordStatus.ACTIVE or s.id in include_ids
        ]

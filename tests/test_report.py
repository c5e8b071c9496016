from datetime import date
from io import BytesIO

from openpyxl import load_workbook

from tuitionboard.services.attendance import AttendanceService
from tuitionboard.services.report import ReportService


def test_export_month_grid(db_session, tuition, students):
    attendance = AttendanceService(db_session)
    attendance.mark_attendance(tuition, students[0].id, date(2024, 5, 6), True)
    attendance.mark_attendance(tuition, students[1].id, date(2024, 5, 6), False)

    content = ReportService(db_session).export_month(tuition, 2024, 5, today=date(2024, 5, 20))
    wb = load_workbook(BytesIO(content))

    assert wb.sheetnames == ["Attendance", "Summary"]
    ws = wb["Attendance"]
    assert ws.cell(row=1, column=1).value == "Class 8 Maths - May 2024"
    assert [ws.cell(row=r, column=1).value for r in (3, 4, 5)] == ["Asha", "Bilal", "Chen"]

    # 6 May is the sixth day column
    assert ws.cell(row=3, column=8).value == "P"
    assert ws.cell(row=4, column=8).value == "A"
    assert ws.cell(row=5, column=8).value in (None, "")
    assert ws.cell(row=6, column=1).value == "Day status"
    assert ws.cell(row=6, column=8).value == "C"
    # Wednesday 8 May passed with no class
    assert ws.cell(row=6, column=10).value == "M"
    # Monday 20 May is today
    assert ws.cell(row=6, column=22).value == "S"

    summary = {row[0]: row[1] for row in wb["Summary"].iter_rows(values_only=True) if row[0]}
    assert summary["Scheduled"] == 14
    assert summary["Conducted"] == 1
    assert summary["Remaining"] == 6
    assert summary["Teaching days"] == "Monday, Wednesday, Friday"

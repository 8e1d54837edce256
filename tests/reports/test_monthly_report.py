from datetime import date

import pytest

from timeclock.attendance.model import DayLog
from timeclock.core.constants import EMPTY_SLOT, JUSTIFIED_LABEL
from timeclock.core.enums import PunchType
from timeclock.core.exceptions import NotFoundError, ValidationError
from timeclock.reports.export import reports_to_csv


def store_day(day_logs, work_date: date, *values, employee_id: str = "e1"):
    log = DayLog.empty(employee_id, work_date)
    for pt, value in zip(PunchType, values):
        if value:
            log = log.with_time(pt, value)
    day_logs.put(log)
    return log


@pytest.mark.parametrize("year, expected", [(2024, 29), (2023, 28)])
def test_february_length_respects_leap_years(report_service, year, expected):
    report = report_service.build_monthly_report("e1", year, 2)
    assert len(report.days) == expected
    assert report.days[-1].work_date == date(year, 2, expected)


def test_weekends_are_labelled_and_never_count(report_service, day_logs):
    # 2024-03-09 is a Saturday.
    store_day(day_logs, date(2024, 3, 9), "08:00:00", "12:00:00", "13:00:00", "17:00:00")

    report = report_service.build_monthly_report("e1", 2024, 3)
    saturday = report.days[8]

    assert saturday.is_weekend
    assert saturday.worked_seconds == 0
    assert set(saturday.cells.values()) == {"Saturday"}
    assert report.days[9].cells[PunchType.MORNING_IN] == "Sunday"
    assert report.total_seconds == 0
    assert sum(d.is_weekend for d in report.days) == 10


def test_weekday_totals_add_up(report_service, day_logs):
    store_day(day_logs, date(2024, 3, 4), "08:00:00", "12:00:00", "13:00:00", "17:00:00")
    store_day(day_logs, date(2024, 3, 5), "08:00:00", "12:00:00")

    report = report_service.build_monthly_report("e1", 2024, 3)

    assert report.days[3].worked_seconds == 28800
    assert report.days[4].worked_seconds == 14400
    assert report.total_seconds == 43200
    assert report.total_hours == "12h 0m"


def test_slot_rendering_precedence(report_service, day_logs):
    log = store_day(day_logs, date(2024, 3, 5), "07:55:00", "bogus")
    log = log.with_justification(PunchType.AFTERNOON_IN, "/uploads/a.pdf")
    day_logs.put(log)

    day = report_service.build_monthly_report("e1", 2024, 3).days[4]

    assert day.cells[PunchType.MORNING_IN] == "07:55:00"
    assert day.cells[PunchType.MORNING_OUT] == EMPTY_SLOT
    assert day.cells[PunchType.AFTERNOON_IN] == JUSTIFIED_LABEL
    assert day.cells[PunchType.AFTERNOON_OUT] == EMPTY_SLOT
    assert day.justifications == {PunchType.AFTERNOON_IN: "/uploads/a.pdf"}
    assert day.worked_seconds == 0


def test_days_without_logs_show_placeholders(report_service):
    report = report_service.build_monthly_report("e1", 2024, 3)
    monday = report.days[3]

    assert not monday.is_weekend
    assert set(monday.cells.values()) == {EMPTY_SLOT}
    assert monday.to_row()["worked_hours"] == "0h 0m"


def test_unknown_employee_and_bad_month(report_service):
    with pytest.raises(NotFoundError):
        report_service.build_monthly_report("nobody", 2024, 3)
    with pytest.raises(ValidationError):
        report_service.build_monthly_report("e1", 2024, 13)


def test_report_header_and_dict(report_service):
    data = report_service.build_monthly_report("e1", 2024, 3).to_dict()

    assert data["month"] == "2024-03"
    assert data["employee"]["name"] == "Ana Souza"
    assert data["employee"]["address"] == "Not informed"
    assert len(data["days"]) == 31


def test_csv_export_has_total_line_per_employee(report_service, day_logs):
    store_day(day_logs, date(2024, 3, 4), "08:00:00", "12:00:00", "13:00:00", "17:00:00")
    report = report_service.build_monthly_report("e1", 2024, 3)

    text = reports_to_csv([report]).decode("utf-8-sig")
    lines = text.strip().splitlines()

    assert lines[0] == "employee,date,morning_in,morning_out,afternoon_in,afternoon_out,worked_hours"
    assert len(lines) == 1 + 31 + 1
    assert lines[-1] == "Ana Souza,Total 2024-03,,,,,8h 0m"
    assert "Ana Souza,2024-03-09,Saturday,Saturday,Saturday,Saturday," in lines

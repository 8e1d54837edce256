from __future__ import annotations

import csv
import io
from typing import Iterable

from ..core.enums import PunchType
from .model import MonthlyReport

FIELDNAMES = ["employee", "date", *[pt.value for pt in PunchType], "worked_hours"]


def reports_to_csv(reports: Iterable[MonthlyReport]) -> bytes:
    """One CSV for one or many monthly reports, with a total line per employee.

    Encoded utf-8-sig so spreadsheet tools pick up accents.
    """
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=FIELDNAMES)
    writer.writeheader()
    for report in reports:
        name = report.header()["name"]
        for day in report.days:
            writer.writerow({"employee": name, **day.to_row()})
        writer.writerow({"employee": name, "date": f"Total {report.month_label}", "worked_hours": report.total_hours})
    return out.getvalue().encode("utf-8-sig")

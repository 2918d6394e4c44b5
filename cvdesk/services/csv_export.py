from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from cvdesk.models.cv_record import CVRecord


CSV_COLUMNS = [
    ("ID", "id"),
    ("Name", "name"),
    ("Surname", "surname"),
    ("Email", "email"),
    ("Phone", "phone"),
    ("Position", "position"),
    ("Department", "department"),
    ("Experience", "experience"),
    ("Status", "status"),
    ("Submitted At", "submitted_at"),
]


def _cell(record: CVRecord, attribute: str) -> str:
    value = getattr(record, attribute)
    if value is None:
        return ""
    if attribute == "submitted_at":
        return value.isoformat()
    return str(value)


def render_cv_records_csv(records: Iterable[CVRecord]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for record in records:
        writer.writerow([_cell(record, attribute) for _, attribute in CSV_COLUMNS])
    return buffer.getvalue()

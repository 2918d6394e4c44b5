import csv
import io
from datetime import datetime

from cvdesk.models.cv_record import CVRecord
from cvdesk.services.csv_export import render_cv_records_csv


def _record(**values) -> CVRecord:
    defaults = {
        "id": 1,
        "name": "John",
        "email": "john@x.com",
        "position": "Developer",
        "status": "pending",
        "submitted_at": datetime(2024, 5, 1, 9, 30),
    }
    return CVRecord(**{**defaults, **values})


def test_header_only_for_empty_list():
    assert render_cv_records_csv([]) == "ID,Name,Surname,Email,Phone,Position,Department,Experience,Status,Submitted At\r\n"


def test_rows_follow_column_order_and_blank_nulls():
    text = render_cv_records_csv([_record(experience=4)])
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[1] == ["1", "John", "", "john@x.com", "", "Developer", "", "4", "pending", "2024-05-01T09:30:00"]


def test_quoting_survives_commas_quotes_and_newlines():
    tricky = _record(surname='O"Neil, Jr.', department="R&D\nLab")
    text = render_cv_records_csv([tricky])
    assert '"O""Neil, Jr."' in text
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[1][2] == 'O"Neil, Jr.'
    assert rows[1][6] == "R&D\nLab"

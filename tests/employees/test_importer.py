from __future__ import annotations

import io

import pandas as pd
import pytest

from src.hr_assistant.hr_assistant.core.exceptions import ValidationError
from src.hr_assistant.hr_assistant.employees.importer import normalize_header, read_spreadsheet, rows_from_frame


def test_headers_are_normalised():
    assert normalize_header(" Employee ID ") == "employeeId"
    assert normalize_header("E-mail Address") == "email"
    assert normalize_header("Favourite Colour") is None


def test_rows_from_frame_maps_and_cleans():
    df = pd.DataFrame(
        {
            "Emp ID": [1005.0, None],
            "Full Name": ["Sara Ali", "Omar Said"],
            "Hourly Rate": ["12.5", "n/a"],
            "Unknown": ["x", "y"],
        }
    )

    rows = rows_from_frame(df)

    assert rows[0] == {"employeeId": "1005", "name": "Sara Ali", "hourlyRate": 12.5}
    assert rows[1] == {"name": "Omar Said"}


def test_read_csv_upload():
    data = io.BytesIO(b"Employee ID,First Name,Last Name,Email\n1001,Sara,Ali,sara@example.com\n")

    [row] = read_spreadsheet(data, "staff.csv")

    assert row["employeeId"] == "1001"
    assert row["firstName"] == "Sara"
    assert row["email"] == "sara@example.com"


def test_empty_sheet_is_rejected():
    with pytest.raises(ValidationError):
        read_spreadsheet(io.BytesIO(b"Employee ID,Name\n"), "empty.csv")

"""Spreadsheet import of employee records (header normalisation and mapping)."""

from __future__ import annotations

import re
from typing import IO, Any, Optional, Union

import pandas as pd

from ..core.exceptions import ValidationError

HEADER_ALIASES = {
    "employeeid": "employeeId",
    "empid": "employeeId",
    "id": "employeeId",
    "staffid": "employeeId",
    "name": "name",
    "fullname": "name",
    "employeename": "name",
    "firstname": "firstName",
    "lastname": "lastName",
    "namear": "nameAr",
    "arabicname": "nameAr",
    "email": "email",
    "emailaddress": "email",
    "workemail": "email",
    "nisemail": "email",
    "personalemail": "personalEmail",
    "phone": "phone",
    "mobile": "phone",
    "phonenumber": "phone",
    "title": "title",
    "jobtitle": "title",
    "department": "department",
    "role": "role",
    "position": "role",
    "groupname": "groupName",
    "stage": "stage",
    "system": "system",
    "campus": "campus",
    "subject": "subject",
    "gender": "gender",
    "nationalid": "nationalId",
    "religion": "religion",
    "childrenatnis": "childrenAtNIS",
    "reportline1": "reportLine1",
    "reportline2": "reportLine2",
    "hourlyrate": "hourlyRate",
    "status": "status",
    "joiningdate": "joiningDate",
    "dateofjoining": "joiningDate",
    "dateofbirth": "dateOfBirth",
    "dob": "dateOfBirth",
    "birthdate": "dateOfBirth",
}
DATE_COLUMNS = ("joiningDate", "dateOfBirth")


def normalize_header(header: Any) -> Optional[str]:
    key = re.sub(r"[^a-z0-9]", "", str(header).strip().lower())
    return HEADER_ALIASES.get(key)


def _clean(value: Any) -> Any:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, str):
        return value.strip() or None
    return value


def _as_id(value: Any) -> Optional[str]:
    value = _clean(value)
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def rows_from_frame(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Map a raw sheet to document-shaped rows; unknown columns are dropped."""

    columns = {}
    for col in df.columns:
        target = normalize_header(col)
        if target and target not in columns.values():
            columns[col] = target
    frame = df[list(columns)].rename(columns=columns)

    for col in DATE_COLUMNS:
        if col in frame.columns:
            frame[col] = pd.to_datetime(frame[col], errors="coerce").dt.date

    rows = []
    for record in frame.to_dict(orient="records"):
        row = {k: _clean(v) for k, v in record.items()}
        if "employeeId" in row:
            row["employeeId"] = _as_id(row["employeeId"])
        if row.get("hourlyRate") is not None:
            try:
                row["hourlyRate"] = float(row["hourlyRate"])
            except (TypeError, ValueError):
                row["hourlyRate"] = None
        for key in ("phone", "nationalId"):
            if row.get(key) is not None:
                row[key] = _as_id(row[key])
        rows.append({k: v for k, v in row.items() if v is not None})
    return rows


def read_spreadsheet(stream: Union[IO[bytes], str], filename: str = "") -> list[dict[str, Any]]:
    name = (filename or "").lower()
    try:
        if name.endswith(".csv"):
            df = pd.read_csv(stream, dtype=object)
        else:
            df = pd.read_excel(stream, dtype=object, engine="openpyxl")
    except (ValueError, OSError) as e:
        raise ValidationError(f"Could not read the spreadsheet: {e}", {"file": ["Unsupported or corrupted file."]})
    if df.empty:
        raise ValidationError("The spreadsheet has no rows.", {"file": ["The spreadsheet has no rows."]})
    return rows_from_frame(df)

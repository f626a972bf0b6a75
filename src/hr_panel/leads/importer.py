"""Turn pasted text or an uploaded spreadsheet into lead rows."""

from __future__ import annotations

import io
from typing import Iterable, Optional, Sequence

import pandas as pd

from ..core.exceptions import ValidationError
from .model import LeadInput

NAME_KEYS = ("name",)
EMAIL_KEYS = ("email", "mail")
PHONE_KEYS = ("phone", "contact", "mobile")


def parse_text(text: str) -> list[LeadInput]:
    """One lead per line: ``Name, Email, Phone``. Lines without a name are dropped."""
    out: list[LeadInput] = []
    for line in (text or "").strip().splitlines():
        parts = [p.strip() for p in line.split(",")]
        if not parts or not parts[0]:
            continue
        out.append(
            LeadInput(
                name=parts[0],
                email=parts[1] if len(parts) > 1 else "",
                phone=parts[2] if len(parts) > 2 else "",
            )
        )
    return out


def find_column(columns: Iterable[object], keys: Sequence[str]) -> Optional[str]:
    """First column whose lowercased header contains any of ``keys``."""
    for col in columns:
        header = str(col).lower()
        if any(k in header for k in keys):
            return col
    return None


def parse_rows(df: pd.DataFrame) -> list[LeadInput]:
    name_col = find_column(df.columns, NAME_KEYS)
    if name_col is None:
        return []
    email_col = find_column(df.columns, EMAIL_KEYS)
    phone_col = find_column(df.columns, PHONE_KEYS)

    df = df.fillna("")
    out: list[LeadInput] = []
    for _, row in df.iterrows():
        name = str(row[name_col]).strip()
        if not name:
            continue
        out.append(
            LeadInput(
                name=name,
                email=str(row[email_col]).strip() if email_col is not None else "",
                phone=str(row[phone_col]).strip() if phone_col is not None else "",
            )
        )
    return out


def read_spreadsheet(file_name: str, content: bytes) -> pd.DataFrame:
    lowered = (file_name or "").lower()
    try:
        if lowered.endswith(".csv"):
            return pd.read_csv(io.BytesIO(content), dtype=str)
        if lowered.endswith((".xlsx", ".xlsm")):
            # First sheet only.
            return pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str, engine="openpyxl")
    except Exception as e:
        raise ValidationError("Failed to parse file. Please ensure it is a valid .xlsx or .csv file.") from e
    raise ValidationError("Unsupported file type. Upload an .xlsx or .csv file.")


def parse_spreadsheet(file_name: str, content: bytes) -> list[LeadInput]:
    return parse_rows(read_spreadsheet(file_name, content))

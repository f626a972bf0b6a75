from __future__ import annotations

import io

import pandas as pd
import pytest

from hr_panel.core.exceptions import ValidationError
from hr_panel.leads import importer


def test_parse_text_drops_nameless_lines():
    rows = importer.parse_text("Alpha, a@x.com, 1\n\n , b@x.com\nBeta")

    assert [(r.name, r.email, r.phone) for r in rows] == [("Alpha", "a@x.com", "1"), ("Beta", "", "")]


def test_find_column_matches_substrings():
    columns = ["Customer Name", "E-Mail Address", "Contact No"]

    assert importer.find_column(columns, importer.NAME_KEYS) == "Customer Name"
    assert importer.find_column(columns, importer.EMAIL_KEYS) == "E-Mail Address"
    assert importer.find_column(columns, importer.PHONE_KEYS) == "Contact No"
    assert importer.find_column(["Company"], importer.NAME_KEYS) is None


def test_csv_upload():
    content = b"Full Name,Mail,Mobile\nAlpha,a@x.com,9999\n,nobody@x.com,0\nBeta,,\n"

    rows = importer.parse_spreadsheet("leads.csv", content)

    assert [(r.name, r.email, r.phone) for r in rows] == [("Alpha", "a@x.com", "9999"), ("Beta", "", "")]


def test_xlsx_upload():
    buf = io.BytesIO()
    pd.DataFrame({"Name": ["Alpha", "Beta"], "Phone": ["123", "456"]}).to_excel(buf, index=False, engine="openpyxl")

    rows = importer.parse_spreadsheet("leads.xlsx", buf.getvalue())

    assert [(r.name, r.phone, r.email) for r in rows] == [("Alpha", "123", ""), ("Beta", "456", "")]


def test_sheet_without_name_column_yields_nothing():
    assert importer.parse_spreadsheet("leads.csv", b"Company,Email\nAcme,a@x.com\n") == []


def test_unsupported_or_broken_files():
    with pytest.raises(ValidationError, match="Unsupported"):
        importer.parse_spreadsheet("leads.txt", b"Alpha")
    with pytest.raises(ValidationError, match="Failed to parse"):
        importer.parse_spreadsheet("leads.xlsx", b"not a zip file")

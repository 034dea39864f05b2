"""Unit tests for export serializers."""

import json
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

import pytest

from retail_pos.services.exporter import (
    BOM,
    PDF_SAVED_NOTICE,
    build_export,
    export_filename,
    is_mobile_user_agent,
    to_csv,
    to_excel_csv,
    to_json,
    to_pdf_table,
)

TODAY = date(2024, 5, 17)


# ── CSV ───────────────────────────────────────────

def test_to_csv_header_from_first_record():
    records = [{"name": "Soap", "qty": 2}, {"qty": 3, "name": "Rice", "extra": "x"}]
    assert to_csv(records) == "name,qty\nSoap,2\nRice,3"


def test_to_csv_quotes_commas_and_quotes():
    records = [{"name": 'Say "hi", ok', "qty": 1}]
    assert to_csv(records) == 'name,qty\n"Say ""hi"", ok",1'


def test_to_csv_missing_and_none_values_are_empty():
    records = [{"a": 1, "b": None}, {"a": 2}]
    assert to_csv(records) == "a,b\n1,\n2,"


def test_to_csv_empty():
    assert to_csv([]) == ""


def test_excel_export_has_bom_and_quoted_name():
    text = to_excel_csv([{"name": "A,B", "qty": 2}])
    assert text.startswith(BOM)
    assert text[len(BOM):].splitlines() == ["name,qty", '"A,B",2']


# ── JSON ──────────────────────────────────────────

def test_to_json_handles_decimal_dates_and_uuid():
    uid = UUID("12345678-1234-5678-1234-567812345678")
    text = to_json([{"id": uid, "price": Decimal("2.50"), "at": datetime(2024, 1, 2, 3, 4, 5)}])
    assert json.loads(text) == [{"id": str(uid), "price": 2.5, "at": "2024-01-02T03:04:05"}]
    assert "\n  " in text


# ── PDF ───────────────────────────────────────────

def test_to_pdf_table_produces_pdf_bytes():
    content = to_pdf_table([{"name": "Soap & <Co>", "qty": 2}], "Products Report")
    assert content.startswith(b"%PDF")


def test_to_pdf_table_empty_records_still_renders():
    assert to_pdf_table([], "Empty").startswith(b"%PDF")


# ── build_export ──────────────────────────────────

def test_export_filename():
    assert export_filename("products", "csv", TODAY) == "products_2024-05-17.csv"


@pytest.mark.parametrize(
    "fmt, filename",
    [
        ("csv", "products_2024-05-17.csv"),
        ("json", "products_2024-05-17.json"),
        ("excel", "products_2024-05-17.xlsx"),
        ("pdf", "products_2024-05-17.pdf"),
    ],
)
def test_build_export_filenames(fmt, filename):
    export = build_export([{"name": "Soap"}], "products", fmt, today=TODAY)
    assert export.filename == filename
    assert export.content


def test_build_export_excel_is_csv_text():
    export = build_export([{"name": "A,B", "qty": 2}], "products", "excel", today=TODAY)
    assert export.content.decode("utf-8") == BOM + 'name,qty\n"A,B",2'


def test_pdf_notice_only_for_mobile():
    iphone = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"
    desktop = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
    assert build_export([], "sales", "pdf", user_agent=iphone, today=TODAY).notice == PDF_SAVED_NOTICE
    assert build_export([], "sales", "pdf", user_agent=desktop, today=TODAY).notice is None
    assert build_export([], "sales", "csv", user_agent=iphone, today=TODAY).notice is None


def test_build_export_unknown_format():
    with pytest.raises(ValueError):
        build_export([], "products", "xml")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "user_agent, expected",
    [
        ("Mozilla/5.0 (Linux; Android 14)", True),
        ("opera mini/8.0", True),
        ("Mozilla/5.0 (Macintosh; Intel Mac OS X)", False),
        (None, False),
    ],
)
def test_is_mobile_user_agent(user_agent, expected):
    assert is_mobile_user_agent(user_agent) is expected


# ── Structured values and headers ─────────────────

def test_to_csv_quotes_rendered_json_values():
    from retail_pos.services.importer import parse_csv

    text = to_csv([{"meta": {"a": 1, "b": 2}, "qty": 2}])
    assert text.splitlines()[1] == '"{""a"": 1, ""b"": 2}",2'
    assert parse_csv(text) == [{"meta": '{"a": 1, "b": 2}', "qty": 2}]


def test_to_csv_quotes_list_values():
    assert to_csv([{"tags": ["x", "y"]}]) == 'tags\n"[""x"", ""y""]"'


def test_to_csv_quotes_header_keys():
    text = to_csv([{"name, full": "Soap", 'say "qty"': 1}])
    assert text.splitlines()[0] == '"name, full","say ""qty"""'

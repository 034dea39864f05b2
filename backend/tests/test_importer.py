"""Unit tests for import parsing and row validation."""

import pytest

from retail_pos.services.exporter import to_csv
from retail_pos.services.importer import (
    parse_csv,
    parse_import,
    parse_json,
    summarize_errors,
    validate_customers,
    validate_import,
    validate_products,
    validate_suppliers,
)


# ── parse_csv ─────────────────────────────────────

def test_parse_csv_coerces_numbers():
    rows = parse_csv("name,price,stock\nSoap, 2.5, 10\nRice,3,0")
    assert rows == [
        {"name": "Soap", "price": 2.5, "stock": 10},
        {"name": "Rice", "price": 3, "stock": 0},
    ]


def test_parse_csv_quoted_commas_and_quotes():
    rows = parse_csv('name,note\n"A,B","say ""hi"""')
    assert rows == [{"name": "A,B", "note": 'say "hi"'}]


def test_parse_csv_pads_short_rows():
    rows = parse_csv("name,email,phone\nJane")
    assert rows == [{"name": "Jane", "email": "", "phone": ""}]


def test_parse_csv_skips_blank_lines():
    rows = parse_csv("\nname,stock\n\nSoap,1\n   \nRice,2\n")
    assert [row["name"] for row in rows] == ["Soap", "Rice"]


@pytest.mark.parametrize("text", ["", "   \n  ", None])
def test_parse_csv_empty_input(text):
    assert parse_csv(text) == []


def test_parse_csv_header_only():
    assert parse_csv("name,price") == []


def test_parse_csv_non_numeric_kept_as_text():
    rows = parse_csv("code\n12abc\n007")
    assert rows == [{"code": "12abc"}, {"code": 7}]


# ── parse_json ────────────────────────────────────

def test_parse_json_list():
    assert parse_json('[{"a": 1}, {"a": 2}]') == [{"a": 1}, {"a": 2}]


def test_parse_json_wraps_single_object():
    assert parse_json('{"a": 1}') == [{"a": 1}]


def test_parse_json_malformed_returns_empty(caplog):
    with caplog.at_level("ERROR", logger="retail_pos.services.importer"):
        assert parse_json("{not json") == []
    assert "Error parsing JSON" in caplog.text


def test_parse_import_dispatch_and_unknown_format():
    assert parse_import("x\n1", "csv") == [{"x": 1}]
    assert parse_import("[1]", "json") == [1]
    with pytest.raises(ValueError):
        parse_import("x", "xml")


# ── validators ────────────────────────────────────

def test_validate_products_valid():
    result = validate_products([{"name": "Soap", "price": 2.5, "stock": 10}])
    assert result.valid
    assert result.errors == []


def test_validate_products_reports_each_problem_with_row_number():
    rows = [
        {"name": "Soap", "price": 2.5, "stock": 10},
        {"name": "", "price": "abc", "stock": None},
        {"price": "3.5", "stock": "7"},
    ]
    result = validate_products(rows)
    assert not result.valid
    assert result.errors == [
        "Row 2: Missing product name",
        "Row 2: Invalid price",
        "Row 2: Invalid stock quantity",
        "Row 3: Missing product name",
    ]


def test_validate_products_zero_values_are_valid():
    assert validate_products([{"name": "Free", "price": 0, "stock": 0}]).valid


def test_validate_products_rejects_booleans_and_nan():
    result = validate_products([{"name": "X", "price": True, "stock": float("nan")}])
    assert result.errors == ["Row 1: Invalid price", "Row 1: Invalid stock quantity"]


def test_validate_customers_email():
    result = validate_customers([
        {"name": "Jane", "email": "jane@example.com"},
        {"name": "John", "email": "not-an-email"},
        {"name": "Anon", "email": ""},
        {"email": "x@y.z"},
    ])
    assert result.errors == [
        "Row 2: Invalid email format",
        "Row 4: Missing customer name",
    ]


def test_validate_suppliers_accepts_both_contact_keys():
    result = validate_suppliers([
        {"name": "Acme", "contactPerson": "Ann"},
        {"name": "Bolt", "contact_person": "Ben"},
        {"name": "Crate"},
    ])
    assert result.errors == ["Row 3: Missing contact person"]


@pytest.mark.parametrize("data", [None, {"name": "x"}, "rows", 3])
def test_validators_require_a_list(data):
    for validate in (validate_products, validate_customers, validate_suppliers):
        result = validate(data)
        assert result.valid is False
        assert result.errors == ["Data must be an array"]


def test_validators_do_not_mutate_rows():
    rows = [{"name": "Soap", "price": "x", "stock": 1}]
    snapshot = [dict(row) for row in rows]
    validate_products(rows)
    assert rows == snapshot


def test_non_mapping_rows_are_reported_not_raised():
    result = validate_products(["oops"])
    assert "Row 1: Missing product name" in result.errors


def test_validate_import_unknown_entity_passes():
    assert validate_import("expenses", "anything").valid


def test_empty_list_is_valid():
    assert validate_products([]).valid


# ── summarize_errors ──────────────────────────────

def test_summarize_errors_truncates_after_five():
    errors = [f"Row {n}: Missing product name" for n in range(1, 8)]
    summary = summarize_errors(errors)
    lines = summary.splitlines()
    assert lines[:5] == errors[:5]
    assert lines[-1] == "...and 2 more errors"


def test_summarize_errors_short_list():
    assert summarize_errors(["a", "b"]) == "a\nb"


# ── Round trip with the CSV exporter ──────────────

def test_exported_csv_parses_back_to_same_rows():
    records = [
        {"name": "Soap", "category": "Hygiene", "price": 2.5, "stock": 10},
        {"name": 'Rice "Pishori", 5kg', "category": "Food", "price": 12000, "stock": 3},
    ]
    assert parse_csv(to_csv(records)) == records


def test_product_missing_name_names_row_one():
    result = validate_products([{"price": 10, "stock": 5}])
    assert result.valid is False
    assert result.errors == ["Row 1: Missing product name"]


# ── Malformed and out-of-range input ──────────────

def test_parse_csv_oversized_field_returns_empty(caplog):
    text = 'name,price,stock\n"' + "x" * 200_000 + '",1,2'
    with caplog.at_level("ERROR", logger="retail_pos.services.importer"):
        assert parse_csv(text) == []
    assert "Error parsing CSV" in caplog.text


def test_parse_csv_overflowing_number_becomes_inf():
    assert parse_csv("stock\n1e400") == [{"stock": float("inf")}]


@pytest.mark.parametrize("stock", [float("inf"), float("-inf"), "1e400", " -1e400 "])
def test_validate_products_rejects_non_finite_numbers(stock):
    result = validate_products([{"name": "Soap", "price": 10, "stock": stock}])
    assert result.errors == ["Row 1: Invalid stock quantity"]


def test_validate_products_rejects_json_infinity():
    rows = parse_json('[{"name": "Soap", "price": Infinity, "stock": 1}]')
    assert validate_products(rows).errors == ["Row 1: Invalid price"]

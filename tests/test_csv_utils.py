"""Unit tests for the CSV helpers"""

from datetime import date

from fest_analytics.utils.csv_utils import (
    ColumnHeader,
    array_to_csv,
    escape_csv_field,
    report_filename,
    safe_filename_part,
)


def test_escape_plain_and_none():
    assert escape_csv_field(None) == ""
    assert escape_csv_field("Dance") == "Dance"
    assert escape_csv_field(0) == "0"
    assert escape_csv_field(250) == "250"


def test_escape_quotes_commas_and_newlines():
    assert escape_csv_field("Rao, Anil") == '"Rao, Anil"'
    assert escape_csv_field('The "Band"') == '"The ""Band"""'
    assert escape_csv_field("line1\nline2") == '"line1\nline2"'


def test_array_to_csv_uses_key_then_label():
    headers = [ColumnHeader("name", "Name"), ColumnHeader(None, "Amount")]
    rows = [{"name": "Quiz, Final", "Amount": 100}, {"name": "Solo", "Amount": 0}]

    assert array_to_csv(rows, headers) == 'Name,Amount\n"Quiz, Final",100\nSolo,0'


def test_array_to_csv_without_rows_keeps_header():
    headers = [ColumnHeader("a", "A"), ColumnHeader("b", "B")]
    assert array_to_csv([], headers) == "A,B"


def test_missing_row_values_are_blank():
    headers = [ColumnHeader("a", "A"), ColumnHeader("b", "B")]
    assert array_to_csv([{"a": 1}], headers) == "A,B\n1,"


def test_report_filename_and_safe_part():
    assert report_filename("payments", date(2026, 3, 1)) == "payments_2026-03-01.csv"
    assert report_filename("nba_report").startswith("nba_report_")
    assert safe_filename_part("Battle of Bands 2.0") == "Battle_of_Bands_2_0"

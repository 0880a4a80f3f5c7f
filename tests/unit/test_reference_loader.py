"""
Unit tests for tax_office_resolver.reference.loader.
"""

import logging

import pytest

from tax_office_resolver.reference.loader import (
    ReferenceDataError,
    ReferenceTable,
    build_reference_table,
    load_reference_table,
    read_reference_rows,
)

HEADER = "code,bin,name,region"


class TestReadReferenceRows:
    """Tests for read_reference_rows."""

    def test_skips_header_and_blank_lines(self, write_reference_csv):
        path = write_reference_csv(
            [
                HEADER,
                "0318,000000000001,УГД по Есильскому району,Акмолинская область",
                "",
                "6003,000000000002,УГД по Ауэзовскому району,г. Алматы",
            ]
        )
        rows = read_reference_rows(path)
        assert [row["code"] for row in rows] == ["0318", "6003"]
        assert rows[0]["region"] == "Акмолинская область"

    def test_values_are_trimmed(self, write_reference_csv):
        path = write_reference_csv([HEADER, " 0618 , 000000000007 , УГД по г.Актобе , "])
        assert read_reference_rows(path) == [
            {"code": "0618", "bin": "000000000007", "name": "УГД по г.Актобе", "region": ""}
        ]

    def test_quoted_field_with_comma(self, write_reference_csv):
        path = write_reference_csv([HEADER, '4309,000000000006,"УГД ""Морпорт Актау"", порт",'])
        assert read_reference_rows(path)[0]["name"] == 'УГД "Морпорт Актау", порт'

    def test_short_row_raises(self, write_reference_csv):
        path = write_reference_csv([HEADER, "0318,000000000001,УГД по Есильскому району"])
        with pytest.raises(ReferenceDataError, match="expected 4 columns, got 3"):
            read_reference_rows(path)

    def test_byte_order_mark_is_ignored(self, write_reference_csv):
        path = write_reference_csv(
            [HEADER, "0618,000000000007,УГД по г.Актобе,Актюбинская область"],
            encoding="utf-8-sig",
        )
        assert read_reference_rows(path)[0]["code"] == "0618"


class TestLoadReferenceTable:
    """Tests for load_reference_table."""

    def test_loads_records_in_file_order(self, write_reference_csv):
        path = write_reference_csv(
            [
                HEADER,
                "6003,000000000002,УГД по Ауэзовскому району,г. Алматы",
                "6004,000000000003,УГД по Бостандыкскому району,г. Алматы",
            ]
        )
        table = load_reference_table(path)
        assert len(table) == 2
        assert [r.code for r in table] == ["6003", "6004"]
        assert table.source == path
        assert table.records[1].name_tokens == ("бостандыкск",)
        assert table.records[1].normalized_region == "алматы"

    def test_accepts_string_path(self, write_reference_csv):
        path = write_reference_csv([HEADER, "0618,000000000007,УГД по г.Актобе,"])
        assert len(load_reference_table(str(path))) == 1

    def test_missing_file_degrades_to_empty_table(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="tax_office_resolver"):
            table = load_reference_table(tmp_path / "missing.csv")
        assert table.is_empty
        assert "Failed to load tax office reference data" in caplog.text

    def test_malformed_file_degrades_to_empty_table(self, write_reference_csv, caplog):
        path = write_reference_csv([HEADER, "0318,000000000001"])
        with caplog.at_level(logging.ERROR, logger="tax_office_resolver"):
            table = load_reference_table(path)
        assert table.is_empty
        assert len(table) == 0

    def test_header_only_file_is_empty(self, write_reference_csv):
        assert load_reference_table(write_reference_csv([HEADER])).is_empty

    def test_logs_record_count(self, write_reference_csv, caplog):
        path = write_reference_csv([HEADER, "0618,000000000007,УГД по г.Актобе,"])
        with caplog.at_level(logging.INFO, logger="tax_office_resolver"):
            load_reference_table(path)
        assert "Loaded 1 tax office records" in caplog.text


class TestReferenceTable:
    """Tests for ReferenceTable and build_reference_table."""

    def test_build_preserves_order(self, sample_table):
        assert [r.code for r in sample_table][:3] == ["0318", "6003", "6004"]

    def test_build_accepts_missing_region_key(self):
        table = build_reference_table([{"code": "1", "bin": "2", "name": "ДГД по г.Алматы"}])
        assert table.records[0].raw_region is None

    def test_find_by_code(self, sample_table):
        assert sample_table.find_by_code("7206").raw_name == "УГД по городу Сатпаеву"
        assert sample_table.find_by_code("9999") is None

    def test_default_table_is_empty(self):
        table = ReferenceTable()
        assert table.is_empty
        assert list(table) == []

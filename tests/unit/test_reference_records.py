"""
Unit tests for tax_office_resolver.reference.records.
"""

import dataclasses

import pytest

from tax_office_resolver.reference.records import (
    TaxOfficeRecord,
    build_record,
    is_district_name,
    normalize_name_for_tokens,
    normalize_region_name,
)


class TestIsDistrictName:
    """Tests for is_district_name."""

    @pytest.mark.parametrize(
        "name",
        [
            "УГД по Есильскому району",
            "Есильское районное управление",
            "РАЙОН ЕСИЛЬ",
        ],
    )
    def test_district_names(self, name):
        assert is_district_name(name) is True

    @pytest.mark.parametrize("name", ["ДГД по г.Алматы", 'УГД "Морпорт Актау"', ""])
    def test_non_district_names(self, name):
        assert is_district_name(name) is False


class TestNormalizeRegionName:
    """Tests for normalize_region_name."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value):
        assert normalize_region_name(value) is None

    @pytest.mark.parametrize(
        "region,expected",
        [
            ("Акмолинская область", "акмолинская"),
            ("Акмолинская обл.", "акмолинская"),
            ("Акмолинская обл", "акмолинская"),
            ("г. Алматы", "алматы"),
            ("г.Алматы", "алматы"),
            ("г Шымкент", "шымкент"),
            ("город Астана", "астана"),
            ("  Северо-Казахстанская   область ", "северо-казахстанская"),
        ],
    )
    def test_strips_suffixes_and_prefixes(self, region, expected):
        assert normalize_region_name(region) == expected

    def test_city_prefix_needs_separator(self):
        """A region that merely starts with "г" keeps its first letter."""
        assert normalize_region_name("Гурьевская обл") == "гурьевская"


class TestNormalizeNameForTokens:
    """Tests for normalize_name_for_tokens."""

    def test_authority_and_city_prefix(self):
        assert normalize_name_for_tokens("ДГД по г.Алматы") == ["алматы"]

    def test_city_dative_prefix(self):
        assert normalize_name_for_tokens("УГД по городу Сатпаеву") == ["сатпаеву"]

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("УГД по Есильскому району", ["есильск"]),
            ("УГД по Бостандыкскому району", ["бостандыкск"]),
            ("УГД по Абайскому району", ["абайск"]),
            ("УГД по Сарыаркинскому району", ["сарыаркинск"]),
        ],
    )
    def test_district_suffix_form_keeps_stem(self, name, expected):
        assert normalize_name_for_tokens(name) == expected

    def test_district_suffix_form_trims_om(self):
        """Stems ending in "ом" lose those two letters."""
        assert normalize_name_for_tokens("УГД по Коломому району") == ["кол"]

    def test_district_named_after(self):
        assert normalize_name_for_tokens("УГД по району имени Казыбек би") == [
            "казыбек",
            "би",
        ]

    def test_district_named_without_imeni(self):
        assert normalize_name_for_tokens("УГД по району Байконыр") == ["байконыр"]

    def test_quoted_name(self):
        assert normalize_name_for_tokens('УГД "Астана-жаңа қала"') == [
            "астана-жаңа",
            "қала",
        ]

    def test_trailing_district_word_removed(self):
        assert normalize_name_for_tokens("Управление район") == ["управление"]

    def test_kazakh_region_word_removed(self):
        assert normalize_name_for_tokens("Ақмола облысы бойынша МКД") == [
            "ақмола",
            "бойынша",
            "мкд",
        ]

    def test_short_tokens_dropped_but_digits_kept(self):
        assert normalize_name_for_tokens("УГД № 5 и 12") == ["5", "12"]

    def test_unmatched_name_is_plain_tokens(self):
        assert normalize_name_for_tokens("Есильское районное управление") == [
            "есильское",
            "районное",
            "управление",
        ]


class TestBuildRecord:
    """Tests for build_record."""

    def test_derives_fields(self):
        record = build_record(
            code="0318",
            bin="000000000001",
            name="  УГД по Есильскому району ",
            region=" Акмолинская область ",
        )
        assert record.code == "0318"
        assert record.raw_name == "УГД по Есильскому району"
        assert record.raw_region == "Акмолинская область"
        assert record.name_tokens == ("есильск",)
        assert record.normalized_region == "акмолинская"
        assert record.is_district is True

    def test_missing_region(self):
        record = build_record(code="6003", bin="1", name="ДГД по г.Алматы", region="")
        assert record.raw_region is None
        assert record.normalized_region is None
        assert record.is_district is False

    def test_record_is_immutable(self, make_record):
        record = make_record("ДГД по г.Алматы")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.code = "9999"  # type: ignore[misc]

    def test_to_dict_uses_raw_values(self, make_record):
        record = make_record("ДГД по г.Алматы", "г. Алматы", code="6003")
        assert record.to_dict() == {
            "code": "6003",
            "bin": "000000000000",
            "name": "ДГД по г.Алматы",
            "region": "г. Алматы",
        }

    def test_default_record(self):
        record = TaxOfficeRecord(code="1", bin="2", raw_name="x")
        assert record.name_tokens == ()
        assert record.normalized_region is None

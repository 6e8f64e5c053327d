"""Tests for package weight, serving size and piece count extraction."""

import pytest

from matupptackaren.products.extract import (
    extract_package_weight,
    extract_pieces_per_package,
    extract_serving_size,
    parse_grams,
    parse_kilograms,
    parse_piece_count,
    round_half_up,
    to_number,
)


class TestParseGrams:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("3 oz (85 g)", 85.0),
            ("240g", 240.0),
            ("185 g", 185.0),
            ("12,5 g", 12.5),
            ("0.5g", 0.5),
            ("1.5 kg", None),
            ("1 l", None),
            ("", None),
        ],
    )
    def test_table(self, text, expected):
        assert parse_grams(text) == expected

    def test_parenthesised_value_preferred(self):
        assert parse_grams("2 x 100 g (200 g)") == 200.0

    def test_word_boundary(self):
        # "gram" is not the unit "g"
        assert parse_grams("500 gram") is None


class TestParseKilograms:
    def test_dot_decimal(self):
        assert parse_kilograms("1.5 kg") == 1500.0

    def test_comma_decimal(self):
        assert parse_kilograms("2,5kg") == 2500.0

    def test_no_match(self):
        assert parse_kilograms("500 g") is None


class TestParsePieceCount:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("6 x 40g", 6),
            ("6 st", 6),
            ("4-pack", 4),
            ("12 pieces", 12),
            ("1 piece", 1),
            ("8 STYCK", 8),
            ("185 g", None),
            ("0 st", None),
            ("", None),
        ],
    )
    def test_table(self, text, expected):
        assert parse_piece_count(text) == expected


class TestToNumber:
    def test_comma_string(self):
        assert to_number("1,5") == 1.5

    def test_int(self):
        assert to_number(330) == 330.0

    def test_bool_is_absent(self):
        assert to_number(True) is None

    def test_garbage(self):
        assert to_number("abc") is None
        assert to_number("nan") is None
        assert to_number([]) is None
        assert to_number("  ") is None


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(0.5) == 1


class TestPackageWeight:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ({"quantity": "3 oz (85 g)"}, 85.0),
            ({"quantity": "240g"}, 240.0),
            ({"quantity": "1.5 kg"}, 1500.0),
            ({"quantity": "185 g"}, 185.0),
            ({"quantity": "1 l"}, None),
            ({}, None),
        ],
    )
    def test_quantity_table(self, raw, expected):
        assert extract_package_weight(raw) == expected

    def test_net_weight_in_grams(self):
        raw = {"net_weight_value": "500", "net_weight_unit": "g"}
        assert extract_package_weight(raw) == 500.0

    def test_net_weight_other_unit_ignored(self):
        raw = {"net_weight_value": "500", "net_weight_unit": "ml"}
        assert extract_package_weight(raw) is None

    def test_product_quantity(self):
        assert extract_package_weight({"product_quantity": "750"}) == 750.0
        assert extract_package_weight({"product_quantity": 330}) == 330.0

    def test_packaging_text(self):
        assert extract_package_weight({"packaging": "Kartong 400 g"}) == 400.0

    def test_quantity_wins_over_fallbacks(self):
        raw = {"quantity": "200 g", "product_quantity": "999", "packaging": "50 g"}
        assert extract_package_weight(raw) == 200.0

    def test_malformed_fields_are_absent(self):
        raw = {"quantity": ["x"], "product_quantity": "xyz", "net_weight_unit": 5}
        assert extract_package_weight(raw) is None


class TestServingSize:
    def test_serving_quantity_string(self):
        assert extract_serving_size({"serving_quantity": "30"}) == 30.0

    def test_serving_quantity_number(self):
        assert extract_serving_size({"serving_quantity": 25}) == 25.0

    def test_nutriments_serving_size(self):
        raw = {"nutriments": {"serving_size": "40 g"}}
        assert extract_serving_size(raw) == 40.0

    def test_serving_size_comma_decimal(self):
        assert extract_serving_size({"serving_size": "12,5 g"}) == 12.5

    def test_serving_size_prefers_gram_value(self):
        assert extract_serving_size({"serving_size": "1 skiva (30 g)"}) == 30.0

    def test_serving_size_digits_only(self):
        assert extract_serving_size({"serving_size": "2 st"}) == 2.0

    def test_energy_ratio(self):
        raw = {"nutriments": {"energy_serving": 450, "energy_100g": 1500}}
        assert extract_serving_size(raw) == 30.0

    def test_energy_ratio_rounds(self):
        raw = {"nutriments": {"energy_serving": 500, "energy_100g": 1500}}
        assert extract_serving_size(raw) == 33.0

    def test_kcal_ratio_second_attempt(self):
        raw = {"nutriments": {"energy-kcal_serving": 54, "energy-kcal_100g": 360}}
        assert extract_serving_size(raw) == 15.0

    def test_zero_serving_quantity_falls_through(self):
        raw = {"serving_quantity": 0, "serving_size": "20 g"}
        assert extract_serving_size(raw) == 20.0

    def test_unparseable_is_absent(self):
        assert extract_serving_size({"serving_quantity": "abc"}) is None
        assert extract_serving_size({"nutriments": "oops"}) is None
        assert extract_serving_size({}) is None


class TestPiecesPerPackage:
    def test_count_in_quantity(self):
        assert extract_pieces_per_package({"quantity": "6 x 40g"}, 40.0, None) == 6
        assert extract_pieces_per_package({"quantity": "6 st"}, None, None) == 6

    def test_weight_over_serving(self):
        assert extract_pieces_per_package({}, 240.0, 40.0) == 6

    def test_ratio_floor(self):
        assert extract_pieces_per_package({}, 185.0, 30.0) == 6

    def test_ratio_of_one_keeps_default(self):
        assert extract_pieces_per_package({}, 100.0, 60.0) == 1

    def test_single_piece_in_quantity_uses_ratio(self):
        raw = {"quantity": "1 st"}
        assert extract_pieces_per_package(raw, 240.0, 40.0) == 6

    def test_packaging_then_name(self):
        assert extract_pieces_per_package({"packaging": "Påse 10 st"}, None, None) == 10
        raw = {"product_name": "Pågen Gifflar 8-pack"}
        assert extract_pieces_per_package(raw, None, None) == 8

    def test_packaging_before_name(self):
        raw = {"packaging": "4 st", "product_name": "Bullar 8 st"}
        assert extract_pieces_per_package(raw, None, None) == 4

    def test_no_signal(self):
        assert extract_pieces_per_package({}, None, None) == 1

"""Tests for the product normalizer."""

import copy

import pytest

from matupptackaren.products.models import MissingIdentityError, NormalizedProduct
from matupptackaren.products.normalizer import normalize_nutrients, normalize_product


@pytest.fixture
def crispbread_payload():
    return {
        "code": "7300400481601",
        "product_name": "Crisp rye bread",
        "product_name_sv": "Knäckebröd Råg",
        "brands": "Wasa",
        "image_url": "https://images.example/7300400481601.jpg",
        "nutriscore_grade": "A",
        "ecoscore_grade": "b",
        "nova_group": "3",
        "categories": "Plant-based foods and beverages, Breads, Crispbreads",
        "categories_tags": ["en:plant-based-foods-and-beverages", "en:breads", "en:crispbreads"],
        "ingredients_text": "Wholegrain rye flour, salt, yeast",
        "ingredients_text_sv": "Fullkornsrågmjöl, salt, jäst",
        "quantity": "185 g",
        "serving_quantity": "30",
        "packaging": "Kartong",
        "countries": "Sweden",
        "nutriments": {
            "energy_100g": 1500,
            "fat_100g": 2,
            "fiber_100g": 12,
            "proteins_100g": 10,
        },
    }


def test_normalize_product_fields(crispbread_payload):
    product = normalize_product(crispbread_payload)

    assert isinstance(product, NormalizedProduct)
    assert product.id == "7300400481601"
    assert product.name == "Knäckebröd Råg"
    assert product.names == ("Knäckebröd Råg", "Crisp rye bread")
    assert product.brands == "Wasa"
    assert product.image_url == "https://images.example/7300400481601.jpg"
    assert product.nutriscore_grade == "a"
    assert product.ecoscore_grade == "b"
    assert product.nova_group == 3
    assert product.categories_tags == (
        "en:plant-based-foods-and-beverages",
        "en:breads",
        "en:crispbreads",
    )
    assert product.ingredients_text == "Fullkornsrågmjöl, salt, jäst"
    assert product.countries == "Sweden"
    assert product.quantity == "185 g"
    assert product.packaging == "Kartong"


def test_package_facts(crispbread_payload):
    product = normalize_product(crispbread_payload)
    assert product.package_weight == 185.0
    assert product.serving_size == 30.0
    assert product.pieces_per_package == 6


def test_nutrients(crispbread_payload):
    n = normalize_product(crispbread_payload).nutrients
    assert n.energy == 1500.0
    assert n.energy_unit == "kJ"
    assert n.fat == 2.0
    assert n.fiber == 12.0
    assert n.proteins == 10.0
    assert n.sugars is None
    assert n.saturated_fat is None


def test_idempotent_and_pure(crispbread_payload):
    before = copy.deepcopy(crispbread_payload)
    first = normalize_product(crispbread_payload)
    second = normalize_product(crispbread_payload)
    assert first == second
    assert crispbread_payload == before


class TestIdentity:
    def test_missing_identity_raises(self):
        with pytest.raises(MissingIdentityError):
            normalize_product({"product_name": "Mystery"})

    def test_empty_code_is_missing(self):
        with pytest.raises(MissingIdentityError):
            normalize_product({"code": "  ", "product_name": "Mystery"})

    def test_not_an_object(self):
        with pytest.raises(MissingIdentityError):
            normalize_product(["code", "123"])

    def test_fallback_to_id_fields(self):
        assert normalize_product({"id": "abc"}).id == "abc"
        assert normalize_product({"_id": "def"}).id == "def"

    def test_numeric_code(self):
        assert normalize_product({"code": 7310130004409}).id == "7310130004409"
        assert normalize_product({"code": 731.0}).id == "731"


class TestNames:
    def test_localized_name_preferred(self):
        raw = {"code": "1", "product_name": "Milk", "product_name_sv": "Mjölk"}
        assert normalize_product(raw).name == "Mjölk"

    def test_other_language(self):
        raw = {"code": "1", "product_name": "Milk", "product_name_sv": "Mjölk"}
        assert normalize_product(raw, language="en").name == "Milk"

    def test_generic_name_fallback(self):
        raw = {"code": "1", "generic_name": "Rågbröd"}
        assert normalize_product(raw).name == "Rågbröd"

    def test_unknown_product_sentinel(self):
        assert normalize_product({"code": "1"}).name == "Okänd produkt"
        assert normalize_product({"code": "1"}, unknown_name="?").name == "?"


class TestNutrientAliases:
    def test_kcal_key_records_unit(self):
        n = normalize_nutrients({"energy-kcal_100g": 250})
        assert n.energy == 250.0
        assert n.energy_unit == "kcal"
        assert n.energy_kcal == 250.0

    def test_kj_key_preferred_over_kcal(self):
        n = normalize_nutrients({"energy_100g": 1046, "energy-kcal_100g": 250})
        assert n.energy == 1046.0
        assert n.energy_unit == "kJ"

    def test_zero_is_not_absent(self):
        n = normalize_nutrients({"sugars_100g": 0})
        assert n.sugars == 0.0

    def test_saturated_fat_spellings(self):
        assert normalize_nutrients({"saturated-fat_100g": 1.2}).saturated_fat == 1.2
        assert normalize_nutrients({"saturated_fat_100g": 1.3}).saturated_fat == 1.3
        assert normalize_nutrients({"saturated-fat": 1.4}).saturated_fat == 1.4

    def test_bare_key_fallback(self):
        assert normalize_nutrients({"proteins": "7,5"}).proteins == 7.5

    def test_bad_values_are_absent(self):
        n = normalize_nutrients({"fat_100g": "abc", "salt_100g": -1, "fiber_100g": True})
        assert n.fat is None
        assert n.salt is None
        assert n.fiber is None

    def test_bad_value_falls_through_to_next_alias(self):
        assert normalize_nutrients({"fat_100g": "abc", "fat": 3}).fat == 3.0

    def test_not_a_mapping(self):
        assert normalize_nutrients("oops").energy is None


def test_bad_fields_degrade_gracefully():
    raw = {
        "code": "1",
        "quantity": ["x"],
        "nutriments": "oops",
        "nova_group": "x",
        "categories_tags": 42,
        "brands": {"a": 1},
    }
    product = normalize_product(raw)
    assert product.package_weight is None
    assert product.nova_group is None
    assert product.categories_tags == ()
    assert product.brands is None
    assert product.pieces_per_package == 1
    assert product.countries == "Unknown"

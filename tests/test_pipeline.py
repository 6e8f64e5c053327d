"""End-to-end tests: raw payload → normalized, classified and scored record."""

import pytest

from matupptackaren.classify import Category, SliceKind
from matupptackaren.config import AppConfig, LocaleConfig, MeasurementConfig
from matupptackaren.pipeline import ProductPipeline, build_record
from matupptackaren.products.models import MissingIdentityError


@pytest.fixture
def pipeline():
    return ProductPipeline()


def test_package_facts_and_scores(pipeline):
    """Weight, serving and pieces feed the portion scores."""
    raw = {
        "code": "7300400481601",
        "quantity": "185 g",
        "serving_quantity": "30",
        "nutriments": {
            "energy_100g": 1500,
            "fat_100g": 2,
            "fiber_100g": 12,
            "proteins_100g": 10,
        },
    }
    record = pipeline.build(raw)

    assert record.id == "7300400481601"
    assert record.product.name == "Okänd produkt"
    assert record.product.package_weight == 185.0
    assert record.product.serving_size == 30.0
    assert record.product.pieces_per_package == 6
    assert record.score.per_100g == 10
    assert record.score.per_serving == 3
    assert record.score.per_package == 18


def test_fish_sticks_are_standard(pipeline):
    raw = {
        "code": "7310500143707",
        "product_name": "Findus Fiskpinnar",
        "brands": "Findus",
        "categories_tags": ["en:frozen-foods", "en:fish-sticks"],
        "nutriments": {"energy-kcal_100g": 205, "proteins_100g": 12},
    }
    record = pipeline.build(raw)

    assert record.classification.category == Category.STANDARD
    assert record.classification.measurements is None
    assert record.score.units == ()


def test_rye_bread_is_sliceable(pipeline):
    raw = {
        "code": "7311070346213",
        "product_name": "Pågen Rågbröd",
        "categories_tags": ["en:plant-based-foods-and-beverages", "en:breads"],
        "ingredients_text": "Rågmjöl, vatten, vetemjöl",
        "nutriments": {"energy_100g": 1000},
    }
    record = pipeline.build(raw)

    assert record.classification.category == Category.SLICEABLE
    assert record.classification.subcategory == SliceKind.BREAD
    assert record.classification.measurements.slice_weight == 30.0
    assert record.score.unit("slice").grams == 30.0
    assert record.shelf == "Bröd"


def test_missing_identity(pipeline):
    with pytest.raises(MissingIdentityError):
        pipeline.build({"product_name": "Utan kod"})


def test_no_energy_has_no_score(pipeline):
    record = pipeline.build({"code": "12345678", "product_name": "Mineralvatten"})
    assert record.score is None
    assert record.classification.category == Category.BEVERAGE


def test_config_flows_through():
    config = AppConfig(
        locale=LocaleConfig(language="en", unknown_name="Unknown product"),
        measurements=MeasurementConfig(glass_ml=200.0),
    )
    raw = {
        "code": "12345678",
        "product_name": "Apple juice",
        "product_name_sv": "Äppeljuice",
        "categories_tags": ["en:juices"],
        "nutriments": {"energy-kcal_100g": 45},
    }
    record = build_record(raw, config)

    assert record.product.name == "Apple juice"
    assert record.classification.category == Category.BEVERAGE
    assert record.score.unit("glass").grams == pytest.approx(200.0)
    assert build_record({"code": "12345678"}, config).product.name == "Unknown product"

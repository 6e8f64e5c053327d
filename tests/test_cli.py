"""Tests for the command line interface."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from matupptackaren.cli import format_record, main, record_to_dict
from matupptackaren.pipeline import build_record


@pytest.fixture
def juice_record():
    return build_record(
        {
            "code": "7310867001003",
            "product_name": "Apelsinjuice",
            "brands": "Bravo",
            "categories_tags": ["en:juices"],
            "quantity": "1 l",
            "nutriments": {"energy-kcal_100g": 45, "sugars_100g": 9},
        }
    )


def test_format_record(juice_record):
    text = format_record(juice_record)
    assert "Apelsinjuice (Bravo)" in text
    assert "EAN: 7310867001003" in text
    assert "Kategori: Dryck" in text
    assert "Hylla: Dryck" in text
    assert "per glas" in text


def test_format_record_without_energy():
    record = build_record({"code": "12345678", "product_name": "Okänd"})
    assert "saknas" in format_record(record)


def test_record_to_dict_is_json(juice_record):
    data = json.loads(json.dumps(record_to_dict(juice_record), ensure_ascii=False))
    assert data["product"]["id"] == "7310867001003"
    assert data["product"]["nutrients"]["energy_unit"] == "kcal"
    assert data["classification"]["category"] == "beverage"
    assert data["shelf"] == "Dryck"
    assert data["score"]["units"][0]["unit"] == "glass"


def test_no_command_exits():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1


def test_only_invalid_barcodes_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["barcode", "abc"])
    assert exc.value.code == 1
    assert "EAN-koden" in capsys.readouterr().err


def test_barcode_json_output(juice_record, capsys):
    lookup = AsyncMock(return_value=[juice_record, juice_record])
    with patch("matupptackaren.cli.OpenFoodFactsClient.get_products", lookup):
        main(["barcode", "7310867001003", "7310867001003", "--json"])

    lookup.assert_awaited_once()
    data = json.loads(capsys.readouterr().out)
    # Duplicates collapse in the history
    assert [d["product"]["id"] for d in data] == ["7310867001003"]


def test_search_csv_export(juice_record, tmp_path, capsys):
    out = tmp_path / "produkter.csv"
    with patch(
        "matupptackaren.cli.OpenFoodFactsClient.search",
        AsyncMock(return_value=[juice_record]),
    ):
        main(["search", "apelsin", "juice", "--csv", str(out)])

    assert out.exists()
    assert "Apelsinjuice" in out.read_text(encoding="utf-8")
    assert "CSV sparad" in capsys.readouterr().out


def test_search_keeps_result_order(tmp_path, capsys):
    codes = ["11111111", "22222222", "33333333"]
    records = [build_record({"code": c, "product_name": f"Vara {c}"}) for c in codes]
    with patch(
        "matupptackaren.cli.OpenFoodFactsClient.search",
        AsyncMock(return_value=records),
    ):
        main(["search", "x", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert [d["product"]["id"] for d in data] == codes

        out = tmp_path / "ordning.csv"
        main(["search", "x", "--csv", str(out)])

    lines = out.read_text(encoding="utf-8").splitlines()[1:]
    assert [line.split(",")[0].strip('"') for line in lines] == codes

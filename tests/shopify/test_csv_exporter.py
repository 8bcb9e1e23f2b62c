"""Tests for catalog_import/shopify/csv_exporter.py"""

import csv
import dataclasses
import tempfile
from decimal import Decimal

import pytest

from catalog_import.models import SHOPIFY_FIELDNAMES, VARIANT_SKU_INDEX
from catalog_import.shopify import CatalogRowBuilder, CsvCatalogSink


@pytest.fixture
def builder(crystal_config):
    return CatalogRowBuilder(crystal_config)


@pytest.fixture
def target(tmp_path):
    return str(tmp_path / "output" / "shopify_products.csv")


def read_csv(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestOpen:
    def test_new_target_gets_header(self, target):
        with CsvCatalogSink(target):
            pass
        assert read_csv(target) == [SHOPIFY_FIELDNAMES]

    def test_existing_target_keeps_single_header(self, target, builder, amethyst_pendant):
        with CsvCatalogSink(target) as sink:
            sink.append_rows([builder.build(amethyst_pendant)])
        with CsvCatalogSink(target):
            pass
        rows = read_csv(target)
        assert rows.count(SHOPIFY_FIELDNAMES) == 1
        assert len(rows) == 2

    def test_empty_file_gets_header(self, target):
        with CsvCatalogSink(target):
            pass
        open(target, "w").close()
        with CsvCatalogSink(target):
            pass
        assert read_csv(target) == [SHOPIFY_FIELDNAMES]


class TestExistingSkus:
    def test_missing_target(self, target):
        assert CsvCatalogSink(target).existing_skus() == frozenset()

    def test_reads_variant_sku_column(self, target, builder, amethyst_pendant):
        wand = dataclasses.replace(amethyst_pendant, sku=" SW-005 ", title="Selenite Wand")
        with CsvCatalogSink(target) as sink:
            sink.append_rows([builder.build(amethyst_pendant), builder.build(wand)])
            sink.flush()
            assert sink.existing_skus() == frozenset({"AP-001", "SW-005"})

    def test_header_is_not_a_sku(self, target):
        with CsvCatalogSink(target) as sink:
            assert sink.existing_skus() == frozenset()


class TestAppendRows:
    def test_appends_and_returns_count(self, target, builder, amethyst_pendant):
        with CsvCatalogSink(target) as sink:
            assert sink.append_rows([builder.build(amethyst_pendant)]) == 1
            sink.flush()

        rows = read_csv(target)
        assert len(rows) == 2
        data = dict(zip(SHOPIFY_FIELDNAMES, rows[1]))
        assert data["Handle"] == "amethyst-pendant"
        assert data["Variant SKU"] == "AP-001"
        assert data["Variant Price"] == "12.00"
        assert data["Cost per item"] == "5.00"
        assert data["Status"] == "active"
        assert len(rows[1]) == 39

    def test_successive_appends(self, target, builder, amethyst_pendant):
        wand = dataclasses.replace(amethyst_pendant, sku="SW-005", title="Selenite Wand")
        with CsvCatalogSink(target) as sink:
            sink.append_rows([builder.build(amethyst_pendant)])
            sink.flush()
            sink.append_rows([builder.build(wand)])
            sink.flush()
        skus = [row[VARIANT_SKU_INDEX] for row in read_csv(target)[1:]]
        assert skus == ["AP-001", "SW-005"]

    def test_rejects_wrong_width(self, target):
        with CsvCatalogSink(target) as sink:
            with pytest.raises(ValueError):
                sink.append_rows([["only", "three", "fields"]])
        assert read_csv(target) == [SHOPIFY_FIELDNAMES]

    def test_closed_sink(self, target, builder, amethyst_pendant):
        sink = CsvCatalogSink(target)
        with pytest.raises(OSError):
            sink.append_rows([builder.build(amethyst_pendant)])


class TestReplaceExisting:
    def test_replaces_rows_with_same_sku(self, target, builder, amethyst_pendant):
        wand = dataclasses.replace(amethyst_pendant, sku="SW-005", title="Selenite Wand")
        with CsvCatalogSink(target) as sink:
            sink.append_rows([builder.build(amethyst_pendant), builder.build(wand)])

        repriced = dataclasses.replace(amethyst_pendant, price=Decimal("14.00"))
        with CsvCatalogSink(target, replace_existing=True) as sink:
            sink.append_rows([builder.build(repriced)])
            sink.flush()

        rows = read_csv(target)
        assert rows[0] == SHOPIFY_FIELDNAMES
        by_sku = {row[VARIANT_SKU_INDEX]: row for row in rows[1:]}
        assert len(rows) == 3
        assert by_sku["AP-001"][SHOPIFY_FIELDNAMES.index("Variant Price")] == "14.00"
        assert "SW-005" in by_sku

    def test_without_replace_keeps_both(self, target, builder, amethyst_pendant):
        with CsvCatalogSink(target) as sink:
            sink.append_rows([builder.build(amethyst_pendant)])
            sink.append_rows([builder.build(amethyst_pendant)])
        skus = [row[VARIANT_SKU_INDEX] for row in read_csv(target)[1:]]
        assert skus == ["AP-001", "AP-001"]

    def test_sink_stays_open_when_rewrite_cannot_start(self, target, builder, amethyst_pendant, monkeypatch):
        with CsvCatalogSink(target) as sink:
            sink.append_rows([builder.build(amethyst_pendant)])

        def no_temp_file(*args, **kwargs):
            raise OSError("no space left on device")

        wand = dataclasses.replace(amethyst_pendant, sku="SW-005", title="Selenite Wand")
        with CsvCatalogSink(target, replace_existing=True) as sink:
            monkeypatch.setattr(tempfile, "mkstemp", no_temp_file)
            with pytest.raises(OSError):
                sink.append_rows([builder.build(amethyst_pendant)])
            monkeypatch.undo()

            assert sink.append_rows([builder.build(wand)]) == 1
            sink.flush()

        skus = [row[VARIANT_SKU_INDEX] for row in read_csv(target)[1:]]
        assert skus == ["AP-001", "SW-005"]

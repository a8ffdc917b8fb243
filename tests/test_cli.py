# tests/test_cli.py
import json

import pytest
from click.testing import CliRunner
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

import main
from catalog_admin.db.repositories import ProductRepository
from catalog_admin.services.brand_service import BrandService
from catalog_admin.services.catalog_query_service import CatalogQueryService
from catalog_admin.services.category_service import CategoryService

CATALOG_YAML = """
brands:
  - name: Acme
    website: acme.example.com
categories:
  - name: Clothing
  - name: Dresses
    parent: Clothing
products:
  - name: Red dress
    old_price: 200
    discount: 50
    gender: women
    categories: [Dresses]
    brands: [Acme]
    occasions: party, evening
  - name: Blue shirt
    old_price: 40
    gender: men
    categories: [Clothing]
"""


@pytest.fixture
def runner(db_engine, monkeypatch):
    monkeypatch.setattr(main, "SessionLocal", sessionmaker(bind=db_engine))
    return CliRunner()


def test_load_catalog_then_list_products(runner, tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text(CATALOG_YAML)

    loaded = runner.invoke(main.cli, ["load-catalog", str(path)])
    assert loaded.exit_code == 0, loaded.output
    assert "Loaded 1 brands, 2 categories, 2 products" in loaded.output

    listed = runner.invoke(main.cli, ["list-products", "--sort-by", "price-asc"])
    assert listed.exit_code == 0, listed.output
    body = json.loads(listed.output)
    assert body["totalCount"] == 2
    assert [item["name"] for item in body["items"]] == ["Blue shirt", "Red dress"]
    assert body["items"][1]["price"] == 100.0
    assert body["items"][1]["brands"] == [{"id": 1, "name": "Acme"}]


def test_load_catalog_with_unknown_reference_fails(runner, tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text("products:\n  - name: Lost\n    old_price: 1\n    gender: boy\n    categories: [Nowhere]\n")

    result = runner.invoke(main.cli, ["load-catalog", str(path)])

    assert result.exit_code != 0


def test_list_products_rejects_bad_sort(runner):
    result = runner.invoke(main.cli, ["list-products", "--sort-by", "stock-asc"])

    assert result.exit_code != 0
    assert "Invalid sort" in result.output


@pytest.mark.parametrize(
    "catalog_yaml",
    [
        # Unknown brand on the last product
        CATALOG_YAML + "  - name: Mystery\n    old_price: 5\n    gender: boy\n    brands: [Nobody]\n",
        # Duplicate category after brands and categories were written
        CATALOG_YAML.replace("products:", "  - name: Clothing\nproducts:"),
    ],
)
def test_failed_load_leaves_catalog_untouched(runner, tmp_path, db_session, catalog_yaml):
    path = tmp_path / "catalog.yaml"
    path.write_text(catalog_yaml)

    result = runner.invoke(main.cli, ["load-catalog", str(path)])

    assert result.exit_code == 1
    assert "nothing was loaded" in result.output
    assert BrandService(db_session).list_brands() == []
    assert CategoryService(db_session).list_categories() == []
    assert CatalogQueryService(db_session).list_products().total_count == 0


def test_list_products_storage_failure_is_reported(runner, monkeypatch):
    def fail(self, *args, **kwargs):
        raise SQLAlchemyError("database unavailable")

    monkeypatch.setattr(ProductRepository, "count_distinct", fail)

    result = runner.invoke(main.cli, ["list-products"])

    assert result.exit_code == 1
    assert "Product listing failed" in result.output

# tests/services/test_catalog_query_service.py
import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from catalog_admin.schemas import ProductFilters, SortSpec, ValueRange
from catalog_admin.services.catalog_query_service import (
    CatalogQueryError,
    CatalogQueryService,
    order_by_ids,
)


@pytest.fixture
def catalog(make_category, make_product):
    """Twelve products; Product 01..03 are in category X, the rest in Y."""
    x = make_category("X")
    y = make_category("Y")
    products = []
    for i in range(1, 13):
        products.append(
            make_product(
                f"Product {i:02d}",
                old_price=10.0 * i,
                category_ids=[x.id if i <= 3 else y.id],
            )
        )
    return {"x": x, "y": y, "products": products}


def names(result):
    return [item.name for item in result.items]


def by_name():
    return SortSpec.parse("name-asc")


def test_category_filter_returns_only_members(catalog, catalog_query_service):
    """3 of 12 products in X: page 1 of 10 holds exactly those three."""
    result = catalog_query_service.list_products(
        page=1,
        page_size=10,
        filters=ProductFilters(category_ids=[catalog["x"].id]),
        sort=by_name(),
    )

    assert names(result) == ["Product 01", "Product 02", "Product 03"]
    assert result.total_count == 3
    assert result.total_pages == 1
    assert result.count_on_page == 3
    for item in result.items:
        assert [c.name for c in item.categories] == ["X"]


def test_second_page_holds_items_six_to_ten(catalog, catalog_query_service):
    result = catalog_query_service.list_products(page=2, page_size=5, sort=by_name())

    assert names(result) == [f"Product {i:02d}" for i in range(6, 11)]
    assert result.total_count == 12
    assert result.total_pages == 3
    assert result.count_on_page == 5


def test_last_partial_page(catalog, catalog_query_service):
    result = catalog_query_service.list_products(page=3, page_size=5, sort=by_name())

    assert names(result) == ["Product 11", "Product 12"]
    assert result.count_on_page == 2


def test_page_past_the_end_is_empty(catalog, catalog_query_service):
    result = catalog_query_service.list_products(page=4, page_size=5, sort=by_name())

    assert result.items == []
    assert result.count_on_page == 0
    assert result.total_count == 12
    assert result.total_pages == 3


def test_empty_catalog(catalog_query_service):
    result = catalog_query_service.list_products()

    assert result.items == []
    assert result.total_count == 0
    assert result.total_pages == 0
    assert result.count_on_page == 0


def test_zero_count_skips_page_queries(catalog, catalog_query_service, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("page queries must not run when nothing matches")

    monkeypatch.setattr(catalog_query_service.product_repo, "list_page_ids", fail)
    monkeypatch.setattr(catalog_query_service.product_repo, "list_with_categories", fail)

    result = catalog_query_service.list_products(filters=ProductFilters(category_ids=[9999]))

    assert result.total_count == 0
    assert result.items == []


def test_product_in_two_categories_appears_once(make_category, make_product, catalog_query_service):
    a = make_category("A")
    b = make_category("B")
    make_product("Both", category_ids=[a.id, b.id])
    make_product("Only A", category_ids=[a.id])

    result = catalog_query_service.list_products(
        filters=ProductFilters(category_ids=[a.id, b.id]), sort=by_name()
    )

    ids = [item.id for item in result.items]
    assert len(ids) == len(set(ids))
    assert result.total_count == 2
    assert result.total_pages == 1
    assert names(result) == ["Both", "Only A"]


def test_category_filter_keeps_all_categories_of_a_match(
    make_category, make_product, catalog_query_service
):
    a = make_category("A")
    b = make_category("B")
    make_product("Both", category_ids=[a.id, b.id])

    result = catalog_query_service.list_products(filters=ProductFilters(category_ids=[a.id]))

    assert result.count_on_page == 1
    assert sorted(c.name for c in result.items[0].categories) == ["A", "B"]


def test_product_without_categories_has_empty_list(make_product, catalog_query_service):
    make_product("Loose")

    result = catalog_query_service.list_products()

    assert result.count_on_page == 1
    assert result.items[0].categories == []


def test_sort_order_is_kept(catalog, catalog_query_service):
    result = catalog_query_service.list_products(
        page_size=12, sort=SortSpec.parse("price-desc")
    )

    prices = [item.price for item in result.items]
    assert prices == sorted(prices, reverse=True)
    assert result.items[0].name == "Product 12"


def test_equal_sort_values_break_ties_by_id(make_product, catalog_query_service):
    first = make_product("Same", old_price=50)
    second = make_product("Same", old_price=50)

    asc = catalog_query_service.list_products(sort=SortSpec.parse("price-asc"))
    desc = catalog_query_service.list_products(sort=SortSpec.parse("price-desc"))

    assert [item.id for item in asc.items] == [first.id, second.id]
    assert [item.id for item in desc.items] == [second.id, first.id]


def test_brand_filter(make_brand, make_product, catalog_query_service):
    acme = make_brand("Acme")
    globex = make_brand("Globex")
    initech = make_brand("Initech")
    make_product("Acme shoe", brand_ids=[acme.id])
    make_product("Shared shoe", brand_ids=[acme.id, globex.id])
    make_product("Initech shoe", brand_ids=[initech.id])
    make_product("No brand shoe")

    result = catalog_query_service.list_products(
        filters=ProductFilters(brand_ids=[acme.id, globex.id]), sort=by_name()
    )

    assert names(result) == ["Acme shoe", "Shared shoe"]
    assert result.total_count == 2
    assert sorted(b.name for b in result.items[1].brands) == ["Acme", "Globex"]


def test_price_range_and_gender(make_product, catalog_query_service):
    make_product("Cheap dress", old_price=50, gender="women")
    make_product("Mid dress", old_price=100, gender="women")
    make_product("Top dress", old_price=600, discount=20, gender="women")
    make_product("Mid shirt", old_price=300, gender="men")
    make_product("Pricey dress", old_price=800, gender="women")

    result = catalog_query_service.list_products(
        filters=ProductFilters(price_range=ValueRange(min=100, max=500), gender="women"),
        sort=by_name(),
    )

    assert names(result) == ["Mid dress", "Top dress"]
    for item in result.items:
        assert 100 <= item.price <= 500
        assert item.gender.value == "women"


def test_discount_range(make_product, catalog_query_service):
    make_product("Full price", discount=0)
    make_product("On sale", discount=30)
    make_product("Clearance", discount=70)

    result = catalog_query_service.list_products(
        filters=ProductFilters(discount_range=ValueRange(min=10, max=50))
    )

    assert names(result) == ["On sale"]


def test_occasion_filter_matches_whole_tags(make_product, catalog_query_service):
    make_product("Party dress", occasions="party, evening")
    make_product("Everyday tee", occasions=["casual"])
    make_product("Lounge set", occasions=["casualwear"])

    result = catalog_query_service.list_products(
        filters=ProductFilters(occasions=["casual", "evening"]), sort=by_name()
    )

    assert names(result) == ["Everyday tee", "Party dress"]
    assert result.items[1].occasions == ["evening", "party"]


def test_filters_combine_with_and(make_category, make_brand, make_product, catalog_query_service):
    shoes = make_category("Shoes")
    acme = make_brand("Acme")
    make_product("Match", category_ids=[shoes.id], brand_ids=[acme.id], gender="men")
    make_product("Wrong gender", category_ids=[shoes.id], brand_ids=[acme.id], gender="girl")
    make_product("No brand", category_ids=[shoes.id], gender="men")

    result = catalog_query_service.list_products(
        filters=ProductFilters(category_ids=[shoes.id], brand_ids=[acme.id], gender="men")
    )

    assert names(result) == ["Match"]


@pytest.mark.parametrize("page,page_size", [(0, 10), (-1, 10), (1, 0), (1, 51)])
def test_out_of_range_page_is_rejected(catalog_query_service, page, page_size):
    with pytest.raises(ValueError):
        catalog_query_service.list_products(page=page, page_size=page_size)


def test_max_page_size_is_configurable(db_session):
    service = CatalogQueryService(db_session, max_page_size=5)

    with pytest.raises(ValueError):
        service.list_products(page_size=6)


def test_count_failure_raises_catalog_query_error(catalog_query_service, monkeypatch):
    def fail(*args, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(catalog_query_service.product_repo, "count_distinct", fail)

    with pytest.raises(CatalogQueryError) as exc_info:
        catalog_query_service.list_products()
    assert isinstance(exc_info.value.__cause__, SQLAlchemyError)


def test_detail_failure_returns_no_partial_page(catalog, catalog_query_service, monkeypatch):
    def fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("timeout"))

    monkeypatch.setattr(catalog_query_service.product_repo, "list_with_categories", fail)

    with pytest.raises(CatalogQueryError):
        catalog_query_service.list_products()


def test_order_by_ids_skips_missing_records():
    records = {1: "one", 3: "three"}

    assert order_by_ids(records, [3, 2, 1]) == ["three", "one"]

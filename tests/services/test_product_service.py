# tests/services/test_product_service.py
import pytest
from pydantic import ValidationError

from catalog_admin.schemas import ProductCreate, ProductUpdate
from catalog_admin.services.product_service import derive_price


def test_derive_price():
    assert derive_price(100, 20) == 80.0
    assert derive_price(59.99, 0) == 59.99
    assert derive_price(19.99, 15) == 16.99
    assert derive_price(40, 100) == 0.0


def test_create_product(make_category, make_brand, make_product):
    dresses = make_category("Dresses")
    acme = make_brand("Acme")

    product = make_product(
        "Summer dress",
        old_price=200,
        discount=25,
        category_ids=[dresses.id],
        brand_ids=[acme.id],
        occasions="party, casual, party",
        colors="red,blue",
    )

    assert product.id is not None
    assert product.price == 150.0
    assert product.gender.value == "women"
    assert [c.name for c in product.categories] == ["Dresses"]
    assert [b.name for b in product.brands] == ["Acme"]
    assert sorted(product.occasions) == ["casual", "party"]
    assert product.created_at is not None


def test_create_product_accepts_legacy_brand_json(make_brand, make_product):
    acme = make_brand("Acme")
    globex = make_brand("Globex")

    product = make_product("Legacy", brand_ids=f'["{acme.id}", "{globex.id}"]')

    assert sorted(b.id for b in product.brands) == sorted([acme.id, globex.id])


def test_unparsable_brand_json_is_rejected():
    with pytest.raises(ValidationError):
        ProductCreate(name="Broken", old_price=10, gender="men", brand_ids="[1, oops")


def test_unknown_category_is_rejected(make_product):
    with pytest.raises(ValueError, match="Unknown category"):
        make_product("Orphan", category_ids=[404])


def test_unknown_brand_is_rejected(make_product):
    with pytest.raises(ValueError, match="Unknown brand"):
        make_product("Orphan", brand_ids=[404])


@pytest.mark.parametrize(
    "field,value",
    [("discount", 120), ("discount", -5), ("rating", 6), ("gender", "unisex"), ("name", "  ")],
)
def test_invalid_product_fields(field, value):
    data = {"name": "Shirt", "old_price": 10, "gender": "men"}
    data[field] = value
    with pytest.raises(ValidationError):
        ProductCreate(**data)


def test_update_replaces_record_and_associations(
    make_category, make_brand, make_product, product_service
):
    old_category = make_category("Old")
    new_category = make_category("New")
    acme = make_brand("Acme")
    product = make_product(
        "Jacket", category_ids=[old_category.id], brand_ids=[acme.id], occasions=["casual"]
    )

    updated = product_service.update_product(
        product.id,
        ProductUpdate(
            name="Rain jacket",
            old_price=80,
            discount=50,
            gender="men",
            category_ids=[new_category.id],
            brand_ids=[],
            occasions=["casual", "outdoor"],
        ),
    )

    assert updated.name == "Rain jacket"
    assert updated.price == 40.0
    assert updated.gender.value == "men"
    assert [c.name for c in updated.categories] == ["New"]
    assert updated.brands == []
    assert updated.occasions == ["casual", "outdoor"]


def test_update_missing_product_returns_none(product_service):
    data = ProductUpdate(name="Ghost", old_price=1, gender="boy")

    assert product_service.update_product(12345, data) is None


def test_get_product_categories(make_category, make_product, product_service):
    a = make_category("A")
    b = make_category("B")
    product = make_product("Two", category_ids=[b.id, a.id])

    categories = product_service.get_product_categories(product.id)

    assert [(c.id, c.name) for c in categories] == [(a.id, "A"), (b.id, "B")]


def test_delete_product(make_category, make_product, product_service):
    category = make_category("Shoes")
    product = make_product("Sneaker", category_ids=[category.id], occasions=["sport"])

    assert product_service.delete_product(product.id) is True
    assert product_service.get_product(product.id) is None
    assert product_service.get_product_categories(product.id) == []
    assert product_service.delete_product(product.id) is False

from decimal import Decimal

import pytest

from exceptions import NotFoundError, ValidationError
from models.brand import Brand
from models.product import Product
from services.brand_service import BrandService
from services.product_service import ProductService


class InMemoryRepository:

    def __init__(self):
        self.rows = {}

    def add(self, record):
        record.id = len(self.rows) + 1
        self.rows[record.id] = record
        return record

    def get_all(self):
        return list(self.rows.values())

    def get_by_id(self, record_id):
        return self.rows.get(record_id)

    def delete(self, record_id):
        return self.rows.pop(record_id, None) is not None


@pytest.fixture
def products():
    service = ProductService(pool=None)
    service.repo = InMemoryRepository()
    return service


@pytest.fixture
def brands():
    service = BrandService(pool=None)
    service.repo = InMemoryRepository()
    return service


def test_product_lifecycle(products):
    created = products.create_product(Product(name_es="Taza", name_en="Mug", price=Decimal("9.90"), stock=3))

    assert products.get_product(created.id).in_stock(3)
    assert not products.get_product(created.id).in_stock(4)
    assert products.delete_product(created.id)
    assert not products.delete_product(created.id)
    with pytest.raises(NotFoundError):
        products.get_product(created.id)


@pytest.mark.parametrize("price, stock", [(Decimal("-1"), 0), (Decimal("1"), -2)])
def test_product_rejects_negative_values(products, price, stock):
    with pytest.raises(ValidationError):
        products.create_product(Product(name_es=None, name_en="Lamp", price=price, stock=stock))


def test_brand_lifecycle(brands):
    brand = brands.create_brand("  Acme ", color="#ff0000")

    assert brand.name == "Acme"
    assert [b.name for b in brands.list_brands()] == ["Acme"]
    assert brands.delete_brand(brand.id)
    assert isinstance(brands.list_brands(), list) and not brands.list_brands()


def test_brand_requires_name(brands):
    with pytest.raises(ValidationError):
        brands.create_brand("   ")


def test_brand_to_dict():
    assert Brand(name="Acme", id=3).to_dict()["id"] == 3

"""Unit tests for the Product aggregate."""

import threading

import pytest

from shopsim.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ValidationError,
)
from shopsim.domain.model.product import Category, Product
from shopsim.domain.model.value_objects import Money


class TestProductCreate:

    def test_happy_path(self):
        p = Product.create("E01", "Smartphone", "299.99", 5, Category.ELECTRONICS, {"brand": "Samsung"})
        assert p.price == Money.of("299.99")
        assert p.stock == 5
        assert p.attributes["brand"] == "Samsung"

    def test_zero_price_allowed(self):
        p = Product.create("C09", "Freebie", "0", 1, Category.CLOTHING, {"size": "S"})
        assert p.price.is_zero

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="Invalid price"):
            Product.create("C01", "T-shirt", "-1", 5, Category.CLOTHING, {"size": "M"})

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            Product.create("C01", "T-shirt", "19.99", -1, Category.CLOTHING, {"size": "M"})

    def test_missing_category_attribute_rejected(self):
        with pytest.raises(ValidationError, match="require a 'size'"):
            Product.create("C01", "T-shirt", "19.99", 1, Category.CLOTHING, {})

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="Product ID"):
            Product.create("  ", "T-shirt", "19.99", 1, Category.CLOTHING, {"size": "M"})

    def test_attributes_are_read_only(self):
        p = Product.create("C01", "T-shirt", "19.99", 1, Category.CLOTHING, {"size": "M"})
        with pytest.raises(TypeError):
            p.attributes["size"] = "XL"


class TestProductStock:

    def _product(self, stock: int = 5) -> Product:
        return Product.create("E01", "Smartphone", "299.99", stock, Category.ELECTRONICS, {"brand": "X"})

    def test_decrease(self):
        p = self._product()
        p.decrease_stock(2)
        assert p.stock == 3

    def test_decrease_to_zero_marks_unavailable(self):
        p = self._product(2)
        p.decrease_stock(2)
        assert not p.is_available

    def test_decrease_beyond_stock_rejected(self):
        p = self._product(2)
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Smartphone"):
            p.decrease_stock(3)
        assert p.stock == 2

    def test_non_positive_decrease_rejected(self):
        with pytest.raises(InvalidQuantityError):
            self._product().decrease_stock(0)

    def test_set_stock_negative_rejected(self):
        with pytest.raises(ValidationError):
            self._product().set_stock(-1)

    def test_concurrent_decrements_never_go_negative(self):
        p = self._product(50)
        failures = []

        def buy():
            for _ in range(10):
                try:
                    p.decrease_stock(1)
                except InsufficientStockError:
                    failures.append(1)

        threads = [threading.Thread(target=buy) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert p.stock == 0
        assert len(failures) == 30

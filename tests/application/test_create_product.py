"""Tests for the write-through create path of ProductService."""

import json

from catalog.application.product_service import ProductService
from catalog.domain.exceptions import InternalCacheError, InternalStoreError
from catalog.domain.model.product import NewProduct, Product
from tests.fakes import FakeProductCache, FakeProductRepository


def _setup():
    repo = FakeProductRepository()
    cache = FakeProductCache()
    return ProductService(repo, cache), repo, cache


class TestCreateProductHappyPath:

    def test_returns_store_assigned_id(self):
        service, _, _ = _setup()
        product_id, err = service.create_product(NewProduct("Widget", "blue"))
        assert err is None
        assert product_id == 1

    def test_sequential_ids(self):
        service, _, _ = _setup()
        first, _ = service.create_product(NewProduct("Widget", "blue"))
        second, _ = service.create_product(NewProduct("Gadget", "red"))
        assert second == first + 1

    def test_persists_and_caches(self):
        service, repo, cache = _setup()
        product_id, _ = service.create_product(NewProduct("Widget", "blue"))

        expected = Product(id=product_id, name="Widget", additional_info="blue")
        assert repo.contents() == {product_id: expected}
        assert cache.contents() == {product_id: expected.to_json()}

    def test_create_then_get_is_served_from_cache(self):
        service, repo, _ = _setup()
        product_id, _ = service.create_product(NewProduct("Widget", "blue"))
        repo.calls.clear()

        data, err = service.get_product_by_id(product_id)

        assert err is None
        assert json.loads(data) == {
            "id": product_id,
            "name": "Widget",
            "additionalInfo": "blue",
        }
        assert repo.calls == []


class TestCreateProductFailures:

    def test_store_failure_is_critical_and_skips_cache(self):
        service, repo, cache = _setup()
        repo.fail("insert")

        product_id, err = service.create_product(NewProduct("Widget", "blue"))

        assert product_id == 0
        assert isinstance(err.critical, InternalStoreError)
        assert cache.calls == []

    def test_cache_failure_still_returns_id(self):
        service, repo, cache = _setup()
        cache.fail("set")

        product_id, err = service.create_product(NewProduct("Widget", "blue"))

        assert product_id == 1
        assert product_id in repo.contents()
        assert not err.is_critical
        assert [type(e) for e in err.non_critical] == [InternalCacheError]

"""Tests for invalidate-then-delete of a single product."""

from catalog.application.product_service import ProductService
from catalog.domain.exceptions import EntityNotFoundError, InternalCacheError, InternalStoreError
from catalog.domain.model.product import Product
from tests.fakes import FakeProductCache, FakeProductRepository

WIDGET = Product(id=1, name="Widget", additional_info="blue")
GADGET = Product(id=2, name="Gadget", additional_info="red")


def _setup(cached: list[Product] | None = None):
    repo = FakeProductRepository([WIDGET, GADGET])
    cache = FakeProductCache([WIDGET, GADGET] if cached is None else cached)
    return ProductService(repo, cache), repo, cache


class TestDeleteProductHappyPath:

    def test_returns_deleted_snapshot(self):
        service, _, _ = _setup()
        deleted, err = service.delete_product_by_id(1)
        assert err is None
        assert deleted == WIDGET

    def test_removes_from_both_backends_only_that_product(self):
        service, repo, cache = _setup()
        service.delete_product_by_id(1)
        assert repo.contents() == {2: GADGET}
        assert list(cache.contents()) == [2]

    def test_read_after_delete_is_not_found(self):
        service, _, _ = _setup()
        service.delete_product_by_id(1)
        data, err = service.get_product_by_id(1)
        assert data is None
        assert isinstance(err.critical, EntityNotFoundError)


class TestDeleteProductUncached:

    def test_cache_miss_is_demoted(self):
        service, repo, _ = _setup(cached=[])

        deleted, err = service.delete_product_by_id(1)

        assert deleted == WIDGET
        assert 1 not in repo.contents()
        assert not err.is_critical
        assert [type(e) for e in err.non_critical] == [EntityNotFoundError]
        assert str(err) == "product not found: product with id=1 not found in cache\n"


class TestDeleteProductFailures:

    def test_cache_failure_aborts_before_store(self):
        service, repo, cache = _setup()
        cache.fail("delete_by_id")

        deleted, err = service.delete_product_by_id(1)

        assert deleted is None
        assert isinstance(err.critical, InternalCacheError)
        assert repo.calls == []
        assert 1 in repo.contents()

    def test_absent_product_is_critical_not_found(self):
        service, _, _ = _setup(cached=[])
        deleted, err = service.delete_product_by_id(99)
        assert deleted is None
        assert isinstance(err.critical, EntityNotFoundError)
        assert len(err.non_critical) == 1

    def test_store_failure_keeps_earlier_non_critical(self):
        service, repo, _ = _setup(cached=[])
        repo.fail("delete_by_id")

        deleted, err = service.delete_product_by_id(1)

        assert deleted is None
        assert isinstance(err.critical, InternalStoreError)
        assert [type(e) for e in err.non_critical] == [EntityNotFoundError]

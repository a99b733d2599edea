"""Tests for invalidate-then-write on update."""

from catalog.application.product_service import ProductService
from catalog.domain.exceptions import EntityNotFoundError, InternalCacheError, InternalStoreError
from catalog.domain.model.product import NewProduct, Product
from tests.fakes import FakeProductCache, FakeProductRepository

WIDGET = Product(id=1, name="Widget", additional_info="blue")
CHANGES = NewProduct("Widget v2", "green")


def _setup(cached: bool = True):
    repo = FakeProductRepository([WIDGET])
    cache = FakeProductCache([WIDGET] if cached else None)
    return ProductService(repo, cache), repo, cache


class TestUpdateProductHappyPath:

    def test_returns_previous_snapshot(self):
        service, _, _ = _setup()
        previous, err = service.update_product_by_id(1, CHANGES)
        assert err is None
        assert previous == WIDGET

    def test_store_holds_new_values(self):
        service, repo, _ = _setup()
        service.update_product_by_id(1, CHANGES)
        assert repo.contents()[1] == Product(id=1, name="Widget v2", additional_info="green")

    def test_cache_entry_is_invalidated(self):
        service, _, cache = _setup()
        service.update_product_by_id(1, CHANGES)
        assert cache.contents() == {}

    def test_next_read_sees_new_values(self):
        service, _, _ = _setup()
        service.update_product_by_id(1, CHANGES)
        data, err = service.get_product_by_id(1)
        assert err is None
        assert Product.from_json(data).name == "Widget v2"

    def test_invalidation_runs_before_store_update(self):
        service, repo, cache = _setup()
        service.update_product_by_id(1, CHANGES)
        assert cache.calls == ["delete_by_id"]
        assert repo.calls == ["update_by_id"]


class TestUpdateProductUncached:

    def test_cache_miss_is_reported_as_single_non_critical(self):
        service, _, _ = _setup(cached=False)

        previous, err = service.update_product_by_id(1, CHANGES)

        assert previous == WIDGET
        assert not err.is_critical
        assert len(err.non_critical) == 1
        assert isinstance(err.non_critical[0], EntityNotFoundError)

    def test_cache_miss_then_store_not_found(self):
        service, _, _ = _setup(cached=False)

        previous, err = service.update_product_by_id(2, CHANGES)

        assert previous is None
        assert isinstance(err.critical, EntityNotFoundError)
        assert "in DB" in str(err.critical)
        assert [type(e) for e in err.non_critical] == [EntityNotFoundError]
        assert str(err) == (
            "product not found: product with id=2 not found in cache\n"
            "product not found: failed to find product 2 in DB\n"
        )


class TestUpdateProductFailures:

    def test_cache_failure_aborts_before_store(self):
        service, repo, cache = _setup()
        cache.fail("delete_by_id")

        previous, err = service.update_product_by_id(1, CHANGES)

        assert previous is None
        assert isinstance(err.critical, InternalCacheError)
        assert err.non_critical == []
        assert repo.calls == []
        assert repo.contents()[1] == WIDGET

    def test_store_failure_is_critical(self):
        service, repo, _ = _setup()
        repo.fail("update_by_id")

        previous, err = service.update_product_by_id(1, CHANGES)

        assert previous is None
        assert isinstance(err.critical, InternalStoreError)
        assert err.non_critical == []

"""
Stock post-filter and total estimator tests
"""
from waveorder.services.catalog_records import ProductRecord, VariantRecord
from waveorder.services.stock_filter import estimate_total, filter_and_estimate, is_purchasable


def _product(pid="p", track=True, stock=0, variant_stock=()):
    return ProductRecord(
        id=pid,
        business_id="b",
        name=pid,
        price=10,
        stock=stock,
        track_inventory=track,
        variants=[
            VariantRecord(id=f"{pid}-v{i}", name=f"v{i}", price=10, stock=s)
            for i, s in enumerate(variant_stock)
        ],
    )


class TestIsPurchasable:

    def test_untracked_always_kept(self):
        assert is_purchasable(_product(track=False, stock=0))
        assert is_purchasable(_product(track=False, variant_stock=(0, 0)))

    def test_variant_stock_dominates(self):
        assert is_purchasable(_product(stock=0, variant_stock=(0, 3)))

    def test_all_variants_out_of_stock(self):
        assert not is_purchasable(_product(stock=7, variant_stock=(0, 0)))

    def test_own_stock_without_variants(self):
        assert is_purchasable(_product(stock=1))
        assert not is_purchasable(_product(stock=0))


class TestEstimator:

    def test_full_first_page_keeps_store_count(self):
        rows = [_product(f"p{i}", stock=1) for i in range(20)]
        result = filter_and_estimate(rows, total_count=45, page=1, limit=20)
        assert len(result.products) == 20
        assert result.total == 45
        assert result.total_pages == 3
        assert result.has_more is True

    def test_first_page_all_dropped(self):
        rows = [_product(f"p{i}", stock=0) for i in range(5)]
        result = filter_and_estimate(rows, total_count=5, page=1, limit=20)
        assert result.products == []
        assert result.total == 0
        assert result.total_pages == 1
        assert result.has_more is False

    def test_short_first_page_is_exact(self):
        rows = [_product("a", stock=1), _product("b", stock=0), _product("c", track=False)]
        result = filter_and_estimate(rows, total_count=3, page=1, limit=20)
        assert [p.id for p in result.products] == ["a", "c"]
        assert result.total == 2
        assert result.has_more is False

    def test_later_page_scales_by_drop_ratio(self):
        rows = [_product(f"p{i}", stock=1 if i % 4 else 0) for i in range(20)]
        result = filter_and_estimate(rows, total_count=100, page=2, limit=20)
        assert len(result.products) == 15
        assert result.total == 75
        assert result.total_pages == 4
        # page was not full
        assert result.has_more is False

    def test_later_page_full_with_more_remaining(self):
        rows = [_product(f"p{i}", stock=1) for i in range(10)]
        result = filter_and_estimate(rows, total_count=35, page=2, limit=10)
        assert result.total == 35
        assert result.has_more is True

    def test_last_full_page_has_no_more(self):
        rows = [_product(f"p{i}", stock=1) for i in range(10)]
        result = filter_and_estimate(rows, total_count=20, page=2, limit=10)
        assert result.has_more is False

    def test_rounds_half_up(self):
        assert estimate_total(fetched=2, kept=1, total_count=5, page=2, limit=2) == 3

    def test_empty_later_page_keeps_count(self):
        assert estimate_total(fetched=0, kept=0, total_count=12, page=3, limit=10) == 12

    def test_empty_first_page_is_zero(self):
        result = filter_and_estimate([], total_count=0, page=1, limit=50)
        assert result.total == 0
        assert result.total_pages == 1

"""TtlCache 單元測試"""

import pytest

from libs.shared.src.domain.services.ttl_cache import TtlCache


class FakeClock:
    """可手動推進的時鐘"""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestTtlCache:
    """測試 TtlCache"""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return TtlCache(30, clock)

    def test_get_returns_value_within_ttl(self, cache, clock):
        """TTL 內應返回寫入值"""
        cache.set("BTC", 50000.0)
        clock.advance(29.9)

        assert cache.get("BTC") == 50000.0
        assert "BTC" in cache

    def test_entry_expires_at_ttl(self, cache, clock):
        """到達 TTL 即視為過期"""
        cache.set("BTC", 50000.0)
        clock.advance(30)

        assert cache.get("BTC") is None
        assert "BTC" not in cache

    def test_missing_key_returns_none(self, cache):
        assert cache.get("ETH") is None

    def test_set_overwrites_and_resets_timer(self, cache, clock):
        """覆寫會重設計時"""
        cache.set("BTC", 1.0)
        clock.advance(20)
        cache.set("BTC", 2.0)
        clock.advance(20)

        assert cache.get("BTC") == 2.0

    def test_get_stale_ignores_expiry(self, cache, clock):
        """get_stale 僅供降級使用，不檢查過期"""
        cache.set("BTC", 42.0)
        clock.advance(3600)

        assert cache.get_stale("BTC") == 42.0
        assert cache.get_stale("ETH") is None

    def test_expired_entry_survives_get(self, cache, clock):
        """get 過期後仍可由 get_stale 取得最後值"""
        cache.set("BTC", 64000.0)
        clock.advance(60)

        assert cache.get("BTC") is None
        assert cache.get_stale("BTC") == 64000.0
        assert len(cache) == 1

    def test_len_counts_stored_entries(self, cache):
        cache.set("BTC", 1.0)
        cache.set("ETH", 2.0)

        assert len(cache) == 2

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            TtlCache(0)

"""TTL Cache 時效快取

Key → value store whose entries expire a fixed number of seconds after
they were written. Entries are overwritten on refresh and never served
by get() past their TTL; expired entries stay readable through get_stale()
and there is no other invalidation.
"""

import time
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TtlCache(Generic[K, V]):
    """Process-local TTL cache

    Args:
        ttl_seconds: 有效秒數
        clock: 單調時鐘 (測試時可注入假時鐘)
    """

    def __init__(
        self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[K, tuple[V, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: K) -> V | None:
        """取得未過期的值，過期或不存在時返回 None"""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        if self._clock() - stored_at >= self._ttl:
            return None
        return value

    def get_stale(self, key: K) -> V | None:
        """取得最後寫入的值，不論是否過期 (僅供降級使用)"""
        entry = self._entries.get(key)
        return entry[0] if entry is not None else None

    def set(self, key: K, value: V) -> None:
        """寫入 (覆蓋舊值並重設計時)"""
        self._entries[key] = (value, self._clock())

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

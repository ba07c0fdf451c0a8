import copy
import hashlib
import json
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from core.config import CACHE_SIZE
from core.models import CableSizingInput, CableSizingResult
from core.selector import ConductorSelector, select_conductor

logger = logging.getLogger(__name__)


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def cache_key(sizing_input: CableSizingInput) -> str:
    """SHA-256 over the key-sorted JSON of every input field.

    The standard, the length unit and the effective insulation rating are all
    part of the key, so equal numbers under different frameworks never collide.
    """
    fields = _plain(asdict(sizing_input))
    fields["insulation_rating"] = sizing_input.rating.value
    payload = json.dumps(fields, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0
    compute_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    @property
    def avg_compute_time_ms(self) -> float:
        return self.compute_time_ms / self.misses if self.misses else 0.0


class SizingCache:
    """LRU memo of sizing results keyed by ``cache_key``.

    Every caller gets its own copy of a stored result, so mutating a returned
    record never changes what later callers see. Safe to share between threads.
    """

    def __init__(self, max_size: int = CACHE_SIZE,
                 compute: Callable[[CableSizingInput], CableSizingResult] = select_conductor):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.compute = compute
        self._entries: "OrderedDict[str, CableSizingResult]" = OrderedDict()
        self._lock = threading.Lock()
        self._stats = CacheStats()

    def get(self, sizing_input: CableSizingInput) -> Optional[CableSizingResult]:
        key = cache_key(sizing_input)
        with self._lock:
            result = self._entries.get(key)
            if result is None:
                return None
            self._entries.move_to_end(key)
            return copy.deepcopy(result)

    @classmethod
    def from_config(cls, overrides: Optional[Dict[str, float]] = None) -> "SizingCache":
        """Cache sized by ``cache_size``, computing with a selector on the same config."""
        selector = ConductorSelector(overrides)
        return cls(int(selector.config["cache_size"]), selector.select)

    def get_or_compute(self, sizing_input: CableSizingInput,
                       compute: Optional[Callable[[CableSizingInput], CableSizingResult]] = None
                       ) -> CableSizingResult:
        key = cache_key(sizing_input)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._stats.hits += 1
                return copy.deepcopy(self._entries[key])
            self._stats.misses += 1

        # Computed outside the lock; two threads may both compute the same key
        start = time.perf_counter()
        result = (compute or self.compute)(sizing_input)
        elapsed = (time.perf_counter() - start) * 1000.0

        with self._lock:
            self._stats.compute_time_ms += elapsed
            self._entries[key] = copy.deepcopy(result)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._stats.evictions += 1
                logger.debug("Evicted %s", evicted[:16])
            self._stats.size = len(self._entries)
        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._stats = CacheStats()

    def stats(self) -> Dict[str, float]:
        with self._lock:
            s = self._stats
            return {
                "hits": s.hits,
                "misses": s.misses,
                "evictions": s.evictions,
                "size": len(self._entries),
                "hit_rate": round(s.hit_rate, 4),
                "avg_compute_time_ms": round(s.avg_compute_time_ms, 3),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

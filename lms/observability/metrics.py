"""In-process counters for the isolation layer. Thread-safe; exported as a plain dict."""

import threading
from typing import Any, Optional


def _label_key(name: str, category: Optional[str]) -> Optional[str]:
    if category is None:
        return None
    return f"{name}:category={category}"


class MetricsCollector:
    """
    Counters, optionally labelled by category (the pipeline uses the interceptor
    name as category for isolation_rewrites and isolation_rewrite_failures).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, float] = {}
        self._counters_by_labels: dict[str, dict[str, float]] = {}

    def increment(self, name: str, value: float = 1.0, *, category: Optional[str] = None) -> None:
        """Increment a counter, labelled by category when one is given."""
        key = _label_key(name, category)
        with self._lock:
            if key is None:
                self._counters[name] = self._counters.get(name, 0) + value
                return
            labelled = self._counters_by_labels.setdefault(name, {})
            labelled[key] = labelled.get(key, 0) + value

    def get(self, name: str, *, category: Optional[str] = None) -> float:
        key = _label_key(name, category)
        with self._lock:
            if key is None:
                return self._counters.get(name, 0)
            return self._counters_by_labels.get(name, {}).get(key, 0)

    def export_metrics(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_labels": {k: dict(v) for k, v in self._counters_by_labels.items()},
            }

    def reset(self) -> None:
        """Clear everything (tests)."""
        with self._lock:
            self._counters.clear()
            self._counters_by_labels.clear()

"""
Prometheus metrics for the Nubit DA adapters.

Counters and histograms for:
- Batch recoveries by outcome (ok / discarded / malformed / transport_error /
  verification_failed)
- Stores by outcome (ok / error / no_fallback)
- Square verification timings & outcomes

Every series is labelled with the adapter name so several DA backends can
share one registry.

Typical usage:

    from nubit.metrics import get_metrics

    METRICS = get_metrics()

    with METRICS.time_verify():
        verify_square(pointer, square)
    METRICS.note_recovery("ok")

Tests inject an isolated registry:

    metrics = NubitMetrics(registry=CollectorRegistry())
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from prometheus_client import REGISTRY as _DEFAULT_REGISTRY
from prometheus_client import CollectorRegistry, Counter, Histogram

from .constants import ADAPTER_NAME


@dataclass(frozen=True)
class _Labels:
    """Canonical label keys used across metrics."""
    adapter: str = "adapter"
    outcome: str = "outcome"


class NubitMetrics:
    """
    Concrete metrics backed by prometheus_client.
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        *,
        adapter: str = ADAPTER_NAME,
    ) -> None:
        self._labels = _Labels()
        self.adapter = adapter
        reg = registry if registry is not None else _DEFAULT_REGISTRY

        self.recoveries_total = Counter(
            "nubit_recoveries_total",
            "Batch payload recoveries grouped by outcome",
            [self._labels.adapter, self._labels.outcome],
            registry=reg,
        )
        self.stores_total = Counter(
            "nubit_stores_total",
            "Batch stores grouped by outcome",
            [self._labels.adapter, self._labels.outcome],
            registry=reg,
        )
        self.verify_total = Counter(
            "nubit_verify_total",
            "Square verifications grouped by outcome",
            [self._labels.adapter, self._labels.outcome],
            registry=reg,
        )
        self.verify_duration = Histogram(
            "nubit_verify_duration_seconds",
            "Square verification duration (seconds)",
            [self._labels.adapter],
            registry=reg,
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
        )

    # ------------------------------ outcomes ---------------------------------

    def note_recovery(self, outcome: str) -> None:
        self.recoveries_total.labels(self.adapter, outcome).inc()

    def note_store(self, outcome: str) -> None:
        self.stores_total.labels(self.adapter, outcome).inc()

    # --------------------------- verification timer --------------------------

    @contextmanager
    def time_verify(self) -> Iterator[None]:
        """
        Time a verification and count its outcome: "ok" when the block exits
        normally, the exception's `code` (or "error") when it raises.
        """
        start = time.perf_counter()
        outcome = "ok"
        try:
            yield
        except Exception as e:
            outcome = getattr(e, "code", None) or "error"
            raise
        finally:
            self.verify_total.labels(self.adapter, outcome).inc()
            self.verify_duration.labels(self.adapter).observe(max(0.0, time.perf_counter() - start))


# ------------------------------- public API ----------------------------------

_METRICS_SINGLETON: Optional[NubitMetrics] = None


def get_metrics(registry: Optional[CollectorRegistry] = None) -> NubitMetrics:
    """
    Return a process-wide NubitMetrics singleton. The first call can inject a
    custom registry; subsequent calls ignore the registry parameter.
    """
    global _METRICS_SINGLETON
    if _METRICS_SINGLETON is None:
        _METRICS_SINGLETON = NubitMetrics(registry=registry)
    return _METRICS_SINGLETON


__all__ = ["NubitMetrics", "get_metrics"]

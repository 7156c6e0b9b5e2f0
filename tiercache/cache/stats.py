"""
Hit/miss accounting for the tiered cache.

Counters only ever grow for the lifetime of the owning orchestrator.
The recorder holds no lock; the orchestrator updates and reads it while
holding its own lock, so a report always matches the tier contents at
the instant it was taken.
"""

from typing import List

from pydantic import BaseModel, Field


def _rate(part: int, total: int) -> float:
    return part * 100.0 / total if total > 0 else 0.0


class CacheReport(BaseModel):
    """Point-in-time statistics snapshot.

    Rates are percentages in ``[0, 100]``; all are ``0.0`` before the
    first request.

    Attributes:
        total_requests: Completed lookups.
        fast_hits: Lookups answered by the fast tier.
        slow_hits: Lookups answered by the slow tier.
        source_hits: Lookups answered by the source of truth.
        misses: Lookups absent from every tier.
        promotions: Slow-to-fast copies performed.
        evictions: Entries dropped by capacity pressure, both tiers.
        invalidations: Invalidate or update calls processed.
        source_errors: Source reads or writes that raised.
        fast_hit_rate: ``fast_hits / total_requests * 100``.
        slow_hit_rate: ``slow_hits / total_requests * 100``.
        source_hit_rate: ``source_hits / total_requests * 100``.
        overall_hit_rate: Share of lookups that found a value anywhere.
    """

    total_requests: int = 0
    fast_hits: int = 0
    slow_hits: int = 0
    source_hits: int = 0
    misses: int = 0
    promotions: int = 0
    evictions: int = 0
    invalidations: int = 0
    source_errors: int = 0
    fast_hit_rate: float = Field(default=0.0, ge=0.0, le=100.0)
    slow_hit_rate: float = Field(default=0.0, ge=0.0, le=100.0)
    source_hit_rate: float = Field(default=0.0, ge=0.0, le=100.0)
    overall_hit_rate: float = Field(default=0.0, ge=0.0, le=100.0)

    def summary(self) -> str:
        """One-line human-readable rendering of the hit rates."""
        return (
            f"L1: Hit Rate {self.fast_hit_rate:.1f}%, "
            f"L2: Hit Rate {self.slow_hit_rate:.1f}%, "
            f"L3: Hit Rate {self.source_hit_rate:.1f}%, "
            f"Overall: {self.overall_hit_rate:.1f}%"
        )


class StatsRecorder:
    """Running request counters for one orchestrator."""

    def __init__(self) -> None:
        self._total_requests: int = 0
        self._fast_hits: int = 0
        self._slow_hits: int = 0
        self._source_hits: int = 0
        self._misses: int = 0
        self._promotions: int = 0
        self._evictions: int = 0
        self._invalidations: int = 0
        self._source_errors: int = 0

    # ------------------------------------------------------------------
    # Recording methods
    # ------------------------------------------------------------------

    def record_request(self) -> None:
        self._total_requests += 1

    def record_fast_hit(self) -> None:
        self._fast_hits += 1

    def record_slow_hit(self) -> None:
        self._slow_hits += 1

    def record_source_hit(self) -> None:
        self._source_hits += 1

    def record_miss(self) -> None:
        self._misses += 1

    def record_promotion(self) -> None:
        self._promotions += 1

    def record_eviction(self) -> None:
        self._evictions += 1

    def record_invalidation(self) -> None:
        self._invalidations += 1

    def record_source_error(self) -> None:
        self._source_errors += 1

    # ------------------------------------------------------------------
    # Query methods
    # ------------------------------------------------------------------

    @property
    def total_requests(self) -> int:
        return self._total_requests

    def report(self) -> CacheReport:
        """Build a :class:`CacheReport` from the current counters.

        Returns:
            Snapshot with raw counters and derived hit rates.
        """
        total = self._total_requests
        return CacheReport(
            total_requests=total,
            fast_hits=self._fast_hits,
            slow_hits=self._slow_hits,
            source_hits=self._source_hits,
            misses=self._misses,
            promotions=self._promotions,
            evictions=self._evictions,
            invalidations=self._invalidations,
            source_errors=self._source_errors,
            fast_hit_rate=_rate(self._fast_hits, total),
            slow_hit_rate=_rate(self._slow_hits, total),
            source_hit_rate=_rate(self._source_hits, total),
            overall_hit_rate=_rate(
                self._fast_hits + self._slow_hits + self._source_hits, total
            ),
        )

    def to_prometheus(self, prefix: str = "tiercache") -> str:
        """Return the counters in Prometheus text exposition format.

        Args:
            prefix: Metric name prefix.

        Returns:
            Multi-line string suitable for ``/metrics`` endpoint scraping.
        """
        report = self.report()
        lines: List[str] = []

        lines.append(f"# HELP {prefix}_requests_total Total cache lookups")
        lines.append(f"# TYPE {prefix}_requests_total counter")
        lines.append(f"{prefix}_requests_total {report.total_requests}")

        lines.append(f"# HELP {prefix}_hits_total Lookups answered, by tier")
        lines.append(f"# TYPE {prefix}_hits_total counter")
        lines.append(f'{prefix}_hits_total{{tier="fast"}} {report.fast_hits}')
        lines.append(f'{prefix}_hits_total{{tier="slow"}} {report.slow_hits}')
        lines.append(f'{prefix}_hits_total{{tier="source"}} {report.source_hits}')

        lines.append(f"# HELP {prefix}_misses_total Lookups absent from every tier")
        lines.append(f"# TYPE {prefix}_misses_total counter")
        lines.append(f"{prefix}_misses_total {report.misses}")

        for name, help_text, value in (
            ("promotions", "Slow-to-fast promotions", report.promotions),
            ("evictions", "Capacity evictions", report.evictions),
            ("invalidations", "Invalidations processed", report.invalidations),
            ("source_errors", "Failed source-of-truth calls", report.source_errors),
        ):
            lines.append(f"# HELP {prefix}_{name}_total {help_text}")
            lines.append(f"# TYPE {prefix}_{name}_total counter")
            lines.append(f"{prefix}_{name}_total {value}")

        lines.append(f"# HELP {prefix}_hit_rate Hit rate percentage, by tier")
        lines.append(f"# TYPE {prefix}_hit_rate gauge")
        lines.append(f'{prefix}_hit_rate{{tier="fast"}} {report.fast_hit_rate:.4f}')
        lines.append(f'{prefix}_hit_rate{{tier="slow"}} {report.slow_hit_rate:.4f}')
        lines.append(f'{prefix}_hit_rate{{tier="source"}} {report.source_hit_rate:.4f}')
        lines.append(f'{prefix}_hit_rate{{tier="overall"}} {report.overall_hit_rate:.4f}')

        return "\n".join(lines) + "\n"

"""Tests for StatsRecorder and CacheReport."""

import pytest

from tiercache.cache.stats import CacheReport, StatsRecorder


def _request(recorder: StatsRecorder, outcome: str) -> None:
    recorder.record_request()
    {
        "fast": recorder.record_fast_hit,
        "slow": recorder.record_slow_hit,
        "source": recorder.record_source_hit,
        "miss": recorder.record_miss,
    }[outcome]()


class TestStatsRecorder:

    def test_empty_report_has_zero_rates(self) -> None:
        report = StatsRecorder().report()
        assert isinstance(report, CacheReport)
        assert report.total_requests == 0
        assert report.fast_hit_rate == 0.0
        assert report.slow_hit_rate == 0.0
        assert report.source_hit_rate == 0.0
        assert report.overall_hit_rate == 0.0

    def test_rates_are_percentages(self) -> None:
        recorder = StatsRecorder()
        for outcome in ("fast", "fast", "slow", "source"):
            _request(recorder, outcome)
        report = recorder.report()
        assert report.total_requests == 4
        assert report.fast_hit_rate == pytest.approx(50.0)
        assert report.slow_hit_rate == pytest.approx(25.0)
        assert report.source_hit_rate == pytest.approx(25.0)
        assert report.overall_hit_rate == pytest.approx(100.0)

    def test_misses_lower_overall_rate(self) -> None:
        recorder = StatsRecorder()
        _request(recorder, "source")
        _request(recorder, "miss")
        report = recorder.report()
        assert report.misses == 1
        assert report.overall_hit_rate == pytest.approx(50.0)

    def test_counts_sum_to_total(self) -> None:
        recorder = StatsRecorder()
        for outcome in ("fast", "slow", "miss", "source", "miss", "fast"):
            _request(recorder, outcome)
        r = recorder.report()
        assert r.fast_hits + r.slow_hits + r.source_hits + r.misses == r.total_requests

    def test_auxiliary_counters(self) -> None:
        recorder = StatsRecorder()
        recorder.record_promotion()
        recorder.record_eviction()
        recorder.record_eviction()
        recorder.record_invalidation()
        recorder.record_source_error()
        report = recorder.report()
        assert report.promotions == 1
        assert report.evictions == 2
        assert report.invalidations == 1
        assert report.source_errors == 1
        assert report.total_requests == 0


class TestCacheReport:

    def test_summary_format(self) -> None:
        report = CacheReport(
            total_requests=5,
            fast_hit_rate=20.0,
            slow_hit_rate=40.0,
            source_hit_rate=40.0,
            overall_hit_rate=100.0,
        )
        assert report.summary() == (
            "L1: Hit Rate 20.0%, L2: Hit Rate 40.0%, "
            "L3: Hit Rate 40.0%, Overall: 100.0%"
        )

    def test_rate_out_of_range_rejected(self) -> None:
        with pytest.raises(ValueError):
            CacheReport(fast_hit_rate=101.0)


class TestPrometheusExport:

    def test_contains_counters_and_gauges(self) -> None:
        recorder = StatsRecorder()
        _request(recorder, "fast")
        _request(recorder, "source")
        text = recorder.to_prometheus()
        assert "# TYPE tiercache_requests_total counter" in text
        assert "tiercache_requests_total 2" in text
        assert 'tiercache_hits_total{tier="fast"} 1' in text
        assert 'tiercache_hits_total{tier="source"} 1' in text
        assert 'tiercache_hit_rate{tier="overall"} 100.0000' in text
        assert text.endswith("\n")

    def test_custom_prefix(self) -> None:
        text = StatsRecorder().to_prometheus(prefix="video_cache")
        assert "video_cache_misses_total 0" in text
        assert "tiercache_" not in text

"""
Unit tests for the measurement and report data models.
"""

import dataclasses
from pathlib import Path

import pytest

from samplebench.models import (
    REPORT_COLUMNS,
    ExitStatus,
    FailureReason,
    MemorySnapshot,
    MetricsRecord,
    Report,
    RunResult,
    SampleDescriptor,
    ns_to_millis,
)


@pytest.mark.unit
class TestNsToMillis:
    @pytest.mark.parametrize(
        "nanoseconds, millis",
        [(0, 0), (999_999, 0), (1_000_000, 1), (1_999_999, 1), (123_456_789_000, 123_456)],
    )
    def test_floor_conversion(self, nanoseconds, millis):
        assert ns_to_millis(nanoseconds) == millis

    def test_negative_duration(self):
        with pytest.raises(ValueError):
            ns_to_millis(-1)


@pytest.mark.unit
class TestRunResult:
    def test_success(self, test_utils):
        result = test_utils.create_run_result(wall_clock_ns=5_500_000)
        assert result.wall_clock_millis == 5
        assert not result.timed_out

    def test_timeout_flag(self, test_utils):
        result = test_utils.create_run_result(
            exit_status=ExitStatus.FAILURE, failure_reason=FailureReason.TIMEOUT
        )
        assert result.timed_out

    def test_failure_requires_reason(self, test_utils):
        with pytest.raises(ValueError):
            test_utils.create_run_result(exit_status=ExitStatus.FAILURE)

    def test_negative_duration(self, test_utils):
        with pytest.raises(ValueError):
            test_utils.create_run_result(wall_clock_ns=-1)

    def test_frozen(self, test_utils):
        result = test_utils.create_run_result()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.wall_clock_ns = 0


@pytest.mark.unit
class TestMemorySnapshot:
    def test_used_may_equal_total(self):
        snapshot = MemorySnapshot(heap_used_bytes=10, heap_total_bytes=10)
        assert not snapshot.degraded

    def test_used_above_total_rejected(self):
        with pytest.raises(ValueError, match="exceeds"):
            MemorySnapshot(heap_used_bytes=11, heap_total_bytes=10)

    def test_negative_counters_rejected(self):
        with pytest.raises(ValueError):
            MemorySnapshot(heap_used_bytes=-1, heap_total_bytes=10)

    def test_unavailable_is_zero_and_degraded(self):
        snapshot = MemorySnapshot.unavailable(source="psutil")
        assert (snapshot.heap_used_bytes, snapshot.heap_total_bytes) == (0, 0)
        assert snapshot.degraded
        assert snapshot.source == "psutil"

    def test_to_dict(self):
        snapshot = MemorySnapshot(heap_used_bytes=1, heap_total_bytes=2, source="tracemalloc")
        assert snapshot.to_dict() == {
            "heap_used_bytes": 1,
            "heap_total_bytes": 2,
            "degraded": False,
            "source": "tracemalloc",
        }


@pytest.mark.unit
class TestMetricsRecord:
    def test_to_row_follows_column_order(self, test_utils):
        row = test_utils.create_record()
        assert tuple(row.to_row()) == REPORT_COLUMNS
        assert row.to_row()["exitStatus"] == "success"

    def test_degraded_record_has_no_heap_values(self, test_utils):
        record = test_utils.create_record(degraded=True)
        assert record.to_row()["heapUsedBytes"] is None
        assert record.to_row()["heapTotalBytes"] is None

    def test_degraded_record_with_values_rejected(self, test_utils):
        with pytest.raises(ValueError):
            test_utils.create_record(degraded=True, heap_used_bytes=0, heap_total_bytes=0)

    def test_measured_record_requires_values(self, test_utils):
        with pytest.raises(ValueError):
            test_utils.create_record(heap_used_bytes=None)

    def test_used_above_total_rejected(self, test_utils):
        with pytest.raises(ValueError):
            test_utils.create_record(heap_used_bytes=5000, heap_total_bytes=4096)


@pytest.mark.unit
class TestReport:
    def test_collection_helpers(self, test_utils):
        failed = test_utils.create_record(
            sample="b.py",
            exit_status=ExitStatus.FAILURE,
            failure_reason=FailureReason.TIMEOUT,
        )
        degraded = test_utils.create_record(sample="c.py", degraded=True)
        report = Report(records=(test_utils.create_record(sample="a.py"), failed, degraded))

        assert len(report) == 3
        assert report.samples == ["a.py", "b.py", "c.py"]
        assert report.failed_records() == [failed]
        assert report.degraded_records() == [degraded]
        assert not report.all_succeeded
        assert report.columns == REPORT_COLUMNS

    def test_sample_descriptor_equality(self):
        assert SampleDescriptor("a.py", Path("/x/a.py")) == SampleDescriptor("a.py", Path("/x/a.py"))

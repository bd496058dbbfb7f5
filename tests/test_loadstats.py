import logging
import threading
import time

import pytest

from roughenough.loadstats import Stats, StatsReport, display_loop


def _filled_stats(last_update_ms=0):
    stats = Stats(last_update_ms=last_update_ms)
    stats.record_sent(100)
    stats.record_sent(100)
    stats.record_response(300)
    stats.record_timeout()
    stats.record_error()
    stats.record_error()
    return stats


def test_drain_returns_counts_and_resets():
    stats = _filled_stats(last_update_ms=1000)
    report = stats.drain(now_ms=5000)
    assert report.num_sent == 2
    assert report.bytes_sent == 200
    assert report.num_responses == 1
    assert report.bytes_received == 300
    assert report.num_timeouts == 1
    assert report.num_errors == 2
    assert report.elapsed_secs == pytest.approx(4.0)

    again = stats.drain(now_ms=7000)
    assert again.num_sent == 0
    assert again.num_errors == 0
    assert again.elapsed_secs == pytest.approx(2.0)


def test_rates_times_elapsed_give_counts():
    report = _filled_stats(last_update_ms=0).drain(now_ms=4000)
    assert report.requests_per_sec * report.elapsed_secs == pytest.approx(report.num_sent)
    assert report.responses_per_sec * report.elapsed_secs == pytest.approx(
        report.num_responses
    )
    assert report.errors_per_sec * report.elapsed_secs == pytest.approx(report.num_errors)
    assert report.sent_mib_per_sec * report.elapsed_secs * 1024 * 1024 == pytest.approx(
        report.bytes_sent
    )


def test_zero_elapsed_gives_zero_rates():
    report = StatsReport(5, 10, 5, 10, 0, 0, elapsed_secs=0.0)
    assert report.requests_per_sec == 0.0
    assert report.received_mib_per_sec == 0.0


def test_reset_zeroes_counters_and_last_update():
    stats = _filled_stats(last_update_ms=1000)
    stats.reset()
    assert stats.last_update_ms == 0
    report = stats.drain(now_ms=2000)
    assert report.num_sent == 0
    assert report.bytes_received == 0
    assert report.elapsed_secs == pytest.approx(2.0)


def test_lines_format():
    report = _filled_stats(last_update_ms=0).drain(now_ms=1000)
    lines = report.lines()
    assert len(lines) == 3
    assert lines[0].startswith("sent: 2 reqs, ")
    assert lines[1].startswith("recv: 1 resps, ")
    assert lines[2].startswith("errs: 2 errs, ")
    assert "to: 1 timeouts" in lines[2]
    assert all(" MiB/s" in line for line in lines[:2])


def test_concurrent_recording_is_counted_exactly():
    stats = Stats()

    def work():
        for _ in range(500):
            stats.record_sent(2)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    report = stats.drain(now_ms=1)
    assert report.num_sent == 2000
    assert report.bytes_sent == 4000


def test_display_loop_with_stop_already_set_does_nothing():
    stats = _filled_stats()
    stop = threading.Event()
    stop.set()
    assert display_loop(stats, delay=0.01, stop=stop) == 0
    assert stats.drain(now_ms=1).num_sent == 2


def test_display_loop_logs_and_drains(caplog):
    stats = _filled_stats()
    stop = threading.Event()
    result = {}

    def run():
        result["count"] = display_loop(stats, delay=0.01, stop=stop)

    with caplog.at_level(logging.INFO, logger="roughenough.loadstats"):
        thread = threading.Thread(target=run)
        thread.start()
        time.sleep(0.2)
        stop.set()
        thread.join()

    assert result["count"] >= 1
    assert any("sent: 2 reqs" in r.getMessage() for r in caplog.records)
    assert stats.drain().num_sent == 0
"""
Database-backed store tests.
"""
import re

from database.stores import ReportSink


def test_config_store_roundtrip(config_store):
    assert config_store.get("missing", "fallback") == "fallback"

    config_store.set("total_pages", 3)
    config_store.set("total_pages", 4)

    assert config_store.get("total_pages") == 4
    assert config_store.all() == {"total_pages": 4}


def test_report_rows_start_at_row_two(report_sink):
    written = report_sink.write_rows([
        {"campaign_id": "1", "title": "A", "spent": 1.5},
        {"campaign_id": "2", "title": "B"},
    ])

    assert written == 2
    assert [(r["row_number"], r["campaign_id"]) for r in report_sink.rows()] == [(2, "1"), (3, "2")]


def test_report_sheets_are_separate(session_factory, report_sink):
    other = ReportSink(session_factory, "LAST7")
    report_sink.write_rows([{"campaign_id": "1", "title": "A"}])
    other.write_rows([{"campaign_id": "2", "title": "B"}])

    report_sink.clear()

    assert report_sink.rows() == []
    assert [r["campaign_id"] for r in other.rows()] == ["2"]


def test_last_updated_format(report_sink):
    stamp = report_sink.set_last_updated()

    assert re.fullmatch(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2}", stamp)
    assert report_sink.last_updated() == stamp


def test_log_trim_keeps_last_two(log_sink):
    for i in range(4):
        log_sink.write(f"entry {i}")

    deleted = log_sink.trim()

    assert deleted == 2
    assert [message for _, message in log_sink.entries()] == ["entry 2", "entry 3"]


def test_log_trim_below_threshold(log_sink):
    for i in range(3):
        log_sink.write(f"entry {i}")

    assert log_sink.trim() == 0
    assert len(log_sink.entries()) == 3


def test_campaign_list_replace(list_source):
    list_source.replace("STOPCAMPAIGN", ["1", None, 3])

    assert list_source.values("STOPCAMPAIGN") == ["1", None, "3"]
    assert list_source.values("RERUNCAMPAIGN") == []

"""
Command line tests.
"""
import pytest

from scheduler.scheduler_main import build_parser, run_command
from conftest import FakeClient


def test_report_window_is_case_insensitive():
    args = build_parser().parse_args(["report", "last7"])
    assert args.command == "report"
    assert args.window == "LAST7"


def test_unknown_window_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["report", "LAST90"])


def test_exclude_zones_arguments():
    args = build_parser().parse_args(["exclude-zones", "9", "1", "2"])
    assert args.campaign_id == "9"
    assert args.zone_ids == ["1", "2"]


def test_rerun_disabled_is_a_failure(services_factory, config_store):
    args = build_parser().parse_args(["rerun-campaigns"])
    assert run_command(args, services_factory(FakeClient())) is False


def test_clear_log_command(services_factory, log_sink):
    log_sink.write("only entry")
    args = build_parser().parse_args(["clear-log"])

    assert run_command(args, services_factory(FakeClient())) is True
    assert len(log_sink.entries()) == 1

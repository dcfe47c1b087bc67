#!/usr/bin/env python3
"""
Galaksion Monitor - command line entry point

One command per scheduled job. Scheduling itself (cron, systemd timers)
lives outside this process:

    galaksion-monitor refresh-token
    galaksion-monitor report TODAY
    galaksion-monitor report --all
    galaksion-monitor stop-campaigns
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Allow running the file directly from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.logging_setup import setup_logging, get_logger, set_context
from database import init_db
from scheduler import jobs
from scheduler.windows import REPORT_WINDOWS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="galaksion-monitor",
        description="Galaksion campaign reporting and control",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("generate-token", help="Log in with stored credentials and store a new token")
    commands.add_parser("refresh-token", help="Refresh the stored token")

    report = commands.add_parser("report", help="Refresh a report window")
    report.add_argument("window", nargs="?", type=str.upper, choices=REPORT_WINDOWS, help="Report window")
    report.add_argument("--all", action="store_true", help="Refresh every window")

    commands.add_parser("stop-campaigns", help="Pause campaigns on the STOPCAMPAIGN list")
    commands.add_parser("rerun-campaigns", help="Resume campaigns on the RERUNCAMPAIGN list")
    commands.add_parser("check-automation", help="Enable automation once the auto-enable time has passed")
    commands.add_parser("clear-log", help="Trim the activity log to its last rows")

    zones = commands.add_parser("zones", help="Show zone statistics for a campaign")
    zones.add_argument("campaign_id", help="Campaign ID")
    zones.add_argument("date_from", help="Start date (YYYY-MM-DD)")
    zones.add_argument("date_till", help="End date (YYYY-MM-DD)")

    exclude = commands.add_parser("exclude-zones", help="Exclude zones from a campaign")
    exclude.add_argument("campaign_id", help="Campaign ID")
    exclude.add_argument("zone_ids", nargs="+", help="Zone IDs")

    return parser


def run_command(args: argparse.Namespace, services: jobs.Services) -> bool:
    """Dispatch parsed arguments to a job; returns True on success"""
    command = args.command

    if command == "generate-token":
        return jobs.generate_token_job(services)

    if command == "refresh-token":
        return jobs.refresh_token_job(services)

    if command == "report":
        if args.all:
            results = jobs.run_all_reports(services)
            return all(result.ok for result in results.values())
        if not args.window:
            raise SystemExit("report: give a window or --all")
        return jobs.run_report(services, args.window).ok

    if command == "stop-campaigns":
        return jobs.stop_campaigns(services) is not None

    if command == "rerun-campaigns":
        result = jobs.rerun_campaigns(services)
        return result is not None and result is not False

    if command == "check-automation":
        jobs.check_and_update_automation(services)
        return True

    if command == "clear-log":
        jobs.clear_log_rows(services)
        return True

    if command == "zones":
        jobs.get_campaign_zones(services, args.campaign_id, args.date_from, args.date_till)
        return True

    if command == "exclude-zones":
        return jobs.exclude_campaign_zones(services, args.campaign_id, args.zone_ids)

    raise SystemExit(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None):
    """Entry point"""
    args = build_parser().parse_args(argv)

    setup_logging()
    set_context(service="scheduler", function=args.command.replace("-", "_"))
    logger = get_logger()

    try:
        init_db()
    except Exception as e:
        logger.error(f"[ERROR] Database connection failed: {e}")
        sys.exit(1)

    services = jobs.build_services()

    try:
        success = run_command(args, services)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(130)

    logger.info(f"[{'OK' if success else 'ERROR'}] {args.command} finished")
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

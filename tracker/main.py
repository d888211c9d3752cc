"""Main pipeline orchestration for the activity calendar."""

import argparse
import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout

from .calendar_grid import MONTH_NAMES, build_month_grid
from .config import get_config, load_config
from .countdown import format_countdown, get_countdown_parts, split_next, upcoming_interviews
from .dedupe import build_events, events_by_date
from .digest import build_digest, digest_subject, render_digest
from .gmail_client import send_email
from .models import CalendarEvent
from .normalize import format_human_date_time
from .reminders import due_reminders, reminder_subject, render_reminder
from .sheets import sync_events
from .stats import build_stats_report
from .storage import load_collections
from .ticker import CountdownTicker

LOCK_FILE = Path("/tmp/job_tracker_calendar.lock")
LOG_DIR = Path(__file__).parent.parent / "logs"


def setup_logging() -> None:
    """Configure logging for the application."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / "app.log"

    config = get_config()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout),
        ],
    )


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM into (year, 0-based month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")
    return parsed.year, parsed.month - 1


def summarize(events: list[CalendarEvent], year: int, month: int, now: datetime) -> dict:
    """Log the calendar view for a month and return its headline numbers."""
    logger = logging.getLogger(__name__)
    config = get_config()

    grid = build_month_grid(year, month)
    grouped = events_by_date(events)
    active_days = [day.iso for day in grid if day.in_current_month and day.iso in grouped]

    report = build_stats_report(events, year, month)
    upcoming = upcoming_interviews(events, now, config.upcoming_limit)
    next_interview, later = split_next(upcoming)

    logger.info(f"{MONTH_NAMES[month]} {year}: {report.current.total} events on {len(active_days)} days")
    logger.info(
        "By kind: " + ", ".join(f"{kind}={count}" for kind, count in report.current.by_kind.items())
    )
    if report.total_growth_pct is None:
        logger.info("Total vs previous month: new this month")
    else:
        logger.info(f"Total vs previous month: {report.total_growth_pct:+d}%")
    logger.info(
        f"Outcomes: {report.positive_pct}% positive, {report.negative_pct}% negative, "
        f"{report.total_per_week:.1f} events/week"
    )
    logger.info(f"All time: {report.all_time.total} events, {report.all_time.by_kind['applied']} applications")

    if next_interview is None:
        logger.info("No upcoming interviews")
    else:
        parts = get_countdown_parts(next_interview, now)
        countdown = format_countdown(parts) if parts else "time unknown"
        logger.info(
            f"Next interview: {next_interview.title} "
            f"{format_human_date_time(next_interview.date, next_interview.time)} ({countdown})"
        )
        for event in later:
            logger.info(f"  Later: {event.title} {format_human_date_time(event.date, event.time)}")

    return {
        "events": len(events),
        "month_events": report.current.total,
        "active_days": len(active_days),
        "upcoming_interviews": len(upcoming),
    }


def watch_next_interview(events: list[CalendarEvent], stop: Optional[threading.Event] = None) -> None:
    """Print a live countdown to the next interview until interrupted."""
    stop = stop or threading.Event()

    def show(now: datetime) -> None:
        next_interview, _ = split_next(upcoming_interviews(events, now, 1))
        if next_interview is None:
            print("No upcoming interviews")
            stop.set()
            return
        parts = get_countdown_parts(next_interview, now)
        if parts is not None:
            print(f"\r{next_interview.title}: {format_countdown(parts)}   ", end="", flush=True)

    ticker = CountdownTicker(show, on_error=lambda e: stop.set())
    try:
        with ticker:
            stop.wait()
    except KeyboardInterrupt:
        pass
    finally:
        ticker.stop()
        print()


def run_pipeline(args: argparse.Namespace) -> dict:
    """Load records, build the calendar and run the requested outputs."""
    logger = logging.getLogger(__name__)
    config = get_config()
    now = datetime.now()

    data_path = args.data or config.resolved_data_path()
    collections = load_collections(data_path)
    events = build_events(collections)
    logger.info(f"Built {len(events)} calendar events")

    year, month = args.month or (now.year, now.month - 1)
    stats = summarize(events, year, month, now)
    stats["synced"] = 0
    stats["digest_sent"] = False
    stats["reminders_sent"] = 0

    if args.sync:
        try:
            stats["synced"] = sync_events(events)
        except Exception as e:
            logger.error(f"Failed to sync to spreadsheet: {e}")
            raise

    if args.digest:
        if not config.digest_recipient:
            raise ValueError("digest_recipient is not configured")
        digest = build_digest(events, now, config.upcoming_limit)
        try:
            send_email(
                config.digest_recipient,
                digest_subject(digest),
                render_digest(digest, config.user_name),
            )
            stats["digest_sent"] = True
        except Exception as e:
            logger.error(f"Failed to send digest: {e}")
            raise

    if args.remind:
        if not config.digest_recipient:
            raise ValueError("digest_recipient is not configured")
        due = due_reminders(events, now, config.reminder_hours_before)
        logger.info(f"{len(due)} interviews due for a reminder")
        for event in due:
            try:
                send_email(
                    config.digest_recipient,
                    reminder_subject(event),
                    render_reminder(event, now, config.user_name),
                )
                stats["reminders_sent"] += 1
            except Exception as e:
                logger.error(f"Failed to send reminder for {event.id}: {e}")
                raise

    if args.watch:
        watch_next_interview(events)

    return stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job application activity calendar")
    parser.add_argument("--data", type=Path, help="Local storage export (JSON)")
    parser.add_argument("--month", type=parse_month, help="Month to show, YYYY-MM (default: current)")
    parser.add_argument("--sync", action="store_true", help="Write events to Google Sheets")
    parser.add_argument("--digest", action="store_true", help="Email last month's digest")
    parser.add_argument("--remind", action="store_true", help="Email reminders for interviews coming up (run hourly)")
    parser.add_argument("--watch", action="store_true", help="Live countdown to the next interview")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point with concurrency protection."""
    args = build_parser().parse_args(argv)

    try:
        load_config()
        setup_logging()
    except FileNotFoundError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    logger = logging.getLogger(__name__)

    try:
        with FileLock(LOCK_FILE, timeout=10):
            logger.info("Acquired lock, building calendar")
            run_pipeline(args)
            return 0

    except Timeout:
        logger.warning("Could not acquire lock - another instance is running")
        return 0

    except Exception as e:
        logger.exception(f"Pipeline failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
popular.py - Report ratings of the most viewed drugs, once or on a schedule

Commands:
    schedule           Report every hour (default when no command is given)
    schedule --now     Same, plus one report right away
    once               Report once and exit
    once --limit N     Report on the top N drugs instead of MAX_RANK
    rating <drug id>   Show the rating of a single drug
    help               Show this message
"""

import asyncio
import sys

import aiohttp

from analytics import fetch_top_item_ids
from config import MAX_RANK, RATING_CONCURRENCY, REPORT_SCHEDULE, REQUEST_TIMEOUT
from console import log, show_rating
from ratings import fetch_rating, fetch_rating_async
from scheduler import ReportScheduler


async def _report_in_order(session, item_ids, fetch_rating, show) -> int:
    shown = 0
    for item_id in item_ids:
        record = await fetch_rating(session, item_id)
        show(record)
        shown += 1
    return shown


async def _report_gathered(session, item_ids, fetch_rating, show, concurrency) -> int:
    semaphore = asyncio.Semaphore(concurrency)

    async def fetch_one(rank: int, item_id: str):
        async with semaphore:
            try:
                return (rank, await fetch_rating(session, item_id), None)
            except Exception as e:
                return (rank, None, e)

    results = await asyncio.gather(*(fetch_one(rank, item_id) for rank, item_id in enumerate(item_ids)))

    # Completion order depends on latency; print strictly by rank
    shown = 0
    for rank, record, error in sorted(results, key=lambda r: r[0]):
        if error is not None:
            raise error
        show(record)
        shown += 1
    return shown


async def report_ratings(item_ids: list[str], fetch_rating=fetch_rating_async,
                         show=show_rating, concurrency: int = RATING_CONCURRENCY) -> int:
    """
    Fetch and show the rating of each drug, most popular first.

    With concurrency 1 each drug is fetched and shown before the next one is
    requested. Above 1, ratings are fetched in parallel and shown by rank once
    all are in. Either way the first failed rank is raised: lower ranks have
    already been shown, higher ranks are not.

    Returns the number of lines shown.
    """
    timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        if concurrency <= 1:
            return await _report_in_order(session, item_ids, fetch_rating, show)
        return await _report_gathered(session, item_ids, fetch_rating, show, concurrency)


def run_report(limit: int = MAX_RANK, concurrency: int = RATING_CONCURRENCY,
               fetch_ids=fetch_top_item_ids, fetch_rating=fetch_rating_async,
               show=show_rating) -> int:
    """Report the ratings of the `limit` most viewed drugs. Failures propagate."""
    log(f"Fetching top {limit} drugs by pageviews...")
    item_ids = fetch_ids(limit)
    log(f"Got {len(item_ids)} drug ids")
    if not item_ids:
        return 0

    return asyncio.run(report_ratings(item_ids, fetch_rating=fetch_rating,
                                      show=show, concurrency=concurrency))


def cmd_schedule(now: bool = False, scheduler: ReportScheduler = None):
    """Report on REPORT_SCHEDULE until interrupted"""
    scheduler = scheduler or ReportScheduler()
    if not scheduler.schedule(REPORT_SCHEDULE, run_report, MAX_RANK):
        log("Nothing scheduled, exiting", "ERROR")
        return 1

    if now:
        scheduler.tick()

    scheduler.start()
    return 0


def cmd_once(limit: int = MAX_RANK):
    """Report once"""
    try:
        shown = run_report(limit)
    except Exception as e:
        log(f"Report failed: {e}", "ERROR")
        return 1

    log(f"Reported {shown} drugs")
    return 0


def cmd_rating(item_id: str):
    """Show the rating of one drug"""
    try:
        record = fetch_rating(item_id)
    except Exception as e:
        log(f"Could not fetch rating for {item_id}: {e}", "ERROR")
        return 1

    show_rating(record)
    return 0


def main():
    """Main CLI entry point"""
    args = sys.argv[1:]
    cmd = args[0] if args else 'schedule'

    if cmd == 'help':
        print(__doc__)
        return 0

    elif cmd == 'schedule':
        return cmd_schedule(now='--now' in args)

    elif cmd == 'once':
        limit = MAX_RANK
        if '--limit' in args:
            idx = args.index('--limit')
            value = args[idx + 1] if idx + 1 < len(args) else ''
            if not value.isdigit() or int(value) < 1:
                print(f"--limit needs a positive integer, got {value!r}")
                print(__doc__)
                return 1
            limit = int(value)
        return cmd_once(limit=limit)

    elif cmd == 'rating' and len(args) > 1:
        return cmd_rating(args[1])

    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)
        return 1


if __name__ == "__main__":
    sys.exit(main())

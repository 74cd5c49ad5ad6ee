"""
scheduler.py - Run a callback on a crontab schedule with APScheduler

Registration and every tick are guarded: a failure is logged, never raised.
A failed tick leaves the job registered, so the next tick runs as usual.
"""

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from config import MAX_OVERLAPPING_TICKS, SCHEDULER_TIMEZONE
from console import log


class ReportScheduler:
    """One scheduled job on top of an APScheduler scheduler."""

    def __init__(self, scheduler=None, timezone: str = SCHEDULER_TIMEZONE,
                 max_instances: int = MAX_OVERLAPPING_TICKS):
        self.timezone = timezone
        self.max_instances = max_instances
        self.scheduler = scheduler or BlockingScheduler(timezone=timezone)
        self.job = None
        self._callback = None
        self._args = ()

    def schedule(self, cron_expr: str, callback, *args) -> bool:
        """
        Register callback(*args) on a 5-field crontab expression.

        Returns False (and logs) when registration fails; in that case no
        tick will ever fire.
        """
        try:
            trigger = CronTrigger.from_crontab(cron_expr.strip(), timezone=self.timezone)
            self.job = self.scheduler.add_job(
                self.tick,
                trigger=trigger,
                id=getattr(callback, '__name__', 'report'),
                replace_existing=True,
                max_instances=self.max_instances,
            )
        except Exception as e:
            log(f"Could not schedule {cron_expr!r}: {e}", "ERROR")
            self.job = None
            return False

        self._callback = callback
        self._args = args
        log(f"Scheduled {self.job.id} at {cron_expr.strip()!r} ({self.timezone})")
        return True

    def tick(self) -> bool:
        """Run the registered callback once. Returns False if it raised."""
        if self._callback is None:
            log("Tick with nothing scheduled", "WARNING")
            return False

        try:
            self._callback(*self._args)
        except Exception as e:
            log(f"Scheduled run failed: {e}", "ERROR")
            return False
        return True

    def start(self):
        """Start the scheduler. Blocks with the default BlockingScheduler."""
        log("Scheduler started")
        try:
            self.scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            self.stop()

    def stop(self):
        if self.scheduler.running:
            log("Scheduler stopping...")
            self.scheduler.shutdown(wait=False)

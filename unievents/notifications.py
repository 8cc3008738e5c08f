"""Background check for events that are about to start."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable

from unievents.event import Event
from unievents.store import EventStore

logger = logging.getLogger(__name__)


class UpcomingEventNotifier:
    """
    Periodically notifies about events starting within a time window.

    The notifier only reads a snapshot of the store and its own set of event
    ids already notified. Each event is notified at most once per session.

    Attributes:
        store (EventStore): Store to read events from.
        notify (Callable[[Event], None]): Called once for each event about to start.
        minutes_before (int): Size of the window before the start time.
        interval_seconds (float): Delay between checks.
        initial_delay_seconds (float): Delay before the first check.
    """

    def __init__(
        self,
        store: EventStore,
        notify: Callable[[Event], None],
        minutes_before: int = 10,
        interval_seconds: float = 60,
        initial_delay_seconds: float = 10,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.notify = notify
        self.minutes_before = minutes_before
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.clock = clock
        self.enabled = True
        self.notified: set[str] = set()
        self._stop_requested = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def check(self) -> list[Event]:
        """
        Runs one scan and notifies about events entering the window.

        Returns:
            list[Event]: Events notified by this scan.
        """
        if not self.enabled:
            return []

        now = self.clock()
        threshold = now + timedelta(minutes=self.minutes_before)
        notified = []
        for event in self.store.snapshot():
            starts_at = event.starts_at
            if starts_at is None or event.event_id in self.notified:
                continue
            if now < starts_at <= threshold:
                try:
                    self.notify(event)
                except Exception:
                    logger.exception("Upcoming event notification failed for %s", event)
                    continue
                self.notified.add(event.event_id)
                notified.append(event)
        return notified

    def start(self) -> None:
        """Start checking on a daemon thread."""
        if self.is_running:
            return
        self._stop_requested.clear()
        self._thread = threading.Thread(
            target=self._run, name="upcoming-event-notifier", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5) -> None:
        """Request the thread to stop and wait for it."""
        self._stop_requested.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        if self._stop_requested.wait(self.initial_delay_seconds):
            return
        while True:
            try:
                self.check()
            except Exception:
                logger.exception("Upcoming event check failed")
            if self._stop_requested.wait(self.interval_seconds):
                return

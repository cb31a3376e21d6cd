"""
Wall-clock access for the booking flow.

The session resolver never reads the clock itself; routes sample it once per
request through the ``get_clock`` dependency so tests can pin "now".
"""

import os
from datetime import datetime

import pytz
from dotenv import load_dotenv

load_dotenv()

VENUE_TIMEZONE = os.getenv("VENUE_TIMEZONE", "Asia/Beirut")


class SystemClock:
    def __init__(self, timezone: str = VENUE_TIMEZONE):
        self.tz = pytz.timezone(timezone)

    def now(self) -> datetime:
        """Current time in the venue's timezone."""
        return datetime.now(self.tz)


class FixedClock:
    """Clock frozen at a given instant."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


_system_clock = SystemClock()


def get_clock():
    return _system_clock

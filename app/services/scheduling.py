"""
Weekly session scheduling.

resolve_sessions() turns the recurring package templates into their next
concrete occurrence; remaining_spots() counts what is left of one occurrence.
Both are pure: "now" and the bookings snapshot are passed in.
"""

from datetime import datetime, timedelta

from app.core.locale import format_long_date, DEFAULT_LOCALE
from app.schemas.session import ResolvedSession

CUTOFF_HOUR = 12
SATURDAY = 6


def weekday_of(moment: datetime) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return moment.isoweekday() % 7


def days_until_session(now: datetime, target_weekday: int) -> int:
    days_until = (target_weekday - weekday_of(now) + 7) % 7
    after_cutoff = now.hour >= CUTOFF_HOUR

    if target_weekday == SATURDAY:
        # Saturday closes Friday noon; Saturday itself is always closed
        if days_until == 0 or (days_until == 1 and after_cutoff):
            days_until += 7
    elif days_until == 0 and after_cutoff:
        days_until += 7

    return days_until


def resolve_sessions(now: datetime, catalog, locale: str = DEFAULT_LOCALE):
    sessions = []
    for pkg in catalog:
        session_date = now.date() + timedelta(days=days_until_session(now, pkg.target_weekday))
        sessions.append(
            ResolvedSession(
                **pkg.model_dump(),
                session_date=session_date,
                date_display=format_long_date(session_date, locale),
            )
        )
    return sessions


def remaining_spots(bookings, session_key, max_players: int) -> int:
    taken = sum(1 for b in bookings if b.session_key == session_key)
    return max(max_players - taken, 0)


def with_capacity(sessions, bookings):
    """Attach remaining / is_full to each resolved session."""
    counted = []
    for session in sessions:
        spots = remaining_spots(bookings, session.session_key, session.max_players)
        counted.append(session.model_copy(update={"remaining": spots, "is_full": spots == 0}))
    return counted

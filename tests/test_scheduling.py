from datetime import date, timedelta

import pytest

from app.core.clock import SystemClock
from app.core.locale import format_long_date
from app.schemas.session import PackageTemplate
from app.services.catalog import PACKAGES
from app.services.scheduling import days_until_session, resolve_sessions, weekday_of

from conftest import WEDNESDAY_MORNING, beirut


def template(target_weekday, package_id="pkg"):
    return PackageTemplate(
        id=package_id,
        name="Session",
        day_name="Jour",
        description="",
        time_range="10:00 - 11:00",
        max_players=4,
        price_per_person=7.5,
        target_weekday=target_weekday,
    )


def resolve_one(now, target_weekday):
    return resolve_sessions(now, [template(target_weekday)])[0]


# ---------------------------------------------------------------------
# INVARIANTS
# ---------------------------------------------------------------------
@pytest.mark.parametrize("day", range(18, 25))  # Sun 18 .. Sat 24 Oct 2026
@pytest.mark.parametrize("hour", [0, 11, 12, 23])
@pytest.mark.parametrize("target", range(7))
def test_resolved_date_is_on_target_weekday_and_not_in_the_past(day, hour, target):
    now = beirut(2026, 10, day, hour, 30)
    session = resolve_one(now, target)

    assert session.session_date.isoweekday() % 7 == target
    assert session.session_date >= now.date()
    assert session.session_date < now.date() + timedelta(days=14)


def test_weekday_of_counts_from_sunday():
    assert weekday_of(beirut(2026, 10, 18)) == 0
    assert weekday_of(WEDNESDAY_MORNING) == 3
    assert weekday_of(beirut(2026, 10, 24)) == 6


# ---------------------------------------------------------------------
# SATURDAY CUTOFF (Friday noon)
# ---------------------------------------------------------------------
def test_saturday_open_until_friday_noon():
    session = resolve_one(beirut(2026, 10, 23, 11, 59), 6)
    assert session.session_date == date(2026, 10, 24)


def test_saturday_rolls_over_at_friday_noon():
    session = resolve_one(beirut(2026, 10, 23, 12, 0), 6)
    assert session.session_date == date(2026, 10, 31)


@pytest.mark.parametrize("hour", [0, 8, 11, 12, 20])
def test_saturday_is_closed_all_day_saturday(hour):
    session = resolve_one(beirut(2026, 10, 24, hour, 0), 6)
    assert session.session_date == date(2026, 10, 31)


def test_saturday_earlier_in_week_ignores_hour():
    assert days_until_session(beirut(2026, 10, 22, 18, 0), 6) == 2


# ---------------------------------------------------------------------
# GENERAL SAME-DAY CUTOFF
# ---------------------------------------------------------------------
def test_same_day_session_open_before_noon():
    session = resolve_one(beirut(2026, 10, 22, 11, 59), 4)
    assert session.session_date == date(2026, 10, 22)


def test_same_day_session_rolls_over_at_noon():
    session = resolve_one(beirut(2026, 10, 22, 12, 0), 4)
    assert session.session_date == date(2026, 10, 29)


def test_day_before_noon_only_matters_for_saturday():
    # Wednesday afternoon, Thursday session stays this week
    session = resolve_one(beirut(2026, 10, 21, 15, 0), 4)
    assert session.session_date == date(2026, 10, 22)


# ---------------------------------------------------------------------
# CATALOG / LABELS
# ---------------------------------------------------------------------
def test_empty_catalog_resolves_to_nothing():
    assert resolve_sessions(WEDNESDAY_MORNING, []) == []


def test_wednesday_morning_resolves_this_week():
    thursday, saturday = resolve_sessions(WEDNESDAY_MORNING, PACKAGES)

    assert thursday.id == "thursday-morning"
    assert thursday.session_date == date(2026, 10, 22)
    assert thursday.date_display == "jeudi 22 octobre"

    assert saturday.id == "saturday-morning-8p"
    assert saturday.session_date == date(2026, 10, 24)
    assert saturday.date_display == "samedi 24 octobre"


def test_resolved_session_keeps_template_fields():
    session = resolve_sessions(WEDNESDAY_MORNING, PACKAGES)[1]
    assert session.time_range == "10:30 - 12:00"
    assert session.max_players == 8
    assert session.price_per_person == 12
    assert session.remaining is None


def test_english_labels():
    session = resolve_sessions(WEDNESDAY_MORNING, PACKAGES, locale="en")[0]
    assert session.date_display == "Thursday, October 22"


def test_unknown_locale_falls_back_to_french():
    assert format_long_date(date(2026, 8, 15), "de") == "samedi 15 août"


def test_system_clock_reads_venue_time():
    now = SystemClock("Asia/Beirut").now()
    assert now.tzinfo is not None
    assert now.tzinfo.zone == "Asia/Beirut"

from datetime import date

# ── Weekday / month names, index 0 = Monday / January ──
WEEKDAY_NAMES = {
    "fr": ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"],
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
}

MONTH_NAMES = {
    "fr": [
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ],
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}

DEFAULT_LOCALE = "fr"


def format_long_date(day: date, locale: str = DEFAULT_LOCALE) -> str:
    """
    Long-form label: weekday name, day number, month name.

    fr -> "jeudi 22 octobre", en -> "Thursday, October 22".
    Unknown locales fall back to French.
    """
    if locale not in WEEKDAY_NAMES:
        locale = DEFAULT_LOCALE

    weekday = WEEKDAY_NAMES[locale][day.weekday()]
    month = MONTH_NAMES[locale][day.month - 1]

    if locale == "en":
        return f"{weekday}, {month} {day.day}"
    return f"{weekday} {day.day} {month}"

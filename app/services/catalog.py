import os
from dotenv import load_dotenv

from app.models.enums import CourtType
from app.schemas.session import Court, PackageTemplate

load_dotenv()

BOOKING_LOCALE = os.getenv("BOOKING_LOCALE", "fr")

# ---------------------------------------------------------------------
# VENUE (single court)
# ---------------------------------------------------------------------
COURT = Court(
    id="achrafieh-1",
    name="The Padelist Achrafieh",
    type=CourtType.PANORAMIC,
    image="https://images.unsplash.com/photo-1626224583764-f87db24ac4ea?auto=format&fit=crop&q=80&w=800",
    rating=5.0,
    features=["Achrafieh High-End", "Tapis WPT", "Éclairage Premium", "Zone Lounge"],
    price_label="7.5-12$ / Pers",
)

# ---------------------------------------------------------------------
# WEEKLY PACKAGES
# ---------------------------------------------------------------------
PACKAGES = [
    PackageTemplate(
        id="thursday-morning",
        name="Cours Collectif Jeudi",
        day_name="Jeudi",
        description="Une session technique limitée à 4 joueurs.",
        time_range="10:00 - 11:00",
        max_players=4,
        price_per_person=7.5,
        target_weekday=4,
    ),
    PackageTemplate(
        id="saturday-morning-8p",
        name="Match Coaching Samedi",
        day_name="Samedi",
        description="Session avec tournoi interne et conseils tactiques.",
        time_range="10:30 - 12:00",
        max_players=8,
        price_per_person=12,
        target_weekday=6,
    ),
]

# Informational only, nothing enforces these
NOTICES = [
    "Clôture Samedi : Les inscriptions se terminent chaque Vendredi à 12h00 précises.",
    "IMPORTANT : Si le quorum (4 pour Jeudi / 8 pour Samedi) n'est pas atteint, "
    "la session pourra être annulée. Places non garanties.",
]


def get_package(package_id: str):
    for pkg in PACKAGES:
        if pkg.id == package_id:
            return pkg
    return None

from __future__ import annotations
from datetime import date, datetime
from typing import Optional


JOURS = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]
MOIS = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]


def format_duration(minutes: int) -> str:
    """45 -> '45 min', 60 -> '1h', 90 -> '1h30'."""
    m = max(0, int(minutes or 0))
    hours, mins = divmod(m, 60)
    if hours == 0:
        return f"{mins} min"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h{mins}"


def format_long_date(d: date, weekday: bool = True) -> str:
    """'lundi 3 mars 2025' (sans zéro initial, comme fr-FR)."""
    txt = f"{d.day} {MOIS[d.month - 1]} {d.year}"
    return f"{JOURS[d.weekday()]} {txt}" if weekday else txt


def format_time(dt: datetime) -> str:
    return dt.strftime("%H:%M")


def format_short_datetime(dt: Optional[datetime]) -> str:
    """'03/03/2025 14:30' pour l'historique des statuts."""
    if dt is None:
        return "-"
    return dt.strftime("%d/%m/%Y %H:%M")


def format_short_date(dt: Optional[datetime]) -> str:
    if dt is None:
        return "-"
    return dt.strftime("%d/%m/%Y")

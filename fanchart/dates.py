"""Date display helpers: formatted dates, lifespans and ages."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from babel.dates import format_date

YOUNG_AGE_LIMIT = 18

_YEAR = re.compile(r"(\d{3,4})")
_ISO = re.compile(r"^(\d{3,4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$")


def _strip_markers(value: str) -> str:
    # "x" marks a soldier killed in action
    value = value.strip()
    if value.startswith("x"):
        value = value[1:]
    return value.strip()


def is_killed_in_action(value: Optional[str]) -> bool:
    return bool(value) and value.strip().startswith("x")


def date2str(value: Optional[str], locale: str = "de") -> str:
    if value is None or value == "":
        return ""
    if value.startswith("#"):
        return value
    value = _strip_markers(value)

    try:
        date_obj = datetime.strptime(value, "%Y-%m-%d")
        # 'd. MMM y' = e.g., 15. Jan 1880 in German format
        return format_date(date_obj, format="d. MMM y", locale=locale)
    except ValueError:
        return str(value)


def parse_year(value: Optional[str]) -> Optional[int]:
    if not value or value.startswith("#"):
        return None
    match = _YEAR.search(_strip_markers(value))
    return int(match.group(1)) if match else None


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a full ISO date; partial dates return None."""
    if not value:
        return None
    match = _ISO.match(_strip_markers(value))
    if not match or match.group(3) is None:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def lifetime_description(
    birth: Optional[str], death: Optional[str], is_dead: bool = False
) -> str:
    """Create the timespan label, e.g. "1880-1944", "*1880" or "†1944"."""
    birth_year = parse_year(birth)
    death_year = parse_year(death)

    if birth_year is not None and death_year is not None:
        return f"{birth_year}-{death_year}"
    if birth_year is not None:
        return f"*{birth_year}"
    if death_year is not None:
        return f"†{death_year}"
    if is_dead:
        return "†"
    return ""


def age_years(birth: Optional[str], death: Optional[str]) -> Optional[int]:
    """Age at death in whole years, or None when it cannot be determined."""
    born = _parse_date(birth)
    died = _parse_date(death)
    if born and died:
        if died < born:
            return None
        return died.year - born.year - ((died.month, died.day) < (born.month, born.day))

    birth_year = parse_year(birth)
    death_year = parse_year(death)
    if birth_year is None or death_year is None or death_year < birth_year:
        return None
    return death_year - birth_year


def is_deceased_young(
    birth: Optional[str], death: Optional[str], limit: int = YOUNG_AGE_LIMIT
) -> bool:
    age = age_years(birth, death)
    return age is not None and 0 <= age <= limit

"""Load a genealogy from the semicolon separated CSV export.

Columns: ``id;name;sex;parent1_id;parent2_id;spouse_id;birth_date;death_date;
place_of_birth;place_of_death;marriage_date;place_of_marriage`` and optionally
``given_name;surname``. Quoted name parts ('Karl') mark the preferred given
name, multiple spouses and their marriage dates are separated by ":", and
"-" stands for an unknown spouse.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .records import FamilyRecord, PersonRecord, Sex

log = logging.getLogger(__name__)

UNKNOWN_SPOUSE = "-"

_QUOTED = re.compile(r"'([^']+)'")


def _cell(row: pd.Series, column: str) -> Optional[str]:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    return str(value).strip() or None


def _split(value: Optional[str]) -> List[str]:
    return [part.strip() for part in value.split(":")] if value else []


def _at(values: List[str], index: int) -> Optional[str]:
    value = values[index] if index < len(values) else ""
    return value or None


def parse_name(
    name: Optional[str], given_name: Optional[str] = None, surname: Optional[str] = None
) -> Tuple[str, List[str], List[str], str]:
    """Split a CSV name into (display name, first names, last names, preferred name).

    Without explicit given name/surname columns the last word is the surname.
    """
    name = (name or "").strip()
    match = _QUOTED.search(name)
    preferred = match.group(1).split()[0] if match else ""
    display = name.replace("'", "")

    if given_name or surname:
        first_names = (given_name or "").replace("'", "").split()
        last_names = (surname or "").split()
    else:
        tokens = display.split()
        first_names, last_names = tokens[:-1], tokens[-1:]

    return display, first_names, last_names, preferred


def _family_key(*spouses: Optional[str]) -> Tuple[str, ...]:
    return tuple(sorted(spouse for spouse in spouses if spouse and spouse != UNKNOWN_SPOUSE))


def load_csv(filename, url_template: Optional[str] = None) -> Dict[str, PersonRecord]:
    """Read all persons of the CSV file, linked through their families, keyed by id."""
    df = pd.read_csv(filename, sep=";", dtype=str).set_index("id")
    # empty cells become None, string columns would keep NaN
    df = df.astype(object).where(df.notna(), None)
    log.info("Loaded %d records from %s", len(df), filename)

    if df.index.duplicated().any():
        for xref in df.index[df.index.duplicated()].unique():
            log.warning("duplicate key %s, keeping the first record", xref)
        df = df[~df.index.duplicated(keep="first")]

    people: Dict[str, PersonRecord] = {}
    for xref, row in df.iterrows():
        display, first_names, last_names, preferred = parse_name(
            _cell(row, "name"), _cell(row, "given_name"), _cell(row, "surname")
        )
        people[xref] = PersonRecord(
            xref=xref,
            sex=Sex.parse(_cell(row, "sex")),
            name=display,
            first_names=first_names,
            last_names=last_names,
            preferred_name=preferred,
            birth_date=_cell(row, "birth_date"),
            birth_place=_cell(row, "place_of_birth"),
            death_date=_cell(row, "death_date"),
            death_place=_cell(row, "place_of_death"),
            is_dead=bool(_cell(row, "death_date")),
            url=url_template.format(xref=xref) if url_template else "",
        )

    families: Dict[Tuple[str, ...], FamilyRecord] = {}

    def family(*spouses: Optional[str]) -> FamilyRecord:
        key = _family_key(*spouses)
        if key not in families:
            families[key] = FamilyRecord(xref="F" + "+".join(key), spouses=key)
            for spouse in key:
                if spouse in people:
                    people[spouse].spouse_families.append(families[key])
        return families[key]

    # marriages in the order of the spouse column
    for xref, row in df.iterrows():
        spouses = _split(_cell(row, "spouse_id"))
        dates = _split(_cell(row, "marriage_date"))
        places = _split(_cell(row, "place_of_marriage"))

        for index, spouse in enumerate(spouses):
            if spouse != UNKNOWN_SPOUSE and spouse not in people:
                log.warning("spouse %s of %s not found", spouse, xref)
            current = family(xref, spouse)
            current.marriage_date = current.marriage_date or _at(dates, index)
            current.marriage_place = current.marriage_place or _at(places, index)

    for xref, row in df.iterrows():
        parent_id = _cell(row, "parent1_id")
        if not parent_id:
            continue

        # "*" marks a non-biological parent
        parent_id = parent_id.replace("*", "").strip()
        other_id = (_cell(row, "parent2_id") or "").replace("*", "").strip() or None

        if parent_id not in people:
            log.warning("parent %s of %s not found", parent_id, xref)
            continue
        if other_id and other_id not in people:
            log.warning("parent %s of %s not found", other_id, xref)
            other_id = None

        current = family(parent_id, other_id)
        current.children.append(people[xref])
        people[xref].parent_families.append(current)

    return people

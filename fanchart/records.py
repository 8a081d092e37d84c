"""Person records supplied by the genealogy backend and the node data snapshot."""

from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from . import dates


class Sex(str, enum.Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Sex":
        value = (value or "").strip().upper()[:1]
        if value == "M":
            return cls.MALE
        if value in ("F", "W"):
            return cls.FEMALE
        return cls.UNKNOWN


@dataclass(eq=False)
class FamilyRecord:
    xref: str
    spouses: Tuple[str, ...] = ()
    children: List["PersonRecord"] = field(default_factory=list, repr=False)
    marriage_date: Optional[str] = None
    marriage_place: Optional[str] = None


@dataclass(eq=False)
class PersonRecord:
    xref: str
    sex: Sex = Sex.UNKNOWN
    name: str = ""
    first_names: List[str] = field(default_factory=list)
    last_names: List[str] = field(default_factory=list)
    preferred_name: str = ""
    alternative_name: str = ""
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_date: Optional[str] = None
    death_place: Optional[str] = None
    is_dead: bool = False
    url: str = ""
    update_url: str = ""
    thumbnail: str = ""
    parent_families: List[FamilyRecord] = field(default_factory=list, repr=False)
    spouse_families: List[FamilyRecord] = field(default_factory=list, repr=False)

    @property
    def marriage_date(self) -> Optional[str]:
        return self.spouse_families[0].marriage_date if self.spouse_families else None

    @property
    def marriage_date_of_parents(self) -> Optional[str]:
        return self.parent_families[0].marriage_date if self.parent_families else None

    @property
    def age(self) -> Optional[int]:
        return dates.age_years(self.birth_date, self.death_date)

    def children(self) -> List["PersonRecord"]:
        return [child for family in self.spouse_families for child in family.children]


def is_rtl(text: str) -> bool:
    """True when the first strong directional character is right-to-left."""
    for char in text or "":
        direction = unicodedata.bidirectional(char)
        if direction in ("R", "AL"):
            return True
        if direction == "L":
            return False
    return False


@dataclass(frozen=True)
class NodeData:
    """Display snapshot of a person, taken once per build pass."""

    id: int
    generation: int
    xref: str = ""
    url: str = ""
    update_url: str = ""
    name: str = ""
    first_names: Tuple[str, ...] = ()
    last_names: Tuple[str, ...] = ()
    preferred_name: str = ""
    alternative_name: str = ""
    is_name_rtl: bool = False
    is_alt_rtl: bool = False
    sex: Sex = Sex.UNKNOWN
    thumbnail: str = ""
    birth: str = ""
    birth_place: str = ""
    death: str = ""
    marriage_date: str = ""
    marriage_date_of_parents: str = ""
    timespan: str = ""
    age: Optional[int] = None
    is_deceased_young: bool = False

    @classmethod
    def from_record(
        cls, record: PersonRecord, generation: int, node_id: int, locale: str = "de"
    ) -> "NodeData":
        return cls(
            id=node_id,
            generation=generation,
            xref=record.xref,
            url=record.url,
            update_url=record.update_url,
            name=record.name,
            first_names=tuple(record.first_names),
            last_names=tuple(record.last_names),
            preferred_name=record.preferred_name,
            alternative_name=record.alternative_name,
            is_name_rtl=is_rtl(record.name),
            is_alt_rtl=is_rtl(record.alternative_name),
            sex=record.sex,
            thumbnail=record.thumbnail,
            birth=dates.date2str(record.birth_date, locale),
            birth_place=record.birth_place or "",
            death=dates.date2str(record.death_date, locale),
            marriage_date=dates.date2str(record.marriage_date, locale),
            marriage_date_of_parents=dates.date2str(record.marriage_date_of_parents, locale),
            timespan=dates.lifetime_description(
                record.birth_date, record.death_date, record.is_dead
            ),
            age=record.age,
            is_deceased_young=dates.is_deceased_young(record.birth_date, record.death_date),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "generation": self.generation,
            "xref": self.xref,
            "url": self.url,
            "updateUrl": self.update_url,
            "name": self.name,
            "firstNames": list(self.first_names),
            "lastNames": list(self.last_names),
            "preferredName": self.preferred_name,
            "alternativeName": self.alternative_name,
            "isNameRtl": self.is_name_rtl,
            "isAltRtl": self.is_alt_rtl,
            "sex": self.sex.value,
            "thumbnail": self.thumbnail,
            "birth": self.birth,
            "birthPlace": self.birth_place,
            "death": self.death,
            "marriageDate": self.marriage_date,
            "marriageDateOfParents": self.marriage_date_of_parents,
            "timespan": self.timespan,
            "age": self.age,
            "isDeceasedYoung": self.is_deceased_young,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "NodeData":
        return cls(
            id=int(data.get("id") or 0),
            generation=int(data.get("generation") or 1),
            xref=data.get("xref") or "",
            url=data.get("url") or "",
            update_url=data.get("updateUrl") or "",
            name=data.get("name") or "",
            first_names=tuple(data.get("firstNames") or ()),
            last_names=tuple(data.get("lastNames") or ()),
            preferred_name=data.get("preferredName") or "",
            alternative_name=data.get("alternativeName") or "",
            is_name_rtl=bool(data.get("isNameRtl", False)),
            is_alt_rtl=bool(data.get("isAltRtl", False)),
            sex=Sex.parse(data.get("sex")),
            thumbnail=data.get("thumbnail") or "",
            birth=data.get("birth") or "",
            birth_place=data.get("birthPlace") or "",
            death=data.get("death") or "",
            marriage_date=data.get("marriageDate") or "",
            marriage_date_of_parents=data.get("marriageDateOfParents") or "",
            timespan=data.get("timespan") or "",
            age=data.get("age"),
            is_deceased_young=bool(data.get("isDeceasedYoung", False)),
        )

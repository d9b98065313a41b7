"""
Advocacy cause taxonomy.

Static table of causes and the keyword phrases used to detect them in
speech content. Built once at import time and never mutated.
"""

import json
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union


class CauseId(str, Enum):
    """Advocacy causes an organizer can focus on."""
    CLIMATE = "climate"
    EDUCATION = "education"
    CIVIL_RIGHTS = "civil-rights"
    MENTAL_HEALTH = "mental-health"
    GUN_VIOLENCE = "gun-violence"
    IMMIGRATION = "immigration"
    HEALTHCARE = "healthcare"
    POVERTY = "poverty"
    DEMOCRACY = "democracy"
    YOUTH_EMPOWERMENT = "youth-empowerment"
    LGBTQ = "lgbtq"
    RACIAL_JUSTICE = "racial-justice"
    WOMENS_RIGHTS = "womens-rights"
    TECHNOLOGY = "technology"
    CRIMINAL_JUSTICE = "criminal-justice"
    OTHER = "other"


CAUSE_LABELS: Mapping[CauseId, str] = MappingProxyType({
    CauseId.CLIMATE: "Climate & Environment",
    CauseId.EDUCATION: "Education Reform",
    CauseId.CIVIL_RIGHTS: "Civil Rights & Equality",
    CauseId.MENTAL_HEALTH: "Mental Health",
    CauseId.GUN_VIOLENCE: "Gun Violence Prevention",
    CauseId.IMMIGRATION: "Immigration",
    CauseId.HEALTHCARE: "Healthcare Access",
    CauseId.POVERTY: "Poverty & Homelessness",
    CauseId.DEMOCRACY: "Democracy & Voting",
    CauseId.YOUTH_EMPOWERMENT: "Youth Empowerment",
    CauseId.LGBTQ: "LGBTQ+ Rights",
    CauseId.RACIAL_JUSTICE: "Racial Justice",
    CauseId.WOMENS_RIGHTS: "Women's Rights",
    CauseId.TECHNOLOGY: "Technology & Privacy",
    CauseId.CRIMINAL_JUSTICE: "Criminal Justice Reform",
    CauseId.OTHER: "Other",
})


# "other" carries no keywords and can never be matched from content.
KEYWORD_TAXONOMY: Mapping[CauseId, Tuple[str, ...]] = MappingProxyType({
    CauseId.CLIMATE: (
        "climate", "environment", "carbon", "renewable", "sustainability",
        "pollution", "green", "emissions", "fossil fuel", "global warming",
    ),
    CauseId.EDUCATION: (
        "education", "school", "student", "teacher", "learning", "college",
        "university", "curriculum", "academic",
    ),
    CauseId.CIVIL_RIGHTS: (
        "civil rights", "equality", "discrimination", "freedom", "rights",
        "justice", "liberty", "constitutional",
    ),
    CauseId.MENTAL_HEALTH: (
        "mental health", "depression", "anxiety", "therapy", "wellness",
        "suicide", "counseling", "psychological",
    ),
    CauseId.GUN_VIOLENCE: (
        "gun", "firearm", "shooting", "second amendment", "gun control",
        "gun violence", "mass shooting",
    ),
    CauseId.IMMIGRATION: (
        "immigration", "immigrant", "border", "refugee", "asylum",
        "deportation", "citizenship", "migrant",
    ),
    CauseId.HEALTHCARE: (
        "healthcare", "health care", "medical", "insurance", "hospital",
        "medicine", "doctor", "patient", "affordable care",
    ),
    CauseId.POVERTY: (
        "poverty", "homeless", "hunger", "welfare", "low-income",
        "food insecurity", "economic inequality",
    ),
    CauseId.DEMOCRACY: (
        "democracy", "voting", "election", "ballot", "voter",
        "gerrymandering", "representation", "civic",
    ),
    CauseId.YOUTH_EMPOWERMENT: (
        "youth", "young people", "generation", "student voice", "teen",
        "adolescent", "young adult",
    ),
    CauseId.LGBTQ: (
        "lgbtq", "gay", "lesbian", "transgender", "queer", "pride",
        "sexual orientation", "gender identity",
    ),
    CauseId.RACIAL_JUSTICE: (
        "racial", "racism", "black lives", "police brutality",
        "systemic racism", "racial justice", "discrimination",
    ),
    CauseId.WOMENS_RIGHTS: (
        "women", "feminist", "gender equality", "reproductive", "abortion",
        "pay gap", "metoo", "sexism",
    ),
    CauseId.TECHNOLOGY: (
        "technology", "privacy", "data", "surveillance", "social media",
        "artificial intelligence", "internet", "digital",
    ),
    CauseId.CRIMINAL_JUSTICE: (
        "criminal justice", "prison", "incarceration", "police", "reform",
        "bail", "sentencing", "rehabilitation",
    ),
})


def cause_key(value: Union[CauseId, str]) -> str:
    """Plain string identifier for a cause value."""
    if isinstance(value, CauseId):
        return value.value
    return str(value).strip().lower()


def to_cause(value: Union[CauseId, str]) -> Optional[CauseId]:
    """Resolve a raw identifier to a CauseId, or None if it is not one."""
    if isinstance(value, CauseId):
        return value
    try:
        return CauseId(cause_key(value))
    except ValueError:
        return None


class KeywordTaxonomy:
    """
    Immutable cause -> keyword phrases lookup.

    Keys are normalized to plain string identifiers and keywords to
    lowercase, so lookups work the same for CauseId members and raw strings.
    """

    def __init__(self, table: Mapping[Union[CauseId, str], Iterable[str]]):
        self._table: Mapping[str, Tuple[str, ...]] = MappingProxyType({
            cause_key(cause): tuple(kw.lower() for kw in keywords)
            for cause, keywords in table.items()
        })

    def keywords_for(self, cause: Union[CauseId, str]) -> List[str]:
        """Keyword phrases for a cause. Unknown causes yield an empty list."""
        return list(self._table.get(cause_key(cause), ()))

    def all_causes(self) -> List[str]:
        return list(self._table.keys())

    def __contains__(self, cause: object) -> bool:
        if not isinstance(cause, str):
            return False
        return cause_key(cause) in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"<KeywordTaxonomy {len(self._table)} causes>"


DEFAULT_TAXONOMY = KeywordTaxonomy(KEYWORD_TAXONOMY)


def keywords_for(cause: Union[CauseId, str]) -> List[str]:
    """Keyword phrases for a cause in the default taxonomy."""
    return DEFAULT_TAXONOMY.keywords_for(cause)


def all_causes() -> List[CauseId]:
    """Every cause that can be detected from content, in table order."""
    return list(KEYWORD_TAXONOMY.keys())


def decode_causes(values: Union[str, Iterable[Union[CauseId, str]], None]) -> List[Union[CauseId, str]]:
    """
    Raw cause entries from a stored selection.

    Accepts a list, a JSON-encoded list (the legacy text column format) or
    a single identifier. Anything that decodes to a non-list is empty.
    """
    if values is None:
        return []
    if isinstance(values, CauseId):
        return [values]
    if isinstance(values, str):
        try:
            decoded = json.loads(values)
        except ValueError:
            return [values] if values.strip() else []
        if isinstance(decoded, str):
            return [decoded]
        if not isinstance(decoded, list):
            return []
        return [v for v in decoded if isinstance(v, str)]
    return list(values)


def parse_causes(values: Union[str, Iterable[Union[CauseId, str]], None]) -> List[CauseId]:
    """
    Normalize a user's stored cause selection.

    Accepts anything decode_causes does. Unknown identifiers are dropped
    and duplicates collapsed, keeping first-seen order.
    """
    causes: List[CauseId] = []
    for value in decode_causes(values):
        cause = to_cause(value)
        if cause is not None and cause not in causes:
            causes.append(cause)
    return causes


def describe_taxonomy() -> List[Dict[str, Any]]:
    """Serializable view of the taxonomy for clients."""
    return [
        {
            "id": cause.value,
            "label": CAUSE_LABELS[cause],
            "keywords": keywords_for(cause),
        }
        for cause in CauseId
    ]

"""Region classification - Pure functions.

Decides whether a free-text USGS place description ("52 km NNE of Mekele,
Ethiopia") lies inside the target region. The decision is driven entirely by
the declarative keyword table below:

1. Exclusion: text naming a neighbouring region, and not naming the target
   country, is rejected outright.
2. Inclusion: text naming a place inside the region is accepted.
3. Directional phrase: for "<distance> <direction> of <place>", the
   inclusion pass is repeated on the text after the first "of ".
4. Anything else is rejected.

Matching is case-insensitive substring matching.
"""

from dataclasses import dataclass
from enum import Enum


TARGET_COUNTRY = "ethiopia"

DIRECTIONAL_MARKER = "of "


class Polarity(Enum):
    """Whether a keyword match rejects or accepts a place."""
    EXCLUDE = "exclude"
    INCLUDE = "include"


@dataclass(frozen=True)
class KeywordRule:
    """A single classification keyword.

    Attributes:
        keyword: Lowercase substring to look for
        polarity: EXCLUDE for neighbouring regions, INCLUDE for local names
        priority: Lower values are evaluated first
    """
    keyword: str
    polarity: Polarity
    priority: int


def _rules(polarity: Polarity, priority: int, *keywords: str) -> tuple[KeywordRule, ...]:
    return tuple(KeywordRule(k, polarity, priority) for k in keywords)


KEYWORD_RULES: tuple[KeywordRule, ...] = (
    # Neighbouring countries and water bodies
    *_rules(
        Polarity.EXCLUDE, 0,
        "eritrea", "djibouti", "somalia", "sudan", "kenya", "yemen",
        "saudi arabia", "uganda", "red sea", "gulf of aden",
        "asmara", "massawa", "assab", "khartoum", "kassala", "juba",
        "berbera", "hargeisa", "mogadishu", "lodwar", "marsabit",
    ),
    # Country and regional states
    *_rules(
        Polarity.INCLUDE, 1,
        "ethiopia", "ethiopian", "afar", "tigray", "amhara", "oromia",
        "benishangul", "gambela", "sidama", "snnp",
    ),
    # Cities and towns
    *_rules(
        Polarity.INCLUDE, 2,
        "addis ababa", "mekele", "mekelle", "gondar", "bahir dar",
        "dire dawa", "hawassa", "awasa", "adama", "nazret", "jimma",
        "dessie", "harar", "jijiga", "semera", "asayita", "dubti",
        "awash", "metehara", "ankober", "debre birhan", "kombolcha",
        "woldia", "lalibela", "axum", "aksum", "adigrat", "abala",
        "arba minch", "shashemene", "ziway", "asosa", "debre markos",
    ),
    # Tectonic zones and volcanic features
    *_rules(
        Polarity.INCLUDE, 3,
        "main ethiopian rift", "danakil", "erta ale", "dallol",
        "fentale", "dofen", "dabbahu", "manda hararo", "tendaho",
        "corbetti", "aluto", "boset",
    ),
)


def _keywords(polarity: Polarity, rules: tuple[KeywordRule, ...]) -> list[str]:
    ordered = sorted(rules, key=lambda r: r.priority)
    return [r.keyword for r in ordered if r.polarity is polarity]


def matches_exclusion(text: str, rules: tuple[KeywordRule, ...] = KEYWORD_RULES) -> bool:
    """Check if lowercase text names a neighbouring region but not the target.

    Pure function.
    """
    if TARGET_COUNTRY in text:
        return False
    return any(k in text for k in _keywords(Polarity.EXCLUDE, rules))


def matches_inclusion(text: str, rules: tuple[KeywordRule, ...] = KEYWORD_RULES) -> bool:
    """Check if lowercase text names any place inside the region.

    Pure function.
    """
    return any(k in text for k in _keywords(Polarity.INCLUDE, rules))


def classify(place: str | None, rules: tuple[KeywordRule, ...] = KEYWORD_RULES) -> bool:
    """Decide whether a place description is inside the target region.

    Pure function. Total: empty, missing or non-text input is not in the region.

    Args:
        place: Free-text location from the feed
        rules: Keyword table (defaults to KEYWORD_RULES)

    Returns:
        True if the place is inside the region
    """
    if not isinstance(place, str) or not place:
        return False

    text = place.lower()

    if matches_exclusion(text, rules):
        return False

    if matches_inclusion(text, rules):
        return True

    marker = text.find(DIRECTIONAL_MARKER)
    if marker != -1:
        remainder = text[marker + len(DIRECTIONAL_MARKER):]
        return matches_inclusion(remainder, rules)

    return False

"""Context-aware lexical detectors.

Each detector runs a table of compiled patterns over the raw query and keeps
the first match of every pattern. Rules consume the resulting ``Detection``
objects instead of scanning for flat keyword lists, which lets the same word
count as a violation in one context ("people based in Austin") and as a
harmless topic in another ("Austin music festivals").
"""

from __future__ import annotations

import re
from typing import Iterable, Pattern

from .models import Detection

# Compound job titles, singular or plural
JOB_TITLE_PATTERNS = [
    re.compile(r"\b(software|senior|junior|lead|principal|staff|frontend|backend|full[\s-]?stack)\s+(engineers?|developers?|programmers?|architects?)\b", re.I),
    re.compile(r"\b(product|project|program|engineering|marketing|sales|operations)\s+(managers?|directors?|leads?|coordinators?)\b", re.I),
    re.compile(r"\b(data|business|financial|systems|security)\s+(analysts?|scientists?|engineers?|specialists?)\b", re.I),
    re.compile(r"\b(ux|ui|graphic|web|visual)\s+(designers?|developers?)\b", re.I),
]

ROLE_PATTERNS = [
    re.compile(r"\b(ceo|cto|cfo|coo|cmo|vp|vice president|chief)\b", re.I),
    re.compile(r"\b(founder|co-founder|owner|president|executive|director)\b", re.I),
]

DEMOGRAPHIC_PATTERNS = [
    re.compile(r"\b\d+[-–]\d+\s+years?\s+old\b", re.I),
    re.compile(r"\b(male|female|men|women|gender)\b", re.I),
    re.compile(r"\b(married|single|divorced|parent|homeowner|renter)\b", re.I),
    re.compile(r"\b\$?\d+k?[-–]\$?\d+k?\s+(income|salary|net worth)\b", re.I),
    re.compile(r"\b(college|university|bachelor|master|phd|degree)\s+(graduate|educated|degree)\b", re.I),
]

# Case-sensitive: a capitalised word after a filtering preposition names a place.
_PLACE = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*"
LOCATION_FILTER_PATTERNS = [
    re.compile(rf"\bpeople (in|from|based in|located in|residing in)\s+{_PLACE}"),
    re.compile(rf"\b(based in|located in|residing in|lives in|from)\s+{_PLACE}"),
    re.compile(r"\b[A-Z][a-z]+\s+(resident|native|local)s?\b"),
]

KNOWN_LOCATIONS = [
    "san francisco", "new york", "los angeles", "chicago", "boston", "seattle",
    "austin", "denver", "miami", "atlanta", "portland", "philadelphia",
    "dallas", "houston",
    "california", "texas", "florida", "washington", "oregon", "colorado",
]

# A known place only counts when it filters who people are, never as a topic.
_LOCATION_PREPOSITIONS = r"(?:people in|people from|based in|located in|residing in|lives in)"
KNOWN_LOCATION_PATTERNS = [
    (location, re.compile(rf"\b{_LOCATION_PREPOSITIONS}\s+{re.escape(location)}\b", re.I))
    for location in KNOWN_LOCATIONS
]

INTENT_SIGNAL_PATTERNS = [
    re.compile(r"\b(interested in|interest in|passion for|passionate about|care about|value)\b", re.I),
    re.compile(r"\b(love|enjoy|like|prefer|appreciate)\s+(to\s+)?\w+", re.I),
    re.compile(r"\b(hobby|hobbies|activity|activities|practice|habit|routine|lifestyle)\b", re.I),
    re.compile(r"\b(problem|challenge|struggle|difficulty|issue|concern)\s+(with|in)\b", re.I),
    re.compile(r"\b(goal|aspiration|dream|ambition|objective|aim)\s+(to|of|is)\b", re.I),
    re.compile(r"\b(believe in|support|advocate|enthusiast|fan of)\b", re.I),
]

B2B_ATTRIBUTE_PATTERNS = [
    re.compile(r"\b(company|companies|business|businesses|organization|enterprise|firm|corporation)\b", re.I),
    re.compile(r"\b(startup|startups|saas|b2b|b2c)\b", re.I),
    re.compile(r"\b(industry|sector|vertical|market)\b", re.I),
    re.compile(r"\b\$?\d+[km]?[-–]\$?\d+[km]?\s+(revenue|arr|mrr)\b", re.I),
    re.compile(r"\b\d+[-–]\d+\s+(employees|headcount|people|team)\b", re.I),
    re.compile(r"\b(founded|funding|series|valuation|growth rate)\b", re.I),
    re.compile(r"\b(technology|tech stack|platform|infrastructure)\b", re.I),
]

B2B_FORBIDDEN_INTENT_PATTERNS = [
    re.compile(r"\b(interested in|looking for|want to|need to|planning to|considering)\b", re.I),
    re.compile(r"\b(hoping to|trying to|seeking|searching for|in the market for)\b", re.I),
    re.compile(r"\b(recently|just|about to|going to|will|might|may)\s+\w+", re.I),
]

VAGUE_TERMS = [
    "best", "top", "leading", "premium", "ultimate", "revolutionary",
    "cutting-edge", "innovative", "game-changing", "world-class", "premier",
    "amazing", "awesome", "great", "excellent", "perfect", "ideal",
    "stuff", "things", "various", "general", "misc", "etc", "anything",
]

_VAGUE_TERM_PATTERNS = [
    (term, re.compile(rf"\b{re.escape(term)}\b", re.I)) for term in VAGUE_TERMS
]

QUESTION_WORDS = ["what", "where", "when", "who", "why", "how", "which"]

_LEADING_QUESTION = re.compile(rf"^({'|'.join(QUESTION_WORDS)})(?=\s|$)")


def _first_matches(patterns: Iterable[Pattern[str]], query: str) -> list[str]:
    matches = []
    for pattern in patterns:
        match = pattern.search(query)
        if match:
            matches.append(match.group(0))
    return matches


def detect_persona(query: str) -> Detection:
    """Job titles and executive roles, i.e. WHO someone is."""
    return Detection.from_matches(_first_matches(JOB_TITLE_PATTERNS + ROLE_PATTERNS, query))


def detect_demographics(query: str) -> Detection:
    return Detection.from_matches(_first_matches(DEMOGRAPHIC_PATTERNS, query))


def detect_location(query: str) -> Detection:
    """Locations used as a filter on people.

    Overlapping matches collapse to the longest one, and a known place name is
    reported on its own only when no filtering pattern already captured it, so
    "people from San Francisco" is one violation.
    """
    found = _first_matches(LOCATION_FILTER_PATTERNS, query)
    matches = [
        m for m in found
        if not any(m != other and m.lower() in other.lower() for other in found)
    ]
    covered = " | ".join(matches).lower()
    for location, pattern in KNOWN_LOCATION_PATTERNS:
        if location not in covered and pattern.search(query):
            matches.append(location)
    return Detection.from_matches(matches)


def detect_intent_signals(query: str) -> Detection:
    """Behavioural or psychological interest phrasing."""
    return Detection.from_matches(_first_matches(INTENT_SIGNAL_PATTERNS, query))


def detect_b2b_attributes(query: str) -> Detection:
    """Firmographic attributes: company nouns, industry, size, revenue, funding, tech."""
    return Detection.from_matches(_first_matches(B2B_ATTRIBUTE_PATTERNS, query))


def detect_b2b_forbidden_intent(query: str) -> Detection:
    """Behavioural or temporal intent language, which has no place in a B2B query."""
    return Detection.from_matches(_first_matches(B2B_FORBIDDEN_INTENT_PATTERNS, query))


def find_vague_terms(query: str) -> list[str]:
    """Distinct hype/vague terms present in the query, in list order."""
    return [term for term, pattern in _VAGUE_TERM_PATTERNS if pattern.search(query)]


def detect_question_format(query: str) -> Detection:
    """A leading question word or a literal question mark anywhere."""
    matches = []
    leading = _LEADING_QUESTION.match(query.strip().lower())
    if leading:
        matches.append(leading.group(1))
    if "?" in query:
        matches.append("?")
    return Detection.from_matches(matches)

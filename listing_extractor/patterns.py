"""
Token scanners for scraped listing pages.

Each scanner finds every non-overlapping match of one token class, left to
right, and keeps duplicates. Scanners share nothing, so the order they run in
does not matter.

Digits are ASCII only. Number-led patterns start at the beginning of a digit
run, so the text after a run is walked once per run rather than once per digit.
"""
import re
from typing import List, Optional

from .config import config

STREET_TYPES = (
    "Street", "St", "Avenue", "Ave", "Road", "Rd", "Boulevard", "Blvd",
    "Lane", "Ln", "Drive", "Dr", "Court", "Ct", "Place", "Pl", "Way",
    "Circle", "Cir",
)

PRICE_RE = re.compile(r"\$\s*[0-9,]+(?:\.[0-9]{2})?")
# "\s[A-Za-z\s]+" accepts the same text as "\s+[A-Za-z\s]+"
ADDRESS_RE = re.compile(
    r"(?<![0-9])[0-9]+\s[A-Za-z\s]+(?:" + "|".join(STREET_TYPES) + r")[,\s]+[A-Za-z\s]+",
    re.I,
)
BEDS_RE = re.compile(r"(?<![0-9])([0-9]+)\s*(?:bed|bd|bedroom)s?", re.I)
BATHS_RE = re.compile(r"(?<![0-9])([0-9]+(?:\.[0-9]+)?)\s*(?:bath|ba|bathroom)s?", re.I)
# Whole digit/comma run in front of the unit; trimmed by _thousands_tail
SQFT_RE = re.compile(r"(?<![0-9,])([0-9,]*[0-9])\s*(?:sq\s*ft|sqft|square\s*feet)", re.I)


def bound_text(text: str, limit: Optional[int] = None) -> str:
    """Cap the amount of text the scanners will look at."""
    limit = config.MAX_SCAN_CHARS if limit is None else limit
    if not text:
        return ""
    return text[:limit] if limit > 0 else text


def _thousands_tail(run: str) -> str:
    """Longest suffix of a digit/comma run shaped like "1,234,567".

    That is up to three digits followed by any number of ",ddd" groups, so
    "1234" gives "234" and "1,,567" gives "567". The run always ends in a digit.
    """
    start = len(run)
    while start >= 4 and run[start - 4] == "," and run[start - 3:start].isdigit():
        start -= 4
    head = start
    while head > 0 and start - head < 3 and run[head - 1] != ",":
        head -= 1
    if head == start:
        # no digits before the first group; its three digits lead instead
        head = start + 1
    return run[head:]


def scan_prices(text: str) -> List[str]:
    """Price tokens such as "$450,000" or "$1,234.56"."""
    return PRICE_RE.findall(bound_text(text))


def scan_addresses(text: str) -> List[str]:
    """Street addresses such as "123 Main Street, Springfield"."""
    return ADDRESS_RE.findall(bound_text(text))


def scan_beds(text: str) -> List[str]:
    """Bedroom counts, e.g. "3" from "3 beds"."""
    return BEDS_RE.findall(bound_text(text))


def scan_baths(text: str) -> List[str]:
    """Bathroom counts; may be fractional ("2.5")."""
    return BATHS_RE.findall(bound_text(text))


def scan_sqft(text: str) -> List[str]:
    """Square footage digit groups, e.g. "1,850" from "1,850 sq ft"."""
    return [_thousands_tail(run) for run in SQFT_RE.findall(bound_text(text))]

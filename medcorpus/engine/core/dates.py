"""Date extraction from free text.

Recognizes, in priority order per line:
1. ISO dates: 2024-03-15, 2024-03, 2024/03/15
2. US numeric dates: 03/15/2024, 3/15/24
3. Written months: March 15, 2024 / Mar 2024

A span matched by a higher-priority pattern is not re-matched by a lower one.
Dates are normalized to YYYY-MM-DD (or YYYY-MM without a day) and kept only
when the year falls within [MIN_YEAR, MAX_YEAR].
"""

import re

from .constants import CONTEXT_MAX_CHARS, MAX_YEAR, MIN_YEAR, MONTHS
from .document import DateMatch

_MONTH_NAMES = (
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
)

ISO_PATTERN = re.compile(r"(?<!\d)(\d{4})[-/](\d{1,2})(?:[-/](\d{1,2}))?(?!\d)")
US_PATTERN = re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?!\d)")
WRITTEN_PATTERN = re.compile(
    rf"\b({_MONTH_NAMES})\s+(?:(\d{{1,2}}),?\s*)?(\d{{4}})(?!\d)",
    re.IGNORECASE,
)


def _from_iso(match: re.Match) -> tuple[int, int, int | None]:
    day = match.group(3)
    return int(match.group(1)), int(match.group(2)), int(day) if day else None


def _from_us(match: re.Match) -> tuple[int, int, int | None]:
    year = int(match.group(3))
    if year < 100:
        year += 2000
    return year, int(match.group(1)), int(match.group(2))


def _from_written(match: re.Match) -> tuple[int, int, int | None]:
    month = MONTHS[match.group(1)[:3].lower()]
    day = match.group(2)
    return int(match.group(3)), month, int(day) if day else None


# Priority order matters: earlier patterns claim their spans first
_PATTERNS = (
    (ISO_PATTERN, _from_iso),
    (US_PATTERN, _from_us),
    (WRITTEN_PATTERN, _from_written),
)


def is_valid_date(year: int, month: int, day: int | None) -> bool:
    """Check the year bounds and that month/day are plausible."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False
    if not 1 <= month <= 12:
        return False
    return day is None or 1 <= day <= 31


def format_date(year: int, month: int, day: int | None) -> str:
    if day is None:
        return f"{year}-{month:02d}"
    return f"{year}-{month:02d}-{day:02d}"


def _overlaps(span: tuple[int, int], taken: list[tuple[int, int]]) -> bool:
    start, end = span
    return any(start < t_end and t_start < end for t_start, t_end in taken)


def extract_dates_from_line(line: str) -> list[DateMatch]:
    """Extract dates from a single line, deduplicated by (date, context)."""
    context = line.strip()[:CONTEXT_MAX_CHARS]
    taken: list[tuple[int, int]] = []
    seen: set[tuple[str, str]] = set()
    matches: list[DateMatch] = []

    for pattern, resolve in _PATTERNS:
        for match in pattern.finditer(line):
            if _overlaps(match.span(), taken):
                continue
            taken.append(match.span())

            year, month, day = resolve(match)
            if not is_valid_date(year, month, day):
                continue

            date = format_date(year, month, day)
            if (date, context) in seen:
                continue
            seen.add((date, context))
            matches.append(DateMatch(date=date, year=year, month=month, day=day, context=context))

    return matches


def extract_dates(text: str) -> list[DateMatch]:
    """Extract every valid date from ``text``, line by line.

    Args:
        text: Free text, possibly multi-line

    Returns:
        Matches in line order, then pattern priority, then position. The same
        date on different lines is kept once per line.
    """
    if not text:
        return []
    results: list[DateMatch] = []
    for line in text.split("\n"):
        results.extend(extract_dates_from_line(line))
    return results

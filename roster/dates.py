"""
Join-date parsing and membership term arithmetic.

Feed dates arrive in several hand-typed shapes. Each shape is a DateLayout;
parse_join_date tries them in order and returns the first real calendar date.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from .rules import JOIN_DATE_LAYOUTS, MEMBERSHIP_TERM_YEARS

_TOKENS = {
    "DD": r"(?P<day>[0-9]{2})",
    "D": r"(?P<day>[0-9]{1,2})",
    "MM": r"(?P<month>[0-9]{2})",
    "M": r"(?P<month>[0-9]{1,2})",
    "YYYY": r"(?P<year>[0-9]{4})",
}
_TOKEN_RE = re.compile(r"YYYY|DD|MM|D|M")


@dataclass(frozen=True)
class DateLayout:
    name: str
    pattern: "re.Pattern[str]"

    @classmethod
    def compile(cls, name: str) -> "DateLayout":
        """Build a layout from a name such as "DD/MM/YYYY"; a missing day or month means 1."""
        parts = []
        pos = 0
        for m in _TOKEN_RE.finditer(name):
            parts.append(re.escape(name[pos:m.start()]))
            parts.append(_TOKENS[m.group(0)])
            pos = m.end()
        parts.append(re.escape(name[pos:]))
        return cls(name=name, pattern=re.compile("".join(parts)))

    def parse(self, value: str) -> Optional[date]:
        m = self.pattern.fullmatch(value)
        if m is None:
            return None
        fields = m.groupdict()
        try:
            return date(
                int(fields["year"]),
                int(fields.get("month") or 1),
                int(fields.get("day") or 1),
            )
        except ValueError:
            # right shape, impossible date (e.g. month 13)
            return None


DEFAULT_LAYOUTS = tuple(DateLayout.compile(name) for name in JOIN_DATE_LAYOUTS)


def parse_join_date(value: str, layouts: Sequence[DateLayout] = DEFAULT_LAYOUTS) -> Optional[date]:
    """
    Parse a join date using the first layout that accepts it.

    Returns None when no layout matches; the caller decides the fallback.
    """
    value = value.strip()
    for layout in layouts:
        parsed = layout.parse(value)
        if parsed is not None:
            return parsed
    return None


def add_years(start: date, years: int = MEMBERSHIP_TERM_YEARS) -> date:
    """Same month and day, `years` later. 29 February lands on 28 February."""
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return start.replace(year=start.year + years, day=28)

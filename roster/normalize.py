"""
Roster normalization.

Responsibilities:
- decode the fetched payload (utf-8 first, then charset detection)
- split it into comma-delimited rows
- map each row to a MemberRecord, skipping the header and short rows
- recover unparseable join dates with the processing date, and log it
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Iterable, Iterator, List, Optional, Sequence

from charset_normalizer import from_bytes

from .dates import parse_join_date
from .errors import MalformedTableError
from .models import MemberRecord
from .rules import (
    COL_EMAIL,
    COL_FIRST_NAME,
    COL_JOIN_DATE,
    COL_LAST_NAME,
    FEED_DELIMITER,
    FEED_QUOTECHAR,
    HEADER_ROWS,
    MIN_FIELDS,
)

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_payload(raw: bytes) -> str:
    """
    Decode feed bytes to text.

    Rules:
    - UTF-8 (with or without BOM) is tried first; published spreadsheets emit it.
    - Otherwise use charset-normalizer's best guess.
    - If nothing decodes, the payload is not a table.
    """
    try:
        return raw.decode("utf-8-sig" if raw.startswith(_UTF8_BOM) else "utf-8")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise MalformedTableError("Feed payload could not be decoded as text")

    logger.info("Feed is not utf-8; decoding as %s", match.encoding)
    try:
        return raw.decode(match.encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise MalformedTableError(f"Feed payload could not be decoded as {match.encoding}") from exc


def _read_rows(reader) -> Iterator[List[str]]:
    try:
        for row in reader:
            # blank lines are not rows
            if not row:
                continue
            yield row
    except csv.Error as exc:
        raise MalformedTableError(f"Feed is not valid CSV near line {reader.line_num}: {exc}") from exc


def parse_table(raw: bytes) -> Iterator[List[str]]:
    """
    Split the payload into rows of fields.

    Decoding happens immediately; row splitting happens as the iterator is
    consumed, so a quoting error surfaces as MalformedTableError mid-iteration.
    """
    text = decode_payload(raw)
    reader = csv.reader(
        io.StringIO(text, newline=""),
        delimiter=FEED_DELIMITER,
        quotechar=FEED_QUOTECHAR,
        strict=True,
    )
    return _read_rows(reader)


def normalize_row(index: int, row: Sequence[str], today: date) -> Optional[MemberRecord]:
    """Map one feed row to a record, or None when the row is skipped."""
    if index < HEADER_ROWS:
        return None
    if len(row) < MIN_FIELDS:
        logger.debug("Skipping row %d: %d fields, need %d", index, len(row), MIN_FIELDS)
        return None

    raw_date = row[COL_JOIN_DATE]
    join_date = parse_join_date(raw_date)
    if join_date is None:
        logger.warning(
            "Unable to parse join date for row %d: %r. Using %s instead.",
            index,
            raw_date.strip(),
            today.isoformat(),
        )
        join_date = today

    return MemberRecord(
        first_name=row[COL_FIRST_NAME],
        last_name=row[COL_LAST_NAME],
        email=row[COL_EMAIL],
        join_date=join_date,
    )


def normalize_rows(rows: Iterable[Sequence[str]], *, today: Optional[date] = None) -> List[MemberRecord]:
    """
    Turn feed rows into member records, in feed order.

    The processing date is captured once, so every fallback in a run shares it.
    Row-level problems never abort the run; table-level errors from `rows`
    propagate.
    """
    if today is None:
        today = date.today()

    members: List[MemberRecord] = []
    skipped = 0
    for index, row in enumerate(rows):
        member = normalize_row(index, row, today)
        if member is None:
            skipped += 1
            continue
        members.append(member)

    logger.info("Normalized %d members (%d rows skipped)", len(members), skipped)
    return members


def normalize_csv_bytes(raw: bytes, *, today: Optional[date] = None) -> List[MemberRecord]:
    return normalize_rows(parse_table(raw), today=today)

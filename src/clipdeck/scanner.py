# -*- coding: utf-8 -*-
import re
from datetime import datetime, timezone, tzinfo
from typing import List, Optional, Tuple

from clipdeck.config import (
    BYTE_ORDER_MARK,
    CLIPPING_DATE_FORMAT,
    KIND_BOOKMARK, KIND_HIGHLIGHT, KIND_NOTE,
    RECORD_DELIMITER
)
from clipdeck.cursor import LineCursor
from clipdeck.errors import (
    ClippingsError,
    DateParseError,
    MalformedMetaLine,
    MalformedTitleLine,
    UnknownRecordKind
)
from clipdeck.grammar import derive_card
from clipdeck.models import Card, Entry, Highlight, Note

TITLE_PATTERN = re.compile(r'^(?P<book>.+?) \((?:[^()]*\()*(?P<author>[^()]*)\)+\s*$')
META_PATTERN = re.compile(
    r'^- Your (?P<kind>\S+) on (?P<location>.+?) '
    r'(?:\| (?P<extra>.+?) )?'
    r'\| Added on (?:[A-Za-z]+, )?(?P<date>.+?)\s*$'
)


def is_delimiter(line: str) -> bool:
    return RECORD_DELIMITER in line


def parse_clipping_date(date_string: str, tz: Optional[tzinfo] = None) -> datetime:
    """
    Parse a clippings date such as 'November 24, 2018 11:31:30 AM'.

    The string is wall-clock time in `tz` (the machine's local zone when
    omitted); the result is the same instant in UTC.
    """
    try:
        naive = datetime.strptime(date_string.strip(), CLIPPING_DATE_FORMAT)
    except ValueError as e:
        raise DateParseError(f"Could not parse date {date_string!r}: {e}")

    if tz is None:
        local = naive.astimezone()
    else:
        local = naive.replace(tzinfo=tz)
    return local.astimezone(timezone.utc)


class RecordScanner:
    """
    Decodes a Kindle clippings export into Highlight and Note entries.

    Each record is a title line, a metadata line, one blank line and a body,
    terminated by a line of ten '=' characters. Bookmarks and records dated
    at or before the cutoff are consumed without producing an entry.
    """

    def __init__(self, cutoff: Optional[datetime] = None, tz: Optional[tzinfo] = None):
        self.cutoff = cutoff
        self.tz = tz
        self.records_seen = 0
        self.records_skipped = 0

    def scan(self, text: str) -> List[Entry]:
        cursor = LineCursor(text)
        entries: List[Entry] = []

        while True:
            title = self._next_title(cursor)
            if title is None:
                break
            self.records_seen += 1

            entry = self._scan_record(title, cursor, entries)
            if entry is None:
                self.records_skipped += 1
            else:
                entries.append(entry)

        return entries

    def _next_title(self, cursor: LineCursor) -> Optional[str]:
        """Next non-blank line, with any byte order mark removed."""
        while True:
            line = cursor.next_line()
            if line is None:
                return None
            line = line.lstrip(BYTE_ORDER_MARK)
            if line.strip():
                return line

    def _scan_record(self, title: str, cursor: LineCursor, entries: List[Entry]) -> Optional[Entry]:
        book, author = self._parse_title(title, cursor.line_number)

        meta = cursor.next_line()
        if meta is None:
            raise MalformedMetaLine("Unexpected end of input after title line", cursor.line_number + 1)
        meta_line = cursor.line_number
        kind, date_string = self._parse_meta(meta, meta_line)

        try:
            date = parse_clipping_date(date_string, self.tz)
        except DateParseError as e:
            raise e.at_line(meta_line)

        if self.cutoff is not None and date <= self.cutoff:
            cursor.skip_until(is_delimiter)
            return None

        # blank separator between header and body
        cursor.next_line()

        if kind == KIND_HIGHLIGHT:
            lines = self._read_body(cursor)
            return Highlight(book=book, author=author, date=date, sentence='\n'.join(lines))

        if kind == KIND_NOTE:
            cards = self._read_cards(cursor, entries)
            return Note(book=book, author=author, date=date, cards=tuple(cards))

        if kind == KIND_BOOKMARK:
            cursor.skip_until(is_delimiter)
            return None

        raise UnknownRecordKind(f"Unexpected kind of annotation {kind!r}", meta_line)

    def _parse_title(self, line: str, line_number: int) -> Tuple[str, str]:
        match = TITLE_PATTERN.match(line)
        if not match:
            raise MalformedTitleLine(f"Expected '<book> (<author>)', got {line!r}", line_number)
        return match.group('book').strip(), match.group('author').strip()

    def _parse_meta(self, line: str, line_number: int) -> Tuple[str, str]:
        match = META_PATTERN.match(line.strip())
        if not match:
            raise MalformedMetaLine(f"Unrecognised metadata line {line!r}", line_number)
        return match.group('kind'), match.group('date')

    def _read_body(self, cursor: LineCursor) -> List[str]:
        lines = []
        while True:
            line = cursor.next_line()
            if line is None or is_delimiter(line):
                return lines
            lines.append(line)

    def _read_cards(self, cursor: LineCursor, entries: List[Entry]) -> List[Card]:
        cards = []
        while True:
            line = cursor.next_line()
            if line is None or is_delimiter(line):
                return cards
            if not line.strip():
                continue
            try:
                cards.append(derive_card(line, entries))
            except ClippingsError as e:
                raise e.at_line(cursor.line_number)


def parse_clippings(text: str, cutoff: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> List[Entry]:
    """Parse a whole clippings export. See RecordScanner."""
    return RecordScanner(cutoff=cutoff, tz=tz).scan(text)

# -*- coding: utf-8 -*-
"""
Intermediate text format.

Highlights and cards are written as blocks the user can edit by hand before
compiling the final deck:

    ========
    The cat walked over a hill
    ========
    ----
    <front, filled in by hand>
    |-
    hill
    ----

A highlight block sets the sentence that later basic cards are attached to.
"""
import json
import re
from typing import List, Optional, Sequence

from clipdeck.config import (
    CARD_MARKER,
    CLOZE_OPENING_PATTERN,
    FRONT_BACK_MARKER,
    HIGHLIGHT_MARKER,
    LINE_BREAK
)
from clipdeck.cursor import LineCursor
from clipdeck.errors import (
    InvalidBlockSequence,
    MalformedMetadata,
    MissingCardTerm,
    MissingFrontBackSeparator
)
from clipdeck.models import Basic, Card, Cloze, Entry, Highlight, Note, entry_from_dict

CLOZE_OPENING = re.compile(CLOZE_OPENING_PATTERN)


def serialize(entries: Sequence[Entry]) -> str:
    """Render entries as intermediate text, preserving their order."""
    blocks = []
    for entry in entries:
        if isinstance(entry, Highlight):
            blocks.append(f"{HIGHLIGHT_MARKER}\n{entry.sentence}\n{HIGHLIGHT_MARKER}\n")
        elif isinstance(entry, Note):
            for card in entry.cards:
                blocks.append(_card_block(card))
    return ''.join(blocks)


def _card_block(card: Card) -> str:
    if isinstance(card, Cloze):
        front, back = card.text, card.back_extra
    else:
        front, back = card.front, card.back
    return f"{CARD_MARKER}\n{front}\n{FRONT_BACK_MARKER}\n{back}\n{CARD_MARKER}\n"


class IntermediateParser:
    """
    Re-reads edited intermediate text into cards.

    `sentence` holds the text of the most recently closed highlight block;
    every basic card closed afterwards gets it attached to its back.
    """

    def __init__(self):
        self.sentence: Optional[str] = None
        self.cards: List[Card] = []

    def parse(self, text: str) -> List[Card]:
        self.sentence = None
        self.cards = []
        cursor = LineCursor(text)
        while True:
            line = cursor.next_line()
            if line is None:
                return self.cards

            marker = line.rstrip()
            opened_at = cursor.line_number
            if marker == HIGHLIGHT_MARKER:
                lines = self._read_block(cursor, HIGHLIGHT_MARKER, opened_at)
                self.sentence = '\n'.join(lines)
            elif marker == CARD_MARKER:
                lines = self._read_block(cursor, CARD_MARKER, opened_at)
                self.cards.append(self._build_card(lines, opened_at))
            else:
                raise InvalidBlockSequence(
                    f"Invalid card sequence detected {line!r}", opened_at
                )

    def _read_block(self, cursor: LineCursor, marker: str, opened_at: int) -> List[str]:
        lines = []
        while True:
            line = cursor.next_line()
            if line is None:
                raise InvalidBlockSequence(f"Block opened by {marker!r} is never closed", opened_at)
            if line.rstrip() == marker:
                return lines
            lines.append(line)

    def _build_card(self, lines: List[str], opened_at: int) -> Card:
        content = '\n'.join(lines)
        separators = [i for i, line in enumerate(lines) if line.strip() == FRONT_BACK_MARKER]
        if len(separators) != 1:
            raise MissingFrontBackSeparator(
                f"Card needs exactly one {FRONT_BACK_MARKER!r} line, "
                f"found {len(separators)} in {content!r}",
                opened_at
            )

        split = separators[0]
        front = '\n'.join(lines[:split]).strip()
        back = '\n'.join(lines[split + 1:]).strip()

        if CLOZE_OPENING.search(front):
            # the sentence is already part of a cloze front
            return Cloze(text=front, back_extra=back)

        back_lines = back.splitlines()
        if not back_lines:
            raise MissingCardTerm(f"No term provided for card {content!r}", opened_at)

        term = back_lines[0].strip()
        rest = '\n'.join(back_lines[1:]).strip()

        parts = [term]
        if self.sentence:
            parts.append(self.sentence)
        if rest:
            parts.append(rest)
        return Basic(front=front, back=LINE_BREAK.join(parts))


def deserialize(text: str) -> List[Card]:
    return IntermediateParser().parse(text)


def dump_entries(entries: Sequence[Entry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)


def load_entries(text: str) -> List[Entry]:
    try:
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("expected a list of entries")
        return [entry_from_dict(item) for item in data]
    except (ValueError, KeyError, TypeError) as e:
        raise MalformedMetadata(f"Could not read persisted entries: {e}")

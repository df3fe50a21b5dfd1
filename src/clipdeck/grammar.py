# -*- coding: utf-8 -*-
"""
Note line grammar.

A single line of a Kindle note becomes one card:

    term                    -> Basic card, back is the lowercased term
    term .. extra .. more   -> Basic card, back is the term and extras, one per line
    term ... extra          -> Cloze card over the preceding highlight's sentence
"""
import re
from typing import Optional, Sequence, Tuple

from clipdeck.config import BASIC_SEPARATOR, CLOZE_SEPARATOR, CLOZE_TEMPLATE
from clipdeck.errors import MissingBasicDescription, MissingHighlightForCloze, NoClozeMatch
from clipdeck.models import Basic, Card, Cloze, Entry, Highlight


def derive_card(line: str, entries: Sequence[Entry]) -> Card:
    """
    Turn one note line into a card.

    Args:
        line: The raw note line.
        entries: Entries parsed so far. Only the last one is read, and only
            for cloze lines.
    """
    if BASIC_SEPARATOR in line:
        return _basic_with_extra(line)

    cloze = _split_cloze(line)
    if cloze is not None:
        term, extra = cloze
        previous = entries[-1] if entries else None
        return make_cloze(term, extra, previous)

    return Basic(front='', back=line.strip().lower())


def _basic_with_extra(line: str) -> Basic:
    segments = [segment.strip() for segment in line.split(BASIC_SEPARATOR)]
    if len(segments) < 2:
        raise MissingBasicDescription(
            f"No description after `{BASIC_SEPARATOR.strip()}` in note line {line!r}"
        )
    return Basic(front='', back='\n'.join(segments))


def _split_cloze(line: str) -> Optional[Tuple[str, str]]:
    """Split `term ... extra` (or a bare trailing `term ...`) into term and extra."""
    if CLOZE_SEPARATOR in line:
        term, extra = line.split(CLOZE_SEPARATOR, 1)
        return term.strip(), extra.strip()

    trailing = CLOZE_SEPARATOR.rstrip()
    stripped = line.rstrip()
    if stripped.endswith(trailing):
        return stripped[:-len(trailing)].strip(), ''

    return None


def make_cloze(term: str, extra: str, previous: Optional[Entry]) -> Cloze:
    """Cloze every case-insensitive occurrence of term in the previous highlight."""
    if not isinstance(previous, Highlight):
        raise MissingHighlightForCloze(
            f"Cloze term {term!r} does not directly follow a highlight"
        )

    text = cloze_sentence(term, previous.sentence)
    if text is None:
        raise NoClozeMatch(
            f"No match for cloze term {term!r} in sentence {previous.sentence!r}"
        )
    return Cloze(text=text, back_extra=extra)


def cloze_sentence(term: str, sentence: str) -> Optional[str]:
    """Return the sentence with every match of term wrapped, or None if nothing matched."""
    if not term:
        return None

    pattern = re.compile(re.escape(term), re.IGNORECASE)
    if not pattern.search(sentence):
        return None
    return pattern.sub(lambda match: CLOZE_TEMPLATE.format(match.group(0)), sentence)

# -*- coding: utf-8 -*-
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Tuple, Union


@dataclass(frozen=True)
class Cloze:
    """A card whose front is the source sentence with the term clozed out."""
    text: str
    back_extra: str = ''

    def to_dict(self) -> Dict:
        return {
            'type': 'cloze',
            'text': self.text,
            'back_extra': self.back_extra
        }


@dataclass(frozen=True)
class Basic:
    """A plain front/back card. The front is filled in by hand after conversion."""
    front: str = ''
    back: str = ''

    def to_dict(self) -> Dict:
        return {
            'type': 'basic',
            'front': self.front,
            'back': self.back
        }


Card = Union[Cloze, Basic]


@dataclass(frozen=True)
class Highlight:
    book: str
    author: str
    date: datetime
    sentence: str

    def to_dict(self) -> Dict:
        return {
            'type': 'highlight',
            'book': self.book,
            'author': self.author,
            'date': to_timestamp(self.date),
            'sentence': self.sentence
        }


@dataclass(frozen=True)
class Note:
    book: str
    author: str
    date: datetime
    cards: Tuple[Card, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict:
        return {
            'type': 'note',
            'book': self.book,
            'author': self.author,
            'date': to_timestamp(self.date),
            'cards': [card.to_dict() for card in self.cards]
        }


Entry = Union[Highlight, Note]


@dataclass(frozen=True)
class Output:
    """Final compiled record: the edited cards plus the date range they came from."""
    cards: List[Card]
    begin_date: datetime
    end_date: datetime

    def to_dict(self) -> Dict:
        return {
            'cards': [card.to_dict() for card in self.cards],
            'begin_date': to_timestamp(self.begin_date),
            'end_date': to_timestamp(self.end_date)
        }


def to_timestamp(date: datetime) -> int:
    """Whole Unix seconds, the precision clippings dates are recorded at."""
    return int(date.timestamp())


def from_timestamp(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def card_from_dict(data: Dict) -> Card:
    kind = data.get('type')
    if kind == 'cloze':
        return Cloze(text=data['text'], back_extra=data.get('back_extra', ''))
    if kind == 'basic':
        return Basic(front=data.get('front', ''), back=data.get('back', ''))
    raise ValueError(f"Unknown card type: {kind!r}")


def entry_from_dict(data: Dict) -> Entry:
    kind = data.get('type')
    if kind == 'highlight':
        return Highlight(
            book=data['book'],
            author=data['author'],
            date=from_timestamp(data['date']),
            sentence=data['sentence']
        )
    if kind == 'note':
        return Note(
            book=data['book'],
            author=data['author'],
            date=from_timestamp(data['date']),
            cards=tuple(card_from_dict(card) for card in data.get('cards', []))
        )
    raise ValueError(f"Unknown entry type: {kind!r}")

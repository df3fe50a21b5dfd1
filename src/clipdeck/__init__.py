# -*- coding: utf-8 -*-
"""
clipdeck - Kindle Clippings to Anki Flashcards

Two passes:
- convert: My Clippings.txt -> editable intermediate text + entry metadata
- validate: edited intermediate text -> compiled cards (JSON and .apkg)
"""
__version__ = "0.2.0"

from clipdeck.cursor import LineCursor
from clipdeck.models import Highlight, Note, Cloze, Basic, Output
from clipdeck.grammar import derive_card
from clipdeck.scanner import RecordScanner, parse_clippings, parse_clipping_date
from clipdeck.codec import serialize, deserialize, dump_entries, load_entries
from clipdeck.reconciler import reconcile
from clipdeck.anki import AnkiGenerator

__all__ = [
    'LineCursor',
    'Highlight',
    'Note',
    'Cloze',
    'Basic',
    'Output',
    'derive_card',
    'RecordScanner',
    'parse_clippings',
    'parse_clipping_date',
    'serialize',
    'deserialize',
    'dump_entries',
    'load_entries',
    'reconcile',
    'AnkiGenerator'
]

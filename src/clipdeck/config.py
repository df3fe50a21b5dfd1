# -*- coding: utf-8 -*-
from pathlib import Path

# Raw clippings layout
RECORD_DELIMITER = '=========='
CLIPPING_DATE_FORMAT = '%B %d, %Y %I:%M:%S %p'  # e.g. November 24, 2018 11:31:30 AM
START_DATE_FORMAT = '%m-%d-%Y'
BYTE_ORDER_MARK = '\ufeff'

KIND_HIGHLIGHT = 'Highlight'
KIND_NOTE = 'Note'
KIND_BOOKMARK = 'Bookmark'

# Note line grammar
BASIC_SEPARATOR = ' .. '
CLOZE_SEPARATOR = ' ... '
CLOZE_TEMPLATE = '{{{{c1::{0}}}}}'

# Intermediate text format
HIGHLIGHT_MARKER = '========'
CARD_MARKER = '----'
FRONT_BACK_MARKER = '|-'
CLOZE_OPENING_PATTERN = r'\{\{c\d+::'
LINE_BREAK = '<br><br>'

# Output files (relative to the output directory)
DEFAULT_OUT_DIR = Path('out')
INTERMEDIATE_FILE = 'output.md'
INTERMEDIATE_BACKUP_FILE = 'output-copy.md'
METADATA_FILE = 'output-metadata.json'
LAST_RUN_FILE = 'last-run.json'
OUTPUT_FILE = 'output.json'
DECK_FILE = 'output.apkg'

# Probed in order when no clippings path is given
DEFAULT_CLIPPINGS_PATHS = [
    Path.home() / 'Calibre Library' / 'Kindle' / 'My Clippings (13)' / 'My Clippings - Kindle.txt',
    Path('/Volumes/Kindle/documents/My Clippings.txt'),
    Path.home() / 'My Clippings.txt',
]

# Anki Deck Configuration
DECK_NAME = "Kindle Clippings"
DECK_ID = 1607392319
BASIC_MODEL_NAME = "Clippings Basic"
BASIC_MODEL_ID = 1734196231
CLOZE_MODEL_NAME = "Clippings Cloze"
CLOZE_MODEL_ID = 1734196232

# Model Fields
BASIC_FIELDS = [
    {'name': 'Front'},
    {'name': 'Back'},
]

CLOZE_FIELDS = [
    {'name': 'Text'},
    {'name': 'Back Extra'},
]

# Card Styling
CSS = """
.card {
    font-family: "Iowan Old Style", "Palatino Linotype", Georgia, serif;
    background: #FAFAF7;
    color: #1a1a1a;
    font-size: 20px;
    line-height: 1.5;
    text-align: center;
    padding: 16px;
}

.card-inner {
    max-width: 560px;
    margin: 0 auto;
    text-align: left;
}

.cloze {
    font-weight: 600;
    color: #2980b9;
}

.extra {
    margin-top: 18px;
    font-size: 16px;
    color: #555;
}
"""

# Card Templates
BASIC_TEMPLATES = [
    {
        'name': 'Definition card',
        'qfmt': '<div class="card-inner">{{Front}}</div>',
        'afmt': """
<div class="card-inner">
    {{Front}}
    <hr id="answer">
    {{Back}}
</div>
""",
    }
]

CLOZE_TEMPLATES = [
    {
        'name': 'Cloze card',
        'qfmt': '<div class="card-inner">{{cloze:Text}}</div>',
        'afmt': """
<div class="card-inner">
    {{cloze:Text}}
    {{#Back Extra}}
    <div class="extra">{{Back Extra}}</div>
    {{/Back Extra}}
</div>
""",
    }
]

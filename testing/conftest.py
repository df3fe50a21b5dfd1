# -*- coding: utf-8 -*-
from datetime import datetime, timezone

import pytest

from clipdeck.models import Highlight

ALPHA_CLIPPINGS = (
    "Alpha (Bob)\n"
    "- Your Highlight on page 1 | Added on Tuesday, November 24, 2018 11:31:30 AM\n"
    "\n"
    "The cat walked over a hill\n"
    "==========\n"
    "Alpha (Bob)\n"
    "- Your Note on page 1 | Added on Tuesday, November 24, 2018 11:32:00 AM\n"
    "\n"
    "hill\n"
    "walk\n"
    "=========="
)


@pytest.fixture
def alpha_clippings():
    return ALPHA_CLIPPINGS


@pytest.fixture
def alpha_highlight():
    return Highlight(
        book="Alpha",
        author="Bob",
        date=datetime(2018, 11, 24, 11, 31, 30, tzinfo=timezone.utc),
        sentence="The cat walked over a hill"
    )

# -*- coding: utf-8 -*-
from typing import Sequence

from clipdeck.errors import EmptyMetadata
from clipdeck.models import Card, Entry, Output


def reconcile(cards: Sequence[Card], entries: Sequence[Entry]) -> Output:
    """
    Combine re-parsed cards with the entries persisted at convert time.

    The cards carry no dates, so the range comes from the first and last
    persisted entry.
    """
    if not entries:
        raise EmptyMetadata("No entries in the persisted metadata; run a conversion first")

    return Output(
        cards=list(cards),
        begin_date=entries[0].date,
        end_date=entries[-1].date
    )

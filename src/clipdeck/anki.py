# -*- coding: utf-8 -*-
import genanki  # type: ignore
from pathlib import Path
from typing import Dict
from tqdm import tqdm
from clipdeck.config import (
    DECK_ID, DECK_NAME,
    BASIC_MODEL_ID, BASIC_MODEL_NAME, BASIC_FIELDS, BASIC_TEMPLATES,
    CLOZE_MODEL_ID, CLOZE_MODEL_NAME, CLOZE_FIELDS, CLOZE_TEMPLATES,
    CSS
)
from clipdeck.errors import IoError
from clipdeck.models import Basic, Card, Cloze


def _html(text: str) -> str:
    return text.strip().replace('\n', '<br>')


class AnkiGenerator:
    """Generates Anki deck packages from compiled cards, with validation."""

    def __init__(self, deck_name: str = DECK_NAME, deck_id: int = DECK_ID):
        self.deck_id = deck_id
        self.deck_name = deck_name

        self.basic_model = genanki.Model(
            BASIC_MODEL_ID,
            BASIC_MODEL_NAME,
            fields=BASIC_FIELDS,
            templates=BASIC_TEMPLATES,
            css=CSS
        )
        self.cloze_model = genanki.Model(
            CLOZE_MODEL_ID,
            CLOZE_MODEL_NAME,
            fields=CLOZE_FIELDS,
            templates=CLOZE_TEMPLATES,
            css=CSS,
            model_type=genanki.Model.CLOZE
        )

        self.deck = genanki.Deck(self.deck_id, self.deck_name)
        self.notes_created = 0
        self.notes_skipped = 0
        self.seen_fronts = set()  # Track duplicates

    def add_card(self, card: Card) -> bool:
        """
        Adds a single card to the deck.

        Returns:
            True if card was added, False if skipped
        """
        if isinstance(card, Cloze):
            model = self.cloze_model
            fields = [_html(card.text), _html(card.back_extra)]
        elif isinstance(card, Basic):
            model = self.basic_model
            fields = [_html(card.front), _html(card.back)]
        else:
            raise TypeError(f"Not a card: {card!r}")

        # Anki rejects notes whose first field is empty
        if not fields[0]:
            tqdm.write(f"⚠️ Skipping card: No front provided for '{fields[1][:40]}'")
            self.notes_skipped += 1
            return False

        key = (model.model_id, fields[0])
        if key in self.seen_fronts:
            tqdm.write(f"⚠️ Skipping duplicate card: '{fields[0]}'")
            self.notes_skipped += 1
            return False

        note = genanki.Note(model=model, fields=fields)
        self.deck.add_note(note)
        self.seen_fronts.add(key)
        self.notes_created += 1
        return True

    def save_package(self, output_path: Path) -> bool:
        """
        Generates the .apkg file.

        Returns:
            True if saved, False if there was nothing to save
        """
        if self.notes_created == 0:
            print("⚠️ Warning: No notes were added to the deck.")
            return False

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            genanki.Package(self.deck).write_to_file(str(output_path))
        except OSError as e:
            raise IoError(f"Failed to save deck to {output_path}: {e}")

        print(f"✅ Saved Anki deck to {output_path}")
        print(f"   Created: {self.notes_created} cards")
        if self.notes_skipped > 0:
            print(f"   Skipped: {self.notes_skipped} cards")
        return True

    def get_statistics(self) -> Dict[str, int]:
        """Get statistics about deck creation."""
        return {
            'created': self.notes_created,
            'skipped': self.notes_skipped,
            'total_processed': self.notes_created + self.notes_skipped
        }

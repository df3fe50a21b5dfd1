# -*- coding: utf-8 -*-
import os
import sys
import json
import click
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from tqdm import tqdm
from dotenv import load_dotenv

# Ensure clipdeck package is in python path
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

from clipdeck import config
from clipdeck.anki import AnkiGenerator
from clipdeck.codec import serialize, deserialize, dump_entries, load_entries
from clipdeck.errors import ClippingsError, IoError
from clipdeck.reconciler import reconcile
from clipdeck.scanner import RecordScanner
from clipdeck.storage import read_text, write_text, write_with_backup, load_last_run, save_last_run

# Load environment variables from .env file
load_dotenv()


def parse_start_date(ctx, param, value: Optional[str]) -> Optional[datetime]:
    """Local midnight of an MM-DD-YYYY date, as a UTC instant."""
    if value is None:
        return None
    try:
        naive = datetime.strptime(value, config.START_DATE_FORMAT)
    except ValueError:
        raise click.BadParameter(f"expected MM-DD-YYYY, got {value!r}")
    return naive.astimezone().astimezone(timezone.utc)


def find_clippings(explicit: Optional[Path]) -> Path:
    if explicit is not None:
        return explicit
    for candidate in config.DEFAULT_CLIPPINGS_PATHS:
        if candidate.exists():
            return candidate
    searched = ', '.join(str(p) for p in config.DEFAULT_CLIPPINGS_PATHS)
    raise IoError(f"No clippings file found (searched: {searched}). Pass --clipping-path.")


def run_convert(clippings_path: Path, out_dir: Path, start_date: Optional[datetime], ignore_last_run: bool) -> int:
    """Parse clippings and write the intermediate text and metadata files. Returns entry count."""
    last_run_path = out_dir / config.LAST_RUN_FILE

    cutoff = start_date
    if cutoff is None and not ignore_last_run:
        cutoff = load_last_run(last_run_path)
        if cutoff is not None:
            click.echo(f"🕑 Only including clippings added after the last run ({cutoff:%Y-%m-%d %H:%M} UTC)")

    click.echo(f"📖 Reading {clippings_path}")
    text = read_text(clippings_path)

    scanner = RecordScanner(cutoff=cutoff)
    entries = scanner.scan(text)
    click.echo(f"📝 Found {scanner.records_seen} records, kept {len(entries)}")

    if not entries:
        click.echo("⚠️ No new highlights or notes; nothing written.")
        return 0

    intermediate = serialize(entries)
    metadata = dump_entries(entries)

    output_path = out_dir / config.INTERMEDIATE_FILE
    backup_path = out_dir / config.INTERMEDIATE_BACKUP_FILE
    if write_with_backup(output_path, intermediate, backup_path):
        click.echo(f"💾 Overwrote old {output_path} (backed up to {backup_path})")
    write_text(out_dir / config.METADATA_FILE, metadata)
    save_last_run(last_run_path, datetime.now(timezone.utc))

    click.echo(f"✅ Wrote {output_path}; edit it, then run with --validate")
    return len(entries)


def run_validate(out_dir: Path, deck_name: str, build_deck: bool) -> int:
    """Compile the edited intermediate text into the final output. Returns card count."""
    cards = deserialize(read_text(out_dir / config.INTERMEDIATE_FILE))
    entries = load_entries(read_text(out_dir / config.METADATA_FILE))
    output = reconcile(cards, entries)

    anki_generator = None
    if build_deck:
        anki_generator = AnkiGenerator(deck_name=deck_name)
        for card in tqdm(output.cards, desc="Building deck"):
            anki_generator.add_card(card)

    # output.json is written last
    if anki_generator is not None:
        anki_generator.save_package(out_dir / config.DECK_FILE)
        stats = anki_generator.get_statistics()
        click.echo(f"   Cards created: {stats['created']}")
        click.echo(f"   Cards skipped: {stats['skipped']}")

    output_path = out_dir / config.OUTPUT_FILE
    write_text(output_path, json.dumps(output.to_dict(), indent=2, ensure_ascii=False))
    click.echo(f"✅ Compiled {len(output.cards)} cards to {output_path}")

    return len(output.cards)


@click.command()
@click.option('--validate', '-v', is_flag=True, help='Check the edited output file and compile it into cards.')
@click.option('--start-date', '-d', callback=parse_start_date, help='Only include clippings after this date (MM-DD-YYYY).')
@click.option('--clipping-path', '-p', type=click.Path(dir_okay=False, path_type=Path), envvar='CLIPPINGS_PATH',
              help='Path to My Clippings.txt (or set CLIPPINGS_PATH env var).')
@click.option('--out-dir', '-o', type=click.Path(file_okay=False, path_type=Path), envvar='CLIPDECK_OUT_DIR',
              default=config.DEFAULT_OUT_DIR, show_default=True, help='Directory for generated files.')
@click.option('--deck-name', default=config.DECK_NAME, show_default=True, help='Name of the generated Anki deck.')
@click.option('--deck/--no-deck', default=True, help='Also write an Anki .apkg when validating.')
@click.option('--ignore-last-run', is_flag=True, help='Include clippings older than the last successful run.')
def main(validate, start_date, clipping_path, out_dir, deck_name, deck, ignore_last_run):
    """
    clipdeck: Turn Kindle clippings into Anki flashcards.

    Without --validate, converts the clippings file into an editable
    output.md. With --validate, compiles the edited file into output.json
    and an Anki deck.
    """
    try:
        if validate:
            run_validate(out_dir, deck_name, deck)
        else:
            run_convert(find_clippings(clipping_path), out_dir, start_date, ignore_last_run)
    except ClippingsError as e:
        click.echo(f"❌ {type(e).__name__}: {e}", err=True)
        sys.exit(e.exit_code)


if __name__ == '__main__':
    main()

# -*- coding: utf-8 -*-
import json
from datetime import datetime, timezone

from click.testing import CliRunner

import main as cli
from clipdeck.errors import IoError, InvalidBlockSequence, MissingHighlightForCloze
from clipdeck.storage import load_last_run, save_last_run

CLIPPINGS = (
    "Alpha (Bob)\n"
    "- Your Highlight on page 1 | Added on Tuesday, November 24, 2018 11:31:30 AM\n"
    "\n"
    "The cat walked over a hill\n"
    "==========\n"
    "Alpha (Bob)\n"
    "- Your Note on page 1 | Added on Tuesday, November 24, 2018 11:32:00 AM\n"
    "\n"
    "hill\n"
    "walked ... past tense\n"
    "==========\n"
)


def _write_clippings(tmp_path, text=CLIPPINGS):
    path = tmp_path / "My Clippings.txt"
    path.write_text(text, encoding="utf-8")
    return path


def _run(args):
    return CliRunner().invoke(cli.main, args)


def test_convert_writes_intermediate_and_metadata(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"

    result = _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    intermediate = (out_dir / "output.md").read_text(encoding="utf-8")
    assert intermediate.startswith("========\nThe cat walked over a hill\n========\n")
    assert "----\nThe cat {{c1::walked}} over a hill\n|-\npast tense\n----\n" in intermediate
    metadata = json.loads((out_dir / "output-metadata.json").read_text(encoding="utf-8"))
    assert [m["type"] for m in metadata] == ["highlight", "note"]
    assert load_last_run(out_dir / "last-run.json") is not None


def test_second_convert_skips_clippings_before_last_run(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    save_last_run(out_dir / "last-run.json", datetime(2030, 1, 1, tzinfo=timezone.utc))

    result = _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert "nothing written" in result.output
    assert not (out_dir / "output.md").exists()


def test_start_date_overrides_last_run(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    save_last_run(out_dir / "last-run.json", datetime(2030, 1, 1, tzinfo=timezone.utc))

    result = _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir), "--start-date", "01-01-2010"])

    assert result.exit_code == 0, result.output
    assert (out_dir / "output.md").exists()


def test_ignore_last_run(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    save_last_run(out_dir / "last-run.json", datetime(2030, 1, 1, tzinfo=timezone.utc))

    result = _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir), "--ignore-last-run"])

    assert result.exit_code == 0, result.output
    assert (out_dir / "output.md").exists()


def test_bad_start_date_is_usage_error(tmp_path):
    result = _run(["--clipping-path", str(_write_clippings(tmp_path)), "--start-date", "2018-11-24"])

    assert result.exit_code == 2
    assert "MM-DD-YYYY" in result.output


def test_convert_backs_up_previous_output(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    (out_dir / "output.md").write_text("my edits", encoding="utf-8")

    result = _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    assert (out_dir / "output-copy.md").read_text(encoding="utf-8") == "my edits"


def test_grammar_error_exits_with_its_code_and_writes_nothing(tmp_path):
    bad = CLIPPINGS.replace("Your Highlight", "Your Bookmark")
    clippings = _write_clippings(tmp_path, bad)
    out_dir = tmp_path / "out"

    result = _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)])

    assert result.exit_code == MissingHighlightForCloze.exit_code
    assert not (out_dir / "output.md").exists()
    assert not (out_dir / "last-run.json").exists()


def test_missing_clippings_file(tmp_path):
    result = _run(["--clipping-path", str(tmp_path / "nope.txt"), "--out-dir", str(tmp_path)])

    assert result.exit_code == IoError.exit_code


def test_no_default_clippings_found(tmp_path, monkeypatch):
    monkeypatch.delenv("CLIPPINGS_PATH", raising=False)
    monkeypatch.setattr(cli.config, "DEFAULT_CLIPPINGS_PATHS", [tmp_path / "absent.txt"])

    result = _run(["--out-dir", str(tmp_path)])

    assert result.exit_code == IoError.exit_code


def test_validate_compiles_edited_output(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    assert _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)]).exit_code == 0

    intermediate = out_dir / "output.md"
    edited = intermediate.read_text(encoding="utf-8").replace("----\n\n|-\nhill", "----\nA small mountain\n|-\nhill")
    intermediate.write_text(edited, encoding="utf-8")

    result = _run(["--validate", "--out-dir", str(out_dir)])

    assert result.exit_code == 0, result.output
    output = json.loads((out_dir / "output.json").read_text(encoding="utf-8"))
    assert output["cards"] == [
        {"type": "basic", "front": "A small mountain", "back": "hill<br><br>The cat walked over a hill"},
        {"type": "cloze", "text": "The cat {{c1::walked}} over a hill", "back_extra": "past tense"},
    ]
    assert output["end_date"] - output["begin_date"] == 30
    assert (out_dir / "output.apkg").exists()


def test_validate_rejects_stray_lines(tmp_path):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    assert _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)]).exit_code == 0
    intermediate = out_dir / "output.md"
    intermediate.write_text(intermediate.read_text(encoding="utf-8") + "oops\n", encoding="utf-8")

    result = _run(["--validate", "--out-dir", str(out_dir), "--no-deck"])

    assert result.exit_code == InvalidBlockSequence.exit_code
    assert not (out_dir / "output.json").exists()


def test_failed_deck_save_writes_no_output(tmp_path, monkeypatch):
    clippings = _write_clippings(tmp_path)
    out_dir = tmp_path / "out"
    assert _run(["--clipping-path", str(clippings), "--out-dir", str(out_dir)]).exit_code == 0
    intermediate = out_dir / "output.md"
    intermediate.write_text(
        intermediate.read_text(encoding="utf-8").replace("----\n\n|-\nhill", "----\nq\n|-\nhill"),
        encoding="utf-8"
    )

    def fail(self, output_path):
        raise IoError(f"disk full writing {output_path}")

    monkeypatch.setattr(cli.AnkiGenerator, "save_package", fail)

    result = _run(["--validate", "--out-dir", str(out_dir)])

    assert result.exit_code == IoError.exit_code
    assert not (out_dir / "output.json").exists()

# -*- coding: utf-8 -*-
import json
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from clipdeck.errors import IoError, MalformedMetadata
from clipdeck.models import from_timestamp, to_timestamp


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8-sig')
    except OSError as e:
        raise IoError(f"Unable to read {path}: {e}")


def write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    except OSError as e:
        raise IoError(f"Unable to write {path}: {e}")


def write_with_backup(path: Path, content: str, backup_path: Path) -> bool:
    """
    Overwrite path with content, first copying any existing file to backup_path.

    Returns:
        True if an existing file was backed up
    """
    backed_up = False
    if path.exists():
        try:
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(path, backup_path)
        except OSError as e:
            raise IoError(f"Unable to copy {path} to {backup_path}: {e}")
        backed_up = True

    write_text(path, content)
    return backed_up


def load_last_run(path: Path) -> Optional[datetime]:
    """Instant of the last successful conversion, or None if never recorded."""
    if not path.exists():
        return None

    try:
        data = json.loads(read_text(path))
        return from_timestamp(data['last_run'])
    except (ValueError, KeyError, TypeError) as e:
        raise MalformedMetadata(f"Could not read last run date from {path}: {e}")


def save_last_run(path: Path, when: datetime) -> None:
    write_text(path, json.dumps({'last_run': to_timestamp(when)}))

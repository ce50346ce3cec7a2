"""File helpers shared by the JSON repositories.

Each store file holds a JSON array of flat records.  Writes go to a
temporary sibling first and are moved into place with ``os.replace`` so a
reader never sees a half-written file.  I/O errors are translated into
the domain's store errors here, once, for every repository.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from ecom.domain.exceptions import LookupFailureError, PersistFailureError


def ensure_file(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("x", encoding="utf-8") as fh:
            fh.write("[]")
    except FileExistsError:
        pass


def load_records(path: Path) -> list[dict]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise LookupFailureError(f"cannot read {path.name}: {exc}") from exc


def persist_records(path: Path, records: list[dict]) -> None:
    write_bytes(path, (json.dumps(records, indent=2) + "\n").encode("utf-8"))


def write_bytes(path: Path, content: bytes) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_bytes(content)
        os.replace(tmp_path, path)
    except OSError as exc:
        raise PersistFailureError(f"cannot write {path.name}: {exc}") from exc


def next_id(records: list[dict]) -> int:
    if not records:
        return 1
    return max(r["id"] for r in records) + 1

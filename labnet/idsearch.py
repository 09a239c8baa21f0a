"""Check which record ids of one file are referenced in another."""

from __future__ import annotations

import argparse
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

DEFAULT_IDS_FILE = "enex_transactions_202201072010.csv"
DEFAULT_ITEMS_FILE = "enex_items_202201101947.csv"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def read_ids(path: str | Path, separator: str = "|") -> list[int]:
    """Read the integer in the first field of every newline-terminated line.

    A line whose first field does not start with an integer repeats the id
    of the line before it (0 at the start). Text after the last newline is
    not read.
    """
    ids: list[int] = []
    current = 0
    with open(path, encoding="utf-8", errors="replace", newline="") as handle:
        for line in handle:
            if not line.endswith("\n"):
                break
            field = line[:-1].split(separator, 1)[0]
            match = _LEADING_INT.match(field)
            if match:
                current = int(match.group(1))
            ids.append(current)
    return ids


def _scan(ids: Iterable[int], haystack: str | bytes) -> Iterator[tuple[int, int, bool]]:
    """Yield (index, found before this id, whether this id was found)."""
    found = 0
    for index, ident in enumerate(ids):
        needle: str | bytes = f"|{ident}"
        if isinstance(haystack, bytes):
            needle = needle.encode("ascii")
        hit = needle in haystack
        yield index, found, hit
        found += hit


def count_found(ids: Iterable[int], haystack: str | bytes) -> int:
    """Count the ids that appear in ``haystack`` right after a '|'."""
    return sum(hit for _, _, hit in _scan(ids, haystack))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Look up ids of one file in another.")
    parser.add_argument("ids_file", nargs="?", default=DEFAULT_IDS_FILE)
    parser.add_argument("items_file", nargs="?", default=DEFAULT_ITEMS_FILE)
    parser.add_argument("--separator", default="|", help="field separator of the ids file")
    args = parser.parse_args(argv)

    print("Proceso de archivos!!!!")
    try:
        ids = read_ids(args.ids_file, args.separator)
    except OSError as exc:
        print(exc)
        return 1
    total = len(ids)
    print(f"Hay que evaluar: {total} registros")

    try:
        haystack = Path(args.items_file).read_bytes()
    except OSError as exc:
        print(exc)
        return 1
    print(f"Cargo archivo {args.items_file} de {len(haystack)} bytes ")

    found = 0
    for index, found_before, hit in _scan(ids, haystack):
        if index % 1000 == 0:
            print(f"Procesados {index * 100.0 / total:.2f}% [{found_before} de {index}]")
        found = found_before + hit
    print(f"Se encontraron {found} de {total}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
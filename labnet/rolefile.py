"""The role flag file shared by the mobile server agents, and a small random number."""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import BinaryIO

DEFAULT_ROLE_FILE = "maestro.dat"
NO_ROLE = 2

_LEADING_INT = re.compile(rb"\s*([+-]?\d+)")


def _parse(data: bytes) -> int | None:
    match = _LEADING_INT.match(data)
    return int(match.group(1)) if match else None


def read_role(path: str | Path = DEFAULT_ROLE_FILE) -> int:
    """Return the integer at the start of the role file, or 2 if there is none."""
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        return NO_ROLE
    value = _parse(data)
    return NO_ROLE if value is None else value


def toggle_role(path: str | Path = DEFAULT_ROLE_FILE) -> int | None:
    """Swap a role of 0 and 1 in place and return the new role.

    Any other content is left untouched and None is returned.
    """
    with open(path, "r+b") as handle:
        value = _parse(handle.read())
        if value in (0, 1):
            new_role = 1 - value
            handle.seek(0)
            handle.write(str(new_role).encode("ascii"))
            return new_role
    print("no tiene nada...")
    return None


def random_small(source: BinaryIO | None = None) -> int:
    """Read a 16-bit number and divide it by 5 until half of it is at most 8."""
    raw = source.read(2) if source is not None else os.urandom(2)
    if len(raw) < 2:
        raise ValueError("random source returned fewer than 2 bytes")
    value = int.from_bytes(raw, sys.byteorder)
    while value // 2 > 8:
        value //= 5
    return value
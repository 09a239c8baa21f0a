"""CRC-32 checksum of a message and a hexadecimal dump of its bytes."""

from __future__ import annotations

import argparse
import zlib

DEFAULT_TEXT = "Mensaje de Prueba"


def crc32(data: bytes) -> int:
    """Return the CRC-32 (reflected polynomial 0xEDB88320) of ``data``."""
    return zlib.crc32(data) & 0xFFFFFFFF


def hex_bytes(data: bytes) -> str:
    """Describe ``data`` as its length followed by each byte in upper-case hex."""
    return f"{len(data)} bytes : " + "".join(f"{byte:02X} " for byte in data)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CRC-32 of a text.")
    parser.add_argument("text", nargs="?", default=DEFAULT_TEXT)
    args = parser.parse_args(argv)
    value = crc32(args.text.encode("utf-8"))
    print(f'Calculador crc32 para texto "{args.text}": {value}')
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
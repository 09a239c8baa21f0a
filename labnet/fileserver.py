"""A TCP file server: a client names a file and receives it line by line."""

from __future__ import annotations

import argparse
import os
import socket
import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from labnet.tcputil import accept_connection, server_socket

MESSAGE_SIZE = 100
PDU_SIZE = 1 + MESSAGE_SIZE
DEFAULT_PORT = 7000
MISSING_FILE = b" Archivo pedido no existe \n"
END_MARKER = b"Fin"

_FORMAT = struct.Struct(f"B{MESSAGE_SIZE}s")


@dataclass(frozen=True)
class Pdu:
    """One fixed-size message: a header byte followed by a NUL-padded text."""

    head: int = 0
    message: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.head <= 0xFF:
            raise ValueError("head must fit in one byte")
        if len(self.message) > MESSAGE_SIZE:
            raise ValueError(f"message longer than {MESSAGE_SIZE} bytes")

    def pack(self) -> bytes:
        """Return the wire form, always PDU_SIZE bytes long."""
        return _FORMAT.pack(self.head, self.message)

    @classmethod
    def unpack(cls, data: bytes) -> Pdu:
        """Read a PDU from its wire form; the message ends at the first NUL."""
        if len(data) != PDU_SIZE:
            raise ValueError(f"a PDU has {PDU_SIZE} bytes, got {len(data)}")
        head, message = _FORMAT.unpack(data)
        return cls(head, message.split(b"\0", 1)[0])

    @property
    def line(self) -> bytes:
        """The file text carried by a data PDU, which starts in the header byte."""
        return bytes([self.head]) + self.message


def _recv_pdu(conn: socket.socket) -> bytes:
    data = b""
    while len(data) < PDU_SIZE:
        chunk = conn.recv(PDU_SIZE - len(data))
        if not chunk:
            break
        data += chunk
    return data.ljust(PDU_SIZE, b"\0")


def _chunks(handle: BinaryIO) -> Iterator[bytes]:
    # A line is sent in pieces of at most MESSAGE_SIZE bytes.
    return iter(lambda: handle.readline(MESSAGE_SIZE), b"")


def serve_file_request(conn: socket.socket) -> bool:
    """Answer one request read from ``conn`` and return whether the file existed.

    The lines of the named file are sent one PDU each, followed by a PDU
    holding "Fin". A file that cannot be opened is answered with an error
    message before the "Fin". The connection is left open.
    """
    request = Pdu.unpack(_recv_pdu(conn))
    name = os.fsdecode(request.message)
    try:
        handle = open(name, "rb")
    except OSError:
        print("peticion erronea ", flush=True)
        conn.sendall(Pdu(message=MISSING_FILE).pack())
        found = False
    else:
        with handle:
            for chunk in _chunks(handle):
                conn.sendall(Pdu(chunk[0], chunk[1:]).pack())
        found = True
    conn.sendall(Pdu(message=END_MARKER).pack())
    return found


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve files by name over TCP.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        listener = server_socket(args.port)
    except (OSError, OverflowError) as exc:
        print(f"no bbind: {exc}")
        return 1
    with listener:
        try:
            while True:
                print("\n\n\n *****Servidor Corriendo*****   \n\n\n", flush=True)
                while True:
                    try:
                        conn, _address = accept_connection(listener)
                        break
                    except OSError:
                        continue
                with conn:
                    try:
                        serve_file_request(conn)
                    except OSError as exc:
                        print(exc, flush=True)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
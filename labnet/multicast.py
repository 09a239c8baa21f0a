"""A multicast listener that answers every message it receives."""

from __future__ import annotations

import argparse
import itertools
import socket
import struct
import sys
from collections.abc import Iterator
from typing import TextIO

DEFAULT_GROUP = "224.0.1.1"
DEFAULT_PORT = 5000
DEFAULT_REPLY = b"ok"
BUFFER_SIZE = 256


def join_group(group: str = DEFAULT_GROUP, port: int = DEFAULT_PORT) -> socket.socket:
    """Return a UDP socket bound to ``group:port`` and joined to the group.

    Raises OSError for an invalid group or when the socket cannot be set up.
    """
    packed = socket.inet_aton(group)
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind((socket.inet_ntoa(packed), port))
        request = packed + struct.pack("!I", socket.INADDR_ANY)
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, request)
    except BaseException:
        sock.close()
        raise
    return sock


def listen(
    sock: socket.socket, reply: bytes = DEFAULT_REPLY, output: TextIO | None = None
) -> Iterator[tuple[tuple[str, int], bytes]]:
    """Receive messages, answer each with ``reply`` and yield (sender, data).

    Progress is printed to ``output`` (standard output by default). Receive
    errors are reported and skipped; the iteration ends when the socket is
    closed, and a socket timeout is raised.
    """
    out = output if output is not None else sys.stdout
    for counter in itertools.count():
        print(f"contador en {counter}:", file=out, flush=True)
        try:
            data, address = sock.recvfrom(BUFFER_SIZE)
        except TimeoutError:
            raise
        except OSError as exc:
            if sock.fileno() == -1:
                return
            print(f"recvfrom: {exc}", file=out, flush=True)
            continue
        text = data.decode("utf-8", errors="replace")
        print(f"Mensaje desde servidor movil {address[0]}: {text}", file=out, flush=True)
        try:
            sock.sendto(reply, address)
        except OSError:
            print("pifia", end="", file=out, flush=True)
        yield address, data


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Answer messages sent to a multicast group.")
    parser.add_argument("--group", default=DEFAULT_GROUP)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--reply", default=DEFAULT_REPLY.decode("ascii"))
    args = parser.parse_args(argv)
    try:
        sock = join_group(args.group, args.port)
    except (OSError, OverflowError) as exc:
        print(f"socket: {exc}")
        return 1
    with sock:
        try:
            for _ in listen(sock, args.reply.encode("utf-8")):
                pass
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
"""Capture raw Ethernet frames on one or more interfaces and describe them."""

from __future__ import annotations

import argparse
import contextlib
import socket
import struct
from collections.abc import Iterable, Iterator

import psutil

from labnet.interfaces import mac_address
from labnet.packets import describe_frame

ETH_P_ALL = 0x0003
SOL_PACKET = 263
PACKET_ADD_MEMBERSHIP = 1
PACKET_MR_PROMISC = 1
BUFFER_SIZE = 1024 * 128


def open_capture(interface: str) -> socket.socket:
    """Open a raw packet socket bound to ``interface`` in promiscuous mode.

    Raises OSError when raw sockets are unavailable or not permitted, or when
    the interface does not exist. Failing to bind or to switch on promiscuous
    mode is reported and the socket is still returned.
    """
    family = getattr(socket, "AF_PACKET", None)
    if family is None:
        raise OSError("raw packet sockets are not available on this platform")
    sock = socket.socket(family, socket.SOCK_RAW, socket.htons(ETH_P_ALL))
    try:
        index = socket.if_nametoindex(interface)
        try:
            sock.bind((interface, ETH_P_ALL))
        except OSError:
            print(f"No se puede bindear interfaz {interface} ")
        request = struct.pack("iHH8s", index, PACKET_MR_PROMISC, 0, b"")
        try:
            sock.setsockopt(SOL_PACKET, PACKET_ADD_MEMBERSHIP, request)
        except OSError:
            print(f"No se puede poner interfaz {interface} en modo promiscuo")
    except BaseException:
        sock.close()
        raise
    return sock


def _interface_line(interface: str, sock: socket.socket) -> str:
    try:
        index = socket.if_nametoindex(interface)
    except OSError:
        index = -1
    host = ""
    for addr in psutil.net_if_addrs().get(interface, []):
        if addr.family in (socket.AF_INET, socket.AF_INET6):
            host = addr.address
            break
    try:
        mac = (mac_address(interface) or "").upper()
    except KeyError:
        mac = ""
    return f"Socke[{sock.fileno()}] Interfaz[{interface}] Indice[{index}] Host[{host}] MAC: {mac}"


def capture(sockets: Iterable[socket.socket]) -> Iterator[bytes]:
    """Receive frames forever, alternating between the first two sockets.

    With a single socket every frame comes from it; with more, reading starts
    at the second and only the first two are used. An empty frame means the
    receive returned no data.
    """
    socks = list(sockets)
    if not socks:
        raise ValueError("at least one socket is needed")
    current = 0
    while True:
        if len(socks) > 1:
            current = (current + 1) % 2
        yield socks[current].recv(BUFFER_SIZE)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Describe Ethernet frames seen on interfaces.")
    parser.add_argument("interfaces", nargs="*", help="interface names")
    args = parser.parse_args(argv)
    if not args.interfaces:
        print("Utilizar el programa con 1 argumento: Nombre Eth")
        return 0

    print(f"tarjetas: {len(args.interfaces)}")
    for name in args.interfaces:
        print(name)

    with contextlib.ExitStack() as stack:
        sockets = []
        for name in args.interfaces:
            try:
                sock = stack.enter_context(open_capture(name))
            except OSError as exc:
                print(f"No se puede crear socket: {exc}")
                return 1
            print(_interface_line(name, sock))
            sockets.append(sock)

        try:
            for frame in capture(sockets):
                if not frame:
                    print("No hay data... q paso !")
                    continue
                try:
                    print(describe_frame(frame), end="", flush=True)
                except ValueError as exc:
                    print(exc)
        except KeyboardInterrupt:
            return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
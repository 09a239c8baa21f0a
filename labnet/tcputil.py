"""Small helpers for IPv4 TCP servers and clients, and host name lookup."""

from __future__ import annotations

import socket

BACKLOG = 5


def server_socket(port: int) -> socket.socket:
    """Return a TCP socket listening on every IPv4 address at ``port``.

    Port 0 lets the system pick a free port. Raises OSError when the socket
    cannot be created, bound or put to listen.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind(("", port))
        sock.listen(BACKLOG)
    except BaseException:
        sock.close()
        raise
    return sock


def accept_connection(sock: socket.socket) -> tuple[socket.socket, tuple[str, int]]:
    """Wait for a connection and return the connected socket and the peer address."""
    return sock.accept()


def _ipv4_address(host: str) -> str:
    if not host:
        raise ValueError("host must not be empty")
    if host[0].isdigit():
        return socket.inet_ntoa(socket.inet_aton(host))
    return socket.gethostbyname(host)


def client_socket(host: str, port: int) -> socket.socket:
    """Connect to ``host`` at ``port`` and return the connected socket.

    A host starting with a digit is read as a dotted IPv4 address, anything
    else is looked up by name. Raises OSError when the host is unknown or the
    connection fails.
    """
    address = _ipv4_address(host)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except BaseException:
        sock.close()
        raise
    return sock


def resolve_host(target: str) -> tuple[str, str]:
    """Return the host name and IPv4 address of ``target``.

    A dotted address is its own name. An unknown host raises OSError.
    """
    try:
        packed = socket.inet_aton(target)
    except OSError:
        name, _aliases, addresses = socket.gethostbyname_ex(target)
        return name, addresses[0]
    return target, socket.inet_ntoa(packed)
"""Teaching TCP servers: print what clients send, with a receive timeout, or count clients."""

from __future__ import annotations

import argparse
import socket
import sys
import threading
import time
from typing import BinaryIO

from labnet.tcputil import accept_connection, server_socket

BUFFER_SIZE = 256
DEFAULT_DELAY = 5.0


class ClientCounter:
    """Thread-safe count of the clients served so far."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.count = 0

    def next(self) -> int:
        """Count one more client and return its number, starting at 1."""
        with self.lock:
            self.count += 1
            return self.count


def _emit(output: BinaryIO | None, data: bytes) -> None:
    if output is not None:
        output.write(data)
        output.flush()
        return
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(data.decode("utf-8", errors="replace"))
        sys.stdout.flush()
    else:
        buffer.write(data)
        buffer.flush()


def print_server(sock: socket.socket, output: BinaryIO | None = None) -> None:
    """Serve one client at a time, copying everything it sends to ``output``.

    Returns when the listening socket can no longer accept.
    """
    while True:
        try:
            conn, address = accept_connection(sock)
        except OSError:
            return
        print(f"Llama IP: {address[0]}", flush=True)
        with conn:
            while True:
                try:
                    data = conn.recv(BUFFER_SIZE)
                except OSError:
                    break
                if not data:
                    break
                _emit(output, data)
        print("Fin de la llamada", flush=True)


def timeout_server(sock: socket.socket, timeout: float, output: BinaryIO | None = None) -> None:
    """Like print_server, but drop a client that sends nothing for ``timeout`` seconds.

    A timeout of 0 means no timeout. Returns when the listening socket can no
    longer accept.
    """
    if timeout < 0:
        raise ValueError("timeout must not be negative")
    while True:
        try:
            conn, address = accept_connection(sock)
        except OSError:
            return
        print(f"Llama IP: {address[0]}", flush=True)
        with conn:
            print(f"el timeOut era: {int(conn.gettimeout() or 0)}", flush=True)
            conn.settimeout(timeout if timeout > 0 else None)
            print(f"el timeOut ahora es: {int(conn.gettimeout() or 0)}", flush=True)
            while True:
                try:
                    data = conn.recv(BUFFER_SIZE)
                except OSError:
                    print("timeOut!!!", flush=True)
                    break
                if not data:
                    print("fin de llamada", flush=True)
                    break
                _emit(output, data)


def _count_client(conn: socket.socket, counter: ClientCounter, delay: float) -> None:
    with conn:
        try:
            data = conn.recv(BUFFER_SIZE)
        except OSError:
            data = b""
        _emit(None, data)
        with counter.lock:
            number = counter.next()
            time.sleep(delay)
        message = f"Eres el cliente No.: {number}\n".encode("ascii") + b"\0"
        try:
            conn.sendall(message)
        except OSError:
            pass
        print("cerro la conexion", flush=True)


def counting_server(
    sock: socket.socket, counter: ClientCounter | None = None, delay: float = DEFAULT_DELAY
) -> None:
    """Serve each client on its own thread and tell it its number.

    Counting and the ``delay`` pause happen under the counter's lock, so
    clients are numbered one after another. Returns when the listening socket
    can no longer accept.
    """
    if counter is None:
        counter = ClientCounter()
    while True:
        try:
            conn, address = accept_connection(sock)
        except OSError:
            return
        print(f"acepto una conexion de: {address[0]}", flush=True)
        threading.Thread(target=_count_client, args=(conn, counter, delay), daemon=True).start()


def _open(port: int) -> socket.socket | None:
    try:
        return server_socket(port)
    except (OSError, OverflowError) as exc:
        print(f"no se puede hacer bind del socket: {exc}")
        return None


def main_print(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print what TCP clients send.")
    parser.add_argument("port", type=int)
    args = parser.parse_args(argv)
    sock = _open(args.port)
    if sock is None:
        return 1
    print("Servidor activo", flush=True)
    with sock:
        try:
            print_server(sock)
        except KeyboardInterrupt:
            pass
    return 0


def main_timeout(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print what TCP clients send, with a timeout.")
    parser.add_argument("timeout", type=int, help="seconds without data before hanging up")
    args = parser.parse_args(argv)
    sock = _open(0)
    if sock is None:
        return 1
    print(f"Me asignaron el puerto: {sock.getsockname()[1]}", flush=True)
    print("Servidor activo", flush=True)
    with sock:
        try:
            timeout_server(sock, args.timeout)
        except ValueError as exc:
            print(exc)
            return 1
        except KeyboardInterrupt:
            pass
    return 0


def main_counter(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Tell each TCP client its number.")
    parser.add_argument("port", type=int)
    args = parser.parse_args(argv)
    sock = _open(args.port)
    if sock is None:
        return 1
    with sock:
        try:
            counting_server(sock, ClientCounter(), DEFAULT_DELAY)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main_print())
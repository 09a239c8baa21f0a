"""A TCP port forwarder: every accepted client is relayed to a fixed target."""

from __future__ import annotations

import argparse
import contextlib
import socket
import threading

BUFFER_SIZE = 4096
MAX_QUEUE_SIZE = 10


def _close(sock: socket.socket) -> None:
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)
    sock.close()


def pump(source: socket.socket, destination: socket.socket, label: str) -> int:
    """Copy data from ``source`` to ``destination`` until either side stops.

    Both sockets are shut down and closed at the end. Returns the number of
    bytes forwarded.
    """
    ident = threading.get_ident()
    print(f"  [+] Hilo Fw {ident} iniciado... ", flush=True)
    total = 0
    try:
        while True:
            try:
                data = source.recv(BUFFER_SIZE)
            except OSError as exc:
                print(f"  [+] recv() failed in forward_data: {exc}", flush=True)
                break
            if not data:
                break
            print(f"  [+] Forwarding to {label} {len(data)} bytes", flush=True)
            try:
                destination.sendall(data)
            except OSError as exc:
                print(f"  [+] send() failed in forward_data: {exc}", flush=True)
                break
            total += len(data)
    finally:
        _close(source)
        _close(destination)
    print(f"  [+] Hilo Fw {ident} terminado... ", flush=True)
    return total


class Forwarder:
    """Listens on a port and relays each client to ``target_host:target_port``."""

    def __init__(self, listen_host: str, listen_port: int, target_host: str, target_port: int) -> None:
        self.listen_host = listen_host
        self.target_host = target_host
        self.target_port = target_port
        self._closed = threading.Event()
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            reuse_port = getattr(socket, "SO_REUSEPORT", None)
            if reuse_port is not None:
                server.setsockopt(socket.SOL_SOCKET, reuse_port, 1)
            server.bind(("", listen_port))
            server.listen(MAX_QUEUE_SIZE)
        except BaseException:
            server.close()
            raise
        self._server = server
        self.listen_port: int = server.getsockname()[1]

    def __enter__(self) -> Forwarder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def serve_forever(self) -> None:
        """Accept clients until closed, relaying each on its own thread."""
        while not self._closed.is_set():
            try:
                client, address = self._server.accept()
            except OSError as exc:
                if self._closed.is_set():
                    break
                print(f"accept() recibio un error, se ignorará: {exc}", flush=True)
                continue
            print(f"[+] Conexión TCP aceptada de {address[0]}:{address[1]}", flush=True)
            threading.Thread(target=self._process, args=(client, address), daemon=True).start()

    def _process(self, client: socket.socket, address: tuple[str, int]) -> None:
        ident = threading.get_ident()
        print(f" [-] Hilo Process {ident} iniciado... ", flush=True)
        try:
            self.handle_client(client, address)
        except OSError as exc:
            print(f" [-]{exc}", flush=True)
        print(f" [-] Hilo Process {ident} terminado... ", flush=True)

    def handle_client(
        self, client: socket.socket, address: tuple[str, int]
    ) -> tuple[threading.Thread, threading.Thread]:
        """Connect to the target and start one relay thread in each direction.

        Returns the two threads. On failure the client is closed and OSError
        is raised.
        """
        try:
            socket.inet_pton(socket.AF_INET, self.target_host)
        except OSError as exc:
            client.close()
            raise OSError(f"inet_pton() failed for target host {self.target_host!r}") from exc
        try:
            target = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError:
            client.close()
            raise
        try:
            target.connect((self.target_host, self.target_port))
        except OSError:
            target.close()
            client.close()
            raise
        print(
            f" [-] Conexión establecida con {self.target_host}:{self.target_port} "
            "para forwarder de datos",
            flush=True,
        )
        threads = (
            threading.Thread(target=pump, args=(client, target, self.target_host), daemon=True),
            threading.Thread(target=pump, args=(target, client, address[0]), daemon=True),
        )
        for thread in threads:
            thread.start()
        return threads

    def close(self) -> None:
        """Stop accepting clients and release the listening socket."""
        self._closed.set()
        _close(self._server)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Forward TCP connections to a target.")
    parser.add_argument("args", nargs="*", help="addr_listen port_listen addr_dst port_dst")
    values = parser.parse_args(argv).args
    if len(values) < 4:
        print("Utilizar el programa con 4 argumentos: addr_listen, port_listen, addr_dst, port_dst")
        return 0
    bind_ip, bind_text, target_host, target_text = values[:4]
    try:
        bind_port = int(bind_text)
        target_port = int(target_text)
    except ValueError as exc:
        print(exc)
        return 1
    try:
        forwarder = Forwarder(bind_ip, bind_port, target_host, target_port)
    except (OSError, OverflowError) as exc:
        print(f"No se puede crear el socket: {exc}")
        return 1
    print(f"[*] Escuchando en {bind_ip}:{bind_port} y reenviando tráfico a {target_host}:{target_port}")
    with forwarder:
        try:
            forwarder.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
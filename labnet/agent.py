"""Mobile server agent: hands a source file over a multicast group and swaps roles."""

from __future__ import annotations

import argparse
import ipaddress
import os
import socket
import struct
import subprocess
import time
from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path

from labnet.rolefile import DEFAULT_ROLE_FILE, read_role, toggle_role

GROUP = "224.0.1.1"
MY_IP = "172.16.10.111"
ANY_DESTINATION = "CUAL_QUIERA"
CONFIRMATION = "Confirmacion"
END_OF_FILE = "FIN_ARCHIVO"
DEFAULT_SOURCE = "servidor.c"
SEND_DELAY = 10.0
IDLE_POLL = 1.0

ADDRESS_SIZE = 15
PAYLOAD_SIZE = 1024

# Two address fields, the payload, two bytes of alignment, then length and operation.
_FORMAT = struct.Struct(f"<{ADDRESS_SIZE}s{ADDRESS_SIZE}s{PAYLOAD_SIZE}s2xii")
PDU_SIZE = _FORMAT.size


class Operation(IntEnum):
    RECEIVE_FILE = 0
    SEND_FILE = 1
    CONFIRM = 2


@dataclass(frozen=True)
class AgentPdu:
    """A datagram exchanged between agents."""

    sender: str = ""
    destination: str = ""
    payload: bytes = b""
    length: int = 0
    operation: int = Operation.RECEIVE_FILE

    def pack(self) -> bytes:
        """Return the wire form, always PDU_SIZE bytes long."""
        sender = self.sender.encode("ascii")
        destination = self.destination.encode("ascii")
        if len(sender) > ADDRESS_SIZE or len(destination) > ADDRESS_SIZE:
            raise ValueError(f"addresses are limited to {ADDRESS_SIZE} bytes")
        if len(self.payload) > PAYLOAD_SIZE:
            raise ValueError(f"payload longer than {PAYLOAD_SIZE} bytes")
        return _FORMAT.pack(sender, destination, self.payload, self.length, self.operation)

    @classmethod
    def unpack(cls, data: bytes) -> AgentPdu:
        """Read a PDU; the payload keeps ``length`` bytes, or runs to the first NUL."""
        if len(data) != PDU_SIZE:
            raise ValueError(f"a PDU has {PDU_SIZE} bytes, got {len(data)}")
        sender, destination, buffer, length, operation = _FORMAT.unpack(data)
        payload = buffer[:length] if 0 < length <= PAYLOAD_SIZE else buffer.split(b"\0", 1)[0]
        return cls(
            sender=sender.split(b"\0", 1)[0].decode("ascii", errors="replace"),
            destination=destination.split(b"\0", 1)[0].decode("ascii", errors="replace"),
            payload=payload,
            length=length,
            operation=operation,
        )

    @property
    def text(self) -> str:
        """The payload up to its first NUL, as text."""
        return self.payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _send(sock: socket.socket, pdu: AgentPdu, address: tuple[str, int]) -> bool:
    try:
        sock.sendto(pdu.pack(), address)
    except OSError as exc:
        print(f"sento: {exc}", flush=True)
        return False
    return True


def send_file(path: str | Path, group: str, port: int, my_ip: str = MY_IP) -> int:
    """Announce, send and then delete ``path``; return the number of lines sent.

    A confirmation PDU comes first, then one PDU per line and finally an
    end-of-file PDU of length 0. Raises OSError when the file cannot be read.
    """
    path = Path(path)
    address = (socket.inet_ntoa(socket.inet_aton(group)), port)
    with open(path, "rb") as handle:
        lines = list(iter(lambda: handle.readline(PAYLOAD_SIZE - 1), b""))
    confirmation = CONFIRMATION.encode("ascii") + b"\0"
    announce = AgentPdu(
        sender=my_ip,
        destination=ANY_DESTINATION,
        payload=confirmation,
        length=len(confirmation),
        operation=Operation.CONFIRM,
    )
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        print("AGENTE SERVIDOR: enviando ...", flush=True)
        if not _send(sock, announce, address):
            return 0
        print(
            f"AGENTE SERVIDOR: Envia operacion {int(announce.operation)} con  mensaje: {CONFIRMATION}",
            flush=True,
        )
        for line in lines:
            _send(sock, replace(announce, payload=line, length=len(line)), address)
        path.unlink(missing_ok=True)
        _send(sock, replace(announce, payload=END_OF_FILE.encode("ascii"), length=0), address)
    return len(lines)


def receive_file(path: str | Path, group: str, port: int) -> int:
    """Write the lines sent to ``group:port`` into ``path``; return bytes written.

    The file is created if needed and written from its start without being
    truncated. Receiving stops at a PDU of length 0. A multicast group is
    joined first; any other address is simply bound.
    """
    packed = socket.inet_aton(group)
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.bind((socket.inet_ntoa(packed), port))
        if ipaddress.IPv4Address(packed).is_multicast:
            request = packed + struct.pack("!I", socket.INADDR_ANY)
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, request)
        print("AGENTE CLIENTE: Preparado para recibir ... ", flush=True)
        descriptor = os.open(path, os.O_CREAT | os.O_WRONLY, 0o644)
        written = 0
        with os.fdopen(descriptor, "wb") as out:
            while True:
                try:
                    data = sock.recv(PDU_SIZE)
                except OSError as exc:
                    print(f"recvfrom: {exc}", flush=True)
                    continue
                pdu = AgentPdu.unpack(data[:PDU_SIZE].ljust(PDU_SIZE, b"\0"))
                if pdu.length > 0 and pdu.text != CONFIRMATION:
                    chunk = pdu.payload[: pdu.length]
                    out.write(chunk)
                    written += len(chunk)
                if pdu.length == 0:
                    print("AGENTE CLIENTE: Termino pasar archivo", flush=True)
                    break
    return written


def _build_and_launch(source_path: str | Path, role_path: str | Path) -> None:
    source = Path(source_path)
    binary = source.with_suffix("")
    try:
        subprocess.run(["gcc", "-o", str(binary), str(source)], check=False)
        toggle_role(role_path)
        process = subprocess.Popen([str(binary.resolve())])
    except OSError as exc:
        print(f"Failed to fork: {exc}", flush=True)
        return
    print(f"Exec como nuevo proceso... {process.pid}", flush=True)


def run(
    port: int,
    role_path: str | Path = DEFAULT_ROLE_FILE,
    source_path: str | Path = DEFAULT_SOURCE,
) -> None:
    """Alternate forever between sending and receiving, as the role file says."""
    while True:
        acted = False
        if read_role(role_path) == 1:
            time.sleep(SEND_DELAY)
            send_file(source_path, GROUP, port, MY_IP)
            toggle_role(role_path)
            acted = True
        if read_role(role_path) == 0:
            receive_file(source_path, GROUP, port)
            _build_and_launch(source_path, role_path)
            acted = True
        if not acted:
            time.sleep(IDLE_POLL)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Hand a server source between agents.")
    parser.add_argument("port", type=int)
    parser.add_argument("--role-file", default=DEFAULT_ROLE_FILE)
    parser.add_argument("--source", default=DEFAULT_SOURCE)
    args = parser.parse_args(argv)
    try:
        run(args.port, args.role_file, args.source)
    except KeyboardInterrupt:
        return 0
    except (OSError, OverflowError) as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
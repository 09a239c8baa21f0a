"""A UDP connection handshake state machine answering one character at a time."""

from __future__ import annotations

import argparse
import socket
from dataclasses import dataclass
from enum import Enum

DEFAULT_PORT = 1999
REPLY_PORT = 10156
NO_REPLY = "-"


class State(Enum):
    IDLE = 1
    CONNECTED = 2
    PASSIVE = 3
    ACTIVE = 4


_TRANSITIONS: dict[tuple[State, str], tuple[str, State]] = {
    (State.IDLE, "a"): ("5", State.PASSIVE),
    (State.IDLE, "1"): ("a", State.ACTIVE),
    (State.PASSIVE, "3"): ("c", State.CONNECTED),
    (State.ACTIVE, "c"): ("7", State.CONNECTED),
    (State.CONNECTED, "2"): ("b", State.IDLE),
    (State.CONNECTED, "4"): ("d", State.CONNECTED),
    (State.CONNECTED, "b"): ("6", State.IDLE),
    (State.CONNECTED, "d"): ("8", State.CONNECTED),
}


@dataclass
class HandshakeMachine:
    """Current handshake state; starts idle."""

    state: State = State.IDLE

    def feed(self, char: str) -> str:
        """Apply one received character and return the character to answer with.

        Characters with no transition leave the state as it is and are
        answered with "-".
        """
        if len(char) != 1:
            raise ValueError("feed takes exactly one character")
        reply, self.state = _TRANSITIONS.get((self.state, char), (NO_REPLY, self.state))
        return reply


def serve(sock: socket.socket, reply_port: int = REPLY_PORT) -> State:
    """Answer each received character to the sender's address at ``reply_port``.

    Stops at an empty datagram or a receive error and returns the final state.
    """
    machine = HandshakeMachine()
    print("Esperando . . .", flush=True)
    while True:
        try:
            data, address = sock.recvfrom(1)
        except OSError:
            break
        if not data:
            break
        letter = data.decode("latin-1")
        print(f"Letra {letter} \n estado {machine.state.value} ...", flush=True)
        reply = machine.feed(letter)
        try:
            sock.sendto(reply.encode("latin-1"), (address[0], reply_port))
        except OSError:
            pass
    print("Termine", flush=True)
    return machine.state


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the UDP handshake responder.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--reply-port", type=int, default=REPLY_PORT)
    args = parser.parse_args(argv)
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as exc:
        print(f"no se puede crear socket: {exc}")
        return 1
    with sock:
        try:
            sock.bind(("", args.port))
        except (OSError, OverflowError) as exc:
            print(f"no se puede hacer bind del socket: {exc}")
            return 1
        try:
            serve(sock, args.reply_port)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
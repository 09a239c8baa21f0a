import socket

import pytest

from labnet.handshake import NO_REPLY, HandshakeMachine, State, serve


def _run(chars):
    machine = HandshakeMachine()
    replies = [machine.feed(char) for char in chars]
    return replies, machine.state


def test_passive_open_connect_and_close():
    replies, state = _run("a342")
    assert replies == ["5", "c", "d", "b"]
    assert state is State.IDLE


def test_active_open_connect_and_remote_close():
    replies, state = _run("1cdb")
    assert replies == ["a", "7", "8", "6"]
    assert state is State.IDLE


@pytest.mark.parametrize(
    "prefix, expected_state",
    [("", State.IDLE), ("a", State.PASSIVE), ("1", State.ACTIVE), ("a3", State.CONNECTED)],
)
def test_unknown_character_keeps_state(prefix, expected_state):
    machine = HandshakeMachine()
    for char in prefix:
        machine.feed(char)
    assert machine.feed("x") == NO_REPLY
    assert machine.state is expected_state


def test_feed_requires_single_character():
    with pytest.raises(ValueError):
        HandshakeMachine().feed("ab")


def test_serve_answers_to_reply_port_until_empty_datagram():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as server, \
            socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as replies, \
            socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as client:
        server.bind(("127.0.0.1", 0))
        server.settimeout(5)
        replies.bind(("127.0.0.1", 0))
        replies.settimeout(5)
        for data in (b"a", b"3", b"4", b""):
            client.sendto(data, server.getsockname())
        final = serve(server, replies.getsockname()[1])
        received = [replies.recv(8) for _ in range(3)]
    assert final is State.CONNECTED
    assert received == [b"5", b"c", b"d"]
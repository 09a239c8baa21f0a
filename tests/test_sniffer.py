import itertools
import socket

import pytest

from labnet.sniffer import capture, main, open_capture


@pytest.fixture
def pairs():
    created = [socket.socketpair(socket.AF_UNIX, socket.SOCK_DGRAM) for _ in range(3)]
    yield created
    for left, right in created:
        left.close()
        right.close()


def test_single_socket_reads_in_order(pairs):
    reader, writer = pairs[0]
    writer.send(b"first")
    writer.send(b"second")
    frames = list(itertools.islice(capture([reader]), 2))
    assert frames == [b"first", b"second"]


def test_two_sockets_alternate_starting_with_second(pairs):
    (r0, w0), (r1, w1) = pairs[0], pairs[1]
    w0.send(b"a1")
    w0.send(b"a2")
    w1.send(b"b1")
    w1.send(b"b2")
    frames = list(itertools.islice(capture([r0, r1]), 4))
    assert frames == [b"b1", b"a1", b"b2", b"a2"]


def test_third_socket_is_never_read(pairs):
    (r0, w0), (r1, w1), (r2, w2) = pairs
    w0.send(b"a")
    w1.send(b"b")
    w2.send(b"c")
    frames = list(itertools.islice(capture([r0, r1, r2]), 2))
    assert frames == [b"b", b"a"]
    r2.setblocking(False)
    assert r2.recv(16) == b"c"


def test_capture_needs_a_socket():
    with pytest.raises(ValueError):
        next(capture([]))


def test_open_capture_unknown_interface_raises():
    with pytest.raises(OSError):
        open_capture("nosuchif0")


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 0
    assert "Utilizar el programa con 1 argumento: Nombre Eth" in capsys.readouterr().out


def test_main_fails_on_unknown_interface(capsys):
    assert main(["nosuchif0"]) == 1
    out = capsys.readouterr().out
    assert "tarjetas: 1" in out
    assert "No se puede crear socket" in out
import socket
import threading

import pytest

from labnet.forwarder import Forwarder, main, pump


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def _echo_server():
    listener = socket.create_server(("127.0.0.1", 0))

    def run():
        with listener:
            conn, _ = listener.accept()
            with conn:
                while True:
                    data = conn.recv(4096)
                    if not data:
                        break
                    conn.sendall(data)

    threading.Thread(target=run, daemon=True).start()
    return listener.getsockname()[1]


def _recv_exact(sock, size):
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_main_without_enough_arguments_prints_usage(capsys):
    assert main(["only-one"]) == 0
    assert "Utilizar el programa con 4 argumentos" in capsys.readouterr().out


def test_main_rejects_bad_port():
    assert main(["0.0.0.0", "x", "127.0.0.1", "1"]) == 1


def test_pump_copies_and_closes_both_sockets():
    s1, s2 = socket.socketpair()
    d1, d2 = socket.socketpair()
    with s2, d2:
        s2.sendall(b"abc")
        s2.shutdown(socket.SHUT_WR)
        assert pump(s1, d1, "label") == 3
        assert _recv_exact(d2, 3) == b"abc"
        assert s1.fileno() == -1
        assert d1.fileno() == -1


def test_pump_with_no_data_forwards_nothing():
    s1, s2 = socket.socketpair()
    d1, d2 = socket.socketpair()
    with s2, d2:
        s2.shutdown(socket.SHUT_WR)
        assert pump(s1, d1, "label") == 0
        assert d2.recv(10) == b""


def test_forwarder_relays_both_ways():
    echo_port = _echo_server()
    forwarder = Forwarder("127.0.0.1", 0, "127.0.0.1", echo_port)
    server_thread = threading.Thread(target=forwarder.serve_forever, daemon=True)
    server_thread.start()
    try:
        with socket.create_connection(("127.0.0.1", forwarder.listen_port), timeout=5) as client:
            message = b"hello forwarder"
            client.sendall(message)
            assert _recv_exact(client, len(message)) == message
    finally:
        forwarder.close()
        server_thread.join(timeout=2)


def test_handle_client_returns_running_relays():
    echo_port = _echo_server()
    with Forwarder("127.0.0.1", 0, "127.0.0.1", echo_port) as forwarder:
        inner, outer = socket.socketpair()
        threads = forwarder.handle_client(inner, ("127.0.0.1", 5555))
        assert len(threads) == 2
        outer.settimeout(5)
        outer.sendall(b"xyz")
        assert _recv_exact(outer, 3) == b"xyz"
        outer.close()
        for thread in threads:
            thread.join(timeout=5)
        assert not any(thread.is_alive() for thread in threads)


def test_handle_client_refused_target_closes_client():
    with Forwarder("127.0.0.1", 0, "127.0.0.1", _free_port()) as forwarder:
        inner, outer = socket.socketpair()
        with outer:
            with pytest.raises(OSError):
                forwarder.handle_client(inner, ("127.0.0.1", 5555))
            assert inner.fileno() == -1


def test_handle_client_rejects_non_numeric_target():
    with Forwarder("127.0.0.1", 0, "not-an-address", 80) as forwarder:
        inner, outer = socket.socketpair()
        with outer:
            with pytest.raises(OSError):
                forwarder.handle_client(inner, ("127.0.0.1", 5555))
            assert inner.fileno() == -1
import socket
import time

import pytest

from probers import l4_tcp


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_listener_is_reachable():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        port = server.getsockname()[1]
        assert l4_tcp.tcp_probe("127.0.0.1", port, timeout=1.0) is True


def test_nothing_listening_is_closed_within_timeout():
    port = _free_port()
    timeout = 0.5
    start = time.monotonic()
    assert l4_tcp.tcp_probe("127.0.0.1", port, timeout=timeout) is False
    assert time.monotonic() - start <= timeout + 0.25


def test_blackholed_address_bounded_by_timeout(monkeypatch):
    def fake_create_connection(address, timeout=None):
        time.sleep(timeout)
        raise socket.timeout("timed out")

    monkeypatch.setattr(l4_tcp.socket, "create_connection", fake_create_connection)
    timeout = 0.3
    start = time.monotonic()
    assert l4_tcp.tcp_probe("10.255.255.1", 81, timeout=timeout) is False
    assert time.monotonic() - start <= timeout + 0.25


def test_unresolvable_host_is_closed():
    assert l4_tcp.tcp_probe("no-such-host.invalid", 6379, timeout=0.2) is False


@pytest.mark.parametrize("host", ["a..b", "x" * 64 + ".example.com"])
def test_host_rejected_by_idna_codec_is_closed(host):
    assert l4_tcp.tcp_probe(host, 6379, timeout=0.2) is False


def test_out_of_range_timeout_is_closed(monkeypatch):
    def fake_create_connection(address, timeout=None):
        raise ValueError("Timeout value out of range")

    monkeypatch.setattr(l4_tcp.socket, "create_connection", fake_create_connection)
    assert l4_tcp.tcp_probe("h", 1, timeout=-1) is False


def test_socket_closed_after_success(monkeypatch):
    class FakeSock:
        closed = False

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            self.closed = True

    sock = FakeSock()
    seen = {}

    def fake_create_connection(address, timeout=None):
        seen["timeout"] = timeout
        return sock

    monkeypatch.setattr(l4_tcp.socket, "create_connection", fake_create_connection)
    assert l4_tcp.tcp_probe("h", 1, timeout=0.7) is True
    assert sock.closed
    assert seen["timeout"] == 0.7


def test_timeout_maps_to_false(monkeypatch):
    def fake_create_connection(address, timeout=None):
        raise socket.timeout("timed out")

    monkeypatch.setattr(l4_tcp.socket, "create_connection", fake_create_connection)
    assert l4_tcp.tcp_probe("h", 1, timeout=0.1) is False

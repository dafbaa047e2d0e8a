import io
import socket
import threading

import pytest

from minidns.client import DNSClient, main


def _start_server(reply):
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    listener.listen(5)
    received = []

    def serve():
        while True:
            try:
                conn, _ = listener.accept()
            except OSError:
                return
            with conn:
                received.append(conn.recv(1024).decode())
                if reply:
                    conn.sendall(reply)

    threading.Thread(target=serve, daemon=True).start()
    return listener, received


@pytest.fixture
def proxy():
    listener, received = _start_server(b"10.0.0.1")
    yield listener.getsockname()[1], received
    listener.close()


@pytest.fixture
def silent_proxy():
    listener, received = _start_server(b"")
    yield listener.getsockname()[1], received
    listener.close()


def _closed_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_query_sends_choice_and_query(proxy):
    port, received = proxy
    assert DNSClient("127.0.0.1", port).query(1, "example.com") == "10.0.0.1"
    assert received == ["1:example.com"]


def test_query_without_reply_returns_none(silent_proxy):
    port, _ = silent_proxy
    assert DNSClient("127.0.0.1", port).query(2, "10.0.0.1") is None


def test_query_invalid_address_raises():
    with pytest.raises(ConnectionError):
        DNSClient("not-an-ip", 1).query(1, "example.com")


def test_query_refused_raises():
    with pytest.raises(ConnectionError):
        DNSClient("127.0.0.1", _closed_port()).query(1, "example.com")


def test_run_prints_response(proxy):
    port, received = proxy
    out = io.StringIO()
    DNSClient("127.0.0.1", port).run(io.StringIO("1\nexample.com\n3\n"), out)
    assert "Response: 10.0.0.1\n" in out.getvalue()
    assert received == ["1:example.com"]


def test_run_exit_immediately_sends_nothing(proxy):
    port, received = proxy
    out = io.StringIO()
    DNSClient("127.0.0.1", port).run(io.StringIO("3\n"), out)
    assert "Enter query" not in out.getvalue()
    assert received == []


def test_run_reports_no_response(silent_proxy):
    port, _ = silent_proxy
    out = io.StringIO()
    DNSClient("127.0.0.1", port).run(io.StringIO("2 10.0.0.1 3"), out)
    assert "No response received\n" in out.getvalue()


def test_run_reports_connection_failure():
    out = io.StringIO()
    DNSClient("127.0.0.1", _closed_port()).run(io.StringIO("1 example.com 3"), out)
    assert "Failed to connect to proxy server\n" in out.getvalue()


def test_run_stops_at_end_of_input(proxy):
    port, received = proxy
    out = io.StringIO()
    DNSClient("127.0.0.1", port).run(io.StringIO("1"), out)
    assert out.getvalue().endswith("Enter query: ")
    assert received == []


@pytest.mark.parametrize("argv", [[], ["127.0.0.1"], ["127.0.0.1", "x"]])
def test_main_usage_errors(argv, capsys):
    assert main(argv) == 1
    assert "Usage" in capsys.readouterr().out
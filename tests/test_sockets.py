import socket

import pytest

from mdk.sockets import Protocol, Socket, SocketClosedError, SocketTimeoutError

LOCALHOST = "127.0.0.1"


@pytest.fixture
def tcp_pair():
    server = Socket()
    server.init(Protocol.TCP)
    server.start_server(0, LOCALHOST)
    port = server.local_address()[1]
    client = Socket()
    client.init(Protocol.TCP)
    client.connect(LOCALHOST, port, 5)
    accepted = server.accept()
    try:
        yield server, client, accepted, port
    finally:
        for s in (client, accepted, server):
            if s is not None:
                s.close()


@pytest.mark.parametrize(
    "protocol, expected", [(Protocol.TCP, socket.SOCK_STREAM), (Protocol.UDP, socket.SOCK_DGRAM)]
)
def test_init_creates_socket_of_protocol_type(protocol, expected):
    with Socket() as s:
        s.init(protocol)
        assert s._require().type == expected


def test_open_close_state():
    s = Socket()
    assert s.is_closed()
    assert s.fileno() == -1
    s.init(Protocol.TCP)
    assert not s.is_closed()
    assert s.fileno() >= 0
    s.close()
    assert s.is_closed()
    assert s.fileno() == -1


def test_connect_records_addresses(tcp_pair):
    server, client, accepted, port = tcp_pair
    assert port > 0
    assert client.peer_address() == (LOCALHOST, port)
    assert accepted.peer_address() == client.local_address()
    assert accepted.local_address() == (LOCALHOST, port)


def test_send_receive_round_trip(tcp_pair):
    _server, client, accepted, _port = tcp_pair
    assert client.send(b"hello") == 5
    assert accepted.receive(5, seconds=5) == b"hello"


def test_peek_leaves_data(tcp_pair):
    _server, client, accepted, _port = tcp_pair
    client.send(b"abc")
    assert accepted.receive(3, peek=True, seconds=5) == b"abc"
    assert accepted.receive(3) == b"abc"


def test_receive_timeout(tcp_pair):
    _server, _client, accepted, _port = tcp_pair
    with pytest.raises(SocketTimeoutError):
        accepted.receive(4, seconds=0, microseconds=50_000)


def test_receive_after_peer_close(tcp_pair):
    _server, client, accepted, _port = tcp_pair
    client.close()
    with pytest.raises(SocketClosedError):
        accepted.receive(4, seconds=5)


def test_non_blocking_receive_returns_empty(tcp_pair):
    _server, _client, accepted, _port = tcp_pair
    accepted.set_blocking(False)
    assert accepted.receive(4) == b""


def test_non_blocking_accept_without_pending(tcp_pair):
    server, _client, _accepted, _port = tcp_pair
    server.set_blocking(False)
    assert server.accept() is None


def test_start_server_rejects_bad_ip():
    with Socket() as s:
        s.init(Protocol.TCP)
        with pytest.raises(ValueError):
            s.start_server(0, "not.an.ip.address")


def test_connect_requires_socket():
    with pytest.raises(OSError):
        Socket().connect(LOCALHOST, 1, 1)


def test_udp_round_trip():
    raw = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    raw.bind((LOCALHOST, 0))
    receiver = Socket(raw, Protocol.UDP)
    sender = Socket()
    sender.init(Protocol.UDP)
    try:
        port = receiver.local_address()[1]
        assert sender.send_to(LOCALHOST, port, b"ping") == 4
        data, (ip, from_port) = receiver.receive_from(16, seconds=5)
        assert data == b"ping"
        assert ip == LOCALHOST
        assert from_port == sender._require().getsockname()[1]
    finally:
        sender.close()
        receiver.close()


def test_receive_from_zero_size():
    with Socket() as s:
        s.init(Protocol.UDP)
        assert s.receive_from(0) == (b"", ("", -1))


def test_detach_keeps_descriptor_open():
    s = Socket()
    s.init(Protocol.TCP)
    expected = s.fileno()
    fd = s.detach()
    assert fd == expected
    assert s.is_closed()
    assert s.fileno() == -1
    again = socket.socket(fileno=fd)
    assert again.type == socket.SOCK_STREAM
    again.close()


def test_attach_marks_open():
    raw = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s = Socket()
    s.attach(raw)
    assert not s.is_closed()
    assert s.fileno() == raw.fileno()
    s.close()
    assert raw.fileno() == -1


def test_set_options():
    with Socket() as s:
        s.init(Protocol.TCP)
        s.set_no_delay(True)
        raw = s._require()
        assert raw.getsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY) != 0
        s.set_sock_opt(socket.SO_REUSEADDR, 1)
        assert raw.getsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR) != 0
        s.set_no_delay(False)
        assert raw.getsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY) == 0


def test_set_options_on_unopened_socket_raise():
    with pytest.raises(OSError):
        Socket().set_send_buf_size(4096)
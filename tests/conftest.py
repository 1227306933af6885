"""Shared fixtures: an in-memory stand-in for TCP sockets."""

import pytest


class FakeSocket:
    """Socket double that accepts at most max_send bytes per send() call."""

    def __init__(self, response=b"", max_send=None, connect_error=None,
                 send_error=None, recv_error=None):
        self.response = response
        self.max_send = max_send
        self.connect_error = connect_error
        self.send_error = send_error
        self.recv_error = recv_error
        self.sent = bytearray()
        self.send_calls = 0
        self.connected_to = None
        self.closed = False

    def connect(self, address):
        if self.connect_error:
            raise self.connect_error
        self.connected_to = address

    def send(self, data):
        if self.send_error:
            raise self.send_error
        self.send_calls += 1
        chunk = bytes(data[:self.max_send]) if self.max_send else bytes(data)
        self.sent.extend(chunk)
        return len(chunk)

    def recv(self, size):
        if self.recv_error:
            raise self.recv_error
        chunk, self.response = self.response[:size], self.response[size:]
        return chunk

    def close(self):
        self.closed = True


class FakeSocketFactory:
    """Hands out one prepared FakeSocket per call, in order."""

    def __init__(self, *sockets):
        self.sockets = list(sockets)
        self.created = []
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        sock = self.sockets.pop(0)
        self.created.append(sock)
        return sock


@pytest.fixture
def fake_socket():
    return FakeSocket


@pytest.fixture
def socket_factory():
    return FakeSocketFactory

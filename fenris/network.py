"""Length-prefixed message transfer over stream sockets."""

from __future__ import annotations

import socket
import struct
import time
from enum import Enum

__all__ = [
    "DELAY",
    "NetworkResult",
    "NetworkError",
    "network_result_to_string",
    "send_size",
    "receive_size",
    "send_data",
    "receive_data",
    "send_prefixed_data",
    "receive_prefixed_data",
]

# Milliseconds to wait before retrying a socket that would block.
DELAY = 100

_SIZE = struct.Struct("!I")
_MAX_SIZE = 0xFFFFFFFF


class NetworkResult(Enum):
    """Kind of network failure."""

    SUCCESS = 0
    DISCONNECTED = 1
    CONNECTION_REFUSED = 2
    SOCKET_ERROR = 3
    SEND_ERROR = 4
    RECEIVE_ERROR = 5
    ALLOCATION_ERROR = 6


_DESCRIPTIONS = {
    NetworkResult.SUCCESS: "success",
    NetworkResult.DISCONNECTED: "peer disconnected",
    NetworkResult.CONNECTION_REFUSED: "connection refused by peer",
    NetworkResult.SOCKET_ERROR: "socket error",
    NetworkResult.SEND_ERROR: "error during send operation",
    NetworkResult.RECEIVE_ERROR: "error during receive operation",
    NetworkResult.ALLOCATION_ERROR: "memory allocation error",
}


def network_result_to_string(result: NetworkResult) -> str:
    """Return a human-readable description of a network result."""
    return _DESCRIPTIONS.get(result, "unrecognized network error")


class NetworkError(Exception):
    """Raised when sending or receiving fails."""

    def __init__(self, result: NetworkResult) -> None:
        super().__init__(network_result_to_string(result))
        self.result = result


def _wait() -> None:
    time.sleep(DELAY / 1000)


def _send_all(sock: socket.socket, payload: bytes, non_blocking_mode: bool) -> None:
    view = memoryview(payload)
    while view:
        try:
            sent = sock.send(view)
        except OSError as exc:
            if non_blocking_mode and isinstance(exc, BlockingIOError):
                _wait()
                continue
            raise NetworkError(NetworkResult.SEND_ERROR) from exc
        if sent <= 0:
            raise NetworkError(NetworkResult.SEND_ERROR)
        view = view[sent:]


def _receive_exact(sock: socket.socket, size: int, non_blocking_mode: bool) -> bytes:
    try:
        buffer = bytearray(size)
    except MemoryError as exc:
        raise NetworkError(NetworkResult.ALLOCATION_ERROR) from exc

    view = memoryview(buffer)
    received = 0
    while received < size:
        try:
            count = sock.recv_into(view[received:])
        except OSError as exc:
            if non_blocking_mode and isinstance(exc, BlockingIOError):
                _wait()
                continue
            raise NetworkError(NetworkResult.RECEIVE_ERROR) from exc
        if count == 0:
            raise NetworkError(NetworkResult.DISCONNECTED)
        received += count
    return bytes(buffer)


def send_size(sock: socket.socket, size: int, non_blocking_mode: bool = False) -> None:
    """Send ``size`` as a 4-byte big-endian unsigned integer."""
    if not 0 <= size <= _MAX_SIZE:
        raise ValueError("size must fit in 32 unsigned bits")
    _send_all(sock, _SIZE.pack(size), non_blocking_mode)


def receive_size(sock: socket.socket, non_blocking_mode: bool = False) -> int:
    """Receive a 4-byte big-endian unsigned integer."""
    (size,) = _SIZE.unpack(_receive_exact(sock, _SIZE.size, non_blocking_mode))
    return size


def send_data(
    sock: socket.socket,
    data: bytes,
    size: int | None = None,
    non_blocking_mode: bool = False,
) -> None:
    """Send the first ``size`` bytes of ``data`` (all of it when ``size`` is None)."""
    payload = bytes(data)
    if size is None:
        size = len(payload)
    if not 0 <= size <= len(payload):
        raise ValueError("size must be between 0 and the length of data")
    _send_all(sock, payload[:size], non_blocking_mode)


def receive_data(sock: socket.socket, size: int, non_blocking_mode: bool = False) -> bytes:
    """Receive exactly ``size`` bytes."""
    if size < 0:
        raise ValueError("size must not be negative")
    return _receive_exact(sock, size, non_blocking_mode)


def send_prefixed_data(
    sock: socket.socket, data: bytes, non_blocking_mode: bool = False
) -> None:
    """Send ``data`` preceded by its length."""
    payload = bytes(data)
    send_size(sock, len(payload), non_blocking_mode)
    send_data(sock, payload, len(payload), non_blocking_mode)


def receive_prefixed_data(sock: socket.socket, non_blocking_mode: bool = False) -> bytes:
    """Receive a message sent by send_prefixed_data."""
    size = receive_size(sock, non_blocking_mode)
    return receive_data(sock, size, non_blocking_mode)
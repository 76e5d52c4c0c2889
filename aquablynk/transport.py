"""Transports carrying protocol bytes over a network client or a byte stream."""

from __future__ import annotations

import logging
from typing import Any, Optional

from aquablynk.clock import Clock

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 6000

_ALTERNATE_PORTS = {80: 8080, 8080: 80}


class ClientTransport:
    """Transport over a connection-oriented client.

    The client must provide ``connect(host, port)``, ``stop()``,
    ``read_bytes(n)``, ``write(data)``, ``connected()`` and ``available()``.
    """

    def __init__(self, client: Any) -> None:
        self.client = client
        self.host: Optional[Any] = None
        self.port = 0
        self._is_conn = False

    def begin(self, host: Any, port: int) -> None:
        """Set the server: a domain name or an IP address, and a port."""
        self.host = host
        self.port = port

    def _connect_to_port(self, port: int) -> bool:
        log.info("Connecting to %s:%d", self.host, port)
        return self.client.connect(self.host, port) == 1

    def connect(self) -> bool:
        """Connect, trying port 8080 for 80 (and the reverse) on failure."""
        if self.host is None:
            raise RuntimeError("begin() must be called before connect()")
        self._is_conn = self._connect_to_port(self.port)
        if not self._is_conn and self.port in _ALTERNATE_PORTS:
            self._is_conn = self._connect_to_port(_ALTERNATE_PORTS[self.port])
        return self._is_conn

    def disconnect(self) -> None:
        self._is_conn = False
        if self.client is not None:
            self.client.stop()

    def read(self, n: int) -> bytes:
        return bytes(self.client.read_bytes(n))

    def write(self, data: bytes) -> int:
        return self.client.write(bytes(data))

    def connected(self) -> bool:
        return self._is_conn and bool(self.client.connected())

    def available(self) -> int:
        return self.client.available()


class StreamTransport:
    """Transport over a byte stream such as a serial port.

    The stream must provide ``read()`` returning one byte as an int (None or
    a negative value when there is nothing), ``write(data)``, ``flush()`` and
    ``available()``.
    """

    def __init__(self, clock: Any = None, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> None:
        self._clock = clock if clock is not None else Clock()
        self.timeout_ms = timeout_ms
        self.stream: Optional[Any] = None
        self._conn = False

    def begin(self, stream: Any) -> None:
        self.stream = stream

    def _require_stream(self) -> Any:
        if self.stream is None:
            raise RuntimeError("begin() must be called first")
        return self.stream

    def connect(self) -> bool:
        stream = self._require_stream()
        log.info("Connecting...")
        stream.flush()
        self._conn = True
        return True

    def disconnect(self) -> None:
        self._conn = False

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes, giving up after the timeout."""
        stream = self._require_stream()
        buf = bytearray()
        start = self._clock.millis()
        while len(buf) < n and self._clock.millis() - start < self.timeout_ms:
            c = stream.read()
            if c is None or c < 0:
                self._clock.delay(1)
                continue
            buf.append(c & 0xFF)
        return bytes(buf)

    def write(self, data: bytes) -> int:
        payload = bytes(data)
        self._require_stream().write(payload)
        return len(payload)

    def connected(self) -> bool:
        return self._conn

    def available(self) -> int:
        return self._require_stream().available()
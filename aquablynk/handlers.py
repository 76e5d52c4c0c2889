"""Virtual pin read/write handlers and connection callbacks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

log = logging.getLogger(__name__)

DEFAULT_PIN_COUNT = 32
EXTENDED_PIN_COUNT = 128

ReadHandler = Callable[["Request"], Any]
WriteHandler = Callable[["Request", Any], Any]


class InternalPin(Enum):
    """Virtual pins reserved for internal use by the protocol."""

    ACON = "ACON"
    ADIS = "ADIS"
    RTC = "RTC"
    UTC = "UTC"
    OTA = "OTA"
    META = "META"
    VFS = "VFS"
    DBG = "DBG"


Pin = Union[int, InternalPin]


@dataclass(frozen=True)
class Request:
    """A read or write request addressed to one virtual pin."""

    pin: Pin


def _no_read_handler(request: Request) -> None:
    log.info("No handler for reading from pin %s", _pin_label(request.pin))


def _no_write_handler(request: Request, param: Any) -> None:
    log.info("No handler for writing to pin %s", _pin_label(request.pin))


def _pin_label(pin: Pin) -> str:
    return pin.value if isinstance(pin, InternalPin) else str(pin)


def _noop() -> None:
    pass


class HandlerRegistry:
    """Maps virtual pins to the functions that serve reads and writes.

    Regular pins are numbered from 0 to ``pin_count - 1``; internal pins are
    addressed by :class:`InternalPin`. A handler registered for pin ``None``
    serves every pin in range that has no handler of its own.
    """

    def __init__(self, pin_count: int = DEFAULT_PIN_COUNT) -> None:
        if pin_count < 1:
            raise ValueError("pin_count must be at least 1")
        self.pin_count = pin_count
        self._read: Dict[Optional[Pin], ReadHandler] = {}
        self._write: Dict[Optional[Pin], WriteHandler] = {}
        self._connected: Callable[[], Any] = _noop
        self._disconnected: Callable[[], Any] = _noop

    def _check_pin(self, pin: Optional[Pin]) -> None:
        if pin is None or isinstance(pin, InternalPin):
            return
        if not isinstance(pin, int) or isinstance(pin, bool):
            raise TypeError("pin must be an int, an InternalPin or None")
        if not 0 <= pin < self.pin_count:
            raise ValueError(f"pin {pin} is out of range")

    def _in_range(self, pin: Pin) -> bool:
        if isinstance(pin, InternalPin):
            return True
        return isinstance(pin, int) and 0 <= pin < self.pin_count

    def on_read(self, pin: Optional[Pin]) -> Callable[[ReadHandler], ReadHandler]:
        """Decorator registering a read handler for ``pin``."""
        self._check_pin(pin)

        def register(func: ReadHandler) -> ReadHandler:
            self._read[pin] = func
            return func

        return register

    def on_write(self, pin: Optional[Pin]) -> Callable[[WriteHandler], WriteHandler]:
        """Decorator registering a write handler for ``pin``."""
        self._check_pin(pin)

        def register(func: WriteHandler) -> WriteHandler:
            self._write[pin] = func
            return func

        return register

    def on_connected(self, callback: Callable[[], Any]) -> Callable[[], Any]:
        self._connected = callback
        return callback

    def on_disconnected(self, callback: Callable[[], Any]) -> Callable[[], Any]:
        self._disconnected = callback
        return callback

    def get_read_handler(self, pin: Pin) -> Optional[ReadHandler]:
        """Handler serving reads of ``pin``, or None if the pin is out of range."""
        if not self._in_range(pin):
            return None
        if pin in self._read:
            return self._read[pin]
        if isinstance(pin, int) and None in self._read:
            return self._read[None]
        return _no_read_handler

    def get_write_handler(self, pin: Pin) -> Optional[WriteHandler]:
        """Handler serving writes to ``pin``, or None if the pin is out of range."""
        if not self._in_range(pin):
            return None
        if pin in self._write:
            return self._write[pin]
        if isinstance(pin, int) and None in self._write:
            return self._write[None]
        return _no_write_handler

    def call_read(self, request: Request) -> Any:
        handler = self.get_read_handler(request.pin)
        if handler is None:
            raise ValueError(f"pin {request.pin} is out of range")
        return handler(request)

    def call_write(self, request: Request, param: Any) -> Any:
        handler = self.get_write_handler(request.pin)
        if handler is None:
            raise ValueError(f"pin {request.pin} is out of range")
        return handler(request, param)

    def fire_connected(self) -> Any:
        return self._connected()

    def fire_disconnected(self) -> Any:
        return self._disconnected()
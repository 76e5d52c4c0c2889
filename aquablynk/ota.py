"""Firmware update reception: chunk verification, storage and apply."""

from __future__ import annotations

import logging
import zlib
from enum import Enum, auto
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)

CHUNK_SIZE = 1024


def crc32(data: bytes, previous: int = 0) -> int:
    """CRC-32 (reflected polynomial 0xEDB88320), continuing from ``previous``."""
    return zlib.crc32(bytes(data), previous) & 0xFFFFFFFF


class OtaState(Enum):
    IDLE = auto()
    PREFETCH = auto()
    START = auto()
    IN_PROGRESS = auto()
    APPLY = auto()


class OtaError(Exception):
    """An update could not be started, stored or verified."""


class NullStorage:
    """Storage for devices that cannot take an update: it has no room."""

    is_open: bool = False

    def open(self, size: int) -> bool:
        self.is_open = 0 < size <= self.max_size()
        return self.is_open

    def write(self, byte: int) -> int:
        return 1 if self.is_open else 0

    def close(self) -> None:
        self.is_open = False

    def clear(self) -> None:
        self.close()

    def apply(self) -> None:
        self.close()

    def max_size(self) -> int:
        return 0


class OtaUpdater:
    """Receives an update into ``storage`` and applies it once verified."""

    def __init__(self, storage: Any) -> None:
        self.storage = storage
        self.size = 0
        self.offset = 0
        self.crc = 0
        self.progress = 0
        self.state = OtaState.IDLE

    def update_available(
        self,
        filename: str,
        filesize: int,
        fw_type: str,
        fw_ver: str,
        fw_build: str,
    ) -> None:
        """Prepare storage for an announced update of ``filesize`` bytes."""
        max_size = self.storage.max_size()
        if not max_size:
            raise OtaError("OTA is not supported")
        log.info(
            "OTA update: %s size: %d (%d%%), type: %s, version: %s, build: %s",
            filename,
            filesize,
            filesize * 100 // max_size,
            fw_type,
            fw_ver,
            fw_build,
        )
        if filesize <= 0 or filesize > max_size:
            raise OtaError("file size is invalid")
        if not self.storage.open(filesize):
            raise OtaError("starting OTA failed")
        log.info("Starting OTA")
        self.size = filesize
        self.offset = 0
        self.crc = 0
        self.progress = 0
        self.state = OtaState.START

    def write_chunk(self, offset: int, chunk: bytes, chunk_crc: int) -> None:
        """Verify one chunk against its CRC and position, then store it."""
        chunk = bytes(chunk)
        if crc32(chunk) != chunk_crc:
            raise OtaError("chunk CRC mismatch")
        if offset != self.offset:
            raise OtaError("offset mismatch")
        for byte in chunk:
            if not self.storage.write(byte):
                raise OtaError("storage write failed")
        self.crc = crc32(chunk, self.crc)
        self.offset += len(chunk)

        progress = self.offset * 100 // self.size if self.size else 100
        if progress - self.progress >= 5 or progress == 100:
            self.progress = progress
            log.info("Updating MCU... %d%%", progress)

    def finish(self, expected_crc32: Optional[int]) -> None:
        """Check the whole image and mark it ready to apply."""
        if self.offset != self.size:
            raise OtaError("file size mismatch")
        if expected_crc32 is None:
            raise OtaError("cannot get CRC32")
        if expected_crc32 != self.crc:
            raise OtaError(
                f"CRC32 check failed (expected: {expected_crc32:08x}, "
                f"actual: {self.crc:08x})"
            )
        log.info("CRC32 verified: %08x", self.crc)
        self.storage.close()
        self.state = OtaState.APPLY

    def cancel(self) -> None:
        log.info("OTA canceled")
        self.storage.close()

    def run(self, start_update: Callable[[int], Any]) -> None:
        """Advance the update: request data when starting, apply when verified."""
        if self.state is OtaState.PREFETCH:
            self.state = OtaState.START
        elif self.state is OtaState.START:
            start_update(CHUNK_SIZE)
            self.state = OtaState.IN_PROGRESS
        elif self.state is OtaState.APPLY:
            log.info("Applying the update")
            self.state = OtaState.IDLE
            self.storage.apply()
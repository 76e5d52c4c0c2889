"""Network helpers: MAC address derivation and a minimal NTP client."""

from __future__ import annotations

import logging
import socket
from typing import Optional, Sequence

log = logging.getLogger(__name__)

NTP_PORT = 123
NTP_PACKET_SIZE = 48
SEVENTY_YEARS = 2208988800

_BASE_MAC = (0xFE, 0xED, 0xBA, 0xFE, 0xFE, 0xED)


def select_mac_address(token: str, mac: Optional[Sequence[int]] = None) -> bytes:
    """Return ``mac`` if given, otherwise a MAC address derived from ``token``.

    The token's characters are XOR-ed in turn into bytes 1 to 5 of a fixed
    base address, so the first byte never changes.
    """
    if mac is not None:
        result = bytes(mac)
        if len(result) != 6:
            raise ValueError("a MAC address has 6 bytes")
        return result

    address = bytearray(_BASE_MAC)
    index = 1
    for byte in token.encode("latin-1"):
        address[index] ^= byte
        index = index + 1 if index < 5 else 1
    return bytes(address)


def build_ntp_request() -> bytes:
    """A 48-byte NTP client request packet."""
    packet = bytearray(NTP_PACKET_SIZE)
    packet[0] = 0b11100011  # LI, version, mode
    packet[1] = 0  # stratum
    packet[2] = 6  # polling interval
    packet[3] = 0xEC  # peer clock precision
    packet[12] = 49
    packet[13] = 0x4E
    packet[14] = 49
    packet[15] = 52
    return bytes(packet)


def parse_ntp_time(packet: bytes) -> int:
    """Unix time from the transmit timestamp of an NTP reply."""
    if len(packet) < 44:
        raise ValueError("NTP packet is too short")
    secs_since_1900 = int.from_bytes(packet[40:44], "big")
    return (secs_since_1900 - SEVENTY_YEARS) & 0xFFFFFFFF


def ntp_get_time(
    server: str, port: int = NTP_PORT, retries: int = 10, timeout: float = 1.0
) -> int:
    """Ask an NTP server for the time and return it as Unix seconds.

    Each attempt waits ``timeout`` seconds for a reply; TimeoutError is raised
    when all ``retries`` attempts go unanswered.
    """
    if retries < 1:
        raise ValueError("retries must be at least 1")
    request = build_ntp_request()
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(timeout)
        for _ in range(retries):
            sock.sendto(request, (server, port))
            try:
                data, _addr = sock.recvfrom(NTP_PACKET_SIZE)
            except TimeoutError:
                log.info("Retry NTP")
                continue
            epoch = parse_ntp_time(data)
            log.info("Unix time = %d", epoch)
            return epoch
    log.info("NTP failed")
    raise TimeoutError("NTP failed")
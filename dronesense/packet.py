"""The sensor packet sent from the drone to the ground station."""

from __future__ import annotations

import logging
import math
import struct
from dataclasses import astuple, dataclass

DEFAULT_POSITION = (5.0, 5.0)
MISSING_READING = -1.0

_LAYOUT = struct.Struct("<7f3H2f")
PACKET_SIZE = _LAYOUT.size

log = logging.getLogger(__name__)


class PacketSizeError(ValueError):
    """A payload whose length is not that of a sensor packet."""


@dataclass(frozen=True)
class SensorData:
    """All readings of one sample, with the drone position."""

    temp: float
    humid: float
    ch4: float
    co2: float
    tvoc: float
    co: float
    nox: float
    pm_1_0: int
    pm_2_5: int
    pm_10_0: int
    lat: float
    lon: float

    def pack(self) -> bytes:
        """The packed little-endian wire form of the packet."""
        try:
            return _LAYOUT.pack(*astuple(self))
        except struct.error as exc:
            raise ValueError(f"cannot pack sensor data: {exc}") from exc


def unpack_sensor_data(data: bytes) -> SensorData:
    """Decode a packet received over the air."""
    payload = bytes(data)
    if len(payload) != PACKET_SIZE:
        raise PacketSizeError(f"packet must be {PACKET_SIZE} bytes, got {len(payload)}")
    return SensorData(*_LAYOUT.unpack(payload))


def clean_reading(value: float) -> float:
    """The reading itself, or -1 when the sensor gave no number."""
    return MISSING_READING if math.isnan(value) else value


def resolve_position(latitude: float, longitude: float) -> tuple[float, float]:
    """The GPS position, or the default position when either part is missing."""
    if math.isnan(latitude) or math.isnan(longitude):
        log.warning("GPS invalid or not received. Defaulting to %s, %s", *DEFAULT_POSITION)
        return DEFAULT_POSITION
    return latitude, longitude


def format_mac(mac: bytes) -> str:
    """A 6-byte MAC address as colon-separated upper-case hex."""
    octets = bytes(mac)
    if len(octets) != 6:
        raise ValueError(f"MAC address must be 6 bytes, got {len(octets)}")
    return ":".join(f"{octet:02X}" for octet in octets)


def format_report(mac: bytes, data: SensorData) -> str:
    """The ground station's printout of one received packet."""
    return (
        f"[ESP-NOW] Data received from {format_mac(mac)}:\n"
        f"Temp: {data.temp:.2f}, Humid: {data.humid:.2f}, CH4: {data.ch4:.2f}, "
        f"CO2: {data.co2:.2f}, TVOC: {data.tvoc:.2f}, CO: {data.co:.2f}, NOx: {data.nox:.2f}\n"
        f"PM1.0: {data.pm_1_0}, PM2.5: {data.pm_2_5}, PM10.0: {data.pm_10_0}\n"
        f"Lat: {data.lat:.6f}, Lon: {data.lon:.6f}"
    )


def handle_packet(mac: bytes, payload: bytes) -> str | None:
    """Report for a received payload; payloads of the wrong size are ignored."""
    try:
        data = unpack_sensor_data(payload)
    except PacketSizeError:
        return None
    return format_report(mac, data)
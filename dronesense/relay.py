"""Relaying the drone's GPS fix and health to the ESP32 subscribers."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Protocol

PLACEHOLDER_COORDINATE = 10.0

log = logging.getLogger(__name__)


class Publisher(Protocol):
    subscriber_count: int

    def publish(self, message: Any) -> None: ...


@dataclass(frozen=True)
class GpsFix:
    """A GPS fix as reported by the flight controller."""

    latitude: float
    longitude: float
    altitude: float
    status: int = 0


def is_drone_fix_valid(fix: GpsFix) -> bool:
    """True if the fix has a non-negative status and both coordinates."""
    return fix.status >= 0 and not math.isnan(fix.latitude) and not math.isnan(fix.longitude)


class GpsRelay:
    """Forwards GPS messages while the ESP32 is listening on both topics."""

    def __init__(self, gps_publisher: Publisher, health_publisher: Publisher) -> None:
        self.gps_publisher = gps_publisher
        self.health_publisher = health_publisher
        self.esp_connected = True

    def esp_connected_now(self) -> bool:
        """True if both topics have at least one subscriber."""
        return (
            self.gps_publisher.subscriber_count > 0
            and self.health_publisher.subscriber_count > 0
        )

    def _relay(self, publisher: Publisher, message: Any, what: str) -> bool:
        if self.esp_connected_now():
            publisher.publish(message)
            self.esp_connected = True
            return True
        if self.esp_connected:
            log.warning("ESP32 disconnected — %s not sent.", what)
            self.esp_connected = False
        return False

    def on_gps(self, fix: GpsFix) -> GpsFix:
        """Clean up and relay a fix; returns the fix as relayed."""
        clean = fix
        if not is_drone_fix_valid(fix):
            clean = replace(
                fix,
                latitude=PLACEHOLDER_COORDINATE,
                longitude=PLACEHOLDER_COORDINATE,
                altitude=PLACEHOLDER_COORDINATE,
            )
            log.warning("Drone GPS not valid. Sending placeholder position.")
        self._relay(self.gps_publisher, clean, "GPS data")
        log.info("Lat: %f, Lon: %f, Alt: %f", clean.latitude, clean.longitude, clean.altitude)
        return clean

    def on_health(self, health: int) -> bool:
        """Relay a GPS health value; returns whether it was published."""
        sent = self._relay(self.health_publisher, health, "GPS health")
        log.info("GPS Health: %d", health)
        return sent
"""Reading CO2 concentration from a K30 sensor over I2C."""

from __future__ import annotations

import time
from enum import IntEnum
from typing import Protocol

K30_ADDRESS = 0x68
READ_CO2_COMMAND = bytes((0x22, 0x00, 0x08, 0x2A))
RESPONSE_LENGTH = 4
MEASURE_DELAY = 0.03


class K30Fault(IntEnum):
    CHECKSUM_MISMATCH = 1
    INCOMPLETE_READ = 2
    READ_FAILED = 3


class K30Error(Exception):
    """A failed CO2 read; ``fault`` says how it failed."""

    def __init__(self, fault: K30Fault, message: str) -> None:
        super().__init__(message)
        self.fault = fault


class I2CBus(Protocol):
    def write(self, address: int, data: bytes) -> None: ...

    def read(self, address: int, length: int) -> bytes: ...


def decode_response(data: bytes) -> int:
    """CO2 level in ppm from a 4-byte K30 response."""
    response = bytes(data[:RESPONSE_LENGTH])
    if len(response) < RESPONSE_LENGTH:
        raise K30Error(
            K30Fault.INCOMPLETE_READ,
            f"expected {RESPONSE_LENGTH} bytes, got {len(response)}",
        )
    checksum = sum(response[:3]) & 0xFF
    if checksum != response[3]:
        raise K30Error(
            K30Fault.CHECKSUM_MISMATCH,
            f"checksum {checksum:#04x} does not match {response[3]:#04x}",
        )
    return (response[1] << 8) + response[2]


class K30:
    """A K30 CO2 sensor attached to an I2C bus."""

    def __init__(self, bus: I2CBus, address: int = K30_ADDRESS) -> None:
        self.bus = bus
        self.address = address

    def read_co2(self) -> int:
        """Ask the sensor for a measurement and return CO2 in ppm."""
        self.bus.write(self.address, READ_CO2_COMMAND)
        time.sleep(MEASURE_DELAY)
        data = bytes(self.bus.read(self.address, RESPONSE_LENGTH))
        if len(data) != RESPONSE_LENGTH:
            raise K30Error(
                K30Fault.READ_FAILED,
                f"bus returned {len(data)} bytes instead of {RESPONSE_LENGTH}",
            )
        return decode_response(data)
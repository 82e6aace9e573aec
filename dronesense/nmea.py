"""Pick GPRMC sentences out of a GPS serial stream, check them and forward them."""

from __future__ import annotations

import argparse
import re
import sys
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol

import serial

IN_PORT = "/dev/ttyUSB0"
OUT_PORT = "/dev/ttyAMA0"
BAUD = 115200
MAX_LINE = 300
RETRY_INTERVAL = 2.0

_GPRMC_PATTERN = re.compile(r"\$GPRMC,[^*]*\*[0-9A-Fa-f]{2}")
_HEX_PREFIX = re.compile(r"(?:0[xX])?([0-9A-Fa-f]*)")


class ChecksumError(ValueError):
    """An NMEA sentence whose checksum does not match its contents."""


@dataclass(frozen=True)
class GprmcFix:
    """Time and position from an active GPRMC sentence, in decimal degrees."""

    time: str
    latitude: float
    longitude: float


class _Sink(Protocol):
    def write(self, data: bytes) -> object: ...


def parse_coord(dm: str, hemi: str) -> float:
    """Convert a ``dddmm.mmmm`` coordinate and hemisphere to signed degrees."""
    if not dm:
        return 0.0
    value = float(dm)
    degrees = int(value / 100)
    minutes = value - degrees * 100
    decimal = degrees + minutes / 60.0
    return -decimal if hemi in ("S", "W") else decimal


def has_valid_checksum(sentence: str) -> bool:
    """True if the XOR of the characters between ``$`` and ``*`` matches the hex suffix."""
    star = sentence.find("*")
    if star == -1 or star + 2 >= len(sentence):
        return False
    digits = _HEX_PREFIX.match(sentence[star + 1 : star + 3].lstrip())
    expected = int(digits.group(1), 16) & 0xFF if digits and digits.group(1) else 0
    actual = 0
    for ch in sentence[1:star]:
        actual ^= ord(ch) & 0xFF
    return expected == actual


def find_gprmc(line: str) -> str | None:
    """The first GPRMC sentence with a checksum suffix inside ``line``, if any."""
    match = _GPRMC_PATTERN.search(line)
    return match.group(0) if match else None


def _fields(sentence: str) -> list[str]:
    fields = sentence.split(",")
    if fields[-1] == "":
        fields.pop()
    return fields


def _active_fields(sentence: str) -> list[str] | None:
    fields = _fields(sentence)
    if len(fields) > 6 and fields[2] == "A":
        return fields
    return None


def _fix_from_fields(fields: list[str]) -> GprmcFix | None:
    stamp = fields[1]
    if len(stamp) < 6:
        return None
    return GprmcFix(
        time=f"{stamp[0:2]}:{stamp[2:4]}:{stamp[4:6]}",
        latitude=parse_coord(fields[3], fields[4]),
        longitude=parse_coord(fields[5], fields[6]),
    )


def parse_gprmc(sentence: str) -> GprmcFix | None:
    """Decode a GPRMC sentence; None when it carries no usable fix."""
    if not has_valid_checksum(sentence):
        raise ChecksumError(f"checksum invalid: {sentence}")
    fields = _active_fields(sentence)
    if fields is None:
        return None
    return _fix_from_fields(fields)


def describe(sentence: str) -> str | None:
    """A one-line status report for a GPRMC sentence, or None when there is nothing to say."""
    if not has_valid_checksum(sentence):
        return f"❌ Checksum invalid: {sentence}"
    fields = _active_fields(sentence)
    if fields is None:
        return f"⚠️  GPRMC (no fix): {sentence}"
    fix = _fix_from_fields(fields)
    if fix is None:
        return None
    return f"✅ GPRMC {fix.time} | Lat: {fix.latitude:g} | Lon: {fix.longitude:g}"


def iter_lines(chunks: Iterable[bytes]) -> Iterator[str]:
    """Printable-ASCII lines from a byte stream, dropping lines over the length limit."""
    buffer: list[str] = []
    for chunk in chunks:
        for byte in chunk:
            if 0x20 <= byte <= 0x7E:
                buffer.append(chr(byte))
            elif byte in (0x0A, 0x0D):
                if buffer:
                    yield "".join(buffer)
                buffer.clear()
            if len(buffer) > MAX_LINE:
                buffer.clear()


def forward(chunks: Iterable[bytes], sink: _Sink | None = None) -> Iterator[str]:
    """Send each GPRMC sentence found to ``sink`` and yield a report for it."""
    for line in iter_lines(chunks):
        sentence = find_gprmc(line)
        if sentence is None:
            continue
        if sink is not None:
            sink.write((sentence + "\r\n").encode("ascii"))
        message = describe(sentence)
        if message is not None:
            yield message


def _open_input(path: str, baud: int) -> serial.Serial:
    while True:
        try:
            return serial.Serial(path, baud)
        except serial.SerialException:
            print(f"Waiting for {path}...", file=sys.stderr)
            time.sleep(RETRY_INTERVAL)


def _read_chunks(port: serial.Serial) -> Iterator[bytes]:
    while True:
        data = port.read(port.in_waiting or 1)
        if not data:
            return
        yield data


def main(argv: list[str] | None = None) -> int:
    """Read GPS sentences from one serial port and forward GPRMC to another."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", default=IN_PORT, help="GPS serial port")
    parser.add_argument("--output", default=OUT_PORT, help="forwarding serial port")
    parser.add_argument("--baud", type=int, default=BAUD, help="baud rate of both ports")
    args = parser.parse_args(argv)

    port_in = _open_input(args.input, args.baud)
    port_out: serial.Serial | None
    try:
        port_out = serial.Serial(args.output, args.baud)
    except serial.SerialException:
        print(
            f"⚠️  Warning: can't open {args.output} (continuing without forwarding)",
            file=sys.stderr,
        )
        port_out = None

    try:
        for message in forward(_read_chunks(port_in), port_out):
            print(message, flush=True)
    except KeyboardInterrupt:
        pass
    finally:
        port_in.close()
        if port_out is not None:
            port_out.close()
    return 0
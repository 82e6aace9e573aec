"""Frame decoding for the Plantower PMS7003 particulate matter sensor."""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable
from dataclasses import dataclass

FRAME_SIZE = 32
START_1 = 0x42
START_2 = 0x4D

_LAYOUT = struct.Struct(">BBH12HBBH")

log = logging.getLogger(__name__)


class FrameError(ValueError):
    """A PMS7003 frame that is malformed or fails its checksum."""


@dataclass(frozen=True)
class Pms7003Frame:
    """One decoded sensor frame; concentrations in ug/m^3, counts per 0.1 L."""

    frame_length: int
    pm_1_0: int
    pm_2_5: int
    pm_10_0: int
    pm_1_0_atmos: int
    pm_2_5_atmos: int
    pm_10_0_atmos: int
    raw_gt_0_3: int
    raw_gt_0_5: int
    raw_gt_1_0: int
    raw_gt_2_5: int
    raw_gt_5_0: int
    raw_gt_10_0: int
    version: int
    error_code: int
    checksum: int


def frame_checksum(data: bytes) -> int:
    """Sum of the bytes before the checksum field, as a 16-bit value."""
    return sum(bytes(data[: FRAME_SIZE - 2])) & 0xFFFF


def parse_frame(data: bytes) -> Pms7003Frame:
    """Decode a complete 32-byte frame, checking start bytes and checksum."""
    frame = bytes(data)
    if len(frame) != FRAME_SIZE:
        raise FrameError(f"frame must be {FRAME_SIZE} bytes, got {len(frame)}")
    start_1, start_2, *fields = _LAYOUT.unpack(frame)
    if (start_1, start_2) != (START_1, START_2):
        raise FrameError("malformed first byte")
    decoded = Pms7003Frame(*fields)
    if frame_checksum(frame) != decoded.checksum:
        raise FrameError("invalid data checksum")
    return decoded


class Pms7003Reader:
    """Assembles frames from a byte stream, resynchronising on 0x42 0x4D."""

    def __init__(self, debug: bool = False) -> None:
        self.debug = debug
        self.has_new_data = False
        self.latest: Pms7003Frame | None = None
        self._buffer = bytearray(FRAME_SIZE)
        self._index = 0
        self._last = 0

    def feed(self, data: Iterable[int]) -> list[Pms7003Frame]:
        """Consume bytes and return the valid frames completed by them."""
        frames = []
        for byte in data:
            if byte == START_2 and self._last == START_1:
                self._buffer[0] = START_1
                self._index = 1
            self._buffer[self._index] = byte
            self._index += 1
            self._last = byte
            if self._index == FRAME_SIZE:
                frame = self._complete()
                if frame is not None:
                    frames.append(frame)
        if frames:
            self.latest = frames[-1]
        self.has_new_data = bool(frames)
        return frames

    def _complete(self) -> Pms7003Frame | None:
        self._index = 0
        raw = bytes(self._buffer)
        if self.debug:
            log.debug("%s", " ".join(str(b) for b in raw))
        try:
            return parse_frame(raw)
        except FrameError as exc:
            if self.debug:
                log.debug("%s", exc)
            return None
from dataclasses import dataclass, field

import pytest

from dronesense.k30 import (
    K30,
    K30_ADDRESS,
    READ_CO2_COMMAND,
    K30Error,
    K30Fault,
    decode_response,
)


@dataclass
class FakeBus:
    response: bytes
    writes: list = field(default_factory=list)
    reads: list = field(default_factory=list)

    def write(self, address, data):
        self.writes.append((address, bytes(data)))

    def read(self, address, length):
        self.reads.append((address, length))
        return self.response


def test_decode_valid_response():
    assert decode_response(bytes([0x01, 0x01, 0x90, 0x92])) == 400


def test_decode_checksum_wraps_at_one_byte():
    assert decode_response(bytes([0x00, 0xFF, 0xFF, 0xFE])) == 65535


def test_decode_ignores_trailing_bytes():
    data = bytes([0x01, 0x01, 0x90, 0x92])
    assert decode_response(data + b"\x55\x66") == decode_response(data)


def test_decode_checksum_mismatch():
    with pytest.raises(K30Error) as info:
        decode_response(bytes([0x01, 0x01, 0x90, 0x93]))
    assert info.value.fault is K30Fault.CHECKSUM_MISMATCH


def test_decode_short_response():
    with pytest.raises(K30Error) as info:
        decode_response(bytes([0x01, 0x01]))
    assert info.value.fault is K30Fault.INCOMPLETE_READ


def test_read_co2_sends_command_and_decodes():
    bus = FakeBus(bytes([0x01, 0x01, 0x90, 0x92]))
    sensor = K30(bus, K30_ADDRESS)
    level = sensor.read_co2()
    assert level == decode_response(bus.response)
    assert bus.writes == [(K30_ADDRESS, b"\x22\x00\x08\x2a")]
    assert bus.reads == [(K30_ADDRESS, 4)]


def test_read_co2_uses_given_address():
    bus = FakeBus(bytes([0x00, 0x02, 0x00, 0x02]))
    K30(bus, 0x30).read_co2()
    assert bus.writes[0] == (0x30, READ_CO2_COMMAND)


@pytest.mark.parametrize("response", [b"", b"\x01\x02", b"\x01\x02\x03\x06\x07"])
def test_read_co2_wrong_length_fails(response):
    with pytest.raises(K30Error) as info:
        K30(FakeBus(response), K30_ADDRESS).read_co2()
    assert info.value.fault is K30Fault.READ_FAILED


def test_read_co2_bad_checksum():
    with pytest.raises(K30Error) as info:
        K30(FakeBus(bytes([0x01, 0x02, 0x03, 0x00])), K30_ADDRESS).read_co2()
    assert info.value.fault is K30Fault.CHECKSUM_MISMATCH
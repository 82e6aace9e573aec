import struct

import pytest

from dronesense.pms7003 import (
    FRAME_SIZE,
    FrameError,
    Pms7003Frame,
    Pms7003Reader,
    frame_checksum,
    parse_frame,
)

VALUES = (28, 5, 12, 20, 4, 11, 19, 900, 300, 80, 10, 3, 1, 0x91, 0)


def build_frame(values=VALUES, start=(0x42, 0x4D), checksum=None):
    body = struct.pack(">BBH12HBB", *start, *values)
    if checksum is None:
        checksum = frame_checksum(body + b"\x00\x00")
    return body + struct.pack(">H", checksum)


def test_checksum_of_empty_frame():
    data = bytes([0x42, 0x4D]) + bytes(FRAME_SIZE - 2)
    assert frame_checksum(data) == 143


def test_checksum_ignores_checksum_field():
    frame = build_frame()
    altered = frame[:30] + b"\xff\xff"
    assert frame_checksum(frame) == frame_checksum(altered)


def test_parse_round_trip():
    frame = parse_frame(build_frame())
    assert frame == Pms7003Frame(*VALUES, checksum=frame.checksum)
    assert frame.frame_length == 28
    assert frame.pm_2_5 == 12
    assert frame.raw_gt_0_3 == 900


def test_parse_reads_fields_big_endian():
    values = (28, 0x0102, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0)
    frame = parse_frame(build_frame(values))
    assert frame.pm_1_0 == 0x0102


def test_parse_rejects_wrong_length():
    with pytest.raises(FrameError):
        parse_frame(build_frame()[:31])


def test_parse_rejects_bad_start():
    with pytest.raises(FrameError):
        parse_frame(build_frame(start=(0x42, 0x4E)))


def test_parse_rejects_bad_checksum():
    good = build_frame()
    bad_sum = (frame_checksum(good) + 1) & 0xFFFF
    with pytest.raises(FrameError):
        parse_frame(build_frame(checksum=bad_sum))


def test_reader_single_frame():
    reader = Pms7003Reader()
    frames = reader.feed(build_frame())
    assert frames == [parse_frame(build_frame())]
    assert reader.has_new_data
    assert reader.latest == frames[0]


def test_reader_skips_leading_garbage():
    reader = Pms7003Reader()
    frames = reader.feed(b"\x00\x01\x02" + build_frame())
    assert frames == [parse_frame(build_frame())]


def test_reader_recovers_after_full_garbage_buffer():
    reader = Pms7003Reader(debug=True)
    assert reader.feed(bytes(40)) == []
    assert not reader.has_new_data
    assert reader.feed(build_frame()) == [parse_frame(build_frame())]


def test_reader_assembles_split_chunks():
    reader = Pms7003Reader()
    data = build_frame()
    assert reader.feed(data[:10]) == []
    assert not reader.has_new_data
    assert reader.feed(data[10:]) == [parse_frame(data)]
    assert reader.has_new_data


def test_reader_drops_bad_checksum():
    reader = Pms7003Reader()
    bad_sum = (frame_checksum(build_frame()) + 1) & 0xFFFF
    assert reader.feed(build_frame(checksum=bad_sum)) == []
    assert reader.latest is None


def test_reader_multiple_frames_in_one_chunk():
    other = (28, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 0x91, 0)
    reader = Pms7003Reader()
    frames = reader.feed(build_frame() + build_frame(other))
    assert [f.pm_1_0 for f in frames] == [VALUES[1], other[1]]
    assert reader.latest == frames[-1]
# dronesense

Tools for an air-quality survey drone and its ground station: the maths and
byte formats between raw sensor readings and the values reported to an
operator, plus a command that forwards GPS sentences between serial ports.

## Modules

- `dronesense.gas` – MQ-series gas sensors. `MqSensor` holds a sensor's pin,
  load resistance, clean-air factor and datasheet curve. `resistance(adc_value)`
  turns a 12-bit ADC count into sensor resistance, `ppm(adc_value, ro)` gives
  the concentration for a baseline `ro` (default 0.33; a non-positive `ro`
  raises `ValueError`), and `calibrate(adc_samples)` returns a baseline from
  clean-air readings. Ready-made sensors: `MQ4` (CH4), `MQ7` (CO) and
  `MQ135` (NOx).
- `dronesense.k30` – the K30 CO2 sensor. `decode_response(data)` checks a
  four-byte reply and returns CO2 in ppm. `K30(bus, address=0x68).read_co2()`
  sends the read command over a bus object you supply (anything with
  `write(address, data)` and `read(address, length)`), waits 30 ms and decodes
  the reply. Failures raise `K30Error`, whose `fault` is a `K30Fault`:
  `CHECKSUM_MISMATCH`, `INCOMPLETE_READ` or `READ_FAILED`.
- `dronesense.pms7003` – the Plantower PMS7003 particulate sensor.
  `parse_frame(data)` decodes a 32-byte frame into a `Pms7003Frame` and raises
  `FrameError` for a wrong length, wrong start bytes or a bad checksum;
  `frame_checksum(data)` computes the 16-bit sum. `Pms7003Reader(debug=False)`
  assembles frames from a byte stream: `feed(data)` returns the valid frames
  completed by the bytes given, and sets `has_new_data` and `latest`.
- `dronesense.display` – text layout for a 128×64 display with 6×8 pixel
  characters: `split_words`, `wrap_words` (greedy wrap, each word keeping a
  trailing space), `layout_wrapped(text, y)` returning centred `TextLine`
  positions, and `centered_origin(width, height)`.
- `dronesense.nmea` – GPRMC handling: `has_valid_checksum`, `parse_coord`
  (`dddmm.mmmm` plus hemisphere to signed decimal degrees), `find_gprmc`,
  `parse_gprmc` (a `GprmcFix`, `None` without a fix, `ChecksumError` on a bad
  checksum), `describe`, `iter_lines` and `forward`, plus the `main` command.
- `dronesense.packet` – the packed little-endian telemetry record sent from
  the drone to the ground station. `SensorData.pack()` and
  `unpack_sensor_data(data)` convert it; a payload of the wrong length raises
  `PacketSizeError`. Also `clean_reading` (NaN becomes -1),
  `resolve_position` (NaN coordinates become 5.0, 5.0), `format_mac`,
  `format_report` and `handle_packet`, which returns the ground station's
  printout or `None` for a payload of the wrong size.
- `dronesense.relay` – `GpsRelay(gps_publisher, health_publisher)` passes
  `GpsFix` values (`on_gps`) and GPS health values (`on_health`) on only while
  both publishers have subscribers. A fix with a negative status or a NaN
  coordinate is replaced by latitude, longitude and altitude 10.0.
  Publishers are objects with a `subscriber_count` and a `publish(message)`
  method. Warnings and status lines go to the `logging` module.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Forwarding GPRMC sentences

```
dronesense-gprmc
```

reads NMEA data from the GPS receiver's serial port, forwards every `$GPRMC`
sentence it finds (followed by CR LF) to the output port, and prints a line
for each: the time and position when the checksum is valid and there is a fix,
a warning when there is no fix, and an error when the checksum is invalid.
Lines longer than 300 characters are dropped. Options:

- `--input` – GPS serial port (default `/dev/ttyUSB0`); the command waits,
  retrying every two seconds, until it can be opened.
- `--output` – forwarding port (default `/dev/ttyAMA0`); if it cannot be
  opened the command keeps running and only prints.
- `--baud` – baud rate of both ports (default 115200).

Stop it with Ctrl-C.

## Library examples

```python
from dronesense.nmea import parse_coord, parse_gprmc

parse_coord("4807.038", "N")   # 48.1173
parse_coord("01131.000", "W")  # -11.516666...
fix = parse_gprmc(sentence)    # GprmcFix(time=..., latitude=..., longitude=...)
```

```python
from dronesense.pms7003 import Pms7003Reader

reader = Pms7003Reader()
for frame in reader.feed(received_bytes):
    print(frame.pm_2_5, frame.pm_10_0)
```

```python
from dronesense.gas import MQ4

ro = MQ4.calibrate(clean_air_counts)
print(MQ4.ppm(2048, ro))
```

```python
from dronesense.packet import handle_packet, unpack_sensor_data

record = unpack_sensor_data(payload)
assert unpack_sensor_data(record.pack()) == record
print(handle_packet(bytes.fromhex("020000000001"), payload))
```

## What it does not do

The package does not talk to the sensors, the display or the radio link
itself. Gas readings are computed from ADC counts you pass in, the K30 and the
relay work through bus and publisher objects you supply, the display module
only computes text positions without drawing anything, and telemetry packets
are packed and decoded but not sent or received. The only part that opens a
device is the `dronesense-gprmc` command, which uses serial ports.
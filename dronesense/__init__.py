"""Air-quality sensing for survey drones: sensor maths, frame and packet formats, GPS forwarding."""

__version__ = "0.1.0"

__all__ = ["display", "gas", "k30", "nmea", "packet", "pms7003", "relay"]
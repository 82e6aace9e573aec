"""Resistance and concentration maths for MQ-series metal-oxide gas sensors."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

ADC_MAX = 4095.0
REFERENCE_VOLTAGE = 3.3
DEFAULT_RO = 0.33
CALIBRATION_SAMPLES = 50
CALIBRATION_INTERVAL = 0.1


@dataclass(frozen=True)
class MqSensor:
    """An MQ gas sensor on an ADC pin, with its datasheet log-log curve."""

    name: str
    pin: int
    load_resistance: float
    clean_air_factor: float
    slope: float
    intercept: float

    def resistance(self, adc_value: float) -> float:
        """Sensor resistance Rs for a raw 12-bit ADC reading."""
        voltage = adc_value * (REFERENCE_VOLTAGE / ADC_MAX)
        if voltage == 0:
            return math.inf
        return self.load_resistance * (REFERENCE_VOLTAGE - voltage) / voltage

    def ppm(self, adc_value: float, ro: float = DEFAULT_RO) -> float:
        """Gas concentration in ppm for an ADC reading and a baseline Ro."""
        if ro <= 0:
            raise ValueError(f"baseline resistance must be positive, got {ro}")
        ratio = self.resistance(adc_value) / ro
        if math.isnan(ratio) or ratio < 0:
            return math.nan
        if ratio == 0:
            return math.inf
        if math.isinf(ratio):
            return 0.0
        return 10 ** ((math.log10(ratio) - self.intercept) / self.slope)

    def calibrate(self, adc_samples: Iterable[float]) -> float:
        """Baseline Ro from ADC readings taken in clean air."""
        resistances = [self.resistance(sample) for sample in adc_samples]
        if not resistances:
            raise ValueError("calibration needs at least one sample")
        mean = sum(resistances) / len(resistances)
        return mean / self.clean_air_factor


MQ4 = MqSensor(
    name="MQ-4 (CH4)",
    pin=34,
    load_resistance=0.33,
    clean_air_factor=4.4,
    slope=-0.38,
    intercept=1.3,
)

MQ7 = MqSensor(
    name="MQ-7 (CO)",
    pin=35,
    load_resistance=0.33,
    clean_air_factor=4.4,
    slope=-0.38,
    intercept=1.3,
)

MQ135 = MqSensor(
    name="MQ-135 (NOx)",
    pin=32,
    load_resistance=0.33,
    clean_air_factor=3.0,
    slope=-0.48,
    intercept=0.36,
)
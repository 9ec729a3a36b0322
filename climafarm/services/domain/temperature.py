"""
Domain service: Day/night temperature derivation from MODIS LST statistics.

Each statistics row carries value_mean, value_min and value_max in Kelvin.
Day readings lean towards the batch maxima and night readings towards the
minima; when no usable rows exist a plausible random value is synthesized.
"""
import logging
import math
import random
from typing import Any, Iterable, Literal, Mapping, Optional

import numpy as np

from climafarm.domain.models import TemperatureReading
from climafarm.utils.geo_math import round_half_up

logger = logging.getLogger(__name__)

TimeOfDay = Literal["day", "night"]

KELVIN_OFFSET = 273.15
MIN_EARTH_TEMP_C = -50
MAX_EARTH_TEMP_C = 60
EXTREME_WEIGHT = 0.7
MEAN_WEIGHT = 0.3

# Inclusive ranges used when a band has no usable statistics
RANDOM_RANGES: dict[str, tuple[int, int]] = {
    "day": (20, 45),
    "night": (5, 25),
}


def kelvin_to_celsius(kelvin: float) -> int:
    """Convert Kelvin to whole degrees Celsius (half-up rounding)."""
    return round_half_up(kelvin - KELVIN_OFFSET)


def _as_number(value: Any) -> Optional[float]:
    """Numeric value of a statistic, or None when missing, zero or not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


def valid_records(samples: Iterable[Mapping[str, Any]]) -> list[dict[str, float]]:
    """Keep rows where mean, min and max are all present and numeric."""
    valid = []
    for record in samples or []:
        if not isinstance(record, Mapping):
            continue
        stats = {key: _as_number(record.get(key)) for key in ("value_mean", "value_min", "value_max")}
        if all(v is not None for v in stats.values()):
            valid.append(stats)
    return valid


def random_temperature(low: int, high: int, rng: Optional[random.Random] = None) -> int:
    """Random whole temperature in [low, high]."""
    rng = rng or random
    return round_half_up(rng.random() * (high - low) + low)


def clamp_temperature(value: int) -> int:
    return max(MIN_EARTH_TEMP_C, min(MAX_EARTH_TEMP_C, value))


def derive_temperature(
    samples: Iterable[Mapping[str, Any]],
    time_of_day: TimeOfDay,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Derive a single Celsius reading from a batch of band statistics.

    Args:
        samples: lst_statistics rows for one band
        time_of_day: "day" weights towards value_max, "night" towards value_min
        rng: Optional random source for the no-data fallback

    Returns:
        Temperature in whole degrees Celsius, clamped to [-50, 60]
    """
    records = valid_records(samples)
    if not records:
        low, high = RANDOM_RANGES[time_of_day]
        temp = random_temperature(low, high, rng)
        logger.debug(f"No usable {time_of_day} statistics, synthesized {temp}°C")
        return clamp_temperature(temp)

    extreme_key = "value_max" if time_of_day == "day" else "value_min"
    extremes = np.array([kelvin_to_celsius(r[extreme_key]) for r in records], dtype=float)
    means = np.array([kelvin_to_celsius(r["value_mean"]) for r in records], dtype=float)

    avg_extreme = float(extremes.mean())
    avg_mean = float(means.mean())
    final_temp = round_half_up(avg_extreme * EXTREME_WEIGHT + avg_mean * MEAN_WEIGHT)

    logger.debug(
        f"{time_of_day} temperature from {len(records)} records: "
        f"avg_extreme={avg_extreme:.2f}°C avg_mean={avg_mean:.2f}°C -> {final_temp}°C"
    )
    return clamp_temperature(final_temp)


def derive_reading(
    day_samples: Iterable[Mapping[str, Any]],
    night_samples: Iterable[Mapping[str, Any]],
    rng: Optional[random.Random] = None,
) -> TemperatureReading:
    """Build the day/night/average reading for one location."""
    day = derive_temperature(day_samples, "day", rng)
    night = derive_temperature(night_samples, "night", rng)
    return TemperatureReading(
        day_temp_c=day,
        night_temp_c=night,
        avg_temp_c=round_half_up((day + night) / 2),
    )


def temperature_description(temp: float) -> str:
    if temp > 30:
        return "hot"
    if temp > 25:
        return "warm"
    if temp > 15:
        return "moderate"
    if temp > 5:
        return "cool"
    return "cold"

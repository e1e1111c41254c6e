"""
Pure conversion helpers: raw telemetry -> display percentages and human-friendly strings.

The percentage functions are first degree fits against the range the modem normally operates in.
The constants are calibration values; don't "tidy" them.
"""

from enum import Enum

ONE_KB = 1024.0
ONE_MB = ONE_KB * ONE_KB
ONE_GB = ONE_KB * ONE_MB

# Largest unit first. (multiplier applied to watts, unit suffix, decimals)
POWER_UNITS = (
    (1.0, "W", 3),
    (1.0e3, "mW", 1),
    (1.0e6, "\u03bcW", 1),
    (1.0e9, "nW", 1),
    (1.0e12, "pW", 1),
    (1.0e15, "fW", 1),
)


class SignalQuality(Enum):
    """Rough health buckets for the Rx SNR, same tiers the modem's own UI colors its bar with."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    BAD = "bad"


def _linear_above_knee(value: float, knee: float, offset: float, slope: float) -> float:
    if value >= knee:
        # The fits land a hair either side of 0 at the knee
        return max(0.0, offset + value * slope)
    return 0.0


def get_cable_attenuation_percent(attenuation_db: float) -> float:
    return _linear_above_knee(attenuation_db, 0.0, 0.0, 6.66666)


def get_rx_power_percent(rx_power_dbm: float) -> float:
    return _linear_above_knee(rx_power_dbm, -72.586, 119.42208, 1.64524)


def get_rx_snr_percent(rx_snr_db: float) -> float:
    return _linear_above_knee(rx_snr_db, -3.0, 10.71429, 3.57143)


def get_tx_if_power_percent(tx_if_power_dbm: float) -> float:
    return _linear_above_knee(tx_if_power_dbm, -35.5, 137.86408, 3.8835)


def get_tx_rf_power_percent(tx_rf_power_dbm: float) -> float:
    return _linear_above_knee(tx_rf_power_dbm, 14.5, -56.31068, 3.8835)


def convert_dbm_to_watts(dbm: float) -> float:
    # Divide rather than multiply by 0.1; 0.1 * -30 is not exactly -3.0 and that pushes
    #   round values like 0 dBm just under a unit boundary.
    return 10.0 ** ((dbm - 30.0) / 10.0)


def convert_dbm_to_str(dbm: float) -> str:
    """Power in dBm as watts, using the largest unit that keeps the value >= 1.

    E.G.: 30 dBm -> '1.000 W', 0 dBm -> '1.0 mW', -60 dBm -> '1.0 nW'
    """
    watts = convert_dbm_to_watts(dbm)
    for multiplier, unit, decimals in POWER_UNITS:
        if abs(watts) >= 1.0 / multiplier:
            return f"{watts * multiplier:.{decimals}f} {unit}"
    # Smaller than a femtowatt; nobody is reading this one anyway
    return f"{watts:.3g} W"


def format_bytes(count: int) -> tuple[str, str]:
    """Returns (amount, unit) for a byte counter. Units are 1024 based."""
    for size, unit in ((ONE_GB, "GBytes"), (ONE_MB, "MBytes"), (ONE_KB, "kBytes")):
        if count >= size:
            return f"{count / size:.3f}", unit
    return str(count), "Bytes"


def format_symbol_rate(rate: int) -> str:
    if rate >= 1e6:
        return f"{rate / 1e6:.3f} MSym/s"
    if rate >= 1e3:
        return f"{rate / 1e3:.3f} kSym/s"
    return f"{rate} Sym/s"


def grade_rx_snr(rx_snr_db: float) -> SignalQuality:
    if rx_snr_db >= 10:
        return SignalQuality.GOOD
    if rx_snr_db >= 7:
        return SignalQuality.FAIR
    if rx_snr_db >= 4:
        return SignalQuality.POOR
    return SignalQuality.BAD

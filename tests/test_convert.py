import pytest

from surfbeam2 import convert
from surfbeam2.convert import SignalQuality


@pytest.mark.parametrize(
    "func, knee",
    [
        (convert.get_cable_attenuation_percent, 0.0),
        (convert.get_rx_power_percent, -72.586),
        (convert.get_rx_snr_percent, -3.0),
        (convert.get_tx_if_power_percent, -35.5),
        (convert.get_tx_rf_power_percent, 14.5),
    ],
)
def test_percent_is_zero_below_knee_and_monotonic_above(func, knee):
    assert func(knee - 0.001) == 0.0
    assert func(knee - 100) == 0.0

    values = [func(knee + step * 0.5) for step in range(40)]
    assert values == sorted(values)

    # Never negative, and starts from (about) nothing at the knee itself
    assert func(knee) >= 0.0
    assert func(knee) == pytest.approx(0.0, abs=1e-3)


def test_percent_at_knee_is_not_negative():
    # -35.5 * 3.8835 overshoots 137.86408 slightly
    assert convert.get_tx_if_power_percent(-35.5) == 0.0
    assert convert.get_rx_power_percent(-72.586) == pytest.approx(0.00069, abs=1e-5)


def test_rx_snr_percent():
    assert convert.get_rx_snr_percent(-3.0) == pytest.approx(10.71429 - 3.0 * 3.57143)
    assert convert.get_rx_snr_percent(0.0) == pytest.approx(10.71429)
    assert convert.get_rx_snr_percent(10.0) == pytest.approx(46.4286, abs=1e-3)


def test_other_percents():
    assert convert.get_cable_attenuation_percent(15.0) == pytest.approx(99.9999)
    assert convert.get_rx_power_percent(-45.3) == pytest.approx(119.42208 - 45.3 * 1.64524)
    assert convert.get_tx_if_power_percent(-12.5) == pytest.approx(137.86408 - 12.5 * 3.8835)
    assert convert.get_tx_rf_power_percent(30.0) == pytest.approx(-56.31068 + 30.0 * 3.8835)


def test_dbm_to_watts():
    assert convert.convert_dbm_to_watts(30.0) == 1.0
    assert convert.convert_dbm_to_watts(0.0) == pytest.approx(1e-3)
    assert convert.convert_dbm_to_watts(-30.0) == pytest.approx(1e-6)


@pytest.mark.parametrize(
    "dbm, expected",
    [
        (30.0, "1.000 W"),
        (40.0, "10.000 W"),
        (33.0, "1.995 W"),
        (0.0, "1.0 mW"),
        (20.0, "100.0 mW"),
        (-30.0, "1.0 \u03bcW"),
        (-45.3, "29.5 nW"),
        (-57.0, "2.0 nW"),
        (-87.0, "2.0 pW"),
        (-117.0, "2.0 fW"),
        (-130.0, "1e-16 W"),
    ],
)
def test_dbm_to_str(dbm, expected):
    assert convert.convert_dbm_to_str(dbm) == expected


@pytest.mark.parametrize(
    "count, expected",
    [
        (0, ("0", "Bytes")),
        (1023, ("1023", "Bytes")),
        (1024, ("1.000", "kBytes")),
        (5_678_901, ("5.416", "MBytes")),
        (9_876_543_210, ("9.198", "GBytes")),
    ],
)
def test_format_bytes(count, expected):
    assert convert.format_bytes(count) == expected


@pytest.mark.parametrize(
    "rate, expected",
    [
        (999, "999 Sym/s"),
        (2_500, "2.500 kSym/s"),
        (10_000_000, "10.000 MSym/s"),
    ],
)
def test_format_symbol_rate(rate, expected):
    assert convert.format_symbol_rate(rate) == expected


@pytest.mark.parametrize(
    "snr, expected",
    [
        (12.0, SignalQuality.GOOD),
        (10.0, SignalQuality.GOOD),
        (7.0, SignalQuality.FAIR),
        (4.5, SignalQuality.POOR),
        (3.9, SignalQuality.BAD),
        (-2.0, SignalQuality.BAD),
    ],
)
def test_grade_rx_snr(snr, expected):
    assert convert.grade_rx_snr(snr) is expected

"""
Human readable view of the status records.

This is what the modem's own status page would show: power as dBm *and* watts, byte counters scaled to something
readable, beam color with the color it should be drawn in ... etc.
"""

import structlog
from surfbeam2.convert import convert_dbm_to_str, format_bytes, format_symbol_rate
from surfbeam2.models import BeamColor, ModemInfo, Polarization, StatusSnapshot, TriaInfo

log = structlog.get_logger(__name__)

OMEGA_CAPITAL = "\u03a9"

# (label, color to draw the label in)
BEAM_COLOR_DISPLAY = {
    BeamColor.BLUE: ("Blue", "blue"),
    BeamColor.ORANGE: ("Orange", "orange"),
    BeamColor.PURPLE: ("Purple", "purple"),
    BeamColor.GREEN: ("Green", "green"),
    BeamColor.UNKNOWN: ("unknown", "black"),
}

POLARIZATION_DISPLAY = {
    Polarization.CIRCULAR_LEFT: "Circular Left",
    Polarization.CIRCULAR_RIGHT: "Circular Right",
    Polarization.HORIZONTAL: "Horizontal",
    Polarization.VERTICAL: "Vertical",
    Polarization.UNKNOWN: "unknown",
}


def format_power(dbm: float) -> str:
    """'-45.3 dBm / 29.5 nW'"""
    return f"{dbm:.1f} dBm / {convert_dbm_to_str(dbm)}"


def format_byte_count(count: int) -> str:
    amount, unit = format_bytes(count)
    return f"{amount} {unit}"


def format_modem(info: ModemInfo) -> dict[str, str]:
    beam_label, beam_color = BEAM_COLOR_DISPLAY[info.beam_color]
    return {
        "modem_state": info.status_label,
        "online_time": info.online_time,
        "ip_address": info.ip_address,
        "odu_telemetry": info.odu_telemetry_status,
        "beam_color": beam_label,
        "beam_display_color": beam_color,
        "serial_number": info.serial_number,
        "part_number": info.part_number,
        "hw_version": info.hw_version,
        "sw_version": info.sw_version,
        "mac_address": info.mac_address,
        "uplink_symbol_rate": format_symbol_rate(info.uplink_symbol_rate),
        "downlink_symbol_rate": format_symbol_rate(info.downlink_symbol_rate),
        "modulation": info.downlink_modulation,
        "tx_packets": str(info.tx_packets),
        "tx_bytes": format_byte_count(info.tx_bytes),
        "rx_packets": str(info.rx_packets),
        "rx_bytes": format_byte_count(info.rx_bytes),
        "rx_snr": f"{info.rx_snr_db:.1f} dB",
        "rx_snr_quality": info.rx_snr_quality.value,
        "rx_power": format_power(info.rx_power_dbm),
        "cable_attenuation": f"{info.cable_attenuation_db:.1f} dB",
        "cable_resistance": f"{info.cable_resistance_ohm:.1f} {OMEGA_CAPITAL}",
    }


def format_tria(info: TriaInfo) -> dict[str, str]:
    beam_label, beam_color = BEAM_COLOR_DISPLAY[info.beam_color]
    return {
        "serial_number": info.serial_number,
        "fw_version": info.fw_version,
        # %g so 41.0 shows up as '41 °C' the way the modem UI shows it
        "temperature": f"{info.temperature_celsius:g} °C",
        "polarization": POLARIZATION_DISPLAY[info.polarization],
        "beam_color": beam_label,
        "beam_display_color": beam_color,
        "tx_if_power": format_power(info.tx_if_power_dbm),
        "tx_rf_power": format_power(info.tx_rf_power_dbm),
    }


def log_status(snapshot: StatusSnapshot) -> None:
    """Display sink: one log event per snapshot."""
    log.info(
        "Status",
        modem=format_modem(snapshot.modem),
        tria=format_tria(snapshot.tria),
    )

"""
Records that hold one decoded status page each.

Records are frozen; a successful decode builds a brand-new record which then replaces the old one in a single
assignment. Nothing ever sees a half-updated record.
"""

from dataclasses import dataclass, field
from enum import Enum

from surfbeam2 import convert


class ModemState(Enum):
    """Modem bring-up steps, in the order the modem goes through them."""

    UNKNOWN = "unknown"
    SCANNING = "scanning"
    RANGING = "ranging"
    NETWORK_ENTRY = "network_entry"
    DHCP = "dhcp"
    ONLINE = "online"


class BeamColor(Enum):
    UNKNOWN = "unknown"
    BLUE = "blue"
    ORANGE = "orange"
    PURPLE = "purple"
    GREEN = "green"


class Polarization(Enum):
    UNKNOWN = "unknown"
    CIRCULAR_LEFT = "circular_left"
    CIRCULAR_RIGHT = "circular_right"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# The modem reports state as free-ish text, e.g. "Online" or "Network Entry (3/5)".
# Each table is walked in order and the first keyword found (case-insensitive) wins.
##
MODEM_STATE_KEYWORDS: tuple[tuple[str, ModemState], ...] = (
    ("scanning", ModemState.SCANNING),
    ("ranging", ModemState.RANGING),
    ("network", ModemState.NETWORK_ENTRY),
    ("dhcp", ModemState.DHCP),
    ("online", ModemState.ONLINE),
)

BEAM_COLOR_KEYWORDS: tuple[tuple[str, BeamColor], ...] = (
    ("blue", BeamColor.BLUE),
    ("orange", BeamColor.ORANGE),
    ("purple", BeamColor.PURPLE),
    ("green", BeamColor.GREEN),
)

POLARIZATION_KEYWORDS: tuple[tuple[str, Polarization], ...] = (
    ("left", Polarization.CIRCULAR_LEFT),
    ("right", Polarization.CIRCULAR_RIGHT),
    ("horiz", Polarization.HORIZONTAL),
    ("vert", Polarization.VERTICAL),
)


def match_category(text: str, keywords: tuple[tuple[str, Enum], ...]) -> Enum:
    """Map free text onto an enum member using an ordered keyword table.

    No match is not an error; the modem reports odd strings while it is booting or updating firmware.
    The enum's UNKNOWN member is returned instead.
    """
    folded = text.casefold()
    for keyword, variant in keywords:
        if keyword in folded:
            return variant
    # All tables map onto enums with an UNKNOWN member
    return type(keywords[0][1]).UNKNOWN


@dataclass(frozen=True)
class ModemInfo:
    """Indoor modem status, from the `modemStatusData` page."""

    ip_address: str = ""
    mac_address: str = ""
    sw_version: str = ""
    hw_version: str = ""
    status_label: str = ""
    rx_packets: int = 0
    rx_bytes: int = 0
    tx_packets: int = 0
    tx_bytes: int = 0
    online_time: str = ""
    loss_of_sync_count: int = 0
    rx_snr_db: float = 0.0
    rx_snr_percent: int = 0
    serial_number: str = ""
    rx_power_dbm: float = 0.0
    rx_power_percent: int = 0
    cable_resistance_ohm: float = 0.0
    cable_resistance_percent: int = 0
    odu_telemetry_status: str = ""
    cable_attenuation_db: float = 0.0
    cable_attenuation_percent: int = 0
    ifl_type: str = ""
    part_number: str = ""
    modem_state: ModemState = ModemState.UNKNOWN
    beam_color: BeamColor = BeamColor.UNKNOWN
    client_side_proxy_status: str = ""
    client_side_proxy_health: str = ""
    last_page_load_duration: str = ""
    uplink_symbol_rate: int = 0
    beam_data_table_version: str = ""
    vendor: str = ""
    downlink_symbol_rate: int = 0
    downlink_modulation: str = ""

    # The modem reports its own percentages; these are the ones we compute from the raw dB/dBm values
    @property
    def derived_rx_snr_percent(self) -> float:
        return convert.get_rx_snr_percent(self.rx_snr_db)

    @property
    def derived_rx_power_percent(self) -> float:
        return convert.get_rx_power_percent(self.rx_power_dbm)

    @property
    def derived_cable_attenuation_percent(self) -> float:
        return convert.get_cable_attenuation_percent(self.cable_attenuation_db)

    @property
    def rx_snr_quality(self) -> convert.SignalQuality:
        return convert.grade_rx_snr(self.rx_snr_db)


@dataclass(frozen=True)
class TriaInfo:
    """Outdoor unit (TRIA) status, from the `triaStatusData` page."""

    power_mode: str = ""
    polarization_type: str = ""
    tx_if_power_dbm: float = 0.0
    ifl_type: str = ""
    temperature_celsius: float = 0.0
    serial_number: str = ""
    tx_rf_power_dbm: float = 0.0
    fw_version: str = ""
    tx_if_power_percent: int = 0
    tx_rf_power_percent: int = 0
    beam_color: BeamColor = BeamColor.UNKNOWN
    vendor: str = ""

    @property
    def polarization(self) -> Polarization:
        return match_category(self.polarization_type, POLARIZATION_KEYWORDS)

    @property
    def derived_tx_if_power_percent(self) -> float:
        return convert.get_tx_if_power_percent(self.tx_if_power_dbm)

    @property
    def derived_tx_rf_power_percent(self) -> float:
        return convert.get_tx_rf_power_percent(self.tx_rf_power_dbm)


@dataclass(frozen=True)
class StatusSnapshot:
    """What the display sinks get: the latest good record of each page."""

    modem: ModemInfo = field(default_factory=ModemInfo)
    tria: TriaInfo = field(default_factory=TriaInfo)

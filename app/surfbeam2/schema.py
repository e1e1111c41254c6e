"""Field tables for the two status pages.

Each page is a flat list of `##` separated values and the only thing that tells us what a value means is its
position. Not every position is used; the gaps are real and whatever shows up at an unlisted index is ignored.

If a firmware update moves things around, this is the only file that should need to change.
"""

import dataclasses
from dataclasses import dataclass, replace
from enum import Enum

from err.exceptions import SchemaDefinitionError
from surfbeam2.models import (
    BEAM_COLOR_KEYWORDS,
    MODEM_STATE_KEYWORDS,
    ModemInfo,
    TriaInfo,
)
from util.const import FIELD_COUNT_MODEM, FIELD_COUNT_TRIA


class FieldRule(Enum):
    """How the raw text at an index becomes a value"""

    # copied as-is
    TEXT = "text"
    # unsigned 64 bit int, may carry `,` thousands separators: '1,234,567'
    UINT = "uint"
    # unsigned 16 bit int with trailing `%`: '87%'
    PERCENT = "percent"
    # dB/dBm/°C style values: '-45.3'
    FLOAT = "float"
    # free text mapped onto an enum via an ordered keyword table
    CATEGORY = "category"


@dataclass(frozen=True)
class FieldSpec:
    index: int
    name: str
    rule: FieldRule
    categories: tuple[tuple[str, Enum], ...] | None = None


@dataclass(frozen=True)
class Schema:
    """Ordered (index, name, rule) table plus the record class it fills in.

    Validated on construction so a typo in a table fails at import instead of silently writing the wrong field.
    """

    name: str
    record_cls: type
    expected_count: int
    fields: tuple[FieldSpec, ...]

    def __post_init__(self):
        record_fields = {f.name for f in dataclasses.fields(self.record_cls)}
        seen_names = set()
        last_index = -1
        for spec in self.fields:
            if spec.index <= last_index:
                raise SchemaDefinitionError(
                    f"{self.name}: index {spec.index} ({spec.name}) is duplicated or out of order"
                )
            if spec.index >= self.expected_count:
                raise SchemaDefinitionError(
                    f"{self.name}: index {spec.index} ({spec.name}) is outside of {self.expected_count} fields"
                )
            if spec.name in seen_names:
                raise SchemaDefinitionError(f"{self.name}: field {spec.name} mapped twice")
            if spec.name not in record_fields:
                raise SchemaDefinitionError(
                    f"{self.name}: {self.record_cls.__name__} has no field {spec.name}"
                )
            if (spec.rule is FieldRule.CATEGORY) != bool(spec.categories):
                raise SchemaDefinitionError(
                    f"{self.name}: {spec.name} must have a keyword table if and only if it is a CATEGORY"
                )
            seen_names.add(spec.name)
            last_index = spec.index

    def with_count(self, expected_count: int) -> "Schema":
        """Copy of this schema expecting a different field count. Re-validated."""
        return replace(self, expected_count=expected_count)


MODEM_SCHEMA = Schema(
    name="modem",
    record_cls=ModemInfo,
    expected_count=FIELD_COUNT_MODEM,
    fields=(
        FieldSpec(0, "ip_address", FieldRule.TEXT),
        FieldSpec(1, "mac_address", FieldRule.TEXT),
        FieldSpec(2, "sw_version", FieldRule.TEXT),
        FieldSpec(3, "hw_version", FieldRule.TEXT),
        FieldSpec(4, "status_label", FieldRule.TEXT),
        FieldSpec(5, "rx_packets", FieldRule.UINT),
        FieldSpec(6, "rx_bytes", FieldRule.UINT),
        FieldSpec(7, "tx_packets", FieldRule.UINT),
        FieldSpec(8, "tx_bytes", FieldRule.UINT),
        FieldSpec(9, "online_time", FieldRule.TEXT),
        FieldSpec(10, "loss_of_sync_count", FieldRule.UINT),
        FieldSpec(11, "rx_snr_db", FieldRule.FLOAT),
        FieldSpec(12, "rx_snr_percent", FieldRule.PERCENT),
        FieldSpec(13, "serial_number", FieldRule.TEXT),
        FieldSpec(14, "rx_power_dbm", FieldRule.FLOAT),
        FieldSpec(15, "rx_power_percent", FieldRule.PERCENT),
        FieldSpec(16, "cable_resistance_ohm", FieldRule.FLOAT),
        FieldSpec(17, "cable_resistance_percent", FieldRule.PERCENT),
        FieldSpec(18, "odu_telemetry_status", FieldRule.TEXT),
        FieldSpec(19, "cable_attenuation_db", FieldRule.FLOAT),
        FieldSpec(20, "cable_attenuation_percent", FieldRule.PERCENT),
        FieldSpec(21, "ifl_type", FieldRule.TEXT),
        FieldSpec(22, "part_number", FieldRule.TEXT),
        FieldSpec(23, "modem_state", FieldRule.CATEGORY, MODEM_STATE_KEYWORDS),
        FieldSpec(24, "beam_color", FieldRule.CATEGORY, BEAM_COLOR_KEYWORDS),
        # 25 unused
        FieldSpec(26, "client_side_proxy_status", FieldRule.TEXT),
        FieldSpec(27, "client_side_proxy_health", FieldRule.TEXT),
        # 28, 29 unused
        FieldSpec(30, "last_page_load_duration", FieldRule.TEXT),
        FieldSpec(32, "uplink_symbol_rate", FieldRule.UINT),
        FieldSpec(40, "beam_data_table_version", FieldRule.TEXT),
        FieldSpec(46, "vendor", FieldRule.TEXT),
        FieldSpec(50, "downlink_symbol_rate", FieldRule.UINT),
        FieldSpec(51, "downlink_modulation", FieldRule.TEXT),
    ),
)


TRIA_SCHEMA = Schema(
    name="tria",
    record_cls=TriaInfo,
    expected_count=FIELD_COUNT_TRIA,
    fields=(
        FieldSpec(4, "power_mode", FieldRule.TEXT),
        FieldSpec(5, "polarization_type", FieldRule.TEXT),
        FieldSpec(7, "tx_if_power_dbm", FieldRule.FLOAT),
        FieldSpec(9, "ifl_type", FieldRule.TEXT),
        FieldSpec(10, "temperature_celsius", FieldRule.FLOAT),
        FieldSpec(16, "serial_number", FieldRule.TEXT),
        FieldSpec(17, "tx_rf_power_dbm", FieldRule.FLOAT),
        FieldSpec(24, "fw_version", FieldRule.TEXT),
        FieldSpec(25, "tx_if_power_percent", FieldRule.PERCENT),
        FieldSpec(26, "tx_rf_power_percent", FieldRule.PERCENT),
        FieldSpec(29, "beam_color", FieldRule.CATEGORY, BEAM_COLOR_KEYWORDS),
        FieldSpec(81, "vendor", FieldRule.TEXT),
    ),
)

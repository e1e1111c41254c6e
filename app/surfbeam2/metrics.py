"""All the boiler plate / init code for defining metrics.

Metrics come in two groups:
    - meta metrics about the polling itself (how long requests take, how often they fail, how often decode fails)
    - the modem / TRIA values out of the decoded records
"""

from prometheus_client import (Counter, Enum, Gauge, Info, Summary,
                               disable_created_metrics)

from surfbeam2.models import BeamColor, ModemState

# The "_created" meta metric that the client adds to every metric isn't useful here
disable_created_metrics()


METRICS_NS = "surfbeam2"
META_NS = "meta"

##
# Meta Metrics
##
# Both pages are polled every 500ms so the summary count doubles as a request counter
s_meta_request_time = Summary(
    f"{META_NS}_request_duration_seconds",
    "Time spent waiting for modem to respond",
    labelnames=["scrape_target"],
)

# http_code is "error" when there was no HTTP response at all (connection refused, reset ... etc)
c_meta_scrape_result = Counter(
    f"{META_NS}_scrape_result",
    "Count of successful vs failed scrapes",
    labelnames=["http_code", "scrape_target"],
)

# parse_result is one of: ok, schema_mismatch, numeric_format, superseded
# A steady stream of schema_mismatch almost certainly means new firmware; go check the field counts.
c_meta_parse_result = Counter(
    f"{META_NS}_parse_result",
    "Count of successful vs failed parse attempts",
    labelnames=["parse_target", "parse_result"],
)

##
# Modem (indoor unit)
##
i_modem_info = Info(
    f"{METRICS_NS}_modem",
    "Assorted Modem Info",
)

e_modem_state = Enum(
    f"{METRICS_NS}_modem_state",
    "Where the modem is in its bring-up sequence.",
    states=[s.value for s in ModemState],
)

e_modem_beam_color = Enum(
    f"{METRICS_NS}_modem_beam_color",
    "Satellite beam color as reported by the modem.",
    states=[c.value for c in BeamColor],
)

# These are counters on the modem side but they reset when the modem reboots
#   and we only ever get absolute values, so Gauge.
g_modem_packets = Gauge(
    f"{METRICS_NS}_modem_packets",
    "Ethernet packets through the modem.",
    labelnames=["direction"],
)

g_modem_bytes = Gauge(
    f"{METRICS_NS}_modem_bytes",
    "Ethernet bytes through the modem.",
    labelnames=["direction"],
)

g_modem_loss_of_sync_count = Gauge(
    f"{METRICS_NS}_modem_loss_of_sync_count",
    "Number of times the modem lost sync.",
)

g_modem_rx_snr_db = Gauge(
    f"{METRICS_NS}_modem_rx_snr_db",
    "Receive signal to noise ratio.",
)

g_modem_rx_power_dbm = Gauge(
    f"{METRICS_NS}_modem_rx_power_dbm",
    "Receive power.",
)

g_modem_cable_attenuation_db = Gauge(
    f"{METRICS_NS}_modem_cable_attenuation_db",
    "Attenuation of the cable between modem and outdoor unit.",
)

g_modem_cable_resistance_ohm = Gauge(
    f"{METRICS_NS}_modem_cable_resistance_ohm",
    "Resistance of the cable between modem and outdoor unit.",
)

# source="device" is what the modem reports, source="derived" is what we compute from the raw dB/dBm value
g_modem_percent = Gauge(
    f"{METRICS_NS}_modem_percent",
    "Link quality values as a percentage.",
    labelnames=["measurement", "source"],
)

g_modem_symbol_rate = Gauge(
    f"{METRICS_NS}_modem_symbol_rate",
    "Symbol rate in Sym/s.",
    labelnames=["direction"],
)

##
# TRIA (outdoor unit)
##
i_tria_info = Info(
    f"{METRICS_NS}_tria",
    "Assorted outdoor unit info",
)

e_tria_beam_color = Enum(
    f"{METRICS_NS}_tria_beam_color",
    "Satellite beam color as reported by the outdoor unit.",
    states=[c.value for c in BeamColor],
)

g_tria_tx_power_dbm = Gauge(
    f"{METRICS_NS}_tria_tx_power_dbm",
    "Transmit power.",
    labelnames=["stage"],
)

g_tria_temperature_celsius = Gauge(
    f"{METRICS_NS}_tria_temperature_celsius",
    "Outdoor unit temperature.",
)

g_tria_percent = Gauge(
    f"{METRICS_NS}_tria_percent",
    "Transmit power as a percentage.",
    labelnames=["measurement", "source"],
)

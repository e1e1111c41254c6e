"""
Implementation of the page fetch and metric update functions
"""

import asyncio

import structlog
from aiohttp import ClientError, ClientSession
from err.exceptions import ModemNotOkError, TransportError
from surfbeam2 import metrics
from surfbeam2.models import ModemInfo, StatusSnapshot, TriaInfo
from util.const import CGI_PATH

log = structlog.get_logger(__name__)


async def fetch_status_page(cs: ClientSession, base_url: str, page: str) -> str:
    """
    Requests one of the CGI status pages and returns the body once it has been fully received.

    No login, no cookies, no CSRF; the status pages are open to anybody on the LAN side of the modem.

    Raises:
        ModemNotOkError: modem answered with something other than 200/OK
        TransportError: no usable answer at all
    """
    url = f"{base_url.rstrip('/')}{CGI_PATH}"

    with metrics.s_meta_request_time.labels(page).time():
        try:
            async with cs.get(url, params={"page": page}) as resp:
                metrics.c_meta_scrape_result.labels(resp.status, page).inc()
                if resp.status != 200:
                    raise ModemNotOkError(
                        f"Failed to get {page}. Status={resp.status}.",
                        status_code=resp.status,
                    )
                # Body is plain text; don't let one stray byte throw the whole page away
                body = await resp.text(errors="replace")
                log.debug("Got page", page=page, size=len(body))
                return body
        except (ClientError, asyncio.TimeoutError) as e:
            metrics.c_meta_scrape_result.labels("error", page).inc()
            raise TransportError(f"Failed to get {page}: {e!r}") from e


def update_modem_metrics(info: ModemInfo) -> None:
    """Push a decoded modem record into the prometheus metrics."""
    # Strings that rarely change go into Info()
    metrics.i_modem_info.info(
        {
            "ip_address": info.ip_address,
            "mac_address": info.mac_address,
            "sw_version": info.sw_version,
            "hw_version": info.hw_version,
            "serial_number": info.serial_number,
            "part_number": info.part_number,
            "ifl_type": info.ifl_type,
            "vendor": info.vendor,
            "beam_data_table_version": info.beam_data_table_version,
            "downlink_modulation": info.downlink_modulation,
        }
    )
    metrics.e_modem_state.state(info.modem_state.value)
    metrics.e_modem_beam_color.state(info.beam_color.value)

    metrics.g_modem_packets.labels("rx").set(info.rx_packets)
    metrics.g_modem_packets.labels("tx").set(info.tx_packets)
    metrics.g_modem_bytes.labels("rx").set(info.rx_bytes)
    metrics.g_modem_bytes.labels("tx").set(info.tx_bytes)
    metrics.g_modem_loss_of_sync_count.set(info.loss_of_sync_count)

    metrics.g_modem_rx_snr_db.set(info.rx_snr_db)
    metrics.g_modem_rx_power_dbm.set(info.rx_power_dbm)
    metrics.g_modem_cable_attenuation_db.set(info.cable_attenuation_db)
    metrics.g_modem_cable_resistance_ohm.set(info.cable_resistance_ohm)

    metrics.g_modem_percent.labels("rx_snr", "device").set(info.rx_snr_percent)
    metrics.g_modem_percent.labels("rx_snr", "derived").set(info.derived_rx_snr_percent)
    metrics.g_modem_percent.labels("rx_power", "device").set(info.rx_power_percent)
    metrics.g_modem_percent.labels("rx_power", "derived").set(
        info.derived_rx_power_percent
    )
    metrics.g_modem_percent.labels("cable_attenuation", "device").set(
        info.cable_attenuation_percent
    )
    metrics.g_modem_percent.labels("cable_attenuation", "derived").set(
        info.derived_cable_attenuation_percent
    )
    # No formula for this one, only what the modem says
    metrics.g_modem_percent.labels("cable_resistance", "device").set(
        info.cable_resistance_percent
    )

    metrics.g_modem_symbol_rate.labels("uplink").set(info.uplink_symbol_rate)
    metrics.g_modem_symbol_rate.labels("downlink").set(info.downlink_symbol_rate)


def update_tria_metrics(info: TriaInfo) -> None:
    """Push a decoded TRIA record into the prometheus metrics."""
    metrics.i_tria_info.info(
        {
            "serial_number": info.serial_number,
            "fw_version": info.fw_version,
            "power_mode": info.power_mode,
            "polarization": info.polarization.value,
            "ifl_type": info.ifl_type,
            "vendor": info.vendor,
        }
    )
    metrics.e_tria_beam_color.state(info.beam_color.value)

    metrics.g_tria_tx_power_dbm.labels("if").set(info.tx_if_power_dbm)
    metrics.g_tria_tx_power_dbm.labels("rf").set(info.tx_rf_power_dbm)
    metrics.g_tria_temperature_celsius.set(info.temperature_celsius)

    metrics.g_tria_percent.labels("tx_if_power", "device").set(info.tx_if_power_percent)
    metrics.g_tria_percent.labels("tx_if_power", "derived").set(
        info.derived_tx_if_power_percent
    )
    metrics.g_tria_percent.labels("tx_rf_power", "device").set(info.tx_rf_power_percent)
    metrics.g_tria_percent.labels("tx_rf_power", "derived").set(
        info.derived_tx_rf_power_percent
    )


def update_status_metrics(snapshot: StatusSnapshot) -> None:
    """Display sink: both records, every time either one changes."""
    update_modem_metrics(snapshot.modem)
    update_tria_metrics(snapshot.tria)

"""
Tests for the HTTP side and the prometheus sink, against a throwaway aiohttp server standing in for the modem.
"""

from functools import partial

import pytest
import pytest_asyncio
from aiohttp import ClientSession, test_utils, web
from prometheus_client import REGISTRY

from conftest import MODEM_FIELDS, TRIA_FIELDS, build_page
from err.exceptions import ModemNotOkError, TransportError
from surfbeam2 import parse, scrape
from surfbeam2.models import StatusSnapshot
from surfbeam2.poll import PipelineState, StatusPipeline
from surfbeam2.schema import MODEM_SCHEMA, TRIA_SCHEMA


async def _status_handler(request: web.Request) -> web.Response:
    page = request.query.get("page")
    if page == "modemStatusData":
        return web.Response(text=build_page(MODEM_FIELDS, 81))
    if page == "triaStatusData":
        return web.Response(text=build_page(TRIA_FIELDS, 84))
    return web.Response(status=500, text="unknown page")


@pytest_asyncio.fixture
async def modem_url():
    app = web.Application()
    app.router.add_get("/index.cgi", _status_handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    yield f"http://{server.host}:{server.port}"
    await server.close()


@pytest_asyncio.fixture
async def session():
    async with ClientSession() as cs:
        yield cs


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {})


@pytest.mark.asyncio
async def test_fetch_status_page(session, modem_url):
    before = _sample(
        "meta_scrape_result_total", {"http_code": "200", "scrape_target": "triaStatusData"}
    ) or 0.0

    body = await scrape.fetch_status_page(session, modem_url, "triaStatusData")

    assert body == build_page(TRIA_FIELDS, 84)
    after = _sample(
        "meta_scrape_result_total", {"http_code": "200", "scrape_target": "triaStatusData"}
    )
    assert after == before + 1


@pytest.mark.asyncio
async def test_fetch_non_200(session, modem_url):
    with pytest.raises(ModemNotOkError) as exc_info:
        await scrape.fetch_status_page(session, modem_url, "bogusPage")

    assert exc_info.value.status_code == 500
    # Non-200 is still a transport problem as far as the poller is concerned
    assert isinstance(exc_info.value, TransportError)


@pytest.mark.asyncio
async def test_fetch_connection_refused(session):
    # Start and stop a server to get a port that nothing is listening on
    server = test_utils.TestServer(web.Application())
    await server.start_server()
    url = f"http://{server.host}:{server.port}"
    await server.close()

    with pytest.raises(TransportError):
        await scrape.fetch_status_page(session, url, "modemStatusData")


@pytest.mark.asyncio
async def test_pipeline_against_server(session, modem_url):
    fetch = partial(scrape.fetch_status_page, session, modem_url)
    pipeline = StatusPipeline("modem", "modemStatusData", MODEM_SCHEMA, fetch)

    await pipeline.start()

    assert pipeline.last_outcome is PipelineState.COMPLETE
    assert pipeline.record.part_number == "1234567-001"


def test_update_status_metrics(modem_page, tria_page):
    snapshot = StatusSnapshot(
        modem=parse.decode(modem_page, MODEM_SCHEMA),
        tria=parse.decode(tria_page, TRIA_SCHEMA),
    )

    scrape.update_status_metrics(snapshot)

    assert _sample("surfbeam2_modem_rx_snr_db") == 12.5
    assert _sample("surfbeam2_modem_bytes", {"direction": "rx"}) == 9_876_543_210
    assert _sample("surfbeam2_modem_state", {"surfbeam2_modem_state": "online"}) == 1
    assert _sample("surfbeam2_modem_state", {"surfbeam2_modem_state": "dhcp"}) == 0
    assert _sample(
        "surfbeam2_modem_percent", {"measurement": "rx_snr", "source": "device"}
    ) == 55
    assert _sample(
        "surfbeam2_modem_percent", {"measurement": "rx_snr", "source": "derived"}
    ) == pytest.approx(10.71429 + 12.5 * 3.57143)
    assert _sample("surfbeam2_tria_temperature_celsius") == 41.0
    assert _sample("surfbeam2_tria_tx_power_dbm", {"stage": "rf"}) == 30.25
    assert _sample(
        "surfbeam2_tria_beam_color", {"surfbeam2_tria_beam_color": "green"}
    ) == 1
    info = {
        "serial_number": "TRIA-998877",
        "fw_version": "TRIA_1.2.3",
        "power_mode": "Normal",
        "polarization": "circular_right",
        "ifl_type": "RG6",
        "vendor": "ViaSat",
    }
    assert _sample("surfbeam2_tria_info", info) == 1

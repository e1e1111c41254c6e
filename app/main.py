#!/usr/bin/env python3
"""
Main / entry point for the SurfBeam 2 status exporter.

"""
import asyncio
from functools import partial
from os import getenv

import structlog
from aiohttp import ClientSession
from prometheus_client import start_http_server
from surfbeam2.poll import Poller, StatusPipeline
from surfbeam2.render import log_status
from surfbeam2.schema import MODEM_SCHEMA, TRIA_SCHEMA
from surfbeam2.scrape import fetch_status_page, update_status_metrics
from util.const import (
    FIELD_COUNT_MODEM,
    FIELD_COUNT_TRIA,
    MODEM_PAGE,
    REQUEST_HEADERS,
    TRIA_PAGE,
    LogLevel,
)

# A handful of env-vars is all the configuration this needs.
##
# Modem always sits on this address; there's no setting for it in the modem UI
MODEM_BASE_URL = getenv("MODEM_BASE_URL", "http://192.168.100.1")

POLL_INTERVAL_MS = int(getenv("POLL_INTERVAL_MS", "500"))

# If a firmware update changes the page layout, these are the first thing to check.
MODEM_FIELD_COUNT = int(getenv("MODEM_FIELD_COUNT", str(FIELD_COUNT_MODEM)))
TRIA_FIELD_COUNT = int(getenv("TRIA_FIELD_COUNT", str(FIELD_COUNT_TRIA)))

METRICS_PORT = int(getenv("METRICS_PORT", "8082"))

# Log the rendered status on every update. At 500ms that's chatty so it can be turned off.
LOG_STATUS = getenv("LOG_STATUS", "true").lower() in ("1", "true", "yes")


if getenv("LOG_LEVEL") not in LogLevel.__members__ or getenv("LOG_LEVEL") is None:
    print(f"Defaulting to {LogLevel.INFO} log level")
    log_level = LogLevel.INFO
else:
    log_level = LogLevel[getenv("LOG_LEVEL")]  # type: ignore
    print(f"Using log level {log_level.value}")


structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(log_level.value)
)

log = structlog.get_logger(__name__)


async def main():
    """Main entry point."""
    log.info("Starting up", modem=MODEM_BASE_URL)

    # Schema validation happens here too; a bad count override fails right away
    modem_schema = MODEM_SCHEMA.with_count(MODEM_FIELD_COUNT)
    tria_schema = TRIA_SCHEMA.with_count(TRIA_FIELD_COUNT)

    server, _ = start_http_server(port=METRICS_PORT)
    log.info("Metrics server started", server=server.server_address)

    sinks = [update_status_metrics]
    if LOG_STATUS:
        sinks.append(log_status)

    async with ClientSession(headers=REQUEST_HEADERS) as client:
        fetch = partial(fetch_status_page, client, MODEM_BASE_URL)
        poller = Poller(
            modem=StatusPipeline("modem", MODEM_PAGE, modem_schema, fetch),
            tria=StatusPipeline("tria", TRIA_PAGE, tria_schema, fetch),
            interval_seconds=POLL_INTERVAL_MS / 1000,
            sinks=sinks,
        )
        try:
            await poller.run()
        finally:
            await poller.aclose()


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Shutting down")


if __name__ == "__main__":
    run()

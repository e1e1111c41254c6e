"""
Periodic polling of the status pages.

Each page gets its own StatusPipeline; both are kicked off on every tick regardless of whether the previous
request has come back yet. The modem's CGI is slow under load so requests can and do overlap. Every request is
tagged with a generation number. Starting a new request cancels the one still in flight, and a reply that
somehow comes back after a newer request was started is dropped.
"""

import asyncio
from enum import Enum
from typing import Awaitable, Callable

import structlog
from err.exceptions import NumericFormatError, SchemaMismatchError, TransportError
from surfbeam2 import metrics, parse
from surfbeam2.models import ModemInfo, StatusSnapshot, TriaInfo
from surfbeam2.schema import Schema

log = structlog.get_logger(__name__)

# page name -> full response body
Fetcher = Callable[[str], Awaitable[str]]
Sink = Callable[[StatusSnapshot], None]


class PipelineState(Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    COMPLETE = "complete"
    SCHEMA_MISMATCH = "schema_mismatch"
    DECODE_ERROR = "decode_error"
    TRANSPORT_ERROR = "transport_error"


class StatusPipeline:
    """Fetch -> decode -> replace for one status page."""

    def __init__(
        self,
        name: str,
        page: str,
        schema: Schema,
        fetch: Fetcher,
        on_record: Callable[["StatusPipeline"], None] | None = None,
    ):
        self.name = name
        self.page = page
        self.schema = schema
        self._fetch = fetch
        self.on_record = on_record

        # Empty record until the first good decode
        self.record = schema.record_cls()
        self.generation = 0
        self.last_outcome = PipelineState.IDLE
        # Strong refs so cancelled tasks aren't garbage collected before they unwind
        self._tasks: set[asyncio.Task] = set()
        self._current: asyncio.Task | None = None

    @property
    def state(self) -> PipelineState:
        if self._current is not None and not self._current.done():
            return PipelineState.REQUESTING
        return PipelineState.IDLE

    def start(self) -> asyncio.Task:
        """Start a new request. Whatever is still in flight from before is cancelled."""
        if self._current is not None and not self._current.done():
            log.debug("Abandoning request", pipeline=self.name, generation=self.generation)
            metrics.c_meta_parse_result.labels(self.name, "superseded").inc()
            self._current.cancel()

        self.generation += 1
        task = asyncio.create_task(
            self._run(self.generation), name=f"{self.name}-{self.generation}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._current = task
        return task

    async def _run(self, generation: int) -> None:
        try:
            raw = await self._fetch(self.page)
        except TransportError as e:
            # Next tick tries again; nothing else to do
            log.warning("Request failed", pipeline=self.name, error=e)
            self._finish(generation, PipelineState.TRANSPORT_ERROR)
            return

        if generation != self.generation:
            log.debug(
                "Dropping late reply",
                pipeline=self.name,
                generation=generation,
                current=self.generation,
            )
            return

        try:
            record = parse.decode(raw, self.schema)
        except SchemaMismatchError as e:
            # Keep the last good record. If this keeps happening the firmware changed the page layout.
            log.warning(
                "Field count mismatch. Firmware update?",
                pipeline=self.name,
                expected=e.expected,
                actual=e.actual,
            )
            metrics.c_meta_parse_result.labels(self.name, "schema_mismatch").inc()
            self._finish(generation, PipelineState.SCHEMA_MISMATCH)
            return
        except NumericFormatError as e:
            log.error(
                "Failed to decode numeric field",
                pipeline=self.name,
                field=e.field,
                raw=e.raw,
            )
            metrics.c_meta_parse_result.labels(self.name, "numeric_format").inc()
            self._finish(generation, PipelineState.DECODE_ERROR)
            return

        metrics.c_meta_parse_result.labels(self.name, "ok").inc()
        self.record = record
        self._finish(generation, PipelineState.COMPLETE)
        if self.on_record is not None:
            self.on_record(self)

    def _finish(self, generation: int, outcome: PipelineState) -> None:
        # A stale request doesn't get to report on behalf of the current one
        if generation == self.generation:
            self.last_outcome = outcome

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)


class Poller:
    """Ticks the modem and TRIA pipelines and hands every new snapshot to the sinks."""

    def __init__(
        self,
        modem: StatusPipeline,
        tria: StatusPipeline,
        interval_seconds: float,
        sinks: list[Sink] | None = None,
    ):
        self.modem = modem
        self.tria = tria
        self.interval_seconds = interval_seconds
        self.sinks = list(sinks or [])
        self.snapshot = StatusSnapshot(modem=modem.record, tria=tria.record)

        modem.on_record = self._on_record
        tria.on_record = self._on_record

    @property
    def pipelines(self) -> tuple[StatusPipeline, StatusPipeline]:
        return self.modem, self.tria

    def tick(self) -> list[asyncio.Task]:
        return [p.start() for p in self.pipelines]

    async def run(self) -> None:
        log.info("Polling", interval_seconds=self.interval_seconds)
        while True:
            self.tick()
            await asyncio.sleep(self.interval_seconds)

    async def aclose(self) -> None:
        await asyncio.gather(*(p.aclose() for p in self.pipelines))

    def _on_record(self, _pipeline: StatusPipeline) -> None:
        modem: ModemInfo = self.modem.record
        tria: TriaInfo = self.tria.record
        # New object every time; sinks holding on to the old one never see it change
        self.snapshot = StatusSnapshot(modem=modem, tria=tria)
        for sink in self.sinks:
            # pylint: disable=broad-exception-caught
            try:
                sink(self.snapshot)
            except Exception as e:
                log.error("Display sink failed", sink=sink, error=e)

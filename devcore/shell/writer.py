"""Debounced snapshot writer.

Every committed change re-arms a single timer on the event loop.  Only when
the quiet interval passes without another change is the latest state turned
into a snapshot and handed to the persistence port, so a burst of drag or
resize updates costs one write.

Writes never overlap.  A single drain task saves whatever state is due; if
the timer fires again while a save is running, the newer state waits and is
written as soon as the current save finishes.  Only the newest due state is
kept, so the snapshot on disk always converges to the last committed state.

``close()`` cancels the timer and drops any state not yet handed to the
port; a save that already started runs to completion.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from devcore.shell.models.snapshot import ShellSnapshot, build_snapshot

if TYPE_CHECKING:
    from devcore.shell.models.state import ShellState
    from devcore.shell.persistence import PersistencePort

log = logger.bind(component="writer")


class WriterClosedError(RuntimeError):
    """Raised when scheduling on a writer that has been closed."""


class DebouncedWriter:
    def __init__(
        self,
        port: PersistencePort,
        *,
        delay: float = 0.5,
        loop: asyncio.AbstractEventLoop | None = None,
        snapshot_factory: Callable[[ShellState], ShellSnapshot] = build_snapshot,
    ) -> None:
        self._port = port
        self._delay = delay
        self._loop = loop or asyncio.get_running_loop()
        self._snapshot_factory = snapshot_factory
        self._handle: asyncio.TimerHandle | None = None
        # Armed but still inside the quiet interval.
        self._pending: ShellState | None = None
        # Quiet interval over, waiting for the drain task.
        self._due: ShellState | None = None
        self._drain_task: asyncio.Task[None] | None = None
        self._lock = asyncio.Lock()
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def writing(self) -> bool:
        return self._drain_task is not None and not self._drain_task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, state: ShellState) -> None:
        """(Re)arm the timer to persist ``state`` after the quiet interval."""
        if self._closed:
            raise WriterClosedError
        if self._handle is not None:
            self._handle.cancel()
        self._pending = state
        self._handle = self._loop.call_later(self._delay, self._fire)
        log.trace("snapshot scheduled in {}s", self._delay)

    def cancel(self) -> None:
        """Drop the pending write, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = None
        self._due = None

    def close(self) -> None:
        """Cancel the pending write and refuse further scheduling."""
        if self._handle is not None or self._due is not None:
            log.debug("closed with a pending write, discarding it")
        self.cancel()
        self._closed = True

    async def flush(self) -> bool:
        """Write the newest pending state now instead of waiting for the timer."""
        state = self._pending if self._pending is not None else self._due
        self.cancel()
        await self.wait_idle()
        if state is None:
            return False
        return await self._write(state)

    async def wait_idle(self) -> None:
        """Wait until the drain task has written everything that was due."""
        if self._drain_task is not None:
            await self._drain_task

    def _fire(self) -> None:
        self._handle = None
        self._due, self._pending = self._pending, None
        if self._due is None or self.writing:
            return
        self._drain_task = self._loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._due is not None:
            state, self._due = self._due, None
            await self._write(state)

    async def _write(self, state: ShellState) -> bool:
        async with self._lock:
            return await self._port.save(self._snapshot_factory(state))

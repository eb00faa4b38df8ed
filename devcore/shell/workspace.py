"""Workspace store -- owns the shell state and is its only mutation surface.

``WorkspaceStore.dispatch`` runs the reducer, commits the result, notifies
subscribers and arms the debounced writer, all before returning.  Dispatches
are applied strictly in call order; only the persistence write is coalesced.

``open_workspace_store`` builds a store at startup: it asks the persistence
port for a snapshot (only available with consent), merges it into the default
state and attaches a debounced writer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from devcore.shell.models.state import ShellState
from devcore.shell.reducer import InstanceIdFactory, new_instance_id, reduce
from devcore.shell.writer import DebouncedWriter

if TYPE_CHECKING:
    from devcore.shell.models.actions import Action
    from devcore.shell.models.snapshot import ShellSnapshot
    from devcore.shell.persistence import PersistencePort

log = logger.bind(component="store")

Subscriber = Callable[[ShellState], None]


class StoreClosedError(RuntimeError):
    """Raised when dispatching to a store that has been closed."""


class WorkspaceStore:
    def __init__(
        self,
        initial: ShellState | None = None,
        *,
        writer: DebouncedWriter | None = None,
        id_factory: InstanceIdFactory = new_instance_id,
    ) -> None:
        self._state = initial if initial is not None else ShellState()
        self._writer = writer
        self._id_factory = id_factory
        self._subscribers: list[Subscriber] = []
        self._closed = False

    @property
    def state(self) -> ShellState:
        return self._state

    @property
    def writer(self) -> DebouncedWriter | None:
        return self._writer

    @property
    def closed(self) -> bool:
        return self._closed

    # -- Mutation --------------------------------------------------------------

    def dispatch(self, action: Action) -> ShellState:
        """Apply ``action`` and return the committed state.

        Subscribers have seen the new state by the time this returns.  A
        subscriber that raises propagates to the caller; the state is already
        committed at that point.
        """
        if self._closed:
            raise StoreClosedError
        previous = self._state
        state = reduce(previous, action, id_factory=self._id_factory)
        if state is previous:
            log.trace("{} left state unchanged", type(action).__name__)
            return state

        self._state = state
        log.debug("applied {}", type(action).__name__)

        if self._writer is not None and (
            state.workspace is not previous.workspace or state.settings is not previous.settings
        ):
            self._writer.schedule(state)

        for subscriber in list(self._subscribers):
            subscriber(state)
        return state

    # -- Subscription ----------------------------------------------------------

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register ``subscriber``; returns a function that unregisters it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    # -- Lifecycle -------------------------------------------------------------

    def close(self) -> None:
        """Tear down: cancel any pending write and drop subscribers."""
        if self._writer is not None:
            self._writer.close()
        self._subscribers.clear()
        self._closed = True

    async def flush(self) -> bool:
        """Persist the pending state immediately.  Returns ``True`` if written."""
        if self._writer is None:
            return False
        return await self._writer.flush()


def hydrate_state(snapshot: ShellSnapshot | None, default: ShellState | None = None) -> ShellState:
    """Merge a persisted snapshot into ``default``.

    The session always comes from ``default``.  A restored workspace has no
    active window, and ``z_counter`` is raised to cover every restored
    ``z_index`` so new windows still stack on top.
    """
    state = default if default is not None else ShellState()
    if snapshot is None:
        return state

    update: dict = {}
    if snapshot.workspace is not None:
        workspace = snapshot.workspace
        top = max((app.z_index for app in workspace.apps.values()), default=workspace.z_counter)
        update["workspace"] = workspace.model_copy(
            update={
                "apps": {k: app.model_copy(update={"props": {}}) for k, app in workspace.apps.items()},
                "active_app_instance_id": None,
                "z_counter": max(workspace.z_counter, top),
            }
        )
    if snapshot.settings is not None:
        # Fields missing from the snapshot keep the default's value.
        stored = {name: getattr(snapshot.settings, name) for name in snapshot.settings.model_fields_set}
        update["settings"] = state.settings.model_copy(update=stored)
    return state.model_copy(update=update)


async def open_workspace_store(
    port: PersistencePort,
    *,
    default: ShellState | None = None,
    debounce: float = 0.5,
    id_factory: InstanceIdFactory = new_instance_id,
) -> WorkspaceStore:
    """Create a store hydrated from ``port``.

    Startup consent only decides whether a snapshot is restored.  The writer
    is always attached and the port checks consent on every save, so consent
    granted later in the session applies from the next change on.
    """
    snapshot = await port.load()
    state = hydrate_state(snapshot, default)
    if snapshot is not None:
        log.info("restored {} window(s) from snapshot", len(state.workspace.apps))
    writer = DebouncedWriter(port, delay=debounce)
    return WorkspaceStore(state, writer=writer, id_factory=id_factory)

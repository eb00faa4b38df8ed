import asyncio
import json
from pathlib import Path

import click
from pydantic import ValidationError


@click.group()
@click.option("--data-root", default=None, help="Storage root (default: from DEVCORE_DATA_ROOT or ./data).")
@click.option("--prefix", default=None, help="Namespace inside the data root (default: from DEVCORE_DATA_PREFIX).")
@click.pass_context
def main(ctx: click.Context, data_root: str | None, prefix: str | None) -> None:
    """Devcore shell - workspace window state and local persistence."""
    from devcore.shell.log import setup_logging
    from devcore.shell.settings import get_settings

    settings = get_settings()
    overrides = {}
    if data_root is not None:
        overrides["data_root"] = data_root
    if prefix is not None:
        overrides["data_prefix"] = prefix
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(settings)
    ctx.obj = settings


def _port(ctx: click.Context):
    from devcore.shell.persistence import create_port

    return create_port(ctx.obj)


# ---------------------------------------------------------------------------
# Consent
# ---------------------------------------------------------------------------


@main.group()
def consent() -> None:
    """Manage the local storage consent flag."""


@consent.command()
@click.pass_context
def grant(ctx: click.Context) -> None:
    """Allow the shell to keep its workspace on disk."""
    asyncio.run(_port(ctx).grant_consent())
    click.echo("Local storage consent granted.")


@consent.command()
@click.pass_context
def revoke(ctx: click.Context) -> None:
    """Withdraw consent and delete the stored snapshot."""
    asyncio.run(_port(ctx).revoke_consent())
    click.echo("Local storage consent revoked; snapshot removed.")


@consent.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show whether consent is granted."""
    granted = asyncio.run(_port(ctx).has_consent())
    click.echo("granted" if granted else "not granted")


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


@main.group()
def snapshot() -> None:
    """Inspect or remove the stored workspace snapshot."""


@snapshot.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the stored snapshot."""
    from devcore.shell.models.snapshot import parse_snapshot

    raw = asyncio.run(_port(ctx).read_raw())
    if not raw:
        click.echo("No snapshot stored.")
        return
    parsed = parse_snapshot(raw)
    if parsed is None:
        raise click.ClickException("Stored snapshot is malformed and would be ignored at startup.")
    click.echo(parsed.model_dump_json(by_alias=True, indent=2))


@snapshot.command()
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Delete the stored snapshot (consent is kept)."""
    asyncio.run(_port(ctx).clear())
    click.echo("Snapshot cleared.")


# ---------------------------------------------------------------------------
# Replay
# ---------------------------------------------------------------------------


@main.command()
@click.argument("actions_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def replay(ctx: click.Context, actions_file: Path) -> None:
    """Apply a JSON array of actions to the stored workspace.

    The workspace is restored from the snapshot (when consent is granted),
    each action is dispatched in order and the result is written back.
    """
    from devcore.shell.models.actions import parse_actions

    try:
        actions = parse_actions(json.loads(actions_file.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise click.ClickException(f"Invalid actions file: {exc}") from None

    state, saved = asyncio.run(_replay(ctx.obj, actions))
    click.echo(state.workspace.model_dump_json(by_alias=True, indent=2))
    if not saved:
        click.echo("Snapshot not written (no consent or nothing changed).", err=True)


async def _replay(settings, actions):
    from devcore.shell.persistence import create_port
    from devcore.shell.workspace import open_workspace_store

    store = await open_workspace_store(create_port(settings), debounce=settings.persist_debounce)
    try:
        for action in actions:
            store.dispatch(action)
        saved = await store.flush()
    finally:
        store.close()
    return store.state, saved


if __name__ == "__main__":
    main()

"""DeskUp CLI - Personal desktop dashboard."""

import json
import logging
import sys
import time
from dataclasses import asdict

import click
import requests

from .adapters import LaunchError, NotConfiguredError, NotionAdapter, get_launcher
from .config import CONFIG_FILE, ConfigError, Settings, ensure_settings
from .core.dashboard import DashboardState, build_panel
from .refresh import Dashboard


def _load() -> Settings:
    """Load settings or exit; a broken settings file is fatal."""
    try:
        return ensure_settings()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _snapshot_json(state: DashboardState) -> dict:
    def serialize(snapshot):
        value = snapshot.value
        if isinstance(value, list):
            value = [asdict(v) for v in value]
        elif value is not None:
            value = asdict(value)
        return {"status": snapshot.status.value, "value": value, "error": snapshot.error}

    return {
        "weather": serialize(state.weather),
        "joke": serialize(state.joke),
        "anniversaries": serialize(state.anniversaries),
        "holidays": serialize(state.holidays),
        "tasks": serialize(state.tasks),
    }


@click.group(invoke_without_command=True)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option()
@click.pass_context
def main(ctx, debug: bool):
    """DeskUp - personal desktop dashboard."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
def run():
    """Open the dashboard window."""
    settings = _load()

    try:
        from .ui.window import DashboardWindow
    except ImportError as e:
        click.echo("Error: tkinter is not available in this Python installation", err=True)
        click.echo(f"Details: {e}", err=True)
        sys.exit(1)

    window = DashboardWindow(Dashboard(settings), get_launcher(), CONFIG_FILE)
    try:
        window.run()
    except KeyboardInterrupt:
        window.close()


@main.command()
def init():
    """Create the settings file if it does not exist."""
    existed = CONFIG_FILE.exists()
    _load()
    if existed:
        click.echo(f"Settings already exist at {CONFIG_FILE}")
    else:
        click.echo(f"Created {CONFIG_FILE}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--wait", default=15.0, show_default=True, help="Seconds to wait for data")
def show(as_json: bool, wait: float):
    """Fetch everything once and print the dashboard."""
    settings = _load()
    dashboard = Dashboard(settings)
    dashboard.start()
    try:
        dashboard.refresh()
        deadline = time.monotonic() + wait
        while not dashboard.snapshot().all_terminal() and time.monotonic() < deadline:
            time.sleep(0.1)
        state = dashboard.snapshot()
    finally:
        dashboard.shutdown()

    if as_json:
        click.echo(json.dumps(_snapshot_json(state), indent=2, ensure_ascii=False))
    else:
        click.echo(build_panel(state, settings).to_text())


@main.command("open")
@click.argument("name")
def open_bookmark(name: str):
    """Launch a bookmark by its display name."""
    settings = _load()
    bookmark = settings.bookmarks.find(name)
    if bookmark is None:
        click.echo(f"Error: no bookmark named {name!r}", err=True)
        sys.exit(1)

    try:
        get_launcher().launch(bookmark.url)
    except LaunchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tasks(as_json: bool):
    """List open tasks."""
    settings = _load()
    try:
        open_tasks = NotionAdapter.from_settings(settings).fetch_open()
    except NotConfiguredError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except requests.RequestException as e:
        click.echo(f"Error: Notion request failed: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([asdict(t) for t in open_tasks], indent=2, ensure_ascii=False))
    else:
        if not open_tasks:
            click.echo("No open tasks.")
            return

        for task in open_tasks:
            click.echo(f"[ ] {task.title}  ({task.id})")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Mark a task done."""
    settings = _load()
    try:
        NotionAdapter.from_settings(settings).mark_done(task_id)
    except NotConfiguredError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except requests.RequestException as e:
        click.echo(f"Error: Notion request failed: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Marked {task_id} done")


if __name__ == "__main__":
    main()

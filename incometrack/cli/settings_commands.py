"""Settings CLI commands (settings.json)."""

import json
from pathlib import Path

import click

from incometrack.sdk import (
    clear_setting,
    get_data_path,
    get_default_data_path,
    get_setting,
    get_settings_path,
    load_settings,
    set_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    \b
    Known keys:
      data_dir   where work days are stored
    """
    pass


@settings.command("show")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", help="Output format.")
def settings_show(output_format: str):
    """Show settings.json contents and the effective data directory."""
    current = load_settings()
    effective = {
        "settings_file": str(get_settings_path()),
        "settings": current,
        "data_dir": str(get_data_path()),
        "data_dir_is_default": "data_dir" not in current,
    }

    if output_format == "json":
        click.echo(json.dumps(effective, indent=2))
        return

    marker = " (default)" if effective["data_dir_is_default"] else ""
    click.echo(f"Settings file: {effective['settings_file']}")
    if current:
        for key in sorted(current):
            click.echo(f"  {key} = {current[key]}")
    else:
        click.echo("  (empty)")
    click.echo(f"Data directory: {effective['data_dir']}{marker}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--clear", is_flag=True, help="Remove the custom data_dir.")
def settings_data_dir(path, clear):
    """Show, set or clear the data directory.

    \b
    Examples:
        income-track settings data-dir
        income-track settings data-dir ~/finance/income-track
        income-track settings data-dir --clear
    """
    if clear:
        if not clear_setting("data_dir"):
            click.echo("data_dir was not set.")
            return
        click.echo(f"Cleared data_dir. Using {get_default_data_path()}")
        return

    if not path:
        configured = get_setting("data_dir")
        click.echo(configured or f"{get_default_data_path()} (default)")
        return

    data_path = Path(path).expanduser().resolve()
    try:
        data_path.mkdir(parents=True, exist_ok=True)
        write_check = data_path / ".write_test"
        write_check.touch()
        write_check.unlink()
    except OSError as e:
        raise click.ClickException(f"Data directory is not usable: {data_path}\n{e}")

    saved_to = set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path} (saved to {saved_to})")

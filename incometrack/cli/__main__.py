"""Income Track CLI - Command-line interface for work-day income and taxes."""

import click

from incometrack import __version__

from .settings_commands import settings as settings_group
from .taxes_commands import taxes as taxes_group
from .workdays_commands import workdays as workdays_group


@click.group()
@click.version_option(version=__version__, prog_name="income-track")
def cli():
    """Income Track - work-day income and Romanian income tax tools.

    Record worked days, review monthly totals, and calculate yearly income
    tax, health insurance and social insurance.

    Settings are loaded from (in order):

    \b
    1. INCOME_TRACK_CONFIG_PATH environment variable
    2. ~/.config/income-track/settings.json (XDG default)

    Run 'income-track settings show' to see where data is stored.
    """
    pass


cli.add_command(settings_group)
cli.add_command(taxes_group)
cli.add_command(workdays_group)


def main():
    cli()


if __name__ == "__main__":
    main()

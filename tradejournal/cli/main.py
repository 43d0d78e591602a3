"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their
    commands is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        attr = getattr(module, cmd_name, None)
        if isinstance(attr, click.Command):
            cmd = attr
        else:
            # Fall back to a command registered under the same name
            cmd = None
            for attr_name in dir(module):
                candidate = getattr(module, attr_name)
                if isinstance(candidate, click.Command) and candidate.name == cmd_name:
                    cmd = candidate
                    break

            if cmd is None:
                raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Records
    "trade": "tradejournal.cli.trades",
    "day": "tradejournal.cli.trades",
    "dream": "tradejournal.cli.dreams",
    # Account
    "balance": "tradejournal.cli.account",
    "clear": "tradejournal.cli.account",
    "init": "tradejournal.cli.account",
    # Statistics
    "stats": "tradejournal.cli.stats",
    "equity": "tradejournal.cli.stats",
    "calendar": "tradejournal.cli.stats",
    # Reports
    "report": "tradejournal.cli.reports",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeJournal - personal trading journal and performance dashboard.

    Record up to four trades a day, keep a journal of trading dreams,
    and review win rate, profit factor, streaks and account growth.

    \b
    Quick Start:
      tradejournal balance set 10000                      # Set your starting balance
      tradejournal trade add -n 1 --pair EURUSD \\
          --strategy Breakout --pnl 120                   # Record a trade
      tradejournal stats                                  # Performance summary
      tradejournal report dashboard --pdf                 # Export a PDF report
    """
    from tradejournal.config import load_settings
    from tradejournal.log import setup_logging

    settings = load_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

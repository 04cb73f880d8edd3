from __future__ import annotations

import typer

from devverify.cli.commands.verify import verify

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)

app.command()(verify)


def main() -> None:
    app()

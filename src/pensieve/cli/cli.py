"""CLI entrypoint: Typer app definition and command registration"""

import typer

from pensieve.cli.commands import parse_cmd, render_cmd, styles_cmd


app = typer.Typer(name="pensieve", no_args_is_help=True, help="Render Pensieve notes with their schema styling")

app.command(name="render")(render_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="styles")(styles_cmd)

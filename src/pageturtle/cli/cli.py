"""CLI entrypoint: Typer app definition and command registration"""

import typer

from pageturtle.cli.commands import build_cmd, dev_cmd, init_cmd


app = typer.Typer(name="pageturtle", no_args_is_help=True, help="Static blog generator with live-reload dev server")

app.command(name="build")(build_cmd)
app.command(name="dev")(dev_cmd)
app.command(name="init")(init_cmd)

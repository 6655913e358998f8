"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsync.cli.commands import add_element_cmd, elements_cmd, font_add_cmd, import_cmd, init_cmd, show_cmd


app = typer.Typer(name="mdsync", no_args_is_help=True, help="Markdown to styled document element sync")

app.command(name="init")(init_cmd)
app.command(name="add-element")(add_element_cmd)
app.command(name="elements")(elements_cmd)
app.command(name="font-add")(font_add_cmd)
app.command(name="import")(import_cmd)
app.command(name="show")(show_cmd)

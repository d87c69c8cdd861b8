import typer

from .tac import print_lines_reversed
from .tail import print_last_lines
from .search import search_lines
from .chunk_plan import print_chunk_plan


app = typer.Typer(help="Read files line by line, last line first")
app.command("tac")(print_lines_reversed)
app.command("tail")(print_last_lines)
app.command("search")(search_lines)
app.command("chunks")(print_chunk_plan)


if __name__ == '__main__':
    app()

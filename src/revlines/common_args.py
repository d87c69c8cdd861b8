import sys
import logging
import typer
from contextlib import contextmanager
from dotenv import load_dotenv, find_dotenv
from pathlib import Path
from typing import Annotated

from .chunks import DEFAULT_CHUNK_SIZE
from .codec import DEFAULT_ENCODING
from .errors import RevLinesError

load_dotenv(find_dotenv(usecwd=True))

CHUNK_SIZE = DEFAULT_CHUNK_SIZE
ENCODING = DEFAULT_ENCODING
TERMINATOR = "platform"


PathsArg = Annotated[list[Path], typer.Argument(help="Path to the file(s), or directories of files, to read")]
PathArg = Annotated[Path, typer.Argument(help="Path to the file to read")]
EncodingArg = Annotated[str, typer.Option(help="Text encoding of the file(s)", envvar="LINE_ENCODING")]
ChunkSizeArg = Annotated[int, typer.Option(help="Maximum chunk size of a file to read at once", envvar="CHUNK_SIZE")]
TerminatorArg = Annotated[str, typer.Option(help="Line terminator: lf, crlf or platform", envvar="LINE_TERMINATOR")]
MaxLinesArg = Annotated[int, typer.Option(help="Max number of lines to print, 0 for no limit")]
VerboseArg = Annotated[bool, typer.Option("--verbose", "-v", help="Log each chunk fetch to stderr")]


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")


@contextmanager
def cli_errors():
    """ Turn library errors into an error message and a non-zero exit status """
    try:
        yield
    except BrokenPipeError:
        # Output was piped into a reader that stopped early, e.g. `head`
        sys.stderr.close()
    except RevLinesError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

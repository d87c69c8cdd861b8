import typer
from typing import Annotated
from contextlib import closing
from itertools import islice

from . import common_args as ca
from .codec import Terminator
from .file_utils import read_file_reverse


def print_last_lines(
        path: ca.PathArg,
        lines: Annotated[int, typer.Option("-n", "--lines", min=0, help="Number of lines to print")] = 10,
        encoding: ca.EncodingArg = ca.ENCODING,
        chunk_size: ca.ChunkSizeArg = ca.CHUNK_SIZE,
        terminator: ca.TerminatorArg = ca.TERMINATOR,
        verbose: ca.VerboseArg = False,
):
    """ Print the last lines of a file in their original order, reading only as
    many chunks from the end of the file as those lines need.
    """
    ca.configure_logging(verbose)

    with ca.cli_errors():
        with closing(read_file_reverse(path, chunk_size, encoding, Terminator.from_name(terminator))) as reversed_lines:
            last_lines = list(islice(reversed_lines, lines))

        for line in reversed(last_lines):
            print(line)

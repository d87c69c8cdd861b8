import re
import typer
from typing import Annotated
from contextlib import closing

from . import common_args as ca
from .codec import Terminator
from .file_utils import find_files, read_files_reverse
from .filters import FilterMode, line_matches


def search_lines(
        paths: ca.PathsArg,
        pattern: Annotated[str, typer.Option("-f", "--filter", help="Text that should appear in the line (or field)")],
        filter_mode: Annotated[FilterMode, typer.Option("-m", "--filter-mode", help="String comparison mode to use for filtering lines")] = FilterMode.RAW,
        field: Annotated[str, typer.Option(help="Match this field of JSON-formatted lines instead of the whole line")] = "",
        max_matches: Annotated[int, typer.Option(help="Stop after this many matches, 0 for no limit")] = 0,
        encoding: ca.EncodingArg = ca.ENCODING,
        chunk_size: ca.ChunkSizeArg = ca.CHUNK_SIZE,
        terminator: ca.TerminatorArg = ca.TERMINATOR,
        verbose: ca.VerboseArg = False,
):
    """ Print the lines matching a filter, most recent first. With --max-matches,
    only the end of the file(s) is read.
    """
    ca.configure_logging(verbose)

    if filter_mode == FilterMode.REGEX:
        try:
            re.compile(pattern)
        except re.error as e:
            raise typer.BadParameter(f"invalid regular expression: {e}", param_hint="'--filter'")

    matched_lines = 0
    with ca.cli_errors():
        lines = read_files_reverse(find_files(paths), chunk_size, encoding, Terminator.from_name(terminator))
        with closing(lines):
            for line in lines:
                if not line_matches(line, pattern, filter_mode, field):
                    continue
                print(line)
                matched_lines += 1
                if max_matches and matched_lines >= max_matches:
                    break

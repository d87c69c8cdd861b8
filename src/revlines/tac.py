from contextlib import closing

from . import common_args as ca
from .codec import Terminator
from .file_utils import find_files, read_files_reverse


def print_lines_reversed(
        paths: ca.PathsArg,
        max_lines: ca.MaxLinesArg = 0,
        encoding: ca.EncodingArg = ca.ENCODING,
        chunk_size: ca.ChunkSizeArg = ca.CHUNK_SIZE,
        terminator: ca.TerminatorArg = ca.TERMINATOR,
        verbose: ca.VerboseArg = False,
):
    """ Print the lines of each file, last line first. Directories are searched
    for files recursively.
    """
    ca.configure_logging(verbose)

    with ca.cli_errors():
        lines = read_files_reverse(find_files(paths), chunk_size, encoding, Terminator.from_name(terminator))
        with closing(lines):
            for idx, line in enumerate(lines):
                if max_lines and idx >= max_lines:
                    break
                print(line)

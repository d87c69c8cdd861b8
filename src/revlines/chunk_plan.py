import tabulate

from . import common_args as ca
from .codec import Terminator
from .file_utils import BackwardChunkReader


def print_chunk_plan(
        path: ca.PathArg,
        chunk_size: ca.ChunkSizeArg = ca.CHUNK_SIZE,
        encoding: ca.EncodingArg = ca.ENCODING,
        terminator: ca.TerminatorArg = ca.TERMINATOR,
        verbose: ca.VerboseArg = False,
):
    """ Show the byte ranges a backwards read of the file fetches, in fetch order
    """
    ca.configure_logging(verbose)

    with ca.cli_errors():
        with BackwardChunkReader(path, chunk_size, encoding, Terminator.from_name(terminator)) as reader:
            rows = [(idx, chunk.offset, chunk.end, chunk.length) for idx, chunk in enumerate(reader.chunk_plan())]
            size, scan_size = reader.size, reader.scan_size

    print(f"{path}: {size} bytes, {scan_size} scanned")
    print(tabulate.tabulate(rows, headers=["Fetch", "Offset", "End", "Length"], tablefmt='rounded_outline'))

import os
import gzip
import zlib
import logging
import magic
from pathlib import Path
from typing import Any, BinaryIO, Callable, Iterable, Iterator
from enum import Enum

from .chunks import DEFAULT_CHUNK_SIZE, Chunk, plan_chunks, validate_chunk_size
from .codec import DEFAULT_ENCODING, Terminator, resolve_codec
from .errors import ConfigurationError, NotFoundError, ReadFailure
from .line_extractor import find_last_line

logger = logging.getLogger(__name__)


def open_possibly_compressed_file(file_path: Path) -> BinaryIO:
    """ Using python-magic, expose a plaintext or compressed file in
    read-binary mode via a unified interface
    """
    mime = magic.Magic(mime=True)
    file_type = mime.from_file(str(file_path))
    is_compressed = 'gzip' in file_type

    if is_compressed:
        logger.debug("%s is gzip-compressed, reading decompressed content", file_path)
    open_func = gzip.open if is_compressed else open

    return open_func(file_path, 'rb')


def file_size(f: BinaryIO) -> int:
    """ Size of the readable content of f. For gzip files that is the
    decompressed size, which is only known after seeking to the end.
    """
    if isinstance(f, gzip.GzipFile):
        return f.seek(0, os.SEEK_END)
    return os.fstat(f.fileno()).st_size


class ReaderState(Enum):
    INIT = "init"
    FETCHING_CHUNK = "fetching_chunk"
    DRAINING_LINES = "draining_lines"
    FINALIZING = "finalizing"
    CLOSED = "closed"


class BackwardChunkReader:
    """ Reads a regular or compressed (.gz) text file line by line in reverse
    order, one chunk at a time.

    Chunks are fetched from the end of the file toward its start and prepended
    to a buffer of bytes that have not yet been resolved into lines. After each
    fetch, every complete line at the end of the buffer is emitted; the partial
    line at its front is carried over to the next chunk. Once the chunk at
    offset 0 has been drained, what is left of the buffer is the first line of
    the file.

    A terminator at the very end of the file closes the last line rather than
    opening an empty one, so "a\\nb\\n" and "a\\nb" both read as "b", "a".

    Use as a context manager; iterating yields the decoded lines:

        with BackwardChunkReader("app.log") as reader:
            for line in reader:
                ...
    """

    def __init__(
            self,
            file_path: str | os.PathLike,
            chunk_size: int = DEFAULT_CHUNK_SIZE,
            encoding: str = DEFAULT_ENCODING,
            terminator: Terminator | bytes | str | None = None):
        self.path = Path(file_path)
        self.chunk_size = validate_chunk_size(chunk_size)
        self.codec = resolve_codec(encoding, terminator)
        self.state = ReaderState.INIT

        self.size: int = None
        # Bytes covered by the chunk walk, i.e. the file minus a trailing terminator
        self.scan_size: int = None
        self._file: BinaryIO = None

    def __enter__(self) -> "BackwardChunkReader":
        self.open()
        return self

    def __exit__(self, *exc_info):
        self.close()

    def open(self):
        if not self.path.exists():
            raise NotFoundError(self.path)
        if not self.path.is_file():
            self.state = ReaderState.CLOSED
            raise ReadFailure(f"not a regular file '{self.path}'")

        try:
            self._file = open_possibly_compressed_file(self.path)
            self.size = file_size(self._file)
        except (OSError, EOFError, zlib.error) as e:
            self.close()
            raise ReadFailure(f"unable to open '{self.path}': {e}") from e

        try:
            self.scan_size = self.size - self._trailing_terminator_length()
        except ReadFailure:
            self.close()
            raise
        logger.debug(
            "reading %s backwards: %d bytes, %d scanned, chunk size %d",
            self.path, self.size, self.scan_size, self.chunk_size)

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
        self.state = ReaderState.CLOSED

    def chunk_plan(self) -> list[Chunk]:
        """ The chunks of this file, in the order they are fetched """
        return list(plan_chunks(self.scan_size, self.chunk_size))

    def __iter__(self) -> Iterator[str]:
        if self._file is None:
            raise ReadFailure(f"'{self.path}' is not open for reading")

        codec = self.codec
        buffer = bytearray()

        for chunk in self.chunk_plan():
            self.state = ReaderState.FETCHING_CHUNK
            buffer[:0] = self._fetch(chunk)
            self._check_size()

            self.state = ReaderState.DRAINING_LINES
            while (found := find_last_line(buffer, codec)) is not None:
                del buffer[found.remainder_length:]
                yield found.line

        # An empty file has no lines at all, any other file has a first line,
        # even if it is empty
        if self.size:
            self.state = ReaderState.FINALIZING
            yield find_last_line(buffer, codec, head=True).line

    def _trailing_terminator_length(self) -> int:
        terminator = self.codec.terminator
        if self.size < len(terminator):
            return 0
        tail = self._fetch(Chunk(self.size - len(terminator), len(terminator)))
        return len(terminator) if tail == terminator else 0

    def _fetch(self, chunk: Chunk) -> bytes:
        logger.debug("fetching %d bytes at offset %d of %s", chunk.length, chunk.offset, self.path)
        try:
            self._file.seek(chunk.offset)
            data = self._file.read(chunk.length)
        except (OSError, EOFError, zlib.error) as e:
            raise ReadFailure(f"unable to read {chunk.length} bytes at offset {chunk.offset} of '{self.path}': {e}") from e

        if len(data) != chunk.length:
            raise ReadFailure(
                f"short read of '{self.path}': expected {chunk.length} bytes at offset {chunk.offset}, got {len(data)}")
        return data

    def _check_size(self):
        """ Fail if a plain file grew or shrank since the scan started """
        if isinstance(self._file, gzip.GzipFile):
            return
        current = os.fstat(self._file.fileno()).st_size
        if current != self.size:
            raise ReadFailure(f"'{self.path}' changed size during the scan ({self.size} -> {current} bytes)")


def read_file_reverse(
        file_path: str | os.PathLike,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = DEFAULT_ENCODING,
        terminator: Terminator | bytes | str | None = None) -> Iterator[str]:
    """ Yield the lines of a regular or compressed (.gz) text file, last line first.
    The file is closed when the generator is exhausted or closed.
    """
    with BackwardChunkReader(file_path, chunk_size, encoding, terminator) as reader:
        yield from reader


def for_each_line_backward(
        file_path: str | os.PathLike,
        encoding: str | Callable[[str], Any] = DEFAULT_ENCODING,
        on_line: Callable[[str], Any] = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        terminator: Terminator | bytes | str | None = None):
    """ Call on_line once per line of the file, in reverse order. The encoding may
    be omitted, in which case it defaults to utf8:

        for_each_line_backward("test.txt", "latin-1", print)
        for_each_line_backward("test.txt", print)

    Errors raised by on_line stop the scan and propagate once the file is closed.
    """
    if callable(encoding):
        if on_line is not None:
            raise ConfigurationError("encoding must be a name when on_line is given")
        encoding, on_line = DEFAULT_ENCODING, encoding
    if on_line is None:
        raise ConfigurationError("a per-line callback is required")

    with BackwardChunkReader(file_path, chunk_size, encoding, terminator) as reader:
        for line in reader:
            on_line(line)


def find_files(paths: Iterable[str | os.PathLike], max_depth = 999) -> Iterator[Path]:
    """
    Given a set of file paths or directories containing files, and a max search
    depth, yield all individual files in those paths
    """
    for p in map(Path, paths):
        if p.is_file():
            yield p
            continue
        if not p.is_dir():
            raise NotFoundError(p)
        dirs: list[tuple[Path, int]] = [(p, 0)]
        while len(dirs) and (dir_tuple := dirs.pop()):
            cur_dir, cur_depth = dir_tuple
            for f in sorted(cur_dir.iterdir()):
                if f.is_file():
                    yield f
                elif f.is_dir() and cur_depth < max_depth:
                    dirs.append((f, cur_depth + 1))


def read_files_reverse(
        file_paths: Iterable[str | os.PathLike],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = DEFAULT_ENCODING,
        terminator: Terminator | bytes | str | None = None) -> Iterator[str]:
    for file_path in file_paths:
        yield from read_file_reverse(file_path, chunk_size, encoding, terminator)

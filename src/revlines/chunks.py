from dataclasses import dataclass
from typing import Iterator

from .errors import ConfigurationError

# 64KiB keeps peak memory small while still reading in reasonably large blocks
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class Chunk:
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


def validate_chunk_size(chunk_size: int) -> int:
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ConfigurationError(f"chunk size must be a positive integer, got {chunk_size!r}")
    return chunk_size


def plan_chunks(size: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Chunk]:
    """ Partition the byte range [0, size) into chunks of chunk_size, yielded from
    the highest offset down to 0. The full chunks sit at multiples of chunk_size,
    so any remainder is the topmost chunk and is yielded first.

    Files smaller than chunk_size are covered by a single chunk.
    """
    validate_chunk_size(chunk_size)
    if size <= 0:
        return

    chunk_size = min(chunk_size, size)
    full_chunks, remainder = divmod(size, chunk_size)

    if remainder:
        yield Chunk(chunk_size * full_chunks, remainder)
    for i in reversed(range(full_chunks)):
        yield Chunk(chunk_size * i, chunk_size)

from typing import NamedTuple

from .codec import LineCodec


class ExtractedLine(NamedTuple):
    line: str
    # Length of the unconsumed prefix, buffer[:remainder_length]. None once the
    # whole buffer has been consumed as the file's first line.
    remainder_length: int | None


def find_last_line(buffer: bytes | bytearray, codec: LineCodec, head: bool = False) -> ExtractedLine | None:
    """ Split the last complete line off the end of buffer.

    The buffer is searched from its end for the codec's terminator. When one is
    found, everything after it is the line and everything before it is left over;
    the terminator itself (both bytes of a CRLF) belongs to neither. A terminator
    at index 0 leaves an empty remainder, which is itself an (empty) earlier line.

    Without a terminator the buffer is only a fragment of a line, unless head is
    set, meaning the buffer starts at the beginning of the file. Then the entire
    buffer is the first line and nothing is left over.
    """
    index = buffer.rfind(codec.terminator)
    if index == -1:
        if not head:
            return None
        return ExtractedLine(codec.decode(buffer), None)

    line = codec.decode(buffer[index + len(codec.terminator):])
    return ExtractedLine(line, index)

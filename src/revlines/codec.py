import codecs
import os
from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError, DecodeFailure

DEFAULT_ENCODING = "utf8"


class Terminator(Enum):
    LF = b"\n"
    CRLF = b"\r\n"

    @classmethod
    def platform(cls) -> "Terminator":
        """ The platform's newline convention, from os.linesep """
        return cls.CRLF if os.linesep == "\r\n" else cls.LF

    @classmethod
    def from_name(cls, name: str) -> "Terminator":
        if name.lower() == "platform":
            return cls.platform()
        try:
            return cls[name.upper()]
        except KeyError:
            raise ConfigurationError(f"unknown line terminator '{name}', expected one of lf, crlf, platform")


@dataclass(frozen=True)
class LineCodec:
    """ An encoding resolved once per read, together with the terminator bytes
    that mark line boundaries under that encoding
    """
    encoding: str
    terminator: bytes
    codec_info: codecs.CodecInfo

    def decode(self, data: bytes) -> str:
        try:
            text, _ = self.codec_info.decode(data, "strict")
        except UnicodeDecodeError as e:
            raise DecodeFailure(self.encoding, bytes(data), e.reason) from e
        return text


def _terminator_bytes(terminator: "Terminator | bytes | str") -> bytes:
    if isinstance(terminator, Terminator):
        return terminator.value
    if isinstance(terminator, str):
        try:
            return terminator.encode("ascii")
        except UnicodeEncodeError:
            raise ConfigurationError(f"line terminator {terminator!r} must be ASCII text")
    return bytes(terminator)


def resolve_codec(encoding: str = DEFAULT_ENCODING, terminator: "Terminator | bytes | str | None" = None) -> LineCodec:
    """ Look up a text encoding by name and check that it can be scanned for
    line boundaries byte-wise, i.e. that the terminator encodes to its own
    ASCII bytes. UTF-16/32 and other encodings with a BOM or wide code units
    fail here rather than part way through a file.
    """
    try:
        codec_info = codecs.lookup(encoding)
    except LookupError:
        raise ConfigurationError(f"unsupported encoding '{encoding}'")

    term = _terminator_bytes(Terminator.platform() if terminator is None else terminator)
    if not term:
        raise ConfigurationError("line terminator must not be empty")

    try:
        encoded, _ = codec_info.encode(term.decode("ascii"))
    except (UnicodeError, ValueError, TypeError):
        encoded = None
    if encoded != term:
        raise ConfigurationError(f"encoding '{encoding}' does not represent the line terminator as {term!r}")

    return LineCodec(codec_info.name, term, codec_info)

import errno
from pathlib import Path


class RevLinesError(Exception):
    """ Base class for every error raised while reading a file backwards
    """


class ConfigurationError(RevLinesError, ValueError):
    """ An argument (encoding, terminator, chunk size, callback) can't be used
    """


class NotFoundError(RevLinesError, FileNotFoundError):
    def __init__(self, path: Path):
        super().__init__(errno.ENOENT, "no such file or directory", str(path))

    def __str__(self):
        return f"no such file or directory '{self.filename}'"


class ReadFailure(RevLinesError, OSError):
    """ The file could not be read the way its size promised: an I/O error,
    a short read, or a size change during the scan
    """


class DecodeFailure(RevLinesError, ValueError):
    def __init__(self, encoding: str, data: bytes, reason: str):
        self.encoding = encoding
        self.data = data
        self.reason = reason
        super().__init__(f"unable to decode {len(data)} byte line as {encoding}: {reason}")

import re
import typing
import logging
from enum import Enum

import msgspec
from thefuzz import fuzz

logger = logging.getLogger(__name__)

# TODO does having a fixed threshold here make sense? Expose it as a search option
FUZZY_THRESHOLD = 75


class FilterMode(Enum):
    RAW = "raw"
    REGEX = "regex"
    FUZZY = "fuzzy"


def value_matches(value: typing.Any, pattern: str, mode: FilterMode) -> bool:
    if value is None or value == "":
        return False
    value = str(value)
    if mode == FilterMode.RAW:
        return pattern.lower() in value.lower()
    elif mode == FilterMode.REGEX:
        return re.search(pattern, value) is not None
    else:
        return fuzz.partial_ratio(value.lower(), pattern.lower()) > FUZZY_THRESHOLD


def safe_parse_line(line: str) -> tuple[bool, dict[str, typing.Any]]:
    """ Attempt to parse a line as a JSON object, returning false if parsing fails
    """
    if not line:
        return False, {}
    try:
        # fluentd records are tab-delimited, typically the JSON body will be the last field
        fields = msgspec.json.decode(line.split('\t')[-1])
    except msgspec.DecodeError:
        logger.debug("Unable to JSON-decode line '%s'", line)
        return False, {}
    if not isinstance(fields, dict):
        return False, {}
    return True, fields


def line_matches(line: str, pattern: str, mode: FilterMode, field: str = "") -> bool:
    """ Match a whole line, or with field set, one field of a JSON-formatted line """
    if not field:
        return value_matches(line, pattern, mode)
    parsed, fields = safe_parse_line(line)
    return parsed and value_matches(fields.get(field), pattern, mode)

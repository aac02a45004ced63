"""
Utility Functions
"""

import re

_INTEGER_RE = re.compile(r'-?[0-9]+')

# Primary keys are signed 64-bit integers
MAX_ID = 2 ** 63 - 1
MIN_ID = -2 ** 63


def parse_id(value):
    """Return ``value`` as an int if it is a base-10 integer string, else None."""
    if value is None or not _INTEGER_RE.fullmatch(value):
        return None
    return int(value)


def fits_id_column(value):
    """True if ``value`` could be stored as a primary key; larger ids never match a row."""
    return MIN_ID <= value <= MAX_ID

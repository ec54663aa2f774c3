"""Deterministic community code derivation.

A code looks like ``ESP-AND-SEV-GRANVA0007``: three 3-character region
segments, then six street letters immediately followed by the street number
zero-padded to at least four digits.
"""

import re

from hubit_api.lib.community_code.address import AddressTuple

PAD_CHAR = "X"
REGION_SEGMENT_LENGTH = 3
STREET_SEGMENT_LENGTH = 6
NUMBER_SEGMENT_LENGTH = 4

_NON_LETTERS = re.compile(r"[^A-Z]")


def region_segment(value: str) -> str:
    """Uppercase the first three characters, right-padding short values with ``X``."""
    segment = value.strip().upper()[:REGION_SEGMENT_LENGTH]
    return segment.ljust(REGION_SEGMENT_LENGTH, PAD_CHAR)


def street_segment(street: str) -> str:
    """Keep only A-Z letters of the uppercased street, cut or ``X``-padded to six.

    Accented letters are not A-Z and are dropped (``Gran Vía`` -> ``GRANVA``).
    """
    letters = _NON_LETTERS.sub("", street.strip().upper())
    return letters[:STREET_SEGMENT_LENGTH].ljust(STREET_SEGMENT_LENGTH, PAD_CHAR)


def number_segment(street_number: str) -> str:
    """Zero-pad to four digits; longer numbers are never truncated."""
    return street_number.strip().rjust(NUMBER_SEGMENT_LENGTH, "0")


def derive_code(address: AddressTuple) -> str:
    """Derive the community code for an address tuple.

    Pure and total over validated tuples: the same tuple always yields the
    same code and nothing is looked up.

    Args:
        address: A validated address tuple.

    Returns:
        The community code string.
    """
    regions = "-".join(
        region_segment(value) for value in (address.country, address.province, address.city)
    )
    return f"{regions}-{street_segment(address.street)}{number_segment(address.street_number)}"

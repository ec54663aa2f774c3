"""Community code library — address tuples and pure code derivation."""

from hubit_api.lib.community_code.address import ADDRESS_FIELDS, AddressTuple, validate_address
from hubit_api.lib.community_code.deriver import derive_code, number_segment, region_segment, street_segment

__all__ = [
    "ADDRESS_FIELDS",
    "AddressTuple",
    "derive_code",
    "number_segment",
    "region_segment",
    "street_segment",
    "validate_address",
]

"""Address tuple type and validation."""

from dataclasses import asdict, dataclass

from hubit_api.core.exceptions import ValidationError

ADDRESS_FIELDS: tuple[str, ...] = ("country", "province", "city", "street", "street_number")


@dataclass(frozen=True)
class AddressTuple:
    """Five-field physical-location key used to derive and deduplicate community codes.

    Values are kept exactly as supplied; normalization only happens inside
    :func:`hubit_api.lib.community_code.derive_code`.
    """

    country: str
    province: str
    city: str
    street: str
    street_number: str

    def to_dict(self) -> dict[str, str]:
        """Return the tuple as a plain dict keyed by field name."""
        return asdict(self)


def validate_address(address: AddressTuple) -> AddressTuple:
    """Check that every field is filled in and the street number is numeric.

    Args:
        address: The tuple to check.

    Returns:
        The same tuple, for chaining.

    Raises:
        ValidationError: If a field is empty or whitespace-only, or the
            street number contains anything other than ASCII digits.
    """
    missing = [name for name in ADDRESS_FIELDS if not getattr(address, name).strip()]
    if missing:
        msg = f"Address fields must not be empty: {', '.join(missing)}"
        raise ValidationError(msg)
    number = address.street_number.strip()
    if not (number.isascii() and number.isdecimal()):
        msg = f"street_number must contain only digits, got '{address.street_number}'"
        raise ValidationError(msg)
    return address

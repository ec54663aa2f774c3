"""Closed set of marketplace roles carried in every credential claim."""

import enum


class UserRole(enum.StrEnum):
    """Account roles.

    Particulars and community members own properties, service providers
    answer budget requests, administrators manage communities.
    """

    PARTICULAR = "particular"
    COMMUNITY_MEMBER = "community_member"
    SERVICE_PROVIDER = "service_provider"
    ADMINISTRATOR = "administrator"


ALL_ROLES: tuple[UserRole, ...] = tuple(UserRole)

PROPERTY_OWNER_ROLES: tuple[UserRole, ...] = (
    UserRole.PARTICULAR,
    UserRole.COMMUNITY_MEMBER,
    UserRole.ADMINISTRATOR,
)


def is_known_role(value: object) -> bool:
    """Return True if ``value`` names one of the :class:`UserRole` members."""
    return isinstance(value, str) and value in UserRole._value2member_map_

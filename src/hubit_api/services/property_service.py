"""Property service — registers properties under their community code."""

import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.exceptions import PersistenceError
from hubit_api.models.property import Property
from hubit_api.schemas.property import PropertyCreateRequest
from hubit_api.services.community_code_service import get_or_create


async def create_property(
    session: AsyncSession,
    owner_id: uuid.UUID,
    request: PropertyCreateRequest,
) -> tuple[Property, bool]:
    """Create a property, obtaining its community code from the registry.

    Args:
        session: Database session.
        owner_id: Id of the owning user.
        request: Property data including its address tuple.

    Returns:
        Tuple of (created property, whether the community code was new).

    Raises:
        ValidationError: If the address tuple is malformed.
        PersistenceError: On storage failure.
    """
    address = request.to_address()
    result = await get_or_create(session, address, owner_id)

    prop = Property(
        name=request.name,
        owner_id=owner_id,
        community_code=result.code,
        floor=request.floor,
        door=request.door,
        **address.to_dict(),
    )
    session.add(prop)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(f"Database error while creating property for {owner_id}: {exc}")
        msg = "Database error while creating property"
        raise PersistenceError(msg) from exc
    await session.refresh(prop)
    logger.info(f"Created property {prop.id} with community code {result.code} (new={result.is_new})")
    return prop, result.is_new


async def list_properties(session: AsyncSession, owner_id: uuid.UUID) -> list[Property]:
    """Return the owner's properties, newest first."""
    result = await session.execute(
        select(Property).where(Property.owner_id == owner_id).order_by(Property.created_at.desc())
    )
    return list(result.scalars().all())

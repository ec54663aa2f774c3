"""Community code registry — owns the address tuple to code mapping.

Guarantees at most one record per distinct address tuple. The lookup and
the insert in ``get_or_create`` are not atomic, so a losing concurrent
insert is caught on the unique constraint and resolved by re-reading the
winner's row.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.exceptions import CodeInUseError, ConflictError, NotFoundError, PersistenceError
from hubit_api.lib.community_code import AddressTuple, derive_code, validate_address
from hubit_api.models.community_code import CommunityCode
from hubit_api.models.property import Property
from hubit_api.schemas.community_code import (
    CodePropertySummary,
    CodeResult,
    CodeSharingResponse,
    CodeStatisticsResponse,
    CommunityCodeResponse,
    SharedCode,
)

_ADDRESS_CONSTRAINT = "uq_community_codes_address"
_SQLITE_ADDRESS_VIOLATION = "UNIQUE constraint failed: community_codes.country"


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as PersistenceError with the cause chained."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Database error while {action}: {exc}")
        msg = f"Database error while {action}"
        raise PersistenceError(msg) from exc


async def find_by_address(session: AsyncSession, address: AddressTuple) -> CommunityCode | None:
    """Exact, case-sensitive match on all five address fields.

    Args:
        session: Database session.
        address: Address tuple as stored.

    Returns:
        The matching record or None.
    """
    result = await session.execute(
        select(CommunityCode).where(
            CommunityCode.country == address.country,
            CommunityCode.province == address.province,
            CommunityCode.city == address.city,
            CommunityCode.street == address.street,
            CommunityCode.street_number == address.street_number,
        )
    )
    return result.scalar_one_or_none()


def _is_address_conflict(exc: IntegrityError) -> bool:
    """Whether the violated constraint is the five-field address uniqueness."""
    reason = str(exc.orig)
    return _ADDRESS_CONSTRAINT in reason or _SQLITE_ADDRESS_VIOLATION in reason


async def get_or_create(session: AsyncSession, address: AddressTuple, created_by: uuid.UUID) -> CodeResult:
    """Return the code for an address, minting and storing it on first request.

    Distinct addresses may derive the same code; each still gets its own
    record and the code is shared between them.

    Args:
        session: Database session.
        address: The address tuple.
        created_by: Id of the user requesting the code.

    Returns:
        The code and whether this call created the record.

    Raises:
        ValidationError: If the address tuple is malformed.
        PersistenceError: On any storage failure, including constraint
            violations other than a concurrent insert of the same address.
    """
    validate_address(address)

    with _storage_errors("looking up community code"):
        existing = await find_by_address(session, address)
    if existing is not None:
        logger.debug(f"Reusing community code {existing.code}")
        return CodeResult(code=existing.code, is_new=False)

    code = derive_code(address)
    session.add(CommunityCode(code=code, created_by=created_by, **address.to_dict()))
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if not _is_address_conflict(exc):
            logger.error(f"Integrity error while creating community code {code}: {exc.orig}")
            msg = "Database error while creating community code"
            raise PersistenceError(msg) from exc
        logger.warning(f"Insert of community code {code} lost a uniqueness race; re-fetching")
        return await _resolve_conflict(session, address, code, ConflictError(str(exc.orig)))
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error(f"Database error while creating community code {code}: {exc}")
        msg = "Database error while creating community code"
        raise PersistenceError(msg) from exc

    logger.info(f"Created community code {code} (created_by={created_by})")
    return CodeResult(code=code, is_new=True)


async def _resolve_conflict(
    session: AsyncSession,
    address: AddressTuple,
    code: str,
    conflict: ConflictError,
) -> CodeResult:
    """Re-fetch once after the address uniqueness constraint rejected an insert."""
    with _storage_errors("re-fetching community code"):
        winner = await find_by_address(session, address)
    if winner is not None:
        return CodeResult(code=winner.code, is_new=False)
    msg = f"Community code '{code}' conflicted on insert but no matching record exists"
    raise PersistenceError(msg) from conflict


async def list_codes(session: AsyncSession) -> list[CommunityCode]:
    """Return all community codes, newest first."""
    with _storage_errors("listing community codes"):
        result = await session.execute(
            select(CommunityCode).order_by(CommunityCode.created_at.desc(), CommunityCode.code)
        )
        return list(result.scalars().all())


async def get_by_code(session: AsyncSession, code: str) -> CommunityCode | None:
    """Look up a community code by its code string.

    A code shared by several addresses resolves to the oldest record.
    """
    with _storage_errors("fetching community code"):
        result = await session.execute(
            select(CommunityCode)
            .where(CommunityCode.code == code)
            .order_by(CommunityCode.created_at, CommunityCode.id)
            .limit(1)
        )
        return result.scalars().first()


async def delete_code(session: AsyncSession, code_id: uuid.UUID) -> None:
    """Permanently delete a community code record.

    Records whose address still has properties are refused rather than
    orphaning those properties. Properties at other addresses sharing the
    same code do not block the delete.

    Args:
        session: Database session.
        code_id: Id of the record to delete.

    Raises:
        NotFoundError: If no record has this id.
        CodeInUseError: If properties at this address still carry the code.
        PersistenceError: On storage failure.
    """
    with _storage_errors("deleting community code"):
        record = await session.get(CommunityCode, code_id)
        if record is None:
            msg = f"Community code {code_id} not found"
            raise NotFoundError(msg)

        in_use = await session.execute(
            select(func.count(Property.id)).where(
                Property.community_code == record.code,
                Property.country == record.country,
                Property.province == record.province,
                Property.city == record.city,
                Property.street == record.street,
                Property.street_number == record.street_number,
            )
        )
        references = in_use.scalar_one()
        if references:
            msg = f"Community code '{record.code}' is still referenced by {references} properties"
            raise CodeInUseError(msg)

        await session.delete(record)
        await session.commit()
    logger.info(f"Deleted community code {record.code} ({code_id})")


async def get_properties_with_code(session: AsyncSession, code: str) -> CodeSharingResponse:
    """Return a code together with the properties that share it.

    Raises:
        NotFoundError: If the code does not exist.
    """
    record = await get_by_code(session, code)
    if record is None:
        msg = f"Community code '{code}' not found"
        raise NotFoundError(msg)

    with _storage_errors("listing properties for community code"):
        result = await session.execute(
            select(Property).where(Property.community_code == code).order_by(Property.created_at)
        )
        properties = list(result.scalars().all())

    return CodeSharingResponse(
        community_code=CommunityCodeResponse.model_validate(record),
        properties=[CodePropertySummary.model_validate(p) for p in properties],
        total_users=len({p.owner_id for p in properties}),
    )


async def get_code_statistics(session: AsyncSession) -> CodeStatisticsResponse:
    """Summarize the registry: totals plus codes shared by several owners."""
    owners = func.count(func.distinct(Property.owner_id))
    with _storage_errors("computing community code statistics"):
        total_codes = (await session.execute(select(func.count(CommunityCode.id)))).scalar_one()
        total_properties = (await session.execute(select(func.count(Property.id)))).scalar_one()
        shared = await session.execute(
            select(Property.community_code, owners.label("user_count"))
            .group_by(Property.community_code)
            .having(owners > 1)
            .order_by(owners.desc(), Property.community_code)
        )
        rows = shared.all()

    return CodeStatisticsResponse(
        total_codes=total_codes,
        total_properties=total_properties,
        shared_codes=[SharedCode(code=row.community_code, user_count=row.user_count) for row in rows],
    )

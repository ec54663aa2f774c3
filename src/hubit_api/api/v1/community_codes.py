"""Community code API endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.dependencies import get_async_session, get_current_identity, get_current_user_id, require_role
from hubit_api.core.exceptions import NotFoundError
from hubit_api.core.roles import UserRole
from hubit_api.schemas.auth import Identity
from hubit_api.schemas.community_code import (
    AddressRequest,
    CodeResult,
    CodeSharingResponse,
    CodeStatisticsResponse,
    CommunityCodeListResponse,
    CommunityCodeResponse,
)
from hubit_api.services.community_code_service import (
    delete_code,
    get_by_code,
    get_code_statistics,
    get_or_create,
    get_properties_with_code,
    list_codes,
)

community_codes_router = APIRouter(
    prefix="/community-codes",
    tags=["community-codes"],
)


@community_codes_router.post(
    "",
    responses={status.HTTP_201_CREATED: {"model": CodeResult}},
)
async def get_or_create_code(
    body: AddressRequest,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
) -> CodeResult:
    """Return the community code for an address, creating it on first request.

    Responds 201 when this request minted the code and 200 when it already existed.
    """
    result = await get_or_create(session, body.to_address(), user_id)
    response.status_code = status.HTTP_201_CREATED if result.is_new else status.HTTP_200_OK
    return result


@community_codes_router.get("")
async def list_all_codes(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _identity: Annotated[Identity, Depends(get_current_identity)],
) -> CommunityCodeListResponse:
    """List all community codes, newest first."""
    records = await list_codes(session)
    return CommunityCodeListResponse(items=[CommunityCodeResponse.model_validate(r) for r in records])


@community_codes_router.get("/statistics")
async def code_statistics(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _identity: Annotated[Identity, Depends(require_role(UserRole.ADMINISTRATOR))],
) -> CodeStatisticsResponse:
    """Registry statistics (administrators only)."""
    return await get_code_statistics(session)


@community_codes_router.get("/{code}")
async def get_code(
    code: str,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _identity: Annotated[Identity, Depends(get_current_identity)],
) -> CommunityCodeResponse:
    """Fetch a single community code record."""
    record = await get_by_code(session, code)
    if record is None:
        msg = f"Community code '{code}' not found"
        raise NotFoundError(msg)
    return CommunityCodeResponse.model_validate(record)


@community_codes_router.get("/{code}/properties")
async def get_code_properties(
    code: str,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _identity: Annotated[
        Identity,
        Depends(require_role(UserRole.ADMINISTRATOR, UserRole.COMMUNITY_MEMBER)),
    ],
) -> CodeSharingResponse:
    """List the properties that share a community code."""
    return await get_properties_with_code(session, code)


@community_codes_router.delete("/{code_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_code_endpoint(
    code_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    identity: Annotated[Identity, Depends(require_role(UserRole.ADMINISTRATOR))],
) -> None:
    """Permanently delete an unreferenced community code (administrators only)."""
    await delete_code(session, code_id)
    logger.info(f"Administrator {identity.subject_id} deleted community code {code_id}")

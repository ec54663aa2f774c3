"""Property API endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from hubit_api.core.dependencies import get_async_session, get_current_user_id, require_role
from hubit_api.core.roles import PROPERTY_OWNER_ROLES
from hubit_api.schemas.auth import Identity
from hubit_api.schemas.property import (
    PropertyCreateRequest,
    PropertyCreateResponse,
    PropertyListResponse,
    PropertyResponse,
)
from hubit_api.services.property_service import create_property, list_properties

properties_router = APIRouter(
    prefix="/properties",
    tags=["properties"],
)


@properties_router.post("", status_code=status.HTTP_201_CREATED)
async def create_property_endpoint(
    body: PropertyCreateRequest,
    session: Annotated[AsyncSession, Depends(get_async_session)],
    _identity: Annotated[Identity, Depends(require_role(*PROPERTY_OWNER_ROLES))],
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
) -> PropertyCreateResponse:
    """Register a property; its community code is obtained or minted on the way."""
    prop, code_is_new = await create_property(session, user_id, body)
    return PropertyCreateResponse(
        property=PropertyResponse.model_validate(prop),
        community_code_is_new=code_is_new,
    )


@properties_router.get("")
async def list_my_properties(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
) -> PropertyListResponse:
    """List the caller's properties, newest first."""
    properties = await list_properties(session, user_id)
    return PropertyListResponse(items=[PropertyResponse.model_validate(p) for p in properties])

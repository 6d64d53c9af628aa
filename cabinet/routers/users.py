"""
FastAPI router for user accounts and cabinets.

Provides registration and the endpoints that manage a user's strain collection.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from cabinet.dependencies import require_auth, get_user_service, get_strain_service
from cabinet.pipelines import cabinet as pipelines
from cabinet.schemas.user import RegisterRequest, UserResponse
from cabinet.schemas.strain import StrainListResponse
from cabinet.services.user_service import UserService
from cabinet.services.strain_service import StrainService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """
    Register a new user account.

    Field problems are reported with 422 and the offending field as `location`.
    """
    logger.info(f"Registration attempt for user: {body.userName}")
    user = await user_service.create_user(
        user_name=body.userName,
        password=body.password,
        first_name=body.firstName,
        last_name=body.lastName,
    )
    return UserResponse(**user)


@router.get("/strains", response_model=StrainListResponse)
async def get_user_strains(
    claims: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """Get the strains in the current user's cabinet."""
    result = await pipelines.get_user_strains_pipeline(
        user_service=user_service,
        strain_service=strain_service,
        user_name=claims["sub"],
    )
    return StrainListResponse(**result)


@router.put("/strains/{strain_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def add_strain_to_cabinet(
    strain_id: str,
    claims: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """Put a catalog strain in the current user's cabinet."""
    await pipelines.add_to_cabinet_pipeline(
        user_service=user_service,
        strain_service=strain_service,
        user_name=claims["sub"],
        strain_id=strain_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/strains/{strain_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def remove_strain_from_cabinet(
    strain_id: str,
    claims: Annotated[dict, Depends(require_auth)],
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """Take a strain out of the current user's cabinet."""
    await pipelines.remove_from_cabinet_pipeline(
        user_service=user_service,
        user_name=claims["sub"],
        strain_id=strain_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

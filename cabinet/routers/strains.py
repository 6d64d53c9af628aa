"""
FastAPI router for the shared strain catalog and strain comments.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from cabinet.dependencies import require_auth, get_strain_service
from cabinet.schemas.strain import (
    CommentRequest,
    StrainCreateRequest,
    StrainListResponse,
    StrainResponse,
)
from cabinet.services.strain_service import StrainService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/strains", tags=["Strains"])


@router.get("", response_model=StrainListResponse)
async def list_strains(
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """Get every strain in the catalog."""
    strains = await strain_service.list_strains()
    return StrainListResponse(strains=strains)


@router.get("/{strain_id}", response_model=StrainResponse)
async def get_strain(
    strain_id: str,
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """Get one strain with its comments."""
    strain = await strain_service.get_strain(strain_id)
    return StrainResponse(**strain)


@router.post("", response_model=StrainResponse, status_code=status.HTTP_201_CREATED)
async def create_strain(
    body: StrainCreateRequest,
    claims: Annotated[dict, Depends(require_auth)],
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """
    Add a strain to the shared catalog.

    `type` must be Sativa, Indica or Hybrid (any casing).
    """
    logger.info(f"User {claims['sub']} creating strain: {body.name}")
    strain = await strain_service.create_strain(
        name=body.name,
        strain_type=body.type,
        flavor=body.flavor,
        description=body.description,
    )
    return StrainResponse(**strain)


@router.post("/{strain_id}", response_model=StrainResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    strain_id: str,
    body: CommentRequest,
    claims: Annotated[dict, Depends(require_auth)],
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """
    Post a comment on a strain.

    The author is always the authenticated user.
    """
    strain = await strain_service.add_comment(
        strain_id=strain_id,
        content=body.comment.content,
        author=claims["sub"],
    )
    return StrainResponse(**strain)


@router.delete("/{strain_id}/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def remove_comment(
    strain_id: str,
    comment_id: str,
    claims: Annotated[dict, Depends(require_auth)],
    strain_service: Annotated[StrainService, Depends(get_strain_service)],
):
    """Remove one of the current user's comments from a strain."""
    await strain_service.remove_comment(
        strain_id=strain_id,
        comment_id=comment_id,
        user_name=claims["sub"],
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

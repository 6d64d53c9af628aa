"""
Cabinet pipeline functions.

Stateless orchestration of a user's personal strain collection.
"""

import logging
from typing import Dict, Any

from cabinet.services.user_service import UserService
from cabinet.services.strain_service import StrainService, to_object_id

logger = logging.getLogger(__name__)


async def get_user_strains_pipeline(
    user_service: UserService,
    strain_service: StrainService,
    user_name: str,
) -> Dict[str, Any]:
    """
    Get the strains in a user's cabinet, populated, in the order they were added.

    Returns:
        dict with strains
    """
    strain_ids = await user_service.get_strain_ids(user_name)
    strains = await strain_service.get_strains_by_ids(strain_ids)
    return {"strains": strains}


async def add_to_cabinet_pipeline(
    user_service: UserService,
    strain_service: StrainService,
    user_name: str,
    strain_id: str,
) -> None:
    """
    Put a catalog strain in a user's cabinet.

    Raises:
        NotFoundException: Strain is not in the catalog
    """
    await strain_service.get_strain(strain_id)
    oid = to_object_id(strain_id, "Strain not found", "STRAIN_NOT_FOUND")
    await user_service.add_strain(user_name, oid)


async def remove_from_cabinet_pipeline(
    user_service: UserService,
    user_name: str,
    strain_id: str,
) -> None:
    """Take a strain out of a user's cabinet."""
    oid = to_object_id(strain_id, "Strain not found", "STRAIN_NOT_FOUND")
    await user_service.remove_strain(user_name, oid)

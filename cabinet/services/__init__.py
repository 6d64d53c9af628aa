"""
MongoDB-backed services for the Medicine Cabinet API.
"""

from cabinet.services.user_service import UserService, serialize_user
from cabinet.services.strain_service import StrainService, serialize_strain, to_object_id

__all__ = [
    "UserService",
    "StrainService",
    "serialize_user",
    "serialize_strain",
    "to_object_id",
]

"""
Strain catalog service.

Handles the shared strain catalog and the comments posted on each strain.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import (
    NotFoundException,
    ForbiddenException,
    ValidationException,
)
from cabinet.schemas.strain import StrainType

logger = logging.getLogger(__name__)


def to_object_id(value: Any, message: str, code: str) -> ObjectId:
    """
    Convert a path id to an ObjectId.

    Malformed ids cannot match any document, so they are reported as missing.
    """
    if isinstance(value, ObjectId):
        return value
    if not ObjectId.is_valid(str(value)):
        raise NotFoundException(message=message, code=code)
    return ObjectId(str(value))


def serialize_comment(comment: Dict[str, Any]) -> Dict[str, Any]:
    """Convert an embedded comment to its API representation."""
    return {
        "_id": str(comment["_id"]),
        "content": comment.get("content", ""),
        "author": comment.get("author", ""),
    }


def serialize_strain(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a strain document to its API representation."""
    return {
        "_id": str(doc["_id"]),
        "name": doc.get("name", ""),
        "type": doc.get("type", ""),
        "flavor": doc.get("flavor", ""),
        "description": doc.get("description", ""),
        "comments": [serialize_comment(c) for c in doc.get("comments", [])],
    }


class StrainService:
    """
    Manages the shared strain catalog and strain comments.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize StrainService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._strains_collection = db["strains"]

    async def ensure_indexes(self) -> None:
        """Create the indexes the catalog queries rely on."""
        await self._strains_collection.create_index("name")

    async def list_strains(self) -> List[Dict[str, Any]]:
        """
        Get every strain in the catalog, oldest first.

        Returns:
            List of serialized strains
        """
        docs = await self._strains_collection.find({}).sort("createdAt", 1).to_list(length=None)
        logger.debug(f"Listed {len(docs)} strains")
        return [serialize_strain(doc) for doc in docs]

    async def get_strain(self, strain_id: str) -> Dict[str, Any]:
        """
        Get one strain.

        Raises:
            NotFoundException: Strain does not exist
        """
        oid = to_object_id(strain_id, "Strain not found", "STRAIN_NOT_FOUND")
        doc = await self._strains_collection.find_one({"_id": oid})
        if not doc:
            raise NotFoundException(message="Strain not found", code="STRAIN_NOT_FOUND")
        return serialize_strain(doc)

    async def get_strains_by_ids(self, strain_ids: List[ObjectId]) -> List[Dict[str, Any]]:
        """
        Get several strains, in the order of `strain_ids`.

        Ids that no longer match a strain are skipped.
        """
        if not strain_ids:
            return []

        docs = await self._strains_collection.find(
            {"_id": {"$in": list(strain_ids)}}
        ).to_list(length=None)
        by_id = {doc["_id"]: doc for doc in docs}

        return [serialize_strain(by_id[sid]) for sid in strain_ids if sid in by_id]

    async def create_strain(
        self,
        name: str,
        strain_type: str,
        flavor: str = "",
        description: str = "",
    ) -> Dict[str, Any]:
        """
        Add a strain to the shared catalog.

        Args:
            name: Strain name (unique, case-insensitive)
            strain_type: Sativa, Indica or Hybrid in any casing
            flavor: Free-text flavor notes
            description: Free-text description

        Returns:
            Created strain

        Raises:
            ValidationException: Blank name, unknown type, or duplicate name
        """
        name = (name or "").strip()
        if not name:
            raise ValidationException(
                message="Name cannot be empty",
                code="INVALID_NAME",
                location="name",
            )

        parsed_type = StrainType.parse(strain_type)
        if parsed_type is None:
            raise ValidationException(
                message='"Type" must be "Sativa", "Indica", or "Hybrid"',
                code="INVALID_STRAIN_TYPE",
                location="type",
            )

        existing = await self._strains_collection.find_one(
            {"name": {"$regex": f"^{re.escape(name)}$", "$options": "i"}}
        )
        if existing:
            raise ValidationException(
                message="Strain already exists",
                code="STRAIN_EXISTS",
                location="name",
            )

        now = datetime.now(timezone.utc)
        strain_doc = {
            "name": name,
            "type": parsed_type.value,
            "flavor": (flavor or "").strip(),
            "description": (description or "").strip(),
            "comments": [],
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._strains_collection.insert_one(strain_doc)
        strain_doc["_id"] = result.inserted_id

        logger.info(f"Strain created: {result.inserted_id} ({name})")
        return serialize_strain(strain_doc)

    async def add_comment(
        self,
        strain_id: str,
        content: str,
        author: str,
    ) -> Dict[str, Any]:
        """
        Post a comment on a strain.

        Args:
            strain_id: Strain to comment on
            content: Comment text
            author: userName of the commenter

        Returns:
            The updated strain

        Raises:
            ValidationException: Empty comment
            NotFoundException: Strain does not exist
        """
        content = (content or "").strip()
        if not content:
            raise ValidationException(
                message="Comment cannot be empty",
                code="EMPTY_COMMENT",
                location="comment.content",
            )

        oid = to_object_id(strain_id, "Strain not found", "STRAIN_NOT_FOUND")
        now = datetime.now(timezone.utc)
        comment = {
            "_id": ObjectId(),
            "content": content,
            "author": author,
            "createdAt": now,
        }

        result = await self._strains_collection.update_one(
            {"_id": oid},
            {"$push": {"comments": comment}, "$set": {"updatedAt": now}},
        )
        if result.matched_count == 0:
            raise NotFoundException(message="Strain not found", code="STRAIN_NOT_FOUND")

        logger.info(f"Comment {comment['_id']} added to strain {strain_id} by {author}")
        return await self.get_strain(strain_id)

    async def remove_comment(
        self,
        strain_id: str,
        comment_id: str,
        user_name: str,
    ) -> None:
        """
        Remove a comment from a strain.

        Only the comment's author may remove it.

        Raises:
            NotFoundException: Strain or comment does not exist
            ForbiddenException: Caller is not the author
        """
        strain_oid = to_object_id(strain_id, "Strain not found", "STRAIN_NOT_FOUND")
        comment_oid = to_object_id(comment_id, "Comment not found", "COMMENT_NOT_FOUND")

        strain = await self._strains_collection.find_one({"_id": strain_oid})
        if not strain:
            raise NotFoundException(message="Strain not found", code="STRAIN_NOT_FOUND")

        comment = self._find_comment(strain, comment_oid)
        if comment is None:
            raise NotFoundException(message="Comment not found", code="COMMENT_NOT_FOUND")

        if comment.get("author") != user_name:
            logger.warning(f"User {user_name} tried to remove comment {comment_id} by {comment.get('author')}")
            raise ForbiddenException(
                message="You can only remove your own comments",
                code="NOT_COMMENT_AUTHOR",
            )

        await self._strains_collection.update_one(
            {"_id": strain_oid},
            {
                "$pull": {"comments": {"_id": comment_oid}},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
        )
        logger.info(f"Comment {comment_id} removed from strain {strain_id}")

    @staticmethod
    def _find_comment(strain: Dict[str, Any], comment_id: ObjectId) -> Optional[Dict[str, Any]]:
        for comment in strain.get("comments", []):
            if comment.get("_id") == comment_id:
                return comment
        return None

"""
User service for accounts and personal cabinets.

Handles user registration, credential checks, and the list of strains
each user keeps in their cabinet.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from common.auth.base import AuthProvider
from common.utils.exceptions import (
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)
from common.utils.password import validate_password

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Incorrect username or password"


def serialize_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Get public user data (safe to return to clients and to embed in tokens)."""
    return {
        "userName": doc.get("userName", ""),
        "firstName": doc.get("firstName", ""),
        "lastName": doc.get("lastName", ""),
    }


class UserService:
    """
    Manages user accounts and their strain cabinets.
    """

    REQUIRED_FIELDS = ("userName", "password")
    STRING_FIELDS = ("userName", "password", "firstName", "lastName")
    TRIMMED_FIELDS = ("userName", "password")

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        auth: AuthProvider,
        username_min_length: int = 1,
        password_min_length: int = 10,
        password_max_length: int = 72,
    ):
        """
        Initialize UserService.

        Args:
            db: MongoDB database connection
            auth: Provider used to hash and verify passwords
            username_min_length: Shortest accepted userName
            password_min_length: Shortest accepted password
            password_max_length: Longest accepted password
        """
        self._db = db
        self._auth = auth
        self._users_collection = db["users"]
        self._username_min_length = username_min_length
        self._password_min_length = password_min_length
        self._password_max_length = password_max_length

    async def ensure_indexes(self) -> None:
        """Create the unique userName index."""
        await self._users_collection.create_index("userName", unique=True)

    async def create_user(
        self,
        user_name: Any,
        password: Any,
        first_name: Any = None,
        last_name: Any = None,
    ) -> Dict[str, Any]:
        """
        Register a new user.

        Returns:
            Public user data

        Raises:
            ValidationException: A field is missing, mistyped, badly sized,
                or the userName is taken
        """
        fields = {
            "userName": user_name,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        }
        self._validate_registration(fields)

        existing = await self._users_collection.find_one({"userName": user_name})
        if existing:
            raise self._username_taken()

        now = datetime.now(timezone.utc)
        user_doc = {
            "userName": user_name,
            "password": self._auth.hash_password(password),
            "firstName": (first_name or "").strip(),
            "lastName": (last_name or "").strip(),
            "strains": [],
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._users_collection.insert_one(user_doc)
        except DuplicateKeyError:
            raise self._username_taken()
        user_doc["_id"] = result.inserted_id

        logger.info(f"User created: {result.inserted_id} ({user_name})")
        return serialize_user(user_doc)

    async def authenticate(self, user_name: str, password: str) -> Dict[str, Any]:
        """
        Check a userName/password pair.

        Returns:
            Public user data

        Raises:
            UnauthorizedException: Unknown user or wrong password (same message for both)
        """
        user = await self._users_collection.find_one({"userName": user_name})
        if not user:
            logger.warning(f"Login failed - user not found: {user_name}")
            raise UnauthorizedException(LOGIN_FAILED_MESSAGE, code="LOGIN_FAILED")

        if not self._auth.verify_password(password, user.get("password", "")):
            logger.warning(f"Login failed - invalid password for user: {user_name}")
            raise UnauthorizedException(LOGIN_FAILED_MESSAGE, code="LOGIN_FAILED")

        return serialize_user(user)

    async def get_user(self, user_name: str) -> Optional[Dict[str, Any]]:
        """Get a raw user document by userName."""
        return await self._users_collection.find_one({"userName": user_name})

    async def get_strain_ids(self, user_name: str) -> List[ObjectId]:
        """
        Get the ids of the strains in a user's cabinet, in the order they were added.

        Raises:
            NotFoundException: User no longer exists
        """
        user = await self._users_collection.find_one(
            {"userName": user_name},
            {"strains": 1},
        )
        if not user:
            raise NotFoundException(message="User not found", code="USER_NOT_FOUND")
        return list(user.get("strains", []))

    async def add_strain(self, user_name: str, strain_id: ObjectId) -> None:
        """
        Put a strain in a user's cabinet. Adding a strain twice is a no-op.

        Raises:
            NotFoundException: User no longer exists
        """
        result = await self._users_collection.update_one(
            {"userName": user_name},
            {
                "$addToSet": {"strains": strain_id},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
        )
        if result.matched_count == 0:
            raise NotFoundException(message="User not found", code="USER_NOT_FOUND")
        logger.info(f"Strain {strain_id} added to cabinet of {user_name}")

    async def remove_strain(self, user_name: str, strain_id: ObjectId) -> None:
        """
        Take a strain out of a user's cabinet. Removing an absent strain is a no-op.

        Raises:
            NotFoundException: User no longer exists
        """
        result = await self._users_collection.update_one(
            {"userName": user_name},
            {
                "$pull": {"strains": strain_id},
                "$set": {"updatedAt": datetime.now(timezone.utc)},
            },
        )
        if result.matched_count == 0:
            raise NotFoundException(message="User not found", code="USER_NOT_FOUND")
        logger.info(f"Strain {strain_id} removed from cabinet of {user_name}")

    # ─────────────────────────────────────────────────────────────────
    # Validation helpers
    # ─────────────────────────────────────────────────────────────────

    def _validate_registration(self, fields: Dict[str, Any]) -> None:
        for name in self.REQUIRED_FIELDS:
            if fields.get(name) is None:
                raise ValidationException(
                    message="Missing field",
                    code="MISSING_FIELD",
                    location=name,
                )

        for name in self.STRING_FIELDS:
            value = fields.get(name)
            if value is not None and not isinstance(value, str):
                raise ValidationException(
                    message="Incorrect field type: expected string",
                    code="INVALID_FIELD_TYPE",
                    location=name,
                )

        for name in self.TRIMMED_FIELDS:
            if fields[name] != fields[name].strip():
                raise ValidationException(
                    message="Cannot start or end with whitespace",
                    code="UNTRIMMED_FIELD",
                    location=name,
                )

        if len(fields["userName"]) < self._username_min_length:
            raise ValidationException(
                message=f"Must be at least {self._username_min_length} characters long",
                code="FIELD_TOO_SHORT",
                location="userName",
            )

        is_valid, errors = validate_password(
            fields["password"],
            min_length=self._password_min_length,
            max_length=self._password_max_length,
        )
        if not is_valid:
            raise ValidationException(
                message=errors[0],
                code="INVALID_PASSWORD",
                location="password",
            )

    @staticmethod
    def _username_taken() -> ValidationException:
        return ValidationException(
            message="Username already taken",
            code="USERNAME_TAKEN",
            location="userName",
        )

"""Unit tests for UserService (registration, login checks, cabinet membership)."""

import pytest
from unittest.mock import MagicMock, patch
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from common.utils.exceptions import (
    NotFoundException,
    UnauthorizedException,
    ValidationException,
)
from cabinet.services.user_service import UserService, LOGIN_FAILED_MESSAGE


@pytest.fixture
def service(mock_db, jwt_auth):
    return UserService(mock_db, auth=jwt_auth)


# ─────────────────────────────────────────────────────────────────
# create_user
# ─────────────────────────────────────────────────────────────────


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, service, mock_collection, jwt_auth, user_password):
        mock_collection.find_one.return_value = None
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        result = await service.create_user("alice", user_password, "Alice", "Liddell")

        assert result == {"userName": "alice", "firstName": "Alice", "lastName": "Liddell"}
        stored = mock_collection.insert_one.call_args[0][0]
        assert stored["password"] != user_password
        assert jwt_auth.verify_password(user_password, stored["password"])
        assert stored["strains"] == []

    @pytest.mark.asyncio
    async def test_names_are_optional(self, service, mock_collection, user_password):
        mock_collection.find_one.return_value = None
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        result = await service.create_user("alice", user_password)

        assert result == {"userName": "alice", "firstName": "", "lastName": ""}

    @pytest.mark.asyncio
    async def test_missing_user_name(self, service, user_password):
        with pytest.raises(ValidationException) as exc:
            await service.create_user(None, user_password)

        assert exc.value.status_code == 422
        assert exc.value.message == "Missing field"
        assert exc.value.location == "userName"
        assert exc.value.detail["reason"] == "ValidationError"

    @pytest.mark.asyncio
    async def test_non_string_field(self, service, user_password):
        with pytest.raises(ValidationException) as exc:
            await service.create_user("alice", user_password, first_name=42)

        assert exc.value.message == "Incorrect field type: expected string"
        assert exc.value.location == "firstName"

    @pytest.mark.asyncio
    async def test_untrimmed_user_name(self, service, user_password):
        with pytest.raises(ValidationException) as exc:
            await service.create_user(" alice", user_password)

        assert exc.value.message == "Cannot start or end with whitespace"
        assert exc.value.location == "userName"

    @pytest.mark.asyncio
    async def test_empty_user_name(self, service, user_password):
        with pytest.raises(ValidationException) as exc:
            await service.create_user("", user_password)

        assert exc.value.message == "Must be at least 1 characters long"
        assert exc.value.location == "userName"

    @pytest.mark.asyncio
    async def test_short_password(self, service):
        with pytest.raises(ValidationException) as exc:
            await service.create_user("alice", "short")

        assert exc.value.message == "Must be at least 10 characters long"
        assert exc.value.location == "password"

    @pytest.mark.asyncio
    async def test_long_password(self, service):
        with pytest.raises(ValidationException) as exc:
            await service.create_user("alice", "x" * 73)

        assert exc.value.message == "Must be at most 72 characters long"

    @pytest.mark.asyncio
    async def test_username_taken(self, service, mock_collection, sample_user_doc, user_password):
        mock_collection.find_one.return_value = sample_user_doc

        with pytest.raises(ValidationException) as exc:
            await service.create_user("alice", user_password)

        assert exc.value.message == "Username already taken"
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_username_taken_skips_hashing(self, service, mock_collection, jwt_auth, sample_user_doc, user_password):
        mock_collection.find_one.return_value = sample_user_doc

        with patch.object(jwt_auth, "hash_password") as hash_password:
            with pytest.raises(ValidationException):
                await service.create_user("alice", user_password)

        hash_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_username_taken_by_concurrent_insert(self, service, mock_collection, user_password):
        mock_collection.find_one.return_value = None
        mock_collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")

        with pytest.raises(ValidationException) as exc:
            await service.create_user("alice", user_password)

        assert exc.value.code == "USERNAME_TAKEN"


# ─────────────────────────────────────────────────────────────────
# authenticate
# ─────────────────────────────────────────────────────────────────


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, service, mock_collection, sample_user_doc, user_password):
        mock_collection.find_one.return_value = sample_user_doc

        user = await service.authenticate("alice", user_password)

        assert user == {"userName": "alice", "firstName": "Alice", "lastName": "Liddell"}
        assert "password" not in user

    @pytest.mark.asyncio
    async def test_unknown_user(self, service, mock_collection, user_password):
        mock_collection.find_one.return_value = None

        with pytest.raises(UnauthorizedException) as exc:
            await service.authenticate("nobody", user_password)

        assert exc.value.message == LOGIN_FAILED_MESSAGE

    @pytest.mark.asyncio
    async def test_wrong_password_has_same_message(self, service, mock_collection, sample_user_doc):
        mock_collection.find_one.return_value = sample_user_doc

        with pytest.raises(UnauthorizedException) as exc:
            await service.authenticate("alice", "wrong password")

        assert exc.value.message == LOGIN_FAILED_MESSAGE


# ─────────────────────────────────────────────────────────────────
# Cabinet membership
# ─────────────────────────────────────────────────────────────────


class TestCabinet:
    @pytest.mark.asyncio
    async def test_get_strain_ids(self, service, mock_collection):
        ids = [ObjectId(), ObjectId()]
        mock_collection.find_one.return_value = {"_id": ObjectId(), "strains": ids}

        result = await service.get_strain_ids("alice")

        assert result == ids

    @pytest.mark.asyncio
    async def test_get_strain_ids_missing_user(self, service, mock_collection):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException):
            await service.get_strain_ids("ghost")

    @pytest.mark.asyncio
    async def test_add_strain_uses_set_semantics(self, service, mock_collection):
        strain_id = ObjectId()
        mock_collection.update_one.return_value = MagicMock(matched_count=1)

        await service.add_strain("alice", strain_id)

        query, update = mock_collection.update_one.call_args[0]
        assert query == {"userName": "alice"}
        assert update["$addToSet"] == {"strains": strain_id}

    @pytest.mark.asyncio
    async def test_remove_strain(self, service, mock_collection):
        strain_id = ObjectId()
        mock_collection.update_one.return_value = MagicMock(matched_count=1)

        await service.remove_strain("alice", strain_id)

        update = mock_collection.update_one.call_args[0][1]
        assert update["$pull"] == {"strains": strain_id}

    @pytest.mark.asyncio
    async def test_add_strain_missing_user(self, service, mock_collection):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)

        with pytest.raises(NotFoundException):
            await service.add_strain("ghost", ObjectId())

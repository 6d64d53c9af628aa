"""Shared test fixtures for Medicine Cabinet tests."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from jose import jwt

from common.auth import JWTAuth

TEST_SECRET = "test-secret"
TEST_PASSWORD = "correct horse battery"


@pytest.fixture
def user_password():
    return TEST_PASSWORD


@pytest.fixture
def jwt_auth():
    # Minimum bcrypt cost
    return JWTAuth(secret=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def make_token():
    """Build signed tokens directly, including expired or foreign-key ones."""

    def _make(sub="alice", secret=TEST_SECRET, expires_in=timedelta(days=7), **claims):
        now = datetime.now(timezone.utc)
        payload = {**claims, "sub": sub, "iat": now, "exp": now + expires_in}
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    return {"Authorization": f"Bearer {make_token('alice')}"}


@pytest.fixture
def sample_strain_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # update_one etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def sample_user_doc(jwt_auth):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "userName": "alice",
        "password": jwt_auth.hash_password(TEST_PASSWORD),
        "firstName": "Alice",
        "lastName": "Liddell",
        "strains": [],
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_strain_doc(sample_strain_id):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(sample_strain_id),
        "name": "Blue Dream",
        "type": "Hybrid",
        "flavor": "Blueberry",
        "description": "Balanced and calm",
        "comments": [
            {
                "_id": ObjectId(),
                "content": "Great for evenings",
                "author": "alice",
                "createdAt": now,
            },
            {
                "_id": ObjectId(),
                "content": "Too sweet for me",
                "author": "bob",
                "createdAt": now,
            },
        ],
        "createdAt": now,
        "updatedAt": now,
    }

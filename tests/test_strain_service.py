"""Unit tests for StrainService (catalog and embedded comments)."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from common.utils.exceptions import (
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from cabinet.services.strain_service import StrainService, serialize_strain


@pytest.fixture
def service(mock_db):
    return StrainService(mock_db)


def make_cursor(docs):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


# ─────────────────────────────────────────────────────────────────
# Reading the catalog
# ─────────────────────────────────────────────────────────────────


class TestReadCatalog:
    @pytest.mark.asyncio
    async def test_list_strains(self, service, mock_collection, sample_strain_doc):
        mock_collection.find.return_value = make_cursor([sample_strain_doc])

        result = await service.list_strains()

        assert len(result) == 1
        assert result[0]["_id"] == str(sample_strain_doc["_id"])
        assert result[0]["name"] == "Blue Dream"
        assert len(result[0]["comments"]) == 2

    @pytest.mark.asyncio
    async def test_get_strain(self, service, mock_collection, sample_strain_doc, sample_strain_id):
        mock_collection.find_one.return_value = sample_strain_doc

        result = await service.get_strain(sample_strain_id)

        assert result == serialize_strain(sample_strain_doc)
        assert isinstance(result["comments"][0]["_id"], str)

    @pytest.mark.asyncio
    async def test_get_missing_strain(self, service, mock_collection, sample_strain_id):
        mock_collection.find_one.return_value = None

        with pytest.raises(NotFoundException):
            await service.get_strain(sample_strain_id)

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, service, mock_collection):
        with pytest.raises(NotFoundException):
            await service.get_strain("not-an-id")

        mock_collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_strains_by_ids_keeps_order(self, service, mock_collection):
        first, second, gone = ObjectId(), ObjectId(), ObjectId()
        docs = [
            {"_id": second, "name": "Second", "type": "Indica"},
            {"_id": first, "name": "First", "type": "Sativa"},
        ]
        mock_collection.find.return_value = make_cursor(docs)

        result = await service.get_strains_by_ids([first, gone, second])

        assert [s["name"] for s in result] == ["First", "Second"]

    @pytest.mark.asyncio
    async def test_get_strains_by_ids_empty(self, service, mock_collection):
        assert await service.get_strains_by_ids([]) == []
        mock_collection.find.assert_not_called()


# ─────────────────────────────────────────────────────────────────
# create_strain
# ─────────────────────────────────────────────────────────────────


class TestCreateStrain:
    @pytest.mark.asyncio
    async def test_type_is_normalized(self, service, mock_collection):
        mock_collection.find_one.return_value = None
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())

        result = await service.create_strain("Sour Diesel", "sATiva", "Fuel", "Energizing")

        assert result["type"] == "Sativa"
        assert result["comments"] == []
        stored = mock_collection.insert_one.call_args[0][0]
        assert stored["type"] == "Sativa"

    @pytest.mark.asyncio
    async def test_invalid_type(self, service, mock_collection):
        with pytest.raises(ValidationException) as exc:
            await service.create_strain("Sour Diesel", "Ruderalis")

        assert exc.value.location == "type"
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_name(self, service):
        with pytest.raises(ValidationException) as exc:
            await service.create_strain("   ", "Hybrid")

        assert exc.value.location == "name"

    @pytest.mark.asyncio
    async def test_duplicate_name_any_casing(self, service, mock_collection, sample_strain_doc):
        mock_collection.find_one.return_value = sample_strain_doc

        with pytest.raises(ValidationException) as exc:
            await service.create_strain("blue dream", "Hybrid")

        assert exc.value.message == "Strain already exists"
        query = mock_collection.find_one.call_args[0][0]
        assert query["name"]["$options"] == "i"
        mock_collection.insert_one.assert_not_called()


# ─────────────────────────────────────────────────────────────────
# Comments
# ─────────────────────────────────────────────────────────────────


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment(self, service, mock_collection, sample_strain_doc, sample_strain_id):
        mock_collection.update_one.return_value = MagicMock(matched_count=1)
        mock_collection.find_one.return_value = sample_strain_doc

        result = await service.add_comment(sample_strain_id, "  Lovely  ", "alice")

        update = mock_collection.update_one.call_args[0][1]
        pushed = update["$push"]["comments"]
        assert pushed["content"] == "Lovely"
        assert pushed["author"] == "alice"
        assert isinstance(pushed["_id"], ObjectId)
        assert result["_id"] == sample_strain_id

    @pytest.mark.asyncio
    async def test_add_empty_comment(self, service, mock_collection, sample_strain_id):
        with pytest.raises(ValidationException):
            await service.add_comment(sample_strain_id, "   ", "alice")

        mock_collection.update_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_comment_missing_strain(self, service, mock_collection, sample_strain_id):
        mock_collection.update_one.return_value = MagicMock(matched_count=0)

        with pytest.raises(NotFoundException):
            await service.add_comment(sample_strain_id, "Lovely", "alice")

    @pytest.mark.asyncio
    async def test_remove_own_comment(self, service, mock_collection, sample_strain_doc, sample_strain_id):
        mock_collection.find_one.return_value = sample_strain_doc
        comment_id = sample_strain_doc["comments"][0]["_id"]

        await service.remove_comment(sample_strain_id, str(comment_id), "alice")

        update = mock_collection.update_one.call_args[0][1]
        assert update["$pull"] == {"comments": {"_id": comment_id}}

    @pytest.mark.asyncio
    async def test_remove_other_users_comment(self, service, mock_collection, sample_strain_doc, sample_strain_id):
        mock_collection.find_one.return_value = sample_strain_doc
        comment_id = sample_strain_doc["comments"][1]["_id"]

        with pytest.raises(ForbiddenException):
            await service.remove_comment(sample_strain_id, str(comment_id), "alice")

        mock_collection.update_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_missing_comment(self, service, mock_collection, sample_strain_doc, sample_strain_id):
        mock_collection.find_one.return_value = sample_strain_doc

        with pytest.raises(NotFoundException) as exc:
            await service.remove_comment(sample_strain_id, str(ObjectId()), "alice")

        assert exc.value.code == "COMMENT_NOT_FOUND"

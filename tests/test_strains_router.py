"""HTTP tests for the /strains catalog and comment endpoints."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api import app
from common.utils.exceptions import ForbiddenException, ValidationException
from cabinet.dependencies import init_services, get_strain_service


@pytest.fixture
def client(mock_db, jwt_auth):
    init_services(mock_db, auth=jwt_auth)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def strain(sample_strain_id):
    return {
        "_id": sample_strain_id,
        "name": "Blue Dream",
        "type": "Hybrid",
        "flavor": "Blueberry",
        "description": "",
        "comments": [{"_id": "c1", "content": "Nice", "author": "alice"}],
    }


@pytest.fixture
def strain_service(strain):
    service = MagicMock()
    service.list_strains = AsyncMock(return_value=[strain])
    service.get_strain = AsyncMock(return_value=strain)
    service.create_strain = AsyncMock(return_value=strain)
    service.add_comment = AsyncMock(return_value=strain)
    service.remove_comment = AsyncMock()
    app.dependency_overrides[get_strain_service] = lambda: service
    return service


class TestCatalog:
    def test_list_is_public(self, client, strain_service, sample_strain_id):
        response = client.get("/strains")

        assert response.status_code == 200
        assert response.json()["strains"][0]["_id"] == sample_strain_id

    def test_get_strain(self, client, strain_service, sample_strain_id):
        response = client.get(f"/strains/{sample_strain_id}")

        assert response.status_code == 200
        assert response.json()["comments"][0]["author"] == "alice"

    def test_create_requires_token(self, client, strain_service):
        response = client.post("/strains", json={"name": "Blue Dream", "type": "Hybrid"})

        assert response.status_code == 401
        strain_service.create_strain.assert_not_awaited()

    def test_create_strain(self, client, auth_headers, strain_service):
        response = client.post(
            "/strains",
            json={"name": "Blue Dream", "type": "hybrid", "flavor": "Blueberry"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Blue Dream"
        strain_service.create_strain.assert_awaited_once_with(
            name="Blue Dream", strain_type="hybrid", flavor="Blueberry", description="",
        )

    def test_create_duplicate(self, client, auth_headers, strain_service):
        strain_service.create_strain.side_effect = ValidationException(
            "Strain already exists", code="STRAIN_EXISTS", location="name",
        )

        response = client.post("/strains", json={"name": "Blue Dream", "type": "Hybrid"}, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["message"] == "Strain already exists"


class TestComments:
    def test_author_comes_from_token(self, client, auth_headers, strain_service, sample_strain_id):
        response = client.post(
            f"/strains/{sample_strain_id}",
            json={"comment": {"content": "Nice", "author": "mallory"}},
            headers=auth_headers,
        )

        assert response.status_code == 201
        strain_service.add_comment.assert_awaited_once_with(
            strain_id=sample_strain_id, content="Nice", author="alice",
        )

    def test_comment_requires_content(self, client, auth_headers, strain_service, sample_strain_id):
        response = client.post(f"/strains/{sample_strain_id}", json={"comment": {}}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing field"

    def test_remove_comment(self, client, auth_headers, strain_service, sample_strain_id):
        response = client.delete(f"/strains/{sample_strain_id}/c1", headers=auth_headers)

        assert response.status_code == 204
        strain_service.remove_comment.assert_awaited_once_with(
            strain_id=sample_strain_id, comment_id="c1", user_name="alice",
        )

    def test_remove_someone_elses_comment(self, client, auth_headers, strain_service, sample_strain_id):
        strain_service.remove_comment.side_effect = ForbiddenException(
            "You can only remove your own comments", code="NOT_COMMENT_AUTHOR",
        )

        response = client.delete(f"/strains/{sample_strain_id}/c1", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "You can only remove your own comments"

"""
Async HTTP client for the Medicine Cabinet API.

One method per endpoint. Failed responses raise `AuthError` (401) or
`RequestError` carrying the server's message.

Example:
    async with CabinetAPI("http://localhost:8080") as api:
        token = await api.login("exampleUser", "examplePassword")
        strains = await api.get_user_strains(token)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from cabinet.client.errors import AuthError, RequestError

logger = logging.getLogger(__name__)


class CabinetAPI:
    """
    Thin async wrapper around the Medicine Cabinet REST endpoints.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize CabinetAPI.

        Args:
            base_url: Root URL of the API
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "CabinetAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    # ─────────────────────────────────────────────────────────────────
    # Auth
    # ─────────────────────────────────────────────────────────────────

    async def login(self, user_name: str, password: str) -> str:
        """POST /auth/login. Returns the auth token."""
        data = await self._request(
            "POST",
            "/auth/login",
            json={"userName": user_name, "password": password},
        )
        return self._field(data, "authToken", str)

    async def refresh(self, token: str) -> str:
        """POST /auth/refresh. Returns a token with a later expiry."""
        data = await self._request("POST", "/auth/refresh", token=token)
        return self._field(data, "authToken", str)

    # ─────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────

    async def create_user(
        self,
        user_name: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> Dict[str, Any]:
        """POST /users. Returns the public user data."""
        return await self._request(
            "POST",
            "/users",
            json={
                "userName": user_name,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
            },
        )

    async def get_user_strains(self, token: str) -> List[Dict[str, Any]]:
        """GET /users/strains."""
        data = await self._request("GET", "/users/strains", token=token)
        return self._field(data, "strains", list)

    async def add_user_strain(self, token: str, strain_id: str) -> None:
        """PUT /users/strains/{id}."""
        await self._request("PUT", f"/users/strains/{strain_id}", token=token)

    async def remove_user_strain(self, token: str, strain_id: str) -> None:
        """DELETE /users/strains/{id}."""
        await self._request("DELETE", f"/users/strains/{strain_id}", token=token)

    # ─────────────────────────────────────────────────────────────────
    # Strains
    # ─────────────────────────────────────────────────────────────────

    async def get_strains(self) -> List[Dict[str, Any]]:
        """GET /strains."""
        data = await self._request("GET", "/strains")
        return self._field(data, "strains", list)

    async def get_strain(self, strain_id: str) -> Dict[str, Any]:
        """GET /strains/{id}."""
        return await self._request("GET", f"/strains/{strain_id}")

    async def create_strain(
        self,
        token: str,
        name: str,
        strain_type: str,
        flavor: str = "",
        description: str = "",
    ) -> Dict[str, Any]:
        """POST /strains."""
        return await self._request(
            "POST",
            "/strains",
            token=token,
            json={
                "name": name,
                "type": strain_type,
                "flavor": flavor,
                "description": description,
            },
        )

    async def add_comment(
        self,
        token: str,
        strain_id: str,
        content: str,
        author: str,
    ) -> Dict[str, Any]:
        """POST /strains/{id}. Returns the updated strain."""
        return await self._request(
            "POST",
            f"/strains/{strain_id}",
            token=token,
            json={"comment": {"content": content, "author": author}},
        )

    async def remove_comment(self, token: str, strain_id: str, comment_id: str) -> None:
        """DELETE /strains/{id}/{commentId}."""
        await self._request("DELETE", f"/strains/{strain_id}/{comment_id}", token=token)

    # ─────────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else None

        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise RequestError(f"Could not reach the server: {e}")

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                logger.error(f"{method} {path} returned a non-JSON body")
                raise RequestError("Unexpected response from the server", status_code=response.status_code)

        message = self._error_message(response)
        logger.debug(f"{method} {path} -> {response.status_code}: {message}")
        if response.status_code == 401:
            raise AuthError(message, status_code=401)
        raise RequestError(message, status_code=response.status_code)

    @staticmethod
    def _field(data: Any, key: str, expected: type) -> Any:
        """Pull `key` out of a success body, rejecting bodies that lack it."""
        value = data.get(key) if isinstance(data, dict) else None
        if not isinstance(value, expected):
            raise RequestError(f"Unexpected response from the server: missing \"{key}\"")
        return value

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Server's `message` if the body is a JSON object carrying one, else the raw body."""
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text or response.reason_phrase

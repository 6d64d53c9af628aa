"""
Client-side cabinet context.

`MedicineCabinet` is what a front-end drives: it owns the session, the
catalog it last loaded, the user's strains, and the strain being viewed.
Checks that need no server round trip (password confirmation, duplicate
strains, strain type, comment ownership) fail fast with
`CabinetValidationError` before any request is sent.
"""

import logging
from typing import Any, Dict, List, Optional

from cabinet.client.api import CabinetAPI
from cabinet.client.errors import AuthError, CabinetValidationError
from cabinet.client.session import SessionManager
from cabinet.schemas.strain import StrainType

logger = logging.getLogger(__name__)

PASSWORD_MISMATCH_MESSAGE = '"Password" & "Verify Password" fields must match'
DUPLICATE_STRAIN_MESSAGE = "This strain is already in your cabinet"
INVALID_TYPE_MESSAGE = '"Type" must be "Sativa", "Indica", or "Hybrid"'


class MedicineCabinet:
    """
    Client state and flows for one user of the Medicine Cabinet.
    """

    def __init__(self, api: CabinetAPI, session_manager: Optional[SessionManager] = None):
        """
        Initialize MedicineCabinet.

        Args:
            api: API client
            session_manager: Session owner (defaults to one built on `api`)
        """
        self._api = api
        self._sessions = session_manager or SessionManager(api)

        self.strains: List[Dict[str, Any]] = []
        self.user_strains: List[Dict[str, Any]] = []
        self.current_strain: Optional[Dict[str, Any]] = None

    @classmethod
    def from_settings(cls, settings) -> "MedicineCabinet":
        """Build a cabinet client from application settings."""
        api = CabinetAPI(settings.API_BASE_URL, timeout=settings.CLIENT_TIMEOUT_SECONDS)
        sessions = SessionManager(
            api,
            refresh_interval=settings.TOKEN_REFRESH_INTERVAL_SECONDS,
            max_refresh_failures=settings.MAX_REFRESH_FAILURES,
        )
        return cls(api, sessions)

    async def __aenter__(self) -> "MedicineCabinet":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Log out and release the HTTP client."""
        await self.logout()
        await self._api.aclose()

    @property
    def sessions(self) -> SessionManager:
        return self._sessions

    @property
    def current_user(self) -> Optional[str]:
        return self._sessions.current_user

    # ─────────────────────────────────────────────────────────────────
    # Account
    # ─────────────────────────────────────────────────────────────────

    async def register(
        self,
        user_name: str,
        password: str,
        password_check: str,
        first_name: str = "",
        last_name: str = "",
    ) -> Dict[str, Any]:
        """
        Create an account, then log in with it.

        Raises:
            CabinetValidationError: Passwords do not match
            RequestError: The server rejected the account
        """
        if password != password_check:
            raise CabinetValidationError(PASSWORD_MISMATCH_MESSAGE)

        user = await self._api.create_user(user_name, password, first_name, last_name)
        logger.info(f"Account created for {user_name}")
        await self.login(user_name, password)
        return user

    async def login(self, user_name: str, password: str) -> None:
        """Log in and load the catalog and the user's cabinet."""
        await self._sessions.login(user_name, password)
        await self.load()

    async def logout(self) -> None:
        """End the session and forget the user's data."""
        await self._sessions.logout()
        self.user_strains = []
        self.current_strain = None

    # ─────────────────────────────────────────────────────────────────
    # Catalog and cabinet
    # ─────────────────────────────────────────────────────────────────

    async def load(self) -> None:
        """Reload the catalog and the user's cabinet."""
        await self.load_strains()
        await self.load_user_strains()

    async def load_strains(self) -> List[Dict[str, Any]]:
        self.strains = await self._api.get_strains()
        return self.strains

    async def load_user_strains(self) -> List[Dict[str, Any]]:
        self.user_strains = await self._api.get_user_strains(self._token())
        return self.user_strains

    def in_cabinet(self, strain: Dict[str, Any]) -> bool:
        return any(s["_id"] == strain["_id"] for s in self.user_strains)

    async def add_to_cabinet(self, strain: Dict[str, Any]) -> None:
        """
        Put a catalog strain in the cabinet.

        Raises:
            CabinetValidationError: Strain is already in the cabinet
        """
        token = self._token()
        if self.in_cabinet(strain):
            raise CabinetValidationError(DUPLICATE_STRAIN_MESSAGE)

        await self._api.add_user_strain(token, strain["_id"])
        await self.load_user_strains()

    async def remove_from_cabinet(self, strain: Dict[str, Any]) -> None:
        await self._api.remove_user_strain(self._token(), strain["_id"])
        if self.current_strain and self.current_strain["_id"] == strain["_id"]:
            self.current_strain = None
        await self.load_user_strains()

    async def create_strain(
        self,
        name: str,
        strain_type: str,
        flavor: str = "",
        description: str = "",
    ) -> Dict[str, Any]:
        """
        Add a strain to the shared catalog.

        Raises:
            CabinetValidationError: Type is not Sativa, Indica or Hybrid
        """
        token = self._token()
        if StrainType.parse(strain_type) is None:
            raise CabinetValidationError(INVALID_TYPE_MESSAGE)

        strain = await self._api.create_strain(token, name, strain_type, flavor, description)
        logger.info(f"Strain created: {strain['name']}")
        await self.load_strains()
        return strain

    # ─────────────────────────────────────────────────────────────────
    # Strain details and comments
    # ─────────────────────────────────────────────────────────────────

    def view_strain(self, strain: Dict[str, Any]) -> Dict[str, Any]:
        self.current_strain = strain
        return strain

    async def refresh_current_strain(self) -> Optional[Dict[str, Any]]:
        """Re-read the viewed strain, from the cabinet when it is there."""
        if self.current_strain is None:
            return None

        strain_id = self.current_strain["_id"]
        await self.load_user_strains()
        found = next((s for s in self.user_strains if s["_id"] == strain_id), None)
        if found is None:
            found = await self._api.get_strain(strain_id)

        self.current_strain = found
        return found

    async def add_comment(self, content: str) -> Dict[str, Any]:
        """
        Comment on the viewed strain.

        Raises:
            CabinetValidationError: No strain is being viewed, or content is blank
        """
        token = self._token()
        strain = self._viewed_strain()
        if not content or not content.strip():
            raise CabinetValidationError("Comment cannot be empty")

        await self._api.add_comment(token, strain["_id"], content, self.current_user)
        return await self.refresh_current_strain()

    async def remove_comment(self, comment: Dict[str, Any]) -> Dict[str, Any]:
        """
        Remove one of the user's own comments from the viewed strain.

        Raises:
            CabinetValidationError: No strain is being viewed, or the comment is someone else's
        """
        token = self._token()
        strain = self._viewed_strain()
        if comment.get("author") != self.current_user:
            raise CabinetValidationError("You can only remove your own comments")

        await self._api.remove_comment(token, strain["_id"], comment["_id"])
        return await self.refresh_current_strain()

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    def _token(self) -> str:
        token = self._sessions.token
        if token is None:
            raise AuthError("You must be logged in")
        return token

    def _viewed_strain(self) -> Dict[str, Any]:
        if self.current_strain is None:
            raise CabinetValidationError("No strain selected")
        return self.current_strain

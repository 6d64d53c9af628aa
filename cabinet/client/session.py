"""
Client session management.

Holds the auth token and user identity for one logged-in user, and keeps the
token alive with a background refresh task.

State machine:
    LoggedOut -> login() -> LoggedIn -> logout() | repeated refresh failure -> LoggedOut

Example:
    async with CabinetAPI("http://localhost:8080") as api:
        manager = SessionManager(api, refresh_interval=120)
        await manager.login("exampleUser", "examplePassword")
        ...
        await manager.logout()
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from cabinet.client.api import CabinetAPI
from cabinet.client.errors import AuthError, CabinetError, RequestError

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_SECONDS = 120
DEFAULT_MAX_REFRESH_FAILURES = 3


@dataclass
class Session:
    """
    Authentication state of the client.

    `refresh_task` is set exactly when `token` is set.
    """

    token: Optional[str] = None
    current_user: Optional[str] = None
    refresh_task: Optional[asyncio.Task] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


class SessionManager:
    """
    Owns the client Session: login, scheduled token refresh, and logout.

    Refresh calls are serialized, so a scheduled tick and a manual refresh
    never overlap. After `max_refresh_failures` consecutive failed ticks the
    session is torn down.
    """

    def __init__(
        self,
        api: CabinetAPI,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        max_refresh_failures: int = DEFAULT_MAX_REFRESH_FAILURES,
        on_error: Optional[Callable[[CabinetError], None]] = None,
        on_expired: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize SessionManager.

        Args:
            api: API client used for login and refresh
            refresh_interval: Seconds between scheduled refreshes
            max_refresh_failures: Consecutive failed ticks before logging out
            on_error: Called with the error of every failed scheduled refresh
            on_expired: Called after the session is torn down by refresh failures
        """
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        if max_refresh_failures < 1:
            raise ValueError("max_refresh_failures must be at least 1")

        self._api = api
        self._refresh_interval = refresh_interval
        self._max_refresh_failures = max_refresh_failures
        self._on_error = on_error
        self._on_expired = on_expired
        self._session = Session()
        self._refresh_lock = asyncio.Lock()
        self._login_lock = asyncio.Lock()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def token(self) -> Optional[str]:
        return self._session.token

    @property
    def current_user(self) -> Optional[str]:
        return self._session.current_user

    async def login(self, user_name: str, password: str) -> Session:
        """
        Log in and start the refresh task.

        A failed login leaves the current session untouched. A successful login
        replaces any existing session. Logins are serialized, so only one
        refresh task ever runs.

        Raises:
            AuthError: Bad credentials (server message verbatim)
            RequestError: Any other failure
        """
        async with self._login_lock:
            token = await self._api.login(user_name, password)

            if self._session.is_authenticated:
                logger.info(f"Replacing session of {self._session.current_user}")
                await self.logout()

            task = asyncio.create_task(self._refresh_loop(), name=f"token-refresh:{user_name}")
            self._session = Session(token=token, current_user=user_name, refresh_task=task)
            logger.info(f"Logged in as {user_name}")
            return self._session

    async def refresh(self) -> str:
        """
        Exchange the current token for one with a later expiry.

        On failure the stored token is kept and the error is raised.

        Raises:
            AuthError: Not logged in, or the token is invalid or expired
            RequestError: Any other failure
        """
        async with self._refresh_lock:
            token = self._session.token
            if token is None:
                raise AuthError("Not logged in")

            new_token = await self._api.refresh(token)

            # A logout or re-login while the call was in flight wins.
            if self._session.token != token:
                logger.debug("Discarding refreshed token for a session that ended")
                return new_token

            self._session.token = new_token
            logger.debug(f"Token refreshed for {self._session.current_user}")
            return new_token

    async def logout(self) -> None:
        """Clear the session and cancel the refresh task. Safe to call repeatedly."""
        session = self._session
        self._session = Session()

        task = session.refresh_task
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.warning(f"Refresh task for {session.current_user} had failed: {e!r}")

        if session.is_authenticated:
            logger.info(f"Logged out {session.current_user}")

    async def _refresh_loop(self) -> None:
        failures = 0
        while True:
            await asyncio.sleep(self._refresh_interval)
            try:
                await self.refresh()
                failures = 0
                continue
            except CabinetError as e:
                error = e
            except Exception as e:
                logger.exception("Unexpected error during token refresh")
                error = RequestError(f"Token refresh failed: {e!r}")

            failures += 1
            logger.warning(
                f"Token refresh failed ({failures}/{self._max_refresh_failures}): {error.message}"
            )
            self._notify(self._on_error, error)

            if failures >= self._max_refresh_failures:
                # Only the task of the live session may end it
                if self._session.refresh_task is asyncio.current_task():
                    logger.warning("Too many failed token refreshes, logging out")
                    await self.logout()
                    self._notify(self._on_expired)
                return

    @staticmethod
    def _notify(callback: Optional[Callable], *args) -> None:
        """Run a user callback; its errors are logged and never stop the refresh loop."""
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception(f"Session callback {callback!r} raised")

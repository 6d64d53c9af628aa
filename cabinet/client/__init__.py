"""
Async client for the Medicine Cabinet API.

- CabinetAPI: one method per endpoint (httpx)
- SessionManager: login, scheduled token refresh, logout
- MedicineCabinet: client-side state and flows on top of both
"""

from cabinet.client.api import CabinetAPI
from cabinet.client.cabinet import MedicineCabinet
from cabinet.client.errors import AuthError, CabinetError, CabinetValidationError, RequestError
from cabinet.client.session import Session, SessionManager

__all__ = [
    "CabinetAPI",
    "MedicineCabinet",
    "Session",
    "SessionManager",
    "CabinetError",
    "RequestError",
    "AuthError",
    "CabinetValidationError",
]

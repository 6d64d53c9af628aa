"""
Medicine Cabinet application-specific code.

This package contains all Medicine Cabinet implementations:
- schemas: Request/response models (auth, users, strains)
- services: MongoDB-backed business logic (users, strains)
- pipelines: Stateless orchestration used by the routers
- routers: FastAPI endpoints (/auth, /users, /strains)
- client: Async API client, session manager and cabinet context
- config: Application settings

Uses generic infrastructure from the common/ package.
"""

from cabinet.config import settings

__all__ = ["settings"]

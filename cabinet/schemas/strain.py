"""
Pydantic models for strains and their comments.
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class StrainType(str, Enum):
    """Strain families accepted by the catalog."""

    SATIVA = "Sativa"
    INDICA = "Indica"
    HYBRID = "Hybrid"

    @classmethod
    def parse(cls, value: str) -> Optional["StrainType"]:
        """Match a strain type case-insensitively, or return None."""
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None


class CommentBody(BaseModel):
    """A comment as posted by the client."""

    content: str
    # Ignored by the server; the token's user is always the author.
    author: Optional[str] = None


class CommentRequest(BaseModel):
    """Request body for posting a comment on a strain."""

    comment: CommentBody


class CommentResponse(BaseModel):
    """Comment in API responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    content: str
    author: str


class StrainCreateRequest(BaseModel):
    """Request body for adding a strain to the shared catalog."""

    name: str = Field(min_length=1, max_length=100)
    type: str
    flavor: str = Field("", max_length=200)
    description: str = Field("", max_length=2000)


class StrainResponse(BaseModel):
    """Strain in API responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    type: str
    flavor: str = ""
    description: str = ""
    comments: List[CommentResponse] = Field(default_factory=list)


class StrainListResponse(BaseModel):
    """Response wrapping a list of strains."""

    strains: List[StrainResponse]

"""
Creator Swipes Backend — Collection Schemas
============================================

What:  Request DTOs for the collection routes and the collection response model.
Who:   Used by app.routes.collections and CollectionService.

Wire format:
    Collection objects are returned with camelCase keys:
        {"id": "...", "name": "...", "description": "...", "createdBy": "...",
         "items": ["<swipe id>", ...], "createdAt": "...", "updatedAt": "..."}
"""

import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.common import RequestModel


class CollectionCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class CollectionUpdate(RequestModel):
    """Full replacement of the editable fields; both are required."""
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class CollectionItemAdd(RequestModel):
    # Not checked against the swipes table
    swipe_id: str = Field(min_length=1, description="Id of the swipe to append")


class CollectionResponse(BaseModel):
    """One collection as returned by GET /getCollections."""

    id: uuid.UUID
    name: str
    description: str
    created_by: uuid.UUID
    items: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

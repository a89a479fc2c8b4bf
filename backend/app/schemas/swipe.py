"""
Creator Swipes Backend — Swipe Schemas
=======================================

What:  Request DTO for POST /addSwipe.
How:   All five fields are required; missing, empty, or unknown fields are
       rejected before the handler runs.
"""

from typing import List

from pydantic import Field

from app.schemas.common import RequestModel


class SwipeCreate(RequestModel):
    """
    Example:
        {"userId": "u1", "url": "http://x", "platform": "tiktok",
         "tags": ["a"], "notes": "n"}
    """
    user_id: str = Field(min_length=1, description="Owner id (opaque, not verified)")
    url: str = Field(min_length=1, description="Link being saved")
    platform: str = Field(min_length=1, description="Source platform label, e.g. 'tiktok'")
    tags: List[str] = Field(description="Free-form tags")
    notes: str = Field(min_length=1, description="Free-text notes")
